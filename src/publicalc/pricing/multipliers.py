"""Versioned multiplier tables for the pricing calculator.

Tables are plain data held in an immutable ``MultiplierTables`` model. The
composer, assembler and blender receive a tables instance as an argument, so
alternate tables can be swapped in without touching pricing logic.
"""

from collections.abc import Mapping
from decimal import Decimal
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, field_validator

from publicalc.domain.types import (
    Authority,
    BrandSize,
    Complexity,
    ConfidenceBand,
    ContentModel,
    DeliverableFormat,
    EventDuration,
    Exclusivity,
    ImageRisk,
    PaidMediaDuration,
    Seasonality,
    StrategicGain,
    TravelTier,
    UsageRights,
)


class ConfidenceSpread(BaseModel, frozen=True):
    """Strategic and premium multipliers selected by a confidence band."""

    strategic: Decimal
    premium: Decimal


class MultiplierTables(BaseModel, frozen=True):
    """Immutable lookup tables mapping each parameter value to a multiplier.

    Attributes:
        version: Identifier of this table set, recorded for audit purposes.
        format_weights: Content units contributed by one deliverable of each format.
        package_units: Content units for an undifferentiated legacy package.
        exclusivity: Multiplier per exclusivity window.
        usage_rights: Multiplier per usage-rights tier.
        paid_media_duration: Multiplier per paid-media window.
        repost: Multiplier applied when the content is reposted to TikTok.
        brand_size: Multiplier per brand size.
        image_risk: Multiplier per brand image risk.
        image_risk_floor: Minimum brand-risk/strategy multiplier per image risk.
        strategic_gain: Multiplier per strategic gain for the creator.
        content_model: Multiplier per content model.
        complexity: Multiplier per production complexity.
        authority: Multiplier per creator authority tier.
        seasonality: Multiplier per demand season.
        event_duration: Presence multiplier per event duration.
        coverage_discount: Factor applied to event coverage relative to content.
        travel_cost: Suggested travel cost per travel tier.
        hotel_night_cost: Suggested cost per hotel night.
        calibration_min: Lower guardrail for the calibration factor.
        calibration_max: Upper guardrail for the calibration factor.
        confidence_spreads: Strategic/premium multipliers per confidence band.
    """

    version: str
    format_weights: Mapping[DeliverableFormat, Decimal]
    package_units: Decimal
    exclusivity: Mapping[Exclusivity, Decimal]
    usage_rights: Mapping[UsageRights, Decimal]
    paid_media_duration: Mapping[PaidMediaDuration, Decimal]
    repost: Decimal
    brand_size: Mapping[BrandSize, Decimal]
    image_risk: Mapping[ImageRisk, Decimal]
    image_risk_floor: Mapping[ImageRisk, Decimal]
    strategic_gain: Mapping[StrategicGain, Decimal]
    content_model: Mapping[ContentModel, Decimal]
    complexity: Mapping[Complexity, Decimal]
    authority: Mapping[Authority, Decimal]
    seasonality: Mapping[Seasonality, Decimal]
    event_duration: Mapping[EventDuration, Decimal]
    coverage_discount: Decimal
    travel_cost: Mapping[TravelTier, Decimal]
    hotel_night_cost: Decimal
    calibration_min: Decimal
    calibration_max: Decimal
    confidence_spreads: Mapping[ConfidenceBand, ConfidenceSpread]

    @field_validator("*", mode="after")
    @classmethod
    def _freeze_table(cls, value: Any) -> Any:
        """Expose every lookup table as a read-only view."""
        if isinstance(value, Mapping) and not isinstance(value, MappingProxyType):
            return MappingProxyType(dict(value))
        return value


DEFAULT_MULTIPLIER_TABLES = MultiplierTables(
    version="2025.1",
    format_weights={
        DeliverableFormat.REELS: Decimal("1.4"),
        DeliverableFormat.POSTS: Decimal("1.0"),
        DeliverableFormat.STORIES: Decimal("0.8"),
    },
    package_units=Decimal("1.6"),
    exclusivity={
        Exclusivity.NONE: Decimal("1.0"),
        Exclusivity.DAYS_7: Decimal("1.1"),
        Exclusivity.DAYS_15: Decimal("1.2"),
        Exclusivity.DAYS_30: Decimal("1.3"),
    },
    usage_rights={
        UsageRights.ORGANIC: Decimal("1.0"),
        UsageRights.PAID_MEDIA: Decimal("1.2"),
        UsageRights.GLOBAL: Decimal("1.4"),
    },
    paid_media_duration={
        PaidMediaDuration.DAYS_7: Decimal("1.0"),
        PaidMediaDuration.DAYS_15: Decimal("1.05"),
        PaidMediaDuration.DAYS_30: Decimal("1.1"),
        PaidMediaDuration.DAYS_90: Decimal("1.2"),
        PaidMediaDuration.DAYS_180: Decimal("1.3"),
        PaidMediaDuration.DAYS_365: Decimal("1.45"),
    },
    repost=Decimal("1.1"),
    brand_size={
        BrandSize.SMALL: Decimal("0.9"),
        BrandSize.MEDIUM: Decimal("1.0"),
        BrandSize.LARGE: Decimal("1.15"),
    },
    image_risk={
        ImageRisk.LOW: Decimal("0.95"),
        ImageRisk.MEDIUM: Decimal("1.0"),
        ImageRisk.HIGH: Decimal("1.25"),
    },
    # Low image risk has no floor
    image_risk_floor={
        ImageRisk.MEDIUM: Decimal("1.0"),
        ImageRisk.HIGH: Decimal("1.2"),
    },
    strategic_gain={
        StrategicGain.LOW: Decimal("1.0"),
        StrategicGain.MEDIUM: Decimal("0.95"),
        StrategicGain.HIGH: Decimal("0.9"),
    },
    content_model={
        ContentModel.STANDARD: Decimal("1.0"),
        ContentModel.UGC_WHITELABEL: Decimal("0.85"),
    },
    complexity={
        Complexity.SIMPLE: Decimal("1.0"),
        Complexity.SCRIPTED: Decimal("1.1"),
        Complexity.PROFESSIONAL: Decimal("1.3"),
    },
    authority={
        Authority.STANDARD: Decimal("1.0"),
        Authority.RISING: Decimal("1.2"),
        Authority.AUTHORITY: Decimal("1.5"),
        Authority.CELEBRITY: Decimal("2.0"),
    },
    seasonality={
        Seasonality.NORMAL: Decimal("1.0"),
        Seasonality.HIGH: Decimal("1.2"),
        Seasonality.LOW: Decimal("0.9"),
    },
    event_duration={
        EventDuration.TWO_HOURS: Decimal("1.0"),
        EventDuration.FOUR_HOURS: Decimal("1.5"),
        EventDuration.EIGHT_HOURS: Decimal("2.2"),
    },
    coverage_discount=Decimal("0.7"),
    travel_cost={
        TravelTier.LOCAL: Decimal("0"),
        TravelTier.DOMESTIC: Decimal("1500"),
        TravelTier.INTERNATIONAL: Decimal("5000"),
    },
    hotel_night_cost=Decimal("450"),
    calibration_min=Decimal("0.75"),
    calibration_max=Decimal("1.25"),
    confidence_spreads={
        ConfidenceBand.HIGH: ConfidenceSpread(strategic=Decimal("0.75"), premium=Decimal("1.4")),
        ConfidenceBand.MEDIUM: ConfidenceSpread(strategic=Decimal("0.7"), premium=Decimal("1.5")),
        ConfidenceBand.LOW: ConfidenceSpread(strategic=Decimal("0.65"), premium=Decimal("1.6")),
    },
)
