"""Pydantic v2 models for calculator inputs, collaborator records and results."""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from publicalc.domain.types import (
    Authority,
    BrandSize,
    CalculatorFormat,
    Complexity,
    ConfidenceBand,
    ContentModel,
    CpmSource,
    DeliverableFormat,
    DeliveryType,
    EventDuration,
    Exclusivity,
    ImageRisk,
    LinkQuality,
    PaidMediaDuration,
    Seasonality,
    StrategicGain,
    TravelTier,
    UsageRights,
)

# Upper bound for any per-format quantity and for hotel nights
MAX_QUANTITY = 20


def _decimal_from_number(v: object) -> object:
    """Coerce floats to Decimal through ``str`` so binary noise is not carried."""
    if isinstance(v, float):
        return Decimal(str(v))
    return v


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------


class CalculatorParamsInput(BaseModel):
    """Untrusted, partially specified calculator request.

    Every field is optional and loosely typed; the normalizer is responsible
    for resolving each one into its domain.
    """

    model_config = ConfigDict(extra="ignore")

    delivery_type: Any = None
    format: Any = None
    format_quantities: Any = None
    event_details: Any = None
    event_coverage_quantities: Any = None
    exclusivity: Any = None
    usage_rights: Any = None
    paid_media_duration: Any = None
    repost_tiktok: Any = None
    instagram_collab: Any = None
    brand_size: Any = None
    image_risk: Any = None
    strategic_gain: Any = None
    content_model: Any = None
    allow_strategic_waiver: Any = None
    complexity: Any = None
    authority: Any = None
    seasonality: Any = None


# ---------------------------------------------------------------------------
# Normalized params
# ---------------------------------------------------------------------------


class FormatQuantities(BaseModel):
    """Per-format deliverable counts, each within [0, MAX_QUANTITY]."""

    model_config = ConfigDict(frozen=True)

    reels: int = Field(default=0, ge=0, le=MAX_QUANTITY)
    posts: int = Field(default=0, ge=0, le=MAX_QUANTITY)
    stories: int = Field(default=0, ge=0, le=MAX_QUANTITY)

    def get(self, fmt: DeliverableFormat) -> int:
        return int(getattr(self, fmt.value))

    def items(self) -> list[tuple[DeliverableFormat, int]]:
        return [(fmt, self.get(fmt)) for fmt in DeliverableFormat]

    def has_any(self) -> bool:
        return any(qty > 0 for _, qty in self.items())


class EventDetails(BaseModel):
    model_config = ConfigDict(frozen=True)

    duration_hours: EventDuration = EventDuration.FOUR_HOURS
    travel_tier: TravelTier = TravelTier.LOCAL
    hotel_nights: int = Field(default=0, ge=0, le=MAX_QUANTITY)


def derive_legacy_format(
    delivery_type: DeliveryType,
    legacy_package_mode: bool,
    quantities: FormatQuantities,
) -> CalculatorFormat:
    """Derive the single legacy format label from the deliverable mix.

    Args:
        delivery_type: The resolved delivery type.
        legacy_package_mode: Whether the caller asked for an undifferentiated package.
        quantities: The normalized content quantities.

    Returns:
        ``event`` for event delivery, ``package`` in package mode, the format
        name when exactly one format is set with quantity 1, else ``package``.
    """
    if delivery_type == DeliveryType.EVENT:
        return CalculatorFormat.EVENT
    if legacy_package_mode:
        return CalculatorFormat.PACKAGE
    active = [(fmt, qty) for fmt, qty in quantities.items() if qty > 0]
    if len(active) == 1 and active[0][1] == 1:
        return CalculatorFormat(active[0][0].value)
    return CalculatorFormat.PACKAGE


class NormalizedCalculatorParams(BaseModel):
    """Canonical calculator parameters with every field inside its domain."""

    model_config = ConfigDict(frozen=True)

    delivery_type: DeliveryType = DeliveryType.CONTENT
    format_quantities: FormatQuantities = FormatQuantities()
    event_details: EventDetails = EventDetails()
    event_coverage_quantities: FormatQuantities = FormatQuantities()
    exclusivity: Exclusivity = Exclusivity.NONE
    usage_rights: UsageRights = UsageRights.ORGANIC
    paid_media_duration: PaidMediaDuration | None = None
    repost_tiktok: bool = False
    instagram_collab: bool = False
    brand_size: BrandSize = BrandSize.MEDIUM
    image_risk: ImageRisk = ImageRisk.MEDIUM
    strategic_gain: StrategicGain = StrategicGain.LOW
    content_model: ContentModel = ContentModel.STANDARD
    allow_strategic_waiver: bool = False
    complexity: Complexity = Complexity.SIMPLE
    authority: Authority = Authority.STANDARD
    seasonality: Seasonality = Seasonality.NORMAL
    legacy_package_mode: bool = False

    @computed_field  # type: ignore[prop-decorator]
    @property
    def format(self) -> CalculatorFormat:
        return derive_legacy_format(
            self.delivery_type, self.legacy_package_mode, self.format_quantities
        )


# ---------------------------------------------------------------------------
# Collaborator records
# ---------------------------------------------------------------------------


class TrailingPerformance(BaseModel):
    """Aggregated reach/engagement report for a creator's lookback window.

    ``engagement_rate`` may be a fraction (0.035) or a percentage (3.5).
    """

    model_config = ConfigDict(frozen=True)

    reach_average: float | None = None
    engagement_rate: float | None = None
    profile_segment: str | None = None


class DealInsights(BaseModel):
    model_config = ConfigDict(frozen=True)

    average_deal_value: Decimal | None = None
    total_deals: int = 0

    @field_validator("average_deal_value", mode="before")
    @classmethod
    def coerce_float_value(cls, v: object) -> object:
        return _decimal_from_number(v)


class SegmentCpm(BaseModel):
    """Baseline CPM for a profile segment and where it came from."""

    model_config = ConfigDict(frozen=True)

    value: Decimal
    source: CpmSource

    @field_validator("value", mode="before")
    @classmethod
    def coerce_float_value(cls, v: object) -> object:
        return _decimal_from_number(v)


class CalibrationSnapshot(BaseModel):
    """Historical-calibration evidence computed by an external collaborator.

    Attributes:
        factor_raw: Unbounded correction factor (real deals / model output).
        confidence: Evidence score in [0, 1].
        confidence_band: Coarse classification of ``confidence``.
        segment_sample_size: Linked deals in the creator's segment window.
        creator_sample_size: Linked deals for the creator.
        manual_link_rate: Share of deals linked to a calculation by hand.
        link_quality: Coarse classification of ``manual_link_rate``.
        mad: Median absolute deviation of the creator's deal ratios.
        window_days_segment: Segment lookback window, in days.
        window_days_creator: Creator lookback window, in days.
    """

    model_config = ConfigDict(frozen=True)

    factor_raw: float = 1.0
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    confidence_band: ConfidenceBand = ConfidenceBand.LOW
    segment_sample_size: int = 0
    creator_sample_size: int = 0
    manual_link_rate: float = 0.0
    link_quality: LinkQuality = LinkQuality.LOW
    mad: float = 0.0
    window_days_segment: int = 180
    window_days_creator: int = 365

    @classmethod
    def neutral(cls) -> CalibrationSnapshot:
        """Return the fallback snapshot used when no evidence is available."""
        return cls()


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------


class ResolvedMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    reach: int
    engagement: Decimal
    profile_segment: str


class PriceTiers(BaseModel):
    """The three recommended prices, each non-negative with two decimals."""

    model_config = ConfigDict(frozen=True)

    strategic: Decimal
    justo: Decimal
    premium: Decimal


class PriceBreakdown(BaseModel):
    """Unit counts and component sub-totals behind ``justo``.

    Logistics costs are suggested on top of the fee and never included in it.
    """

    model_config = ConfigDict(frozen=True)

    content_units: Decimal = Decimal("0")
    content_justo: Decimal = Decimal("0")
    event_presence_justo: Decimal = Decimal("0")
    coverage_units: Decimal = Decimal("0")
    coverage_justo: Decimal = Decimal("0")
    travel_cost: Decimal = Decimal("0")
    hotel_cost: Decimal = Decimal("0")
    logistics_suggested: Decimal = Decimal("0")
    logistics_included_in_fee: bool = False


class CalibrationSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    enabled: bool
    base_justo: Decimal
    factor_raw: Decimal
    factor_applied: Decimal
    guardrail_applied: bool
    confidence: float
    confidence_band: ConfidenceBand
    segment_sample_size: int
    creator_sample_size: int
    window_days_segment: int
    window_days_creator: int
    low_confidence_range_expanded: bool
    link_quality: LinkQuality


class BrandRiskSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    enabled: bool
    raw_multiplier: Decimal
    applied_multiplier: Decimal
    floor: Decimal | None
    floor_applied: bool


def _plain(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return value


class PubliCalculatorResult(BaseModel):
    """Immutable output record of a single pricing calculation."""

    model_config = ConfigDict(frozen=True)

    metrics: ResolvedMetrics
    params: NormalizedCalculatorParams
    result: PriceTiers
    breakdown: PriceBreakdown
    cpm_applied: Decimal
    cpm_source: CpmSource
    calibration: CalibrationSummary
    brand_risk: BrandRiskSummary
    avg_ticket: Decimal | None = None
    total_deals: int = 0
    explanation: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain structure of floats, ints, strings and bools."""
        return dict(_plain(self.model_dump()))
