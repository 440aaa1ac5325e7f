"""Conservative calculator parameters inferred from a brand proposal.

Brand proposals arrive as free-text deliverable lines ("2 reels + 3 stories",
"event appearance with coverage"). This module turns them into a
``CalculatorParamsInput``, borrowing every commercial term it cannot infer
from the creator's latest calculation and recording each default it had to
resolve so callers can discount their confidence accordingly.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar

from pydantic import BaseModel

from publicalc.domain.models import CalculatorParamsInput, FormatQuantities
from publicalc.domain.types import (
    Authority,
    BrandSize,
    CalculatorFormat,
    Complexity,
    ContentModel,
    DeliverableFormat,
    DeliveryType,
    EventDuration,
    Exclusivity,
    ImageRisk,
    PaidMediaDuration,
    Seasonality,
    StrategicGain,
    TravelTier,
    UsageRights,
)
from publicalc.pricing.normalizer import to_quantity

E = TypeVar("E", bound=Enum)

# Hotel nights inferred from a prior calculation are capped lower than the
# calculator's own bound
MAX_INFERRED_HOTEL_NIGHTS = 10

EVENT_KEYWORDS: tuple[str, ...] = (
    "event",
    "presence",
    "appearance",
    "keynote",
    "talk",
    "panel",
    "host",
    "coverage",
)

FORMAT_TOKENS: dict[DeliverableFormat, tuple[str, ...]] = {
    DeliverableFormat.REELS: (r"reels?", r"videos?"),
    DeliverableFormat.POSTS: (r"posts?", r"carousels?", r"feed"),
    DeliverableFormat.STORIES: (r"stor(?:y|ies)",),
}

DEFAULT_FORMAT_QUANTITIES = FormatQuantities(reels=1)


@dataclass(frozen=True)
class ConservativeMapping:
    """Inferred calculator parameters plus the defaults used to fill gaps.

    Attributes:
        params: Parameters ready for ``run_publi_calculator``.
        resolved_defaults: Identifiers of every field that fell back to a default.
    """

    params: CalculatorParamsInput
    resolved_defaults: list[str] = field(default_factory=list)


def normalize_deliverables(deliverables: Sequence[str]) -> list[str]:
    """Lower-case, strip and drop empty deliverable lines."""
    cleaned = (item.lower().strip() for item in deliverables)
    return [item for item in cleaned if item]


def count_by_tokens(line: str, token_patterns: Sequence[str]) -> int:
    """Count deliverables of one format mentioned in a line.

    Explicit counts ("3 stories") are summed; a bare mention ("a story")
    counts as one.

    Args:
        line: A single deliverable line.
        token_patterns: Regex fragments naming the format.

    Returns:
        The number of deliverables of this format in the line.
    """
    normalized = line.lower()
    total = 0
    for token in token_patterns:
        for match in re.finditer(rf"(\d+)\s*{token}\b", normalized):
            value = int(match.group(1))
            if value > 0:
                total += value
    if total > 0:
        return total

    has_keyword = any(re.search(rf"\b{token}\b", normalized) for token in token_patterns)
    return 1 if has_keyword else 0


def infer_delivery_type(
    deliverables: Sequence[str], latest_delivery_type: str | None = None
) -> DeliveryType:
    """Classify a proposal as event or content delivery."""
    text = " ".join(deliverables).lower()
    if any(keyword in text for keyword in EVENT_KEYWORDS):
        return DeliveryType.EVENT
    if latest_delivery_type == DeliveryType.EVENT.value:
        return DeliveryType.EVENT
    return DeliveryType.CONTENT


def infer_format_quantities(deliverables: Sequence[str]) -> FormatQuantities:
    """Sum per-format counts across every deliverable line, clamped to the calculator bound."""
    totals = {fmt: 0 for fmt in DeliverableFormat}
    for line in normalize_deliverables(deliverables):
        for fmt, tokens in FORMAT_TOKENS.items():
            totals[fmt] += count_by_tokens(line, tokens)
    return FormatQuantities(**{fmt.value: to_quantity(qty) for fmt, qty in totals.items()})


def _as_mapping(value: object) -> Mapping[str, Any]:
    if isinstance(value, BaseModel):
        return value.model_dump()
    if isinstance(value, Mapping):
        return value
    return {}


def _quantities_from(value: object) -> FormatQuantities:
    mapping = _as_mapping(value)
    return FormatQuantities(
        reels=to_quantity(mapping.get("reels")),
        posts=to_quantity(mapping.get("posts", mapping.get("post"))),
        stories=to_quantity(mapping.get("stories")),
    )


def _pick(value: object, enum_cls: type[E]) -> E | None:
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value)
        except ValueError:
            return None
    return None


def build_conservative_params(
    deliverables: Sequence[str],
    latest_params: Mapping[str, Any] | BaseModel | None = None,
) -> ConservativeMapping:
    """Infer calculator parameters from proposal deliverables.

    Args:
        deliverables: Free-text deliverable lines from the proposal.
        latest_params: Parameters of the creator's most recent calculation, if any.

    Returns:
        The inferred parameters and the list of resolved defaults.
    """
    latest = _as_mapping(latest_params)
    resolved: list[str] = []

    latest_delivery = latest.get("delivery_type")
    delivery_type = infer_delivery_type(
        deliverables,
        latest_delivery.value if isinstance(latest_delivery, Enum) else latest_delivery,
    )
    inferred = infer_format_quantities(deliverables)

    format_quantities = FormatQuantities()
    coverage_quantities = FormatQuantities()
    if delivery_type == DeliveryType.CONTENT:
        format_quantities = inferred
        if not format_quantities.has_any():
            latest_quantities = _quantities_from(latest.get("format_quantities"))
            if latest_quantities.has_any():
                format_quantities = latest_quantities
                resolved.append("format_quantities_from_latest")
            else:
                format_quantities = DEFAULT_FORMAT_QUANTITIES
                resolved.append("format_quantities_default_1_reel")
    else:
        coverage_quantities = inferred
        if not coverage_quantities.has_any():
            coverage_quantities = _quantities_from(latest.get("event_coverage_quantities"))
            if coverage_quantities.has_any():
                resolved.append("event_coverage_from_latest")

    def pick(name: str, enum_cls: type[E], default: E) -> E:
        value = _pick(latest.get(name), enum_cls)
        if value is None:
            resolved.append(f"{name}_default_{default.value}")
            return default
        return value

    exclusivity = pick("exclusivity", Exclusivity, Exclusivity.NONE)
    usage_rights = pick("usage_rights", UsageRights, UsageRights.ORGANIC)

    paid_media_duration: PaidMediaDuration | None = None
    if usage_rights != UsageRights.ORGANIC:
        paid_media_duration = pick(
            "paid_media_duration", PaidMediaDuration, PaidMediaDuration.DAYS_30
        )

    complexity = pick("complexity", Complexity, Complexity.SCRIPTED)
    authority = pick("authority", Authority, Authority.STANDARD)
    seasonality = pick("seasonality", Seasonality, Seasonality.NORMAL)
    brand_size = pick("brand_size", BrandSize, BrandSize.MEDIUM)
    image_risk = pick("image_risk", ImageRisk, ImageRisk.MEDIUM)
    strategic_gain = pick("strategic_gain", StrategicGain, StrategicGain.LOW)
    content_model = pick("content_model", ContentModel, ContentModel.STANDARD)

    latest_event = _as_mapping(latest.get("event_details"))
    duration_candidate = to_quantity(latest_event.get("duration_hours"))
    if duration_candidate in {d.value for d in EventDuration}:
        duration = EventDuration(duration_candidate)
    else:
        duration = EventDuration.FOUR_HOURS
        resolved.append("event_duration_default_4h")

    travel_tier = _pick(latest_event.get("travel_tier"), TravelTier)
    if travel_tier is None:
        travel_tier = TravelTier.LOCAL
        resolved.append("event_travel_default_local")

    def flag(name: str) -> bool:
        value = latest.get(name)
        return value if isinstance(value, bool) else False

    params = CalculatorParamsInput(
        format=(
            CalculatorFormat.EVENT.value
            if delivery_type == DeliveryType.EVENT
            else CalculatorFormat.PACKAGE.value
        ),
        delivery_type=delivery_type.value,
        format_quantities=format_quantities.model_dump(),
        event_coverage_quantities=coverage_quantities.model_dump(),
        event_details={
            "duration_hours": duration.value,
            "travel_tier": travel_tier.value,
            "hotel_nights": to_quantity(
                latest_event.get("hotel_nights"), upper=MAX_INFERRED_HOTEL_NIGHTS
            ),
        },
        exclusivity=exclusivity.value,
        usage_rights=usage_rights.value,
        paid_media_duration=paid_media_duration.value if paid_media_duration else None,
        repost_tiktok=flag("repost_tiktok"),
        instagram_collab=flag("instagram_collab"),
        brand_size=brand_size.value,
        image_risk=image_risk.value,
        strategic_gain=strategic_gain.value,
        content_model=content_model.value,
        allow_strategic_waiver=flag("allow_strategic_waiver"),
        complexity=complexity.value,
        authority=authority.value,
        seasonality=seasonality.value,
    )
    return ConservativeMapping(params=params, resolved_defaults=resolved)
