"""Sanitization of raw calculator parameters into their canonical form.

``normalize_params`` never raises: unknown or malformed values fall back to a
documented default, quantities are coerced to integers and clamped to
``[0, MAX_QUANTITY]``, and legacy single-format requests are expanded into
per-format quantities.
"""

from __future__ import annotations

import math
import numbers
from collections.abc import Mapping
from decimal import Decimal
from enum import Enum
from typing import Any, TypeVar

from pydantic import BaseModel

from publicalc.domain.models import (
    MAX_QUANTITY,
    CalculatorParamsInput,
    EventDetails,
    FormatQuantities,
    NormalizedCalculatorParams,
    derive_legacy_format,
)
from publicalc.domain.types import (
    Authority,
    BrandSize,
    CalculatorFormat,
    Complexity,
    ContentModel,
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

__all__ = ["derive_legacy_format", "normalize_params", "to_quantity"]

E = TypeVar("E", bound=Enum)

# Singular spellings accepted for per-format quantity keys
_QUANTITY_KEY_ALIASES: dict[str, tuple[str, ...]] = {
    "reels": ("reels", "reel"),
    "posts": ("posts", "post"),
    "stories": ("stories", "story"),
}


def to_quantity(value: object, upper: int = MAX_QUANTITY) -> int:
    """Coerce an arbitrary value into an integer quantity within ``[0, upper]``.

    Numbers truncate toward zero; numeric strings are parsed; booleans,
    non-numeric and non-finite values count as zero.

    Args:
        value: The raw quantity.
        upper: Inclusive upper bound.

    Returns:
        The sanitized quantity.
    """
    if isinstance(value, bool):
        return 0
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        try:
            value = float(text)
        except ValueError:
            return 0
    if isinstance(value, Decimal):
        if not value.is_finite():
            return 0
    elif not isinstance(value, numbers.Real):
        return 0
    elif not math.isfinite(value):
        return 0
    return max(0, min(int(value), upper))


def _pick(value: object, enum_cls: type[E], default: E) -> E:
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value.strip().lower())
        except ValueError:
            return default
    return default


def _pick_optional(value: object, enum_cls: type[E]) -> E | None:
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value.strip().lower())
        except ValueError:
            return None
    return None


def _pick_legacy_format(value: object) -> CalculatorFormat | None:
    """Resolve a legacy format label, accepting singular spellings ("post")."""
    if isinstance(value, str):
        text = value.strip().lower()
        for plural, spellings in _QUANTITY_KEY_ALIASES.items():
            if text in spellings:
                return CalculatorFormat(plural)
    return _pick_optional(value, CalculatorFormat)


def _as_mapping(value: object) -> Mapping[str, Any] | None:
    if isinstance(value, BaseModel):
        return value.model_dump()
    if isinstance(value, Mapping):
        return value
    return None


def _lookup(mapping: Mapping[str, Any], field: str) -> Any:
    for key in _QUANTITY_KEY_ALIASES[field]:
        if mapping.get(key) not in (None, ""):
            return mapping[key]
    return None


def _has_explicit_quantities(value: object) -> bool:
    mapping = _as_mapping(value)
    if mapping is None:
        return False
    return any(_lookup(mapping, field) is not None for field in _QUANTITY_KEY_ALIASES)


def _sanitize_quantities(value: object) -> FormatQuantities:
    mapping = _as_mapping(value)
    if mapping is None:
        return FormatQuantities()
    return FormatQuantities(
        **{field: to_quantity(_lookup(mapping, field)) for field in _QUANTITY_KEY_ALIASES}
    )


def _legacy_quantities(legacy_format: CalculatorFormat | None) -> FormatQuantities:
    """Map a legacy single format onto one unit of that format (one reel by default)."""
    if legacy_format == CalculatorFormat.POSTS:
        return FormatQuantities(posts=1)
    if legacy_format == CalculatorFormat.STORIES:
        return FormatQuantities(stories=1)
    return FormatQuantities(reels=1)


def _sanitize_duration(value: object) -> EventDuration:
    if isinstance(value, bool) or value is None:
        return EventDuration.FOUR_HOURS
    try:
        hours = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return EventDuration.FOUR_HOURS
    if not math.isfinite(hours) or not hours.is_integer():
        return EventDuration.FOUR_HOURS
    try:
        return EventDuration(int(hours))
    except ValueError:
        return EventDuration.FOUR_HOURS


def _sanitize_event_details(value: object) -> EventDetails:
    mapping = _as_mapping(value) or {}
    return EventDetails(
        duration_hours=_sanitize_duration(mapping.get("duration_hours")),
        travel_tier=_pick(mapping.get("travel_tier"), TravelTier, TravelTier.LOCAL),
        hotel_nights=to_quantity(mapping.get("hotel_nights")),
    )


def normalize_params(
    raw: CalculatorParamsInput | Mapping[str, Any] | None,
) -> NormalizedCalculatorParams:
    """Validate and sanitize a raw parameter bag.

    Args:
        raw: The untrusted request parameters.

    Returns:
        A ``NormalizedCalculatorParams`` whose every field lies in its domain.
    """
    if raw is None:
        params = CalculatorParamsInput()
    elif isinstance(raw, CalculatorParamsInput):
        params = raw
    else:
        params = CalculatorParamsInput.model_validate(dict(raw))

    legacy_format = _pick_legacy_format(params.format)
    explicit_delivery = _pick_optional(params.delivery_type, DeliveryType)
    if explicit_delivery is not None:
        delivery_type = explicit_delivery
    elif legacy_format == CalculatorFormat.EVENT:
        delivery_type = DeliveryType.EVENT
    else:
        delivery_type = DeliveryType.CONTENT

    legacy_package_mode = False
    if delivery_type == DeliveryType.EVENT:
        format_quantities = FormatQuantities()
        coverage_quantities = _sanitize_quantities(params.event_coverage_quantities)
    else:
        coverage_quantities = FormatQuantities()
        if _has_explicit_quantities(params.format_quantities):
            format_quantities = _sanitize_quantities(params.format_quantities)
        elif legacy_format == CalculatorFormat.PACKAGE:
            format_quantities = FormatQuantities()
            legacy_package_mode = True
        else:
            format_quantities = _legacy_quantities(legacy_format)

    usage_rights = _pick(params.usage_rights, UsageRights, UsageRights.ORGANIC)
    paid_media_duration: PaidMediaDuration | None = None
    if usage_rights != UsageRights.ORGANIC:
        paid_media_duration = _pick(
            params.paid_media_duration, PaidMediaDuration, PaidMediaDuration.DAYS_30
        )

    return NormalizedCalculatorParams(
        delivery_type=delivery_type,
        format_quantities=format_quantities,
        event_details=_sanitize_event_details(params.event_details),
        event_coverage_quantities=coverage_quantities,
        exclusivity=_pick(params.exclusivity, Exclusivity, Exclusivity.NONE),
        usage_rights=usage_rights,
        paid_media_duration=paid_media_duration,
        repost_tiktok=params.repost_tiktok is True,
        instagram_collab=params.instagram_collab is True,
        brand_size=_pick(params.brand_size, BrandSize, BrandSize.MEDIUM),
        image_risk=_pick(params.image_risk, ImageRisk, ImageRisk.MEDIUM),
        strategic_gain=_pick(params.strategic_gain, StrategicGain, StrategicGain.LOW),
        content_model=_pick(params.content_model, ContentModel, ContentModel.STANDARD),
        allow_strategic_waiver=params.allow_strategic_waiver is True,
        complexity=_pick(params.complexity, Complexity, Complexity.SIMPLE),
        authority=_pick(params.authority, Authority, Authority.STANDARD),
        seasonality=_pick(params.seasonality, Seasonality, Seasonality.NORMAL),
        legacy_package_mode=legacy_package_mode,
    )
