"""Deterministic, ordered audit trail of every factor a calculation applied.

One sentence per factor in a fixed order; factors that do not apply to the
request (e.g. paid-media duration on organic usage) are skipped. The output
is for audit and debugging and is never parsed downstream.
"""

from decimal import Decimal

from publicalc.domain.models import NormalizedCalculatorParams
from publicalc.domain.types import (
    Authority,
    CalculatorFormat,
    Complexity,
    DeliveryType,
    Exclusivity,
    Seasonality,
    UsageRights,
)
from publicalc.pricing.assembler import ValueComponents
from publicalc.pricing.calibration import CalibrationOutcome
from publicalc.pricing.composer import ComposedMultipliers
from publicalc.pricing.resolver import ResolvedBaseline

_FORMAT_LABELS: dict[CalculatorFormat, str] = {
    CalculatorFormat.REELS: "a single reel",
    CalculatorFormat.POSTS: "a single feed post",
    CalculatorFormat.STORIES: "a single story",
    CalculatorFormat.PACKAGE: "a multi-format package",
    CalculatorFormat.EVENT: "event presence",
}


def _x(value: Decimal) -> str:
    return f"{value:.2f}x"


def _money(value: Decimal) -> str:
    return f"{value:,.2f}"


def _deliverables_sentence(
    params: NormalizedCalculatorParams, components: ValueComponents
) -> str:
    label = _FORMAT_LABELS[params.format]
    if params.delivery_type == DeliveryType.EVENT:
        return f"Deliverable: {label}."
    if params.legacy_package_mode:
        return f"Deliverables: {label} ({components.content_units:.2f} content units)."
    counts = ", ".join(
        f"{qty} {fmt.value}" for fmt, qty in params.format_quantities.items() if qty > 0
    )
    return f"Deliverables: {counts} ({components.content_units:.2f} content units)."


def build_explanation(
    *,
    params: NormalizedCalculatorParams,
    baseline: ResolvedBaseline,
    multipliers: ComposedMultipliers,
    components: ValueComponents,
    outcome: CalibrationOutcome,
    avg_ticket: Decimal | None = None,
    total_deals: int = 0,
    prefix: str | None = None,
) -> str:
    """Render the explanation string for a calculation.

    Args:
        params: Normalized calculator params.
        baseline: Resolved metrics and CPM.
        multipliers: The composed multipliers.
        components: Pre-calibration fair-value components.
        outcome: Calibration and tier outcome.
        avg_ticket: Rounded average value of recent deals, if known.
        total_deals: Number of recent deals analyzed.
        prefix: Optional caller-supplied text placed first.

    Returns:
        The sentences joined by single spaces.
    """
    parts: list[str] = []

    if prefix and prefix.strip():
        parts.append(prefix.strip())

    parts.append(
        f"Base CPM applied: {_money(baseline.cpm.value)} ({baseline.cpm.source.value})."
    )
    parts.append(f"Average reach considered: {baseline.reach_rounded:,} people.")
    parts.append(f"Engagement factor: {_x(multipliers.engagement_factor)}.")
    parts.append(_deliverables_sentence(params, components))

    if params.exclusivity != Exclusivity.NONE:
        parts.append(
            f"Exclusivity ({params.exclusivity.value}): {_x(multipliers.exclusivity)}."
        )
    if params.usage_rights != UsageRights.ORGANIC:
        parts.append(
            f"Usage rights ({params.usage_rights.value}): {_x(multipliers.usage_rights)}."
        )
        if params.paid_media_duration is not None:
            parts.append(
                f"Paid media duration ({params.paid_media_duration.value}): "
                f"{_x(multipliers.paid_media_duration)}."
            )
    if params.repost_tiktok:
        parts.append(f"TikTok repost: {_x(multipliers.repost)}.")
    if params.instagram_collab:
        parts.append("Instagram collab post requested (no price impact).")

    brand_risk = multipliers.brand_risk
    if brand_risk.enabled:
        sentence = (
            f"Brand risk and strategy (brand {params.brand_size.value}, "
            f"image risk {params.image_risk.value}, gain {params.strategic_gain.value}, "
            f"model {params.content_model.value}): {_x(brand_risk.applied)}"
        )
        if brand_risk.floor_applied and brand_risk.floor is not None:
            sentence += f" (floor {_x(brand_risk.floor)} applied over {_x(brand_risk.raw)})"
        parts.append(sentence + ".")

    if params.complexity != Complexity.SIMPLE:
        parts.append(f"Complexity ({params.complexity.value}): {_x(multipliers.complexity)}.")
    if params.authority != Authority.STANDARD:
        parts.append(f"Authority ({params.authority.value}): {_x(multipliers.authority)}.")
    if params.seasonality != Seasonality.NORMAL:
        parts.append(
            f"Seasonality ({params.seasonality.value}): {_x(multipliers.seasonality)}."
        )

    if params.delivery_type == DeliveryType.EVENT:
        parts.append(
            f"Event presence: {params.event_details.duration_hours.value}h "
            f"({_money(components.event_presence_justo)} before calibration)."
        )
        if components.coverage_units > 0:
            parts.append(
                f"Event coverage: {components.coverage_units:.2f} units at a discount "
                f"({_money(components.coverage_justo)} before calibration)."
            )

    if outcome.enabled:
        sentence = f"Historical calibration factor: {_x(outcome.factor_applied)}"
        if outcome.guardrail_applied:
            sentence += f" (guardrail clamped raw factor {_x(outcome.factor_raw)})"
        parts.append(sentence + ".")

    parts.append(
        f"Confidence {outcome.confidence_band.value}: strategic "
        f"{_x(outcome.spread.strategic)}, premium {_x(outcome.spread.premium)}"
        + (" (range expanded for low confidence)." if outcome.low_confidence_range_expanded else ".")
    )

    if params.allow_strategic_waiver:
        if outcome.waiver_applied:
            parts.append("Strategic waiver applied: strategic tier set to 0.")
        else:
            parts.append("Strategic waiver requested but not eligible for this deal.")

    if components.logistics_suggested > 0:
        parts.append(
            f"Suggested logistics (not included in the fee): travel "
            f"{_money(components.travel_cost)}, hotel {_money(components.hotel_cost)}."
        )

    if avg_ticket is not None:
        parts.append(f"Average ticket of recent deals: {_money(avg_ticket)}.")
    if total_deals > 0:
        parts.append(f"Deals analyzed: {total_deals}.")

    return " ".join(parts)
