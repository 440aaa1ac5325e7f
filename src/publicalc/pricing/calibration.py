"""Calibration blending and confidence-based range selection.

Scales each fair-value component by a historical calibration factor bounded
to the table guardrails, then derives the strategic and premium tiers from
the spread associated with the snapshot's confidence band.

Guardrail rules:
- Raw factor outside ``[calibration_min, calibration_max]`` is clamped
- Non-finite raw factors count as neutral (1)
- Calibration disabled: factor 1 and the confidence band is forced to high
"""

import math
from dataclasses import dataclass
from decimal import Decimal

from publicalc.domain.models import CalibrationSnapshot, NormalizedCalculatorParams
from publicalc.domain.types import (
    Authority,
    BrandSize,
    ConfidenceBand,
    ContentModel,
    Exclusivity,
    ImageRisk,
    StrategicGain,
    UsageRights,
)
from publicalc.pricing.assembler import ValueComponents
from publicalc.pricing.money import ZERO, round_currency, round_non_negative
from publicalc.pricing.multipliers import (
    DEFAULT_MULTIPLIER_TABLES,
    ConfidenceSpread,
    MultiplierTables,
)

ONE = Decimal("1")

_WAIVER_AUTHORITIES = frozenset({Authority.STANDARD, Authority.RISING})


@dataclass(frozen=True)
class CalibrationOutcome:
    """Result of blending the calibration factor into the fair value.

    Attributes:
        enabled: Whether calibration was enabled.
        base_justo: Sum of the fee components before calibration.
        factor_raw: Factor reported by the snapshot (1 when disabled).
        factor_applied: Factor after the guardrail clamp.
        guardrail_applied: Whether the clamp changed the factor.
        snapshot: The evidence the factor came from.
        confidence: Confidence score used for reporting.
        confidence_band: Band that selected the spread.
        spread: Strategic/premium multipliers for the band.
        low_confidence_range_expanded: Whether a band below high widened the spread.
        content_justo: Calibrated content component.
        event_presence_justo: Calibrated event presence component.
        coverage_justo: Calibrated coverage component.
        strategic: Strategic tier.
        justo: Final fair value.
        premium: Premium tier.
        waiver_applied: Whether the strategic waiver zeroed the strategic tier.
    """

    enabled: bool
    base_justo: Decimal
    factor_raw: Decimal
    factor_applied: Decimal
    guardrail_applied: bool
    snapshot: CalibrationSnapshot
    confidence: float
    confidence_band: ConfidenceBand
    spread: ConfidenceSpread
    low_confidence_range_expanded: bool
    content_justo: Decimal
    event_presence_justo: Decimal
    coverage_justo: Decimal
    strategic: Decimal
    justo: Decimal
    premium: Decimal
    waiver_applied: bool


def is_strategic_waiver_eligible(params: NormalizedCalculatorParams) -> bool:
    """Check the exact parameter combination that zeroes the strategic tier.

    The waiver fires only when the caller allowed it and the deal is a large,
    low-risk, high-gain brand on the creator's own profile with organic usage,
    no exclusivity and a standard or rising creator.
    """
    return (
        params.allow_strategic_waiver
        and params.brand_size == BrandSize.LARGE
        and params.image_risk == ImageRisk.LOW
        and params.strategic_gain == StrategicGain.HIGH
        and params.content_model == ContentModel.STANDARD
        and params.usage_rights == UsageRights.ORGANIC
        and params.exclusivity == Exclusivity.NONE
        and params.authority in _WAIVER_AUTHORITIES
    )


def clamp_factor(
    factor_raw: float,
    tables: MultiplierTables = DEFAULT_MULTIPLIER_TABLES,
) -> tuple[Decimal, Decimal]:
    """Clamp a raw calibration factor to the guardrail range.

    Args:
        factor_raw: The unbounded factor from the snapshot.
        tables: Multiplier tables holding the guardrail bounds.

    Returns:
        A ``(raw, applied)`` pair of Decimals.
    """
    if isinstance(factor_raw, bool) or not math.isfinite(factor_raw):
        raw = ONE
    else:
        raw = Decimal(str(factor_raw))
    applied = min(max(raw, tables.calibration_min), tables.calibration_max)
    return raw, applied


def blend_calibration(
    components: ValueComponents,
    params: NormalizedCalculatorParams,
    snapshot: CalibrationSnapshot | None,
    tables: MultiplierTables = DEFAULT_MULTIPLIER_TABLES,
    enabled: bool = False,
) -> CalibrationOutcome:
    """Apply the bounded calibration factor and derive the three price tiers.

    Args:
        components: Pre-calibration fair-value components.
        params: Normalized calculator params (for the waiver check).
        snapshot: Calibration evidence; None falls back to the neutral snapshot.
        tables: Multiplier tables with guardrails and confidence spreads.
        enabled: Whether calibration is enabled.

    Returns:
        The calibrated components, the three tiers and the calibration audit data.
    """
    if enabled:
        evidence = snapshot if snapshot is not None else CalibrationSnapshot.neutral()
        factor_raw, factor_applied = clamp_factor(evidence.factor_raw, tables)
        confidence = evidence.confidence
        band = evidence.confidence_band
    else:
        evidence = CalibrationSnapshot(confidence=1.0, confidence_band=ConfidenceBand.HIGH)
        factor_raw = factor_applied = ONE
        confidence = evidence.confidence
        band = ConfidenceBand.HIGH

    content_justo = round_non_negative(components.content_justo * factor_applied)
    event_presence_justo = round_non_negative(components.event_presence_justo * factor_applied)
    coverage_justo = round_non_negative(components.coverage_justo * factor_applied)
    justo = content_justo + event_presence_justo + coverage_justo

    spread = tables.confidence_spreads[band]
    waiver_applied = is_strategic_waiver_eligible(params)
    strategic = (
        round_currency(ZERO) if waiver_applied else round_non_negative(justo * spread.strategic)
    )
    premium = round_non_negative(justo * spread.premium)

    return CalibrationOutcome(
        enabled=enabled,
        base_justo=components.valor_justo_base,
        factor_raw=factor_raw,
        factor_applied=factor_applied,
        guardrail_applied=factor_raw != factor_applied,
        snapshot=evidence,
        confidence=confidence,
        confidence_band=band,
        spread=spread,
        low_confidence_range_expanded=band != ConfidenceBand.HIGH,
        content_justo=content_justo,
        event_presence_justo=event_presence_justo,
        coverage_justo=coverage_justo,
        strategic=strategic,
        justo=justo,
        premium=premium,
        waiver_applied=waiver_applied,
    )
