"""Calculator-backed price tiers for an incoming brand proposal.

The proposal's deliverables are mapped to conservative calculator params and
priced with the full calculator. Every default the mapping had to resolve
lowers the reported confidence. When the calculator cannot run, the tiers of
the creator's latest calculation are reused with a fixed, low confidence and
a note explaining why.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from datetime import datetime
from decimal import Decimal
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict

from publicalc.config import get_settings
from publicalc.domain.models import PubliCalculatorResult
from publicalc.domain.types import ProposalPricingSource
from publicalc.pricing.calculator import run_publi_calculator
from publicalc.pricing.money import round_currency
from publicalc.pricing.resolver import PricingDataSource
from publicalc.proposals.inference import build_conservative_params

logger = structlog.get_logger()

EXPLANATION_PREFIX = "Campaigns AI"

# Confidence assumed for calculator output when calibration is disabled
UNCALIBRATED_CONFIDENCE = 0.72
DEFAULT_PENALTY = 0.04
MAX_DEFAULTS_PENALTY = 0.32
MIN_CONFIDENCE = 0.15
MAX_CONFIDENCE = 0.95

DISABLED_CONFIDENCE = 0.35
FOREIGN_CURRENCY_CONFIDENCE = 0.25
UNAVAILABLE_CONFIDENCE = 0.3


class ProposalPricingContext(BaseModel):
    """Price tiers attached to a proposal and how far to trust them.

    Attributes:
        source: Whether the tiers came from the calculator or the fallback.
        justo: Fair price, or None when no tier could be resolved.
        strategic: Strategic tier, or None.
        premium: Premium tier, or None.
        confidence: Trust in the tiers, in ``[0, 1]``.
        resolved_defaults: Params the proposal mapping had to default.
        limitations: Human-readable notes on why the tiers are degraded.
    """

    model_config = ConfigDict(frozen=True)

    source: ProposalPricingSource
    justo: Decimal | None = None
    strategic: Decimal | None = None
    premium: Decimal | None = None
    confidence: float
    resolved_defaults: tuple[str, ...] = ()
    limitations: tuple[str, ...] = ()


def clamp_confidence(value: float, lower: float, upper: float) -> float:
    """Bound *value* to ``[lower, upper]``; non-finite values map to *lower*."""
    if not math.isfinite(value):
        return lower
    return max(lower, min(value, upper))


def defaults_penalty(resolved_defaults: Sequence[str]) -> float:
    """Confidence lost for each default the proposal mapping resolved, capped."""
    return min(len(resolved_defaults) * DEFAULT_PENALTY, MAX_DEFAULTS_PENALTY)


def _section(latest: PubliCalculatorResult | Mapping[str, Any] | None, name: str) -> Any:
    if latest is None:
        return None
    if isinstance(latest, Mapping):
        return latest.get(name)
    return getattr(latest, name, None)


def _tier(tiers: Any, name: str) -> Decimal | None:
    if isinstance(tiers, BaseModel):
        value = getattr(tiers, name, None)
    elif isinstance(tiers, Mapping):
        value = tiers.get(name)
    else:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return None
    amount = Decimal(str(value))
    if not amount.is_finite():
        return None
    return round_currency(amount)


def _fallback(
    latest: PubliCalculatorResult | Mapping[str, Any] | None,
    confidence: float,
    limitation: str,
    resolved_defaults: Sequence[str] = (),
) -> ProposalPricingContext:
    tiers = _section(latest, "result")
    return ProposalPricingContext(
        source=ProposalPricingSource.FALLBACK,
        justo=_tier(tiers, "justo"),
        strategic=_tier(tiers, "strategic"),
        premium=_tier(tiers, "premium"),
        confidence=clamp_confidence(confidence, 0.0, 1.0),
        resolved_defaults=tuple(resolved_defaults),
        limitations=(limitation,),
    )


async def resolve_proposal_pricing(
    data_source: PricingDataSource,
    creator_id: str | None,
    deliverables: Sequence[str],
    *,
    latest_calculation: PubliCalculatorResult | Mapping[str, Any] | None = None,
    currency: str | None = None,
    pricing_enabled: bool | None = None,
    brand_risk_enabled: bool | None = None,
    calibration_enabled: bool | None = None,
    now: datetime | None = None,
) -> ProposalPricingContext:
    """Price a brand proposal through the calculator.

    Args:
        data_source: Read-only collaborators for the calculator.
        creator_id: Identity of the creator the proposal is addressed to.
        deliverables: Free-text deliverable lines from the proposal.
        latest_calculation: The creator's most recent calculation, as a result
            or its ``to_dict()`` form. Supplies missing terms and fallback tiers.
        currency: Proposal currency code. Defaults to the base currency.
        pricing_enabled: Override for ``Settings.proposal_pricing_enabled``.
        brand_risk_enabled: Override for the brand-risk feature flag.
        calibration_enabled: Override for the calibration feature flag.
        now: Reference time for the metrics lookback window.

    Returns:
        The proposal's pricing context. Calculator failures degrade to the
        fallback context and are never raised.
    """
    settings = get_settings()
    if pricing_enabled is None:
        pricing_enabled = settings.proposal_pricing_enabled
    base_currency = settings.base_currency.strip().upper()
    proposal_currency = (currency or "").strip().upper() or base_currency

    if not pricing_enabled:
        return _fallback(
            latest_calculation,
            DISABLED_CONFIDENCE,
            "Calculator pricing is disabled for proposals.",
        )
    if proposal_currency != base_currency:
        return _fallback(
            latest_calculation,
            FOREIGN_CURRENCY_CONFIDENCE,
            f"Proposal currency {proposal_currency} differs from {base_currency}: "
            "only local history is used, without currency conversion.",
        )
    if not creator_id:
        return _fallback(
            latest_calculation,
            UNAVAILABLE_CONFIDENCE,
            "Creator profile unavailable to run the full calculator.",
        )

    log = logger.bind(creator_id=creator_id)
    mapping = build_conservative_params(deliverables, _section(latest_calculation, "params"))

    try:
        result = await run_publi_calculator(
            data_source,
            creator_id,
            mapping.params,
            explanation_prefix=EXPLANATION_PREFIX,
            brand_risk_enabled=brand_risk_enabled,
            calibration_enabled=calibration_enabled,
            now=now,
        )
    except Exception as exc:
        log.warning("proposal_pricing_fallback", error=str(exc))
        return _fallback(
            latest_calculation,
            UNAVAILABLE_CONFIDENCE,
            "The calculator could not price this proposal right now; "
            "historical tiers are used instead.",
            mapping.resolved_defaults,
        )

    base_confidence = (
        result.calibration.confidence if result.calibration.enabled else UNCALIBRATED_CONFIDENCE
    )
    confidence = clamp_confidence(
        base_confidence - defaults_penalty(mapping.resolved_defaults),
        MIN_CONFIDENCE,
        MAX_CONFIDENCE,
    )
    log.info(
        "proposal_pricing_resolved",
        justo=str(result.result.justo),
        confidence=confidence,
        resolved_defaults=len(mapping.resolved_defaults),
    )
    return ProposalPricingContext(
        source=ProposalPricingSource.CALCULATOR,
        justo=result.result.justo,
        strategic=result.result.strategic,
        premium=result.result.premium,
        confidence=confidence,
        resolved_defaults=tuple(mapping.resolved_defaults),
    )
