"""Composition of the calculator's multiplicative pricing factors.

Produces two values from normalized params and an injected table set:

* the brand-risk/strategy multiplier (brand size x image risk x strategic
  gain x content model), floored per image risk, and
* the common multiplier shared by every fair-value component.

All arithmetic is Decimal; the composer is pure and deterministic.
"""

from dataclasses import dataclass
from decimal import Decimal

from publicalc.domain.models import NormalizedCalculatorParams
from publicalc.pricing.multipliers import DEFAULT_MULTIPLIER_TABLES, MultiplierTables

ONE = Decimal("1")


@dataclass(frozen=True)
class BrandRiskResult:
    """Outcome of the brand-risk/strategy multiplier computation.

    Attributes:
        enabled: Whether brand-risk multipliers were enabled.
        raw: Product of the four factors before the floor (1 when disabled).
        applied: The value used in pricing, never below ``floor``.
        floor: Floor for the image-risk tier, or None when it has no floor.
        floor_applied: Whether the floor raised the value.
    """

    enabled: bool
    raw: Decimal
    applied: Decimal
    floor: Decimal | None
    floor_applied: bool


@dataclass(frozen=True)
class ComposedMultipliers:
    """Every factor that fed the common multiplier, for auditing."""

    exclusivity: Decimal
    usage_rights: Decimal
    paid_media_duration: Decimal
    repost: Decimal
    brand_risk: BrandRiskResult
    complexity: Decimal
    authority: Decimal
    seasonality: Decimal
    engagement_factor: Decimal
    common: Decimal


def engagement_factor(engagement_percent: Decimal) -> Decimal:
    """Return ``1 + engagement_percent / 100``."""
    return ONE + engagement_percent / Decimal("100")


def compose_brand_risk(
    params: NormalizedCalculatorParams,
    tables: MultiplierTables = DEFAULT_MULTIPLIER_TABLES,
    enabled: bool = True,
) -> BrandRiskResult:
    """Compute the brand-risk/strategy multiplier with floor enforcement.

    Args:
        params: Normalized calculator params.
        tables: Multiplier tables to read from.
        enabled: Whether brand-risk multipliers are enabled. When disabled the
            multiplier is exactly 1 and no floor applies.

    Returns:
        The raw and applied multipliers and whether the floor was applied.
    """
    if not enabled:
        return BrandRiskResult(
            enabled=False, raw=ONE, applied=ONE, floor=None, floor_applied=False
        )

    raw = (
        tables.brand_size[params.brand_size]
        * tables.image_risk[params.image_risk]
        * tables.strategic_gain[params.strategic_gain]
        * tables.content_model[params.content_model]
    )

    floor = tables.image_risk_floor.get(params.image_risk)
    applied = max(raw, floor) if floor is not None else raw
    return BrandRiskResult(
        enabled=True,
        raw=raw,
        applied=applied,
        floor=floor,
        floor_applied=applied != raw,
    )


def compose_multipliers(
    params: NormalizedCalculatorParams,
    engagement_percent: Decimal,
    tables: MultiplierTables = DEFAULT_MULTIPLIER_TABLES,
    brand_risk_enabled: bool = True,
) -> ComposedMultipliers:
    """Multiply every applicable factor into the common multiplier.

    Args:
        params: Normalized calculator params.
        engagement_percent: Engagement rate as a percentage.
        tables: Multiplier tables to read from.
        brand_risk_enabled: Whether brand-risk multipliers are enabled.

    Returns:
        The individual factors and their product.
    """
    brand_risk = compose_brand_risk(params, tables, brand_risk_enabled)
    exclusivity = tables.exclusivity[params.exclusivity]
    usage_rights = tables.usage_rights[params.usage_rights]
    paid_media = (
        tables.paid_media_duration[params.paid_media_duration]
        if params.paid_media_duration is not None
        else ONE
    )
    repost = tables.repost if params.repost_tiktok else ONE
    complexity = tables.complexity[params.complexity]
    authority = tables.authority[params.authority]
    seasonality = tables.seasonality[params.seasonality]
    engagement = engagement_factor(engagement_percent)

    common = (
        exclusivity
        * usage_rights
        * paid_media
        * repost
        * brand_risk.applied
        * complexity
        * authority
        * seasonality
        * engagement
    )
    return ComposedMultipliers(
        exclusivity=exclusivity,
        usage_rights=usage_rights,
        paid_media_duration=paid_media,
        repost=repost,
        brand_risk=brand_risk,
        complexity=complexity,
        authority=authority,
        seasonality=seasonality,
        engagement_factor=engagement,
        common=common,
    )
