"""Entry point wiring every pricing stage into a single calculation.

Normalizer -> concurrent collaborator reads -> multiplier composer -> value
assembler -> calibration blender -> explanation builder -> result.

The calculation performs no writes and holds no state between calls, so it
can run concurrently for many creators without locking.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from decimal import Decimal
from typing import Any

import structlog

from publicalc.config import get_settings
from publicalc.domain.errors import PricingError
from publicalc.domain.models import (
    BrandRiskSummary,
    CalculatorParamsInput,
    CalibrationSummary,
    PriceBreakdown,
    PriceTiers,
    PubliCalculatorResult,
    ResolvedMetrics,
)
from publicalc.observability.metrics import record_calculation
from publicalc.pricing.assembler import assemble_value
from publicalc.pricing.calibration import blend_calibration
from publicalc.pricing.composer import compose_multipliers
from publicalc.pricing.explanation import build_explanation
from publicalc.pricing.money import round_currency
from publicalc.pricing.multipliers import DEFAULT_MULTIPLIER_TABLES, MultiplierTables
from publicalc.pricing.normalizer import normalize_params
from publicalc.pricing.resolver import PricingDataSource, resolve_baseline

logger = structlog.get_logger()


async def run_publi_calculator(
    data_source: PricingDataSource,
    creator_id: str,
    raw_params: CalculatorParamsInput | Mapping[str, Any] | None,
    *,
    period_days: float | None = None,
    explanation_prefix: str | None = None,
    brand_risk_enabled: bool | None = None,
    calibration_enabled: bool | None = None,
    tables: MultiplierTables = DEFAULT_MULTIPLIER_TABLES,
    now: datetime | None = None,
) -> PubliCalculatorResult:
    """Price a sponsorship deal for a creator.

    Args:
        data_source: Read-only collaborators for metrics, deals, CPM and calibration.
        creator_id: Identity of the creator being priced.
        raw_params: Untrusted deal parameters.
        period_days: Metrics lookback window in days. Defaults to the configured
            ``default_period_days``.
        explanation_prefix: Optional text placed at the start of the explanation.
        brand_risk_enabled: Override for the brand-risk feature flag.
        calibration_enabled: Override for the calibration feature flag.
        tables: Multiplier tables to price with.
        now: Reference time for the lookback window.

    Returns:
        A fresh, immutable ``PubliCalculatorResult``.

    Raises:
        InsufficientMetricsError: If the creator has no positive trailing reach.
        NoDeliverablesSelectedError: If content delivery has no deliverables.
    """
    settings = get_settings()
    if brand_risk_enabled is None:
        brand_risk_enabled = settings.brand_risk_enabled
    if calibration_enabled is None:
        calibration_enabled = settings.calibration_enabled
    if period_days is None:
        period_days = settings.default_period_days

    log = logger.bind(creator_id=creator_id)
    params = normalize_params(raw_params)

    try:
        baseline = await resolve_baseline(
            data_source,
            creator_id,
            period_days=period_days,
            calibration_enabled=calibration_enabled,
            now=now,
        )
        multipliers = compose_multipliers(
            params,
            baseline.engagement_percent,
            tables=tables,
            brand_risk_enabled=brand_risk_enabled,
        )
        components = assemble_value(
            params,
            baseline.reach_average,
            baseline.cpm.value,
            multipliers.common,
            tables=tables,
        )
    except PricingError as exc:
        log.info("publi_calculation_rejected", kind=exc.kind, reason=str(exc))
        record_calculation(exc.kind)
        raise

    outcome = blend_calibration(
        components,
        params,
        baseline.calibration,
        tables=tables,
        enabled=calibration_enabled,
    )

    insights = baseline.insights
    avg_ticket: Decimal | None = None
    total_deals = 0
    if insights is not None:
        if insights.average_deal_value is not None and insights.average_deal_value.is_finite():
            avg_ticket = round_currency(insights.average_deal_value)
        total_deals = insights.total_deals

    explanation = build_explanation(
        params=params,
        baseline=baseline,
        multipliers=multipliers,
        components=components,
        outcome=outcome,
        avg_ticket=avg_ticket,
        total_deals=total_deals,
        prefix=explanation_prefix,
    )

    snapshot = outcome.snapshot
    result = PubliCalculatorResult(
        metrics=ResolvedMetrics(
            reach=baseline.reach_rounded,
            engagement=round_currency(baseline.engagement_percent),
            profile_segment=baseline.profile_segment,
        ),
        params=params,
        result=PriceTiers(
            strategic=outcome.strategic,
            justo=outcome.justo,
            premium=outcome.premium,
        ),
        breakdown=PriceBreakdown(
            content_units=components.content_units,
            content_justo=outcome.content_justo,
            event_presence_justo=outcome.event_presence_justo,
            coverage_units=components.coverage_units,
            coverage_justo=outcome.coverage_justo,
            travel_cost=components.travel_cost,
            hotel_cost=components.hotel_cost,
            logistics_suggested=components.logistics_suggested,
            logistics_included_in_fee=False,
        ),
        cpm_applied=baseline.cpm.value,
        cpm_source=baseline.cpm.source,
        calibration=CalibrationSummary(
            enabled=outcome.enabled,
            base_justo=outcome.base_justo,
            factor_raw=outcome.factor_raw,
            factor_applied=outcome.factor_applied,
            guardrail_applied=outcome.guardrail_applied,
            confidence=outcome.confidence,
            confidence_band=outcome.confidence_band,
            segment_sample_size=snapshot.segment_sample_size,
            creator_sample_size=snapshot.creator_sample_size,
            window_days_segment=snapshot.window_days_segment,
            window_days_creator=snapshot.window_days_creator,
            low_confidence_range_expanded=outcome.low_confidence_range_expanded,
            link_quality=snapshot.link_quality,
        ),
        brand_risk=BrandRiskSummary(
            enabled=multipliers.brand_risk.enabled,
            raw_multiplier=multipliers.brand_risk.raw,
            applied_multiplier=multipliers.brand_risk.applied,
            floor=multipliers.brand_risk.floor,
            floor_applied=multipliers.brand_risk.floor_applied,
        ),
        avg_ticket=avg_ticket,
        total_deals=total_deals,
        explanation=explanation,
    )

    log.info(
        "publi_calculation_completed",
        justo=str(outcome.justo),
        format=params.format.value,
        calibration_enabled=outcome.enabled,
        factor_applied=str(outcome.factor_applied),
        tables_version=tables.version,
    )
    record_calculation("success")
    return result
