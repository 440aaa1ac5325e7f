"""Metrics and baseline resolution over the calculator's external collaborators.

Fans out the independent reads a calculation needs with ``asyncio.gather``:
trailing performance and historical deal insights first, then the segment CPM
and (when enabled) the calibration snapshot once the profile segment is known.

Deal insights and calibration degrade to neutral defaults on failure; a
missing or non-positive trailing reach is fatal.
"""

from __future__ import annotations

import asyncio
import math
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Protocol

import structlog

from publicalc.domain.errors import InsufficientMetricsError
from publicalc.domain.models import (
    CalibrationSnapshot,
    DealInsights,
    SegmentCpm,
    TrailingPerformance,
)
from publicalc.domain.types import WindowBucket
from publicalc.observability.metrics import record_degraded_read

logger = structlog.get_logger()

DEFAULT_PERIOD_DAYS = 90
MAX_PERIOD_DAYS = 365
MAX_ENGAGEMENT_PERCENT = Decimal("25")
DEFAULT_SEGMENT = "default"


class PricingDataSource(Protocol):
    """Read-only collaborators the calculator depends on."""

    async def fetch_trailing_performance(
        self, creator_id: str, since: datetime
    ) -> TrailingPerformance: ...

    async def fetch_deal_insights(
        self, creator_id: str, window_bucket: WindowBucket
    ) -> DealInsights | None: ...

    async def resolve_segment_cpm(self, profile_segment: str) -> SegmentCpm: ...

    async def resolve_calibration_snapshot(
        self, creator_id: str, profile_segment: str
    ) -> CalibrationSnapshot | None: ...


@dataclass(frozen=True)
class ResolvedBaseline:
    """Everything the pricing computation needs from collaborators.

    Attributes:
        reach_average: Trailing reach average, always finite and positive.
        engagement_percent: Engagement rate as a percentage in [0, 25].
        profile_segment: The creator's performance segment.
        cpm: Baseline CPM for the segment.
        insights: Historical deal insights, or None when unavailable.
        calibration: Calibration snapshot, or None when calibration is disabled.
    """

    reach_average: Decimal
    engagement_percent: Decimal
    profile_segment: str
    cpm: SegmentCpm
    insights: DealInsights | None
    calibration: CalibrationSnapshot | None

    @property
    def reach_rounded(self) -> int:
        return int(self.reach_average.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def clamp_period_days(period_days: float | None) -> int:
    """Clamp a lookback window to ``(0, 365]`` days, defaulting to 90."""
    if period_days is None or isinstance(period_days, bool):
        return DEFAULT_PERIOD_DAYS
    if not math.isfinite(period_days) or period_days <= 0:
        return DEFAULT_PERIOD_DAYS
    return max(1, min(int(period_days), MAX_PERIOD_DAYS))


def window_bucket(period_days: int) -> WindowBucket:
    """Map a lookback window onto the deal-insights bucket covering it."""
    if period_days <= 30:
        return WindowBucket.LAST_30D
    if period_days <= 90:
        return WindowBucket.LAST_90D
    return WindowBucket.ALL


def validate_reach(reach_average: float | None) -> Decimal:
    """Ensure the trailing reach average can support a price.

    Args:
        reach_average: The raw reach average reported by the metrics collaborator.

    Returns:
        The reach average as a Decimal.

    Raises:
        InsufficientMetricsError: If the value is missing, non-finite, zero or negative.
    """
    if (
        reach_average is None
        or isinstance(reach_average, bool)
        or not math.isfinite(reach_average)
        or reach_average <= 0
    ):
        raise InsufficientMetricsError(reach_average)
    return Decimal(str(reach_average))


def normalize_engagement_percent(engagement_rate: float | None) -> Decimal:
    """Express an engagement rate as a percentage clamped to ``[0, 25]``.

    Values above 1 are taken as already being percentages; values at or
    below 1 are fractions and are scaled by 100.
    """
    if engagement_rate is None or isinstance(engagement_rate, bool):
        return Decimal("0")
    if not math.isfinite(engagement_rate):
        return Decimal("0")
    rate = Decimal(str(engagement_rate))
    percent = rate if rate > 1 else rate * 100
    return max(Decimal("0"), min(percent, MAX_ENGAGEMENT_PERCENT))


async def _fetch_insights(
    data_source: PricingDataSource, creator_id: str, bucket: WindowBucket
) -> DealInsights | None:
    try:
        return await data_source.fetch_deal_insights(creator_id, bucket)
    except Exception as exc:
        logger.warning(
            "deal_insights_unavailable",
            creator_id=creator_id,
            window_bucket=bucket.value,
            error=str(exc),
        )
        record_degraded_read("deal_insights")
        return None


async def _fetch_calibration(
    data_source: PricingDataSource, creator_id: str, profile_segment: str
) -> CalibrationSnapshot:
    try:
        snapshot = await data_source.resolve_calibration_snapshot(creator_id, profile_segment)
    except Exception as exc:
        logger.warning(
            "calibration_snapshot_unavailable",
            creator_id=creator_id,
            profile_segment=profile_segment,
            error=str(exc),
        )
        record_degraded_read("calibration")
        return CalibrationSnapshot.neutral()

    if snapshot is None:
        logger.info(
            "calibration_snapshot_absent",
            creator_id=creator_id,
            profile_segment=profile_segment,
        )
        return CalibrationSnapshot.neutral()
    return snapshot


async def resolve_baseline(
    data_source: PricingDataSource,
    creator_id: str,
    *,
    period_days: float | None = None,
    calibration_enabled: bool = False,
    now: datetime | None = None,
) -> ResolvedBaseline:
    """Obtain metrics, deal insights, CPM and calibration for a creator.

    Args:
        data_source: The read-only collaborators.
        creator_id: Identity of the creator being priced.
        period_days: Lookback window in days; clamped to ``(0, 365]``.
        calibration_enabled: Whether to fetch a calibration snapshot.
        now: Reference time for the lookback window. Defaults to the current UTC time.

    Returns:
        The resolved baseline for the pricing computation.

    Raises:
        InsufficientMetricsError: If the trailing reach average is not positive.
    """
    days = clamp_period_days(period_days)
    since = (now or datetime.now(tz=UTC)) - timedelta(days=days)

    performance, insights = await asyncio.gather(
        data_source.fetch_trailing_performance(creator_id, since),
        _fetch_insights(data_source, creator_id, window_bucket(days)),
    )

    reach_average = validate_reach(performance.reach_average)
    engagement_percent = normalize_engagement_percent(performance.engagement_rate)
    profile_segment = (performance.profile_segment or "").strip() or DEFAULT_SEGMENT

    calibration: CalibrationSnapshot | None = None
    if calibration_enabled:
        cpm, calibration = await asyncio.gather(
            data_source.resolve_segment_cpm(profile_segment),
            _fetch_calibration(data_source, creator_id, profile_segment),
        )
    else:
        cpm = await data_source.resolve_segment_cpm(profile_segment)

    return ResolvedBaseline(
        reach_average=reach_average,
        engagement_percent=engagement_percent,
        profile_segment=profile_segment,
        cpm=cpm,
        insights=insights,
        calibration=calibration,
    )
