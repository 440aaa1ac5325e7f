"""Shared pytest fixtures for the pricing calculator test suite."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from publicalc.config import get_settings
from publicalc.domain.models import (
    CalibrationSnapshot,
    DealInsights,
    SegmentCpm,
    TrailingPerformance,
)
from publicalc.domain.types import ConfidenceBand, CpmSource


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> None:
    """Clear get_settings lru_cache so env overrides apply per test."""
    get_settings.cache_clear()


@pytest.fixture
def sample_performance() -> TrailingPerformance:
    """10k average reach with no engagement so the common multiplier stays at 1."""
    return TrailingPerformance(
        reach_average=10000,
        engagement_rate=0,
        profile_segment="lifestyle",
    )


@pytest.fixture
def sample_cpm() -> SegmentCpm:
    return SegmentCpm(value=20, source=CpmSource.SEED)


@pytest.fixture
def sample_insights() -> DealInsights:
    return DealInsights(average_deal_value=1234.5, total_deals=3)


@pytest.fixture
def high_confidence_snapshot() -> CalibrationSnapshot:
    return CalibrationSnapshot(
        factor_raw=1.1,
        confidence=0.9,
        confidence_band=ConfidenceBand.HIGH,
        segment_sample_size=40,
        creator_sample_size=12,
    )


@pytest.fixture
def data_source(
    sample_performance: TrailingPerformance,
    sample_cpm: SegmentCpm,
    sample_insights: DealInsights,
    high_confidence_snapshot: CalibrationSnapshot,
) -> AsyncMock:
    """An AsyncMock standing in for the read-only pricing collaborators."""
    source = AsyncMock()
    source.fetch_trailing_performance.return_value = sample_performance
    source.fetch_deal_insights.return_value = sample_insights
    source.resolve_segment_cpm.return_value = sample_cpm
    source.resolve_calibration_snapshot.return_value = high_confidence_snapshot
    return source
