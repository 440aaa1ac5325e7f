"""Tests for Pydantic domain models: quantities, params, collaborator records, results."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from publicalc.domain.models import (
    CalibrationSnapshot,
    DealInsights,
    FormatQuantities,
    NormalizedCalculatorParams,
    SegmentCpm,
    derive_legacy_format,
)
from publicalc.domain.types import (
    CalculatorFormat,
    ConfidenceBand,
    CpmSource,
    DeliverableFormat,
    DeliveryType,
    LinkQuality,
)


class TestFormatQuantities:
    """Tests for the FormatQuantities model."""

    def test_defaults_to_zero(self):
        q = FormatQuantities()
        assert q.items() == [
            (DeliverableFormat.REELS, 0),
            (DeliverableFormat.POSTS, 0),
            (DeliverableFormat.STORIES, 0),
        ]
        assert q.has_any() is False

    def test_get_by_format(self):
        q = FormatQuantities(reels=2, stories=5)
        assert q.get(DeliverableFormat.REELS) == 2
        assert q.get(DeliverableFormat.POSTS) == 0
        assert q.get(DeliverableFormat.STORIES) == 5
        assert q.has_any() is True

    @pytest.mark.parametrize("value", [-1, 21], ids=["negative", "above_max"])
    def test_rejects_out_of_range(self, value: int):
        with pytest.raises(ValidationError):
            FormatQuantities(reels=value)

    def test_frozen_immutability(self):
        q = FormatQuantities(reels=1)
        with pytest.raises(ValidationError):
            q.reels = 3  # type: ignore[misc]


class TestDeriveLegacyFormat:
    """Tests for the single legacy format label."""

    @pytest.mark.parametrize(
        ("quantities", "expected"),
        [
            (FormatQuantities(reels=1), CalculatorFormat.REELS),
            (FormatQuantities(posts=1), CalculatorFormat.POSTS),
            (FormatQuantities(stories=1), CalculatorFormat.STORIES),
            (FormatQuantities(reels=2), CalculatorFormat.PACKAGE),
            (FormatQuantities(reels=1, stories=1), CalculatorFormat.PACKAGE),
            (FormatQuantities(), CalculatorFormat.PACKAGE),
        ],
        ids=["one_reel", "one_post", "one_story", "two_reels", "mixed", "empty"],
    )
    def test_content_labels(self, quantities: FormatQuantities, expected: CalculatorFormat):
        assert derive_legacy_format(DeliveryType.CONTENT, False, quantities) == expected

    def test_event_always_event(self):
        result = derive_legacy_format(DeliveryType.EVENT, False, FormatQuantities(reels=1))
        assert result == CalculatorFormat.EVENT

    def test_package_mode_wins_over_quantities(self):
        result = derive_legacy_format(DeliveryType.CONTENT, True, FormatQuantities(reels=1))
        assert result == CalculatorFormat.PACKAGE

    def test_normalized_params_expose_format(self):
        params = NormalizedCalculatorParams(format_quantities=FormatQuantities(posts=1))
        assert params.format == CalculatorFormat.POSTS
        assert params.model_dump()["format"] == CalculatorFormat.POSTS


class TestCollaboratorRecords:
    """Tests for records returned by the pricing collaborators."""

    def test_deal_insights_float_coerced_to_exact_decimal(self):
        insights = DealInsights(average_deal_value=1234.1, total_deals=2)
        assert insights.average_deal_value == Decimal("1234.1")

    def test_deal_insights_value_optional(self):
        assert DealInsights().average_deal_value is None

    def test_segment_cpm_accepts_float(self):
        cpm = SegmentCpm(value=18.5, source=CpmSource.DYNAMIC)
        assert cpm.value == Decimal("18.5")
        assert cpm.source == CpmSource.DYNAMIC

    def test_neutral_snapshot(self):
        snapshot = CalibrationSnapshot.neutral()
        assert snapshot.factor_raw == 1.0
        assert snapshot.confidence == 0.0
        assert snapshot.confidence_band == ConfidenceBand.LOW
        assert snapshot.link_quality == LinkQuality.LOW
        assert snapshot.window_days_segment == 180
        assert snapshot.window_days_creator == 365

    def test_snapshot_rejects_confidence_above_one(self):
        with pytest.raises(ValidationError):
            CalibrationSnapshot(confidence=1.5)
