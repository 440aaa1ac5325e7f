"""Tests for fair-value component assembly."""

from decimal import Decimal

import pytest

from publicalc.domain.errors import NoDeliverablesSelectedError
from publicalc.domain.models import EventDetails, FormatQuantities, NormalizedCalculatorParams
from publicalc.domain.types import DeliveryType, EventDuration, TravelTier
from publicalc.pricing.assembler import assemble_value, calculate_base_value, weighted_units

REACH = Decimal("10000")
CPM = Decimal("20")


class TestBaseValue:
    @pytest.mark.parametrize(
        ("reach", "cpm", "expected"),
        [
            (Decimal("10000"), Decimal("20"), Decimal("200")),
            (Decimal("1000"), Decimal("20"), Decimal("20")),
            (Decimal("3333"), Decimal("7"), Decimal("23.331")),
        ],
        ids=["10k", "1k", "unrounded"],
    )
    def test_formula(self, reach: Decimal, cpm: Decimal, expected: Decimal):
        assert calculate_base_value(reach, cpm) == expected

    def test_weighted_units(self):
        units = weighted_units(FormatQuantities(reels=2, posts=1, stories=3))
        assert units == Decimal("6.2")


class TestContentAssembly:
    """Tests for content delivery."""

    def test_one_reel(self):
        params = NormalizedCalculatorParams(format_quantities=FormatQuantities(reels=1))
        components = assemble_value(params, REACH, CPM, Decimal("1"))
        assert components.content_units == Decimal("1.4")
        assert components.content_justo == Decimal("280.00")
        assert components.valor_justo_base == Decimal("280.00")
        assert components.logistics_suggested == Decimal("0")

    def test_mixed_package(self):
        params = NormalizedCalculatorParams(
            format_quantities=FormatQuantities(reels=2, posts=1, stories=3)
        )
        components = assemble_value(params, REACH, CPM, Decimal("1"))
        assert components.content_justo == Decimal("1240.00")

    def test_legacy_package_uses_package_units(self):
        params = NormalizedCalculatorParams(legacy_package_mode=True)
        components = assemble_value(params, REACH, CPM, Decimal("1"))
        assert components.content_units == Decimal("1.6")
        assert components.content_justo == Decimal("320.00")

    def test_common_multiplier_scales_value(self):
        params = NormalizedCalculatorParams(format_quantities=FormatQuantities(reels=1))
        components = assemble_value(params, REACH, CPM, Decimal("1.5"))
        assert components.content_justo == Decimal("420.00")

    def test_rounds_half_up(self):
        params = NormalizedCalculatorParams(format_quantities=FormatQuantities(stories=1))
        components = assemble_value(params, Decimal("3333"), Decimal("7"), Decimal("1"))
        assert components.content_justo == Decimal("18.66")
        assert components.content_justo.as_tuple().exponent == -2

    def test_no_deliverables_raises(self):
        params = NormalizedCalculatorParams(format_quantities=FormatQuantities())
        with pytest.raises(NoDeliverablesSelectedError):
            assemble_value(params, REACH, CPM, Decimal("1"))


class TestEventAssembly:
    """Tests for event delivery."""

    def test_presence_coverage_and_logistics(self):
        params = NormalizedCalculatorParams(
            delivery_type=DeliveryType.EVENT,
            event_details=EventDetails(
                duration_hours=EventDuration.EIGHT_HOURS,
                travel_tier=TravelTier.DOMESTIC,
                hotel_nights=2,
            ),
            event_coverage_quantities=FormatQuantities(stories=2),
        )
        components = assemble_value(params, REACH, CPM, Decimal("1"))

        assert components.content_justo == Decimal("0")
        assert components.event_presence_justo == Decimal("440.00")
        assert components.coverage_units == Decimal("1.6")
        assert components.coverage_justo == Decimal("224.00")
        assert components.travel_cost == Decimal("1500.00")
        assert components.hotel_cost == Decimal("900.00")
        assert components.logistics_suggested == Decimal("2400.00")
        # Logistics stay outside the fee
        assert components.valor_justo_base == Decimal("664.00")

    def test_event_without_coverage_or_deliverables_is_valid(self):
        params = NormalizedCalculatorParams(delivery_type=DeliveryType.EVENT)
        components = assemble_value(params, REACH, CPM, Decimal("1"))
        assert components.event_presence_justo == Decimal("300.00")
        assert components.coverage_justo == Decimal("0")
        assert components.travel_cost == Decimal("0")
