"""Assembly of pre-calibration fair-value components.

``base_value = reach_average / 1000 * cpm`` is scaled by the common
multiplier and by unit counts for content, event presence and optional event
coverage. Travel and hotel costs are suggested alongside the fee and never
added to it.
"""

from dataclasses import dataclass
from decimal import Decimal

from publicalc.domain.errors import NoDeliverablesSelectedError
from publicalc.domain.models import FormatQuantities, NormalizedCalculatorParams
from publicalc.domain.types import DeliveryType
from publicalc.pricing.money import ZERO, round_currency
from publicalc.pricing.multipliers import DEFAULT_MULTIPLIER_TABLES, MultiplierTables


@dataclass(frozen=True)
class ValueComponents:
    """Pre-calibration fair-value components and logistics suggestions.

    Attributes:
        base_value: Reach-derived value at the segment CPM.
        content_units: Weighted content units (package units in package mode).
        content_justo: Fair value of the content deliverables.
        event_presence_justo: Fair value of in-person presence.
        coverage_units: Weighted units of optional event coverage.
        coverage_justo: Fair value of event coverage after the coverage discount.
        travel_cost: Suggested travel cost.
        hotel_cost: Suggested hotel cost.
    """

    base_value: Decimal
    content_units: Decimal
    content_justo: Decimal
    event_presence_justo: Decimal
    coverage_units: Decimal
    coverage_justo: Decimal
    travel_cost: Decimal
    hotel_cost: Decimal

    @property
    def valor_justo_base(self) -> Decimal:
        """Sum of the fee components before calibration."""
        return self.content_justo + self.event_presence_justo + self.coverage_justo

    @property
    def logistics_suggested(self) -> Decimal:
        return self.travel_cost + self.hotel_cost


def calculate_base_value(reach_average: Decimal, cpm: Decimal) -> Decimal:
    """Formula: (reach_average / 1000) * cpm, unrounded."""
    return reach_average / Decimal("1000") * cpm


def weighted_units(
    quantities: FormatQuantities,
    tables: MultiplierTables = DEFAULT_MULTIPLIER_TABLES,
) -> Decimal:
    """Sum each format's quantity times its weight."""
    return sum(
        (tables.format_weights[fmt] * qty for fmt, qty in quantities.items()),
        ZERO,
    )


def assemble_value(
    params: NormalizedCalculatorParams,
    reach_average: Decimal,
    cpm: Decimal,
    common_multiplier: Decimal,
    tables: MultiplierTables = DEFAULT_MULTIPLIER_TABLES,
) -> ValueComponents:
    """Compute the pre-calibration fair-value components.

    Args:
        params: Normalized calculator params.
        reach_average: Trailing reach average.
        cpm: Baseline CPM for the creator's segment.
        common_multiplier: Product of the applicable multipliers.
        tables: Multiplier tables to read weights and costs from.

    Returns:
        The fair-value components and logistics suggestions.

    Raises:
        NoDeliverablesSelectedError: If content delivery has no deliverables.
    """
    base_value = calculate_base_value(reach_average, cpm)
    scaled = base_value * common_multiplier

    content_units = ZERO
    content_justo = ZERO
    event_presence_justo = ZERO
    coverage_units = ZERO
    coverage_justo = ZERO
    travel_cost = ZERO
    hotel_cost = ZERO

    if params.delivery_type == DeliveryType.CONTENT:
        if params.legacy_package_mode:
            content_units = tables.package_units
        else:
            content_units = weighted_units(params.format_quantities, tables)
        if content_units <= ZERO:
            raise NoDeliverablesSelectedError()
        content_justo = round_currency(scaled * content_units)
    else:
        details = params.event_details
        event_presence_justo = round_currency(
            scaled * tables.event_duration[details.duration_hours]
        )
        coverage_units = weighted_units(params.event_coverage_quantities, tables)
        if coverage_units > ZERO:
            coverage_justo = round_currency(
                scaled * coverage_units * tables.coverage_discount
            )
        travel_cost = round_currency(tables.travel_cost[details.travel_tier])
        hotel_cost = round_currency(tables.hotel_night_cost * details.hotel_nights)

    return ValueComponents(
        base_value=base_value,
        content_units=content_units,
        content_justo=content_justo,
        event_presence_justo=event_presence_justo,
        coverage_units=coverage_units,
        coverage_justo=coverage_justo,
        travel_cost=travel_cost,
        hotel_cost=hotel_cost,
    )
