"""Monetary rounding shared by the pricing stages.

All monetary values are quantized to two decimal places with ROUND_HALF_UP.
"""

from decimal import ROUND_HALF_UP, Decimal

# Precision: all monetary values quantized to 2 decimal places
TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0")


def round_currency(value: Decimal) -> Decimal:
    """Quantize *value* to two decimal places, half away from zero."""
    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def round_non_negative(value: Decimal) -> Decimal:
    """Quantize *value* to two decimal places, clamping negatives to zero."""
    return round_currency(max(value, ZERO))
