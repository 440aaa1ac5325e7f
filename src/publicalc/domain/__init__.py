"""Domain types, models, and errors for the pricing calculator."""

from publicalc.domain.errors import (
    InsufficientMetricsError,
    NoDeliverablesSelectedError,
    PricingError,
)
from publicalc.domain.models import (
    CalculatorParamsInput,
    CalibrationSnapshot,
    DealInsights,
    EventDetails,
    FormatQuantities,
    NormalizedCalculatorParams,
    PubliCalculatorResult,
    SegmentCpm,
    TrailingPerformance,
    derive_legacy_format,
)
from publicalc.domain.types import (
    CalculatorFormat,
    ConfidenceBand,
    CpmSource,
    DeliverableFormat,
    DeliveryType,
)

__all__ = [
    "CalculatorFormat",
    "CalculatorParamsInput",
    "CalibrationSnapshot",
    "ConfidenceBand",
    "CpmSource",
    "DealInsights",
    "DeliverableFormat",
    "DeliveryType",
    "EventDetails",
    "FormatQuantities",
    "InsufficientMetricsError",
    "NoDeliverablesSelectedError",
    "NormalizedCalculatorParams",
    "PricingError",
    "PubliCalculatorResult",
    "SegmentCpm",
    "TrailingPerformance",
    "derive_legacy_format",
]
