"""Logging and metrics helpers for the pricing calculator."""

from publicalc.observability.logging import configure_logging
from publicalc.observability.metrics import (
    CALCULATIONS,
    DEGRADED_READS,
    record_calculation,
    record_degraded_read,
)

__all__ = [
    "CALCULATIONS",
    "DEGRADED_READS",
    "configure_logging",
    "record_calculation",
    "record_degraded_read",
]
