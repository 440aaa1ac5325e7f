"""Prometheus metrics for the pricing calculator.

Provides:
- ``CALCULATIONS``: Counter of calculator runs labelled by outcome.
- ``DEGRADED_READS``: Counter of collaborator reads that fell back to neutral
  defaults, labelled by collaborator.

Exposing the registry is the host process's job; this module only records.
"""

from __future__ import annotations

from prometheus_client import Counter

CALCULATIONS: Counter = Counter(
    "publicalc_calculations_total",
    "Total number of pricing calculations by outcome",
    ["outcome"],
)

DEGRADED_READS: Counter = Counter(
    "publicalc_degraded_reads_total",
    "Collaborator reads that degraded to neutral defaults",
    ["collaborator"],
)


def record_calculation(outcome: str) -> None:
    """Increment the calculation counter for *outcome*.

    Args:
        outcome: ``"success"`` or the ``kind`` of the domain error raised.
    """
    CALCULATIONS.labels(outcome=outcome).inc()


def record_degraded_read(collaborator: str) -> None:
    DEGRADED_READS.labels(collaborator=collaborator).inc()
