"""Domain-specific exception classes for the pricing calculator."""


class PricingError(Exception):
    """Base class for all domain errors raised by the pricing calculator.

    Attributes:
        kind: Machine-checkable error identifier.
        status_code: HTTP-equivalent status a caller should surface.
        client_correctable: Whether the caller can fix the request and retry.
    """

    kind: str = "pricing_error"
    status_code: int = 500
    client_correctable: bool = False


class InsufficientMetricsError(PricingError):
    """Raised when the creator has no positive trailing reach average.

    Attributes:
        reach_average: The rejected reach value.
    """

    kind = "insufficient_metrics"
    status_code = 422
    client_correctable = True

    def __init__(self, reach_average: object) -> None:
        self.reach_average = reach_average
        super().__init__(
            "Insufficient metrics to calculate a suggested price "
            f"(trailing reach average: {reach_average}). "
            "Publish new content and try again."
        )


class NoDeliverablesSelectedError(PricingError):
    """Raised when content delivery is requested with zero deliverables."""

    kind = "no_deliverables_selected"
    status_code = 400
    client_correctable = True

    def __init__(self) -> None:
        super().__init__(
            "Select at least one deliverable (reels, posts or stories) "
            "to price a content deal."
        )
