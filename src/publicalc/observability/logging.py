"""structlog setup for processes that embed the pricing calculator.

The calculator itself only calls ``structlog.get_logger()``; hosts call
``configure_logging`` once at startup to pick the renderer.
"""

from __future__ import annotations

import logging

import structlog

from publicalc.config import get_settings

SERVICE_NAME = "publicalc"


def configure_logging(production: bool | None = None) -> None:
    """Install the structlog pipeline.

    Args:
        production: JSON lines at INFO when true, coloured console output at
            DEBUG otherwise. Defaults to ``Settings.production``.
    """
    if production is None:
        production = get_settings().production

    renderer: structlog.types.Processor
    if production:
        renderer = structlog.processors.JSONRenderer()
        level = logging.INFO
    else:
        renderer = structlog.dev.ConsoleRenderer()
        level = logging.DEBUG

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )
    structlog.contextvars.bind_contextvars(service=SERVICE_NAME)
