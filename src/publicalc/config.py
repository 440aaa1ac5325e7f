"""Runtime settings for the pricing calculator.

Values come from environment variables (case-insensitive, no prefix) or a
local ``.env`` file. The calculator reads them through ``get_settings()`` so a
host process can flip feature flags without passing them on every call.

Keep this module free of ``publicalc`` imports: the observability and pricing
packages both import it.
"""

from __future__ import annotations

import sys
from functools import lru_cache

import structlog
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = structlog.get_logger()


class Settings(BaseSettings):
    """Pricing calculator settings.

    Attributes:
        production: Render JSON logs at INFO instead of console logs at DEBUG.
        brand_risk_enabled: Apply the brand-risk/strategy multiplier and its floors.
        calibration_enabled: Blend the historical calibration factor into prices.
        default_period_days: Metrics lookback used when a caller passes none.
        proposal_pricing_enabled: Price brand proposals through the calculator.
        base_currency: Currency the CPM tables are quoted in.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    production: bool = False

    brand_risk_enabled: bool = True
    calibration_enabled: bool = False

    default_period_days: int = Field(default=90, gt=0, le=365)

    proposal_pricing_enabled: bool = True
    base_currency: str = "BRL"


@lru_cache
def get_settings() -> Settings:
    """Load settings once per process.

    Tests reset the cache with ``get_settings.cache_clear()``.

    Returns:
        The loaded ``Settings``.
    """
    try:
        return Settings()
    except ValidationError as exc:
        logger.error("settings_validation_failed", errors=exc.errors())
        sys.exit(1)
