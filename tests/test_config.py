"""Tests for centralized Settings and the get_settings cache."""

from __future__ import annotations

import pytest

from publicalc.config import Settings, get_settings


class TestSettingsDefaults:
    """Verify that Settings fields have the expected default values."""

    def test_settings_defaults(self) -> None:
        s = Settings(_env_file=None)  # type: ignore[call-arg]

        assert s.production is False
        assert s.brand_risk_enabled is True
        assert s.calibration_enabled is False
        assert s.default_period_days == 90
        assert s.proposal_pricing_enabled is True
        assert s.base_currency == "BRL"

    def test_settings_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PRODUCTION", "true")
        monkeypatch.setenv("CALIBRATION_ENABLED", "1")
        monkeypatch.setenv("DEFAULT_PERIOD_DAYS", "30")

        s = Settings(_env_file=None)  # type: ignore[call-arg]

        assert s.production is True
        assert s.calibration_enabled is True
        assert s.default_period_days == 30


class TestGetSettings:
    def test_cached(self) -> None:
        assert get_settings() is get_settings()

    def test_cache_clear_rereads_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        first = get_settings()
        monkeypatch.setenv("BRAND_RISK_ENABLED", "false")
        get_settings.cache_clear()

        second = get_settings()

        assert first.brand_risk_enabled is True
        assert second.brand_risk_enabled is False

    @pytest.mark.parametrize("value", ["0", "400", "abc"])
    def test_invalid_period_exits(self, monkeypatch: pytest.MonkeyPatch, value: str) -> None:
        monkeypatch.setenv("DEFAULT_PERIOD_DAYS", value)

        with pytest.raises(SystemExit) as exc_info:
            get_settings()

        assert exc_info.value.code == 1
