"""Tests for the structlog setup and Prometheus counters."""

from __future__ import annotations

import pytest
import structlog

from publicalc.observability import (
    CALCULATIONS,
    DEGRADED_READS,
    configure_logging,
    record_calculation,
    record_degraded_read,
)


class TestMetrics:
    def test_record_calculation_increments(self):
        before = CALCULATIONS.labels(outcome="success")._value.get()
        record_calculation("success")
        assert CALCULATIONS.labels(outcome="success")._value.get() == before + 1

    def test_record_degraded_read_increments(self):
        before = DEGRADED_READS.labels(collaborator="calibration")._value.get()
        record_degraded_read("calibration")
        assert DEGRADED_READS.labels(collaborator="calibration")._value.get() == before + 1


class TestConfigureLogging:
    def teardown_method(self) -> None:
        structlog.reset_defaults()
        structlog.contextvars.clear_contextvars()

    def test_production_renders_json(self, capsys):
        configure_logging(production=True)
        structlog.get_logger().info("calc_started", creator_id="c1")

        out = capsys.readouterr().out
        assert '"event": "calc_started"' in out
        assert '"service": "publicalc"' in out
        assert '"creator_id": "c1"' in out

    def test_production_filters_debug(self, capsys):
        configure_logging(production=True)
        structlog.get_logger().debug("noisy")

        assert capsys.readouterr().out == ""

    def test_mode_defaults_to_settings(self, capsys, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("PRODUCTION", "true")
        configure_logging()
        structlog.get_logger().info("from_settings")

        assert '"event": "from_settings"' in capsys.readouterr().out

    def test_development_renders_console(self, capsys):
        configure_logging(production=False)
        structlog.get_logger().debug("dev_event")

        assert "dev_event" in capsys.readouterr().out
