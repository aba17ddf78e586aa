"""
Unit tests for the structlog configuration helpers.

Each test renders one event through the configured pipeline and checks the
printed line.
"""

from __future__ import annotations

import json

import pytest
import structlog

from railway_result import RailwaySettings, configure_from_settings, configure_structlog


class TestConfigureStructlog:
    def test_json_renderer_emits_one_object_per_line(self, capsys: pytest.CaptureFixture[str]) -> None:
        """
        GIVEN renderer="json"
        WHEN an event is logged
        THEN stdout holds a JSON object with event, level and timestamp.
        """
        configure_structlog("INFO", renderer="json", cache_logger_on_first_use=False)
        structlog.get_logger().info("chain.finished", steps=3)

        payload = json.loads(capsys.readouterr().out.strip())
        assert payload["event"] == "chain.finished"
        assert payload["steps"] == 3
        assert payload["level"] == "info"
        assert "timestamp" in payload

    def test_level_filters_lower_events(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_structlog("WARNING", renderer="json", cache_logger_on_first_use=False)
        log = structlog.get_logger()
        log.info("chain.hidden")
        log.warning("chain.visible")

        lines = capsys.readouterr().out.strip().splitlines()
        assert [json.loads(line)["event"] for line in lines] == ["chain.visible"]

    def test_invalid_level_falls_back_to_info(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_structlog("NONEXISTENT", renderer="json", cache_logger_on_first_use=False)
        log = structlog.get_logger()
        log.debug("chain.hidden")
        log.info("chain.visible")

        lines = capsys.readouterr().out.strip().splitlines()
        assert [json.loads(line)["event"] for line in lines] == ["chain.visible"]

    def test_console_renderer_is_the_default(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_structlog(cache_logger_on_first_use=False)
        structlog.get_logger().info("chain.console")
        assert "chain.console" in capsys.readouterr().out


class TestConfigureFromSettings:
    def test_applies_settings(self, capsys: pytest.CaptureFixture[str]) -> None:
        settings = RailwaySettings(log_level="ERROR", log_format="json", cache_loggers=False)
        configure_from_settings(settings)
        log = structlog.get_logger()
        log.warning("chain.hidden")
        log.error("chain.failed", reason="boom")

        payload = json.loads(capsys.readouterr().out.strip())
        assert payload["event"] == "chain.failed"
        assert payload["reason"] == "boom"
        assert structlog.get_config()["cache_logger_on_first_use"] is False
