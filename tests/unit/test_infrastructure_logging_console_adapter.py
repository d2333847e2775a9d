"""Unit tests for structlog configuration."""

import json

import pytest
import structlog

from finsync.infrastructure.logging import configure_logging
from tests.conftest import make_settings


@pytest.mark.unit
class TestConfigureLogging:
    def test_json_output_outside_development(self, capsys):
        configure_logging(make_settings(environment="testing"))

        structlog.get_logger("finsync.test").info("sync_started", provider="hotmart")

        line = capsys.readouterr().out.strip().splitlines()[-1]
        event = json.loads(line)
        assert event["event"] == "sync_started"
        assert event["provider"] == "hotmart"
        assert event["level"] == "info"
        assert "timestamp" in event

    def test_level_filtering(self, capsys):
        configure_logging(make_settings(environment="testing", log_level="WARNING"))
        logger = structlog.get_logger("finsync.test")

        logger.info("quiet")
        logger.warning("loud")

        output = capsys.readouterr().out
        assert "quiet" not in output
        assert "loud" in output

    def test_console_renderer_in_development(self, capsys):
        configure_logging(make_settings(environment="development"))

        structlog.get_logger("finsync.test").info("sync_started", provider="hotmart")

        output = capsys.readouterr().out
        assert "sync_started" in output
        with pytest.raises(json.JSONDecodeError):
            json.loads(output.strip())
