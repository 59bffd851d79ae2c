"""Tests for structured logging setup."""

import json
import logging
from unittest.mock import patch

import pytest
import structlog

from thetvdb.logger import PACKAGE_LOGGER, censor_sensitive_data, configure_logging, get_logger


@pytest.fixture
def restore_logging():
    """Put the package logger and structlog back the way they were."""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    handlers = package_logger.handlers[:]
    level = package_logger.level
    propagate = package_logger.propagate
    yield
    package_logger.handlers[:] = handlers
    package_logger.setLevel(level)
    package_logger.propagate = propagate
    structlog.reset_defaults()


class TestCensorSensitiveData:
    """Tests for the censoring processor."""

    def test_masks_sensitive_keys(self):
        event = censor_sensitive_data(
            None,
            "info",
            {"event": "tvdb_login", "apikey": "key", "token": "jwt", "series_id": 318408},
        )
        assert event == {
            "event": "tvdb_login",
            "apikey": "***",
            "token": "***",
            "series_id": 318408,
        }

    def test_key_match_is_case_insensitive(self):
        event = censor_sensitive_data(None, "info", {"TVDB_API_KEY": "key"})
        assert event["TVDB_API_KEY"] == "***"

    def test_nested_values(self):
        event = censor_sensitive_data(
            None,
            "debug",
            {
                "event": "tvdb_request",
                "headers": {"Authorization": "Bearer jwt", "Accept-Language": "en"},
                "items": [{"secret": "s"}, "plain"],
            },
        )
        assert event["headers"] == {"Authorization": "***", "Accept-Language": "en"}
        assert event["items"] == [{"secret": "***"}, "plain"]

    def test_bearer_in_message(self):
        event = censor_sensitive_data(
            None,
            "warning",
            {
                "event": "tvdb_http_error",
                "error": "rejected header Bearer eyJhbGci.x.y for /series",
            },
        )
        assert event["error"] == "rejected header Bearer *** for /series"

    def test_author_is_not_masked(self):
        event = censor_sensitive_data(None, "info", {"image_author": 1})
        assert event["image_author"] == 1


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_sets_level_and_handler(self, restore_logging):
        configure_logging("debug")

        package_logger = logging.getLogger(PACKAGE_LOGGER)
        assert package_logger.level == logging.DEBUG
        assert len(package_logger.handlers) == 1
        assert not package_logger.propagate

    def test_root_logger_untouched(self, restore_logging):
        root_logger = logging.getLogger()
        handlers = root_logger.handlers[:]

        configure_logging("debug")

        assert root_logger.handlers == handlers

    def test_level_from_settings(self, restore_logging):
        with patch("thetvdb.logger.settings") as mock_settings:
            mock_settings.log_level = "WARNING"
            mock_settings.is_production = True

            configure_logging()

        assert logging.getLogger(PACKAGE_LOGGER).level == logging.WARNING

    def test_json_output_in_production(self, restore_logging, capsys):
        with patch("thetvdb.logger.settings") as mock_settings:
            mock_settings.is_production = True
            configure_logging("INFO")

        get_logger("thetvdb.test").info("tvdb_login", token="jwt", expires_at="2020-01-02")

        line = capsys.readouterr().out.strip().splitlines()[-1]
        record = json.loads(line)
        assert record["event"] == "tvdb_login"
        assert record["level"] == "info"
        assert record["logger"] == "thetvdb.test"
        assert record["token"] == "***"
        assert "timestamp" in record

    def test_below_level_is_dropped(self, restore_logging, capsys):
        with patch("thetvdb.logger.settings") as mock_settings:
            mock_settings.is_production = True
            configure_logging("WARNING")

        get_logger("thetvdb.test").info("tvdb_request")

        assert capsys.readouterr().out == ""
