"""Unit tests for logging configuration module.

Tests verify that the logging configuration functions work correctly with different
scenarios including various log levels, formats, and file logging options.
"""

import importlib
import inspect
import logging
from unittest.mock import patch

import pytest

from fleetdesk.core import logging_config
from fleetdesk.core.logging_config import (
    DETAILED_FORMAT,
    JSON_FORMAT,
    MODULE_LOG_LEVELS,
    SIMPLE_FORMAT,
    _resolve_format,
    get_logger,
    setup_logging,
)


def _console_handler() -> logging.Handler:
    return next(h for h in logging.getLogger().handlers if type(h) is logging.StreamHandler)


class TestSetupLoggingLogLevels:
    """Test setup_logging with different log levels."""

    @pytest.mark.parametrize(
        "log_level,expected_level",
        [
            ("DEBUG", logging.DEBUG),
            ("INFO", logging.INFO),
            ("WARNING", logging.WARNING),
            ("ERROR", logging.ERROR),
            ("critical", logging.CRITICAL),
        ],
    )
    def test_setup_logging_with_different_levels(self, log_level, expected_level):
        """Test setup_logging configures correct console level."""
        setup_logging(log_level=log_level, enable_file=False)

        assert _console_handler().level == expected_level
        assert logging.getLogger().level == logging.DEBUG

    def test_setup_logging_replaces_existing_handlers(self):
        setup_logging(log_level="INFO", enable_file=False)
        setup_logging(log_level="INFO", enable_file=False)

        stream_handlers = [h for h in logging.getLogger().handlers if type(h) is logging.StreamHandler]
        assert len(stream_handlers) == 1


class TestSetupLoggingFormats:
    """Test setup_logging with different log formats."""

    @pytest.mark.parametrize(
        "log_format,expected_format",
        [
            ("simple", SIMPLE_FORMAT),
            ("detailed", DETAILED_FORMAT),
            ("json", JSON_FORMAT),
            ("unknown", DETAILED_FORMAT),
        ],
    )
    def test_resolve_format(self, log_format, expected_format):
        assert _resolve_format(log_format) == expected_format

    def test_formatter_is_applied(self):
        setup_logging(log_format="simple", enable_file=False)

        assert _console_handler().formatter._fmt == SIMPLE_FORMAT


class TestModuleLevels:
    def test_module_levels_are_applied(self):
        setup_logging(enable_file=False)

        for module_name, level in MODULE_LOG_LEVELS.items():
            assert logging.getLogger(module_name).level == logging.getLevelName(level)

    def test_third_party_noise_is_reduced(self):
        assert MODULE_LOG_LEVELS["sqlalchemy.engine"] == "WARNING"
        assert MODULE_LOG_LEVELS["httpx"] == "WARNING"


class TestFileLogging:
    def test_file_handler_added_when_enabled(self, tmp_path):
        with patch.object(logging_config, "ENABLE_FILE_LOGGING", True), patch.object(
            logging_config, "LOG_FILE_DIR", str(tmp_path / "logs")
        ):
            setup_logging(log_level="INFO", enable_file=True)

        file_handlers = [h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)]
        try:
            assert len(file_handlers) == 1
            assert (tmp_path / "logs" / "fleetdesk.log").exists()
        finally:
            for handler in file_handlers:
                logging.getLogger().removeHandler(handler)
                handler.close()

    def test_no_file_handler_when_disabled(self):
        with patch.object(logging_config, "ENABLE_FILE_LOGGING", True):
            setup_logging(enable_file=False)

        assert not any(isinstance(h, logging.FileHandler) for h in logging.getLogger().handlers)


def test_get_logger_returns_named_logger():
    logger = get_logger("fleetdesk.finance.invoicing")

    assert logger.name == "fleetdesk.finance.invoicing"
    assert logger is logging.getLogger("fleetdesk.finance.invoicing")


@pytest.mark.parametrize(
    "module_name",
    [
        "fleetdesk.core.monitoring",
        "fleetdesk.notifications.email",
        "fleetdesk.notifications.sms",
        "fleetdesk.notifications.transport",
        "fleetdesk.realtime.manager",
        "fleetdesk.storage.local",
    ],
)
def test_modules_log_through_get_logger(module_name):
    module = importlib.import_module(module_name)

    assert module.logger is get_logger(module_name)
    assert "logging.getLogger" not in inspect.getsource(module)
