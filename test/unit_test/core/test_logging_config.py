"""Unit tests for logging configuration module.

Tests verify that the logging configuration functions work correctly with different
scenarios including various log levels, formats, and file logging options.
"""

import logging
from unittest.mock import patch

import pytest

from cdi_platform.core.logging_config import (
    DETAILED_FORMAT,
    JSON_FORMAT,
    MODULE_LOG_LEVELS,
    SIMPLE_FORMAT,
    get_logger,
    setup_logging,
)


def _console_handler():
    return next(
        (
            h
            for h in logging.getLogger().handlers
            if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
        ),
        None,
    )


def _file_handler():
    return next((h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)), None)


class TestSetupLoggingLogLevels:
    """Test setup_logging with different log levels."""

    @pytest.mark.parametrize(
        "log_level,expected_level",
        [
            ("DEBUG", logging.DEBUG),
            ("INFO", logging.INFO),
            ("WARNING", logging.WARNING),
            ("ERROR", logging.ERROR),
            ("debug", logging.DEBUG),  # Test lowercase
        ],
    )
    def test_setup_logging_with_different_levels(self, log_level, expected_level):
        setup_logging(log_level=log_level, enable_file=False)

        console_handler = _console_handler()
        assert console_handler is not None
        assert console_handler.level == expected_level

    def test_root_logger_filters_at_handler_level(self):
        setup_logging(log_level="ERROR", enable_file=False)
        assert logging.getLogger().level == logging.DEBUG


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
    def test_setup_logging_with_different_formats(self, log_format, expected_format):
        setup_logging(log_format=log_format, enable_file=False)

        console_handler = _console_handler()
        assert console_handler is not None
        assert console_handler.formatter._fmt == expected_format
        assert console_handler.formatter.datefmt == "%Y-%m-%d %H:%M:%S"


class TestSetupLoggingFileHandling:
    """Test setup_logging file logging functionality."""

    def test_file_handler_created_when_enabled(self, tmp_path):
        log_dir = tmp_path / "logs"
        with patch("cdi_platform.core.logging_config.LOG_FILE_DIR", str(log_dir)), patch(
            "cdi_platform.core.logging_config.ENABLE_FILE_LOGGING", True
        ):
            setup_logging(log_level="ERROR", enable_file=True)

        file_handler = _file_handler()
        try:
            assert file_handler is not None
            assert file_handler.level == logging.DEBUG
            assert (log_dir / "cdi_platform.log").exists()
        finally:
            setup_logging(enable_file=False)

    def test_file_handler_requires_environment_switch(self, tmp_path):
        with patch("cdi_platform.core.logging_config.LOG_FILE_DIR", str(tmp_path)), patch(
            "cdi_platform.core.logging_config.ENABLE_FILE_LOGGING", False
        ):
            setup_logging(enable_file=True)

        assert _file_handler() is None

    def test_file_handler_absent_when_disabled(self):
        setup_logging(enable_file=False)
        assert _file_handler() is None


class TestSetupLoggingHandlerManagement:
    """Test setup_logging handler management."""

    def test_repeated_setup_does_not_duplicate_handlers(self):
        setup_logging(enable_file=False)
        first = len(logging.getLogger().handlers)
        setup_logging(enable_file=False)
        assert len(logging.getLogger().handlers) == first


class TestModuleLogLevels:
    """Test module specific levels."""

    def test_module_levels_applied(self):
        setup_logging(enable_file=False)
        for module_name, level in MODULE_LOG_LEVELS.items():
            assert logging.getLogger(module_name).level == logging.getLevelName(level)

    def test_third_party_libraries_are_quiet(self):
        assert MODULE_LOG_LEVELS["sqlalchemy.engine"] == "WARNING"
        assert MODULE_LOG_LEVELS["httpx"] == "WARNING"
        assert MODULE_LOG_LEVELS["PIL"] == "WARNING"


class TestGetLogger:
    def test_returns_named_logger(self):
        logger = get_logger("cdi_platform.services.sms")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "cdi_platform.services.sms"
