"""
Unit Tests for Centralized Logging.

Tests the logging configuration, structured fields, and source handling.
"""

import logging
from unittest.mock import MagicMock, patch

import pytest

from planner.backend.core.config_schema import LoggingSchema
from planner.backend.core.logging import (
    VALID_SOURCES,
    get_logger,
    log_with_source,
    setup_logging,
)


@pytest.fixture
def logging_config():
    """Real LoggingSchema with file logging pointed at a temp path."""
    return LoggingSchema(
        level="INFO",
        format="json",
        handlers={
            "console": {"enabled": True},
            "file": {
                "enabled": False,
                "path": "logs/system.jsonl",
                "max_bytes": 10485760,
                "backup_count": 5,
            },
        },
    )


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    level, handlers = root.level, root.handlers[:]
    yield
    root.setLevel(level)
    root.handlers[:] = handlers


class TestValidSources:
    def test_includes_mobile_client(self):
        assert "mobile" in VALID_SOURCES

    def test_valid_sources_is_frozenset(self):
        assert isinstance(VALID_SOURCES, frozenset)


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_uses_config_defaults(self, logging_config):
        with patch("planner.backend.core.logging._load_logging_config", return_value=logging_config):
            setup_logging()

        assert logging.getLogger().level == logging.INFO

    def test_override_takes_precedence(self, logging_config):
        with patch("planner.backend.core.logging._load_logging_config", return_value=logging_config):
            setup_logging(level="DEBUG")

        assert logging.getLogger().level == logging.DEBUG

    def test_console_handler(self, logging_config):
        with patch("planner.backend.core.logging._load_logging_config", return_value=logging_config):
            setup_logging(format_type="console")

        handler_types = [type(h).__name__ for h in logging.getLogger().handlers]
        assert handler_types == ["StreamHandler"]

    def test_file_handler_under_project_root(self, tmp_path, logging_config):
        with patch("planner.backend.core.logging._load_logging_config", return_value=logging_config), \
             patch("planner.backend.core.config.find_project_root", return_value=tmp_path):
            setup_logging(enable_console=False, enable_file_logging=True)

        handlers = logging.getLogger().handlers
        assert [type(h).__name__ for h in handlers] == ["RotatingFileHandler"]
        assert (tmp_path / "logs").is_dir()
        for handler in handlers:
            handler.close()


class TestGetLogger:
    def test_returns_structlog_logger(self):
        logger = get_logger("test.module")
        assert hasattr(logger, "bind")
        assert hasattr(logger, "info")


class TestLogWithSource:
    """Tests for log_with_source helper function."""

    def test_adds_source_field(self):
        logger = MagicMock()

        log_with_source(logger, "mobile", "info", "Notes loaded", count=3)

        logger.info.assert_called_once_with("Notes loaded", source="mobile", count=3)

    def test_level_is_case_insensitive(self):
        logger = MagicMock()

        log_with_source(logger, "cli", "WARNING", "Slow request")

        logger.warning.assert_called_once()

    def test_raises_on_invalid_level(self):
        logger = get_logger("test")

        with pytest.raises(AttributeError):
            log_with_source(logger, "web", "nonexistent_level", "Test")
