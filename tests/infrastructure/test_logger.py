#!/usr/bin/env python3
"""Tests for the Logger module."""

import io
import logging

import pytest

from viila.infrastructure import config_manager as config_module
from viila.infrastructure import logger as logger_module
from viila.infrastructure.config_manager import ConfigManager
from viila.infrastructure.logger import (
    LogLevel,
    Logger,
    configure_loggers,
    get_logger,
    set_logger,
)


@pytest.fixture
def stream():
    return io.StringIO()


@pytest.fixture
def capturing_logger(stream):
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
    return Logger(name="viila.test", level=LogLevel.DEBUG, handlers=[handler])


@pytest.fixture
def isolated_loggers(monkeypatch):
    """Run with an empty logger cache."""
    monkeypatch.setattr(logger_module, "_loggers", {})


class TestLogLevel:
    """Tests for LogLevel enum."""

    def test_log_levels(self):
        assert LogLevel.DEBUG == logging.DEBUG
        assert LogLevel.WARNING == logging.WARNING
        assert LogLevel.CRITICAL == logging.CRITICAL

    def test_log_level_ordering(self):
        assert LogLevel.DEBUG < LogLevel.INFO < LogLevel.WARNING < LogLevel.ERROR


class TestLogger:
    """Tests for Logger class."""

    def test_logger_creation(self):
        logger = Logger(name="viila.test", level=LogLevel.DEBUG)
        assert logger.name == "viila.test"
        assert logger.logger.level == LogLevel.DEBUG
        assert logger.logger.propagate is False

    def test_logger_with_string_level(self):
        logger = Logger(name="viila.test", level="error")
        assert logger.logger.level == LogLevel.ERROR

    def test_default_console_handler(self):
        logger = Logger(name="viila.test")
        assert len(logger.logger.handlers) == 1
        assert isinstance(logger.logger.handlers[0], logging.StreamHandler)

    def test_message_with_context(self, capturing_logger, stream):
        capturing_logger.debug("Moved item", path="/a.txt")
        assert stream.getvalue().strip() == "DEBUG Moved item | path=/a.txt"

    def test_message_without_context(self, capturing_logger, stream):
        capturing_logger.warning("Plain")
        assert stream.getvalue().strip() == "WARNING Plain"

    def test_level_filtering(self, capturing_logger, stream):
        capturing_logger.set_level("WARNING")
        capturing_logger.debug("hidden")
        capturing_logger.warning("shown")
        assert "hidden" not in stream.getvalue()
        assert "shown" in stream.getvalue()

    def test_add_context(self, capturing_logger, stream):
        with capturing_logger.add_context(operation="empty"):
            capturing_logger.debug("Deleting", path="/a/")
        capturing_logger.debug("After")

        lines = stream.getvalue().strip().splitlines()
        assert lines[0] == "DEBUG Deleting | operation=empty path=/a/"
        assert lines[1] == "DEBUG After"

    def test_nested_context(self, capturing_logger, stream):
        with capturing_logger.add_context(a=1):
            with capturing_logger.add_context(b=2):
                capturing_logger.debug("Nested")
        assert "a=1 b=2" in stream.getvalue()

    def test_file_handler(self, tmp_path):
        logger = Logger(name="viila.test.file", level=LogLevel.INFO, handlers=[])
        log_file = tmp_path / "viila.log"
        handler = logger.create_file_handler(log_file)
        logger.add_handler(handler)

        logger.warning("To file", key="value")
        handler.flush()
        logger.logger.removeHandler(handler)
        handler.close()

        assert "To file | key=value" in log_file.read_text()

    def test_file_handler_added_once(self, tmp_path):
        logger = Logger(name="viila.test.once", level=LogLevel.INFO, handlers=[])
        log_file = tmp_path / "viila.log"

        logger.configure("INFO", str(log_file))
        logger.configure("DEBUG", str(log_file))
        logger.warning("Written once")

        handlers = list(logger.logger.handlers)
        for handler in handlers:
            handler.close()
            logger.logger.removeHandler(handler)

        assert len(handlers) == 1
        assert log_file.read_text().count("Written once") == 1


class TestLoggerRegistry:
    """Tests for get_logger / set_logger / configure_loggers."""

    def test_get_logger_caches_by_name(self, isolated_loggers):
        first = get_logger("viila.a")
        assert get_logger("viila.a") is first
        assert get_logger("viila.b") is not first

    def test_get_logger_uses_configured_level(self, isolated_loggers, monkeypatch):
        monkeypatch.setattr(config_module, "_global_config", ConfigManager(load_environment=False))
        assert get_logger("viila.level").logger.level == LogLevel.WARNING

    def test_invalid_level_from_environment(self, isolated_loggers, monkeypatch):
        monkeypatch.setenv("VIILA_LOGGING_LEVEL", "verbose")
        monkeypatch.setattr(config_module, "_global_config", None)

        logger = get_logger("viila.env")

        assert config_module.get_config_manager().get("viila.logging.level") == "verbose"
        assert logger.logger.level == LogLevel.WARNING

    def test_configured_file_not_duplicated(self, isolated_loggers, monkeypatch, tmp_path):
        log_file = tmp_path / "viila.log"
        config = ConfigManager(load_environment=False)
        config.set("viila.logging.file", str(log_file))
        monkeypatch.setattr(config_module, "_global_config", config)

        logger = get_logger("viila.filed")
        configure_loggers("WARNING", str(log_file))

        file_handlers = [h for h in logger.logger.handlers if isinstance(h, logging.FileHandler)]
        for handler in file_handlers:
            handler.close()
            logger.logger.removeHandler(handler)

        assert len(file_handlers) == 1

    def test_set_logger(self, isolated_loggers):
        custom = Logger(name="viila.custom", level=LogLevel.ERROR)
        set_logger(custom)
        assert get_logger("viila.custom") is custom

    def test_configure_loggers(self, isolated_loggers):
        logger = get_logger("viila.configured")
        configure_loggers("DEBUG")
        assert logger.logger.level == LogLevel.DEBUG
