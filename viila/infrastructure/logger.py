#!/usr/bin/env python3
"""Structured logging for Viila.

This module provides a thin structured layer over the standard ``logging``
module:
- Key-value context attached to every message
- Scoped context through ``add_context``
- Console output by default, rotating file output on request
- Per-name logger cache whose level follows the Viila configuration

Example:
    >>> logger = get_logger("viila.folder")
    >>> logger.debug("Listing folder", path="/tmp/")
    >>> with logger.add_context(operation="empty"):
    ...     logger.debug("Deleting item", path="/tmp/a.txt")
"""

import logging
import logging.handlers
import os
import threading
from contextlib import contextmanager
from enum import IntEnum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from viila.core.constants import ConfigKey
from viila.core.errors import ValidationError
from viila.core.validators import validate_logging_config


class LogLevel(IntEnum):
    """Log levels matching Python's logging module."""

    DEBUG = logging.DEBUG  # 10
    INFO = logging.INFO  # 20
    WARNING = logging.WARNING  # 30
    ERROR = logging.ERROR  # 40
    CRITICAL = logging.CRITICAL  # 50


DEFAULT_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class Logger:
    """Structured logger with context support.

    Messages are rendered as ``"<message> | key=value ..."`` and the context
    dictionary is also passed to handlers through ``extra``.
    """

    _context_stack = threading.local()

    def __init__(
        self,
        name: str = "viila",
        level: Union[LogLevel, str] = LogLevel.WARNING,
        handlers: Optional[List[logging.Handler]] = None,
    ):
        """Initialize logger.

        Args:
            name: Logger name for identification
            level: Minimum log level to output
            handlers: Optional list of logging handlers (console if None)
        """
        self.name = name
        self.logger = logging.getLogger(name)
        self.set_level(level)

        if handlers is None:
            handlers = [self._create_console_handler()]

        self.logger.handlers.clear()
        for handler in handlers:
            self.logger.addHandler(handler)

        self.logger.propagate = False

    def _create_console_handler(self) -> logging.StreamHandler:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        return handler

    def create_file_handler(
        self,
        filename: Union[str, Path],
        max_bytes: int = 10 * 1024 * 1024,  # 10MB
        backup_count: int = 5,
    ) -> logging.handlers.RotatingFileHandler:
        """Create a rotating file handler.

        Args:
            filename: Path to log file
            max_bytes: Maximum size before rotation
            backup_count: Number of backup files to keep

        Returns:
            Configured rotating file handler
        """
        handler = logging.handlers.RotatingFileHandler(
            filename, maxBytes=max_bytes, backupCount=backup_count
        )
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        return handler

    def add_handler(self, handler: logging.Handler) -> None:
        self.logger.addHandler(handler)

    def add_file_handler(self, filename: Union[str, Path]) -> None:
        """Also write to ``filename``, unless a handler already writes there."""
        target = os.path.abspath(os.fspath(filename))
        for handler in self.logger.handlers:
            if getattr(handler, "baseFilename", None) == target:
                return
        self.add_handler(self.create_file_handler(filename))

    def set_level(self, level: Union[LogLevel, str]) -> None:
        """Set the minimum log level (LogLevel or case-insensitive name)."""
        if isinstance(level, str):
            level = LogLevel[level.upper()]
        self.logger.setLevel(level)

    def _get_context(self) -> Dict[str, Any]:
        if not hasattr(self._context_stack, "stack"):
            self._context_stack.stack = [{}]

        context: Dict[str, Any] = {}
        for ctx in self._context_stack.stack:
            context.update(ctx)
        return context

    @staticmethod
    def _format_message(msg: str, context: Dict[str, Any]) -> str:
        if context:
            ctx_str = " ".join(f"{k}={v}" for k, v in context.items())
            return f"{msg} | {ctx_str}"
        return msg

    @contextmanager
    def add_context(self, **kwargs):
        """Context manager adding key-value pairs to every message inside it.

        Example:
            >>> with logger.add_context(root="/srv/data/"):
            ...     logger.debug("Entering folder", path="/srv/data/a/")
        """
        if not hasattr(self._context_stack, "stack"):
            self._context_stack.stack = [{}]

        self._context_stack.stack.append(kwargs)
        try:
            yield
        finally:
            self._context_stack.stack.pop()

    def _log(self, level: LogLevel, msg: str, context: Dict[str, Any], **kwargs) -> None:
        if not self.logger.isEnabledFor(level):
            return
        combined_context = self._get_context()
        combined_context.update(context)
        self.logger.log(
            level,
            self._format_message(msg, combined_context),
            extra={"context": combined_context},
            **kwargs,
        )

    def debug(self, msg: str, **context) -> None:
        self._log(LogLevel.DEBUG, msg, context)

    def warning(self, msg: str, **context) -> None:
        self._log(LogLevel.WARNING, msg, context)

    def configure(self, level: Union[LogLevel, str], log_file: Optional[str] = None) -> None:
        """Apply a level and optional log file to this logger."""
        self.set_level(level)
        if log_file:
            self.add_file_handler(log_file)


# Loggers created through get_logger, by name
_loggers: Dict[str, Logger] = {}
_loggers_lock = threading.Lock()


def _configured_level_and_file() -> Tuple[str, Optional[str]]:
    from viila.infrastructure.config_manager import get_config_manager

    config = get_config_manager()
    logging_config = {
        "level": config.get(ConfigKey.LOGGING_LEVEL),
        "file": config.get(ConfigKey.LOGGING_FILE),
    }
    try:
        validate_logging_config(logging_config)
    except ValidationError:
        # invalid settings fall back to the defaults; the CLI reports them
        return DEFAULT_LEVEL, None

    return logging_config["level"] or DEFAULT_LEVEL, logging_config["file"]


def get_logger(name: str = "viila") -> Logger:
    """Get or create the logger for ``name``.

    New loggers take their level and optional log file from the global
    configuration (``viila.logging.level`` / ``viila.logging.file``).

    Args:
        name: Logger name

    Returns:
        Logger instance shared by every caller using the same name
    """
    with _loggers_lock:
        logger = _loggers.get(name)
        if logger is None:
            level, log_file = _configured_level_and_file()
            logger = Logger(name=name, level=level)
            if log_file:
                logger.add_file_handler(log_file)
            _loggers[name] = logger
        return logger


def set_logger(logger: Logger) -> None:
    """Register ``logger`` as the shared instance for its name."""
    with _loggers_lock:
        _loggers[logger.name] = logger


def configure_loggers(level: Union[LogLevel, str], log_file: Optional[str] = None) -> None:
    """Re-level every logger created so far (used by the CLI after parsing options)."""
    with _loggers_lock:
        for logger in _loggers.values():
            logger.configure(level, log_file)
