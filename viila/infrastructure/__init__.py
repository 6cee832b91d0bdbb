"""Viila Infrastructure Layer.

Services shared by the rest of the package:
- ConfigManager: Layered configuration (defaults, YAML files, VIILA_* env)
- Logger: Structured logging with key-value context
"""

from .config_manager import (
    ConfigError,
    ConfigManager,
    ConfigSource,
    get_config_manager,
    set_global_config,
)
from .logger import LogLevel, Logger, configure_loggers, get_logger, set_logger

__all__ = [
    # Logger exports
    "Logger",
    "LogLevel",
    "get_logger",
    "set_logger",
    "configure_loggers",
    # ConfigManager exports
    "ConfigSource",
    "ConfigError",
    "ConfigManager",
    "get_config_manager",
    "set_global_config",
]
