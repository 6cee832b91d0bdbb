"""
Viila Core: Input Validators.

Validation of configuration dictionaries and item names.
"""
from typing import Any, Dict

from viila.core.constants import LOG_LEVELS, PATH_SEPARATOR, ConfigKey
from viila.core.errors import ValidationError

KNOWN_PATH_KEYS = ("home", "temporary", "documents", "library")


def validate_config(config: Dict[str, Any]) -> bool:
    """Validate a Viila configuration structure.

    Args:
        config: Configuration dictionary (as returned by ``ConfigManager.get_all``)

    Returns:
        True if valid

    Raises:
        ValidationError: If configuration is invalid
    """
    if not isinstance(config, dict):
        raise ValidationError("Configuration must be a dictionary")

    root = config.get(ConfigKey.ROOT, {})
    if not isinstance(root, dict):
        raise ValidationError(f"'{ConfigKey.ROOT}' section must be a dictionary")

    if ConfigKey.LOGGING in root:
        validate_logging_config(root[ConfigKey.LOGGING])

    if ConfigKey.PATHS in root:
        validate_paths_config(root[ConfigKey.PATHS])

    return True


def validate_logging_config(logging_config: Dict[str, Any]) -> bool:
    """Validate the ``logging`` section.

    Raises:
        ValidationError: If the level is unknown or the file is not a string
    """
    if not isinstance(logging_config, dict):
        raise ValidationError("Logging configuration must be a dictionary")

    level = logging_config.get("level")
    if level is not None:
        if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
            raise ValidationError(f"Invalid log level: {level}. Must be one of {list(LOG_LEVELS)}")

    log_file = logging_config.get("file")
    if log_file is not None and not isinstance(log_file, str):
        raise ValidationError(f"Log file must be a string: {log_file}")

    return True


def validate_paths_config(paths_config: Dict[str, Any]) -> bool:
    """Validate the ``paths`` section (well-known folder overrides).

    Raises:
        ValidationError: On unknown keys or values that are not absolute paths
    """
    if not isinstance(paths_config, dict):
        raise ValidationError("Paths configuration must be a dictionary")

    for key, value in paths_config.items():
        if key not in KNOWN_PATH_KEYS:
            raise ValidationError(f"Unknown path key: {key}. Must be one of {list(KNOWN_PATH_KEYS)}")
        if value is None:
            continue
        if not isinstance(value, str) or not value.startswith(PATH_SEPARATOR):
            raise ValidationError(f"Path for '{key}' must be an absolute path: {value}")

    return True


def validate_item_name(name: str) -> bool:
    """Check that ``name`` is usable as a single path segment.

    Returns:
        True if the name is non-empty, contains no separator and is not
        ``.`` or ``..``
    """
    if not isinstance(name, str) or not name:
        return False
    if PATH_SEPARATOR in name or "\0" in name:
        return False
    return name not in (".", "..")
