#!/usr/bin/env python3
"""Tests for the ConfigManager module."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from viila.core.constants import ConfigKey, ErrorCode
from viila.infrastructure import config_manager as config_module
from viila.infrastructure.config_manager import (
    ConfigError,
    ConfigManager,
    ConfigSource,
    get_config_manager,
    set_global_config,
)


@pytest.fixture
def manager():
    return ConfigManager(load_environment=False)


@pytest.fixture
def config_file(temp_dir: Path) -> Path:
    path = temp_dir / "viila.yaml"
    path.write_text(
        """
viila:
  logging:
    level: DEBUG
  paths:
    home: /srv/home
"""
    )
    return path


class TestConfigSource:
    """Tests for ConfigSource enum."""

    def test_precedence_order(self):
        sources = list(ConfigSource)
        for lower, higher in zip(sources, sources[1:]):
            assert lower.value < higher.value


class TestConfigManager:
    """Tests for ConfigManager class."""

    def test_defaults(self, manager):
        assert manager.get(ConfigKey.LOGGING_LEVEL) == "WARNING"
        assert manager.get(ConfigKey.PATH_HOME) is None
        assert manager.get("viila.unknown", default=5) == 5

    def test_load_file(self, manager, config_file):
        manager.load_file(str(config_file))
        assert manager.get(ConfigKey.LOGGING_LEVEL) == "DEBUG"
        assert manager.get(ConfigKey.PATH_HOME) == "/srv/home"

    def test_load_file_without_root_key(self, manager, temp_dir):
        path = temp_dir / "bare.yaml"
        path.write_text("logging:\n  level: ERROR\n")
        manager.load_file(str(path))
        assert manager.get(ConfigKey.LOGGING_LEVEL) == "ERROR"

    def test_constructor_loads_file(self, config_file):
        manager = ConfigManager(str(config_file), load_environment=False)
        assert ConfigSource.USER_CONFIG in manager._config
        assert manager.get(ConfigKey.PATH_HOME) == "/srv/home"

    def test_missing_file(self, manager, temp_dir):
        with pytest.raises(ConfigError) as exc_info:
            manager.load_file(str(temp_dir / "missing.yaml"))
        assert exc_info.value.error_code == ErrorCode.NOT_FOUND

    def test_invalid_yaml(self, manager, temp_dir):
        path = temp_dir / "broken.yaml"
        path.write_text("viila: [unclosed")
        with pytest.raises(ConfigError) as exc_info:
            manager.load_file(str(path))
        assert "YAML parse error" in str(exc_info.value)

    def test_non_mapping_yaml(self, manager, temp_dir):
        path = temp_dir / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError):
            manager.load_file(str(path))

    def test_environment_variables(self):
        env = {"VIILA_LOGGING_LEVEL": "INFO", "VIILA_PATHS_HOME": "/env/home"}
        with patch.dict(os.environ, env):
            manager = ConfigManager()
        assert manager.get(ConfigKey.LOGGING_LEVEL) == "INFO"
        assert manager.get(ConfigKey.PATH_HOME) == "/env/home"
        assert manager._config[ConfigSource.ENVIRONMENT]["viila"]["paths"]["home"] == "/env/home"

    def test_environment_value_parsing(self, manager):
        assert manager._parse_env_value("true") is True
        assert manager._parse_env_value("no") is False
        assert manager._parse_env_value("42") == 42
        assert manager._parse_env_value("1.5") == 1.5
        assert manager._parse_env_value("/srv") == "/srv"

    def test_precedence(self, manager, config_file):
        manager.load_file(str(config_file))
        manager.set(ConfigKey.LOGGING_LEVEL, "ERROR", ConfigSource.CLI_ARGS)
        assert manager.get(ConfigKey.LOGGING_LEVEL) == "ERROR"

        manager.set(ConfigKey.LOGGING_LEVEL, "CRITICAL")
        assert manager.get(ConfigKey.LOGGING_LEVEL) == "CRITICAL"

    def test_get_all_merges_sources(self, manager, config_file):
        manager.load_file(str(config_file))
        merged = manager.get_all()
        assert merged["viila"]["logging"]["level"] == "DEBUG"
        assert merged["viila"]["logging"]["file"] is None
        assert merged["viila"]["paths"]["home"] == "/srv/home"

    def test_clear(self, manager, config_file):
        manager.load_file(str(config_file))
        manager.set(ConfigKey.PATH_TEMPORARY, "/tmp/x")

        manager.clear(ConfigSource.RUNTIME)
        assert manager.get(ConfigKey.PATH_TEMPORARY) is None
        assert manager.get(ConfigKey.PATH_HOME) == "/srv/home"

        manager.clear()
        assert manager.get(ConfigKey.PATH_HOME) is None
        assert manager.get(ConfigKey.LOGGING_LEVEL) == "WARNING"

    def test_defaults_not_shared_between_managers(self, manager):
        manager.set(ConfigKey.LOGGING_LEVEL, "DEBUG", ConfigSource.COMPILED_DEFAULTS)
        assert ConfigManager(load_environment=False).get(ConfigKey.LOGGING_LEVEL) == "WARNING"

    def test_load_defaults_files(self, manager, config_file, temp_dir, monkeypatch):
        monkeypatch.setattr(config_module, "SYSTEM_CONFIG_PATH", str(temp_dir / "absent.yaml"))
        monkeypatch.setattr(config_module, "USER_CONFIG_PATH", str(config_file))

        manager.load_defaults_files()

        assert ConfigSource.SYSTEM_CONFIG not in manager._config
        assert manager.get(ConfigKey.PATH_HOME) == "/srv/home"
        assert manager.get(ConfigKey.LOGGING_LEVEL) == "DEBUG"


class TestGlobalConfig:
    """Tests for the global configuration helpers."""

    def test_set_and_get_global(self, manager, monkeypatch):
        monkeypatch.setattr(config_module, "_global_config", None)
        set_global_config(manager)
        assert get_config_manager() is manager
