"""Shared pytest fixtures for Viila tests."""
import os
import tempfile
from pathlib import Path
from typing import Generator
from unittest.mock import MagicMock

import pytest

from viila.backend.base import StorageBackend
from viila.backend.local import LocalBackend
from viila.core.constants import ItemKind
from viila.file_system import FileSystem
from viila.infrastructure.config_manager import ConfigManager
from viila.items.folder import Folder


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests (symlinks resolved)."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(os.path.realpath(tmpdir))


@pytest.fixture
def config() -> ConfigManager:
    """Configuration with defaults only (no environment, no files)."""
    return ConfigManager(load_environment=False)


@pytest.fixture
def backend(config: ConfigManager) -> LocalBackend:
    """Local backend bound to the isolated configuration."""
    return LocalBackend(config)


@pytest.fixture
def spy_backend(backend: LocalBackend) -> MagicMock:
    """Local backend wrapped in a mock to count and break calls."""
    return MagicMock(wraps=backend)


@pytest.fixture
def file_system(backend: LocalBackend) -> FileSystem:
    return FileSystem(backend)


@pytest.fixture
def source_dir(temp_dir: Path) -> Path:
    """Create a source tree.

    source/
        .config/settings.yml
        .hidden
        README.md
        a.txt
        b/
            .secret/d.txt
            c.txt
            e/f.txt
        z.txt
    """
    source = temp_dir / "source"
    source.mkdir()

    (source / "a.txt").write_text("alpha")
    (source / "z.txt").write_text("zulu")
    (source / "README.md").write_text("# Readme")
    (source / ".hidden").write_text("hidden")

    (source / ".config").mkdir()
    (source / ".config" / "settings.yml").write_text("key: value")

    (source / "b").mkdir()
    (source / "b" / "c.txt").write_text("charlie")
    (source / "b" / ".secret").mkdir()
    (source / "b" / ".secret" / "d.txt").write_text("delta")
    (source / "b" / "e").mkdir()
    (source / "b" / "e" / "f.txt").write_text("foxtrot")

    return source


@pytest.fixture
def source_folder(source_dir: Path, backend: LocalBackend) -> Folder:
    return Folder(str(source_dir), backend=backend)


@pytest.fixture
def fake_backend() -> MagicMock:
    """Backend double answering kind probes from a ``kinds`` dict.

    Home is ``/home/user`` and the working directory ``/work``.
    """
    kinds = {
        "/": ItemKind.FOLDER,
        "/home/": ItemKind.FOLDER,
        "/home/user/": ItemKind.FOLDER,
        "/work/": ItemKind.FOLDER,
    }
    fake = MagicMock(spec=StorageBackend)
    fake.kinds = kinds
    fake.probe_kind.side_effect = lambda path: kinds.get(path)
    fake.home_directory.return_value = "/home/user"
    fake.current_directory.return_value = "/work"
    return fake
