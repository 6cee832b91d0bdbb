"""
Viila Backends: Local File System.

``LocalBackend`` maps the storage primitives onto ``os`` and ``shutil``.
Every ``OSError`` is converted to a ``BackendError`` that keeps the failing
action and path in its message; folder paths are accepted with or without a
trailing separator.
"""

import os
import shutil
import stat
import tempfile
from datetime import datetime
from typing import List, Optional

from viila.backend.base import StorageBackend
from viila.core.constants import PATH_SEPARATOR, ConfigKey, ErrorCode, ItemKind, WellKnownFolder
from viila.core.errors import BackendError, ValidationError
from viila.core.validators import validate_paths_config
from viila.infrastructure.config_manager import ConfigManager, get_config_manager
from viila.infrastructure.logger import get_logger

logger = get_logger("viila.backend")

_OVERRIDE_KEYS = {
    WellKnownFolder.HOME: ConfigKey.PATH_HOME,
    WellKnownFolder.TEMPORARY: ConfigKey.PATH_TEMPORARY,
    WellKnownFolder.DOCUMENTS: ConfigKey.PATH_DOCUMENTS,
    WellKnownFolder.LIBRARY: ConfigKey.PATH_LIBRARY,
}

# Folder names below the home folder used when no override is configured
_HOME_SUBFOLDERS = {
    WellKnownFolder.DOCUMENTS: "Documents",
    WellKnownFolder.LIBRARY: "Library",
}


def _os_path(path: str) -> str:
    """Strip the trailing separator a folder path carries (except the root)."""
    return path.rstrip(PATH_SEPARATOR) or PATH_SEPARATOR


class LocalBackend(StorageBackend):
    """Storage backend for the host file system.

    Well-known folders can be overridden with the ``viila.paths.*``
    configuration keys.
    """

    def __init__(self, config: Optional[ConfigManager] = None):
        """
        Initialize the backend.

        Args:
            config: Configuration manager (the global one if None)
        """
        self.config = config if config is not None else get_config_manager()

    # =========================================================================
    # Queries
    # =========================================================================

    def probe_kind(self, path: str) -> Optional[ItemKind]:
        try:
            mode = os.stat(path).st_mode
        except (OSError, ValueError):
            return None

        if stat.S_ISDIR(mode):
            return ItemKind.FOLDER
        return ItemKind.FILE

    def list_names(self, directory_path: str) -> List[str]:
        try:
            names = os.listdir(directory_path)
        except OSError as e:
            logger.debug("Listing failed, treating folder as empty", path=directory_path, error=e)
            return []

        logger.debug("Listed folder", path=directory_path, entries=len(names))
        return sorted(names)

    def modification_date(self, path: str) -> datetime:
        try:
            return datetime.fromtimestamp(os.stat(path).st_mtime)
        except OSError as e:
            raise BackendError.from_os_error("stat", path, e) from e

    # =========================================================================
    # Mutations
    # =========================================================================

    def create_directory(self, path: str, create_intermediates: bool = False) -> None:
        logger.debug("Creating directory", path=path, intermediates=create_intermediates)
        try:
            if create_intermediates:
                os.makedirs(_os_path(path), exist_ok=True)
            else:
                os.mkdir(_os_path(path))
        except OSError as e:
            raise BackendError.from_os_error("create directory", path, e) from e

    def create_file(self, path: str, contents: bytes = b"") -> None:
        logger.debug("Creating file", path=path, size=len(contents))
        self._write(path, contents, "create file")

    def remove_item(self, path: str) -> None:
        logger.debug("Removing item", path=path)
        os_path = _os_path(path)
        try:
            if os.path.isdir(os_path) and not os.path.islink(os_path):
                shutil.rmtree(os_path)
            else:
                os.remove(os_path)
        except OSError as e:
            raise BackendError.from_os_error("remove", path, e) from e

    def move_item(self, source: str, destination: str) -> None:
        logger.debug("Moving item", source=source, destination=destination)
        self._ensure_absent(destination, "move to")
        try:
            shutil.move(_os_path(source), _os_path(destination))
        except OSError as e:
            raise BackendError.from_os_error("move", source, e) from e

    def copy_item(self, source: str, destination: str) -> None:
        logger.debug("Copying item", source=source, destination=destination)
        self._ensure_absent(destination, "copy to")
        os_source = _os_path(source)
        try:
            if os.path.isdir(os_source):
                shutil.copytree(os_source, _os_path(destination), symlinks=True)
            else:
                shutil.copy2(os_source, _os_path(destination))
        except OSError as e:
            raise BackendError.from_os_error("copy", source, e) from e

    def read_file(self, path: str) -> bytes:
        try:
            with open(path, "rb") as f:
                return f.read()
        except OSError as e:
            raise BackendError.from_os_error("read", path, e) from e

    def write_file(self, path: str, data: bytes) -> None:
        logger.debug("Writing file", path=path, size=len(data))
        self._write(path, data, "write")

    def _write(self, path: str, data: bytes, action: str) -> None:
        try:
            with open(path, "wb") as f:
                f.write(data)
        except OSError as e:
            raise BackendError.from_os_error(action, path, e) from e

    def _ensure_absent(self, path: str, action: str) -> None:
        if os.path.lexists(_os_path(path)):
            raise BackendError(f"Cannot {action} {path}: destination exists", ErrorCode.CONFLICT)

    # =========================================================================
    # Well-known folders
    # =========================================================================

    def home_directory(self) -> str:
        override = self._override(WellKnownFolder.HOME)
        if override:
            return override
        return os.path.expanduser("~")

    def current_directory(self) -> str:
        return os.getcwd()

    def well_known_directory(self, folder: WellKnownFolder) -> Optional[str]:
        if folder is WellKnownFolder.HOME:
            return self.home_directory()
        if folder is WellKnownFolder.CURRENT:
            return self.current_directory()

        override = self._override(folder)
        if override:
            return override

        if folder is WellKnownFolder.TEMPORARY:
            return tempfile.gettempdir()

        candidate = os.path.join(self.home_directory(), _HOME_SUBFOLDERS[folder])
        if os.path.isdir(candidate):
            return candidate
        return None

    def _override(self, folder: WellKnownFolder) -> Optional[str]:
        value = self.config.get(_OVERRIDE_KEYS[folder])
        if value is None:
            return None

        try:
            validate_paths_config({folder.value: value})
        except ValidationError as e:
            logger.warning("Ignoring invalid folder override", folder=folder.value, error=e)
            return None
        return value
