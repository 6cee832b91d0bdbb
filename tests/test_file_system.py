"""Tests for the FileSystem entry point."""
from pathlib import Path

import pytest

from viila.core.constants import ConfigKey, FileFailure, FolderFailure
from viila.core.errors import FileError, FolderError
from viila.file_system import FileSystem
from viila.infrastructure.config_manager import ConfigManager
from viila.items.file import File
from viila.items.folder import Folder


class TestWellKnownFolders:
    """Test the well-known folder properties."""

    def test_home_folder_override(self, file_system: FileSystem, config: ConfigManager, temp_dir: Path):
        config.set(ConfigKey.PATH_HOME, str(temp_dir))
        assert file_system.home_folder.path == f"{temp_dir}/"

    def test_home_folder_from_environment(self, file_system: FileSystem, temp_dir: Path, monkeypatch):
        monkeypatch.setenv("HOME", str(temp_dir))
        assert file_system.home_folder.path == f"{temp_dir}/"

    def test_current_folder(self, file_system: FileSystem, source_dir: Path, monkeypatch):
        monkeypatch.chdir(source_dir)
        assert file_system.current_folder.path == f"{source_dir}/"

    def test_temporary_folder_override(self, file_system: FileSystem, config: ConfigManager, temp_dir: Path):
        config.set(ConfigKey.PATH_TEMPORARY, str(temp_dir))
        assert file_system.temporary_folder.path == f"{temp_dir}/"

    def test_temporary_folder_default(self, file_system: FileSystem):
        assert isinstance(file_system.temporary_folder, Folder)

    def test_document_folder_missing(self, file_system: FileSystem, config: ConfigManager, temp_dir: Path):
        config.set(ConfigKey.PATH_HOME, str(temp_dir))
        assert file_system.document_folder is None
        assert file_system.library_folder is None

    def test_document_folder_present(self, file_system: FileSystem, config: ConfigManager, temp_dir: Path):
        config.set(ConfigKey.PATH_HOME, str(temp_dir))
        (temp_dir / "Documents").mkdir()
        assert file_system.document_folder.path == f"{temp_dir}/Documents/"

    def test_overridden_folder_that_does_not_exist(self, file_system: FileSystem, config: ConfigManager, temp_dir: Path):
        config.set(ConfigKey.PATH_LIBRARY, str(temp_dir / "gone"))
        assert file_system.library_folder is None


class TestCreateFile:
    """Test FileSystem.create_file and create_file_if_needed."""

    def test_creates_intermediate_folders(self, file_system: FileSystem, temp_dir: Path):
        file = file_system.create_file(f"{temp_dir}/a/b/c.txt", b"data")

        assert isinstance(file, File)
        assert file.path == f"{temp_dir}/a/b/c.txt"
        assert (temp_dir / "a" / "b" / "c.txt").read_bytes() == b"data"
        assert file.parent == Folder(f"{temp_dir}/a/b", backend=file_system.backend)

    def test_text_contents(self, file_system: FileSystem, temp_dir: Path):
        assert file_system.create_file(f"{temp_dir}/t.txt", "text").read_as_string() == "text"

    def test_relative_to_current_folder(self, file_system: FileSystem, temp_dir: Path, monkeypatch):
        monkeypatch.chdir(temp_dir)
        assert file_system.create_file("rel/new.txt").path == f"{temp_dir}/rel/new.txt"

    def test_create_file_at_root(self, file_system: FileSystem):
        with pytest.raises(FileError) as exc_info:
            file_system.create_file("/")
        assert exc_info.value.reason is FileFailure.WRITE

    def test_create_file_at_folder_path(self, file_system: FileSystem, temp_dir: Path):
        with pytest.raises(FileError):
            file_system.create_file(f"{temp_dir}/folder/")
        assert not (temp_dir / "folder").exists()

    def test_parent_is_a_file(self, file_system: FileSystem, source_dir: Path):
        with pytest.raises(FileError) as exc_info:
            file_system.create_file(f"{source_dir}/a.txt/inner.txt")
        assert isinstance(exc_info.value.__cause__, FolderError)

    def test_create_file_if_needed(self, file_system: FileSystem, source_dir: Path):
        existing = file_system.create_file_if_needed(f"{source_dir}/a.txt", b"ignored")
        created = file_system.create_file_if_needed(f"{source_dir}/n/new.txt", lambda: b"made")

        assert existing.read() == b"alpha"
        assert created.read() == b"made"


class TestCreateFolder:
    """Test FileSystem.create_folder and create_folder_if_needed."""

    def test_creates_intermediate_folders(self, file_system: FileSystem, temp_dir: Path):
        folder = file_system.create_folder(f"{temp_dir}/x/y/z")
        assert folder.path == f"{temp_dir}/x/y/z/"
        assert (temp_dir / "x" / "y" / "z").is_dir()

    def test_existing_folder(self, file_system: FileSystem, source_dir: Path):
        folder = file_system.create_folder(str(source_dir))
        assert folder.files.count() == 3

    def test_folder_over_a_file(self, file_system: FileSystem, source_dir: Path):
        with pytest.raises(FolderError) as exc_info:
            file_system.create_folder(f"{source_dir}/a.txt")
        assert exc_info.value.reason is FolderFailure.CREATE

    def test_create_folder_if_needed(self, file_system: FileSystem, source_dir: Path, spy_backend):
        spied = FileSystem(spy_backend)

        assert spied.create_folder_if_needed(str(source_dir)).path == f"{source_dir}/"
        assert spy_backend.create_directory.call_count == 0

        assert spied.create_folder_if_needed(f"{source_dir}/new").path == f"{source_dir}/new/"
        assert spy_backend.create_directory.call_count == 1


def test_default_backend_is_local():
    from viila.backend.local import LocalBackend

    assert isinstance(FileSystem().backend, LocalBackend)
