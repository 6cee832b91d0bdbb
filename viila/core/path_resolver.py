"""
Viila Core: Path Resolution.

Turns path specs (absolute, home-relative ``~`` or relative to the working
directory) into canonical absolute paths. Parent references (``../``) are not
removed by string surgery: each one is resolved against the live folder
hierarchy, so ``a/../b`` is only valid while ``a`` exists as a folder.

Example:
    >>> resolver = PathResolver(LocalBackend())
    >>> resolver.resolve("~/projects/../notes.txt")
    '/home/user/notes.txt'
"""
from typing import TYPE_CHECKING, List, Optional

from viila.core.constants import (
    CURRENT_SEGMENT,
    HOME_PREFIX,
    PARENT_REFERENCE,
    PATH_SEPARATOR,
    ItemKind,
)
from viila.core.errors import PathError
from viila.infrastructure.logger import get_logger

if TYPE_CHECKING:
    from viila.backend.base import StorageBackend

logger = get_logger("viila.resolver")


def ensure_trailing_separator(path: str) -> str:
    """Return ``path`` ending with exactly one separator."""
    if path.endswith(PATH_SEPARATOR):
        return path
    return path + PATH_SEPARATOR


def join_path(directory: str, name: str) -> str:
    """Join a directory path and a name with a single separator."""
    return ensure_trailing_separator(directory) + name.lstrip(PATH_SEPARATOR)


def path_segments(path: str) -> List[str]:
    """Return the non-empty segments of ``path``."""
    return [segment for segment in path.split(PATH_SEPARATOR) if segment]


def last_segment(path: str) -> str:
    """Return the final non-empty segment of ``path`` (empty for the root)."""
    segments = path_segments(path)
    return segments[-1] if segments else ""


def parent_path(path: str) -> Optional[str]:
    """Return ``path`` with its last non-empty segment removed.

    The root has no parent, and neither has a bare relative name.

    Args:
        path: Absolute path, with or without a trailing separator

    Returns:
        Parent path without trailing separator (``"/"`` for top-level items),
        or None
    """
    trimmed = path.rstrip(PATH_SEPARATOR)
    if not trimmed:
        return None

    index = trimmed.rfind(PATH_SEPARATOR)
    if index < 0:
        return None
    if index == 0:
        return PATH_SEPARATOR
    return trimmed[:index]


def normalize_segments(path: str) -> str:
    """Drop ``.`` segments and empty segments (doubled separators).

    Parent references are left in place for ``PathResolver`` to resolve.
    """
    leading = path.startswith(PATH_SEPARATOR)
    trailing = path.endswith(PATH_SEPARATOR)

    segments = [s for s in path_segments(path) if s != CURRENT_SEGMENT]
    normalized = PATH_SEPARATOR.join(segments)

    if leading:
        normalized = PATH_SEPARATOR + normalized
    if trailing and segments:
        normalized += PATH_SEPARATOR
    return normalized


def find_parent_reference(path: str) -> int:
    """Return the index of the first ``../`` segment in ``path``, or -1."""
    start = 0
    while True:
        index = path.find(PARENT_REFERENCE, start)
        if index <= 0 or path[index - 1] == PATH_SEPARATOR:
            return index
        start = index + 1


class PathResolver:
    """Resolves path specs to canonical absolute paths.

    The backend is consulted for the working and home directories and to
    verify that every folder a parent reference climbs out of exists.
    """

    def __init__(self, backend: "StorageBackend"):
        self.backend = backend

    def resolve(self, spec: str) -> str:
        """Resolve a path spec to a canonical absolute path.

        Args:
            spec: Absolute, ``~``-prefixed or relative path

        Returns:
            Canonical absolute path

        Raises:
            PathError: ``empty`` for a blank spec, ``invalid`` when a parent
                reference cannot be resolved
        """
        if not spec:
            raise PathError.empty()

        if spec.startswith(PATH_SEPARATOR):
            resolved = self.fill_in_parent_references(normalize_segments(spec))
        elif spec.startswith(HOME_PREFIX):
            home = self.backend.home_directory().rstrip(PATH_SEPARATOR)
            expanded = normalize_segments(home + spec[len(HOME_PREFIX):]) or PATH_SEPARATOR
            resolved = self.fill_in_parent_references(expanded)
        else:
            resolved = self.fill_in_parent_references(
                normalize_segments(spec), prepend_current_directory=True
            )

        logger.debug("Resolved path", spec=spec, path=resolved)
        return resolved

    def fill_in_parent_references(self, path: str, prepend_current_directory: bool = False) -> str:
        """Replace every ``../`` segment using the live folder hierarchy.

        Each ``../`` is resolved by taking everything before it as a folder,
        verifying that folder exists, and splicing in its parent's path.

        Args:
            path: Path whose parent references should be resolved
            prepend_current_directory: Anchor ``path`` to the working directory
                when no parent reference was resolved

        Raises:
            PathError: If a prefix folder does not exist or has no parent
        """
        filled_in = False

        while True:
            index = find_parent_reference(path)
            if index < 0:
                break

            folder_path = self._existing_folder_path(path[:index], path)
            parent = parent_path(folder_path)
            if parent is None:
                raise PathError.invalid(path)

            path = ensure_trailing_separator(parent) + path[index + len(PARENT_REFERENCE):]
            filled_in = True

        if prepend_current_directory and not filled_in:
            current = self.backend.current_directory()
            if not path:
                return current
            return join_path(current, path)

        return path

    def _existing_folder_path(self, prefix: str, path: str) -> str:
        if prefix:
            folder_path = ensure_trailing_separator(self.resolve(prefix))
        else:
            folder_path = ensure_trailing_separator(self.backend.current_directory())

        if self.backend.probe_kind(folder_path) is not ItemKind.FOLDER:
            raise PathError.invalid(path)
        return folder_path
