"""Viila Core - constants, errors, validators and path resolution.

Import specific names from submodules:
    from viila.core.constants import ItemKind
    from viila.core.errors import PathError
    from viila.core.path_resolver import PathResolver
"""

from viila.core import constants, errors, validators

__all__ = [
    "constants",
    "errors",
    "validators",
]
