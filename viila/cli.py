#!/usr/bin/env python3
"""Command-line interface for Viila.

Subcommands:
- ``list``: enumerate the files or subfolders of a folder, optionally
  recursively and including hidden entries
- ``info``: describe a single file or folder

Example:
    >>> from viila.cli import parse_arguments
    >>> args = parse_arguments(["list", "~/projects", "--recursive"])
"""

import argparse
import sys
from typing import List, Optional

from viila.backend.local import LocalBackend
from viila.core.constants import VIILA_VERSION, ConfigKey, ItemKind
from viila.core.errors import ValidationError, ViilaError
from viila.core.validators import validate_config
from viila.file_system import FileSystem
from viila.infrastructure.config_manager import (
    ConfigError,
    ConfigManager,
    ConfigSource,
    set_global_config,
)
from viila.infrastructure.logger import configure_loggers, get_logger
from viila.items.file import File
from viila.items.folder import Folder
from viila.items.item import Item

DESCRIPTION = "Viila - typed, hierarchical access to a file system"

ITEM_TYPES = ("files", "folders", "all")


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


def parse_arguments(args: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        args: Argument list to parse (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace

    Raises:
        SystemExit: On invalid arguments or --help/--version
    """
    parser = argparse.ArgumentParser(
        prog="viila",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Files directly inside the working directory
  viila list

  # Every file below a folder, hidden ones included
  viila list ~/projects --recursive --all

  # Every folder of a tree
  viila list /srv/data --type folders --recursive

  # Describe a file
  viila info ~/notes/today.txt
        """,
    )

    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {VIILA_VERSION}",
    )

    parser.add_argument(
        "-c",
        "--config",
        metavar="FILE",
        type=str,
        help="Configuration file path (YAML format)",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List the contents of a folder")
    list_parser.add_argument(
        "path",
        nargs="?",
        default="",
        help="Folder to list (default: working directory)",
    )
    list_parser.add_argument(
        "-r",
        "--recursive",
        action="store_true",
        help="Descend into every subfolder",
    )
    list_parser.add_argument(
        "-a",
        "--all",
        dest="include_hidden",
        action="store_true",
        help="Include hidden (dot) entries",
    )
    list_parser.add_argument(
        "-t",
        "--type",
        dest="item_type",
        choices=ITEM_TYPES,
        default="files",
        help="Kind of items to list (default: files)",
    )

    info_parser = subparsers.add_parser("info", help="Describe a file or folder")
    info_parser.add_argument("path", help="File or folder to describe")

    return parser.parse_args(args)


def load_configuration(args: argparse.Namespace) -> ConfigManager:
    """
    Build the configuration for this run.

    Args:
        args: Parsed arguments namespace

    Returns:
        Validated configuration manager, installed as the global one

    Raises:
        CLIError: If the configuration file cannot be loaded or is invalid
    """
    config = ConfigManager()

    try:
        config.load_defaults_files()
        if args.config:
            config.load_file(args.config)
        if args.debug:
            config.set(ConfigKey.LOGGING_LEVEL, "DEBUG", ConfigSource.CLI_ARGS)
        validate_config(config.get_all())
    except (ConfigError, ValidationError) as e:
        raise CLIError(f"Invalid configuration: {e}") from e

    set_global_config(config)
    configure_loggers(config.get(ConfigKey.LOGGING_LEVEL, "WARNING"), config.get(ConfigKey.LOGGING_FILE))
    return config


def list_items(file_system: FileSystem, args: argparse.Namespace) -> List[Item]:
    """Return the items selected by the ``list`` arguments."""
    folder = Folder(args.path, backend=file_system.backend)
    items: List[Item] = []

    if args.item_type in ("files", "all"):
        items.extend(
            folder.make_file_sequence(recursive=args.recursive, include_hidden=args.include_hidden)
        )
    if args.item_type in ("folders", "all"):
        items.extend(
            folder.make_subfolder_sequence(recursive=args.recursive, include_hidden=args.include_hidden)
        )

    return items


def describe_item(file_system: FileSystem, path: str) -> List[str]:
    """Return ``key: value`` lines describing the item at ``path``."""
    backend = file_system.backend
    resolved = backend.absolute_path(path)

    item: Item
    if backend.probe_kind(resolved) is ItemKind.FOLDER:
        item = Folder(resolved, backend=backend)
    else:
        item = File(resolved, backend=backend)

    return [
        f"kind: {item.kind}",
        f"name: {item.name}",
        f"path: {item.path}",
        f"extension: {item.extension or ''}",
        f"modified: {item.modification_date.isoformat(sep=' ', timespec='seconds')}",
    ]


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Returns:
        Process exit code
    """
    try:
        args = parse_arguments(argv)
        config = load_configuration(args)
        logger = get_logger("viila.cli")

        file_system = FileSystem(LocalBackend(config))
        logger.debug("Running command", command=args.command, path=args.path)

        if args.command == "list":
            for item in list_items(file_system, args):
                print(item.path)
        else:
            for line in describe_item(file_system, args.path):
                print(line)

        return 0

    except (CLIError, ViilaError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
