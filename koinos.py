#!/usr/bin/env python3
"""
Koinos — Ancient Greek κοινός (common, shared)

Command line front end for the shared koinos utilities. Lists the files
of a directory as a sortable table, filtered by file type and size, and
converts human-readable sizes.

Usage:
    koinos ls <path>                             # List files
    koinos ls <path> --type video                # Only video files
    koinos ls <path> --operator gte --size 10MB  # Files of at least 10 MB
    koinos ls <path> --size "1 MB" --tolerance 5 # 1 MB give or take 5 KiB
    koinos ls <path> --sort size --desc          # Largest first
    koinos size "2.5 GB"                         # Convert a size to bytes
"""

import argparse
import logging
import os
import pathlib
import sys
from dataclasses import dataclass
from datetime import datetime
from importlib import metadata
from typing import Optional

from auxiliary import (
    calculate_tolerances,
    convert_string_size_to_bytes,
    get_operator_size_matches,
    is_extension_valid,
    to_file_type,
    to_operator_type,
)
from console_ui import ConsoleUI
from formatters import format_path, format_size, get_version, pluralize
from koinos_config import KoinosConfig, SharedConfigManager
from koinos_types import FileType, OperatorType
from logging_setup import LOG_LEVEL_ENV, configure_logging
from results import embedded, render_results_table, sort_records

EXIT_OK = 0
EXIT_USAGE = 2

logger = logging.getLogger(__name__)


@dataclass
class FileInfo:
    name: str
    size: int


@dataclass
class FileEntry:
    """One listed file, FileInfo columns first"""

    info: FileInfo = embedded()
    extension: str = ""
    modified: str = ""


@dataclass
class ListFilter:
    """Which files to keep while listing"""

    file_type: FileType = FileType.ANY
    operator: Optional[OperatorType] = None
    wanted_size: Optional[int] = None
    tolerance_kib: float = 0.0

    def matches(self, path: pathlib.Path, size: int) -> bool:
        if not is_extension_valid(self.file_type, path):
            return False
        if self.wanted_size is None:
            return True
        return get_operator_size_matches(self.operator, self.wanted_size, self.tolerance_kib, size)


def current_platform() -> str:
    """Platform name as understood by format_path"""
    if sys.platform.startswith("win"):
        return "windows"
    if sys.platform == "darwin":
        return "darwin"
    return "linux"


def package_version() -> str:
    try:
        installed = metadata.version("koinos")
    except metadata.PackageNotFoundError:
        installed = ""
    return get_version(installed, "dev")


def list_files(root: pathlib.Path, file_filter: ListFilter) -> list[FileEntry]:
    """Collect the regular files directly inside root that pass file_filter"""
    entries: list[FileEntry] = []
    for path in sorted(root.iterdir()):
        if not path.is_file():
            continue
        try:
            stat = path.stat()
        except OSError as e:
            logger.warning("Skipping %s: %s", path, e)
            continue
        if not file_filter.matches(path, stat.st_size):
            continue
        entries.append(
            FileEntry(
                info=FileInfo(name=path.name, size=stat.st_size),
                extension=path.suffix.lower(),
                modified=datetime.fromtimestamp(stat.st_mtime).strftime("%Y-%m-%d %H:%M"),
            )
        )
    return entries


class Koinos:
    """Main application class for the koinos CLI"""

    def __init__(self, args: argparse.Namespace, ui: Optional[ConsoleUI] = None, config: Optional[KoinosConfig] = None):
        self.args = args
        self.ui = ui or ConsoleUI()
        self.config = config or SharedConfigManager().load()

    # -- argument conversion -------------------------------------------------

    def _build_filter(self) -> ListFilter:
        file_type = to_file_type(self.args.type)
        if file_type is None:
            raise ValueError(f"unknown file type: {self.args.type}")

        operator = None
        if self.args.operator:
            operator = to_operator_type(self.args.operator)
            if operator is None:
                raise ValueError(f"unknown operator: {self.args.operator}")

        wanted_size = None
        if self.args.size:
            wanted_size = convert_string_size_to_bytes(self.args.size)
            # Negative sizes and tolerances fail here, not mid-listing
            calculate_tolerances(wanted_size, self.args.tolerance)
        elif operator is not None:
            raise ValueError("--operator requires --size")

        return ListFilter(
            file_type=file_type,
            operator=operator or OperatorType.EQUAL_TO,
            wanted_size=wanted_size,
            tolerance_kib=self.args.tolerance,
        )

    # -- commands ------------------------------------------------------------

    def list_command(self) -> int:
        root = pathlib.Path(self.args.path)
        if not root.is_dir():
            self.ui.print_error(f"{root} is not a directory")
            return EXIT_USAGE

        try:
            file_filter = self._build_filter()
        except ValueError as e:
            self.ui.print_error(str(e))
            return EXIT_USAGE

        entries = list_files(root, file_filter)

        sort_field = self.args.sort or self.config.default_sort
        if sort_field:
            sort_records(entries, sort_field, self.args.desc or self.config.descending)

        total_size = sum(entry.info.size for entry in entries)
        totals = {
            "name": f"{len(entries)} {pluralize(len(entries), 'file', 'files')}",
            "size": format_size(total_size),
        }

        self.ui.print_info(format_path(str(root.resolve()), self.args.platform))
        render_results_table(entries, totals if entries else None, ui=self.ui, config=self.config)
        return EXIT_OK

    def size_command(self) -> int:
        try:
            num_bytes = convert_string_size_to_bytes(self.args.value)
        except ValueError as e:
            self.ui.print_error(f"Invalid size '{self.args.value}': {e}")
            return EXIT_USAGE

        self.ui.print_plain(f"{num_bytes:,} bytes ({format_size(num_bytes)})")
        return EXIT_OK

    def run(self) -> int:
        if self.args.command == "ls":
            return self.list_command()
        if self.args.command == "size":
            return self.size_command()
        return EXIT_USAGE


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="koinos",
        description="Koinos — shared file listing and size utilities",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {package_version()}")
    parser.add_argument("--log-level", default=None, help="Logging level (default: from config)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    ls_parser = subparsers.add_parser("ls", help="List files in a directory as a table")
    ls_parser.add_argument("path", help="Directory to list")
    ls_parser.add_argument("--type", default="any", help="any, video, image, archive or documents")
    ls_parser.add_argument("--operator", default=None, help="Size comparison: et, gt, gte, lt, lte (or ==, >, >=, <, <=)")
    ls_parser.add_argument("--size", default=None, help="Size to compare against (e.g. 10 MB, 1.5GB)")
    ls_parser.add_argument("--tolerance", type=float, default=0.0, help="Tolerance in KiB for equality matches")
    ls_parser.add_argument("--sort", default=None, help="Column to sort by (e.g. name, size, modified)")
    ls_parser.add_argument("--desc", action="store_true", help="Sort in descending order")
    ls_parser.add_argument("--platform", default=current_platform(), help="Path style for display")

    size_parser = subparsers.add_parser("size", help="Convert a human-readable size to bytes")
    size_parser.add_argument("value", help="Size such as '2.5 GB'")

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    config = SharedConfigManager().load()
    configure_logging(args.log_level or os.environ.get(LOG_LEVEL_ENV) or config.log_level)
    app = Koinos(args, config=config)
    return app.run()


if __name__ == "__main__":
    sys.exit(main())
