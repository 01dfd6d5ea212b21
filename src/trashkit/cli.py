# Filename: cli.py
# Author: Rich Lewis @RichLewis007
# Description: Command-line interface for trashkit. Provides put, list, restore, delete and
#              empty commands on top of the trash catalog.

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path

from .catalog import Catalog
from .context import TrashContext
from .put import put
from .services import logger as logger_service
from .services.config import TrashSettings
from .services.errors import TrashError
from .services.formatting import format_bytes, format_deletion_time
from .workers.trash_worker import TrashWorker

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    # Create and configure the command-line argument parser.
    parser = argparse.ArgumentParser(
        prog="trashkit",
        description="Move files to the freedesktop trash and manage trashed items.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Settings file to read (default: settings.ini in the user config dir).",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set console log level (default: value from settings, else INFO).",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Write the debug log here instead of the user log directory.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    put_parser = commands.add_parser("put", help="Move paths to the trash.")
    put_parser.add_argument("paths", nargs="+", type=Path, help="Files or folders to trash.")
    put_parser.add_argument(
        "--simple",
        action="store_true",
        help="Always use the mount's .Trash-<uid> directory and name_N.ext collision names.",
    )

    list_parser = commands.add_parser("list", help="List trashed items.")
    list_parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on the first unreadable .trashinfo record instead of skipping it.",
    )

    restore_parser = commands.add_parser("restore", help="Restore a trashed item.")
    restore_parser.add_argument("name", help="Trash entry name as shown by 'list'.")

    delete_parser = commands.add_parser("delete", help="Permanently delete a trashed item.")
    delete_parser.add_argument("name", help="Trash entry name as shown by 'list'.")

    commands.add_parser("empty", help="Permanently delete everything in the trash.")
    return parser


def _entry_size(path: Path) -> int | None:
    # Total size of a trashed object, without following symlinks.
    try:
        info = path.lstat()
    except OSError:
        return None
    if not path.is_dir() or path.is_symlink():
        return info.st_size

    total = 0
    for dirpath, _dirnames, filenames in os.walk(path):
        for filename in filenames:
            try:
                total += (Path(dirpath) / filename).lstat().st_size
            except OSError:
                continue
    return total


def _run_put(args: argparse.Namespace, context: TrashContext) -> int:
    if args.simple:
        failures = 0
        for path in args.paths:
            try:
                dest = put(path, context)
            except TrashError as exc:
                logger.error("Failed to trash %s: %s", path, exc)
                failures += 1
                continue
            print(f"{path}\t{dest}")
        return 1 if failures else 0

    worker = TrashWorker(
        Catalog(context),
        args.paths,
        on_progress=lambda index, total, path: logger.debug("[%d/%d] %s", index, total, path),
        on_error=lambda path, exc: logger.error("Failed to trash %s: %s", path, exc),
    )
    result = worker.run()
    for entry in result.trashed:
        print(f"{entry.original_path}\t{entry.name}")
    return 0 if result.ok else 1


def _run_list(args: argparse.Namespace, catalog: Catalog) -> int:
    entries = catalog.list(strict=args.strict)
    for entry in sorted(entries, key=lambda item: (item.deletion_time, item.name)):
        size = format_bytes(_entry_size(entry.data_path), empty="?")
        print(
            f"{entry.name}\t{format_deletion_time(entry.deletion_time)}\t{size}\t"
            f"{entry.original_path}"
        )
    print(f"{len(entries)} items in trash")
    return 0


def main(argv: list[str] | None = None) -> int:
    # Entry point for the trashkit console script.
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = TrashSettings.load(args.config)
    logger_service.configure(
        log_level=args.log_level or settings.log_level,
        log_file=args.log_file,
    )
    logger.debug("Starting trashkit with argv=%s", argv)

    try:
        context = TrashContext.create(settings)
        catalog = Catalog(context)
        if args.command == "put":
            return _run_put(args, context)
        if args.command == "list":
            return _run_list(args, catalog)
        if args.command == "restore":
            entry = catalog.restore(args.name)
            print(f"Restored {entry.name} to {entry.original_path}")
        elif args.command == "delete":
            catalog.delete(args.name)
            print(f"Deleted {args.name}")
        elif args.command == "empty":
            catalog.empty()
            print("Trash emptied")
    except (TrashError, OSError) as exc:
        logger.error("%s failed: %s", args.command, exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
