# Filename: catalog.py
# Author: Rich Lewis @RichLewis007
# Description: Public trash catalog. Trashes paths and lists, restores, deletes and empties
#              entries across the home trash and every per-mount .Trash-<uid> root.

from __future__ import annotations

import builtins
import contextlib
import logging
import os
from collections.abc import Iterator
from datetime import datetime
from pathlib import Path

from .context import TrashContext
from .models.entry import INFO_SUFFIX, ParsedEntry, ScanOutcome, SkippedEntry, TrashEntry, TrashRoot
from .models.naming import generate_name
from .models.trashinfo import parse_trash_info, write_trash_info
from .services import mover
from .services.errors import (
    AlreadyExistsError,
    FileNotInTrashError,
    InvalidTrashInfoError,
    PathNotFoundError,
    RestoreFailedError,
    TrashOperationError,
)
from .services.locator import TrashLocator
from .services.mounts import ROOT_MOUNT

logger = logging.getLogger(__name__)


class Catalog:
    """Trash, list, restore, delete and empty operations.

    Entries are identified by name, which is only unique within one root.
    Lookups by name probe the home trash first and then each mount trash in
    the order the resolver reports them.
    """

    def __init__(self, context: TrashContext) -> None:
        self.context = context
        self.locator = TrashLocator(context)

    # ------------------------------------------------------------------
    # Roots

    def roots(self) -> list[TrashRoot]:
        # Return the home root followed by every mount root that exists.
        roots = [self.context.home_trash]
        try:
            mounts = self.context.resolver.mount_points()
        except OSError as exc:
            logger.warning("Cannot enumerate mount points: %s", exc)
            return roots

        for mount in mounts:
            if mount == ROOT_MOUNT:
                continue
            root = self.context.mount_trash(mount)
            if root.path == self.context.home_trash.path or root in roots:
                continue
            if os.path.isdir(root.path):
                roots.append(root)
        return roots

    # ------------------------------------------------------------------
    # Trash

    def trash(self, path: Path | str) -> TrashEntry:
        """Move ``path`` into the appropriate trash root.

        The metadata record is written before the data is moved. If the move
        fails the record is removed again. A crash in between leaves an orphaned
        record with no data object.
        """
        abs_path = Path(os.path.abspath(path))
        if not os.path.lexists(abs_path):
            raise PathNotFoundError(f"No such file or directory: {abs_path}")

        root = self.locator.resolve_root(abs_path)
        try:
            root.ensure()
        except OSError as exc:
            raise TrashOperationError(f"Failed to create trash directories in {root.path}") from exc

        name = generate_name(abs_path.name, root)
        data_path = root.data_path(name)
        metadata_path = root.metadata_path(name)
        deletion_time = datetime.now().replace(microsecond=0)

        try:
            write_trash_info(metadata_path, abs_path, deletion_time)
        except OSError as exc:
            raise TrashOperationError(f"Failed to write trash info {metadata_path}") from exc

        try:
            mover.move(abs_path, data_path)
        except OSError as exc:
            with contextlib.suppress(OSError):
                os.remove(metadata_path)
            raise TrashOperationError(f"Failed to move {abs_path} to trash") from exc

        logger.debug("Trashed %s as %s in %s", abs_path, name, root.path)
        return TrashEntry(
            name=name,
            original_path=abs_path,
            deletion_time=deletion_time,
            data_path=data_path,
            metadata_path=metadata_path,
            root=root,
        )

    # ------------------------------------------------------------------
    # Scanning

    def scan(self) -> Iterator[ScanOutcome]:
        # Yield one tagged outcome per metadata record across all roots.
        for root in self.roots():
            yield from self.scan_root(root)

    def scan_root(self, root: TrashRoot) -> Iterator[ScanOutcome]:
        # Yield outcomes for a single root; a missing info/ yields nothing.
        try:
            with os.scandir(root.info_dir) as entries:
                names = sorted(
                    entry.name
                    for entry in entries
                    if entry.name.endswith(INFO_SUFFIX) and not entry.is_dir()
                )
        except FileNotFoundError:
            return
        except OSError as exc:
            logger.warning("Cannot read %s: %s", root.info_dir, exc)
            return

        for filename in names:
            metadata_path = root.info_dir / filename
            try:
                entry = self._load_entry(root, filename[: -len(INFO_SUFFIX)])
            except (InvalidTrashInfoError, OSError) as exc:
                logger.debug("Skipping %s: %s", metadata_path, exc)
                yield SkippedEntry(root=root, metadata_path=metadata_path, reason=exc)
                continue
            yield ParsedEntry(entry)

    # ------------------------------------------------------------------
    # Lookup

    def find(self, name: str) -> TrashEntry:
        # Locate ``name`` in the home root first, then in each mount root.
        if name in ("", ".", "..") or os.path.basename(name) != name:
            raise FileNotInTrashError(f"Not in trash: {name}")
        for root in self.roots():
            if os.path.isfile(root.metadata_path(name)):
                try:
                    return self._load_entry(root, name)
                except OSError as exc:
                    raise TrashOperationError(
                        f"Failed to read trash info {root.metadata_path(name)}"
                    ) from exc
        raise FileNotInTrashError(f"Not in trash: {name}")

    def _load_entry(self, root: TrashRoot, name: str) -> TrashEntry:
        metadata_path = root.metadata_path(name)
        original_path, deletion_time = parse_trash_info(metadata_path, topdir=root.topdir)
        return TrashEntry(
            name=name,
            original_path=original_path,
            deletion_time=deletion_time,
            data_path=root.data_path(name),
            metadata_path=metadata_path,
            root=root,
        )

    # ------------------------------------------------------------------
    # Restore / delete / empty

    def restore(self, name: str) -> TrashEntry:
        """Move the entry called ``name`` back to its original path.

        If the metadata cannot be removed afterwards, the data is moved back
        into the trash and RestoreFailedError is raised. When that compensation
        fails too, the data stays restored next to a stale record.
        """
        entry = self.find(name)
        target = entry.original_path
        if os.path.lexists(target):
            raise AlreadyExistsError(f"File already exists at destination: {target}")

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise TrashOperationError(f"Failed to create parent directory {target.parent}") from exc

        try:
            mover.move(entry.data_path, target)
        except OSError as exc:
            raise TrashOperationError(f"Failed to restore {name} to {target}") from exc

        try:
            os.remove(entry.metadata_path)
        except OSError as exc:
            try:
                mover.move(target, entry.data_path)
            except OSError as undo_exc:
                logger.error("Could not return %s to trash: %s", target, undo_exc)
            raise RestoreFailedError(
                f"Failed to remove trash info {entry.metadata_path}"
            ) from exc

        logger.debug("Restored %s to %s", name, target)
        return entry

    def delete(self, name: str) -> None:
        # Permanently remove the entry's data object and then its record.
        entry = self.find(name)
        try:
            mover.remove_tree(entry.data_path)
        except FileNotFoundError:
            logger.debug("Data for %s already gone", name)
        except OSError as exc:
            raise TrashOperationError(f"Failed to remove {entry.data_path}") from exc

        try:
            os.remove(entry.metadata_path)
        except OSError as exc:
            raise TrashOperationError(f"Failed to remove trash info {entry.metadata_path}") from exc
        logger.debug("Deleted %s from %s", name, entry.root.path)

    def empty(self) -> None:
        # Purge every root. The first removal failure aborts the whole run.
        for root in self.roots():
            for directory in (root.files_dir, root.info_dir):
                try:
                    _empty_dir(directory)
                except OSError as exc:
                    raise TrashOperationError(f"Failed to empty {directory}") from exc
            logger.debug("Emptied %s", root.path)

    # ------------------------------------------------------------------
    # Listing

    def list(self, *, strict: bool = False) -> builtins.list[TrashEntry]:
        """Return every readable entry in every root.

        Records that fail to parse are left out. With ``strict=True`` the first
        such failure is raised instead.
        """
        entries: builtins.list[TrashEntry] = []
        for outcome in self.scan():
            if isinstance(outcome, SkippedEntry):
                if strict:
                    raise InvalidTrashInfoError(
                        f"Invalid trash info {outcome.metadata_path}: {outcome.reason}"
                    ) from outcome.reason
                continue
            entries.append(outcome.entry)
        return entries


def _empty_dir(directory: Path) -> None:
    try:
        with os.scandir(directory) as entries:
            children = [Path(entry.path) for entry in entries]
    except FileNotFoundError:
        return
    for child in children:
        mover.remove_tree(child)
