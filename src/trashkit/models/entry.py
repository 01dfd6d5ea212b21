# Filename: entry.py
# Author: Rich Lewis @RichLewis007
# Description: Data structures for trash roots and trashed entries, plus the tagged
#              outcomes yielded while scanning a root's metadata directory.

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

FILES_DIR = "files"
INFO_DIR = "info"
INFO_SUFFIX = ".trashinfo"
TRASH_DIR_MODE = 0o700


def make_trash_dir(directory: Path) -> None:
    # Create ``directory`` as 0700. Missing parents get the default mode.
    os.makedirs(directory.parent, exist_ok=True)
    try:
        os.mkdir(directory, TRASH_DIR_MODE)
    except FileExistsError:
        if not os.path.isdir(directory):
            raise


@dataclass(frozen=True, slots=True)
class TrashRoot:
    # A trash directory holding a files/ and an info/ subdirectory.

    path: Path
    topdir: Path | None = None

    @property
    def is_home(self) -> bool:
        # Home roots have no mount topdir.
        return self.topdir is None

    @property
    def files_dir(self) -> Path:
        return self.path / FILES_DIR

    @property
    def info_dir(self) -> Path:
        return self.path / INFO_DIR

    def data_path(self, name: str) -> Path:
        # Return where the data object for ``name`` lives.
        return self.files_dir / name

    def metadata_path(self, name: str) -> Path:
        # Return where the .trashinfo record for ``name`` lives.
        return self.info_dir / f"{name}{INFO_SUFFIX}"

    def ensure(self) -> None:
        # Create the root and both subdirectories with owner-only permissions.
        make_trash_dir(self.path)
        for directory in (self.files_dir, self.info_dir):
            make_trash_dir(directory)


@dataclass(frozen=True, slots=True)
class TrashEntry:
    # A logical trash item reconstructed from its metadata and data pair.

    name: str
    original_path: Path
    deletion_time: datetime
    data_path: Path
    metadata_path: Path
    root: TrashRoot


@dataclass(frozen=True, slots=True)
class ParsedEntry:
    # Scan outcome for a record that parsed cleanly.

    entry: TrashEntry


@dataclass(frozen=True, slots=True)
class SkippedEntry:
    # Scan outcome for a record that could not be parsed.

    root: TrashRoot
    metadata_path: Path
    reason: Exception


ScanOutcome = ParsedEntry | SkippedEntry
