# Filename: locator.py
# Author: Rich Lewis @RichLewis007
# Description: Chooses the trash root for a path. Prefers the per-mount .Trash-<uid> root for
#              paths off the home filesystem and falls back to the home trash when it is unsafe.

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path
from typing import TYPE_CHECKING

from trashkit.models.entry import TRASH_DIR_MODE, TrashRoot

from .errors import TrashError

if TYPE_CHECKING:
    from trashkit.context import TrashContext

logger = logging.getLogger(__name__)


class UnsafeTrashDirError(TrashError):
    """Raised when an existing per-mount trash fails the security check."""


def check_trash_dir_security(trash_dir: Path) -> None:
    """Validate or create a per-mount trash directory.

    A missing directory is created with owner-only permissions. An existing
    one must be a real directory (not a symlink) whose mode is exactly 0700.
    """
    try:
        info = os.lstat(trash_dir)
    except FileNotFoundError:
        os.makedirs(trash_dir, TRASH_DIR_MODE)
        return

    if not stat.S_ISDIR(info.st_mode):
        raise UnsafeTrashDirError(f"Trash path is not a directory: {trash_dir}")
    if stat.S_IMODE(info.st_mode) != TRASH_DIR_MODE:
        raise UnsafeTrashDirError(
            f"Trash directory {trash_dir} has mode {stat.S_IMODE(info.st_mode):o}, expected 700"
        )


class TrashLocator:
    # Maps absolute paths to the trash root that should receive them.

    def __init__(self, context: TrashContext) -> None:
        self._context = context

    def resolve_root(self, abs_path: Path) -> TrashRoot:
        resolver = self._context.resolver
        home = self._context.home_trash
        path_mount = resolver.mount_point(abs_path)
        if path_mount == resolver.mount_point(home.path):
            return home

        candidate = self._context.mount_trash(path_mount)
        try:
            check_trash_dir_security(candidate.path)
        except (OSError, UnsafeTrashDirError) as exc:
            # The move below may become a cross-device copy.
            logger.warning("Falling back to home trash for %s: %s", abs_path, exc)
            return home

        logger.debug("Using mount trash %s for %s", candidate.path, abs_path)
        return candidate
