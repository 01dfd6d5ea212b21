# Filename: put.py
# Author: Rich Lewis @RichLewis007
# Description: Simple trash entry point that always targets the per-mount .Trash-<uid>/files
#              directory, naming collisions name_N.ext and writing metadata after the move.

from __future__ import annotations

import logging
import os
from datetime import datetime
from pathlib import Path

from .context import TrashContext
from .models.entry import INFO_DIR, INFO_SUFFIX, make_trash_dir
from .models.naming import unique_put_name
from .models.trashinfo import write_trash_info
from .services import mover
from .services.errors import PathNotFoundError, TrashOperationError

logger = logging.getLogger(__name__)


def put_files_dir(path: Path, context: TrashContext) -> Path:
    # Return the mount's files/ directory, or the home one if it cannot be created.
    mount = context.resolver.mount_point(path)
    root = context.mount_trash(mount)
    try:
        make_trash_dir(root.path)
        make_trash_dir(root.files_dir)
        return root.files_dir
    except OSError as exc:
        logger.debug("Cannot use %s (%s), using home trash", root.files_dir, exc)

    home = context.home_trash
    fallback = home.files_dir
    try:
        make_trash_dir(home.path)
        make_trash_dir(fallback)
    except OSError as exc:
        raise TrashOperationError(f"Failed to create trash directory {fallback}") from exc
    return fallback


def put(path: Path | str, context: TrashContext) -> Path:
    """Move ``path`` into its mount's trash and return where it landed.

    Unlike :meth:`trashkit.catalog.Catalog.trash` the data is moved first and
    the .trashinfo record is written afterwards. When writing the record fails,
    the raised TrashOperationError carries ``trashed_path``.
    """
    abs_path = Path(os.path.abspath(path))
    if not os.path.lexists(abs_path):
        raise PathNotFoundError(f"Cannot trash non-existent file: {abs_path}")

    files_dir = put_files_dir(abs_path, context)
    dest = unique_put_name(files_dir, abs_path.name)

    try:
        mover.move(abs_path, dest)
    except OSError as exc:
        raise TrashOperationError(f"Failed to move {abs_path} to trash") from exc

    info_dir = files_dir.parent / INFO_DIR
    metadata_path = info_dir / f"{dest.name}{INFO_SUFFIX}"
    try:
        make_trash_dir(info_dir)
        write_trash_info(metadata_path, abs_path, datetime.now())
    except OSError as exc:
        raise TrashOperationError(
            f"File trashed to {dest} but failed to write trash info", trashed_path=dest
        ) from exc

    logger.debug("File moved to trash: %s", dest)
    return dest


__all__ = ["put", "put_files_dir"]
