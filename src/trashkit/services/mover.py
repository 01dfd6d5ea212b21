# Filename: mover.py
# Author: Rich Lewis @RichLewis007
# Description: Physical relocation of files, directories and symlinks. Uses an atomic rename
#              when possible and falls back to copy-then-delete across storage devices.

from __future__ import annotations

import contextlib
import errno
import logging
import os
import shutil
import stat
from pathlib import Path

from .errors import CrossDeviceError

logger = logging.getLogger(__name__)

_COPY_CHUNK = 1024 * 1024


def rename(src: Path, dst: Path) -> None:
    # Rename ``src`` to ``dst``, signalling EXDEV as CrossDeviceError.
    try:
        os.rename(src, dst)
    except OSError as exc:
        if exc.errno == errno.EXDEV:
            raise CrossDeviceError(f"Cannot rename {src} to {dst} across devices") from exc
        raise


def move(src: Path, dst: Path) -> None:
    """Move ``src`` to ``dst``, copying across devices when a rename cannot.

    Symlinks are recreated and never followed. Errors other than a cross-device
    rename propagate unchanged. The source is removed only after the copy has
    fully succeeded, so a failed directory copy leaves a partial ``dst`` behind
    next to an intact ``src``.
    """
    try:
        rename(src, dst)
        return
    except CrossDeviceError:
        logger.debug("Cross-device move, copying %s to %s", src, dst)

    info = os.lstat(src)
    copy_entry(src, dst, info)
    remove_tree(src, info)


def copy_entry(src: Path, dst: Path, info: os.stat_result | None = None) -> None:
    # Copy one entry of any supported type without touching the source.
    if info is None:
        info = os.lstat(src)
    if stat.S_ISLNK(info.st_mode):
        copy_symlink(src, dst)
    elif stat.S_ISDIR(info.st_mode):
        copy_directory(src, dst, info)
    else:
        copy_file(src, dst, info)


def copy_symlink(src: Path, dst: Path) -> None:
    # Recreate the link itself. Its mtime cannot be carried over portably.
    os.symlink(os.readlink(src), dst)


def copy_file(src: Path, dst: Path, info: os.stat_result) -> None:
    # Copy bytes, permission bits and timestamps into a freshly created ``dst``.
    mode = stat.S_IMODE(info.st_mode)
    with open(src, "rb") as source:
        fd = os.open(dst, os.O_WRONLY | os.O_CREAT | os.O_EXCL, mode)
        try:
            with os.fdopen(fd, "wb") as target:
                shutil.copyfileobj(source, target, _COPY_CHUNK)
            os.chmod(dst, mode)
            os.utime(dst, ns=(info.st_atime_ns, info.st_mtime_ns))
        except BaseException:
            with contextlib.suppress(OSError):
                os.remove(dst)
            raise


def copy_directory(src: Path, dst: Path, info: os.stat_result) -> None:
    # Recreate the tree under ``dst``. Mode and mtime are applied after the children.
    os.mkdir(dst, 0o700)
    with os.scandir(src) as entries:
        children = list(entries)

    for child in children:
        child_src = src / child.name
        child_dst = dst / child.name
        # A symlink to a directory must be copied as a link, not recursed into.
        if child.is_symlink():
            copy_symlink(child_src, child_dst)
        elif child.is_dir(follow_symlinks=False):
            copy_directory(child_src, child_dst, os.lstat(child_src))
        else:
            copy_file(child_src, child_dst, os.lstat(child_src))

    os.chmod(dst, stat.S_IMODE(info.st_mode))
    os.utime(dst, ns=(info.st_atime_ns, info.st_mtime_ns))


def remove_tree(path: Path, info: os.stat_result | None = None) -> None:
    # Remove a file, symlink or directory tree without following links.
    if info is None:
        info = os.lstat(path)
    if stat.S_ISDIR(info.st_mode):
        shutil.rmtree(path)
    else:
        os.remove(path)
