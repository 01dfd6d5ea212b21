# Filename: mounts.py
# Author: Rich Lewis @RichLewis007
# Description: Mount point discovery. Defines the MountResolver protocol and the psutil,
#              /proc/mounts and static implementations selected through configuration.

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterable
from pathlib import Path
from typing import Final, Protocol

import psutil

logger = logging.getLogger(__name__)

ROOT_MOUNT: Final[Path] = Path("/")
PROC_MOUNTS: Final[Path] = Path("/proc/mounts")
_OCTAL_ESCAPE = re.compile(r"\\([0-7]{3})")


class MountResolver(Protocol):
    # Capability for mapping paths to the filesystem they live on.

    def mount_point(self, path: Path) -> Path: ...

    def mount_points(self) -> list[Path]: ...


def longest_mount(path: Path, mounts: Iterable[Path]) -> Path:
    """Return the deepest mount in ``mounts`` that contains ``path``.

    Matching is done per path component, so ``/mnt/data2`` does not fall under
    a ``/mnt/data`` mount. Falls back to ``/`` when nothing matches.
    """
    absolute = Path(os.path.abspath(path))
    best: Path | None = None
    for mount in mounts:
        if absolute.is_relative_to(mount) and (best is None or len(mount.parts) > len(best.parts)):
            best = mount
    return best if best is not None else ROOT_MOUNT


def unescape_mount_field(value: str) -> str:
    # Decode the \\040-style octal escapes used in /proc/mounts.
    return _OCTAL_ESCAPE.sub(lambda match: chr(int(match.group(1), 8)), value)


class _ListingResolver:
    # Shared mount_point() for resolvers that can enumerate their mounts.

    def mount_points(self) -> list[Path]:
        raise NotImplementedError

    def mount_point(self, path: Path) -> Path:
        mount = longest_mount(path, self.mount_points())
        logger.debug("Mount point for %s is %s", path, mount)
        return mount


class PsutilMountResolver(_ListingResolver):
    # Portable resolver backed by psutil's partition table.

    def mount_points(self) -> list[Path]:
        partitions = psutil.disk_partitions(all=True)
        return _dedupe(Path(part.mountpoint) for part in partitions if part.mountpoint)


class ProcMountsResolver(_ListingResolver):
    # Linux resolver that reads the kernel mount table directly.

    def __init__(self, mounts_file: Path = PROC_MOUNTS) -> None:
        self.mounts_file = mounts_file

    def mount_points(self) -> list[Path]:
        mounts: list[Path] = []
        with self.mounts_file.open(encoding="utf-8", errors="surrogateescape") as handle:
            for line in handle:
                fields = line.split()
                if len(fields) >= 2:
                    mounts.append(Path(unescape_mount_field(fields[1])))
        return _dedupe(mounts)


class StaticMountResolver(_ListingResolver):
    # Resolver over a fixed list, for tests and platforms without a mount table.

    def __init__(self, mounts: Iterable[Path | str] = (ROOT_MOUNT,)) -> None:
        self._mounts = _dedupe(Path(mount) for mount in mounts)

    def mount_points(self) -> list[Path]:
        return list(self._mounts)


RESOLVERS: Final[dict[str, type[_ListingResolver]]] = {
    "psutil": PsutilMountResolver,
    "proc": ProcMountsResolver,
    "static": StaticMountResolver,
}


def build_resolver(name: str, *, static_mounts: Iterable[Path | str] = ()) -> MountResolver:
    # Instantiate the resolver registered under ``name``.
    key = name.strip().lower()
    if key not in RESOLVERS:
        raise ValueError(f"Unknown mount resolver: {name}")
    if key == "static":
        mounts = list(static_mounts) or [ROOT_MOUNT]
        return StaticMountResolver(mounts)
    return RESOLVERS[key]()


def _dedupe(mounts: Iterable[Path]) -> list[Path]:
    seen: list[Path] = []
    for mount in mounts:
        if mount not in seen:
            seen.append(mount)
    return seen
