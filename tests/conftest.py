"""Shared fixtures building an isolated trash context under ``tmp_path``."""

from __future__ import annotations

import errno
import logging
import os
from collections.abc import Iterator
from pathlib import Path

import pytest

from trashkit.catalog import Catalog
from trashkit.context import TrashContext
from trashkit.services.mounts import StaticMountResolver


@pytest.fixture(name="mount_dir")
def fixture_mount_dir(tmp_path: Path) -> Path:
    """A directory the resolver treats as a separate mount point."""
    mount = tmp_path / "mnt"
    mount.mkdir()
    return mount


@pytest.fixture(name="source_dir")
def fixture_source_dir(tmp_path: Path) -> Path:
    """A directory on the same "filesystem" as the home trash."""
    source = tmp_path / "src"
    source.mkdir()
    return source


@pytest.fixture(name="context")
def fixture_context(tmp_path: Path, mount_dir: Path) -> TrashContext:
    return TrashContext.create(
        home=tmp_path / "home" / ".local" / "share" / "Trash",
        uid=os.getuid(),
        resolver=StaticMountResolver(["/", mount_dir]),
    )


@pytest.fixture(name="catalog")
def fixture_catalog(context: TrashContext) -> Catalog:
    return Catalog(context)


@pytest.fixture(name="cross_device")
def fixture_cross_device(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make every rename fail as if source and destination were on different devices."""

    def fake_rename(src: object, dst: object) -> None:
        raise OSError(errno.EXDEV, "Invalid cross-device link")

    monkeypatch.setattr(os, "rename", fake_rename)


@pytest.fixture(name="restore_root_logging")
def fixture_restore_root_logging() -> Iterator[None]:
    """Undo handler changes made by logger.configure()."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
