"""Unit tests for choosing between the home trash and a mount trash."""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path

import pytest

from trashkit.context import TrashContext
from trashkit.services.locator import TrashLocator, UnsafeTrashDirError, check_trash_dir_security


def test_same_mount_uses_home_trash(context: TrashContext, source_dir: Path) -> None:
    root = TrashLocator(context).resolve_root(source_dir / "file.txt")

    assert root == context.home_trash


def test_other_mount_creates_private_trash(context: TrashContext, mount_dir: Path) -> None:
    root = TrashLocator(context).resolve_root(mount_dir / "file.txt")

    assert root.path == mount_dir / f".Trash-{context.uid}"
    assert root.topdir == mount_dir
    assert stat.S_IMODE(root.path.stat().st_mode) == 0o700


def test_existing_private_trash_is_reused(context: TrashContext, mount_dir: Path) -> None:
    trash_dir = mount_dir / f".Trash-{context.uid}"
    trash_dir.mkdir()
    trash_dir.chmod(0o700)

    root = TrashLocator(context).resolve_root(mount_dir / "file.txt")

    assert root.path == trash_dir


def test_loose_permissions_fall_back_to_home(
    context: TrashContext, mount_dir: Path, caplog: pytest.LogCaptureFixture
) -> None:
    trash_dir = mount_dir / f".Trash-{context.uid}"
    trash_dir.mkdir()
    trash_dir.chmod(0o755)

    with caplog.at_level(logging.WARNING):
        root = TrashLocator(context).resolve_root(mount_dir / "file.txt")

    assert root == context.home_trash
    assert "Falling back to home trash" in caplog.text


def test_non_directory_falls_back_to_home(context: TrashContext, mount_dir: Path) -> None:
    (mount_dir / f".Trash-{context.uid}").write_text("not a directory")

    assert TrashLocator(context).resolve_root(mount_dir / "file.txt") == context.home_trash


def test_symlinked_trash_falls_back_to_home(
    context: TrashContext, mount_dir: Path, tmp_path: Path
) -> None:
    real = tmp_path / "elsewhere"
    real.mkdir()
    real.chmod(0o700)
    (mount_dir / f".Trash-{context.uid}").symlink_to(real)

    assert TrashLocator(context).resolve_root(mount_dir / "file.txt") == context.home_trash


def test_security_check_reports_mode(tmp_path: Path) -> None:
    trash_dir = tmp_path / ".Trash-1000"
    trash_dir.mkdir()
    os.chmod(trash_dir, 0o750)

    with pytest.raises(UnsafeTrashDirError, match="750"):
        check_trash_dir_security(trash_dir)
