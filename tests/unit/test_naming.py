"""Unit tests for trash entry name generation."""

from __future__ import annotations

import re
from pathlib import Path

import pytest

from trashkit.models.entry import TrashRoot
from trashkit.models.naming import (
    MAX_PROBES,
    generate_name,
    sanitize_name,
    unique_put_name,
)


@pytest.fixture(name="root")
def fixture_root(tmp_path: Path) -> TrashRoot:
    root = TrashRoot(tmp_path / "Trash")
    root.ensure()
    return root


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("", "unnamed"), ("   ", "unnamed"), (".", "dot"), (" report.pdf ", "report.pdf")],
)
def test_sanitize_name(raw: str, expected: str) -> None:
    assert sanitize_name(raw) == expected


def test_bare_name_used_when_free(root: TrashRoot) -> None:
    assert generate_name("notes.txt", root) == "notes.txt"


def test_numbered_suffix_appended_after_extension(root: TrashRoot) -> None:
    root.data_path("notes.txt").write_text("one")
    root.data_path("notes.txt.1").write_text("two")

    assert generate_name("notes.txt", root) == "notes.txt.2"


def test_orphaned_metadata_reserves_the_name(root: TrashRoot) -> None:
    root.metadata_path("notes.txt").write_text("[Trash Info]\n")

    assert generate_name("notes.txt", root) == "notes.txt.1"


def test_dangling_symlink_reserves_the_name(root: TrashRoot) -> None:
    root.data_path("link").symlink_to(root.path / "nowhere")

    assert generate_name("link", root) == "link.1"


def test_random_suffix_after_probe_limit(root: TrashRoot) -> None:
    root.data_path("busy").write_text("0")
    for attempt in range(1, MAX_PROBES):
        root.data_path(f"busy.{attempt}").write_text(str(attempt))

    name = generate_name("busy", root)

    assert re.fullmatch(r"busy\.[0-9a-f]{16}", name)


def test_put_name_inserts_counter_before_extension(tmp_path: Path) -> None:
    (tmp_path / "photo.jpg").write_text("a")
    (tmp_path / "photo_1.jpg").write_text("b")

    assert unique_put_name(tmp_path, "photo.jpg") == tmp_path / "photo_2.jpg"
    assert unique_put_name(tmp_path, "fresh.jpg") == tmp_path / "fresh.jpg"


def test_put_name_without_extension(tmp_path: Path) -> None:
    (tmp_path / "Makefile").write_text("all:")

    assert unique_put_name(tmp_path, "Makefile") == tmp_path / "Makefile_1"


def test_put_name_skips_orphaned_info_record(root: TrashRoot) -> None:
    root.metadata_path("doc.txt").write_text("[Trash Info]\nPath=/elsewhere/doc.txt\n")

    assert unique_put_name(root.files_dir, "doc.txt") == root.files_dir / "doc_1.txt"
