# Filename: trashinfo.py
# Author: Rich Lewis @RichLewis007
# Description: Reader and writer for freedesktop .trashinfo records. Serialises the original
#              path and deletion date of a trashed item and parses them back.

from __future__ import annotations

import os
import re
from datetime import datetime
from pathlib import Path
from urllib.parse import quote, unquote_to_bytes

from trashkit.services.errors import InvalidTrashInfoError

HEADER = "[Trash Info]"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"
INFO_FILE_MODE = 0o600

_PATH_KEY = "Path="
_DATE_KEY = "DeletionDate="
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def escape_path(path: Path | str) -> str:
    # Percent-escape a path, keeping "/" literal and encoding spaces as %20.
    return quote(os.fsencode(path), safe="/")


def unescape_path(value: str) -> str:
    # Reverse escape_path, rejecting truncated or non-hex escapes.
    if _BAD_ESCAPE.search(value):
        raise InvalidTrashInfoError(f"Malformed percent escape in path: {value!r}")
    return os.fsdecode(unquote_to_bytes(value))


def format_trash_info(original_path: Path | str, deletion_time: datetime) -> str:
    # Render the three-line record body.
    stamp = deletion_time.replace(microsecond=0, tzinfo=None).strftime(DATE_FORMAT)
    return f"{HEADER}\n{_PATH_KEY}{escape_path(original_path)}\n{_DATE_KEY}{stamp}\n"


def write_trash_info(
    metadata_path: Path,
    original_path: Path | str,
    deletion_time: datetime | None = None,
) -> None:
    """Write a .trashinfo record with owner-only permissions.

    ``deletion_time`` defaults to the current local time. The record is created
    exclusively, so an existing file at ``metadata_path`` raises FileExistsError.
    """
    if deletion_time is None:
        deletion_time = datetime.now()
    content = format_trash_info(original_path, deletion_time).encode("utf-8")

    fd = os.open(metadata_path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, INFO_FILE_MODE)
    with os.fdopen(fd, "wb") as handle:
        handle.write(content)


def parse_trash_info_text(
    content: str, *, topdir: Path | None = None
) -> tuple[Path, datetime]:
    """Parse the body of a .trashinfo record.

    Only the ``Path`` field is load-bearing. A missing or unparsable
    ``DeletionDate`` yields ``datetime.min``. Relative paths, which other tools
    write into per-mount trashes, are resolved against ``topdir``.
    """
    lines = content.split("\n")
    if len(lines) < 3 or lines[0] != HEADER:
        raise InvalidTrashInfoError("Missing [Trash Info] header")

    raw_path: str | None = None
    deletion_time = datetime.min
    for line in lines[1:]:
        if line.startswith(_PATH_KEY) and raw_path is None:
            raw_path = line[len(_PATH_KEY) :]
        elif line.startswith(_DATE_KEY):
            try:
                deletion_time = datetime.strptime(line[len(_DATE_KEY) :].strip(), DATE_FORMAT)
            except ValueError:
                deletion_time = datetime.min

    if not raw_path:
        raise InvalidTrashInfoError("Missing Path entry")

    original = Path(unescape_path(raw_path))
    if not original.is_absolute():
        if topdir is None:
            raise InvalidTrashInfoError(f"Relative path outside a mount trash: {raw_path!r}")
        original = topdir / original
    return original, deletion_time


def parse_trash_info(
    metadata_path: Path, *, topdir: Path | None = None
) -> tuple[Path, datetime]:
    # Read and parse the record stored at ``metadata_path``.
    content = metadata_path.read_text(encoding="utf-8", errors="surrogateescape")
    return parse_trash_info_text(content, topdir=topdir)
