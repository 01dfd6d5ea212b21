# Filename: naming.py
# Author: Rich Lewis @RichLewis007
# Description: Collision-free name generation for trash entries. Probes numbered suffixes
#              across a root's files/ and info/ directories before falling back to random hex.

from __future__ import annotations

import os
import secrets
from pathlib import Path
from typing import Final

from .entry import INFO_DIR, INFO_SUFFIX, TrashRoot

MAX_PROBES: Final[int] = 100
RANDOM_SUFFIX_BYTES: Final[int] = 8
EMPTY_NAME_PLACEHOLDER: Final[str] = "unnamed"
DOT_NAME_PLACEHOLDER: Final[str] = "dot"


def sanitize_name(name: str) -> str:
    # Map names that cannot be used as a directory entry to placeholders.
    name = name.strip()
    if not name:
        return EMPTY_NAME_PLACEHOLDER
    if name == ".":
        return DOT_NAME_PLACEHOLDER
    return name


def is_name_free(name: str, root: TrashRoot) -> bool:
    # True when neither the data object nor the metadata record exists.
    return not (
        os.path.lexists(root.data_path(name)) or os.path.lexists(root.metadata_path(name))
    )


def generate_name(base_name: str, root: TrashRoot) -> str:
    """Return a name for ``base_name`` that is unused within ``root``.

    Tries ``name``, ``name.1`` ... ``name.99``. When all are taken the name gets
    a random hex suffix without a further existence check.
    """
    base = sanitize_name(base_name)
    for attempt in range(MAX_PROBES):
        candidate = base if attempt == 0 else f"{base}.{attempt}"
        if is_name_free(candidate, root):
            return candidate
    return f"{base}.{secrets.token_hex(RANDOM_SUFFIX_BYTES)}"


def unique_put_name(files_dir: Path, base_name: str) -> Path:
    # Return a free path in ``files_dir``, inserting _N before the extension.
    # A name is taken when either its data or its sibling info/ record exists.
    info_dir = files_dir.parent / INFO_DIR

    def taken(name: str) -> bool:
        return os.path.lexists(files_dir / name) or os.path.lexists(
            info_dir / f"{name}{INFO_SUFFIX}"
        )

    if not taken(base_name):
        return files_dir / base_name

    stem, ext = os.path.splitext(base_name)
    counter = 1
    while taken(f"{stem}_{counter}{ext}"):
        counter += 1
    return files_dir / f"{stem}_{counter}{ext}"
