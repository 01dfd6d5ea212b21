# Filename: formatting.py
# Author: Rich Lewis @RichLewis007
# Description: Formatting helpers for user-facing values. Provides functions to format
#              byte counts and deletion dates for the trash listing.

from __future__ import annotations

from datetime import datetime
from typing import Final

_SIZE_UNITS: Final[tuple[str, ...]] = ("B", "KB", "MB", "GB", "TB", "PB", "EB")
_UNKNOWN_DATE: Final[str] = "????-??-?? ??:??:??"


def format_bytes(
    num_bytes: int | float | None,
    *,
    empty: str = "",
    decimals: int = 2,
) -> str:
    """Return a human-friendly string for a byte count.

    The result always includes thousands separators and two decimal places,
    using binary multiples (powers of 1024) up to exabytes.
    """
    if num_bytes is None:
        return empty

    value = float(max(num_bytes, 0))
    decimals = max(decimals, 0)

    for unit in _SIZE_UNITS:
        if value < 1024 or unit == _SIZE_UNITS[-1]:
            return f"{value:,.{decimals}f} {unit}"
        value /= 1024

    # Fallback; loop always returns before reaching this line.
    return f"{value:,.{decimals}f} {_SIZE_UNITS[-1]}"


def format_deletion_time(value: datetime) -> str:
    """Return the deletion date for display.

    Records without a readable ``DeletionDate`` carry ``datetime.min`` and are
    shown with question marks.
    """
    if value == datetime.min:
        return _UNKNOWN_DATE
    return value.strftime("%Y-%m-%d %H:%M:%S")


__all__ = ["format_bytes", "format_deletion_time"]
