# Filename: errors.py
# Author: Rich Lewis @RichLewis007
# Description: Exception hierarchy for trash operations. Every error raised by the catalog,
#              locator, mover and metadata store derives from TrashError.

from __future__ import annotations

from pathlib import Path


class TrashError(Exception):
    """Base exception for all trash errors."""


class PathNotFoundError(TrashError):
    """Raised when the path to trash does not exist."""


class InvalidTrashInfoError(TrashError):
    """Raised when a .trashinfo record is malformed."""


class FileNotInTrashError(TrashError):
    """Raised when a name matches no entry in any trash root."""


class RestoreFailedError(TrashError):
    """Raised when a restore had to roll back after the data was moved."""


class AlreadyExistsError(TrashError):
    """Raised when the restore target is already occupied."""


class CrossDeviceError(TrashError):
    """Raised by a rename that crossed storage devices. Consumed by the mover."""


class NoTrashAvailableError(TrashError):
    """Raised when the home trash or user id cannot be determined."""


class TrashOperationError(TrashError):
    """Raised on filesystem failures, wrapped with the failing operation."""

    def __init__(self, message: str, *, trashed_path: Path | None = None) -> None:
        super().__init__(message)
        self.trashed_path = trashed_path
