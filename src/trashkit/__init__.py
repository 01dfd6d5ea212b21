# Filename: __init__.py
# Author: Rich Lewis @RichLewis007
# Description: Top-level package initialization for trashkit. Re-exports the catalog,
#              context, secondary put entry point and error types.

from .catalog import Catalog
from .context import TrashContext
from .models.entry import ParsedEntry, SkippedEntry, TrashEntry, TrashRoot
from .put import put
from .services.errors import (
    AlreadyExistsError,
    CrossDeviceError,
    FileNotInTrashError,
    InvalidTrashInfoError,
    NoTrashAvailableError,
    PathNotFoundError,
    RestoreFailedError,
    TrashError,
    TrashOperationError,
)

__all__ = [
    "AlreadyExistsError",
    "Catalog",
    "CrossDeviceError",
    "FileNotInTrashError",
    "InvalidTrashInfoError",
    "NoTrashAvailableError",
    "ParsedEntry",
    "PathNotFoundError",
    "RestoreFailedError",
    "SkippedEntry",
    "TrashContext",
    "TrashEntry",
    "TrashError",
    "TrashOperationError",
    "TrashRoot",
    "__author__",
    "__version__",
    "put",
]

__version__ = "0.1.0"
__author__ = "Rich Lewis"
