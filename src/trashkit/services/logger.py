# Filename: logger.py
# Author: Rich Lewis @RichLewis007
# Description: Logging configuration for the trashkit command line. Sends a full debug trail
#              to a rotating log file and short level-filtered messages to stderr.

from __future__ import annotations

import logging
import logging.handlers
import sys
from pathlib import Path

from platformdirs import PlatformDirs

from .config import APP_NAME, ORG_NAME

LOG_FILENAME = f"{APP_NAME}.log"
LOG_MAX_BYTES = 2 * 1024 * 1024
LOG_BACKUP_COUNT = 5

FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
CONSOLE_FORMAT = f"{APP_NAME}: %(levelname)s: %(message)s"


def _get_log_path(log_file: Path | None = None) -> Path:
    # Return the rotating log file path, creating its folder as needed.
    if log_file is None:
        dirs = PlatformDirs(appname=APP_NAME, appauthor=ORG_NAME)
        log_file = Path(dirs.user_log_dir) / LOG_FILENAME
    log_file.parent.mkdir(parents=True, exist_ok=True)
    return log_file


def configure(*, log_level: str = "INFO", log_file: Path | None = None) -> None:
    """Route trashkit logging to a rotating file and to stderr.

    The file always records DEBUG. ``log_level`` only filters the console, which
    is where the CLI reports failed operations.
    """
    file_handler = logging.handlers.RotatingFileHandler(
        _get_log_path(log_file),
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    file_handler.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    console_handler.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    # Replace handlers from an earlier call instead of stacking them.
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()
    root.addHandler(file_handler)
    root.addHandler(console_handler)
