# Filename: config.py
# Author: Rich Lewis @RichLewis007
# Description: Configuration helpers for persistent trash settings. Stores the home trash
#              override, mount resolver choice and log level in an INI file.

from __future__ import annotations

import configparser
import os
from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import PlatformDirs
from platformdirs.unix import Unix

APP_NAME = "trashkit"
ORG_NAME = "Rich Lewis"
HOME_TRASH_NAME = "Trash"

_SECTION_TRASH = "trash"
_SECTION_MOUNTS = "mounts"
_SECTION_LOGGING = "logging"
_KEY_HOME = "home"
_KEY_RESOLVER = "resolver"
_KEY_STATIC = "static"
_KEY_LEVEL = "level"

DEFAULT_RESOLVER = "psutil"
DEFAULT_LOG_LEVEL = "INFO"


def ensure_app_dirs() -> Path:
    # Ensure the configuration directories exist and return the config path.
    dirs = PlatformDirs(appname=APP_NAME, appauthor=ORG_NAME)
    config_path = Path(dirs.user_config_dir)
    log_path = Path(dirs.user_log_dir)

    for path in (config_path, log_path):
        path.mkdir(parents=True, exist_ok=True)

    return config_path


def default_settings_path() -> Path:
    # Return the INI file location inside the user config dir.
    dirs = PlatformDirs(appname=APP_NAME, appauthor=ORG_NAME)
    return Path(dirs.user_config_dir) / "settings.ini"


def default_home_trash() -> Path:
    # $XDG_DATA_HOME/Trash, or ~/.local/share/Trash when the variable is unset.
    return Path(Unix().user_data_dir) / HOME_TRASH_NAME


@dataclass(slots=True)
class TrashSettings:
    # User-tunable settings loaded from settings.ini.

    home_trash: Path | None = None
    mount_resolver: str = DEFAULT_RESOLVER
    static_mounts: list[Path] = field(default_factory=list)
    log_level: str = DEFAULT_LOG_LEVEL
    path: Path | None = None

    @classmethod
    def load(cls, path: Path | None = None) -> TrashSettings:
        # Read settings from ``path``; a missing file yields the defaults.
        path = path or default_settings_path()
        parser = configparser.ConfigParser(interpolation=None)
        parser.read(path, encoding="utf-8")

        home = parser.get(_SECTION_TRASH, _KEY_HOME, fallback="").strip()
        static = parser.get(_SECTION_MOUNTS, _KEY_STATIC, fallback="")
        return cls(
            home_trash=Path(home).expanduser() if home else None,
            mount_resolver=parser.get(
                _SECTION_MOUNTS, _KEY_RESOLVER, fallback=DEFAULT_RESOLVER
            ).strip()
            or DEFAULT_RESOLVER,
            static_mounts=[Path(item) for item in static.split(os.pathsep) if item.strip()],
            log_level=parser.get(_SECTION_LOGGING, _KEY_LEVEL, fallback=DEFAULT_LOG_LEVEL)
            .strip()
            .upper()
            or DEFAULT_LOG_LEVEL,
            path=path,
        )

    def save(self, path: Path | None = None) -> Path:
        # Persist the settings and return the file written.
        path = path or self.path or default_settings_path()
        parser = configparser.ConfigParser(interpolation=None)
        parser[_SECTION_TRASH] = {_KEY_HOME: str(self.home_trash) if self.home_trash else ""}
        parser[_SECTION_MOUNTS] = {
            _KEY_RESOLVER: self.mount_resolver,
            _KEY_STATIC: os.pathsep.join(str(mount) for mount in self.static_mounts),
        }
        parser[_SECTION_LOGGING] = {_KEY_LEVEL: self.log_level}

        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as handle:
            parser.write(handle)
        self.path = path
        return path

    def resolved_home_trash(self) -> Path:
        # Return the configured home trash, or the XDG default.
        return self.home_trash or default_home_trash()
