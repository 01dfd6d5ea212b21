# Filename: context.py
# Author: Rich Lewis @RichLewis007
# Description: Explicit per-process trash context. Computes the home trash root, numeric user
#              id and mount resolver once, to be threaded through every trash operation.

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .models.entry import TrashRoot
from .services.config import TrashSettings
from .services.errors import NoTrashAvailableError
from .services.mounts import MountResolver, build_resolver

logger = logging.getLogger(__name__)

MOUNT_TRASH_PREFIX = ".Trash-"


@dataclass(frozen=True, slots=True)
class TrashContext:
    """Everything the trash engine needs that is computed once per process.

    Build it with :meth:`create` and hand the same instance to the catalog and
    to :func:`trashkit.put.put`. A failure while building it is raised from
    :meth:`create`, so callers never see a half-initialised context.
    """

    home_trash: TrashRoot
    uid: int
    resolver: MountResolver

    @classmethod
    def create(
        cls,
        settings: TrashSettings | None = None,
        *,
        home: Path | None = None,
        uid: int | None = None,
        resolver: MountResolver | None = None,
    ) -> TrashContext:
        settings = settings or TrashSettings()
        try:
            home_path = Path(os.path.abspath(home or settings.resolved_home_trash()))
            home_trash = TrashRoot(home_path)
            home_trash.ensure()
        except OSError as exc:
            raise NoTrashAvailableError(f"Cannot prepare home trash: {exc}") from exc

        if uid is None:
            try:
                uid = os.getuid()
            except AttributeError as exc:
                raise NoTrashAvailableError("Numeric user ids are not available") from exc

        if resolver is None:
            try:
                resolver = build_resolver(
                    settings.mount_resolver, static_mounts=settings.static_mounts
                )
            except ValueError as exc:
                raise NoTrashAvailableError(str(exc)) from exc

        logger.debug("Trash context ready: home=%s uid=%s", home_trash.path, uid)
        return cls(home_trash=home_trash, uid=uid, resolver=resolver)

    @property
    def mount_trash_name(self) -> str:
        return f"{MOUNT_TRASH_PREFIX}{self.uid}"

    def mount_trash(self, mount: Path) -> TrashRoot:
        # Return the per-uid trash root at the top of ``mount``.
        return TrashRoot(mount / self.mount_trash_name, topdir=mount)
