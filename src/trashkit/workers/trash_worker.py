# Filename: trash_worker.py
# Author: Rich Lewis @RichLewis007
# Description: Batch worker for trashing several paths. Reports progress and failures through
#              callbacks and keeps going when an individual path cannot be trashed.

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

from trashkit.catalog import Catalog
from trashkit.models.entry import TrashEntry
from trashkit.services.errors import TrashError

ProgressCallback = Callable[[int, int, Path], None]
ErrorCallback = Callable[[Path, Exception], None]


@dataclass(slots=True)
class TrashBatchResult:
    # Summary of a batch request, split into successes and failures.

    trashed: list[TrashEntry] = field(default_factory=list)
    failed: list[Path] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


class TrashWorker:
    # Moves files and folders to the trash one after another.

    def __init__(
        self,
        catalog: Catalog,
        paths: Iterable[Path],
        *,
        on_progress: ProgressCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> None:
        self._catalog = catalog
        self._paths = list(paths)
        self._on_progress = on_progress
        self._on_error = on_error

    def run(self) -> TrashBatchResult:
        # Trash each requested path, reporting progress and errors.
        result = TrashBatchResult()
        total = len(self._paths)

        for index, path in enumerate(self._paths, start=1):
            if self._on_progress is not None:
                self._on_progress(index, total, path)
            try:
                result.trashed.append(self._catalog.trash(path))
            except (TrashError, OSError) as exc:
                result.failed.append(path)
                if self._on_error is not None:
                    self._on_error(path, exc)

        return result
