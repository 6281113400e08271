from __future__ import annotations

import json
import sys
from typing import Any

from .base import Reporter, TaskRecord, get_verbosity


class JsonLinesReporter(Reporter):
    """One JSON object per event on stdout (``-r json``).

    ``task_end`` carries the lowercased status and the packing stats
    (segments, views, bytes, jobs) that the task reported.
    """

    def __init__(self, stream=None):
        super().__init__()
        self.stream = stream or sys.stdout

    def _emit(self, event: str, **payload: Any) -> None:
        payload["event"] = event
        self.stream.write(json.dumps(payload, sort_keys=True, default=str) + "\n")

    def _on_start(self, rec: TaskRecord) -> None:
        self._emit("task_start", id=rec.task_id, name=rec.name, total=rec.total)

    def _on_advance(self, rec: TaskRecord, item: Any) -> None:
        self._emit(
            "task_progress", id=rec.task_id, completed=rec.completed, item=item
        )

    def _on_end(self, rec: TaskRecord) -> None:
        self._emit(
            "task_end",
            id=rec.task_id,
            status=rec.status.name.lower(),
            completed=rec.completed,
            duration=round(rec.duration, 6),
            **rec.stats(),
        )

    def status(self, message: str, **fields: Any) -> None:
        self._emit("status", message=message, **fields)

    def verbose(self, message: str, *, level: int = 1, **fields: Any) -> None:
        if get_verbosity() >= level:
            self._emit("verbose", message=message, level=level, **fields)

    def error(self, message: str, **fields: Any) -> None:
        self._emit("error", message=message, **fields)

    def warning(self, message: str, **fields: Any) -> None:
        self._emit("warning", message=message, **fields)

    def section(self, title: str) -> None:
        self._emit("section", title=title)
