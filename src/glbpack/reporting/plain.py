from __future__ import annotations

import sys
from typing import Any

from .base import Reporter, TaskRecord, format_completion, get_verbosity


class PlainReporter(Reporter):
    """Line-oriented reporter with optional ANSI colour."""

    def __init__(self, stream=None, use_color: bool | None = None):
        super().__init__()
        self.stream = stream or sys.stderr
        if use_color is None:
            use_color = getattr(self.stream, "isatty", lambda: False)()
        self.use_color = use_color

    def _tag(self, code: str, text: str) -> str:
        return f"\x1b[{code}m{text}\x1b[0m" if self.use_color else text

    def _on_advance(self, rec: TaskRecord, item: Any) -> None:
        if get_verbosity() < 1:
            return
        total = "?" if rec.total is None else rec.total
        label = item or f"#{rec.completed}"
        self.stream.write(f"   · {rec.name}: {label} ({rec.completed}/{total})\n")

    def _on_end(self, rec: TaskRecord) -> None:
        self.stream.write(f" {format_completion(rec)}\n")

    def status(self, message: str, **fields: Any) -> None:
        self.stream.write(f"{self._tag('32', 'INFO')}: {message}\n")

    def verbose(self, message: str, *, level: int = 1, **fields: Any) -> None:
        if get_verbosity() >= level:
            self.stream.write(f"{self._tag('36', f'VERB{level}')}: {message}\n")

    def error(self, message: str, **fields: Any) -> None:
        self.stream.write(f"{self._tag('31', 'ERROR')}: {message}\n")

    def warning(self, message: str, **fields: Any) -> None:
        self.stream.write(f"{self._tag('33', 'WARN')}: {message}\n")

    def section(self, title: str) -> None:
        self.stream.write(f"\n[{title}]\n")
