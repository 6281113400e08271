from __future__ import annotations

import os
from typing import Any, Dict, List

from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)

from .base import Reporter, TaskRecord, format_completion, get_verbosity


class RichReporter(Reporter):
    """Progress bars for counted tasks, rules for sections.

    With ``GLBPACK_PROGRESS_TRANSIENT=1`` the bars vanish and completion
    lines are printed once the last open task ends.
    """

    def __init__(self, console: Console | None = None):
        super().__init__()
        self.console = console or Console(stderr=True, highlight=False)
        self._transient = os.getenv(
            "GLBPACK_PROGRESS_TRANSIENT", "0"
        ).lower() in ("1", "true", "yes")
        self.progress: Progress | None = None
        self._bars: Dict[str, TaskID] = {}
        self._completions: List[str] = []

    def _progress(self) -> Progress:
        if self.progress is None:
            self.progress = Progress(
                SpinnerColumn(spinner_name="dots"),
                TextColumn("{task.description}", markup=False),
                BarColumn(bar_width=None),
                TextColumn("{task.completed}/{task.total}"),
                TimeElapsedColumn(),
                transient=self._transient,
                console=self.console,
                expand=True,
            )
            self.progress.start()
        return self.progress

    def _on_start(self, rec: TaskRecord) -> None:
        if rec.total is None:
            self.console.rule(escape(rec.name))
        else:
            self._bars[rec.task_id] = self._progress().add_task(
                rec.name, total=rec.total
            )

    def _on_advance(self, rec: TaskRecord, item: Any) -> None:
        bar = self._bars.get(rec.task_id)
        if bar is None or self.progress is None:
            return
        label = f"{rec.name} ↳ {item}" if item else rec.name
        self.progress.update(bar, completed=rec.completed, description=label)

    def _on_end(self, rec: TaskRecord) -> None:
        bar = self._bars.pop(rec.task_id, None)
        if bar is not None and self.progress is not None:
            self.progress.update(bar, description=rec.name)
        line = format_completion(rec)
        if self._transient:
            self._completions.append(line)
        else:
            self.console.print(line, markup=False)
        if not self.open_tasks:
            self.flush()

    def status(self, message: str, **fields: Any) -> None:
        self.console.print(f"[green]INFO[/]: {escape(message)}")

    def verbose(self, message: str, *, level: int = 1, **fields: Any) -> None:
        if get_verbosity() >= level:
            self.console.print(f"[cyan]VERB{level}[/]: {escape(message)}")

    def error(self, message: str, **fields: Any) -> None:
        self.console.print(f"[bold red]ERROR[/]: {escape(message)}")

    def warning(self, message: str, **fields: Any) -> None:
        self.console.print(f"[yellow]WARN[/]: {escape(message)}")

    def section(self, title: str) -> None:
        self.console.rule(escape(title))

    def flush(self) -> None:
        if self.progress is not None:
            try:
                self.progress.stop()
            finally:
                self.progress = None
                self._bars.clear()
        if self._completions:
            self.console.print("\n".join(self._completions), markup=False)
            self._completions.clear()
