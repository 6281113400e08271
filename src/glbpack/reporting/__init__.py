"""Progress and message output for glbpack.

The CLI picks one backend (``-r plain|rich|json|silent``) and installs it
with ``set_reporter``; library code only talks to ``get_reporter()`` and the
``task`` context manager.
"""

from .base import Reporter, TaskStatus, get_reporter, get_verbosity, set_reporter
from .base import set_verbosity, task
from .jsonl import JsonLinesReporter
from .plain import PlainReporter
from .rich_reporter import RichReporter
from .silent import SilentReporter

__all__ = [
    "get_reporter",
    "set_reporter",
    "get_verbosity",
    "set_verbosity",
    "task",
    "TaskStatus",
    "Reporter",
    "PlainReporter",
    "RichReporter",
    "JsonLinesReporter",
    "SilentReporter",
]
