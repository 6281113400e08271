from __future__ import annotations

from .base import Reporter


class SilentReporter(Reporter):
    """``-r silent``: keeps task bookkeeping, prints nothing."""
