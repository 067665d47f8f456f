"""Process-wide diagnostics toggle.

When off, call sites skip every diagnostic message before formatting it, so
the probe paths that run for each hit stay cheap. When on, the bridge logs
available member listings on probe misses, request parameters before a
search, and result counts and timings after it.
"""

from __future__ import annotations


class Diagnostics:
    """Mutable holder for the diagnostics flag."""

    def __init__(self, enabled: bool = False) -> None:
        self.enabled = enabled

    def enable(self, enabled: bool = True) -> None:
        self.enabled = bool(enabled)

    def disable(self) -> None:
        self.enabled = False


diagnostics = Diagnostics()
