"""Process-wide engine defaults.

The host may replace the defaults wholesale at any time. Searches read the
current object once per call; a replacement is a single reference swap, so a
concurrent search sees either the old or the new object. No locking is done.
"""

from __future__ import annotations

import logging

from searchbridge.models.options import EngineDefaults
from searchbridge.observability.diagnostics import diagnostics

logger = logging.getLogger(__name__)


class DefaultsStore:
    """Holder for the current ``EngineDefaults``.

    Args:
        initial: Starting defaults; the built-in values when None.
    """

    def __init__(self, initial: EngineDefaults | None = None) -> None:
        self._builtin = (initial or EngineDefaults()).model_copy()
        self._current = self._builtin.model_copy()

    def current(self) -> EngineDefaults:
        return self._current

    def replace(self, defaults: EngineDefaults | None) -> EngineDefaults:
        """Swap in ``defaults``; ``None`` restores the built-in values."""
        new = (defaults or self._builtin).model_copy()
        self._current = new
        if diagnostics.enabled:
            logger.info("Defaults set: %s", new.describe())
        return new


engine_defaults = DefaultsStore()
