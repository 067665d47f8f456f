"""SearchBridge — Host-facing entry point over the index and search orchestrators.

Every call returns a plain value (bool, list of hits, report text) and
leaves the details on ``last_error`` / ``last_warning``, so hosts that drive
the bridge from another runtime never have to catch exceptions.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from searchbridge.config.settings import Settings
from searchbridge.core import debug
from searchbridge.core.defaults import DefaultsStore, engine_defaults
from searchbridge.core.indexer import IndexOrchestrator
from searchbridge.core.searcher import SearchOrchestrator
from searchbridge.core.setup import set_engine_path, set_home_dir_xml
from searchbridge.models.hit import SearchHit
from searchbridge.models.options import EngineDefaults, SearchOptions
from searchbridge.models.outcome import OperationOutcome, SearchOutcome
from searchbridge.observability.diagnostics import diagnostics
from searchbridge.observability.logging import set_log_sink, setup_logging

logger = logging.getLogger(__name__)


class SearchBridge:
    """Index and search through whatever engine version is installed.

    Args:
        settings: Bridge settings. Defaults are loaded from the environment.
        defaults: Store of engine defaults read by every search. The
            process-wide ``engine_defaults`` store when None.

    Example:
        >>> bridge = SearchBridge()
        >>> bridge.index_folders("/data/index", ["/data/docs"])
        True
        >>> hits = bridge.search_text(["/data/index"], "solar AND nowcasting", top_k=5)
    """

    def __init__(self, settings: Settings | None = None, defaults: DefaultsStore | None = None) -> None:
        self.settings = settings or Settings()
        self.defaults = defaults or engine_defaults
        self.indexer = IndexOrchestrator(self.settings)
        self.searcher = SearchOrchestrator(self.settings)
        self.last_outcome: OperationOutcome | None = None

    @property
    def last_error(self) -> str | None:
        return self.last_outcome.last_error if self.last_outcome else None

    @property
    def last_warning(self) -> str | None:
        return self.last_outcome.last_warning if self.last_outcome else None

    def _record(self, outcome: OperationOutcome) -> OperationOutcome:
        self.last_outcome = outcome
        if not outcome.success:
            logger.info("%s", outcome.last_error)
        return outcome

    # ── Process-wide switches ────────────────────────────────────────────

    @staticmethod
    def set_diagnostics(enabled: bool) -> None:
        diagnostics.enable(enabled)

    @staticmethod
    def set_log_sink(sink: Callable[[str], None] | None) -> None:
        set_log_sink(sink)

    def set_defaults(self, defaults: EngineDefaults | None) -> EngineDefaults:
        """Replace the engine defaults wholesale; ``None`` restores the built-ins."""
        return self.defaults.replace(defaults)

    # ── Engine setup ─────────────────────────────────────────────────────

    def set_engine_path(self, engine_dir: str | None) -> bool:
        return self._record(set_engine_path(engine_dir, self.settings.engine)).success

    def set_home_dir_xml(self, homedir_xml_path: str | None) -> bool:
        return self._record(set_home_dir_xml(homedir_xml_path, self.settings.engine)).success

    # ── Indexing ─────────────────────────────────────────────────────────

    def index_folders(self, index_path: str, folders: Iterable[str] | str | None, rebuild: bool = False) -> bool:
        """Build or update ``index_path`` from every matching file under ``folders``."""
        if isinstance(folders, str):
            folders = [folders]
        return self._record(self.indexer.index_folders(index_path, list(folders or []), rebuild)).success

    def index_file(self, index_path: str, file_path: str | None, rebuild: bool = False) -> bool:
        """Add one file to ``index_path``; ``rebuild`` forces a fresh index."""
        return self._record(self.indexer.index_file(index_path, file_path, rebuild)).success

    # ── Searching ────────────────────────────────────────────────────────

    def search(self, index_paths: Iterable[str] | str | None, query: str | None, options: SearchOptions | None = None) -> SearchOutcome:
        """Search and return the full outcome, hits included."""
        if isinstance(index_paths, str):
            index_paths = [index_paths]
        outcome = self.searcher.search(index_paths, query, options, self.defaults.current())
        self._record(outcome)
        return outcome

    def search_text(self, index_paths: Iterable[str] | str | None, query: str | None, top_k: int = 20) -> list[SearchHit]:
        """Search with only a hit cap; ``top_k <= 0`` means the default of 20."""
        if top_k <= 0:
            top_k = self.settings.search.default_top_k
        return self.search(index_paths, query, SearchOptions(top_k=top_k)).hits

    # ── Debugging ────────────────────────────────────────────────────────

    def index_info(self, index_path: str) -> str:
        return debug.index_info(index_path, self.settings)

    def describe_index_job_members(self) -> str:
        return debug.describe_index_job_members(self.settings)

    def search_debug(self, index_path: str, request: str) -> str:
        return debug.search_debug(index_path, request, self.settings)


def configure(settings: Settings | None = None, sink: Callable[[str], None] | None = None) -> SearchBridge:
    """Apply ``settings`` process-wide and return a ready bridge.

    Configures logging from the observability settings, sets the diagnostics
    toggle, installs ``sink`` if given, resets the engine defaults to the
    configured ones and forwards the configured engine paths. Path
    forwarding failures are left on the bridge's ``last_error``.
    """
    settings = settings or Settings()
    setup_logging(settings.observability)
    diagnostics.enable(settings.observability.diagnostics)
    if sink is not None:
        set_log_sink(sink)
    engine_defaults.replace(settings.search.defaults)

    bridge = SearchBridge(settings)
    if settings.engine.engine_dir:
        bridge.set_engine_path(settings.engine.engine_dir)
    if settings.engine.home_dir_xml:
        bridge.set_home_dir_xml(settings.engine.home_dir_xml)
    return bridge
