"""Search orchestrator — Runs a query over one or more indexes and normalizes the hits.

Steps of one search:
  1. Create the engine's search job and attach every index path
  2. Set the query text
  3. Apply the resolved options, each one best-effort
  4. Execute the job
  5. Collect results, either by iterating the results container or, for
     engines that expose a count plus an indexer, item by item

Hits keep the engine's order and are capped at ``top_k``.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, MutableSequence
from typing import Any

from searchbridge.config.settings import Settings
from searchbridge.core.defaults import engine_defaults
from searchbridge.core.normalizer import ResultNormalizer
from searchbridge.core.setup import ensure_engine_options
from searchbridge.models.options import EngineDefaults, ResolvedSearchOptions, SearchOptions
from searchbridge.models.outcome import ErrorKind, SearchOutcome
from searchbridge.observability.diagnostics import diagnostics
from searchbridge.probe.facade import Invoker
from searchbridge.probe.jobs import execute
from searchbridge.probe.resolver import MemberKind, find_member, first_available

logger = logging.getLogger(__name__)

RESULTS_PROPERTIES = ("Results", "SearchResults")
COUNT_PROPERTIES = ("Count", "HitCount", "NumResults", "Length")
ITEM_ACCESSORS = ("get_Item", "GetNthDoc", "GetNthDocument", "GetResult", "GetItem", "Get", "GetNthItem")
RESULT_CAP_PROPERTIES = ("MaxFilesToRetrieve", "MaxDocumentsToRetrieve")
CONTEXT_CAP_PROPERTIES = ("MaxContextBytes", "MaxContext")
SINGLE_INDEX_PROPERTIES = ("IndexToSearch", "SearchIndex")


def attach_indexes(job: Any, paths: list[str], invoker: Invoker) -> bool:
    """Attach every index path to a search job.

    Prefers the job's index collection; falls back to per-path ``AddIndex``
    calls and, for a single path, to a single-index property.

    Returns:
        True if at least one path was attached.
    """
    collection = invoker.get(job, "IndexesToSearch")
    if isinstance(collection, MutableSequence):
        for path in paths:
            collection.append(path)
        return True
    if collection is not None and not isinstance(collection, str):
        attached = False
        for path in paths:
            attached |= invoker.try_call(collection, "Add", path)
        if attached:
            return True

    attached = False
    for path in paths:
        attached |= invoker.try_call(job, "AddIndex", path)
    if not attached and len(paths) == 1:
        for name in SINGLE_INDEX_PROPERTIES:
            attached |= invoker.try_set(job, name, paths[0])
    return attached


class SearchOrchestrator:
    """Drives the engine's search job.

    Args:
        settings: Bridge settings.
        defaults: Explicit engine defaults; when None, the process-wide
            ``engine_defaults`` store is read once per search.
    """

    def __init__(self, settings: Settings | None = None, defaults: EngineDefaults | None = None) -> None:
        self.settings = settings or Settings()
        self.defaults = defaults
        self.normalizer = ResultNormalizer(self.settings.search.snippet_max_chars)

    def search(
        self,
        index_paths: str | Iterable[str] | None,
        query: str | None,
        options: SearchOptions | None = None,
        defaults: EngineDefaults | None = None,
    ) -> SearchOutcome:
        """Search ``index_paths`` for ``query``. Never raises.

        A single path may be passed as a plain string.

        Hits gathered before a late failure are kept on the outcome.
        """
        outcome = SearchOutcome()
        start = time.monotonic()
        try:
            if isinstance(index_paths, str):
                index_paths = [index_paths]
            self._search(list(index_paths or []), query, options, defaults, outcome)
        except Exception as e:
            logger.warning("Search failed unexpectedly", exc_info=True)
            outcome.fail(f"{type(e).__name__}: {e}", ErrorKind.UNEXPECTED)
        outcome.elapsed_ms = int((time.monotonic() - start) * 1000)

        if diagnostics.enabled:
            logger.info("SearchCore: returned %d results.", len(outcome.hits))
            logger.info("SearchCore: elapsed %d ms.", outcome.elapsed_ms)
        return outcome

    def resolve_options(
        self, options: SearchOptions | None, defaults: EngineDefaults | None = None
    ) -> ResolvedSearchOptions:
        """Merge ``options`` with the defaults in effect, field by field."""
        effective = defaults or self.defaults or engine_defaults.current()
        return (options or SearchOptions(top_k=self.settings.search.default_top_k)).resolve(effective)

    def _search(
        self,
        index_paths: list[str],
        query: str | None,
        options: SearchOptions | None,
        defaults: EngineDefaults | None,
        outcome: SearchOutcome,
    ) -> None:
        paths = [p for p in index_paths if p and p.strip()]
        if not paths:
            outcome.fail("No indexPaths provided.", ErrorKind.CONFIGURATION)
            return
        if not query or not query.strip():
            outcome.fail("Query is empty.", ErrorKind.CONFIGURATION)
            return

        ensure_engine_options(self.settings.engine)
        invoker = Invoker(outcome)

        job = invoker.create(self.settings.engine.search_job_types, self.settings.engine.module_names)
        if job is None:
            outcome.fail("Failed to create the engine SearchJob (engine not loaded?).", ErrorKind.CAPABILITY)
            return

        if not attach_indexes(job, paths, invoker):
            outcome.fail("Could not attach index path(s) to SearchJob.", ErrorKind.CAPABILITY)
            return

        if not invoker.try_set(job, "Request", query) and not invoker.try_call(job, "SetRequest", query):
            outcome.fail("Could not set query on SearchJob.", ErrorKind.CAPABILITY)
            return

        resolved = self.resolve_options(options, defaults)
        if diagnostics.enabled:
            logger.info('SearchCore: indexes=%s | query="%s" | %s', ";".join(paths), query, resolved.describe())
        self._apply_options(job, resolved, invoker)

        result = execute(job, outcome)
        if not result.ok:
            return
        if result.code != 0:
            outcome.fail(f"SearchJob.Execute failed (rc={result.code}).", ErrorKind.JOB)
            return

        raw = first_available(RESULTS_PROPERTIES, lambda n: invoker.get(job, n))
        self._collect(raw, resolved.top_k, outcome)

    # ── Options ──────────────────────────────────────────────────────────

    def _apply_options(self, job: Any, opts: ResolvedSearchOptions, invoker: Invoker) -> None:
        for name in RESULT_CAP_PROPERTIES:
            invoker.try_set(job, name, opts.top_k)
        if opts.max_context_bytes is not None:
            for name in CONTEXT_CAP_PROPERTIES:
                invoker.try_set(job, name, opts.max_context_bytes)
        if opts.timeout_ms is not None:
            invoker.try_set(job, "TimeoutMilliseconds", opts.timeout_ms)
        if opts.use_stemming is not None:
            invoker.try_set(job, "Stemming", opts.use_stemming)
        if opts.case_sensitive is not None:
            invoker.try_set(job, "CaseSensitive", opts.case_sensitive)
        if opts.accent_sensitive is not None:
            invoker.try_set(job, "AccentSensitive", opts.accent_sensitive)
        if opts.search_flags and opts.search_flags.strip():
            invoker.try_set(job, "SearchFlags", opts.search_flags)

    # ── Result collection ────────────────────────────────────────────────

    def _collect(self, raw: Any, top_k: int, outcome: SearchOutcome) -> None:
        if raw is None:
            return
        if isinstance(raw, Iterable) and not isinstance(raw, (str, bytes)):
            for record in raw:
                if len(outcome.hits) >= top_k:
                    break
                outcome.hits.append(self.normalizer.normalize(record))
            return
        self._collect_counted(raw, top_k, outcome)

    def _collect_counted(self, raw: Any, top_k: int, outcome: SearchOutcome) -> None:
        invoker = Invoker(outcome)
        count = first_available(COUNT_PROPERTIES, lambda n: invoker.get(raw, n))
        if not isinstance(count, int) or isinstance(count, bool) or count <= 0:
            return

        accessors = [n for n in ITEM_ACCESSORS if find_member(raw, n, MemberKind.METHOD, quiet=True) is not None]
        for i in range(count):
            if len(outcome.hits) >= top_k:
                break
            item = self._item_at(raw, i, accessors, invoker)
            if item is not None:
                outcome.hits.append(self.normalizer.normalize(item))

    @staticmethod
    def _item_at(raw: Any, i: int, accessors: list[str], invoker: Invoker) -> Any:
        """Fetch item ``i`` by indexer, then by each present accessor until one yields a value."""
        if hasattr(type(raw), "__getitem__"):
            try:
                item = raw[i]
            except Exception as e:
                if invoker.outcome is not None:
                    invoker.outcome.warn(f"Indexer access [{i}] failed: {e}")
                item = None
            if item is not None:
                return item
        return first_available(accessors, lambda n: invoker.try_call_ret(raw, n, i))
