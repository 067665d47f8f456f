"""Index orchestrator — Builds or updates a persistent index from folders or a file.

Lifecycle of one build:
  1. Validate inputs (no filesystem or engine access on failure)
  2. Ensure the destination's parent directory exists
  3. Enumerate source files
  4. Write the temporary file list
  5. Configure the engine's index job
  6. Execute the job
  7. Verify that the destination now holds an index

The temporary file list is removed on every exit path.
"""

from __future__ import annotations

import logging
import os
import time
from typing import Any

from searchbridge.config.settings import Settings
from searchbridge.core.filelist import (
    collect_files,
    ensure_parent_directory,
    index_looks_valid,
    is_listable,
    temp_file_list,
)
from searchbridge.core.setup import ensure_engine_options
from searchbridge.models.outcome import ErrorKind, OperationOutcome
from searchbridge.models.request import IndexRequest
from searchbridge.observability.diagnostics import diagnostics
from searchbridge.probe.facade import Invoker
from searchbridge.probe.jobs import execute

logger = logging.getLogger(__name__)


class IndexOrchestrator:
    """Drives the engine's index job.

    Args:
        settings: Bridge settings; engine type names, extensions, marker
            extension and temp directory come from here.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or Settings()

    def index_folders(self, index_path: str, folders: list[str] | None, rebuild: bool = False) -> OperationOutcome:
        """Index every matching file found under ``folders``.

        Missing folders are skipped; finding no files at all is an error.
        """
        if not folders:
            outcome = OperationOutcome()
            if not index_path or not index_path.strip():
                outcome.fail("indexPath is empty.", ErrorKind.CONFIGURATION)
            else:
                outcome.fail("folders is empty.", ErrorKind.CONFIGURATION)
            return outcome
        return self.build(IndexRequest.from_folders(index_path, folders, rebuild))

    def index_file(self, index_path: str, file_path: str | None, rebuild: bool = False) -> OperationOutcome:
        """Add a single file to the index, creating the index if needed."""
        return self.build(IndexRequest.from_file(index_path, file_path or "", rebuild))

    def build(self, request: IndexRequest) -> OperationOutcome:
        """Run one index build. Never raises; failures are on the outcome."""
        outcome = OperationOutcome()
        try:
            self._build(request, outcome)
        except Exception as e:
            logger.warning("Index build failed unexpectedly", exc_info=True)
            outcome.fail(f"{type(e).__name__}: {e}", ErrorKind.UNEXPECTED)
        return outcome

    def _build(self, request: IndexRequest, outcome: OperationOutcome) -> None:
        index_path = request.index_path
        if not index_path or not index_path.strip():
            outcome.fail("indexPath is empty.", ErrorKind.CONFIGURATION)
            return
        if not request.sources:
            outcome.fail("No sources to index.", ErrorKind.CONFIGURATION)
            return
        for source in request.sources:
            if source.is_single_file and (not source.path.strip() or not os.path.isfile(source.path)):
                outcome.fail(f"filePath not found: {source.path}", ErrorKind.CONFIGURATION)
                return
            if source.is_single_file and not is_listable(source.path):
                outcome.fail(f"filePath contains a line break: {source.path!r}", ErrorKind.CONFIGURATION)
                return

        ensure_engine_options(self.settings.engine)
        ensure_parent_directory(index_path)

        files = self._enumerate(request)
        if not files:
            outcome.fail("No files found to index in provided folder(s).", ErrorKind.CONFIGURATION)
            return

        start = time.monotonic()
        indexing = self.settings.indexing
        with temp_file_list(files, indexing.temp_dir, indexing.list_prefix) as list_path:
            job = Invoker(outcome).create(self.settings.engine.index_job_types, self.settings.engine.module_names)
            if job is None:
                outcome.fail("Failed to create the engine IndexJob (engine not loaded?).", ErrorKind.CAPABILITY)
                return
            if not self._configure(job, request, list_path, outcome):
                return

            result = execute(job, outcome)
            if not result.ok:
                return
            if result.code != 0:
                outcome.fail(f"IndexJob.Execute failed (rc={result.code}).", ErrorKind.JOB)
                return

        if not index_looks_valid(index_path, indexing.marker_extension):
            outcome.fail(
                f"Indexing completed but no index structure (*{indexing.marker_extension}) found.",
                ErrorKind.POSTCONDITION,
            )
            return

        logger.info(
            "Indexed %d file(s) into %s in %d ms",
            len(files),
            index_path,
            int((time.monotonic() - start) * 1000),
        )

    def _enumerate(self, request: IndexRequest) -> list[str]:
        folders = [s.path for s in request.sources if not s.is_single_file]
        found = dict.fromkeys(collect_files(folders, self.settings.indexing.extensions))
        for source in request.sources:
            if source.is_single_file:
                found.setdefault(os.path.abspath(source.path), None)
        return list(found)

    def _configure(self, job: Any, request: IndexRequest, list_path: str, outcome: OperationOutcome) -> bool:
        invoker = Invoker(outcome)
        if not invoker.try_set(job, "IndexPath", request.index_path):
            outcome.fail("IndexJob.IndexPath property not found.", ErrorKind.CAPABILITY)
            return False

        create = request.rebuild or not index_looks_valid(request.index_path, self.settings.indexing.marker_extension)
        invoker.try_set(job, "ActionCreate", create)
        invoker.try_set(job, "ActionAdd", True)
        invoker.try_set(job, "ActionRemoveDeleted", True)
        invoker.try_set(job, "CreateRelativePaths", False)
        invoker.try_set(job, "ToAddFileListName", list_path)
        invoker.try_set(job, "TempFileDir", os.path.dirname(list_path))

        if diagnostics.enabled:
            logger.info(
                "IndexJob: index=%s | create=%s | rebuild=%s | list=%s",
                request.index_path,
                create,
                request.rebuild,
                list_path,
            )
        return True
