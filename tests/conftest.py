"""Shared test fixtures: settings and a stub engine module registered in sys.modules."""

from __future__ import annotations

import enum
import logging
import os
import sys
import types
from pathlib import Path
from typing import Any

import pytest
import structlog

from searchbridge.config.settings import Settings
from searchbridge.core.defaults import engine_defaults
from searchbridge.observability.diagnostics import diagnostics
from searchbridge.observability.logging import clear_log_sink

ENGINE_MODULE = "stub_engine"


# ── Stub engine records ──────────────────────────────────────────────────────


class RawHit:
    """A result record shaped like one engine version's hit object."""

    def __init__(
        self,
        filename: str,
        summary: str = "",
        score: Any = 0,
        page: Any = 0,
        hit_count: Any = 0,
        title: str | None = None,
    ) -> None:
        self.Filename = filename
        self.Summary = summary
        self.Score = score
        self.PageNumber = page
        self.HitCount = hit_count
        if title is not None:
            self.Title = title


class CountedResults:
    """Results container exposing only a count and an indexed accessor."""

    def __init__(self, items: list[Any]) -> None:
        self._items = list(items)

    @property
    def Count(self) -> int:
        return len(self._items)

    def GetNthDoc(self, i: int) -> Any:
        return self._items[i]


def make_hits(n: int) -> list[RawHit]:
    return [
        RawHit(
            filename=f"C:\\docs\\report_{i}.txt",
            summary=f"hit number {i}\r\nsecond line",
            score=100 - i,
            page=i,
            hit_count=i + 1,
        )
        for i in range(n)
    ]


# ── Stub engine module ───────────────────────────────────────────────────────


def build_engine_module(name: str = ENGINE_MODULE) -> types.ModuleType:
    """Create a fresh engine module whose classes keep per-test state."""

    class EngineOptions(enum.Enum):
        NoExceptionMessageBox = 1
        Threads = 2

    class Engine:
        options: dict[Any, Any] = {}

        @staticmethod
        def SetOption(option: EngineOptions, value: Any) -> None:
            Engine.options[option] = value

    class IndexJob:
        instances: list[IndexJob] = []
        return_code: Any = 0
        write_index = True

        def __init__(self) -> None:
            self.IndexPath = ""
            self.ActionCreate = False
            self.ActionAdd = False
            self.ActionRemoveDeleted = False
            self.CreateRelativePaths = True
            self.ToAddFileListName = ""
            self.TempFileDir = ""
            self.listed_files: list[str] = []
            self.list_existed_during_execute = False
            IndexJob.instances.append(self)

        def Execute(self) -> Any:
            self.list_existed_during_execute = os.path.exists(self.ToAddFileListName)
            with open(self.ToAddFileListName, encoding="utf-8", errors="surrogateescape") as f:
                self.listed_files = [line.rstrip("\n") for line in f if line.strip()]
            if IndexJob.write_index and self.listed_files:
                os.makedirs(self.IndexPath, exist_ok=True)
                Path(self.IndexPath, "index.ix").write_text("ix", encoding="utf-8")
            return IndexJob.return_code

        def GetIndexInfo(self, path: str) -> Any:
            return types.SimpleNamespace(DocCount=2, WordCount=40, IndexSize=1024, StructureVersion=7)

    class SearchJob:
        instances: list[SearchJob] = []
        results: Any = []

        def __init__(self) -> None:
            self.IndexesToSearch: list[str] = []
            self.Request = ""
            self.MaxFilesToRetrieve = 0
            self.MaxContextBytes = 0
            self.TimeoutMilliseconds = 0
            self.Stemming = False
            self.SearchFlags = ""
            self.Results: Any = None
            SearchJob.instances.append(self)

        def Execute(self) -> bool:
            self.Results = SearchJob.results
            return True

    module = types.ModuleType(name)
    module.EngineOptions = EngineOptions
    module.Engine = Engine
    module.IndexJob = IndexJob
    module.SearchJob = SearchJob
    return module


@pytest.fixture
def engine(monkeypatch: pytest.MonkeyPatch) -> types.ModuleType:
    """A stub engine importable as ``stub_engine``."""
    module = build_engine_module()
    monkeypatch.setitem(sys.modules, ENGINE_MODULE, module)
    return module


@pytest.fixture
def scratch_dir(tmp_path: Path) -> Path:
    path = tmp_path / "scratch"
    path.mkdir()
    return path


@pytest.fixture
def settings(scratch_dir: Path) -> Settings:
    """Settings pointing at the stub engine and a private scratch directory."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        engine={"module_names": [ENGINE_MODULE]},
        indexing={"temp_dir": str(scratch_dir)},
    )


@pytest.fixture
def docs_dir(tmp_path: Path) -> Path:
    """A folder with two text files, a PDF in a subfolder and one ignored file."""
    root = tmp_path / "docs"
    (root / "sub").mkdir(parents=True)
    (root / "a.txt").write_text("alpha", encoding="utf-8")
    (root / "b.txt").write_text("beta", encoding="utf-8")
    (root / "sub" / "c.pdf").write_bytes(b"%PDF-1.4")
    (root / "notes.md").write_text("ignored", encoding="utf-8")
    return root


@pytest.fixture(autouse=True)
def _reset_process_state() -> Any:
    """Process-wide toggles must not leak between tests."""
    root_level = logging.getLogger().level
    yield
    diagnostics.disable()
    engine_defaults.replace(None)
    clear_log_sink()
    logging.getLogger().setLevel(root_level)
    structlog.reset_defaults()
