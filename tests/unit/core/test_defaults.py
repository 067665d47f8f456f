"""Tests for the process-wide engine defaults store."""

from __future__ import annotations

import logging

import pytest

from searchbridge.core.defaults import DefaultsStore
from searchbridge.models.options import EngineDefaults
from searchbridge.observability.diagnostics import diagnostics


class TestDefaultsStore:
    def test_starts_with_builtins(self) -> None:
        current = DefaultsStore().current()
        assert current.timeout_ms == 30000
        assert current.use_stemming is True
        assert current.case_sensitive is None
        assert current.accent_sensitive is None
        assert current.max_context_bytes == 1024
        assert current.search_flags is None

    def test_replace_is_wholesale(self) -> None:
        store = DefaultsStore()
        store.replace(EngineDefaults(timeout_ms=5, use_stemming=None))
        assert store.current().timeout_ms == 5
        assert store.current().use_stemming is None
        assert store.current().max_context_bytes == 1024

    def test_none_restores_builtins(self) -> None:
        store = DefaultsStore(EngineDefaults(timeout_ms=77))
        store.replace(EngineDefaults(timeout_ms=1))
        assert store.replace(None).timeout_ms == 77

    def test_caller_mutation_does_not_leak(self) -> None:
        store = DefaultsStore()
        mine = EngineDefaults(timeout_ms=10)
        store.replace(mine)
        mine.timeout_ms = 99
        assert store.current().timeout_ms == 10

    def test_replacement_swaps_reference(self) -> None:
        store = DefaultsStore()
        before = store.current()
        store.replace(EngineDefaults(timeout_ms=1))
        assert before.timeout_ms == 30000
        assert store.current() is not before

    def test_logged_with_diagnostics(self, caplog: pytest.LogCaptureFixture) -> None:
        diagnostics.enable()
        with caplog.at_level(logging.INFO, logger="searchbridge"):
            DefaultsStore().replace(EngineDefaults(search_flags="dtsSearchFuzzy"))
        assert any("Defaults set:" in r.getMessage() and "dtsSearchFuzzy" in r.getMessage() for r in caplog.records)
