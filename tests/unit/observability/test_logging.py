"""Tests for the diagnostics toggle and the host log sink."""

from __future__ import annotations

import logging

import structlog

from searchbridge.config.settings import ObservabilitySettings
from searchbridge.observability.diagnostics import Diagnostics
from searchbridge.observability.logging import SinkHandler, clear_log_sink, set_log_sink, setup_logging

bridge_logger = logging.getLogger("searchbridge.core.searcher")


class TestLogSink:
    def test_messages_are_prefixed(self) -> None:
        lines: list[str] = []
        set_log_sink(lines.append)
        bridge_logger.info("SearchCore: returned %d results.", 3)
        assert lines == ["[searchbridge] SearchCore: returned 3 results."]

    def test_warnings_carry_level(self) -> None:
        lines: list[str] = []
        set_log_sink(lines.append)
        bridge_logger.warning("Search failed unexpectedly")
        assert lines == ["[searchbridge] WARNING: Search failed unexpectedly"]

    def test_debug_is_not_forwarded(self) -> None:
        lines: list[str] = []
        set_log_sink(lines.append)
        bridge_logger.debug("noise")
        assert lines == []

    def test_replacing_sink(self) -> None:
        first: list[str] = []
        second: list[str] = []
        set_log_sink(first.append)
        set_log_sink(second.append)
        bridge_logger.info("hello")
        assert first == []
        assert second == ["[searchbridge] hello"]
        assert sum(isinstance(h, SinkHandler) for h in logging.getLogger("searchbridge").handlers) == 1

    def test_failing_sink_is_swallowed(self) -> None:
        def broken(line: str) -> None:
            raise OSError("host pipe closed")

        set_log_sink(broken)
        bridge_logger.info("still fine")

    def test_clear(self) -> None:
        lines: list[str] = []
        set_log_sink(lines.append)
        clear_log_sink()
        bridge_logger.info("dropped")
        assert lines == []

    def test_other_loggers_not_forwarded(self) -> None:
        lines: list[str] = []
        set_log_sink(lines.append)
        logging.getLogger("someone.else").warning("not ours")
        assert lines == []


class TestDiagnostics:
    def test_toggle(self) -> None:
        flag = Diagnostics()
        assert flag.enabled is False
        flag.enable()
        assert flag.enabled is True
        flag.enable(False)
        assert flag.enabled is False
        flag.enable(True)
        flag.disable()
        assert flag.enabled is False


class TestSetupLogging:
    def test_configures_structlog(self) -> None:
        setup_logging(ObservabilitySettings(log_format="console", log_level="debug"))
        assert structlog.is_configured()
        structlog.reset_defaults()

    def test_level_applies_when_root_already_has_handlers(self) -> None:
        root = logging.getLogger()
        handler = logging.NullHandler()
        root.addHandler(handler)
        try:
            setup_logging(ObservabilitySettings(log_level="error"))
            assert root.level == logging.ERROR
        finally:
            root.removeHandler(handler)

    def test_unknown_level_falls_back_to_info(self) -> None:
        setup_logging(ObservabilitySettings(log_level="chatty"))
        assert logging.getLogger().level == logging.INFO
