"""Logging, host log sink and the diagnostics toggle."""

from searchbridge.observability.diagnostics import diagnostics
from searchbridge.observability.logging import clear_log_sink, set_log_sink, setup_logging

__all__ = ["clear_log_sink", "diagnostics", "set_log_sink", "setup_logging"]
