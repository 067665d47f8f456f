"""Data models shared by the orchestrators."""

from searchbridge.models.hit import SearchHit
from searchbridge.models.options import EngineDefaults, ResolvedSearchOptions, SearchOptions
from searchbridge.models.outcome import ErrorKind, OperationOutcome, SearchOutcome
from searchbridge.models.request import IndexRequest, IndexSource

__all__ = [
    "EngineDefaults",
    "ErrorKind",
    "IndexRequest",
    "IndexSource",
    "OperationOutcome",
    "ResolvedSearchOptions",
    "SearchHit",
    "SearchOptions",
    "SearchOutcome",
]
