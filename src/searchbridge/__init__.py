"""SearchBridge — Drive a full-text index/search engine whose API varies by version.

Quick start::

    from searchbridge import SearchBridge, SearchOptions

    bridge = SearchBridge()
    bridge.index_folders("/data/index", ["/data/docs"])
    outcome = bridge.search(["/data/index"], "solar nowcasting", SearchOptions(top_k=5))
    for hit in outcome.hits:
        print(hit.title, hit.score)
"""

from searchbridge.core import SearchBridge, configure, engine_defaults
from searchbridge.models import (
    EngineDefaults,
    IndexRequest,
    IndexSource,
    OperationOutcome,
    SearchHit,
    SearchOptions,
    SearchOutcome,
)

__version__ = "0.1.0"

__all__ = [
    "EngineDefaults",
    "IndexRequest",
    "IndexSource",
    "OperationOutcome",
    "SearchBridge",
    "SearchHit",
    "SearchOptions",
    "SearchOutcome",
    "configure",
    "engine_defaults",
]
