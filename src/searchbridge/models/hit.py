"""Search hit model — the stable output shape of every search."""

from __future__ import annotations

from pydantic import BaseModel, Field


class SearchHit(BaseModel):
    """A normalized search hit.

    Built by the result normalizer from whatever record shape the engine
    returned. Hits are immutable and never handed back to the engine.
    """

    model_config = {"frozen": True}

    file_path: str = Field(default="", description="Full path of the matching document")
    page: int = Field(default=0, description="Page number of the hit, 0 when unknown")
    snippet: str = Field(default="", description="Whitespace-normalized context, at most 600 chars plus ellipsis")
    score: float = Field(default=0.0, description="Engine relevance score")
    title: str = Field(default="", description="Document title, or the file name when the engine has none")
    hit_count: int = Field(default=0, description="Number of hits inside the document")
