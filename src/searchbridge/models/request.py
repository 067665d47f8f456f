"""Index request models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class IndexSource(BaseModel):
    """A folder to crawl, or a single file to add."""

    path: str = Field(description="Folder or file path")
    is_single_file: bool = Field(default=False, description="True when ``path`` names one file")


class IndexRequest(BaseModel):
    """One index build or update, consumed by ``IndexOrchestrator.build``."""

    index_path: str = Field(default="", description="Destination index directory")
    sources: list[IndexSource] = Field(default_factory=list, description="Ordered sources to ingest")
    rebuild: bool = Field(default=False, description="Force a fresh index even if one already exists")

    @classmethod
    def from_folders(cls, index_path: str, folders: list[str], rebuild: bool = False) -> IndexRequest:
        return cls(
            index_path=index_path,
            sources=[IndexSource(path=f) for f in folders if f is not None],
            rebuild=rebuild,
        )

    @classmethod
    def from_file(cls, index_path: str, file_path: str, rebuild: bool = False) -> IndexRequest:
        return cls(
            index_path=index_path,
            sources=[IndexSource(path=file_path or "", is_single_file=True)],
            rebuild=rebuild,
        )
