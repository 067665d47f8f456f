"""Bridge settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. Environment variables (SEARCHBRIDGE_ prefix)
  2. YAML config file (if specified)
  3. Default values
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings

from searchbridge.models.options import EngineDefaults


class EngineSettings(BaseModel):
    """Where to look for the engine and which type names to probe."""

    module_names: list[str] = Field(
        default=["dtSearchNetApi4", "dtSearchNetStdApi", "dtSearch.Engine", "dtsearch"],
        description="Engine modules tried, in order, when a type is not already loaded",
    )
    index_job_types: list[str] = Field(
        default=["dtSearch.Engine.IndexJob"],
        description="Candidate full names of the index job type",
    )
    search_job_types: list[str] = Field(
        default=["dtSearch.Engine.SearchJob"],
        description="Candidate full names of the search job type",
    )
    engine_types: list[str] = Field(
        default=["dtSearch.Engine.Engine"],
        description="Candidate full names of the type exposing static SetOption",
    )
    options_enum_types: list[str] = Field(
        default=["dtSearch.Engine.EngineOptions"],
        description="Candidate full names of the engine options enum",
    )
    threads: int | None = Field(default=None, ge=1, description="Engine worker threads (None = half the CPUs, min 2)")
    engine_dir: str | None = Field(default=None, description="Engine binaries directory, forwarded at startup")
    home_dir_xml: str | None = Field(default=None, description="Path to the engine's homedir.xml")

    @field_validator(
        "module_names", "engine_types", "options_enum_types", "index_job_types", "search_job_types", mode="before"
    )
    @classmethod
    def _parse_names(cls, v: Any) -> list[str]:
        """Accept a comma-separated string or a list."""
        if isinstance(v, str):
            return [part.strip() for part in v.split(",") if part.strip()]
        return list(v)


class IndexingSettings(BaseModel):
    """Index build behavior."""

    extensions: list[str] = Field(
        default=[".txt", ".pdf", ".htm", ".html", ".doc", ".docx"],
        description="File extensions collected from source folders",
    )
    marker_extension: str = Field(default=".ix", description="Extension whose presence marks a valid index")
    temp_dir: str | None = Field(default=None, description="Directory for file lists and engine scratch files")
    list_prefix: str = Field(default="sb_add_", description="File name prefix of temporary file lists")

    @field_validator("extensions", mode="after")
    @classmethod
    def _normalize_extensions(cls, v: list[str]) -> list[str]:
        return [e.lower() if e.startswith(".") else f".{e.lower()}" for e in v]


class SearchSettings(BaseModel):
    """Search behavior configuration."""

    default_top_k: int = Field(default=20, ge=1, description="Hit cap when the caller gives none")
    snippet_max_chars: int = Field(default=600, ge=1, description="Snippet length before truncation")
    defaults: EngineDefaults = Field(default_factory=EngineDefaults, description="Built-in engine defaults")


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")
    diagnostics: bool = Field(default=False, description="Emit member listings, request parameters and timings")


class Settings(BaseSettings):
    """Root bridge settings.

    Configuration is loaded from environment variables with the SEARCHBRIDGE_ prefix.
    Nested settings use double underscores: SEARCHBRIDGE_ENGINE__THREADS=4

    Example:
        SEARCHBRIDGE_ENGINE__MODULE_NAMES=dtsearch
        SEARCHBRIDGE_INDEXING__MARKER_EXTENSION=.ix
        SEARCHBRIDGE_OBSERVABILITY__DIAGNOSTICS=true
    """

    model_config = {
        "env_prefix": "SEARCHBRIDGE_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    engine: EngineSettings = Field(default_factory=EngineSettings)
    indexing: IndexingSettings = Field(default_factory=IndexingSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Values from the YAML file are used as defaults; environment variables
        still take precedence.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.
        """
        import yaml  # type: ignore[import-untyped]

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)
