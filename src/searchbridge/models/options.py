"""Search option models and the per-field merge with engine defaults."""

from __future__ import annotations

from pydantic import BaseModel, Field


class EngineDefaults(BaseModel):
    """Process-wide fallbacks for every search option the caller leaves unset.

    ``None`` means "do not touch the engine's own default" for that option.
    """

    timeout_ms: int | None = Field(default=30000, description="Search timeout in milliseconds")
    use_stemming: bool | None = Field(default=True, description="Enable stemming")
    case_sensitive: bool | None = Field(default=None, description="Case-sensitive matching")
    accent_sensitive: bool | None = Field(default=None, description="Accent-sensitive matching")
    max_context_bytes: int | None = Field(default=1024, description="Snippet context size cap in bytes")
    search_flags: str | None = Field(default=None, description="Raw engine-specific search flags")

    def describe(self) -> str:
        return (
            f"TimeoutMs={self.timeout_ms}, Stemming={self.use_stemming}, "
            f"Case={self.case_sensitive}, Accent={self.accent_sensitive}, "
            f"MaxCtx={self.max_context_bytes}, Flags={self.search_flags or '(null)'}"
        )


class SearchOptions(BaseModel):
    """Per-call search options. Unset fields fall back to ``EngineDefaults``."""

    top_k: int = Field(default=20, ge=1, description="Maximum number of hits to return")
    timeout_ms: int | None = Field(default=None, description="Search timeout in milliseconds")
    use_stemming: bool | None = Field(default=None, description="Enable stemming")
    case_sensitive: bool | None = Field(default=None, description="Case-sensitive matching")
    accent_sensitive: bool | None = Field(default=None, description="Accent-sensitive matching")
    search_flags: str | None = Field(default=None, description="Raw engine-specific search flags")
    max_context_bytes: int | None = Field(default=None, description="Snippet context size cap in bytes")

    def resolve(self, defaults: EngineDefaults) -> ResolvedSearchOptions:
        """Fill every unset field from ``defaults``, field by field.

        ``search_flags`` counts as unset when blank.
        """
        flags = self.search_flags
        if not (flags or "").strip():
            flags = defaults.search_flags if (defaults.search_flags or "").strip() else flags

        return ResolvedSearchOptions(
            top_k=self.top_k,
            timeout_ms=self.timeout_ms if self.timeout_ms is not None else defaults.timeout_ms,
            use_stemming=self.use_stemming if self.use_stemming is not None else defaults.use_stemming,
            case_sensitive=self.case_sensitive if self.case_sensitive is not None else defaults.case_sensitive,
            accent_sensitive=(
                self.accent_sensitive if self.accent_sensitive is not None else defaults.accent_sensitive
            ),
            search_flags=flags,
            max_context_bytes=(
                self.max_context_bytes if self.max_context_bytes is not None else defaults.max_context_bytes
            ),
        )


class ResolvedSearchOptions(SearchOptions):
    """Search options after the defaults merge. Read-only."""

    model_config = {"frozen": True}

    def describe(self) -> str:
        return (
            f"TopK={self.top_k} | TimeoutMs={self.timeout_ms} | Stemming={self.use_stemming} | "
            f"Case={self.case_sensitive} | Accent={self.accent_sensitive} | "
            f"MaxCtx={self.max_context_bytes} | Flags={self.search_flags or '(null)'}"
        )
