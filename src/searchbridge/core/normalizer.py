"""Result normalizer — Maps an engine result record of unknown shape to ``SearchHit``.

Each output field has a chain of candidate property names, first match wins.
Records may be engine objects or plain dicts (keys matched
case-insensitively).
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import PureWindowsPath
from typing import Any

from searchbridge.models.hit import SearchHit
from searchbridge.probe.facade import Invoker
from searchbridge.probe.resolver import first_available

PATH_FIELDS = ("FilePath", "Filename", "FileName", "DocPath")
PAGE_FIELDS = ("PageNumber", "Page")
SNIPPET_FIELDS = ("Summary", "Context", "Snippet", "DocSummary")
SNIPPET_FALLBACK_FIELDS = ("Report", "Highlights")
SCORE_FIELDS = ("Score",)
HIT_COUNT_FIELDS = ("HitCount",)
TITLE_FIELDS = ("Title", "DocTitle")

ELLIPSIS = " …"
DEFAULT_SNIPPET_MAX_CHARS = 600


def normalize_snippet(text: str | None, max_len: int = DEFAULT_SNIPPET_MAX_CHARS) -> str:
    """Collapse CR/LF to spaces, trim, and truncate to ``max_len`` plus an ellipsis."""
    if not text:
        return ""
    flat = text.replace("\r", " ").replace("\n", " ").strip()
    return flat if len(flat) <= max_len else flat[:max_len] + ELLIPSIS


def _is_str(value: Any) -> bool:
    return isinstance(value, str)


def _is_non_blank_str(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class ResultNormalizer:
    """Builds ``SearchHit`` objects from raw engine records.

    Args:
        snippet_max_chars: Snippet length before truncation.
        invoker: Façade used to read record properties.
    """

    def __init__(self, snippet_max_chars: int = DEFAULT_SNIPPET_MAX_CHARS, invoker: Invoker | None = None) -> None:
        self.snippet_max_chars = snippet_max_chars
        self._invoker = invoker or Invoker()

    def normalize(self, raw: Any) -> SearchHit:
        read = self._reader(raw)

        file_path = first_available(PATH_FIELDS, read, accept=_is_str) or ""

        page_value = first_available(PAGE_FIELDS, read)
        page = page_value if _is_int(page_value) else 0

        snippet = first_available(SNIPPET_FIELDS, read, accept=_is_str) or ""
        if not snippet.strip():
            snippet = first_available(SNIPPET_FALLBACK_FIELDS, read, accept=_is_non_blank_str) or snippet

        score_value = first_available(SCORE_FIELDS, read)
        score = float(score_value) if _is_number(score_value) else 0.0

        hit_count_value = first_available(HIT_COUNT_FIELDS, read)
        hit_count = hit_count_value if _is_int(hit_count_value) else 0

        title = first_available(TITLE_FIELDS, read, accept=_is_non_blank_str) or PureWindowsPath(file_path).name

        return SearchHit(
            file_path=file_path,
            page=page,
            snippet=normalize_snippet(snippet, self.snippet_max_chars),
            score=score,
            title=title,
            hit_count=hit_count,
        )

    def _reader(self, raw: Any) -> Callable[[str], Any]:
        if isinstance(raw, Mapping):
            lowered = {str(k).lower(): v for k, v in raw.items()}
            return lambda name: raw[name] if name in raw else lowered.get(name.lower())
        return lambda name: self._invoker.get(raw, name)


def normalize_hit(raw: Any, snippet_max_chars: int = DEFAULT_SNIPPET_MAX_CHARS) -> SearchHit:
    """Normalize a single raw record with a default ``ResultNormalizer``."""
    return ResultNormalizer(snippet_max_chars).normalize(raw)
