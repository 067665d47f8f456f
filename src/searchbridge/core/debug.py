"""Debug helpers — Human-readable reports for troubleshooting an engine install.

These never raise; errors come back inside the report text.
"""

from __future__ import annotations

import inspect
import os
from typing import Any

from searchbridge.config.settings import Settings
from searchbridge.core.filelist import index_looks_valid
from searchbridge.core.searcher import COUNT_PROPERTIES, RESULTS_PROPERTIES, attach_indexes
from searchbridge.probe.facade import Invoker
from searchbridge.probe.jobs import execute
from searchbridge.probe.resolver import MemberKind, first_available, list_members

INDEX_INFO_FIELDS = ("DocCount", "WordCount", "IndexSize", "UpdatedDate", "CreatedDate", "StructureVersion")

_PROPERTY_HINTS = ("File", "Input", "Document", "Item", "Folder", "Directory", "Path", "Include", "Create", "Temp", "Action")
_METHOD_HINTS = ("Add", "Set", "Folder", "Directory", "File", "Input", "Document", "Path", "Action", "Create")


def _contains_any(name: str, needles: tuple[str, ...]) -> bool:
    lowered = name.lower()
    return any(n.lower() in lowered for n in needles)


def index_info(index_path: str, settings: Settings) -> str:
    """Report the engine's statistics for the index at ``index_path``."""
    try:
        abs_path = os.path.abspath(index_path)
        invoker = Invoker()
        job = invoker.create(settings.engine.index_job_types, settings.engine.module_names)
        if job is None:
            return "GetIndexInfo ERROR: cannot create IndexJob."

        info = invoker.try_call_ret(job, "GetIndexInfo", abs_path)
        if info is None:
            return f"GetIndexInfo: no info for {abs_path}"

        lines = [f"IndexInfo for {abs_path}"]
        lines.extend(f"{name}={_fmt(invoker.get(info, name))}" for name in INDEX_INFO_FIELDS)
        return "\n".join(lines) + "\n"
    except Exception as e:
        return f"GetIndexInfo ERROR: {e!r}"


def describe_index_job_members(settings: Settings) -> str:
    """List the IndexJob members that look related to inputs, paths and actions."""
    try:
        job = Invoker().create(settings.engine.index_job_types, settings.engine.module_names)
        if job is None:
            return "Could not instantiate the engine IndexJob."

        lines = ["=== IndexJob Properties (public instance) ==="]
        for member in sorted(list_members(job, MemberKind.PROPERTY), key=lambda m: m.name):
            if _contains_any(member.name, _PROPERTY_HINTS):
                type_name = member.declared_type.__name__ if member.declared_type else "object"
                lines.append(f"{type_name} {member.name} (CanWrite={member.writable})")

        lines.append("=== IndexJob Methods (public instance, 0-1 param) ===")
        for member in sorted(list_members(job, MemberKind.METHOD), key=lambda m: m.name):
            if not _contains_any(member.name, _METHOD_HINTS):
                continue
            arity = _arity(getattr(job, member.name, None))
            if arity == 0:
                lines.append(f"{member.name}()")
            elif arity == 1:
                lines.append(f"{member.name}(arg)")
        return "\n".join(lines) + "\n"
    except Exception as e:
        return f"DescribeIndexJobMembers error: {e!r}"


def search_debug(index_path: str, request: str, settings: Settings) -> str:
    """Run a bare 50-hit search against one index and report what happened."""
    try:
        abs_path = os.path.abspath(index_path)
        lines = [
            f"INDEX USED: {abs_path}",
            f"REQUEST: {request}",
            f"IndexLooksValid={index_looks_valid(abs_path, settings.indexing.marker_extension)}",
        ]

        invoker = Invoker()
        job = invoker.create(settings.engine.search_job_types, settings.engine.module_names)
        if job is None:
            return "SearchDebug ERROR: cannot create SearchJob."

        attach_indexes(job, [abs_path], invoker)
        invoker.try_set(job, "Request", request)
        invoker.try_set(job, "MaxFilesToRetrieve", 50)

        result = execute(job)
        lines.append(f"Execute ok={result.ok} rc={result.code}")

        raw = first_available(RESULTS_PROPERTIES, lambda n: invoker.get(job, n))
        count = first_available(COUNT_PROPERTIES, lambda n: invoker.get(raw, n)) if raw is not None else None
        if count is None and raw is not None and hasattr(raw, "__len__"):
            count = len(raw)
        lines.append(f"RESULTS: {count if isinstance(count, int) else 0}")
        return "\n".join(lines) + "\n"
    except Exception as e:
        return f"SearchDebug ERROR: {e!r}"


def _arity(method: Any) -> int | None:
    """Number of positional parameters, or None when unknown or not a plain 0-1 signature."""
    try:
        params = inspect.signature(method).parameters.values()
    except (TypeError, ValueError):
        return None
    if any(p.kind in (p.VAR_POSITIONAL, p.VAR_KEYWORD, p.KEYWORD_ONLY) for p in params):
        return None
    return len(params)


def _fmt(value: Any) -> str:
    return "" if value is None else str(value)
