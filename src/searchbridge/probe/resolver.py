"""Capability resolver — Locates engine types and probes objects for members.

The engine's API differs between installed versions, so nothing here assumes
a name exists. Types are located by dotted name, first among modules already
loaded in the process, then by importing a list of known engine modules.
Members are matched case-insensitively, with static introspection so that
probing a property never runs its getter.

A miss is never an error: callers get ``None`` and decide whether the
capability was optional.
"""

from __future__ import annotations

import importlib
import inspect
import logging
import sys
import types
import typing
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar

from searchbridge.observability.diagnostics import diagnostics

logger = logging.getLogger(__name__)

T = TypeVar("T")

_MISSING = object()


class MemberKind(str, Enum):
    """What a probe is looking for."""

    PROPERTY = "property"
    METHOD = "method"


@dataclass(frozen=True)
class Member:
    """A resolved public member of an engine object."""

    name: str
    kind: MemberKind
    readable: bool = True
    writable: bool = True
    declared_type: type | None = None


@dataclass(frozen=True)
class ProbeTarget:
    """An instance, a desired member name, and its synonyms in priority order."""

    instance: Any
    name: str
    candidates: tuple[str, ...] = field(default_factory=tuple)

    @property
    def names(self) -> list[str]:
        """``name`` followed by the synonyms, without case-insensitive duplicates."""
        seen: set[str] = set()
        ordered: list[str] = []
        for n in (self.name, *self.candidates):
            if n and n.lower() not in seen:
                seen.add(n.lower())
                ordered.append(n)
        return ordered

    def resolve(self, kind: MemberKind) -> Member | None:
        """Return the first of ``names`` that exists on the instance as ``kind``."""
        return first_available(self.names, lambda n: find_member(self.instance, n, kind, quiet=True))


# ── Type lookup ──────────────────────────────────────────────────────────────


def find_type(candidate_full_names: Iterable[str], module_names: Iterable[str] = ()) -> type | None:
    """Locate the first engine type matching one of ``candidate_full_names``.

    Args:
        candidate_full_names: Dotted type names in priority order,
            e.g. ``["dtSearch.Engine.IndexJob"]``.
        module_names: Known engine modules to import and probe when the
            type is not already loaded.

    Returns:
        The class, or ``None`` when the engine does not provide it.
    """
    names = [n for n in candidate_full_names if n]

    for full_name in names:
        found = _find_loaded(full_name)
        if found is not None:
            return found

    for module_name in module_names:
        module = _import_engine_module(module_name)
        if module is None:
            continue
        for full_name in names:
            found = _probe_module(module, full_name)
            if found is not None:
                return found

    if diagnostics.enabled:
        logger.info("Type not found: %s (modules tried: %s)", ", ".join(names), ", ".join(module_names))
    return None


def engine_modules(module_names: Iterable[str]) -> list[types.ModuleType]:
    """Return every known engine module that is loaded or importable."""
    modules = []
    for module_name in module_names:
        module = _import_engine_module(module_name)
        if module is not None and module not in modules:
            modules.append(module)
    return modules


def _find_loaded(full_name: str) -> type | None:
    parts = full_name.split(".")
    for i in range(len(parts) - 1, 0, -1):
        module = sys.modules.get(".".join(parts[:i]))
        if module is None:
            continue
        found = _resolve_dotted(module, parts[i:])
        if inspect.isclass(found):
            return found
    return None


def _import_engine_module(module_name: str) -> types.ModuleType | None:
    loaded = sys.modules.get(module_name)
    if loaded is not None:
        return loaded
    try:
        return importlib.import_module(module_name)
    except Exception as e:
        logger.debug("Engine module %s not importable: %s", module_name, e)
        return None


def _probe_module(module: types.ModuleType, full_name: str) -> type | None:
    for path in _suffixes(full_name, module.__name__):
        found = _resolve_dotted(module, path)
        if inspect.isclass(found):
            return found
    return None


def _suffixes(full_name: str, module_name: str) -> Iterator[list[str]]:
    """Yield attribute paths to try inside a module, most specific first."""
    parts = full_name.split(".")
    prefix = module_name + "."
    if full_name.startswith(prefix):
        yield full_name[len(prefix) :].split(".")
    for i in range(len(parts)):
        yield parts[i:]


def _resolve_dotted(root: Any, path: list[str]) -> Any:
    obj = root
    for part in path:
        obj = getattr(obj, part, _MISSING)
        if obj is _MISSING:
            return None
    return obj


# ── Member lookup ────────────────────────────────────────────────────────────


def find_member(target: Any, name: str, kind: MemberKind, *, quiet: bool = False) -> Member | None:
    """Resolve a public member of ``target`` by case-insensitive exact name.

    An exact-case match wins over other case variants. On a miss, and only
    when diagnostics are enabled, the available members of that kind are
    listed in the log.

    Args:
        target: Engine object (or class, for static members).
        name: Desired member name.
        kind: Property or method.
        quiet: Skip the miss listing; used by synonym chains that log once.

    Returns:
        The resolved member, or ``None``.
    """
    if target is None or not name:
        return None

    wanted = name.lower()
    matches = [n for n in _public_names(target) if n.lower() == wanted]
    matches.sort(key=lambda n: n != name)
    for attr_name in matches:
        member = _classify(target, attr_name)
        if member is not None and member.kind is kind:
            return member

    if diagnostics.enabled and not quiet:
        available = ", ".join(m.name for m in list_members(target, kind))
        logger.info(
            "Probe miss: %s.%s (%s) not found. Available %s members: %s",
            _type_name(target),
            name,
            kind.value,
            kind.value,
            available,
        )
    return None


def list_members(target: Any, kind: MemberKind | None = None) -> list[Member]:
    """List the public members of ``target``, optionally filtered by kind."""
    members = []
    for attr_name in _public_names(target):
        member = _classify(target, attr_name)
        if member is not None and (kind is None or member.kind is kind):
            members.append(member)
    return members


def first_available(
    candidates: Iterable[str],
    probe: Callable[[str], T | None],
    accept: Callable[[Any], bool] | None = None,
) -> T | None:
    """Return the first non-``None`` probe result over ``candidates``.

    Args:
        candidates: Names in priority order.
        probe: Called with each name; ``None`` means "not available".
        accept: Optional filter; rejected values count as unavailable.
    """
    for candidate in candidates:
        value = probe(candidate)
        if value is None:
            continue
        if accept is not None and not accept(value):
            continue
        return value
    return None


def _public_names(target: Any) -> list[str]:
    try:
        names = dir(target)
    except Exception:
        return []
    return [n for n in names if not n.startswith("_")]


def _classify(target: Any, attr_name: str) -> Member | None:
    try:
        static = inspect.getattr_static(target, attr_name)
    except AttributeError:
        # Dynamic attribute served by __getattr__
        static = getattr(target, attr_name, _MISSING)
        if static is _MISSING:
            return None

    if isinstance(static, property):
        return Member(
            name=attr_name,
            kind=MemberKind.PROPERTY,
            readable=static.fget is not None,
            writable=static.fset is not None,
            declared_type=_return_type(static.fget),
        )

    if isinstance(static, (staticmethod, classmethod)) or _is_routine(static):
        return Member(name=attr_name, kind=MemberKind.METHOD, writable=False)

    if inspect.isdatadescriptor(static):
        return Member(name=attr_name, kind=MemberKind.PROPERTY, writable=hasattr(type(static), "__set__"))

    if callable(static) and not inspect.isclass(static):
        return Member(name=attr_name, kind=MemberKind.METHOD, writable=False)

    declared = _annotated_type(target, attr_name)
    if declared is None and static is not None:
        declared = type(static)
    return Member(name=attr_name, kind=MemberKind.PROPERTY, declared_type=declared)


def _is_routine(obj: Any) -> bool:
    return inspect.isroutine(obj) or inspect.ismethoddescriptor(obj)


def _return_type(func: Callable[..., Any] | None) -> type | None:
    if func is None:
        return None
    try:
        hints = typing.get_type_hints(func)
    except Exception:
        return None
    return _plain_type(hints.get("return"))


def _annotated_type(target: Any, attr_name: str) -> type | None:
    owner = target if inspect.isclass(target) else type(target)
    try:
        hints = typing.get_type_hints(owner)
    except Exception:
        return None
    return _plain_type(hints.get(attr_name))


def _plain_type(annotation: Any) -> type | None:
    """Reduce ``X | None`` to ``X``; anything else that is not a class yields ``None``."""
    if annotation is None:
        return None
    args = typing.get_args(annotation)
    if args and (typing.get_origin(annotation) in (typing.Union, types.UnionType)):
        non_none = [a for a in args if a is not type(None)]
        if len(non_none) == 1:
            annotation = non_none[0]
    return annotation if inspect.isclass(annotation) else None


def _type_name(target: Any) -> str:
    owner = target if inspect.isclass(target) else type(target)
    return f"{owner.__module__}.{owner.__qualname__}"
