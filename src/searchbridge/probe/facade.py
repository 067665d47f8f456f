"""Invocation façade — The four primitives every engine interaction goes through.

``try_set``, ``get``, ``try_call`` and ``try_call_ret`` resolve a member by
name and use it, converting both "member missing" and "engine raised" into a
soft failure instead of an exception. Orchestration code can then read as a
sequence of best-effort configuration steps followed by an execute.

When an ``OperationOutcome`` is attached, soft failures are recorded on it as
the latest warning.
"""

from __future__ import annotations

import enum
import inspect
import logging
from collections.abc import Iterable
from typing import Any

from searchbridge.models.outcome import OperationOutcome
from searchbridge.probe.resolver import MemberKind, find_member, find_type
from searchbridge.observability.diagnostics import diagnostics

logger = logging.getLogger(__name__)


def coerce(value: Any, declared_type: type | None) -> Any:
    """Convert ``value`` to ``declared_type`` using a fixed ladder.

    bool -> int (0/1), int or "true"/"false" -> bool, str -> Enum
    (case-insensitive member name), otherwise ``declared_type(value)``.

    Raises:
        ValueError: The string names no member of the enum.
        TypeError: The generic conversion is not supported.
    """
    if value is None or declared_type is None:
        return value
    if declared_type is bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, int):
            return value != 0
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in ("true", "1"):
                return True
            if lowered in ("false", "0"):
                return False
            raise ValueError(f"{value!r} is not a boolean")
    elif declared_type is int and isinstance(value, bool):
        return 1 if value else 0
    if isinstance(value, declared_type):
        return value
    if issubclass(declared_type, enum.Enum) and isinstance(value, str):
        wanted = value.strip().lower()
        for member_name, member in declared_type.__members__.items():
            if member_name.lower() == wanted:
                return member
        raise ValueError(f"{value!r} is not a member of {declared_type.__name__}")
    return declared_type(value)


class Invoker:
    """Best-effort access to members of engine objects.

    Args:
        outcome: Optional outcome that receives a warning for every soft
            failure.
    """

    def __init__(self, outcome: OperationOutcome | None = None) -> None:
        self.outcome = outcome

    def try_set(self, instance: Any, property_name: str, value: Any) -> bool:
        """Assign ``value`` to a writable property, coercing it to the declared type.

        Returns:
            True if the assignment happened.
        """
        if instance is None:
            return False
        member = find_member(instance, property_name, MemberKind.PROPERTY)
        if member is None or not member.writable:
            self._soft(f"{_owner(instance)}.{property_name} not found or read-only")
            return False
        try:
            setattr(instance, member.name, coerce(value, member.declared_type))
            return True
        except Exception as e:
            self._soft(f"Setting {_owner(instance)}.{property_name} failed: {e}", cause=e)
            return False

    def get(self, instance: Any, property_name: str) -> Any:
        """Read a property. Returns ``None`` when it is missing or the read raised."""
        if instance is None:
            return None
        member = find_member(instance, property_name, MemberKind.PROPERTY)
        if member is None or not member.readable:
            return None
        try:
            return getattr(instance, member.name)
        except Exception as e:
            self._soft(f"Reading {_owner(instance)}.{property_name} failed: {e}", cause=e)
            return None

    def try_call(self, instance: Any, method_name: str, *args: Any) -> bool:
        """Invoke a method and discard its return value.

        Returns:
            True if the method exists and returned without raising.
        """
        return self._call(instance, method_name, args)[0]

    def try_call_ret(self, instance: Any, method_name: str, *args: Any) -> Any:
        """Invoke a method and return its result, or ``None`` on any failure."""
        return self._call(instance, method_name, args)[1]

    def create(self, type_names: Iterable[str], module_names: Iterable[str]) -> Any:
        """Locate an engine type and instantiate it with no arguments.

        Returns:
            The new instance, or ``None`` if the type is missing or its
            constructor raised.
        """
        names = list(type_names)
        engine_type = find_type(names, module_names)
        if engine_type is None:
            return None
        try:
            return engine_type()
        except Exception as e:
            self._soft(f"Constructing {names[0] if names else engine_type} failed: {e}", cause=e)
            return None

    def _call(self, instance: Any, method_name: str, args: tuple[Any, ...]) -> tuple[bool, Any]:
        if instance is None:
            return False, None
        member = find_member(instance, method_name, MemberKind.METHOD)
        if member is None:
            self._soft(f"{_owner(instance)}.{method_name} not found")
            return False, None
        try:
            return True, getattr(instance, member.name)(*args)
        except Exception as e:
            self._soft(f"Calling {_owner(instance)}.{method_name} failed: {e}", cause=e)
            return False, None

    def _soft(self, message: str, cause: Exception | None = None) -> None:
        if self.outcome is not None:
            self.outcome.warn(message)
        if diagnostics.enabled:
            if cause is not None:
                logger.info("WARN: %s (%s)", message, type(cause).__name__)
            else:
                logger.info("WARN: %s", message)


def _owner(instance: Any) -> str:
    owner = instance if inspect.isclass(instance) else type(instance)
    return owner.__name__
