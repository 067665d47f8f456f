"""Engine setup — Paths, home directory and process-wide engine options.

Each call is forwarded to whichever setup entry point the loaded engine
exposes: a module-level function or a static method on any engine class.
Builds that need no such setup simply lack the entry point, which is
reported as a warning, not an error.
"""

from __future__ import annotations

import enum
import inspect
import logging
import os
from typing import Any

from searchbridge.config.settings import EngineSettings
from searchbridge.models.outcome import ErrorKind, OperationOutcome
from searchbridge.probe.facade import Invoker
from searchbridge.probe.resolver import MemberKind, engine_modules, find_member, find_type

logger = logging.getLogger(__name__)


def invoke_static_anywhere(module_names: list[str], method_name: str, *args: Any) -> bool:
    """Call ``method_name(*args)`` on the first engine module or class exposing it.

    Module-level functions are tried before static and class methods of the
    module's public classes.

    Returns:
        True if some entry point accepted the call.
    """
    invoker = Invoker()
    for module in engine_modules(module_names):
        if find_member(module, method_name, MemberKind.METHOD, quiet=True) is not None:
            if invoker.try_call(module, method_name, *args):
                return True
        for _, cls in inspect.getmembers(module, inspect.isclass):
            if cls.__name__.startswith("_"):
                continue
            member = find_member(cls, method_name, MemberKind.METHOD, quiet=True)
            if member is None or not _is_static(cls, member.name):
                continue
            if invoker.try_call(cls, member.name, *args):
                return True
    return False


def _is_static(cls: type, attr_name: str) -> bool:
    static = inspect.getattr_static(cls, attr_name, None)
    if isinstance(static, (staticmethod, classmethod)):
        return True
    return inspect.isbuiltin(getattr(cls, attr_name, None))


def set_engine_path(engine_dir: str | None, settings: EngineSettings) -> OperationOutcome:
    """Tell the engine where its native binaries live.

    A missing directory or an engine without ``SetEnginePath`` only warns.
    """
    outcome = OperationOutcome()
    if not engine_dir or not engine_dir.strip():
        outcome.fail("engineDir is empty.", ErrorKind.CONFIGURATION)
        return outcome
    if not os.path.isdir(engine_dir):
        outcome.warn(f"Engine directory does not exist: {engine_dir}")

    if not invoke_static_anywhere(settings.module_names, "SetEnginePath", engine_dir):
        outcome.warn("SetEnginePath not found in this engine build (safe to ignore).")
    return outcome


def set_home_dir_xml(homedir_xml_path: str | None, settings: EngineSettings) -> OperationOutcome:
    """Point the engine at its ``homedir.xml`` resource file.

    Tries ``SetResourceFilePath(path)`` first, then ``SetHomeDir(directory)``.
    """
    outcome = OperationOutcome()
    if not homedir_xml_path or not homedir_xml_path.strip():
        outcome.fail("homedirXmlPath is empty.", ErrorKind.CONFIGURATION)
        return outcome
    if not os.path.isfile(homedir_xml_path):
        outcome.fail(f"homedir.xml not found: {homedir_xml_path}", ErrorKind.CONFIGURATION)
        return outcome

    ok = invoke_static_anywhere(settings.module_names, "SetResourceFilePath", homedir_xml_path)
    if not ok:
        ok = invoke_static_anywhere(settings.module_names, "SetHomeDir", os.path.dirname(homedir_xml_path))
    if not ok:
        outcome.warn("Neither SetResourceFilePath nor SetHomeDir found (likely unnecessary if homedir.xml is colocated).")
    return outcome


def default_thread_count() -> int:
    return max(2, (os.cpu_count() or 1) // 2)


def ensure_engine_options(settings: EngineSettings) -> None:
    """Best-effort engine tuning before each job: no message boxes, worker threads.

    Silently does nothing when the engine lacks ``SetOption`` or the options
    enum.
    """
    try:
        engine_type = find_type(settings.engine_types, settings.module_names)
        if engine_type is None or find_member(engine_type, "SetOption", MemberKind.METHOD, quiet=True) is None:
            return

        options_enum = find_type(settings.options_enum_types, settings.module_names)
        if options_enum is None or not issubclass(options_enum, enum.Enum):
            return

        invoker = Invoker()
        no_message_box = _enum_member(options_enum, "NoExceptionMessageBox")
        if no_message_box is not None:
            invoker.try_call(engine_type, "SetOption", no_message_box, True)

        threads = _enum_member(options_enum, "Threads")
        if threads is not None:
            invoker.try_call(engine_type, "SetOption", threads, settings.threads or default_thread_count())
    except Exception:
        logger.debug("Engine option setup skipped", exc_info=True)


def _enum_member(options_enum: type[enum.Enum], name: str) -> enum.Enum | None:
    for member_name, member in options_enum.__members__.items():
        if member_name.lower() == name.lower():
            return member
    return None
