"""Job execution protocol — Run an engine job whose execute method name is unknown."""

from __future__ import annotations

import logging
from typing import Any, NamedTuple

from searchbridge.models.outcome import ErrorKind, OperationOutcome
from searchbridge.observability.diagnostics import diagnostics
from searchbridge.probe.resolver import MemberKind, ProbeTarget

logger = logging.getLogger(__name__)

EXECUTE_METHOD_NAMES: tuple[str, ...] = ("Execute", "Run", "DoExecute", "DoJob", "Perform", "Start")


class JobResult(NamedTuple):
    """``ok`` is False when no method ran or it raised; ``code`` 0 means success."""

    ok: bool
    code: int

    @property
    def succeeded(self) -> bool:
        return self.ok and self.code == 0


def interpret_return(value: Any) -> int:
    """Map an execute method's return value to a status code.

    bool: True -> 0, False -> -1. int: verbatim. Anything else: 0.
    """
    if isinstance(value, bool):
        return 0 if value else -1
    if isinstance(value, int):
        return value
    return 0


def execute(job: Any, outcome: OperationOutcome | None = None) -> JobResult:
    """Run ``job`` through the first execute-like method it exposes.

    A job without any of ``EXECUTE_METHOD_NAMES`` comes from an incompatible
    engine version, so the miss is recorded as an error rather than a warning.

    Args:
        job: Configured engine job instance.
        outcome: Receives the error on failure.

    Returns:
        ``JobResult(ok, code)``.
    """
    member = ProbeTarget(job, EXECUTE_METHOD_NAMES[0], EXECUTE_METHOD_NAMES[1:]).resolve(MemberKind.METHOD)
    if member is None:
        message = f"No execute-like method found ({'/'.join(EXECUTE_METHOD_NAMES)})."
        if outcome is not None:
            outcome.fail(message, ErrorKind.CAPABILITY)
        if diagnostics.enabled:
            logger.info(message)
        return JobResult(False, -1)

    try:
        ret = getattr(job, member.name)()
    except Exception as e:
        message = f"Execute threw via {member.name}: {e}"
        if outcome is not None:
            outcome.fail(message, ErrorKind.JOB)
        if diagnostics.enabled:
            logger.info(message)
        return JobResult(False, -1)

    return JobResult(True, interpret_return(ret))
