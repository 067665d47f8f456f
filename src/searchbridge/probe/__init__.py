"""Engine probing layer — Type lookup, member probes and job execution.

Everything that touches an engine object by name lives here. The
orchestrators in ``searchbridge.core`` only use the ``Invoker`` primitives
and ``execute``.
"""

from searchbridge.probe.facade import Invoker, coerce
from searchbridge.probe.jobs import EXECUTE_METHOD_NAMES, JobResult, execute
from searchbridge.probe.resolver import (
    Member,
    MemberKind,
    ProbeTarget,
    find_member,
    find_type,
    first_available,
    list_members,
)

__all__ = [
    "EXECUTE_METHOD_NAMES",
    "Invoker",
    "JobResult",
    "Member",
    "MemberKind",
    "ProbeTarget",
    "coerce",
    "execute",
    "find_member",
    "find_type",
    "first_available",
    "list_members",
]
