"""Operation outcome models — how every public call reports success and failure."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from searchbridge.models.hit import SearchHit
from searchbridge.exceptions import (
    BridgeError,
    CapabilityMissingError,
    ConfigurationError,
    JobFailedError,
    PostconditionError,
)


class ErrorKind(str, Enum):
    """Category of the hard error recorded on an outcome."""

    CONFIGURATION = "configuration"
    CAPABILITY = "capability"
    JOB = "job"
    POSTCONDITION = "postcondition"
    UNEXPECTED = "unexpected"


_EXCEPTIONS: dict[ErrorKind, type[BridgeError]] = {
    ErrorKind.CONFIGURATION: ConfigurationError,
    ErrorKind.CAPABILITY: CapabilityMissingError,
    ErrorKind.JOB: JobFailedError,
    ErrorKind.POSTCONDITION: PostconditionError,
    ErrorKind.UNEXPECTED: BridgeError,
}


class OperationOutcome(BaseModel):
    """Result of one adapter-level call.

    A warning is a soft condition (an optional capability was missing, a
    best-effort setting was rejected). An error means the operation failed.
    """

    success: bool = Field(default=True, description="False once a hard error was recorded")
    last_error: str | None = Field(default=None, description="Most recent hard error")
    last_warning: str | None = Field(default=None, description="Most recent soft warning")
    error_kind: ErrorKind | None = Field(default=None, description="Category of ``last_error``")

    def warn(self, message: str) -> None:
        self.last_warning = message

    def fail(self, message: str, kind: ErrorKind = ErrorKind.UNEXPECTED) -> None:
        self.success = False
        self.last_error = message
        self.error_kind = kind

    def raise_for_outcome(self) -> None:
        """Raise the exception matching ``error_kind`` if the call failed."""
        if self.success:
            return
        exc_class = _EXCEPTIONS.get(self.error_kind or ErrorKind.UNEXPECTED, BridgeError)
        raise exc_class(self.last_error or "operation failed")


class SearchOutcome(OperationOutcome):
    """Outcome of a search, carrying the hits gathered before any failure."""

    hits: list[SearchHit] = Field(default_factory=list, description="Normalized hits in engine order")
    elapsed_ms: int = Field(default=0, description="Wall time of the search call")
