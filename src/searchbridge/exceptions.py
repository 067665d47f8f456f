"""Bridge-specific exceptions.

Public operations never raise these on their own; they report failures on an
``OperationOutcome``. Hosts that prefer exceptions call
``OperationOutcome.raise_for_outcome()``.
"""


class BridgeError(Exception):
    """Base exception for bridge errors."""


class ConfigurationError(BridgeError):
    """Raised when call inputs are invalid (empty path, missing file)."""


class CapabilityMissingError(BridgeError):
    """Raised when the loaded engine lacks a required type or member."""


class JobFailedError(BridgeError):
    """Raised when an engine job reports failure or cannot be executed."""


class PostconditionError(BridgeError):
    """Raised when the engine reports success but the expected artifact is absent."""
