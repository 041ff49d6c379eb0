"""Exception hierarchy for togglbill."""

from typing import Any, Optional


class TogglBillError(Exception):
    """Base error for all failures surfaced to the command line."""


class ConfigurationError(TogglBillError):
    """Required policy fields or credentials are missing or invalid."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__("; ".join(errors))


class AuthenticationError(TogglBillError):
    """Identity check against Toggl failed."""


class DataShapeError(TogglBillError):
    """A single time entry is malformed and cannot be reconciled."""

    def __init__(self, message: str, entry_id: Any = None) -> None:
        self.entry_id = entry_id
        super().__init__(message)


class RemoteExecutionError(TogglBillError):
    """Applying an operation against Toggl failed.

    Operations queued after the failing one are abandoned.
    """

    def __init__(self, message: str, operation: Optional[Any] = None, applied: int = 0) -> None:
        self.operation = operation
        self.applied = applied
        super().__init__(message)
