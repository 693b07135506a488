"""Error taxonomy for the Reminders Bridge.

Every failure a tool call can produce is one of these kinds. The router turns
them into error responses; none of them is allowed to stop the server.
"""

from typing import Optional


class ReminderServiceError(Exception):
    """Base class. ``kind`` is the name reported to the caller."""

    kind = "ExecutionError"

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail

    def describe(self) -> str:
        text = f"{self.kind}: {self.message}"
        if self.detail:
            text += f" ({self.detail})"
        return text


class ToolValidationError(ReminderServiceError):
    """Tool arguments are missing, mistyped or unknown."""

    kind = "ValidationError"


class DateError(ReminderServiceError):
    """A date string matched none of the accepted formats."""

    kind = "DateError"


class AccessDeniedError(ReminderServiceError):
    """The OS refused access to reminders or to automation."""

    kind = "PermissionError"


class CollectionNotFoundError(ReminderServiceError):
    """The referenced reminder list does not exist."""

    kind = "CollectionNotFoundError"


class ExecutionError(ReminderServiceError):
    """Non-zero exit, timeout, or the process could not be run at all."""

    kind = "ExecutionError"


class ParseError(ReminderServiceError):
    """Reader output did not have the expected structure."""

    kind = "ParseError"
