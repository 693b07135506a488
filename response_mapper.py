"""Conversion of backend results and errors into ToolResponse envelopes."""

from typing import Any

from pydantic import BaseModel

from errors import ExecutionError, ReminderServiceError
from schemas import ToolResponse


def _plain(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True)
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    return value


def to_response(result: Any) -> ToolResponse:
    return ToolResponse(payload=_plain(result), is_error=False)


def from_error(error: BaseException) -> ToolResponse:
    """Wrap any exception; unknown ones are reported as ExecutionError."""
    if not isinstance(error, ReminderServiceError):
        error = ExecutionError(str(error) or type(error).__name__)
    return ToolResponse(payload=None, is_error=True, message=error.describe())
