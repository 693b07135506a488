"""Pydantic schemas for the Reminders Bridge.

This module defines the reminder data model, the per-tool argument schemas
used for request validation, and the uniform tool response envelope.
Wire names are camelCase (``dueDate``, ``showCompleted``, ``isError``);
Python attributes are snake_case.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, StrictBool, StrictStr, field_validator


class ToolName(str, Enum):
    """The fixed set of tools a client may call"""
    CREATE_REMINDER = "create_reminder"
    LIST_REMINDERS = "list_reminders"
    LIST_REMINDER_LISTS = "list_reminder_lists"


class Reminder(BaseModel):
    """A reminder as reported by the native store.

    Identity belongs to the native store, so there is no id field.
    due_date is always canonical (MM/DD/YYYY HH:MM:SS, local time).
    """

    title: str = Field(..., min_length=1, description="Reminder title")
    due_date: Optional[str] = Field(None, alias="dueDate", description="Canonical due date")
    note: Optional[str] = Field(None, description="Free-text note")
    list_name: Optional[str] = Field(None, alias="list", description="Owning collection")
    completed: bool = Field(False, description="Completion flag")

    class Config:
        """Pydantic config"""
        populate_by_name = True


class ReminderCollection(BaseModel):
    """A named reminder list"""

    name: str = Field(..., description="Collection name as reported by the native store")


class ReminderCreated(BaseModel):
    """Confirmation of a create. The interpreter exposes no identifier."""

    created: bool = True
    title: str
    due_date: Optional[str] = Field(None, alias="dueDate")
    list_name: Optional[str] = Field(None, alias="list")
    note: Optional[str] = None

    class Config:
        """Pydantic config"""
        populate_by_name = True


class CreateReminderArgs(BaseModel):
    """Arguments of create_reminder.

    dueDate accepts YYYY-MM-DD HH:MM:SS, YYYY-MM-DD, MM/DD/YYYY or ISO-8601.
    """

    title: StrictStr = Field(
        ...,
        min_length=1,
        description="Reminder title",
        examples=["Buy milk", "Call the dentist"]
    )

    due_date: Optional[StrictStr] = Field(
        None,
        alias="dueDate",
        description="Due date in a flexible format",
        examples=["2024-01-05 09:30:00", "2024-01-05", "01/05/2024"]
    )

    list_name: Optional[StrictStr] = Field(
        None,
        alias="list",
        description="Name of the reminder list to add to"
    )

    note: Optional[StrictStr] = Field(
        None,
        description="Optional note attached to the reminder"
    )

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must not be blank")
        return value

    class Config:
        """Pydantic config"""
        extra = "forbid"


class ListRemindersArgs(BaseModel):
    """Arguments of list_reminders"""

    list_name: Optional[StrictStr] = Field(
        None,
        alias="list",
        description="Only return reminders from this list (exact name)"
    )

    show_completed: Optional[StrictBool] = Field(
        False,
        alias="showCompleted",
        description="Include completed reminders (null means false)"
    )

    @field_validator("show_completed")
    @classmethod
    def null_means_false(cls, value: Optional[bool]) -> bool:
        return bool(value)

    class Config:
        """Pydantic config"""
        extra = "forbid"


class ListReminderListsArgs(BaseModel):
    """list_reminder_lists takes no arguments"""

    class Config:
        """Pydantic config"""
        extra = "forbid"


class ToolRequest(BaseModel):
    """One tool invocation from the client"""

    tool_name: ToolName = Field(..., alias="toolName")
    arguments: dict = Field(default_factory=dict)

    class Config:
        """Pydantic config"""
        populate_by_name = True


class ToolResponse(BaseModel):
    """Uniform response envelope returned for every tool call"""

    payload: Any = None
    is_error: bool = Field(False, alias="isError")
    message: Optional[str] = None

    class Config:
        """Pydantic config"""
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "payload": None,
                "isError": True,
                "message": "ValidationError: title: Field required"
            }
        }
