"""MCP Server for the Reminders Bridge.

Exposes create_reminder, list_reminders and list_reminder_lists to AI agents.
Every call goes through the ToolRouter; error responses are raised as
ToolError so the client receives isError=true with the message.

Transport Support:
- stdio: Standard input/output (local process communication)
- sse: Server-Sent Events over HTTP (network access)
"""

import os
from typing import Any, Optional

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError

from config import settings
from logger_config import setup_logger
from tool_router import build_router

logger = setup_logger(__name__, 'mcp.log')

router = build_router(settings)

mcp = FastMCP(
    "AppleReminders",
    host=settings.MCP_HOST,
    port=settings.MCP_PORT
)


async def _call(tool_name: str, arguments: dict) -> Any:
    response = await router.dispatch(
        tool_name,
        {key: value for key, value in arguments.items() if value is not None}
    )
    if response.is_error:
        raise ToolError(response.message)
    return response.payload


@mcp.tool()
async def create_reminder(
    title: str,
    dueDate: Optional[str] = None,
    list: Optional[str] = None,
    note: Optional[str] = None
) -> Any:
    """Create a new reminder.

    Args:
        title: Reminder title
        dueDate: Optional due date - "YYYY-MM-DD HH:MM:SS", "YYYY-MM-DD", "MM/DD/YYYY" or ISO-8601, local time
        list: Optional name of the reminder list to add to (default list if omitted)
        note: Optional note attached to the reminder

    Returns:
        Confirmation with the title, canonical due date and list
    """
    return await _call("create_reminder", {
        "title": title,
        "dueDate": dueDate,
        "list": list,
        "note": note,
    })


@mcp.tool()
async def list_reminders(list: Optional[str] = None, showCompleted: bool = False) -> Any:
    """List reminders.

    Args:
        list: Optional exact name of a reminder list to restrict to
        showCompleted: Include completed reminders (default: False)

    Returns:
        Reminders with title, dueDate, note, list and completed
    """
    return await _call("list_reminders", {"list": list, "showCompleted": showCompleted})


@mcp.tool()
async def list_reminder_lists() -> Any:
    """List all reminder lists.

    Returns:
        Reminder lists with their names
    """
    return await _call("list_reminder_lists", {})


if __name__ == "__main__":
    transport = os.getenv("MCP_TRANSPORT", settings.MCP_TRANSPORT).lower()

    if transport == "sse":
        logger.info(f"Starting MCP server with SSE transport on {settings.MCP_HOST}:{settings.MCP_PORT}")
        mcp.run(transport="sse")
    else:
        # stdout belongs to the protocol from here on
        logger.info("Starting MCP server with stdio transport")
        mcp.run(transport="stdio")
