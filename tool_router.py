"""Tool dispatch for the Reminders Bridge.

Each tool is declared once in TOOLS with its argument schema and whether it
reads or writes the native store. The router validates a call against that
declaration, hands it to the reader or writer backend, and funnels every
outcome (including unexpected exceptions) through the response mapper.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from backends import Access, NativeBackend, backend_config_from_settings
from config import Settings
from errors import ReminderServiceError, ToolValidationError
from logger_config import setup_logger
from native_reader import NativeReader
from native_writer import NativeWriter
from response_mapper import from_error, to_response
from schemas import (
    CreateReminderArgs,
    ListReminderListsArgs,
    ListRemindersArgs,
    ToolName,
    ToolRequest,
    ToolResponse,
)

logger = setup_logger(__name__, 'router.log')

Handler = Callable[[Any, Any], Awaitable[Any]]


@dataclass(frozen=True)
class ToolSpec:
    name: ToolName
    description: str
    args_model: Type[BaseModel]
    access: Access
    handler: Handler


async def _create_reminder(writer: NativeWriter, args: CreateReminderArgs):
    return await writer.create_reminder(
        title=args.title,
        due_date=args.due_date,
        list_name=args.list_name,
        note=args.note,
    )


async def _list_reminders(reader: NativeReader, args: ListRemindersArgs):
    return await reader.list_reminders(
        list_name=args.list_name,
        show_completed=args.show_completed,
    )


async def _list_reminder_lists(reader: NativeReader, args: ListReminderListsArgs):
    return await reader.list_collections()


TOOLS: Dict[ToolName, ToolSpec] = {
    spec.name: spec for spec in (
        ToolSpec(
            name=ToolName.CREATE_REMINDER,
            description=(
                "Create a reminder. dueDate accepts 'YYYY-MM-DD HH:MM:SS', "
                "'YYYY-MM-DD', 'MM/DD/YYYY' or ISO-8601 and is read in local time."
            ),
            args_model=CreateReminderArgs,
            access=Access.WRITE,
            handler=_create_reminder,
        ),
        ToolSpec(
            name=ToolName.LIST_REMINDERS,
            description="List reminders, optionally from one list and including completed ones.",
            args_model=ListRemindersArgs,
            access=Access.READ,
            handler=_list_reminders,
        ),
        ToolSpec(
            name=ToolName.LIST_REMINDER_LISTS,
            description="List all reminder lists.",
            args_model=ListReminderListsArgs,
            access=Access.READ,
            handler=_list_reminder_lists,
        ),
    )
}


def _format_validation_error(error: PydanticValidationError) -> str:
    problems = []
    for err in error.errors():
        location = ".".join(str(part) for part in err["loc"]) or "arguments"
        problems.append(f"{location}: {err['msg']}")
    return "; ".join(problems)


class ToolRouter:
    """Validates tool calls and routes them to the read or write backend."""

    def __init__(self, *backends: NativeBackend):
        self._backends: Dict[Access, NativeBackend] = {
            backend.access: backend for backend in backends
        }
        missing = {spec.access for spec in TOOLS.values()} - set(self._backends)
        if missing:
            raise ValueError(f"no backend for access mode(s): {sorted(m.value for m in missing)}")

    def tool_definitions(self) -> List[dict]:
        """Tool catalog with JSON input schemas, for listing to clients."""
        return [
            {
                "name": spec.name.value,
                "description": spec.description,
                "inputSchema": spec.args_model.model_json_schema(by_alias=True),
            }
            for spec in TOOLS.values()
        ]

    def validate(self, tool_name: str, arguments: Any):
        """Return (ToolSpec, parsed arguments) or raise ToolValidationError."""
        try:
            request = ToolRequest.model_validate({
                "toolName": tool_name,
                "arguments": {} if arguments is None else arguments,
            })
        except PydanticValidationError as e:
            raise ToolValidationError(f"invalid request for tool '{tool_name}'", _format_validation_error(e))

        spec = TOOLS[request.tool_name]
        try:
            args = spec.args_model.model_validate(request.arguments)
        except PydanticValidationError as e:
            raise ToolValidationError(f"invalid arguments for {spec.name.value}", _format_validation_error(e))
        return spec, args

    async def dispatch(self, tool_name: str, arguments: Any = None) -> ToolResponse:
        """Run one tool call. Never raises; failures come back as error responses."""
        try:
            spec, args = self.validate(tool_name, arguments)
        except ToolValidationError as e:
            logger.warning(f"Rejected {tool_name}: {e.describe()}")
            return from_error(e)

        backend = self._backends[spec.access]
        logger.info(f"Dispatching {spec.name.value} to {spec.access.value} backend")
        try:
            result = await spec.handler(backend, args)
        except Exception as e:
            logger.error(f"{spec.name.value} failed: {e}", exc_info=not isinstance(e, ReminderServiceError))
            return from_error(e)
        return to_response(result)


def build_router(settings: Settings) -> ToolRouter:
    """Resolve backend configuration once and wire both backends into a router."""
    config = backend_config_from_settings(settings)
    logger.info(f"Reader: {config.reader_path} | Interpreter: {config.osascript_path} | Test mode: {settings.TEST_MODE}")
    return ToolRouter(NativeReader(config), NativeWriter(config))
