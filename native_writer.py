"""Write backend: creates reminders by running AppleScript through osascript.

Every user value is escaped before it is placed in the script, and the script
is passed as a single argument (no shell), so a title can never end the
string literal it sits in.
"""

from typing import Optional

from backends import Access, NativeBackend
from command_escaper import quote_applescript_string
from date_normalizer import normalize_date
from errors import AccessDeniedError, CollectionNotFoundError, ExecutionError
from logger_config import setup_logger
from process_runner import ProcessResult
from schemas import ReminderCreated

logger = setup_logger(__name__, 'backend.log')

COLLECTION_NOT_FOUND_MARKERS = ("can't get list", "can’t get list", "(-1728)")
PERMISSION_MARKERS = ("not authorized", "not allowed", "(-1743)", "(-1744)")


def build_create_script(
    title: str,
    due_date: Optional[str] = None,
    list_name: Optional[str] = None,
    note: Optional[str] = None
) -> str:
    """Build the AppleScript that creates one reminder.

    due_date must already be canonical (see date_normalizer).
    """
    properties = [f"name:{quote_applescript_string(title)}"]
    if note:
        properties.append(f"body:{quote_applescript_string(note)}")
    if due_date:
        properties.append(f"due date:date {quote_applescript_string(due_date)}")
    props = "{" + ", ".join(properties) + "}"

    if list_name:
        make = f"make new reminder at list {quote_applescript_string(list_name)} with properties {props}"
    else:
        make = f"make new reminder with properties {props}"

    return "\n".join([
        'tell application "Reminders"',
        f"    {make}",
        "end tell",
    ])


class NativeWriter(NativeBackend):
    """Creates reminders via the scripting interpreter."""

    access = Access.WRITE

    async def create_reminder(
        self,
        title: str,
        due_date: Optional[str] = None,
        list_name: Optional[str] = None,
        note: Optional[str] = None
    ) -> ReminderCreated:
        """Create a reminder in the native store.

        Args:
            title: Reminder title
            due_date: Due date in any accepted format
            list_name: Target list, or None for the default list
            note: Optional body text

        Returns:
            ReminderCreated confirmation (the interpreter returns no id)

        Raises:
            DateError: due_date is malformed; nothing is executed
            CollectionNotFoundError, AccessDeniedError, ExecutionError
        """
        canonical_due = normalize_date(due_date) if due_date is not None else None

        script = build_create_script(title, canonical_due, list_name, note)
        logger.info(f"Creating reminder: {title!r} | Due: {canonical_due} | List: {list_name}")

        result = await self._execute(
            [self.config.osascript_path, "-e", script],
            self.config.writer_timeout
        )
        if not result.ok or result.stderr.strip():
            raise self._map_failure(result, list_name)

        logger.info(f"Reminder created: {title!r}")
        return ReminderCreated(
            title=title,
            due_date=canonical_due,
            list_name=list_name,
            note=note,
        )

    @staticmethod
    def _map_failure(result: ProcessResult, list_name: Optional[str]) -> Exception:
        stderr = result.stderr.strip()
        logger.error(f"osascript exited with {result.exit_code}: {stderr}")
        lowered = stderr.lower()
        if list_name and any(m in lowered for m in COLLECTION_NOT_FOUND_MARKERS):
            return CollectionNotFoundError(f"reminder list '{list_name}' not found", stderr)
        if any(m in lowered for m in PERMISSION_MARKERS):
            return AccessDeniedError("automation access to Reminders was denied", stderr)
        return ExecutionError(f"osascript exited with status {result.exit_code}", stderr or None)
