"""Read backend: queries reminders through the compiled reader.

The reader prints one record per line, fields separated by tabs:

    LIST<TAB>name
    REMINDER<TAB>title<TAB>list<TAB>true|false<TAB>due<TAB>note

due and note may be empty. Blank lines are ignored. Inside a field, a
backslash, tab, line feed or carriage return is written as \\\\, \\t, \\n or
\\r; any other backslash sequence, and anything else unexpected, is a
ParseError and no partial result is returned.
"""

from typing import List, Optional, Tuple

from backends import Access, NativeBackend
from date_normalizer import normalize_date
from errors import (
    AccessDeniedError,
    CollectionNotFoundError,
    DateError,
    ExecutionError,
    ParseError,
)
from logger_config import setup_logger
from process_runner import ProcessResult
from schemas import Reminder, ReminderCollection

logger = setup_logger(__name__, 'backend.log')

# sysexits.h EX_NOPERM
EXIT_NO_PERMISSION = 77

PERMISSION_MARKERS = ("access denied", "not authorized", "permission denied", "not permitted")

LIST_RECORD = "LIST"
REMINDER_RECORD = "REMINDER"
REMINDER_FIELDS = 5


_UNESCAPES = {"\\": "\\", "t": "\t", "n": "\n", "r": "\r"}


def unescape_field(field: str, line_no: int) -> str:
    """Decode the backslash sequences of one report field."""
    if "\\" not in field:
        return field
    decoded = []
    chars = iter(field)
    for ch in chars:
        if ch != "\\":
            decoded.append(ch)
            continue
        code = next(chars, None)
        if code not in _UNESCAPES:
            raise ParseError(
                f"invalid escape sequence on line {line_no}",
                "\\" + (code or ""),
            )
        decoded.append(_UNESCAPES[code])
    return "".join(decoded)


def parse_report(output: str) -> Tuple[List[ReminderCollection], List[Reminder]]:
    """Parse reader output into collections and reminders, in report order."""
    collections = []
    reminders = []
    # only \n ends a record; \x0c or U+2028 may appear inside a note
    for line_no, line in enumerate(output.split("\n"), start=1):
        line = line.rstrip("\r")
        if not line.strip():
            continue
        tag, *raw_fields = line.split("\t")
        fields = [unescape_field(field, line_no) for field in raw_fields]

        if tag == LIST_RECORD:
            if len(fields) != 1 or not fields[0]:
                raise ParseError(f"malformed LIST record on line {line_no}", line)
            collections.append(ReminderCollection(name=fields[0]))

        elif tag == REMINDER_RECORD:
            if len(fields) != REMINDER_FIELDS:
                raise ParseError(
                    f"REMINDER record on line {line_no} has {len(fields)} fields, "
                    f"expected {REMINDER_FIELDS}",
                    line,
                )
            title, list_name, completed, due, note = fields
            if not title:
                raise ParseError(f"REMINDER record on line {line_no} has an empty title", line)
            if completed not in ("true", "false"):
                raise ParseError(f"invalid completed flag '{completed}' on line {line_no}", line)
            try:
                due_date = normalize_date(due) if due else None
            except DateError as e:
                raise ParseError(f"invalid due date on line {line_no}", e.describe())
            reminders.append(Reminder(
                title=title,
                due_date=due_date,
                note=note or None,
                list_name=list_name or None,
                completed=completed == "true",
            ))

        else:
            raise ParseError(f"unknown record type '{tag}' on line {line_no}", line)

    return collections, reminders


class NativeReader(NativeBackend):
    """Spawns the compiled reader, one process per call, no retries."""

    access = Access.READ

    async def list_reminders(
        self,
        list_name: Optional[str] = None,
        show_completed: bool = False
    ) -> List[Reminder]:
        """List reminders, optionally restricted to one list.

        Args:
            list_name: Exact collection name, or None for all collections
            show_completed: Include completed reminders

        Returns:
            Reminders in the order the reader reported them

        Raises:
            CollectionNotFoundError: list_name is not a reported collection
            ParseError, AccessDeniedError, ExecutionError
        """
        args = []
        if show_completed:
            args.append("--show-completed")
        if list_name is not None:
            args.extend(["--list", list_name])

        collections, reminders = parse_report(await self._run_reader(args))

        if list_name is not None:
            if collections and list_name not in {c.name for c in collections}:
                raise CollectionNotFoundError(f"reminder list '{list_name}' not found")
            reminders = [r for r in reminders if r.list_name == list_name]
        if not show_completed:
            reminders = [r for r in reminders if not r.completed]

        logger.info(f"Read {len(reminders)} reminder(s) (list={list_name!r}, show_completed={show_completed})")
        return reminders

    async def list_collections(self) -> List[ReminderCollection]:
        """List every reminder collection in the native store."""
        collections, _ = parse_report(await self._run_reader(["--lists-only"]))
        logger.info(f"Read {len(collections)} reminder list(s)")
        return collections

    async def _run_reader(self, args: List[str]) -> str:
        result = await self._execute([self.config.reader_path, *args], self.config.reader_timeout)
        if not result.ok:
            raise self._map_failure(result)
        return result.stdout

    @staticmethod
    def _map_failure(result: ProcessResult) -> Exception:
        stderr = result.stderr.strip()
        logger.error(f"Reader exited with {result.exit_code}: {stderr}")
        lowered = stderr.lower()
        if result.exit_code == EXIT_NO_PERMISSION or any(m in lowered for m in PERMISSION_MARKERS):
            return AccessDeniedError("access to reminders was denied", stderr or None)
        return ExecutionError(f"reader exited with status {result.exit_code}", stderr or None)
