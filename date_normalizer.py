"""Date normalization for the reminder writer.

The scripting interpreter only understands one date shape, so every due date
is rewritten to ``MM/DD/YYYY HH:MM:SS`` before it is embedded in a script.
Output is always in the local time zone of this process.
"""

from datetime import datetime
from typing import Optional

from errors import DateError

CANONICAL_FORMAT = "%m/%d/%Y %H:%M:%S"

# Tried in order; the first one that parses wins.
ACCEPTED_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d",
    "%m/%d/%Y",
)


def _parse_iso8601(value: str) -> Optional[datetime]:
    if "T" not in value and "t" not in value:
        return None
    try:
        # "Z" is not accepted by fromisoformat before Python 3.11
        return datetime.fromisoformat(value.upper().replace("Z", "+00:00"))
    except ValueError:
        return None


def parse_date(raw: str) -> datetime:
    """Parse ``raw`` with the accepted formats and return a local datetime.

    Offset-aware ISO-8601 values are converted to local time and returned
    naive; everything else is taken as local time already.

    Raises:
        DateError: when no accepted format matches
    """
    if not isinstance(raw, str) or not raw.strip():
        raise DateError("empty date string")

    value = raw.strip()
    for fmt in ACCEPTED_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue

    parsed = _parse_iso8601(value)
    if parsed is None:
        raise DateError(
            f"unrecognized date '{raw}'",
            "expected YYYY-MM-DD HH:MM:SS, YYYY-MM-DD, MM/DD/YYYY or ISO-8601",
        )
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def normalize_date(raw: str) -> str:
    """Return ``raw`` in canonical ``MM/DD/YYYY HH:MM:SS`` form."""
    return parse_date(raw).strftime(CANONICAL_FORMAT)
