from datetime import date, datetime
import re

COMPACT_DATE_FORMAT = "%Y%m%d"
DOTTED_DATE_FORMAT = "%d.%m.%Y"

_COMPACT_DATE_PATTERN = re.compile(r"^[0-9]{8}$")
_DOTTED_DATE_PATTERN = re.compile(r"^[0-9]{2}\.[0-9]{2}\.[0-9]{4}$")


def ParseCompactDate(value: str) -> date:
    """Parse a fixed-width ``YYYYMMDD`` string.

    strptime alone accepts short fields such as ``2024011``, so the width is
    checked first.
    """
    if not isinstance(value, str) or not _COMPACT_DATE_PATTERN.match(value):
        raise ValueError("Invalid date format. Use YYYYMMDD.")
    try:
        return datetime.strptime(value, COMPACT_DATE_FORMAT).date()
    except ValueError as exc:
        raise ValueError("Invalid date format. Use YYYYMMDD.") from exc


def FormatCompactDate(value: date) -> str:
    # strftime does not zero-pad years below 1000 on every platform.
    return f"{value.year:04d}{value.month:02d}{value.day:02d}"


def ParseDottedDate(value: str) -> date | None:
    """Parse ``dd.mm.yyyy`` search input, or return None when it is not a date."""
    if not _DOTTED_DATE_PATTERN.match(value or ""):
        return None
    try:
        return datetime.strptime(value, DOTTED_DATE_FORMAT).date()
    except ValueError:
        return None


def ToCalendarDate(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value
