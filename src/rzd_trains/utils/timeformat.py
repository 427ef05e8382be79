"""Date and time formats used by the RZD passenger site.

Every date, time and duration string coming from or going to the server
passes through this module.
"""

import re
from datetime import date, datetime, time, timedelta
from typing import Literal

from ..core.exceptions import DecodeError

UPSTREAM_DATE_FORMAT = "%d.%m.%Y"
UPSTREAM_TIME_FORMAT = "%H:%M"

# "23:55", "23:55:00", "7:05"
_CLOCK_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")

ValueKind = Literal["date", "time", "duration"]


def parse_upstream_value(text: object, kind: ValueKind) -> date | time | timedelta:
    """Parse a date, time or duration string as the server writes it.

    Args:
        text: Raw value taken from the reply
        kind: "date" for DD.MM.YYYY, "time" for HH:MM[:SS],
            "duration" for H:MM where hours may exceed 23

    Returns:
        datetime.date, datetime.time or datetime.timedelta

    Raises:
        DecodeError: If the value is not a string in the expected format
    """
    if not isinstance(text, str) or not text.strip():
        raise DecodeError(f"Expected a {kind} string, got {text!r}")
    value = text.strip()

    if kind == "date":
        try:
            return datetime.strptime(value, UPSTREAM_DATE_FORMAT).date()
        except ValueError as e:
            raise DecodeError(f"Unrecognized date format: {value!r}") from e

    match = _CLOCK_PATTERN.match(value)
    if not match:
        raise DecodeError(f"Unrecognized {kind} format: {value!r}")
    hours, minutes = int(match.group(1)), int(match.group(2))
    seconds = int(match.group(3) or 0)

    if kind == "duration":
        if minutes > 59 or seconds > 59:
            raise DecodeError(f"Unrecognized duration format: {value!r}")
        return timedelta(hours=hours, minutes=minutes, seconds=seconds)

    try:
        return time(hours, minutes, seconds)
    except ValueError as e:
        raise DecodeError(f"Unrecognized time format: {value!r}") from e


def format_upstream_date(value: date) -> str:
    """Format a date the way the server expects it in requests."""
    return value.strftime(UPSTREAM_DATE_FORMAT)


def format_upstream_time(value: time) -> str:
    """Format a time the way the server expects it in requests."""
    return value.strftime(UPSTREAM_TIME_FORMAT)
