"""
Helpers for wall-clock time-of-day values ("HH:MM") and anchoring them to a day.
"""

import re
from datetime import time
from typing import Optional

from pendulum import DateTime

# Postgres ``time`` columns come back as HH:MM:SS, forms submit H:MM or HH:MM.
_TIME_OF_DAY_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):([0-5][0-9])(?::([0-5][0-9]))?$")


def parse_time_of_day(value: Optional[str]) -> Optional[time]:
    """
    Parse a 24-hour ``H:MM`` / ``HH:MM`` string into a ``time``.

    Args:
        value: Time string, ``None`` or an empty string

    Returns:
        ``time`` instance, or ``None`` when the value is absent

    Raises:
        ValueError: If the string is not a valid time of day
    """
    if value is None:
        return None

    text = value.strip()
    if not text:
        return None

    match = _TIME_OF_DAY_PATTERN.match(text)
    if match is None:
        raise ValueError(f"Invalid time of day: '{value}' (expected HH:MM)")

    return time(hour=int(match.group(1)), minute=int(match.group(2)))


def format_time_of_day(value: Optional[time]) -> str:
    """Format a time of day as HH:MM (empty string when absent)."""
    if value is None:
        return ""
    return f"{value.hour:02d}:{value.minute:02d}"


def anchor_to_day(day: DateTime, value: time) -> DateTime:
    """
    Return the instant on ``day`` (in the day's timezone) at the given time of day.

    The time-of-day component of ``day`` itself is ignored.
    """
    return day.start_of("day").set(
        hour=value.hour,
        minute=value.minute,
        second=0,
        microsecond=0
    )


def minutes_between(start: time, end: time) -> int:
    """Signed number of minutes from ``start`` to ``end`` on the same day."""
    return (end.hour * 60 + end.minute) - (start.hour * 60 + start.minute)
