# slotbook/scheduling/time_math.py
"""
Minute-of-day arithmetic and the interval overlap predicate.

All times are provider-local wall-clock "HH:MM" strings; no timezone handling.
"""
import re
from typing import Union

from slotbook.core.errors import InvalidFormat

TIME_RE = re.compile(r"([01]\d|2[0-3]):([0-5]\d)", re.ASCII)

MINUTES_PER_DAY = 24 * 60

TimeValue = Union[str, int]


def to_minutes(hhmm: str) -> int:
    """Parse "HH:MM" into minutes since midnight."""
    match = TIME_RE.fullmatch(hhmm) if isinstance(hhmm, str) else None
    if not match:
        raise InvalidFormat(f"Invalid time format {hhmm!r}, use HH:MM")
    return int(match.group(1)) * 60 + int(match.group(2))


def minutes_to_time(minutes: int) -> str:
    """
    Render minutes since midnight as "HH:MM".

    Values past midnight are not wrapped: a trailing break that runs over the
    end of the day renders as "24:15" and so on.
    """
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"


def _as_minutes(value: TimeValue) -> int:
    if isinstance(value, int):
        return value
    return to_minutes(value)


def overlaps(start_a: TimeValue, end_a: TimeValue, start_b: TimeValue, end_b: TimeValue) -> bool:
    """
    True when [start_a, end_a) and [start_b, end_b) share at least one minute.

    Ranges that only touch (one ends exactly when the other begins) do not
    overlap, so back-to-back bookings are legal.
    """
    return _as_minutes(start_a) < _as_minutes(end_b) and _as_minutes(start_b) < _as_minutes(end_a)
