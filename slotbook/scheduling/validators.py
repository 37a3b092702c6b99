"""
Scheduling Validators

Pure pre-condition checks for the values the engine consumes. Each helper
returns the validated (and where useful, parsed) value or raises a typed
SchedulingError. Request handlers call these before handing records to the
engine; the engine calls them on its own inputs as well.
"""

import re
from datetime import date, datetime
from typing import Iterable, List, Tuple

from slotbook.core.errors import InvalidFormat, InvalidRange, PastDate
from slotbook.scheduling.time_math import to_minutes
from slotbook.schemas.availability import BlockedRange, WeeklyAvailabilityEntry

DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)

MIN_SESSION_MINUTES = 15
MAX_SESSION_MINUTES = 240
MIN_BREAK_MINUTES = 0
MAX_BREAK_MINUTES = 60


def parse_date(date_str: str, field_name: str = "date") -> date:
    """
    Validate a YYYY-MM-DD string and return it as a date.

    Raises:
        InvalidFormat: if the string is missing, mis-shaped or not a real
            calendar day (e.g. 2026-02-30).
    """
    if not isinstance(date_str, str) or not DATE_RE.fullmatch(date_str):
        raise InvalidFormat(f"Invalid {field_name} format {date_str!r}. Use YYYY-MM-DD")
    try:
        parsed = datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError:
        raise InvalidFormat(f"Invalid {field_name} {date_str!r}: no such calendar day")
    # stored dates are compared as strings, only the canonical spelling is accepted
    if parsed.isoformat() != date_str:
        raise InvalidFormat(f"Invalid {field_name} format {date_str!r}. Use YYYY-MM-DD")
    return parsed


def validate_date_string(date_str: str, field_name: str = "date") -> str:
    parse_date(date_str, field_name)
    return date_str


def validate_time_string(time_str: str, field_name: str = "time") -> str:
    """
    Validate an HH:MM string (00:00..23:59).

    Raises:
        InvalidFormat: if the string does not match.
    """
    try:
        to_minutes(time_str)
    except InvalidFormat:
        raise InvalidFormat(f"Invalid {field_name} format {time_str!r}. Use HH:MM")
    return time_str


def validate_time_range(start_time: str, end_time: str) -> Tuple[int, int]:
    """Both times well-formed and start strictly before end; returns minutes."""
    validate_time_string(start_time, "start_time")
    validate_time_string(end_time, "end_time")
    start, end = to_minutes(start_time), to_minutes(end_time)
    if start >= end:
        raise InvalidRange(f"start_time ({start_time}) must be before end_time ({end_time})")
    return start, end


def validate_date_range(start_date: str, end_date: str) -> Tuple[date, date]:
    start = parse_date(start_date, "start_date")
    end = parse_date(end_date, "end_date")
    if start > end:
        raise InvalidRange(f"start_date ({start_date}) must be before or equal to end_date ({end_date})")
    return start, end


def validate_not_past(target: date, today: date) -> date:
    if target < today:
        raise PastDate(f"{target.isoformat()} is in the past (today is {today.isoformat()})")
    return target


def validate_availability_entry(entry: WeeklyAvailabilityEntry) -> WeeklyAvailabilityEntry:
    if not 0 <= entry.day_of_week <= 6:
        raise InvalidRange(f"day_of_week must be 0..6, got {entry.day_of_week}")
    validate_time_range(entry.start_time, entry.end_time)
    return entry


def validate_blocked_range(blocked: BlockedRange) -> BlockedRange:
    """
    from_date <= to_date, and the start instant strictly precedes the end
    instant. On a multi-day block start_time may be later than end_time
    (e.g. Friday 18:00 to Monday 08:00).
    """
    from_date, to_date = validate_date_range(blocked.from_date, blocked.to_date)
    validate_time_string(blocked.start_time, "start_time")
    validate_time_string(blocked.end_time, "end_time")

    if (from_date, to_minutes(blocked.start_time)) >= (to_date, to_minutes(blocked.end_time)):
        raise InvalidRange(
            f"Blocked range start {blocked.from_date} {blocked.start_time} "
            f"must be before end {blocked.to_date} {blocked.end_time}"
        )
    return blocked


def validate_offering(duration_minutes: int, break_minutes: int) -> Tuple[int, int]:
    if not MIN_SESSION_MINUTES <= duration_minutes <= MAX_SESSION_MINUTES:
        raise InvalidRange(
            f"duration_minutes must be between {MIN_SESSION_MINUTES} and {MAX_SESSION_MINUTES}"
        )
    if not MIN_BREAK_MINUTES <= break_minutes <= MAX_BREAK_MINUTES:
        raise InvalidRange(
            f"break_minutes must be between {MIN_BREAK_MINUTES} and {MAX_BREAK_MINUTES}"
        )
    return duration_minutes, break_minutes


def validate_all(validator, items: Iterable) -> List:
    """Apply `validator` to each item, prefixing failures with the item index."""
    validated = []
    for index, item in enumerate(items):
        try:
            validated.append(validator(item))
        except (InvalidFormat, InvalidRange) as exc:
            raise type(exc)(f"Entry {index}: {exc.message}")
    return validated
