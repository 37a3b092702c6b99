"""
Slot Generation

Turns one weekly availability window into the discrete session+break slots
for a single calendar date.
"""

from typing import List

from slotbook.core.errors import InvalidRange
from slotbook.scheduling.time_math import minutes_to_time, to_minutes
from slotbook.schemas.availability import WeeklyAvailabilityEntry
from slotbook.schemas.slot import Slot, SlotStatus


def generate_slots(
    date: str,
    availability_entry: WeeklyAvailabilityEntry,
    session_minutes: int,
    break_minutes: int,
) -> List[Slot]:
    """
    Generate slots for one availability window on one date.

    Args:
        date: YYYY-MM-DD the slots belong to
        availability_entry: window providing start_time / end_time
        session_minutes: bookable length of each slot
        break_minutes: buffer appended after each session

    Returns:
        list[Slot], all with status "available", in start order.

    Only the session has to fit in the window. The break of the last slot may
    run past end_time: a 10:00-11:00 window with a 60 min session and 30 min
    break yields one slot whose break ends at 11:30.
    """
    if session_minutes <= 0:
        raise InvalidRange(f"session_minutes must be positive, got {session_minutes}")
    if break_minutes < 0:
        raise InvalidRange(f"break_minutes must not be negative, got {break_minutes}")

    cursor = to_minutes(availability_entry.start_time)
    limit = to_minutes(availability_entry.end_time)

    slots = []
    while cursor + session_minutes <= limit:
        session_start = cursor
        session_end = cursor + session_minutes
        break_end = session_end + break_minutes

        slots.append(Slot(
            date=date,
            start_time=minutes_to_time(session_start),
            end_time=minutes_to_time(break_end),
            session_start=minutes_to_time(session_start),
            session_end=minutes_to_time(session_end),
            break_start=minutes_to_time(session_end),
            break_end=minutes_to_time(break_end),
            status=SlotStatus.AVAILABLE,
        ))

        cursor += session_minutes + break_minutes

    return slots
