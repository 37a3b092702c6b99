"""
Availability Service

Computes the per-day slot list for a provider over a date range, combining:
- Weekly availability (recurring windows per day of week)
- Blocked ranges (one-off spans over one or more days)
- Existing bookings (cancelled ones are ignored)

Nothing here is cached: availability and bookings can change between calls,
so every query recomputes from its inputs.
"""

import logging
from collections import OrderedDict, defaultdict
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from slotbook.scheduling.slots import generate_slots
from slotbook.scheduling.time_math import MINUTES_PER_DAY, overlaps, to_minutes
from slotbook.scheduling.validators import parse_date, validate_date_range
from slotbook.schemas.availability import BlockedRange, WeeklyAvailabilityEntry
from slotbook.schemas.booking import Booking, BookingStatus
from slotbook.schemas.slot import Slot, SlotStatus

logger = logging.getLogger(__name__)


def day_of_week(target_date: date) -> int:
    """0 = Sunday .. 6 = Saturday."""
    return target_date.isoweekday() % 7


def iter_dates(start_date: date, end_date: date) -> Iterable[date]:
    """Every calendar date in [start_date, end_date]."""
    current = start_date
    while current <= end_date:
        yield current
        current += timedelta(days=1)


def blocked_window_for_date(
    blocked: BlockedRange,
    target_date: date,
) -> Optional[Tuple[int, int]]:
    """
    Minutes of `target_date` covered by a blocked range, or None.

    The range is one continuous span from (from_date, start_time) to
    (to_date, end_time): inner days are blocked entirely, the first day from
    start_time on, the last day up to end_time.
    """
    from_date = parse_date(blocked.from_date, "from_date")
    to_date = parse_date(blocked.to_date, "to_date")
    if not from_date <= target_date <= to_date:
        return None

    start = to_minutes(blocked.start_time) if target_date == from_date else 0
    end = to_minutes(blocked.end_time) if target_date == to_date else MINUTES_PER_DAY
    if start >= end:
        return None
    return start, end


def _find_booking(slot: Slot, day_bookings: Sequence[Booking]) -> Optional[Booking]:
    session_start = to_minutes(slot.session_start)
    session_end = to_minutes(slot.session_end)
    for booking in day_bookings:
        if overlaps(session_start, session_end, booking.start_time, booking.end_time):
            return booking
    return None


def _is_blocked(slot: Slot, windows: Sequence[Tuple[int, int]]) -> bool:
    session_start = to_minutes(slot.session_start)
    session_end = to_minutes(slot.session_end)
    return any(overlaps(session_start, session_end, start, end) for start, end in windows)


def _unavailable_marker(date_str: str) -> Slot:
    return Slot(
        date=date_str,
        start_time="00:00",
        end_time="00:00",
        session_start="00:00",
        session_end="00:00",
        break_start="00:00",
        break_end="00:00",
        status=SlotStatus.UNAVAILABLE,
    )


def calculate_available_slots(
    weekly_availability: Sequence[WeeklyAvailabilityEntry],
    blocked_ranges: Sequence[BlockedRange],
    bookings: Sequence[Booking],
    start_date: str,
    end_date: str,
    session_minutes: int,
    break_minutes: int,
    today: Optional[date] = None,
    max_available_per_day: Optional[int] = None,
    include_patient_details: bool = False,
    include_unavailable_days: bool = False,
) -> List[Slot]:
    """
    Compute the slots of every date in [start_date, end_date].

    Args:
        weekly_availability: recurring windows (several per day allowed)
        blocked_ranges: one-off blocked spans
        bookings: bookings of this provider; may span more dates than asked
        start_date, end_date: YYYY-MM-DD, inclusive
        session_minutes, break_minutes: slot grid of the offering
        today: when given, "available" slots before this date are dropped
        max_available_per_day: keep at most N "available" slots per day
        include_patient_details: copy patient name and email onto booked slots
        include_unavailable_days: emit one "unavailable" marker (00:00-00:00)
            for each non-past date without a weekly window

    Returns:
        list[Slot] ordered by date then start time. A slot is "booked" if a
        non-cancelled booking overlaps its session, otherwise "blocked" if a
        blocked range overlaps its session, otherwise "available".

    Raises:
        InvalidFormat: malformed date or time anywhere in the inputs
        InvalidRange: start_date after end_date, or a non-positive session
    """
    first, last = validate_date_range(start_date, end_date)

    bookings_by_date: Dict[str, List[Booking]] = defaultdict(list)
    for booking in bookings:
        if booking.status == BookingStatus.CANCELLED:
            continue
        bookings_by_date[booking.date].append(booking)

    windows_by_day: Dict[int, List[WeeklyAvailabilityEntry]] = defaultdict(list)
    for entry in weekly_availability:
        windows_by_day[entry.day_of_week].append(entry)

    result: List[Slot] = []

    for current in iter_dates(first, last):
        date_str = current.isoformat()
        windows = windows_by_day.get(day_of_week(current))
        is_past = today is not None and current < today
        if not windows:
            if include_unavailable_days and not is_past:
                result.append(_unavailable_marker(date_str))
            continue

        blocked_windows = []
        for blocked in blocked_ranges:
            window = blocked_window_for_date(blocked, current)
            if window:
                blocked_windows.append(window)

        day_bookings = bookings_by_date.get(date_str, [])

        day_slots: List[Slot] = []
        for window in windows:
            for slot in generate_slots(date_str, window, session_minutes, break_minutes):
                booking = _find_booking(slot, day_bookings)
                if booking is not None:
                    update = {"status": SlotStatus.BOOKED, "booking_id": booking.id}
                    if include_patient_details:
                        update["patient_name"] = booking.patient_name
                        update["patient_email"] = booking.patient_email
                    day_slots.append(slot.model_copy(update=update))
                elif _is_blocked(slot, blocked_windows):
                    day_slots.append(slot.model_copy(update={"status": SlotStatus.BLOCKED}))
                elif not is_past:
                    day_slots.append(slot)

        day_slots.sort(key=lambda s: to_minutes(s.session_start))

        if max_available_per_day is not None:
            kept = 0
            limited = []
            for slot in day_slots:
                if slot.status == SlotStatus.AVAILABLE:
                    if kept >= max_available_per_day:
                        continue
                    kept += 1
                limited.append(slot)
            day_slots = limited

        result.extend(day_slots)

    logger.debug(
        "Computed %s slots for %s..%s (session=%s, break=%s)",
        len(result), start_date, end_date, session_minutes, break_minutes,
    )
    return result


def group_slots_by_date(slots: Iterable[Slot]) -> "OrderedDict[str, List[Slot]]":
    """Group an ordered slot list into date -> slots, keeping date order."""
    grouped: "OrderedDict[str, List[Slot]]" = OrderedDict()
    for slot in slots:
        grouped.setdefault(slot.date, []).append(slot)
    return grouped
