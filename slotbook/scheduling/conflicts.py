"""
Overlap Detection Service

Detects scheduling conflicts between a proposed time range and the existing
bookings of a provider on one date.
"""

import logging
from typing import List, Optional, Union

from slotbook.scheduling.identifiers import ProviderId
from slotbook.scheduling.store import BookingStore
from slotbook.scheduling.time_math import overlaps, to_minutes
from slotbook.scheduling.validators import validate_date_string
from slotbook.schemas.booking import Booking, BookingStatus

logger = logging.getLogger(__name__)


class ConflictChecker:
    """Reads bookings through a BookingStore; holds no state of its own."""

    def __init__(self, store: BookingStore):
        self.store = store

    def find_conflicts(
        self,
        provider_id: Union[ProviderId, int, str],
        date: str,
        start_time: str,
        end_time: str,
        exclude_booking_id: Optional[int] = None,
    ) -> List[Booking]:
        """
        Bookings that overlap [start_time, end_time) on `date`.

        Args:
            provider_id: provider id in native or string form
            date: YYYY-MM-DD
            start_time, end_time: HH:MM
            exclude_booking_id: booking to ignore (the one being rescheduled)

        Raises:
            InvalidProviderId: malformed provider id
            InvalidFormat: malformed date or time
        """
        provider = ProviderId(provider_id)
        validate_date_string(date)
        start, end = to_minutes(start_time), to_minutes(end_time)

        conflicting = []
        for booking in self.store.list_bookings(provider, date):
            # the store is trusted for the query, re-checked here for loosely typed rows
            if booking.status == BookingStatus.CANCELLED:
                continue
            if booking.date != date or not provider.matches(booking.provider_id):
                continue
            if exclude_booking_id is not None and booking.id == exclude_booking_id:
                continue
            if overlaps(start, end, booking.start_time, booking.end_time):
                conflicting.append(booking)

        if conflicting:
            logger.warning(
                "Conflict for provider %s on %s %s-%s with bookings %s",
                provider, date, start_time, end_time, [b.id for b in conflicting],
            )
        return conflicting

    def has_conflict(
        self,
        provider_id: Union[ProviderId, int, str],
        date: str,
        start_time: str,
        end_time: str,
        exclude_booking_id: Optional[int] = None,
    ) -> bool:
        return bool(self.find_conflicts(provider_id, date, start_time, end_time, exclude_booking_id))
