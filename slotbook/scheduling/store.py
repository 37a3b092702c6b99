"""
Booking storage interface.

The engine reads and writes bookings only through this narrow interface.
Durable storage lives behind it (see slotbook.db.store.SqlBookingStore);
InMemoryBookingStore backs tests and single-process callers.
"""

from datetime import datetime
from typing import Dict, List, Optional, Protocol

from slotbook.scheduling.identifiers import ProviderId
from slotbook.schemas.booking import Booking, BookingStatus


class BookingStore(Protocol):

    def list_bookings(self, provider_id: ProviderId, date: str) -> List[Booking]:
        """Non-cancelled bookings of the provider on one date."""
        ...

    def list_bookings_in_range(
        self,
        provider_id: ProviderId,
        start_date: str,
        end_date: str,
        status: Optional[BookingStatus] = None,
    ) -> List[Booking]:
        """Bookings in [start_date, end_date]; non-cancelled unless `status` says otherwise."""
        ...

    def get_booking(self, booking_id: int) -> Optional[Booking]:
        ...

    def find_by_cancellation_token(self, token: str) -> Optional[Booking]:
        """The non-cancelled booking carrying this token, if any."""
        ...

    def add(self, booking: Booking) -> Booking:
        """Persist a new booking and return it with its id assigned."""
        ...

    def save(self, booking: Booking) -> Booking:
        """Overwrite an existing booking."""
        ...


class InMemoryBookingStore:
    """Dict-backed store. Provider ids in stored records may be int or str."""

    def __init__(self, bookings: Optional[List[Booking]] = None):
        self._rows: Dict[int, Booking] = {}
        for booking in bookings or []:
            self.add(booking)

    def _matching(self, provider_id: ProviderId) -> List[Booking]:
        return [b for b in self._rows.values() if provider_id.matches(b.provider_id)]

    def list_bookings(self, provider_id: ProviderId, date: str) -> List[Booking]:
        return [
            b for b in self._matching(provider_id)
            if b.date == date and b.status != BookingStatus.CANCELLED
        ]

    def list_bookings_in_range(self, provider_id, start_date, end_date, status=None):
        rows = [b for b in self._matching(provider_id) if start_date <= b.date <= end_date]
        if status is not None:
            rows = [b for b in rows if b.status == status]
        else:
            rows = [b for b in rows if b.status != BookingStatus.CANCELLED]
        return sorted(rows, key=lambda b: (b.date, b.start_time))

    def get_booking(self, booking_id: int) -> Optional[Booking]:
        return self._rows.get(booking_id)

    def find_by_cancellation_token(self, token: str) -> Optional[Booking]:
        for booking in self._rows.values():
            if booking.cancellation_token == token and booking.status != BookingStatus.CANCELLED:
                return booking
        return None

    def add(self, booking: Booking) -> Booking:
        now = datetime.utcnow()
        stored = booking.model_copy(update={
            "id": booking.id if booking.id is not None else max(self._rows, default=0) + 1,
            "created_at": booking.created_at or now,
            "updated_at": now,
        })
        self._rows[stored.id] = stored
        return stored

    def save(self, booking: Booking) -> Booking:
        if booking.id not in self._rows:
            raise KeyError(booking.id)
        stored = booking.model_copy(update={"updated_at": datetime.utcnow()})
        self._rows[stored.id] = stored
        return stored
