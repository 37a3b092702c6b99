# slotbook/db/store.py
"""
SQLAlchemy adapters behind the engine's storage interface.

SqlBookingStore implements slotbook.scheduling.store.BookingStore. The
availability helpers load and replace a provider's weekly windows and blocked
ranges as plain schema records.
"""
from typing import List, Optional

from sqlalchemy.orm import Session

from slotbook.db.models.availability import BlockedRange as BlockedRangeRow
from slotbook.db.models.availability import WeeklyAvailability as WeeklyAvailabilityRow
from slotbook.db.models.booking import Booking as BookingRow
from slotbook.db.models.provider import Provider
from slotbook.scheduling.identifiers import ProviderId
from slotbook.schemas.availability import BlockedRange, WeeklyAvailabilityEntry
from slotbook.schemas.booking import Booking, BookingStatus


def _to_record(row: BookingRow) -> Booking:
    return Booking.model_validate(row)


class SqlBookingStore:
    """
    Bookings in the `bookings` table.

    provider_id is a text column; it is always written and queried in its
    string form, the engine compares ids through ProviderId.
    """

    def __init__(self, db: Session):
        self.db = db

    def list_bookings(self, provider_id: ProviderId, date: str) -> List[Booking]:
        rows = self.db.query(BookingRow).filter(
            BookingRow.provider_id == str(provider_id),
            BookingRow.date == date,
            BookingRow.status != BookingStatus.CANCELLED.value,
        ).all()
        return [_to_record(r) for r in rows]

    def list_bookings_in_range(
        self,
        provider_id: ProviderId,
        start_date: str,
        end_date: str,
        status: Optional[BookingStatus] = None,
    ) -> List[Booking]:
        q = self.db.query(BookingRow).filter(
            BookingRow.provider_id == str(provider_id),
            BookingRow.date >= start_date,
            BookingRow.date <= end_date,
        )
        if status is not None:
            q = q.filter(BookingRow.status == BookingStatus(status).value)
        else:
            q = q.filter(BookingRow.status != BookingStatus.CANCELLED.value)
        rows = q.order_by(BookingRow.date, BookingRow.start_time).all()
        return [_to_record(r) for r in rows]

    def get_booking(self, booking_id: int) -> Optional[Booking]:
        row = self.db.query(BookingRow).filter(BookingRow.id == booking_id).first()
        return _to_record(row) if row else None

    def find_by_cancellation_token(self, token: str) -> Optional[Booking]:
        row = self.db.query(BookingRow).filter(
            BookingRow.cancellation_token == token,
            BookingRow.status != BookingStatus.CANCELLED.value,
        ).first()
        return _to_record(row) if row else None

    def add(self, booking: Booking) -> Booking:
        row = BookingRow(
            provider_id=str(ProviderId(booking.provider_id)),
            patient_name=booking.patient_name,
            patient_email=booking.patient_email,
            patient_phone=booking.patient_phone,
            date=booking.date,
            start_time=booking.start_time,
            end_time=booking.end_time,
            status=BookingStatus(booking.status).value,
            cancellation_token=booking.cancellation_token,
            reason=booking.reason,
            notes=booking.notes,
        )
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return _to_record(row)

    def save(self, booking: Booking) -> Booking:
        row = self.db.query(BookingRow).filter(BookingRow.id == booking.id).first()
        if row is None:
            raise KeyError(booking.id)

        status = BookingStatus(booking.status)
        row.date = booking.date
        row.start_time = booking.start_time
        row.end_time = booking.end_time
        row.status = status.value
        row.notes = booking.notes
        row.active_key = row.id if status == BookingStatus.CANCELLED else 0

        self.db.commit()
        self.db.refresh(row)
        return _to_record(row)


# Availability


def get_provider(db: Session, provider_id: ProviderId) -> Optional[Provider]:
    return db.query(Provider).filter(Provider.id == provider_id.value).first()


def get_weekly_availability(provider: Provider) -> List[WeeklyAvailabilityEntry]:
    return [WeeklyAvailabilityEntry.model_validate(a) for a in provider.availabilities]


def get_blocked_ranges(provider: Provider) -> List[BlockedRange]:
    return [BlockedRange.model_validate(b) for b in provider.blocked_ranges]


def replace_availability(
    db: Session,
    provider: Provider,
    weekly_availability: Optional[List[WeeklyAvailabilityEntry]] = None,
    blocked_ranges: Optional[List[BlockedRange]] = None,
) -> Provider:
    """Swap out either list wholesale. None leaves that list as it is."""
    if weekly_availability is not None:
        provider.availabilities = [
            WeeklyAvailabilityRow(
                day_of_week=e.day_of_week,
                start_time=e.start_time,
                end_time=e.end_time,
            )
            for e in weekly_availability
        ]
    if blocked_ranges is not None:
        provider.blocked_ranges = [
            BlockedRangeRow(
                from_date=b.from_date,
                to_date=b.to_date,
                start_time=b.start_time,
                end_time=b.end_time,
                reason=b.reason,
            )
            for b in blocked_ranges
        ]
    db.commit()
    db.refresh(provider)
    return provider
