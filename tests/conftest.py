"""Shared test fixtures."""
import os
import tempfile

# must be set before slotbook.db.base builds its engine
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOGS_DIR", os.path.join(tempfile.gettempdir(), "slotbook-test-logs"))

from datetime import date

import pytest

from slotbook.scheduling.bookings import BookingMutator
from slotbook.scheduling.conflicts import ConflictChecker
from slotbook.scheduling.store import InMemoryBookingStore
from slotbook.schemas.availability import BlockedRange, WeeklyAvailabilityEntry
from slotbook.schemas.booking import Booking, BookingCreate, BookingStatus

from tests.utils.dates import MONDAY, TODAY


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def make_entry():
    def _create(day_of_week: int = 1, start_time: str = "09:00", end_time: str = "18:00"):
        return WeeklyAvailabilityEntry(day_of_week=day_of_week, start_time=start_time, end_time=end_time)
    return _create


@pytest.fixture
def make_blocked():
    def _create(from_date: str, to_date: str, start_time: str, end_time: str):
        return BlockedRange(from_date=from_date, to_date=to_date, start_time=start_time, end_time=end_time)
    return _create


@pytest.fixture
def make_booking():
    """Booking record factory; provider_id defaults to the native int form."""
    counter = {"n": 0}

    def _create(
        start_time: str,
        end_time: str,
        date: str = MONDAY,
        provider_id=1,
        status: BookingStatus = BookingStatus.CONFIRMED,
        booking_id=None,
    ) -> Booking:
        counter["n"] += 1
        return Booking(
            id=booking_id,
            provider_id=provider_id,
            patient_name="Jane Roe",
            patient_email="jane@example.com",
            date=date,
            start_time=start_time,
            end_time=end_time,
            status=status,
            cancellation_token=f"token-{counter['n']}",
        )
    return _create


@pytest.fixture
def make_request():
    def _create(start_time: str, end_time: str, date: str = MONDAY, provider_id: int = 1) -> BookingCreate:
        return BookingCreate(
            provider_id=provider_id,
            patient_name="John Doe",
            patient_email="john@example.com",
            date=date,
            start_time=start_time,
            end_time=end_time,
        )
    return _create


@pytest.fixture
def store() -> InMemoryBookingStore:
    return InMemoryBookingStore()


@pytest.fixture
def checker(store) -> ConflictChecker:
    return ConflictChecker(store)


@pytest.fixture
def mutator(checker) -> BookingMutator:
    return BookingMutator(checker)
