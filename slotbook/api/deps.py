# slotbook/api/deps.py
from datetime import date

from fastapi import Depends, HTTPException
from sqlalchemy.orm import Session

from slotbook.core.errors import (
    BookingNotFound,
    InvalidFormat,
    InvalidProviderId,
    InvalidRange,
    InvalidTransition,
    SchedulingError,
    SlotUnavailable,
)
from slotbook.db.base import get_db
from slotbook.db.store import SqlBookingStore
from slotbook.scheduling.bookings import BookingMutator
from slotbook.scheduling.conflicts import ConflictChecker


def get_today() -> date:
    """Provider-local current date; overridden in tests."""
    return date.today()


def get_booking_store(db: Session = Depends(get_db)) -> SqlBookingStore:
    return SqlBookingStore(db)


def get_mutator(store: SqlBookingStore = Depends(get_booking_store)) -> BookingMutator:
    return BookingMutator(ConflictChecker(store))


STATUS_CODES = {
    InvalidFormat: 400,
    InvalidRange: 400,
    InvalidProviderId: 400,
    InvalidTransition: 400,
    SlotUnavailable: 409,
    BookingNotFound: 404,
}


def to_http_exception(exc: SchedulingError) -> HTTPException:
    """Map an engine failure onto the HTTP status the API reports for it."""
    for error_type, status_code in STATUS_CODES.items():
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=exc.message)
    return HTTPException(status_code=400, detail=exc.message)
