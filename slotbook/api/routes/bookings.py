from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import IntegrityError
from datetime import date
from typing import List, Optional

from slotbook.api.deps import get_booking_store, get_mutator, get_today, to_http_exception
from slotbook.core.errors import SchedulingError
from slotbook.db.store import SqlBookingStore, get_provider
from slotbook.scheduling.bookings import BookingMutator
from slotbook.scheduling.identifiers import ProviderId
from slotbook.scheduling.validators import validate_date_string
from slotbook.schemas.booking import (
    Booking,
    BookingCreate,
    BookingReschedule,
    BookingResponse,
    BookingStatus,
    BookingUpdate,
)

router = APIRouter(prefix="/bookings", tags=["bookings"])


def _get_or_404(store: SqlBookingStore, booking_id: int) -> Booking:
    booking = store.get_booking(booking_id)
    if not booking:
        raise HTTPException(status_code=404, detail="Booking not found")
    return booking


def _save(store: SqlBookingStore, booking: Booking) -> Booking:
    try:
        return store.save(booking)
    except IntegrityError:
        store.db.rollback()
        raise HTTPException(status_code=409, detail="Time slot is already booked")


# Patient creates booking

@router.post("", response_model=BookingResponse, status_code=201)
def create_booking(
    payload: BookingCreate,
    store: SqlBookingStore = Depends(get_booking_store),
    mutator: BookingMutator = Depends(get_mutator),
    today: date = Depends(get_today),
):
    # Step 1: provider must exist
    try:
        provider = get_provider(store.db, ProviderId(payload.provider_id))
    except SchedulingError as exc:
        raise to_http_exception(exc)
    if not provider or not provider.is_active:
        raise HTTPException(status_code=404, detail="Provider not found")

    # Step 2: validate and check conflicts
    try:
        booking = mutator.create(payload, today)
    except SchedulingError as exc:
        raise to_http_exception(exc)

    # Step 3: persist; the unique slot constraint catches a concurrent insert
    try:
        return store.add(booking)
    except IntegrityError:
        store.db.rollback()
        raise HTTPException(status_code=409, detail="Time slot is already booked")


# Provider views their bookings

@router.get("/provider/{provider_id}", response_model=List[BookingResponse])
def provider_bookings(
    provider_id: str,
    start_date: str = Query("1970-01-01"),
    end_date: str = Query("2100-12-31"),
    status: Optional[BookingStatus] = Query(None),
    store: SqlBookingStore = Depends(get_booking_store),
):
    try:
        pid = ProviderId(provider_id)
        validate_date_string(start_date, "start_date")
        validate_date_string(end_date, "end_date")
    except SchedulingError as exc:
        raise to_http_exception(exc)
    return store.list_bookings_in_range(pid, start_date, end_date, status=status)


@router.get("/{booking_id}", response_model=BookingResponse)
def get_booking(booking_id: int, store: SqlBookingStore = Depends(get_booking_store)):
    return _get_or_404(store, booking_id)


# Provider reschedules booking

@router.post("/{booking_id}/reschedule", response_model=BookingResponse)
def reschedule_booking(
    booking_id: int,
    payload: BookingReschedule,
    store: SqlBookingStore = Depends(get_booking_store),
    mutator: BookingMutator = Depends(get_mutator),
    today: date = Depends(get_today),
):
    booking = _get_or_404(store, booking_id)
    try:
        moved = mutator.reschedule(booking, payload.date, payload.start_time, payload.end_time, today)
    except SchedulingError as exc:
        raise to_http_exception(exc)
    return _save(store, moved)


# Provider updates notes / status

@router.patch("/{booking_id}", response_model=BookingResponse)
def update_booking(
    booking_id: int,
    payload: BookingUpdate,
    store: SqlBookingStore = Depends(get_booking_store),
    mutator: BookingMutator = Depends(get_mutator),
):
    if payload.notes is None and payload.status is None:
        raise HTTPException(status_code=400, detail="At least one field (notes or status) must be provided")

    booking = _get_or_404(store, booking_id)
    try:
        updated = mutator.update(booking, status=payload.status, notes=payload.notes)
    except SchedulingError as exc:
        raise to_http_exception(exc)
    return _save(store, updated)


# Provider cancels booking

@router.delete("/{booking_id}", response_model=BookingResponse)
def cancel_booking(
    booking_id: int,
    store: SqlBookingStore = Depends(get_booking_store),
    mutator: BookingMutator = Depends(get_mutator),
):
    booking = _get_or_404(store, booking_id)
    try:
        cancelled = mutator.cancel(booking)
    except SchedulingError as exc:
        raise to_http_exception(exc)
    return _save(store, cancelled)


# Patient cancels through the link in their confirmation

@router.post("/cancel/{token}", response_model=BookingResponse)
def cancel_by_token(
    token: str,
    store: SqlBookingStore = Depends(get_booking_store),
    mutator: BookingMutator = Depends(get_mutator),
):
    try:
        cancelled = mutator.cancel_by_token(token)
    except SchedulingError as exc:
        raise to_http_exception(exc)
    return _save(store, cancelled)
