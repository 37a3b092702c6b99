# slotbook/api/routes/availability.py
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from datetime import date
from typing import Optional

from slotbook.api.deps import get_booking_store, get_today, to_http_exception
from slotbook.core.config import get_settings
from slotbook.core.errors import SchedulingError
from slotbook.db.base import get_db
from slotbook.db.models.offering import Offering
from slotbook.db.store import (
    SqlBookingStore,
    get_blocked_ranges,
    get_provider,
    get_weekly_availability,
    replace_availability,
)
from slotbook.scheduling.availability import calculate_available_slots
from slotbook.scheduling.identifiers import ProviderId
from slotbook.scheduling.validators import (
    validate_all,
    validate_availability_entry,
    validate_blocked_range,
    validate_date_range,
)
from slotbook.schemas.availability import AvailabilityResponse, AvailabilityUpdate
from slotbook.schemas.slot import SlotsResponse

router = APIRouter(prefix="/availability", tags=["availability"])


def _load_provider(db: Session, provider_id: str):
    try:
        pid = ProviderId(provider_id)
    except SchedulingError as exc:
        raise to_http_exception(exc)
    provider = get_provider(db, pid)
    if not provider:
        raise HTTPException(status_code=404, detail="Provider not found")
    return pid, provider


def _availability_response(provider) -> AvailabilityResponse:
    return AvailabilityResponse(
        provider_id=provider.id,
        weekly_availability=get_weekly_availability(provider),
        blocked_ranges=get_blocked_ranges(provider),
    )


@router.get("/provider/{provider_id}", response_model=AvailabilityResponse)
def read_availability(provider_id: str, db: Session = Depends(get_db)):
    _, provider = _load_provider(db, provider_id)
    return _availability_response(provider)


@router.put("/provider/{provider_id}", response_model=AvailabilityResponse)
def update_availability(provider_id: str, payload: AvailabilityUpdate, db: Session = Depends(get_db)):
    if payload.weekly_availability is None and payload.blocked_ranges is None:
        raise HTTPException(status_code=400, detail="Either weekly_availability or blocked_ranges must be provided")

    _, provider = _load_provider(db, provider_id)

    # validate everything before touching the stored lists
    try:
        if payload.weekly_availability is not None:
            validate_all(validate_availability_entry, payload.weekly_availability)
        if payload.blocked_ranges is not None:
            validate_all(validate_blocked_range, payload.blocked_ranges)
    except SchedulingError as exc:
        raise to_http_exception(exc)

    provider = replace_availability(db, provider, payload.weekly_availability, payload.blocked_ranges)
    return _availability_response(provider)


# Slot generation (core logic lives in slotbook.scheduling)


@router.get("/provider/{provider_id}/slots", response_model=SlotsResponse)
def get_slots(
    provider_id: str,
    start_date: str = Query(..., description="YYYY-MM-DD"),
    end_date: str = Query(..., description="YYYY-MM-DD"),
    offering_id: Optional[int] = Query(None, description="offering that defines the slot grid"),
    include_unavailable: bool = Query(False, description="mark future days without a weekly window"),
    include_patient_details: bool = Query(False, description="provider view: patient name and email on booked slots"),
    db: Session = Depends(get_db),
    store: SqlBookingStore = Depends(get_booking_store),
    today: date = Depends(get_today),
):
    """
    Slots for every date in [start_date, end_date] with status
    available / blocked / booked.
    Without offering_id the configured default session/break grid is used.
    """
    settings = get_settings().scheduling
    pid, provider = _load_provider(db, provider_id)

    session_minutes = settings.default_session_minutes
    break_minutes = settings.default_break_minutes
    if offering_id is not None:
        offering = db.query(Offering).filter(
            Offering.id == offering_id,
            Offering.provider_id == provider.id,
            Offering.is_active == True
        ).first()
        if not offering:
            raise HTTPException(status_code=404, detail="Offering not found")
        session_minutes = offering.duration_minutes
        break_minutes = offering.break_minutes

    try:
        first, last = validate_date_range(start_date, end_date)
        if (last - first).days + 1 > settings.max_range_days:
            raise HTTPException(
                status_code=400,
                detail=f"Date range too long, at most {settings.max_range_days} days",
            )

        bookings = store.list_bookings_in_range(pid, start_date, end_date)
        slots = calculate_available_slots(
            get_weekly_availability(provider),
            get_blocked_ranges(provider),
            bookings,
            start_date,
            end_date,
            session_minutes,
            break_minutes,
            today=today,
            max_available_per_day=settings.max_available_per_day,
            include_patient_details=include_patient_details,
            include_unavailable_days=include_unavailable,
        )
    except SchedulingError as exc:
        raise to_http_exception(exc)

    return SlotsResponse(
        provider_id=provider.id,
        start_date=start_date,
        end_date=end_date,
        session_minutes=session_minutes,
        break_minutes=break_minutes,
        slots=slots,
    )
