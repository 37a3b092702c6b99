"""
Booking lifecycle: create, reschedule, cancel, status/notes update.

Booking status machine:

    confirmed -> completed | no_show | cancelled   (terminal)
    confirmed -> confirmed                         (reschedule: date/time only)

Every operation returns a new Booking record and leaves its input untouched.
Persisting the result, and undoing it if a later step such as a notification
fails, is the caller's job. Check-then-write is only safe when the caller
serialises writes per provider or the store enforces uniqueness on
(provider_id, date, start_time).
"""

import logging
import uuid
from datetime import date
from typing import Optional

from slotbook.core.errors import BookingNotFound, InvalidTransition, SlotUnavailable
from slotbook.scheduling.conflicts import ConflictChecker
from slotbook.scheduling.identifiers import ProviderId
from slotbook.scheduling.validators import (
    parse_date,
    validate_not_past,
    validate_time_range,
    validate_time_string,
)
from slotbook.schemas.booking import Booking, BookingCreate, BookingStatus

logger = logging.getLogger(__name__)

# Target statuses accepted by a direct status update
UPDATABLE_STATUSES = (BookingStatus.COMPLETED, BookingStatus.NO_SHOW)


def new_cancellation_token() -> str:
    return str(uuid.uuid4())


class BookingMutator:

    def __init__(self, checker: ConflictChecker):
        self.checker = checker

    # ===== VALIDATION =====

    def _validate_time_request(self, date_str: str, start_time: str, end_time: str, today: date) -> None:
        """Format, not-in-the-past and ordering checks shared by create and reschedule."""
        target = parse_date(date_str)
        validate_time_string(start_time, "start_time")
        validate_time_string(end_time, "end_time")
        validate_not_past(target, today)
        validate_time_range(start_time, end_time)

    @staticmethod
    def _require_confirmed(booking: Booking, action: str) -> None:
        if booking.status != BookingStatus.CONFIRMED:
            raise InvalidTransition(
                f"Cannot {action} booking {booking.id}: status is {booking.status.value}"
            )

    # ===== OPERATIONS =====

    def create(self, request: BookingCreate, today: date) -> Booking:
        """
        Validate a booking request and build the confirmed Booking record.

        Raises:
            InvalidFormat / InvalidRange / PastDate: bad date or times
            InvalidProviderId: malformed provider id
            SlotUnavailable: the time overlaps an existing booking
        """
        provider = ProviderId(request.provider_id)
        self._validate_time_request(request.date, request.start_time, request.end_time, today)

        conflicts = self.checker.find_conflicts(
            provider, request.date, request.start_time, request.end_time
        )
        if conflicts:
            raise SlotUnavailable(
                "Time slot is already booked",
                conflicting_ids=[b.id for b in conflicts],
            )

        booking = Booking(
            provider_id=provider.value,
            patient_name=request.patient_name,
            patient_email=str(request.patient_email),
            patient_phone=request.patient_phone,
            date=request.date,
            start_time=request.start_time,
            end_time=request.end_time,
            status=BookingStatus.CONFIRMED,
            cancellation_token=new_cancellation_token(),
            reason=request.reason,
        )
        logger.info(
            "Booking accepted for provider %s on %s %s-%s",
            provider, booking.date, booking.start_time, booking.end_time,
        )
        return booking

    def reschedule(
        self,
        booking: Booking,
        new_date: str,
        new_start_time: str,
        new_end_time: str,
        today: date,
    ) -> Booking:
        """
        Move a confirmed booking to a new date/time.

        The booking itself is excluded from the conflict check, so moving it
        onto (or partly onto) its own current time never conflicts. Identity
        and cancellation token are kept; date, start and end change together.
        """
        self._require_confirmed(booking, "reschedule")
        self._validate_time_request(new_date, new_start_time, new_end_time, today)

        conflicts = self.checker.find_conflicts(
            booking.provider_id, new_date, new_start_time, new_end_time,
            exclude_booking_id=booking.id,
        )
        if conflicts:
            raise SlotUnavailable(
                "New appointment time conflicts with an existing booking",
                conflicting_ids=[b.id for b in conflicts],
            )

        logger.info(
            "Booking %s rescheduled from %s %s-%s to %s %s-%s",
            booking.id, booking.date, booking.start_time, booking.end_time,
            new_date, new_start_time, new_end_time,
        )
        return booking.model_copy(update={
            "date": new_date,
            "start_time": new_start_time,
            "end_time": new_end_time,
        })

    def cancel(self, booking: Booking) -> Booking:
        """Cancel a confirmed booking. Cancelling twice is an error, not a no-op."""
        self._require_confirmed(booking, "cancel")
        logger.info("Booking %s cancelled", booking.id)
        return booking.model_copy(update={"status": BookingStatus.CANCELLED})

    def cancel_by_token(self, token: str) -> Booking:
        """Patient-side cancellation through the token handed out at creation."""
        booking = self.checker.store.find_by_cancellation_token(token) if token else None
        if booking is None:
            raise BookingNotFound("Invalid or expired cancellation token")
        return self.cancel(booking)

    def update(
        self,
        booking: Booking,
        status: Optional[BookingStatus] = None,
        notes: Optional[str] = None,
    ) -> Booking:
        """
        Provider-side update of notes and/or status.

        Only completed and no_show are valid target statuses; cancelling goes
        through cancel(), time changes through reschedule().
        """
        changes = {}
        if status is not None:
            try:
                status = BookingStatus(status)
            except ValueError:
                raise InvalidTransition(f"Unknown booking status {status!r}")
            if status not in UPDATABLE_STATUSES:
                raise InvalidTransition(
                    f"Invalid status transition to {status.value}. "
                    "Only completed and no_show are allowed for updates"
                )
            self._require_confirmed(booking, f"mark as {status.value}")
            changes["status"] = status
        if notes is not None:
            changes["notes"] = notes

        if changes:
            logger.info("Booking %s updated: %s", booking.id, sorted(changes))
        return booking.model_copy(update=changes)
