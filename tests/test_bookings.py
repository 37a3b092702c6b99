"""
Tests for scheduling/bookings.py

Booking lifecycle: create, reschedule, cancel, cancel by token, update.
"""
import pytest

from slotbook.core.errors import (
    BookingNotFound,
    InvalidFormat,
    InvalidProviderId,
    InvalidRange,
    InvalidTransition,
    PastDate,
    SlotUnavailable,
)
from slotbook.schemas.booking import BookingStatus

from tests.utils.dates import MONDAY, SUNDAY, TUESDAY


class TestCreate:

    def test_builds_confirmed_booking(self, mutator, make_request, today):
        booking = mutator.create(make_request("10:00", "11:00"), today)

        assert booking.id is None
        assert booking.status == BookingStatus.CONFIRMED
        assert booking.provider_id == 1
        assert booking.date == MONDAY
        assert (booking.start_time, booking.end_time) == ("10:00", "11:00")
        assert booking.cancellation_token

    def test_tokens_are_unique(self, mutator, make_request, today):
        first = mutator.create(make_request("10:00", "11:00"), today)
        second = mutator.create(make_request("12:00", "13:00"), today)
        assert first.cancellation_token != second.cancellation_token

    def test_round_trip_through_store(self, store, mutator, make_request, today):
        created = store.add(mutator.create(make_request("10:00", "11:00"), today))

        fetched = store.get_booking(created.id)

        assert fetched.date == MONDAY
        assert fetched.start_time == "10:00"
        assert fetched.end_time == "11:00"
        assert fetched.status == BookingStatus.CONFIRMED
        assert fetched.cancellation_token == created.cancellation_token

    def test_today_is_bookable(self, mutator, make_request, today):
        assert mutator.create(make_request("10:00", "11:00", date=MONDAY), today)

    def test_past_date(self, mutator, make_request, today):
        with pytest.raises(PastDate):
            mutator.create(make_request("10:00", "11:00", date=SUNDAY), today)

    def test_past_date_is_an_invalid_range(self, mutator, make_request, today):
        with pytest.raises(InvalidRange):
            mutator.create(make_request("10:00", "11:00", date=SUNDAY), today)

    @pytest.mark.parametrize("date_str, start, end", [
        ("2026/01/05", "10:00", "11:00"),
        ("2026-13-01", "10:00", "11:00"),
        (MONDAY, "9:00", "10:00"),
        (MONDAY, "10:00", "24:00"),
    ])
    def test_invalid_format(self, mutator, make_request, today, date_str, start, end):
        with pytest.raises(InvalidFormat):
            mutator.create(make_request(start, end, date=date_str), today)

    @pytest.mark.parametrize("start, end", [("11:00", "10:00"), ("10:00", "10:00")])
    def test_start_not_before_end(self, mutator, make_request, today, start, end):
        with pytest.raises(InvalidRange):
            mutator.create(make_request(start, end), today)

    def test_invalid_provider_id(self, mutator, make_request, today):
        with pytest.raises(InvalidProviderId):
            mutator.create(make_request("10:00", "11:00", provider_id=0), today)

    def test_conflict(self, store, mutator, make_booking, make_request, today):
        existing = store.add(make_booking("10:00", "11:00"))

        with pytest.raises(SlotUnavailable) as exc_info:
            mutator.create(make_request("10:30", "11:30"), today)

        assert exc_info.value.conflicting_ids == [existing.id]

    @pytest.mark.parametrize("date_str, start, end", [
        ("\u0662\u0660\u0662\u0666-01-05", "10:00", "11:00"),
        (MONDAY, "10:00\n", "11:00"),
        (MONDAY, "1\u0660:00", "11:00"),
    ])
    def test_non_canonical_spelling_cannot_sidestep_conflict(
        self, store, mutator, make_booking, make_request, today, date_str, start, end
    ):
        """An existing 10:00-11:00 booking is not bypassed by a differently spelled request."""
        store.add(make_booking("10:00", "11:00"))

        with pytest.raises(InvalidFormat):
            mutator.create(make_request(start, end, date=date_str), today)

    def test_touching_boundary_is_accepted(self, store, mutator, make_booking, make_request, today):
        store.add(make_booking("10:00", "11:00"))
        booking = mutator.create(make_request("11:00", "12:00"), today)
        assert booking.start_time == "11:00"

    def test_string_provider_id_in_store_conflicts(self, store, mutator, make_booking, make_request, today):
        store.add(make_booking("10:00", "11:00", provider_id="1"))
        with pytest.raises(SlotUnavailable):
            mutator.create(make_request("10:00", "11:00"), today)


class TestReschedule:

    def test_moves_date_and_times_together(self, store, mutator, make_booking, today):
        booking = store.add(make_booking("10:00", "11:00"))

        moved = mutator.reschedule(booking, TUESDAY, "14:00", "15:00", today)

        assert (moved.date, moved.start_time, moved.end_time) == (TUESDAY, "14:00", "15:00")
        assert moved.id == booking.id
        assert moved.cancellation_token == booking.cancellation_token
        assert moved.status == BookingStatus.CONFIRMED
        # input left untouched
        assert booking.date == MONDAY

    def test_overlapping_other_booking_fails(self, store, mutator, make_booking, today):
        booking = store.add(make_booking("10:00", "11:00"))
        store.add(make_booking("14:00", "15:00"))

        with pytest.raises(SlotUnavailable):
            mutator.reschedule(booking, MONDAY, "14:30", "15:30", today)

    def test_own_time_never_conflicts(self, store, mutator, make_booking, today):
        booking = store.add(make_booking("10:00", "11:00"))

        same = mutator.reschedule(booking, MONDAY, "10:00", "11:00", today)
        shifted = mutator.reschedule(booking, MONDAY, "10:30", "11:30", today)

        assert same.start_time == "10:00"
        assert shifted.start_time == "10:30"

    @pytest.mark.parametrize("status", [
        BookingStatus.CANCELLED,
        BookingStatus.COMPLETED,
        BookingStatus.NO_SHOW,
    ])
    def test_requires_confirmed(self, store, mutator, make_booking, today, status):
        booking = store.add(make_booking("10:00", "11:00", status=status))
        with pytest.raises(InvalidTransition):
            mutator.reschedule(booking, TUESDAY, "10:00", "11:00", today)

    def test_to_past_date(self, store, mutator, make_booking, today):
        booking = store.add(make_booking("10:00", "11:00"))
        with pytest.raises(PastDate):
            mutator.reschedule(booking, SUNDAY, "10:00", "11:00", today)


class TestCancel:

    def test_cancel_confirmed(self, store, mutator, make_booking):
        booking = store.add(make_booking("10:00", "11:00"))

        cancelled = mutator.cancel(booking)

        assert cancelled.status == BookingStatus.CANCELLED
        assert cancelled.id == booking.id

    def test_cancel_twice_fails(self, store, mutator, make_booking):
        booking = store.add(make_booking("10:00", "11:00"))
        cancelled = mutator.cancel(booking)

        with pytest.raises(InvalidTransition):
            mutator.cancel(cancelled)

    def test_cancelled_slot_can_be_booked_again(self, store, mutator, make_booking, make_request, today):
        booking = store.add(make_booking("10:00", "11:00"))
        store.save(mutator.cancel(booking))

        rebooked = mutator.create(make_request("10:00", "11:00"), today)

        assert rebooked.status == BookingStatus.CONFIRMED

    def test_cancel_by_token(self, store, mutator, make_booking):
        booking = store.add(make_booking("10:00", "11:00"))

        cancelled = mutator.cancel_by_token(booking.cancellation_token)

        assert cancelled.id == booking.id
        assert cancelled.status == BookingStatus.CANCELLED

    def test_cancel_by_token_twice(self, store, mutator, make_booking):
        booking = store.add(make_booking("10:00", "11:00"))
        store.save(mutator.cancel_by_token(booking.cancellation_token))

        with pytest.raises(BookingNotFound):
            mutator.cancel_by_token(booking.cancellation_token)

    @pytest.mark.parametrize("token", ["unknown", ""])
    def test_cancel_by_unknown_token(self, mutator, token):
        with pytest.raises(BookingNotFound):
            mutator.cancel_by_token(token)


class TestUpdate:

    @pytest.mark.parametrize("target", [BookingStatus.COMPLETED, BookingStatus.NO_SHOW, "completed"])
    def test_allowed_status(self, store, mutator, make_booking, target):
        booking = store.add(make_booking("10:00", "11:00"))

        updated = mutator.update(booking, status=target)

        assert updated.status == BookingStatus(target)

    @pytest.mark.parametrize("target", [BookingStatus.CANCELLED, BookingStatus.CONFIRMED, "archived"])
    def test_rejected_status(self, store, mutator, make_booking, target):
        booking = store.add(make_booking("10:00", "11:00"))
        with pytest.raises(InvalidTransition):
            mutator.update(booking, status=target)

    def test_terminal_status_is_final(self, store, mutator, make_booking):
        booking = store.add(make_booking("10:00", "11:00", status=BookingStatus.COMPLETED))
        with pytest.raises(InvalidTransition):
            mutator.update(booking, status=BookingStatus.NO_SHOW)

    def test_notes_only(self, store, mutator, make_booking):
        booking = store.add(make_booking("10:00", "11:00", status=BookingStatus.COMPLETED))

        updated = mutator.update(booking, notes="follow-up in two weeks")

        assert updated.notes == "follow-up in two weeks"
        assert updated.status == BookingStatus.COMPLETED
