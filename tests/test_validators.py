"""Tests for scheduling/validators.py"""
from datetime import date

import pytest

from slotbook.core.errors import InvalidFormat, InvalidRange, PastDate
from slotbook.scheduling.validators import (
    parse_date,
    validate_all,
    validate_availability_entry,
    validate_blocked_range,
    validate_date_range,
    validate_not_past,
    validate_offering,
    validate_time_range,
)

from tests.utils.dates import MONDAY, TODAY, TUESDAY, WEDNESDAY


class TestDates:

    def test_parse_date(self):
        assert parse_date(MONDAY) == date(2026, 1, 5)

    @pytest.mark.parametrize("value", ["2026-02-30", "2026-1-5", "20260105", "", None])
    def test_parse_date_invalid(self, value):
        with pytest.raises(InvalidFormat):
            parse_date(value)

    @pytest.mark.parametrize("value", [
        "2026-01-05\n",
        "\u0662\u0660\u0662\u0666-01-05",
        "2026-\u0660\u0661-05",
        "\uff12\uff10\uff12\uff16-01-05",
    ])
    def test_parse_date_only_canonical_ascii(self, value):
        with pytest.raises(InvalidFormat):
            parse_date(value)

    def test_error_names_the_field(self):
        with pytest.raises(InvalidFormat, match="to_date"):
            parse_date("soon", "to_date")

    def test_single_day_range(self):
        assert validate_date_range(MONDAY, MONDAY) == (date(2026, 1, 5), date(2026, 1, 5))

    def test_reversed_range(self):
        with pytest.raises(InvalidRange):
            validate_date_range(TUESDAY, MONDAY)

    def test_not_past(self):
        assert validate_not_past(TODAY, TODAY) == TODAY
        with pytest.raises(PastDate):
            validate_not_past(date(2026, 1, 4), TODAY)


class TestTimes:

    def test_time_range_returns_minutes(self):
        assert validate_time_range("09:00", "09:15") == (540, 555)

    def test_trailing_newline_rejected(self):
        with pytest.raises(InvalidFormat):
            validate_time_range("10:00\n", "11:00")

    @pytest.mark.parametrize("start, end", [("10:00", "10:00"), ("10:00", "09:59")])
    def test_empty_or_reversed(self, start, end):
        with pytest.raises(InvalidRange):
            validate_time_range(start, end)

    def test_bad_format_wins_over_order(self):
        with pytest.raises(InvalidFormat, match="end_time"):
            validate_time_range("10:00", "9:00")


class TestAvailabilityEntries:

    def test_valid_entry(self, make_entry):
        entry = make_entry(0, "08:00", "12:00")
        assert validate_availability_entry(entry) is entry

    def test_reversed_entry(self, make_entry):
        with pytest.raises(InvalidRange):
            validate_availability_entry(make_entry(1, "12:00", "08:00"))

    def test_single_day_block(self, make_blocked):
        blocked = make_blocked(MONDAY, MONDAY, "12:00", "14:00")
        assert validate_blocked_range(blocked) is blocked

    def test_overnight_multi_day_block(self, make_blocked):
        """Start time later than end time is fine when the block spans days."""
        blocked = make_blocked(MONDAY, WEDNESDAY, "18:00", "08:00")
        assert validate_blocked_range(blocked) is blocked

    @pytest.mark.parametrize("from_date, to_date, start, end", [
        (MONDAY, MONDAY, "14:00", "12:00"),
        (MONDAY, MONDAY, "12:00", "12:00"),
        (TUESDAY, MONDAY, "08:00", "18:00"),
    ])
    def test_invalid_block(self, make_blocked, from_date, to_date, start, end):
        with pytest.raises(InvalidRange):
            validate_blocked_range(make_blocked(from_date, to_date, start, end))

    def test_validate_all_prefixes_index(self, make_entry):
        entries = [make_entry(1), make_entry(2, "18:00", "09:00")]

        with pytest.raises(InvalidRange, match=r"^Entry 1: "):
            validate_all(validate_availability_entry, entries)


class TestOffering:

    @pytest.mark.parametrize("duration, brk", [(15, 0), (240, 60), (60, 30)])
    def test_bounds_accepted(self, duration, brk):
        assert validate_offering(duration, brk) == (duration, brk)

    @pytest.mark.parametrize("duration, brk", [(14, 0), (241, 0), (60, -1), (60, 61)])
    def test_bounds_rejected(self, duration, brk):
        with pytest.raises(InvalidRange):
            validate_offering(duration, brk)
