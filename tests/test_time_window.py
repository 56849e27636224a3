"""
Tests for time window primitives.
Covers time parsing, slot end computation, overlap detection and booking date/time rules.
"""

import pytest
from datetime import date, datetime, time, timedelta

from core.time_window import (
    add_slot_duration,
    normalize_date,
    parse_time_of_day,
    slot_end_time,
    validate_booking_date,
    validate_booking_time,
    validate_guest_count,
    windows_overlap,
)
from core.booking_rules import BOOKING_RULES
from domain.errors import ErrorKind, ReservationValidationError


TODAY = date(2026, 3, 2)


@pytest.mark.unit
class TestParseTimeOfDay:
    """Tests for "HH:MM" parsing."""

    def test_parse_valid_time(self):
        assert parse_time_of_day("19:30") == time(19, 30)

    def test_parse_midnight_and_last_minute(self):
        assert parse_time_of_day("00:00") == time(0, 0)
        assert parse_time_of_day("23:59") == time(23, 59)

    def test_time_object_passes_through(self):
        assert parse_time_of_day(time(9, 0, 15)) == time(9, 0)

    @pytest.mark.parametrize("value", ["24:00", "12:60", "1200", "ab:cd", "12:30:00", "", "-1:30"])
    def test_invalid_format(self, value):
        with pytest.raises(ReservationValidationError) as exc_info:
            parse_time_of_day(value)
        assert exc_info.value.code == "invalid_format"
        assert exc_info.value.kind == ErrorKind.VALIDATION


@pytest.mark.unit
class TestSlotDuration:
    """Tests for the fixed two-hour slot."""

    def test_add_slot_duration(self):
        assert add_slot_duration("19:00") == "21:00"
        assert add_slot_duration("09:30") == "11:30"

    def test_slot_end_time_returns_time(self):
        assert slot_end_time("20:30") == time(22, 30)

    def test_latest_slot_before_midnight(self):
        assert add_slot_duration("21:59") == "23:59"

    def test_slot_crossing_midnight_fails(self):
        with pytest.raises(ReservationValidationError) as exc_info:
            add_slot_duration("22:00")
        assert exc_info.value.code == "slot_exceeds_day_boundary"

    def test_slot_well_past_midnight_fails(self):
        with pytest.raises(ReservationValidationError):
            add_slot_duration("23:30")


@pytest.mark.unit
class TestWindowsOverlap:
    """Tests for the overlap predicate."""

    def test_boundary_touching_windows_do_not_overlap(self):
        assert windows_overlap("09:00", "11:00", "11:00", "13:00") is False
        assert windows_overlap("11:00", "13:00", "09:00", "11:00") is False

    def test_one_minute_overlap(self):
        assert windows_overlap("09:00", "11:00", "10:59", "13:00") is True

    def test_window_overlaps_itself(self):
        assert windows_overlap("19:00", "21:00", "19:00", "21:00") is True

    def test_contained_window(self):
        assert windows_overlap("18:00", "22:00", "19:00", "20:00") is True

    def test_disjoint_windows(self):
        assert windows_overlap("09:00", "11:00", "14:00", "16:00") is False

    @pytest.mark.parametrize("a,b", [
        (("09:00", "11:00"), ("10:00", "12:00")),
        (("09:00", "11:00"), ("11:00", "13:00")),
        (("12:30", "14:30"), ("09:00", "11:00")),
        (("18:00", "20:00"), ("17:30", "19:30")),
    ])
    def test_overlap_is_commutative(self, a, b):
        assert windows_overlap(*a, *b) == windows_overlap(*b, *a)


@pytest.mark.unit
class TestValidateBookingTime:
    """Tests for operating hours and half-hour granularity."""

    def test_accepts_every_half_hour_from_nine_to_ten(self):
        start = datetime(2026, 1, 1, 9, 0)
        slot = start
        while slot <= datetime(2026, 1, 1, 22, 0):
            assert validate_booking_time(slot.strftime("%H:%M")) == slot.time()
            slot += timedelta(minutes=30)

    @pytest.mark.parametrize("value", ["08:30", "22:30", "00:00", "23:00"])
    def test_rejects_outside_operating_hours(self, value):
        with pytest.raises(ReservationValidationError) as exc_info:
            validate_booking_time(value)
        assert exc_info.value.code == "outside_operating_hours"
        assert exc_info.value.message == "Bookings are taken from 09:00 to 22:00"

    @pytest.mark.parametrize("value, expected", [
        (time(9, 0), True),
        (time(22, 0), True),
        (time(8, 59), False),
        (time(22, 1), False),
    ])
    def test_booking_hours_bounds_are_inclusive(self, value, expected):
        assert BOOKING_RULES.is_within_booking_hours(value) is expected

    @pytest.mark.parametrize("value", ["19:15", "09:45", "12:01"])
    def test_rejects_off_granularity(self, value):
        with pytest.raises(ReservationValidationError) as exc_info:
            validate_booking_time(value)
        assert exc_info.value.code == "invalid_granularity"

    def test_malformed_time(self):
        with pytest.raises(ReservationValidationError) as exc_info:
            validate_booking_time("7pm")
        assert exc_info.value.code == "invalid_format"


@pytest.mark.unit
class TestValidateBookingDate:
    """Tests for the 30-day booking horizon."""

    def test_today_is_valid(self):
        assert validate_booking_date(TODAY, today=TODAY) == TODAY

    def test_thirty_days_ahead_is_valid(self):
        last = TODAY + timedelta(days=30)
        assert validate_booking_date(last, today=TODAY) == last

    def test_datetime_is_normalized_to_calendar_day(self):
        value = datetime(2026, 3, 5, 18, 45)
        assert validate_booking_date(value, today=TODAY) == date(2026, 3, 5)

    def test_iso_string_is_accepted(self):
        assert validate_booking_date("2026-03-10", today=TODAY) == date(2026, 3, 10)

    def test_past_date_fails(self):
        with pytest.raises(ReservationValidationError) as exc_info:
            validate_booking_date(TODAY - timedelta(days=1), today=TODAY)
        assert exc_info.value.code == "date_in_past"

    def test_too_far_ahead_fails(self):
        with pytest.raises(ReservationValidationError) as exc_info:
            validate_booking_date(TODAY + timedelta(days=31), today=TODAY)
        assert exc_info.value.code == "date_too_far_ahead"

    def test_garbage_date_fails(self):
        with pytest.raises(ReservationValidationError) as exc_info:
            normalize_date("next friday")
        assert exc_info.value.code == "invalid_format"


@pytest.mark.unit
class TestValidateGuestCount:

    @pytest.mark.parametrize("guests", [1, 6, 12])
    def test_valid(self, guests):
        assert validate_guest_count(guests) == guests

    @pytest.mark.parametrize("guests", [0, 13, -2])
    def test_invalid(self, guests):
        with pytest.raises(ReservationValidationError):
            validate_guest_count(guests)
