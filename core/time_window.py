"""
Time window utilities for table reservations.
Parses time-of-day strings, computes slot end times and detects overlapping windows.
"""
from datetime import date, datetime, time, timedelta
from typing import Optional, Union

import pytz

from core.booking_rules import BOOKING_RULES
from core.config import get_settings
from domain.errors import ReservationValidationError


TimeLike = Union[str, time]
DateLike = Union[str, date, datetime]

MINUTES_PER_DAY = 24 * 60


def get_timezone() -> pytz.BaseTzInfo:
    """Get the configured restaurant timezone."""
    return pytz.timezone(get_settings().restaurant_timezone)


def get_current_datetime() -> datetime:
    """Get current datetime in the restaurant timezone."""
    return datetime.now(get_timezone())


def get_current_date() -> date:
    """Get today's date in the restaurant timezone."""
    return get_current_datetime().date()


def parse_time_of_day(value: TimeLike) -> time:
    """
    Parse a "HH:MM" string into a time object.

    Args:
        value: Time string such as "19:00" (a time object is passed through)

    Returns:
        time object

    Raises:
        ReservationValidationError: If the string is not a valid 24-hour time
    """
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)

    parts = value.split(":") if isinstance(value, str) else []
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        raise ReservationValidationError(f"Invalid time format: {value}", code="invalid_format")

    hours, minutes = int(parts[0]), int(parts[1])
    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        raise ReservationValidationError(f"Invalid time value: {value}", code="invalid_format")

    return time(hours, minutes)


def to_minutes(value: TimeLike) -> int:
    """Convert "19:00" to minutes from midnight (1140)."""
    parsed = parse_time_of_day(value)
    return parsed.hour * 60 + parsed.minute


def format_time(value: time) -> str:
    """Format a time object as "HH:MM"."""
    return f"{value.hour:02d}:{value.minute:02d}"


def add_slot_duration(start: TimeLike) -> str:
    """
    Compute the end of a reservation slot: "19:00" -> "21:00".

    Raises:
        ReservationValidationError: If the slot would reach or cross midnight
    """
    total_minutes = to_minutes(start) + BOOKING_RULES.slot_duration_minutes
    if total_minutes >= MINUTES_PER_DAY:
        raise ReservationValidationError(
            "Reservation end time cannot exceed midnight",
            code="slot_exceeds_day_boundary",
        )
    return f"{total_minutes // 60:02d}:{total_minutes % 60:02d}"


def slot_end_time(start: TimeLike) -> time:
    """Same as add_slot_duration but returns a time object."""
    return parse_time_of_day(add_slot_duration(start))


def windows_overlap(a_start: TimeLike, a_end: TimeLike, b_start: TimeLike, b_end: TimeLike) -> bool:
    """
    Check if two time windows overlap.

    Windows that merely touch (one ends exactly when the other begins) do not overlap.
    """
    return to_minutes(a_start) < to_minutes(b_end) and to_minutes(a_end) > to_minutes(b_start)


def validate_booking_time(value: TimeLike) -> time:
    """
    Validate a booking start time.

    Bookings are taken from 09:00 to 22:00 on the hour or half-hour.

    Returns:
        The parsed time

    Raises:
        ReservationValidationError: outside_operating_hours or invalid_granularity
    """
    parsed = parse_time_of_day(value)
    rules = BOOKING_RULES

    if not rules.is_within_booking_hours(parsed):
        raise ReservationValidationError(
            f"Bookings are taken from {format_time(rules.first_booking_time)} "
            f"to {format_time(rules.last_booking_time)}",
            code="outside_operating_hours",
        )
    if not rules.is_valid_time_slot(parsed):
        raise ReservationValidationError(
            "Booking time must be on the hour or half-hour (e.g. 19:00 or 19:30)",
            code="invalid_granularity",
        )
    return parsed


def normalize_date(value: DateLike) -> date:
    """Strip the time-of-day from a date, datetime or "YYYY-MM-DD" string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            pass
    raise ReservationValidationError(
        "Invalid date format. Use YYYY-MM-DD", code="invalid_format"
    )


def validate_booking_date(value: DateLike, today: Optional[date] = None) -> date:
    """
    Validate a booking date: today or up to 30 days ahead.

    Args:
        value: Requested date
        today: Reference date (defaults to today in the restaurant timezone)

    Returns:
        The normalized calendar date

    Raises:
        ReservationValidationError: date_in_past or date_too_far_ahead
    """
    booking_date = normalize_date(value)
    today = today or get_current_date()

    if booking_date < today:
        raise ReservationValidationError(
            "Reservation date cannot be in the past", code="date_in_past"
        )

    max_date = today + timedelta(days=BOOKING_RULES.maximum_horizon_days)
    if booking_date > max_date:
        raise ReservationValidationError(
            f"Reservations can only be made up to {BOOKING_RULES.maximum_horizon_days} days in advance",
            code="date_too_far_ahead",
        )
    return booking_date


def validate_guest_count(guests: int) -> int:
    """Validate the party size against the booking rules."""
    if isinstance(guests, bool) or not isinstance(guests, int) or not BOOKING_RULES.is_valid_party_size(guests):
        raise ReservationValidationError(
            f"Guest count must be between {BOOKING_RULES.min_party_size} "
            f"and {BOOKING_RULES.max_party_size}",
            code="invalid_guest_count",
        )
    return guests
