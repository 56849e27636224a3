"""
Booking rules for table reservations.
Fixed business constants: slot length, operating hours, horizon and party sizes.
"""

from dataclasses import dataclass
from datetime import time


@dataclass(frozen=True)
class BookingRules:
    """Booking rules and constraints."""
    # Time slot settings
    slot_duration_minutes: int = 120  # Fixed dining slot, never stored per reservation
    time_slot_granularity_minutes: int = 30
    first_booking_time: time = time(9, 0)
    last_booking_time: time = time(22, 0)

    # Lead time settings
    maximum_horizon_days: int = 30

    # Party size settings
    min_party_size: int = 1
    max_party_size: int = 12

    # Notes
    max_special_requests_length: int = 500

    def is_valid_time_slot(self, booking_time: time) -> bool:
        """Check if the time aligns with the slot granularity."""
        total_minutes = booking_time.hour * 60 + booking_time.minute
        return total_minutes % self.time_slot_granularity_minutes == 0

    def is_within_booking_hours(self, booking_time: time) -> bool:
        """Check if the time falls between the first and last bookable slot."""
        return self.first_booking_time <= booking_time <= self.last_booking_time

    def is_valid_party_size(self, guests: int) -> bool:
        return self.min_party_size <= guests <= self.max_party_size


BOOKING_RULES = BookingRules()
