"""Domain models using Pydantic v2 for the table booking service."""

from datetime import date, time, datetime
from typing import Optional, List

from pydantic import BaseModel, Field, ConfigDict, computed_field, field_validator

from core.booking_rules import BOOKING_RULES
from .enums import ReservationStatus


TIME_PATTERN = r"^\d{2}:\d{2}$"


class ReservationCreate(BaseModel):
    """Model for creating a new reservation."""

    restaurant_id: int = Field(..., ge=1, description="Restaurant to book")
    reservation_date: date = Field(..., description="Reservation date")
    start_time: str = Field(..., pattern=TIME_PATTERN, description="Start time (HH:MM)")
    guest_count: int = Field(
        ..., ge=BOOKING_RULES.min_party_size, le=BOOKING_RULES.max_party_size, description="Number of guests"
    )
    special_requests: Optional[str] = Field(
        None, max_length=BOOKING_RULES.max_special_requests_length, description="Special requests or notes"
    )

    model_config = ConfigDict(str_strip_whitespace=True)


class ReservationUpdate(BaseModel):
    """Model for modifying a PENDING reservation. Unset fields keep their value."""

    reservation_date: Optional[date] = None
    start_time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    guest_count: Optional[int] = Field(None, ge=BOOKING_RULES.min_party_size, le=BOOKING_RULES.max_party_size)
    special_requests: Optional[str] = Field(None, max_length=BOOKING_RULES.max_special_requests_length)

    model_config = ConfigDict(str_strip_whitespace=True)


class StatusUpdate(BaseModel):
    """Admin request to move a reservation to a new status."""

    status: ReservationStatus

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, v):
        """Accept "CONFIRMED" as well as "confirmed"."""
        if isinstance(v, str):
            return v.lower()
        return v


class AvailabilityResult(BaseModel):
    """Dry-run outcome of table assignment."""

    available: bool
    tables_needed: int = Field(..., ge=0, le=2)
    assigned_capacity: int = Field(..., ge=0)


class ReservationListQuery(BaseModel):
    """Pagination and filtering for reservation listings."""

    status: Optional[ReservationStatus] = None
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=50)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class AssignedTable(BaseModel):
    """A table linked to a reservation."""

    id: int
    label: str
    capacity: int

    model_config = ConfigDict(from_attributes=True)


class ReservationRecord(BaseModel):
    """Complete reservation record with its assigned tables."""

    id: int
    customer_id: int
    restaurant_id: int
    reservation_date: date
    start_time: time
    end_time: time
    guest_count: int
    status: ReservationStatus
    special_requests: Optional[str] = None
    tables: List[AssignedTable] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @computed_field
    @property
    def assigned_capacity(self) -> int:
        """Total seats across the assigned tables."""
        return sum(table.capacity for table in self.tables)


class Pagination(BaseModel):
    """Pagination metadata."""

    total: int
    page: int
    limit: int
    pages: int


class ReservationPage(BaseModel):
    """One page of reservations."""

    data: List[ReservationRecord]
    pagination: Pagination


class CustomerSummary(BaseModel):
    """A customer who has booked at the restaurant, as seen by its admin."""

    customer_id: int
    reservation_count: int = Field(..., ge=1)
    last_reservation_date: date
