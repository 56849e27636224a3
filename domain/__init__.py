"""Domain layer for the table booking service."""

from .enums import ReservationStatus, ACTIVE_STATUSES, TERMINAL_STATUSES
from .errors import (
    ErrorKind,
    ReservationError,
    ReservationValidationError,
    ReservationNotFoundError,
    ReservationConflictError,
    InvalidTransitionError,
    ReservationStorageError,
    ServiceResult,
)
from .models import (
    ReservationCreate,
    ReservationUpdate,
    StatusUpdate,
    AvailabilityResult,
    ReservationListQuery,
    AssignedTable,
    ReservationRecord,
    Pagination,
    ReservationPage,
    CustomerSummary,
)

__all__ = [
    # Enums
    "ReservationStatus",
    "ACTIVE_STATUSES",
    "TERMINAL_STATUSES",
    # Errors
    "ErrorKind",
    "ReservationError",
    "ReservationValidationError",
    "ReservationNotFoundError",
    "ReservationConflictError",
    "InvalidTransitionError",
    "ReservationStorageError",
    "ServiceResult",
    # Models
    "ReservationCreate",
    "ReservationUpdate",
    "StatusUpdate",
    "AvailabilityResult",
    "ReservationListQuery",
    "AssignedTable",
    "ReservationRecord",
    "Pagination",
    "ReservationPage",
    "CustomerSummary",
]
