"""Typed errors and operation results for the reservation engine."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar


T = TypeVar("T")


class ErrorKind(str, Enum):
    """Error kinds reported to callers of the reservation service."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    FORBIDDEN_TRANSITION = "forbidden_transition"
    INTERNAL = "internal"


class ReservationError(Exception):
    """Base class for all reservation engine errors."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        self.code = code or self.kind.value
        super().__init__(message)


class ReservationValidationError(ReservationError):
    """Raised when date, time, guest count or other input is malformed or out of range."""

    kind = ErrorKind.VALIDATION


class ReservationNotFoundError(ReservationError):
    """Raised when a restaurant, table or reservation is absent or not owned by the actor."""

    kind = ErrorKind.NOT_FOUND


class ReservationConflictError(ReservationError):
    """Raised when no table or pair of tables can seat the party."""

    kind = ErrorKind.CONFLICT


class InvalidTransitionError(ReservationError):
    """Raised on an illegal status change or an edit of a non-PENDING reservation."""

    kind = ErrorKind.FORBIDDEN_TRANSITION


class ReservationStorageError(ReservationError):
    """Opaque persistence failure; the transaction was rolled back."""

    kind = ErrorKind.INTERNAL


@dataclass
class ServiceResult(Generic[T]):
    """Outcome of a service operation: either a value or a typed error."""

    success: bool
    value: Optional[T] = None
    error: Optional[ReservationError] = None

    @classmethod
    def ok(cls, value: T) -> "ServiceResult[T]":
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, error: ReservationError) -> "ServiceResult[T]":
        return cls(success=False, error=error)

    @property
    def error_kind(self) -> Optional[ErrorKind]:
        """Kind of the error, or None on success."""
        return self.error.kind if self.error else None

    def unwrap(self) -> T:
        """Return the value or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.value
