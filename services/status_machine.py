"""Reservation status state machine."""

from typing import Dict, FrozenSet

from domain.enums import ReservationStatus
from domain.errors import InvalidTransitionError


VALID_TRANSITIONS: Dict[ReservationStatus, FrozenSet[ReservationStatus]] = {
    ReservationStatus.PENDING: frozenset({ReservationStatus.CONFIRMED, ReservationStatus.CANCELLED}),
    ReservationStatus.CONFIRMED: frozenset({ReservationStatus.CANCELLED, ReservationStatus.COMPLETED}),
    ReservationStatus.CANCELLED: frozenset(),  # Final state
    ReservationStatus.COMPLETED: frozenset(),  # Final state
}


def can_transition(current: ReservationStatus, target: ReservationStatus) -> bool:
    """Check whether `current` may move to `target`."""
    return target in VALID_TRANSITIONS[current]


def assert_valid_transition(current: ReservationStatus, target: ReservationStatus) -> None:
    """
    Raise unless `current` may move to `target`.

    Raises:
        InvalidTransitionError: code "terminal_state" when the reservation is already
            cancelled or completed, "invalid_transition" for any other illegal move
    """
    if can_transition(current, target):
        return

    if current.is_terminal:
        raise InvalidTransitionError(
            f"Cannot change a {current.value} reservation",
            code="terminal_state",
        )
    raise InvalidTransitionError(
        f"Cannot transition from {current.name} to {target.name}",
        code="invalid_transition",
    )


def assert_editable(current: ReservationStatus) -> None:
    """Only PENDING reservations may have their date, time or party size changed."""
    if current is not ReservationStatus.PENDING:
        raise InvalidTransitionError(
            "Only PENDING reservations can be modified",
            code="not_editable",
        )
