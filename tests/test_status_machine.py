"""Unit tests for the reservation status state machine."""
import pytest

from domain.enums import ReservationStatus
from domain.errors import ErrorKind, InvalidTransitionError
from services.status_machine import assert_editable, assert_valid_transition, can_transition


PENDING = ReservationStatus.PENDING
CONFIRMED = ReservationStatus.CONFIRMED
CANCELLED = ReservationStatus.CANCELLED
COMPLETED = ReservationStatus.COMPLETED


@pytest.mark.unit
class TestTransitions:

    @pytest.mark.parametrize("current,target", [
        (PENDING, CONFIRMED),
        (PENDING, CANCELLED),
        (CONFIRMED, CANCELLED),
        (CONFIRMED, COMPLETED),
    ])
    def test_legal_transitions(self, current, target):
        assert can_transition(current, target)
        assert_valid_transition(current, target)

    def test_pending_cannot_complete(self):
        with pytest.raises(InvalidTransitionError) as exc_info:
            assert_valid_transition(PENDING, COMPLETED)
        assert exc_info.value.code == "invalid_transition"
        assert str(exc_info.value) == "Cannot transition from PENDING to COMPLETED"

    def test_confirmed_cannot_go_back_to_pending(self):
        with pytest.raises(InvalidTransitionError, match="from CONFIRMED to PENDING"):
            assert_valid_transition(CONFIRMED, PENDING)

    @pytest.mark.parametrize("target", list(ReservationStatus))
    def test_cancelled_is_terminal(self, target):
        with pytest.raises(InvalidTransitionError) as exc_info:
            assert_valid_transition(CANCELLED, target)
        assert exc_info.value.code == "terminal_state"
        assert exc_info.value.message == "Cannot change a cancelled reservation"
        assert exc_info.value.kind == ErrorKind.FORBIDDEN_TRANSITION

    @pytest.mark.parametrize("target", list(ReservationStatus))
    def test_completed_is_terminal(self, target):
        with pytest.raises(InvalidTransitionError, match="Cannot change a completed reservation"):
            assert_valid_transition(COMPLETED, target)

    def test_self_transition_is_illegal(self):
        assert not can_transition(PENDING, PENDING)


@pytest.mark.unit
class TestEditable:

    def test_pending_is_editable(self):
        assert_editable(PENDING)

    @pytest.mark.parametrize("status", [CONFIRMED, CANCELLED, COMPLETED])
    def test_other_statuses_are_not_editable(self, status):
        with pytest.raises(InvalidTransitionError) as exc_info:
            assert_editable(status)
        assert exc_info.value.code == "not_editable"
