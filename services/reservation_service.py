"""
Reservation Service for assigning tables to reservations.
Handles availability checks, creation, modification, cancellation and admin status changes.

Every write runs in one unit of work: the restaurant row is locked, the conflict set
is read, tables are selected and the reservation with its table links is written
before a single commit. Any failure rolls the whole unit back.
"""
import math
from datetime import date, time
from typing import Callable, List, Optional, Tuple, TypeVar, Union

from sqlalchemy.exc import SQLAlchemyError

from core.logging import LogContext, get_logger
from core.time_window import (
    DateLike,
    TimeLike,
    get_current_date,
    normalize_date,
    slot_end_time,
    validate_booking_date,
    validate_booking_time,
    validate_guest_count,
)
from db.models_sqlalchemy import Reservation
from db.unit_of_work import AbstractUnitOfWork
from domain.enums import ReservationStatus
from domain.errors import (
    ReservationError,
    ReservationNotFoundError,
    ReservationStorageError,
    ReservationValidationError,
    ServiceResult,
)
from domain.models import (
    AvailabilityResult,
    CustomerSummary,
    Pagination,
    ReservationCreate,
    ReservationListQuery,
    ReservationPage,
    ReservationRecord,
    ReservationUpdate,
)
from services.availability import get_free_tables
from services.status_machine import assert_editable, assert_valid_transition
from services.table_selector import select_tables, find_best_single_table, find_best_table_pair


logger = get_logger(__name__)

T = TypeVar("T")


class ReservationService:
    """Service for assigning tables and managing the reservation lifecycle."""

    def __init__(
        self,
        uow_factory: Callable[[], AbstractUnitOfWork],
        clock: Callable[[], date] = get_current_date,
    ):
        """
        Initialize ReservationService.

        Args:
            uow_factory: Returns a fresh unit of work for each operation
            clock: Returns today's date for booking-date validation
        """
        self.uow_factory = uow_factory
        self.clock = clock

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _run(self, operation: str, action: Callable[[], T], **context) -> ServiceResult[T]:
        """Run an operation and turn its failure into a typed result."""
        log = LogContext(logger, operation=operation, **context)
        try:
            value = action()
        except ReservationError as error:
            log.warning(f"{operation} rejected: {error.message}", extra={"error_code": error.code})
            return ServiceResult.fail(error)
        except SQLAlchemyError:
            log.exception(f"{operation} failed in storage")
            return ServiceResult.fail(
                ReservationStorageError("Internal server error", code="storage_error")
            )
        return ServiceResult.ok(value)

    def _validate_window(
        self,
        reservation_date: DateLike,
        start_time: TimeLike,
        guests: int,
    ) -> Tuple[date, time, time, int]:
        """Validate a booking request and derive its end time."""
        start = validate_booking_time(start_time)
        booking_date = validate_booking_date(reservation_date, today=self.clock())
        guests = validate_guest_count(guests)
        end = slot_end_time(start)
        return booking_date, start, end, guests

    @staticmethod
    def _to_record(reservation: Reservation) -> ReservationRecord:
        return ReservationRecord.model_validate(reservation)

    @staticmethod
    def _page(records, total: int, query: ReservationListQuery) -> ReservationPage:
        return ReservationPage(
            data=records,
            pagination=Pagination(
                total=total,
                page=query.page,
                limit=query.limit,
                pages=math.ceil(total / query.limit),
            ),
        )

    # ------------------------------------------------------------------
    # Availability
    # ------------------------------------------------------------------

    def check_availability(
        self,
        restaurant_id: int,
        reservation_date: DateLike,
        start_time: TimeLike,
        guests: int,
    ) -> ServiceResult[AvailabilityResult]:
        """
        Dry-run table assignment without persisting anything.

        Args:
            restaurant_id: Restaurant to check
            reservation_date: Desired date
            start_time: Desired start time ("HH:MM")
            guests: Party size

        Returns:
            ServiceResult with AvailabilityResult (available, tables_needed, assigned_capacity)
        """
        def action() -> AvailabilityResult:
            booking_date, start, end, party = self._validate_window(reservation_date, start_time, guests)

            with self.uow_factory() as uow:
                if uow.restaurants.get(restaurant_id) is None:
                    raise ReservationNotFoundError("Restaurant not found", code="restaurant_not_found")
                free = get_free_tables(uow, restaurant_id, booking_date, start, end)

            single = find_best_single_table(free, party)
            if single is not None:
                return AvailabilityResult(available=True, tables_needed=1, assigned_capacity=single.capacity)

            pair = find_best_table_pair(free, party)
            if pair is not None:
                return AvailabilityResult(
                    available=True,
                    tables_needed=2,
                    assigned_capacity=pair[0].capacity + pair[1].capacity,
                )
            return AvailabilityResult(available=False, tables_needed=0, assigned_capacity=0)

        return self._run("check_availability", action, restaurant_id=restaurant_id)

    # ------------------------------------------------------------------
    # Customer operations
    # ------------------------------------------------------------------

    def create_reservation(
        self,
        customer_id: int,
        data: ReservationCreate,
    ) -> ServiceResult[ReservationRecord]:
        """
        Create a PENDING reservation with its tables assigned.

        No reservation row is written if validation or table selection fails.
        """
        def action() -> ReservationRecord:
            booking_date, start, end, party = self._validate_window(
                data.reservation_date, data.start_time, data.guest_count
            )

            with self.uow_factory() as uow:
                restaurant = uow.restaurants.get(data.restaurant_id, for_update=True)
                if restaurant is None:
                    raise ReservationNotFoundError("Restaurant not found", code="restaurant_not_found")

                free = get_free_tables(uow, restaurant.id, booking_date, start, end)
                chosen = select_tables(free, party)

                reservation = Reservation(
                    customer_id=customer_id,
                    restaurant_id=restaurant.id,
                    reservation_date=booking_date,
                    start_time=start,
                    end_time=end,
                    guest_count=party,
                    special_requests=data.special_requests,
                    status=ReservationStatus.PENDING,
                )
                uow.reservations.create_with_assignments(reservation, [t.id for t in chosen])
                record = self._to_record(reservation)
                uow.commit()

            logger.info(
                f"Created reservation {record.id} with tables {[t.label for t in record.tables]}",
                extra={"reservation_id": record.id, "restaurant_id": record.restaurant_id},
            )
            return record

        return self._run(
            "create_reservation", action,
            customer_id=customer_id, restaurant_id=data.restaurant_id,
        )

    def modify_reservation(
        self,
        customer_id: int,
        reservation_id: int,
        changes: ReservationUpdate,
    ) -> ServiceResult[ReservationRecord]:
        """
        Change date, time, party size or notes of a PENDING reservation.

        Table assignment is re-run from scratch, ignoring the reservation's own
        tables, and the whole assignment set is replaced. On failure the
        reservation is left exactly as it was.
        """
        def action() -> ReservationRecord:
            with self.uow_factory() as uow:
                reservation = uow.reservations.get_for_customer(customer_id, reservation_id, for_update=True)
                if reservation is None:
                    raise ReservationNotFoundError("Reservation not found", code="reservation_not_found")
                assert_editable(reservation.status)

                uow.restaurants.get(reservation.restaurant_id, for_update=True)

                booking_date, start, end, party = self._validate_window(
                    changes.reservation_date or reservation.reservation_date,
                    changes.start_time or reservation.start_time,
                    changes.guest_count if changes.guest_count is not None else reservation.guest_count,
                )

                free = get_free_tables(
                    uow, reservation.restaurant_id, booking_date, start, end,
                    exclude_reservation_id=reservation.id,
                )
                chosen = select_tables(free, party)

                fields = {
                    "reservation_date": booking_date,
                    "start_time": start,
                    "end_time": end,
                    "guest_count": party,
                }
                if "special_requests" in changes.model_fields_set:
                    fields["special_requests"] = changes.special_requests

                uow.reservations.replace_assignments(reservation, [t.id for t in chosen], **fields)
                record = self._to_record(reservation)
                uow.commit()

            logger.info(
                f"Modified reservation {record.id}, tables now {[t.label for t in record.tables]}",
                extra={"reservation_id": record.id},
            )
            return record

        return self._run(
            "modify_reservation", action,
            customer_id=customer_id, reservation_id=reservation_id,
        )

    def cancel_reservation(self, customer_id: int, reservation_id: int) -> ServiceResult[ReservationRecord]:
        """Cancel a customer's reservation. Its tables become free for later queries."""
        def action() -> ReservationRecord:
            with self.uow_factory() as uow:
                reservation = uow.reservations.get_for_customer(customer_id, reservation_id, for_update=True)
                if reservation is None:
                    raise ReservationNotFoundError("Reservation not found", code="reservation_not_found")

                assert_valid_transition(reservation.status, ReservationStatus.CANCELLED)
                uow.reservations.update_status(reservation, ReservationStatus.CANCELLED)
                record = self._to_record(reservation)
                uow.commit()

            logger.info(f"Cancelled reservation {record.id}", extra={"reservation_id": record.id})
            return record

        return self._run(
            "cancel_reservation", action,
            customer_id=customer_id, reservation_id=reservation_id,
        )

    def get_reservation(self, customer_id: int, reservation_id: int) -> ServiceResult[ReservationRecord]:
        """Get one of the customer's reservations."""
        def action() -> ReservationRecord:
            with self.uow_factory() as uow:
                reservation = uow.reservations.get_for_customer(customer_id, reservation_id)
                if reservation is None:
                    raise ReservationNotFoundError("Reservation not found", code="reservation_not_found")
                return self._to_record(reservation)

        return self._run("get_reservation", action, customer_id=customer_id, reservation_id=reservation_id)

    def list_customer_reservations(
        self,
        customer_id: int,
        query: Optional[ReservationListQuery] = None,
    ) -> ServiceResult[ReservationPage]:
        """List the customer's reservations, newest first."""
        query = query or ReservationListQuery()

        def action() -> ReservationPage:
            with self.uow_factory() as uow:
                reservations, total = uow.reservations.list_for_customer(
                    customer_id, status=query.status, offset=query.offset, limit=query.limit
                )
                records = [self._to_record(r) for r in reservations]
            return self._page(records, total, query)

        return self._run("list_customer_reservations", action, customer_id=customer_id)

    # ------------------------------------------------------------------
    # Admin operations
    # ------------------------------------------------------------------

    def change_status(
        self,
        admin_id: int,
        reservation_id: int,
        new_status: Union[ReservationStatus, str],
    ) -> ServiceResult[ReservationRecord]:
        """Move a reservation of the admin's restaurant along the status state machine."""
        def action() -> ReservationRecord:
            target = _coerce_status(new_status)

            with self.uow_factory() as uow:
                restaurant = uow.restaurants.get_by_admin(admin_id)
                if restaurant is None:
                    raise ReservationNotFoundError("Restaurant not found", code="restaurant_not_found")

                reservation = uow.reservations.get_for_restaurant(restaurant.id, reservation_id, for_update=True)
                if reservation is None:
                    raise ReservationNotFoundError("Reservation not found", code="reservation_not_found")

                previous = reservation.status
                assert_valid_transition(previous, target)
                uow.reservations.update_status(reservation, target)
                record = self._to_record(reservation)
                uow.commit()

            logger.info(
                f"Reservation {record.id} moved from {previous.name} to {target.name}",
                extra={"reservation_id": record.id, "admin_id": admin_id},
            )
            return record

        return self._run("change_status", action, admin_id=admin_id, reservation_id=reservation_id)

    def list_restaurant_reservations(
        self,
        admin_id: int,
        query: Optional[ReservationListQuery] = None,
        reservation_date: Optional[DateLike] = None,
    ) -> ServiceResult[ReservationPage]:
        """List reservations of the admin's restaurant, optionally for one date."""
        query = query or ReservationListQuery()

        def action() -> ReservationPage:
            day = normalize_date(reservation_date) if reservation_date is not None else None
            with self.uow_factory() as uow:
                restaurant = uow.restaurants.get_by_admin(admin_id)
                if restaurant is None:
                    raise ReservationNotFoundError("Restaurant not found", code="restaurant_not_found")
                reservations, total = uow.reservations.list_for_restaurant(
                    restaurant.id,
                    status=query.status,
                    reservation_date=day,
                    offset=query.offset,
                    limit=query.limit,
                )
                records = [self._to_record(r) for r in reservations]
            return self._page(records, total, query)

        return self._run("list_restaurant_reservations", action, admin_id=admin_id)

    def list_restaurant_customers(self, admin_id: int) -> ServiceResult[List[CustomerSummary]]:
        """
        List customers who have booked at the admin's restaurant.

        Every reservation counts, whatever its status.
        """
        def action() -> List[CustomerSummary]:
            with self.uow_factory() as uow:
                restaurant = uow.restaurants.get_by_admin(admin_id)
                if restaurant is None:
                    raise ReservationNotFoundError("Restaurant not found", code="restaurant_not_found")
                rows = uow.reservations.list_customers_for_restaurant(restaurant.id)

            return [
                CustomerSummary(
                    customer_id=customer_id,
                    reservation_count=count,
                    last_reservation_date=normalize_date(last_date),
                )
                for customer_id, count, last_date in rows
            ]

        return self._run("list_restaurant_customers", action, admin_id=admin_id)


def _coerce_status(value: Union[ReservationStatus, str]) -> ReservationStatus:
    if isinstance(value, ReservationStatus):
        return value
    try:
        return ReservationStatus(str(value).lower())
    except ValueError:
        raise ReservationValidationError(f"Unknown status: {value}", code="invalid_status") from None
