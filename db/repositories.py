"""Repositories over a SQLAlchemy session for restaurants, tables and reservations."""

from datetime import date, time
from typing import Iterable, List, Optional, Set, Tuple

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from domain.enums import ACTIVE_STATUSES, ReservationStatus
from .models_sqlalchemy import DiningTable, Reservation, ReservationTable, Restaurant


class RestaurantRepository:
    """Restaurant lookups."""

    def __init__(self, session: Session):
        self.session = session

    def get(self, restaurant_id: int, for_update: bool = False) -> Optional[Restaurant]:
        """
        Get a restaurant by ID.

        Args:
            restaurant_id: Restaurant ID
            for_update: Lock the row until the transaction ends

        Returns:
            Restaurant or None if not found
        """
        stmt = select(Restaurant).where(Restaurant.id == restaurant_id)
        if for_update:
            stmt = stmt.with_for_update()
        return self.session.scalars(stmt).first()

    def get_by_admin(self, admin_id: int, for_update: bool = False) -> Optional[Restaurant]:
        """Get the restaurant owned by an admin."""
        stmt = select(Restaurant).where(Restaurant.admin_id == admin_id)
        if for_update:
            stmt = stmt.with_for_update()
        return self.session.scalars(stmt).first()


class TableRepository:
    """Table lookups scoped to a restaurant."""

    def __init__(self, session: Session):
        self.session = session

    def list_active(self, restaurant_id: int, min_capacity: Optional[int] = None) -> List[DiningTable]:
        """
        List active tables ordered by capacity ascending, then ID.

        Args:
            restaurant_id: Restaurant ID
            min_capacity: Only return tables seating at least this many guests

        Returns:
            List of DiningTable objects
        """
        stmt = select(DiningTable).where(
            DiningTable.restaurant_id == restaurant_id,
            DiningTable.is_active.is_(True),
        )
        if min_capacity is not None:
            stmt = stmt.where(DiningTable.capacity >= min_capacity)
        stmt = stmt.order_by(DiningTable.capacity, DiningTable.id)
        return list(self.session.scalars(stmt).all())

    def list_all(self, restaurant_id: int) -> List[DiningTable]:
        """List every table of a restaurant, inactive ones included, in floor-grid order."""
        stmt = (
            select(DiningTable)
            .where(DiningTable.restaurant_id == restaurant_id)
            .order_by(DiningTable.grid_row, DiningTable.grid_col)
        )
        return list(self.session.scalars(stmt).all())

    def get(self, restaurant_id: int, table_id: int) -> Optional[DiningTable]:
        stmt = select(DiningTable).where(
            DiningTable.id == table_id,
            DiningTable.restaurant_id == restaurant_id,
        )
        return self.session.scalars(stmt).first()


class ReservationRepository:
    """Reservation and table-assignment persistence."""

    def __init__(self, session: Session):
        self.session = session

    def find_conflicting_table_ids(
        self,
        restaurant_id: int,
        reservation_date: date,
        start_time: time,
        end_time: time,
        exclude_reservation_id: Optional[int] = None,
    ) -> Set[int]:
        """
        Find tables held by active reservations overlapping [start_time, end_time).

        Overlap condition: existing_start < new_end AND existing_end > new_start.
        """
        stmt = (
            select(ReservationTable.table_id)
            .join(Reservation, Reservation.id == ReservationTable.reservation_id)
            .where(
                Reservation.restaurant_id == restaurant_id,
                Reservation.reservation_date == reservation_date,
                Reservation.status.in_(list(ACTIVE_STATUSES)),
                Reservation.start_time < end_time,
                Reservation.end_time > start_time,
            )
        )
        if exclude_reservation_id is not None:
            stmt = stmt.where(Reservation.id != exclude_reservation_id)
        return set(self.session.scalars(stmt).all())

    def create_with_assignments(self, reservation: Reservation, table_ids: Iterable[int]) -> Reservation:
        """Insert a reservation together with its table links."""
        reservation.table_links = [ReservationTable(table_id=table_id) for table_id in table_ids]
        self.session.add(reservation)
        self.session.flush()
        self.session.refresh(reservation)
        return reservation

    def replace_assignments(
        self,
        reservation: Reservation,
        table_ids: Iterable[int],
        **fields,
    ) -> Reservation:
        """
        Replace a reservation's core fields and its whole table assignment set.

        Old links are deleted before the new ones are inserted.
        """
        self.session.execute(
            delete(ReservationTable).where(ReservationTable.reservation_id == reservation.id)
        )
        self.session.expire(reservation, ["table_links"])

        for key, value in fields.items():
            setattr(reservation, key, value)
        for table_id in table_ids:
            self.session.add(ReservationTable(reservation_id=reservation.id, table_id=table_id))

        self.session.flush()
        self.session.refresh(reservation)
        return reservation

    def update_status(self, reservation: Reservation, status: ReservationStatus) -> Reservation:
        """Set a new status. Table links are left untouched."""
        reservation.status = status
        self.session.flush()
        self.session.refresh(reservation)
        return reservation

    def get_for_customer(
        self,
        customer_id: int,
        reservation_id: int,
        for_update: bool = False,
    ) -> Optional[Reservation]:
        """Get a reservation owned by a customer."""
        stmt = select(Reservation).where(
            Reservation.id == reservation_id,
            Reservation.customer_id == customer_id,
        )
        if for_update:
            stmt = stmt.with_for_update()
        return self.session.scalars(stmt).first()

    def get_for_restaurant(
        self,
        restaurant_id: int,
        reservation_id: int,
        for_update: bool = False,
    ) -> Optional[Reservation]:
        """Get a reservation belonging to a restaurant."""
        stmt = select(Reservation).where(
            Reservation.id == reservation_id,
            Reservation.restaurant_id == restaurant_id,
        )
        if for_update:
            stmt = stmt.with_for_update()
        return self.session.scalars(stmt).first()

    def list_for_customer(
        self,
        customer_id: int,
        status: Optional[ReservationStatus] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Reservation], int]:
        """List a customer's reservations, newest first, with the total count."""
        filters = [Reservation.customer_id == customer_id]
        if status is not None:
            filters.append(Reservation.status == status)

        stmt = (
            select(Reservation)
            .where(*filters)
            .order_by(Reservation.reservation_date.desc(), Reservation.start_time.desc())
            .offset(offset)
            .limit(limit)
        )
        total = self.session.scalar(select(func.count()).select_from(Reservation).where(*filters))
        return list(self.session.scalars(stmt).all()), total or 0

    def list_for_restaurant(
        self,
        restaurant_id: int,
        status: Optional[ReservationStatus] = None,
        reservation_date: Optional[date] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Reservation], int]:
        """List a restaurant's reservations by date descending, then start time."""
        filters = [Reservation.restaurant_id == restaurant_id]
        if status is not None:
            filters.append(Reservation.status == status)
        if reservation_date is not None:
            filters.append(Reservation.reservation_date == reservation_date)

        stmt = (
            select(Reservation)
            .where(*filters)
            .order_by(Reservation.reservation_date.desc(), Reservation.start_time.asc())
            .offset(offset)
            .limit(limit)
        )
        total = self.session.scalar(select(func.count()).select_from(Reservation).where(*filters))
        return list(self.session.scalars(stmt).all()), total or 0

    def list_customers_for_restaurant(self, restaurant_id: int) -> List[Tuple[int, int, date]]:
        """
        Customers who booked at a restaurant.

        Returns:
            (customer_id, reservation_count, last_reservation_date) rows ordered by customer ID
        """
        stmt = (
            select(
                Reservation.customer_id,
                func.count(Reservation.id),
                func.max(Reservation.reservation_date),
            )
            .where(Reservation.restaurant_id == restaurant_id)
            .group_by(Reservation.customer_id)
            .order_by(Reservation.customer_id)
        )
        return [tuple(row) for row in self.session.execute(stmt).all()]
