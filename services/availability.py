"""Availability query: which tables are already taken for a date and time window."""

from datetime import date, time
from typing import Iterable, List, Optional, Set, Tuple

from db.unit_of_work import AbstractUnitOfWork
from services.table_selector import TableCandidate


def get_booked_table_ids(
    uow: AbstractUnitOfWork,
    restaurant_id: int,
    reservation_date: date,
    start_time: time,
    end_time: time,
    exclude_reservation_id: Optional[int] = None,
) -> Set[int]:
    """
    Tables linked to another PENDING or CONFIRMED reservation whose window overlaps.

    Must be called inside the same unit of work that writes the assignment.

    Args:
        uow: Open unit of work
        restaurant_id: Restaurant ID
        reservation_date: Calendar date
        start_time: Window start
        end_time: Window end (exclusive)
        exclude_reservation_id: Reservation being re-assigned, ignored as a conflict

    Returns:
        Set of table IDs in the conflict set
    """
    return uow.reservations.find_conflicting_table_ids(
        restaurant_id,
        reservation_date,
        start_time,
        end_time,
        exclude_reservation_id=exclude_reservation_id,
    )


def partition_tables(
    active_tables: Iterable[TableCandidate],
    booked_ids: Set[int],
) -> Tuple[List[TableCandidate], List[TableCandidate]]:
    """Split tables into (free, booked) by the conflict set."""
    free: List[TableCandidate] = []
    booked: List[TableCandidate] = []
    for table in active_tables:
        (booked if table.id in booked_ids else free).append(table)
    return free, booked


def get_free_tables(
    uow: AbstractUnitOfWork,
    restaurant_id: int,
    reservation_date: date,
    start_time: time,
    end_time: time,
    exclude_reservation_id: Optional[int] = None,
) -> List[TableCandidate]:
    """Active tables of the restaurant not in the conflict set, smallest first."""
    booked_ids = get_booked_table_ids(
        uow, restaurant_id, reservation_date, start_time, end_time, exclude_reservation_id
    )
    active = [TableCandidate.from_table(t) for t in uow.tables.list_active(restaurant_id)]
    free, _ = partition_tables(active, booked_ids)
    return free
