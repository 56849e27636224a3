"""Concurrent bookings against a file-backed SQLite database."""
import threading

import pytest

from db.models_sqlalchemy import DiningTable, Restaurant
from db.session import create_db_engine, create_session_factory, init_db, session_scope
from db.unit_of_work import SqlAlchemyUnitOfWork
from domain.errors import ErrorKind
from domain.models import ReservationCreate
from services.reservation_service import ReservationService


@pytest.fixture
def file_session_factory(tmp_path, settings):
    engine = create_db_engine(url=f"sqlite:///{tmp_path / 'bookings.db'}", settings=settings)
    init_db(engine)
    yield create_session_factory(engine)
    engine.dispose()


@pytest.fixture
def single_table_restaurant(file_session_factory):
    with session_scope(file_session_factory) as session:
        restaurant = Restaurant(admin_id=1, name="Tiny Bistro", grid_rows=1, grid_cols=1)
        session.add(restaurant)
        session.flush()
        session.add(DiningTable(restaurant_id=restaurant.id, label="T1", capacity=2, grid_row=0, grid_col=0))
        restaurant_id = restaurant.id
    return restaurant_id


def run_concurrently(*calls):
    """Start every call at the same moment and collect their results in order."""
    barrier = threading.Barrier(len(calls))
    results = [None] * len(calls)

    def worker(index, call):
        barrier.wait()
        results[index] = call()

    threads = [threading.Thread(target=worker, args=(i, c)) for i, c in enumerate(calls)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=30)
    return results


@pytest.mark.integration
class TestConcurrentBookings:

    def test_only_one_booking_wins_the_last_table(
        self, file_session_factory, single_table_restaurant, today, booking_date
    ):
        service = ReservationService(lambda: SqlAlchemyUnitOfWork(file_session_factory), clock=lambda: today)
        request = ReservationCreate(
            restaurant_id=single_table_restaurant,
            reservation_date=booking_date,
            start_time="19:00",
            guest_count=2,
        )

        results = run_concurrently(
            lambda: service.create_reservation(10, request),
            lambda: service.create_reservation(11, request),
        )

        assert sorted(r.success for r in results) == [False, True]
        loser = next(r for r in results if not r.success)
        assert loser.error_kind == ErrorKind.CONFLICT

        page = service.list_restaurant_reservations(1).value
        assert page.pagination.total == 1

    def test_non_overlapping_bookings_both_succeed(
        self, file_session_factory, single_table_restaurant, today, booking_date
    ):
        service = ReservationService(lambda: SqlAlchemyUnitOfWork(file_session_factory), clock=lambda: today)

        def book(customer_id, start):
            return service.create_reservation(
                customer_id,
                ReservationCreate(
                    restaurant_id=single_table_restaurant,
                    reservation_date=booking_date,
                    start_time=start,
                    guest_count=2,
                ),
            )

        results = run_concurrently(lambda: book(10, "12:00"), lambda: book(11, "19:00"))

        assert all(r.success for r in results)
