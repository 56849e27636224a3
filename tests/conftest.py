"""Pytest configuration and fixtures for table booking tests."""
import pytest
from datetime import date, timedelta

from core.config import Settings
from db.models_sqlalchemy import DiningTable, Restaurant
from db.session import create_db_engine, create_session_factory, init_db, session_scope
from db.unit_of_work import SqlAlchemyUnitOfWork
from domain.models import ReservationCreate
from services.reservation_service import ReservationService


TODAY = date(2026, 3, 2)


@pytest.fixture(scope="function")
def settings():
    """Settings for an in-memory SQLite database."""
    return Settings(database_url="sqlite://", app_env="development")


@pytest.fixture(scope="function")
def db_engine(settings):
    """Create an in-memory SQLite database engine for testing."""
    engine = create_db_engine(settings=settings)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    return create_session_factory(db_engine)


@pytest.fixture(scope="function")
def today():
    """Fixed 'today' used by the service clock."""
    return TODAY


@pytest.fixture(scope="function")
def booking_date(today):
    """A valid booking date."""
    return today + timedelta(days=1)


@pytest.fixture(scope="function")
def reservation_service(session_factory, today):
    """Create a reservation service instance with a fixed clock."""
    return ReservationService(lambda: SqlAlchemyUnitOfWork(session_factory), clock=lambda: today)


@pytest.fixture(scope="function")
def make_restaurant(session_factory):
    """
    Factory fixture to create a restaurant with tables.

    Usage:
        restaurant_id, tables = make_restaurant({"T1": 2, "T2": 4})
        tables["T1"]  # table id
    """
    counter = {"admin": 100}

    def _make(capacities, admin_id=None, inactive=()):
        if admin_id is None:
            counter["admin"] += 1
            admin_id = counter["admin"]
        with session_scope(session_factory) as session:
            restaurant = Restaurant(admin_id=admin_id, name=f"Restaurant {admin_id}", grid_rows=5, grid_cols=5)
            session.add(restaurant)
            session.flush()
            tables = {}
            for index, (label, capacity) in enumerate(capacities.items()):
                table = DiningTable(
                    restaurant_id=restaurant.id,
                    label=label,
                    capacity=capacity,
                    grid_row=index // 5,
                    grid_col=index % 5,
                    is_active=label not in inactive,
                )
                session.add(table)
                session.flush()
                tables[label] = table.id
            restaurant_id = restaurant.id
        return restaurant_id, tables

    return _make


@pytest.fixture(scope="function")
def standard_restaurant(make_restaurant):
    """Restaurant (admin 1) with T1 cap2, T2 cap2, T3 cap4, T4 cap6."""
    return make_restaurant({"T1": 2, "T2": 2, "T3": 4, "T4": 6}, admin_id=1)


@pytest.fixture(scope="function")
def create_sample_reservation(reservation_service, standard_restaurant, booking_date):
    """Factory fixture to create a reservation in the standard restaurant."""
    restaurant_id, _ = standard_restaurant

    def _create(customer_id=10, **kwargs):
        data = {
            "restaurant_id": restaurant_id,
            "reservation_date": booking_date,
            "start_time": "19:00",
            "guest_count": 2,
        }
        data.update(kwargs)
        return reservation_service.create_reservation(customer_id, ReservationCreate(**data))

    return _create
