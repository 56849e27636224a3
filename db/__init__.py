"""Database layer for the table booking service."""

from .base import Base, TimestampMixin
from .models_sqlalchemy import Restaurant, DiningTable, Reservation, ReservationTable
from .session import (
    create_db_engine,
    create_session_factory,
    session_scope,
    init_db,
    drop_db,
)
from .repositories import RestaurantRepository, TableRepository, ReservationRepository
from .unit_of_work import AbstractUnitOfWork, SqlAlchemyUnitOfWork

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    # Models
    "Restaurant",
    "DiningTable",
    "Reservation",
    "ReservationTable",
    # Session
    "create_db_engine",
    "create_session_factory",
    "session_scope",
    "init_db",
    "drop_db",
    # Repositories
    "RestaurantRepository",
    "TableRepository",
    "ReservationRepository",
    "AbstractUnitOfWork",
    "SqlAlchemyUnitOfWork",
]
