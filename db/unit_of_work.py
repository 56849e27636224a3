"""
Unit of Work for reservation transactions.

The unit of work owns the session lifecycle and the commit/rollback decision;
repositories share its session so that availability reads, table selection and
the reservation writes land in one transaction.

Usage:
    with uow:
        restaurant = uow.restaurants.get(restaurant_id, for_update=True)
        ...
        uow.commit()
"""

from __future__ import annotations

import abc
from typing import Optional

from sqlalchemy.orm import Session, sessionmaker

from .repositories import ReservationRepository, RestaurantRepository, TableRepository


class AbstractUnitOfWork(abc.ABC):
    """Transaction boundary shared by the reservation repositories."""

    restaurants: RestaurantRepository
    tables: TableRepository
    reservations: ReservationRepository

    def __enter__(self) -> AbstractUnitOfWork:
        return self

    def __exit__(self, *args) -> None:
        # Anything not explicitly committed is discarded
        self.rollback()

    @abc.abstractmethod
    def commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """SQLAlchemy implementation of the unit of work."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory
        self.session: Optional[Session] = None

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        self.session = self.session_factory()
        self.restaurants = RestaurantRepository(self.session)
        self.tables = TableRepository(self.session)
        self.reservations = ReservationRepository(self.session)
        return super().__enter__()

    def __exit__(self, *args) -> None:
        super().__exit__(*args)
        self.session.close()
        self.session = None

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()
