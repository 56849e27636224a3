"""SQLAlchemy models for the table booking database tables."""

from datetime import date, time
from typing import List, Optional

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    Enum as SAEnum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Time,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin
from domain.enums import ReservationStatus


class Restaurant(Base, TimestampMixin):
    """Restaurant table model. One restaurant per admin owner."""

    __tablename__ = "restaurants"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    admin_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        unique=True,
    )

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )

    address: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )

    grid_rows: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    grid_cols: Mapped[int] = mapped_column(Integer, nullable=False, default=10)

    tables: Mapped[List["DiningTable"]] = relationship(
        back_populates="restaurant",
        order_by="DiningTable.id",
    )

    __table_args__ = (
        CheckConstraint("grid_rows > 0 AND grid_cols > 0", name="grid_positive"),
    )

    def __repr__(self) -> str:
        """String representation of Restaurant."""
        return f"<Restaurant(id={self.id}, name='{self.name}', admin_id={self.admin_id})>"


class DiningTable(Base, TimestampMixin):
    """Physical table placed on the restaurant's floor grid."""

    __tablename__ = "tables"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    restaurant_id: Mapped[int] = mapped_column(
        ForeignKey("restaurants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    label: Mapped[str] = mapped_column(String(50), nullable=False)

    capacity: Mapped[int] = mapped_column(Integer, nullable=False)

    grid_row: Mapped[int] = mapped_column(Integer, nullable=False)
    grid_col: Mapped[int] = mapped_column(Integer, nullable=False)

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
    )

    restaurant: Mapped[Restaurant] = relationship(back_populates="tables")

    __table_args__ = (
        UniqueConstraint("restaurant_id", "label"),
        UniqueConstraint("restaurant_id", "grid_row", "grid_col"),
        CheckConstraint("capacity IN (2, 4, 6)", name="capacity_allowed"),
        CheckConstraint("grid_row >= 0 AND grid_col >= 0", name="grid_position"),
        Index("ix_tables_restaurant_active_capacity", "restaurant_id", "is_active", "capacity"),
    )

    def __repr__(self) -> str:
        """String representation of DiningTable."""
        return (
            f"<DiningTable(id={self.id}, label='{self.label}', "
            f"capacity={self.capacity}, active={self.is_active})>"
        )


class Reservation(Base, TimestampMixin):
    """Reservation table model."""

    __tablename__ = "reservations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    customer_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
    )

    restaurant_id: Mapped[int] = mapped_column(
        ForeignKey("restaurants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    reservation_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
    )

    start_time: Mapped[time] = mapped_column(Time, nullable=False)

    end_time: Mapped[time] = mapped_column(Time, nullable=False)

    guest_count: Mapped[int] = mapped_column(Integer, nullable=False)

    status: Mapped[ReservationStatus] = mapped_column(
        SAEnum(
            ReservationStatus,
            native_enum=False,
            length=20,
            values_callable=lambda enum: [member.value for member in enum],
            validate_strings=True,
            create_constraint=True,
            name="status",
        ),
        nullable=False,
        default=ReservationStatus.PENDING,
    )

    special_requests: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    table_links: Mapped[List["ReservationTable"]] = relationship(
        back_populates="reservation",
        cascade="all, delete-orphan",
        order_by="ReservationTable.id",
    )

    __table_args__ = (
        CheckConstraint("guest_count BETWEEN 1 AND 12", name="guest_count_range"),
        CheckConstraint("end_time > start_time", name="window_order"),
        Index("ix_reservations_restaurant_date_status", "restaurant_id", "reservation_date", "status"),
        Index("ix_reservations_customer_date", "customer_id", "reservation_date"),
    )

    @property
    def tables(self) -> List["DiningTable"]:
        """Assigned tables in assignment order."""
        return [link.table for link in self.table_links]

    def __repr__(self) -> str:
        """String representation of Reservation."""
        return (
            f"<Reservation(id={self.id}, restaurant_id={self.restaurant_id}, "
            f"date={self.reservation_date}, start={self.start_time}, "
            f"guests={self.guest_count}, status='{self.status.value}')>"
        )


class ReservationTable(Base):
    """Junction between a reservation and one of its assigned tables."""

    __tablename__ = "reservation_tables"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    reservation_id: Mapped[int] = mapped_column(
        ForeignKey("reservations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    table_id: Mapped[int] = mapped_column(
        ForeignKey("tables.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    reservation: Mapped[Reservation] = relationship(back_populates="table_links")
    table: Mapped[DiningTable] = relationship(lazy="joined")

    __table_args__ = (
        UniqueConstraint("reservation_id", "table_id"),
    )

    def __repr__(self) -> str:
        return f"<ReservationTable(reservation_id={self.reservation_id}, table_id={self.table_id})>"
