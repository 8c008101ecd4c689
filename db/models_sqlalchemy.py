"""SQLAlchemy models for restaurants, reservation areas and reservations."""

from datetime import date, time
from typing import List, Optional
from uuid import uuid4

from sqlalchemy import (
    Boolean,
    Date,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Time,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, BookingRuleColumns, TimestampMixin
from domain.enums import ReservationStatus, ReservationType


def _new_id() -> str:
    return str(uuid4())


class Restaurant(Base, BookingRuleColumns, TimestampMixin):
    """Restaurant table model."""

    __tablename__ = "restaurants"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    reservation_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    meal_only_reservations: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    areas: Mapped[List["ReservationArea"]] = relationship(
        back_populates="restaurant",
        order_by="ReservationArea.display_order",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Restaurant(id={self.id}, name='{self.name}')>"


class ReservationArea(Base, BookingRuleColumns, TimestampMixin):
    """Reservation area table model."""

    __tablename__ = "reservation_areas"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    restaurant_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("restaurants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    dining_only: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)

    restaurant: Mapped[Restaurant] = relationship(back_populates="areas")

    def __repr__(self) -> str:
        return f"<ReservationArea(id={self.id}, name='{self.name}', active={self.is_active})>"


class Reservation(Base, TimestampMixin):
    """Reservation table model."""

    __tablename__ = "reservations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    restaurant_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("restaurants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    area_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("reservation_areas.id", ondelete="SET NULL"),
        nullable=True,
    )
    party_size: Mapped[int] = mapped_column(Integer, nullable=False)
    reservation_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    reservation_time: Mapped[time] = mapped_column(Time, nullable=False)
    reservation_type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=ReservationType.MEAL.value,
    )
    customer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    customer_phone: Mapped[str] = mapped_column(String(50), nullable=False)
    customer_email: Mapped[str] = mapped_column(String(255), nullable=False)
    special_requests: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=ReservationStatus.PENDING.value,
        index=True,
    )

    __table_args__ = (
        Index("ix_reservations_restaurant_date", "restaurant_id", "reservation_date"),
    )

    def __repr__(self) -> str:
        return (
            f"<Reservation(id={self.id}, name='{self.customer_name}', "
            f"date={self.reservation_date}, time={self.reservation_time}, "
            f"size={self.party_size}, status='{self.status}')>"
        )
