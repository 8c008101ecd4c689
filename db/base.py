"""Declarative base and shared column mixins for restaurant and area tables."""

from datetime import datetime, time
from typing import List, Optional

from sqlalchemy import JSON, Float, Integer, MetaData, Time
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func


# Naming convention for constraints
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


class TimestampMixin:
    """created_at/updated_at maintained by the database."""

    created_at: Mapped[datetime] = mapped_column(server_default=func.now(), nullable=False)
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        server_default=func.now(),
        onupdate=func.now(),
        nullable=True,
    )


class BookingRuleColumns:
    """
    Booking rule columns shared by restaurants and areas.

    NULL means unset: an area inherits the restaurant value, and a restaurant
    falls back to the system default.
    """

    opening_time: Mapped[Optional[time]] = mapped_column(Time, nullable=True)
    closing_time: Mapped[Optional[time]] = mapped_column(Time, nullable=True)
    slot_duration_minutes: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    advance_booking_days: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    min_advance_hours: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    min_party_size: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    max_party_size: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    # 1=Monday..7=Sunday
    allowed_days_of_week: Mapped[Optional[List[int]]] = mapped_column(JSON, nullable=True)
    # ISO YYYY-MM-DD strings
    blocked_dates: Mapped[Optional[List[str]]] = mapped_column(JSON, nullable=True)
