"""Database layer for the reservation platform."""

from .base import Base, BookingRuleColumns, TimestampMixin
from .models_sqlalchemy import Restaurant, ReservationArea, Reservation
from .session import (
    engine,
    SessionLocal,
    get_session,
    init_db,
    drop_db,
    DatabaseConfig,
)

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    "BookingRuleColumns",
    # Models
    "Restaurant",
    "ReservationArea",
    "Reservation",
    # Session
    "engine",
    "SessionLocal",
    "get_session",
    "init_db",
    "drop_db",
    "DatabaseConfig",
]
