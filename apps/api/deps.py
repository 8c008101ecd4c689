"""FastAPI dependencies."""

from datetime import datetime
from typing import Callable

from fastapi import Depends
from sqlalchemy.orm import Session

from core.utils_datetime import get_current_datetime
from db.session import get_session
from services.reservation_service import ReservationService


def get_clock() -> Callable[[], datetime]:
    """Clock used for availability; overridden in tests."""
    return get_current_datetime


def get_reservation_service(
    db: Session = Depends(get_session),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> ReservationService:
    """Build a reservation service bound to the request's session."""
    return ReservationService(db, clock=clock)
