"""Pytest configuration and fixtures for reservation platform tests."""
import pytest
from datetime import datetime, time
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from core.restaurant_config import BookingRules
from db.base import Base
from db.models_sqlalchemy import Restaurant, ReservationArea
from domain.models import ReservationRequest, RestaurantProfile, ReservationAreaProfile
from services.reservation_service import ReservationService


@pytest.fixture(scope="function")
def base_time():
    """Monday 2024-01-01 at noon."""
    return datetime(2024, 1, 1, 12, 0)


@pytest.fixture(scope="function")
def evening_rules():
    """Rules matching the public booking page: 17:00-20:45 every 15 minutes."""
    return BookingRules(
        opening_time=time(17, 0),
        closing_time=time(20, 45),
        slot_duration_minutes=15,
        advance_booking_days=15,
        min_advance_hours=0,
    )


@pytest.fixture(scope="function")
def restaurant_profile():
    """Restaurant with evening hours and a 12-guest maximum."""
    return RestaurantProfile(
        id="rest-1",
        name="Felix Bistro",
        reservation_enabled=True,
        opening_time=time(17, 0),
        closing_time=time(20, 45),
        slot_duration_minutes=15,
        advance_booking_days=15,
        min_advance_hours=0,
        min_party_size=1,
        max_party_size=12,
    )


@pytest.fixture(scope="function")
def small_area_profile(restaurant_profile):
    """Area that only overrides the maximum party size."""
    return ReservationAreaProfile(
        id="area-bar",
        restaurant_id=restaurant_profile.id,
        name="Bar",
        max_party_size=4,
    )


@pytest.fixture(scope="function")
def make_request(restaurant_profile):
    """Factory fixture for reservation requests."""
    def _make(**kwargs):
        data = {
            "restaurant_id": restaurant_profile.id,
            "party_size": 2,
            "reservation_date": "2024-01-02",
            "reservation_time": "18:00",
            "customer_name": "John Doe",
            "customer_phone": "+905551234567",
            "customer_email": "john@example.com",
        }
        data.update(kwargs)
        return ReservationRequest(**data)
    return _make


@pytest.fixture(scope="function")
def db_engine():
    """Create an in-memory SQLite database engine for testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory bound to the test engine."""
    return sessionmaker(bind=db_engine, autoflush=False, expire_on_commit=False)


@pytest.fixture(scope="function")
def db_session(session_factory):
    """Create a database session for testing."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture(scope="function")
def seeded_restaurant(db_session):
    """Restaurant with a bar area, a terrace and an inactive private room."""
    restaurant = Restaurant(
        id="rest-1",
        name="Felix Bistro",
        reservation_enabled=True,
        meal_only_reservations=False,
        opening_time=time(17, 0),
        closing_time=time(20, 45),
        slot_duration_minutes=15,
        advance_booking_days=15,
        min_advance_hours=0,
        min_party_size=1,
        max_party_size=12,
        allowed_days_of_week=[1, 2, 3, 4, 5, 6, 7],
        blocked_dates=["2024-01-05"],
    )
    restaurant.areas = [
        ReservationArea(id="area-bar", name="Bar", display_order=2, max_party_size=4),
        ReservationArea(id="area-terrace", name="Sea Terrace", display_order=1, blocked_dates=[]),
        ReservationArea(id="area-private", name="Private Room", display_order=0, is_active=False),
    ]
    db_session.add(restaurant)
    db_session.commit()
    return restaurant


@pytest.fixture(scope="function")
def reservation_service(db_session, seeded_restaurant, base_time):
    """Reservation service with the clock frozen at base_time."""
    return ReservationService(db_session, clock=lambda: base_time)
