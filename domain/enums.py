"""Domain enums for the reservation platform."""

from enum import Enum


class ReservationStatus(str, Enum):
    """Reservation status enumeration."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class ReservationType(str, Enum):
    """What the guest is booking for."""

    MEAL = "meal"
    DRINKS = "drinks"


class RejectionReason(str, Enum):
    """Why a reservation request was turned down."""

    RESTAURANT_CLOSED = "restaurant_closed"
    INVALID_AREA = "invalid_area"
    PARTY_SIZE_OUT_OF_RANGE = "party_size_out_of_range"
    DATE_NOT_AVAILABLE = "date_not_available"
    TIME_NOT_AVAILABLE = "time_not_available"
    DINING_ONLY_AREA = "dining_only_area"
