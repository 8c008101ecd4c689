"""Domain layer for the reservation platform."""

from .enums import (
    ReservationStatus,
    ReservationType,
    RejectionReason,
)
from .models import (
    BookingRuleFields,
    RestaurantProfile,
    ReservationAreaProfile,
    ReservationRequest,
    ReservationUpdate,
    ReservationStatusUpdate,
    ReservationRecord,
    DateAvailabilityResponse,
    SlotAvailabilityResponse,
    PartySizeOption,
    PartySizeResponse,
    ValidationResponse,
)

__all__ = [
    # Enums
    "ReservationStatus",
    "ReservationType",
    "RejectionReason",
    # Models
    "BookingRuleFields",
    "RestaurantProfile",
    "ReservationAreaProfile",
    "ReservationRequest",
    "ReservationUpdate",
    "ReservationStatusUpdate",
    "ReservationRecord",
    "DateAvailabilityResponse",
    "SlotAvailabilityResponse",
    "PartySizeOption",
    "PartySizeResponse",
    "ValidationResponse",
]
