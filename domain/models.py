"""Domain models using Pydantic v2 for the reservation platform."""

from datetime import date, time, datetime
from typing import List, Optional

from pydantic import BaseModel, Field, ConfigDict, field_validator

from .enums import ReservationStatus, ReservationType, RejectionReason


EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"


class BookingRuleFields(BaseModel):
    """Booking rule columns shared by restaurants and areas. None means unset."""

    opening_time: Optional[time] = None
    closing_time: Optional[time] = None
    slot_duration_minutes: Optional[int] = None
    advance_booking_days: Optional[int] = None
    min_advance_hours: Optional[float] = None
    min_party_size: Optional[int] = None
    max_party_size: Optional[int] = None
    allowed_days_of_week: Optional[List[int]] = None
    blocked_dates: Optional[List[date]] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("allowed_days_of_week")
    @classmethod
    def validate_weekdays(cls, v: Optional[List[int]]) -> Optional[List[int]]:
        """Weekday codes use 1=Monday..7=Sunday."""
        if v is None:
            return v
        invalid = [day for day in v if day < 1 or day > 7]
        if invalid:
            raise ValueError(f"allowed_days_of_week must be within 1..7 (got {invalid})")
        return sorted(set(v))


class RestaurantProfile(BookingRuleFields):
    """Restaurant record as seen by the availability engine."""

    id: str
    name: str
    reservation_enabled: bool = True
    meal_only_reservations: bool = False


class ReservationAreaProfile(BookingRuleFields):
    """Reservation area record; rule fields left as None inherit from the restaurant."""

    id: str
    restaurant_id: str
    name: str
    description: Optional[str] = None
    is_active: bool = True
    display_order: int = 0
    dining_only: Optional[bool] = None


class ReservationRequest(BaseModel):
    """Reservation submitted by the public booking flow."""

    restaurant_id: str = Field(..., min_length=1)
    area_id: Optional[str] = None
    party_size: int = Field(..., ge=1, description="Number of guests")
    reservation_date: date = Field(..., description="Reservation date")
    reservation_time: time = Field(..., description="Reservation start time")
    reservation_type: ReservationType = ReservationType.MEAL
    customer_name: str = Field(..., min_length=1, max_length=255, description="Guest name")
    customer_phone: str = Field(..., min_length=1, max_length=50, description="Guest phone")
    customer_email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN, description="Guest email")
    special_requests: Optional[str] = Field(None, max_length=1000)

    model_config = ConfigDict(
        str_strip_whitespace=True,
        from_attributes=True,
    )


class ReservationUpdate(BaseModel):
    """Fields the management dashboard may change on a reservation."""

    area_id: Optional[str] = None
    party_size: Optional[int] = Field(None, ge=1)
    reservation_date: Optional[date] = None
    reservation_time: Optional[time] = None
    reservation_type: Optional[ReservationType] = None
    customer_name: Optional[str] = Field(None, min_length=1, max_length=255)
    customer_phone: Optional[str] = Field(None, min_length=1, max_length=50)
    customer_email: Optional[str] = Field(None, max_length=255, pattern=EMAIL_PATTERN)
    special_requests: Optional[str] = Field(None, max_length=1000)

    model_config = ConfigDict(str_strip_whitespace=True)


class ReservationStatusUpdate(BaseModel):
    """Status change requested by the management dashboard."""

    status: ReservationStatus


class ReservationRecord(ReservationRequest):
    """Complete reservation record from database."""

    id: int
    status: ReservationStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class DateAvailabilityResponse(BaseModel):
    """Bookable dates for a restaurant or area."""

    restaurant_id: str
    area_id: Optional[str] = None
    dates: List[date]


class SlotAvailabilityResponse(BaseModel):
    """Bookable time slots for one date."""

    restaurant_id: str
    area_id: Optional[str] = None
    reservation_date: date
    slots: List[str]


class PartySizeOption(BaseModel):
    """One entry of the party size picker."""

    value: int
    label: str


class PartySizeResponse(BaseModel):
    """Party size picker and reservation types on offer."""

    restaurant_id: str
    area_id: Optional[str] = None
    options: List[PartySizeOption]
    reservation_types: List[ReservationType]


class ValidationResponse(BaseModel):
    """Outcome of a server-side reservation check."""

    valid: bool
    reason: Optional[RejectionReason] = None
    message: Optional[str] = None
