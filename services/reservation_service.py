"""
Reservation service for the public booking flow and the management dashboard.

Reads restaurants and areas from the database, serves availability for the
booking form, and validates every create or edit against the effective
booking rules before writing it.
"""
import logging
from datetime import date, datetime
from typing import Callable, List, Optional, Tuple

from sqlalchemy.orm import Session

from core.restaurant_config import BookingRules, resolve_booking_rules
from core.utils_datetime import format_time_of_day, get_current_datetime
from db.models_sqlalchemy import Reservation, ReservationArea, Restaurant
from domain.enums import ReservationStatus, ReservationType
from domain.models import (
    PartySizeOption,
    ReservationAreaProfile,
    ReservationRecord,
    ReservationRequest,
    ReservationUpdate,
    RestaurantProfile,
)
from services.availability import generate_dates, generate_slots
from services.party_size import generate_party_size_options, party_size_label
from services.reservation_validation import (
    ValidationResult,
    allowed_reservation_types,
    validate_reservation,
)


logger = logging.getLogger(__name__)

# Reservation fields an edit may set to null
NULLABLE_UPDATE_FIELDS = ("area_id", "special_requests")


class RestaurantNotFoundError(Exception):
    """Raised when a restaurant is not found."""
    pass


class ReservationNotFoundError(Exception):
    """Raised when a reservation is not found."""
    pass


class ReservationRejectedError(Exception):
    """Raised when a reservation fails validation and is not written."""

    def __init__(self, result: ValidationResult):
        super().__init__(result.message)
        self.result = result


class ReservationService:
    """Service for restaurant availability and reservations."""

    def __init__(self, db_session: Session, clock: Callable[[], datetime] = get_current_datetime):
        """
        Initialize the reservation service.

        Args:
            db_session: SQLAlchemy database session
            clock: Callable returning the current wall-clock datetime
        """
        self.db = db_session
        self.clock = clock

    # ------------------------------------------------------------------
    # Restaurants and areas
    # ------------------------------------------------------------------

    def get_restaurant(self, restaurant_id: str) -> RestaurantProfile:
        """
        Get a restaurant by ID.

        Raises:
            RestaurantNotFoundError: If restaurant not found
        """
        restaurant = self.db.get(Restaurant, restaurant_id)
        if restaurant is None:
            raise RestaurantNotFoundError(f"Restaurant {restaurant_id} not found")
        return RestaurantProfile.model_validate(restaurant)

    def get_area(self, area_id: str) -> Optional[ReservationAreaProfile]:
        """Get a reservation area by ID, or None if it does not exist."""
        area = self.db.get(ReservationArea, area_id)
        if area is None:
            return None
        return ReservationAreaProfile.model_validate(area)

    def list_active_areas(self, restaurant_id: str) -> List[ReservationAreaProfile]:
        """
        List the active reservation areas of a restaurant in display order.

        Raises:
            RestaurantNotFoundError: If restaurant not found
        """
        self.get_restaurant(restaurant_id)
        areas = (
            self.db.query(ReservationArea)
            .filter(
                ReservationArea.restaurant_id == restaurant_id,
                ReservationArea.is_active.is_(True),
            )
            .order_by(ReservationArea.display_order, ReservationArea.name)
            .all()
        )
        return [ReservationAreaProfile.model_validate(area) for area in areas]

    def _load_bookable(
        self,
        restaurant_id: str,
        area_id: Optional[str] = None
    ) -> Tuple[RestaurantProfile, Optional[ReservationAreaProfile], bool]:
        """
        Load a restaurant and optional area for availability lookups.

        Returns:
            Tuple of (restaurant, area, bookable); bookable is False when the
            restaurant takes no reservations or the area is not one of its
            active areas
        """
        restaurant = self.get_restaurant(restaurant_id)
        area = self.get_area(area_id) if area_id else None

        bookable = restaurant.reservation_enabled
        if area_id:
            bookable = bookable and area is not None and area.restaurant_id == restaurant.id and area.is_active
        return restaurant, area, bookable

    def effective_rules(self, restaurant_id: str, area_id: Optional[str] = None) -> BookingRules:
        """Effective booking rules for a restaurant, or one of its areas."""
        restaurant, area, _ = self._load_bookable(restaurant_id, area_id)
        return resolve_booking_rules(restaurant, area)

    # ------------------------------------------------------------------
    # Availability
    # ------------------------------------------------------------------

    def available_dates(self, restaurant_id: str, area_id: Optional[str] = None) -> List[date]:
        """Bookable dates for the booking form."""
        restaurant, area, bookable = self._load_bookable(restaurant_id, area_id)
        if not bookable:
            return []
        return generate_dates(resolve_booking_rules(restaurant, area), self.clock())

    def available_slots(
        self,
        restaurant_id: str,
        reservation_date: date,
        area_id: Optional[str] = None
    ) -> List[str]:
        """
        Bookable time slots for a date.

        Dates that are not bookable at all (blocked, wrong weekday, outside
        the advance window) have no slots.
        """
        restaurant, area, bookable = self._load_bookable(restaurant_id, area_id)
        if not bookable:
            return []

        rules = resolve_booking_rules(restaurant, area)
        now = self.clock()
        if reservation_date not in generate_dates(rules, now):
            return []
        return generate_slots(rules, reservation_date, now)

    def party_size_options(self, restaurant_id: str, area_id: Optional[str] = None) -> List[PartySizeOption]:
        """Party size picker entries, including the "N+" bucket when shown."""
        restaurant, area, bookable = self._load_bookable(restaurant_id, area_id)
        if not bookable:
            return []

        rules = resolve_booking_rules(restaurant, area)
        return [
            PartySizeOption(value=size, label=party_size_label(size, rules))
            for size in generate_party_size_options(rules)
        ]

    def reservation_types(self, restaurant_id: str, area_id: Optional[str] = None) -> List[ReservationType]:
        """Reservation types the booking form may offer."""
        restaurant, area, bookable = self._load_bookable(restaurant_id, area_id)
        if not bookable:
            return []
        return allowed_reservation_types(resolve_booking_rules(restaurant, area), area)

    # ------------------------------------------------------------------
    # Reservations
    # ------------------------------------------------------------------

    def validate(self, request: ReservationRequest) -> ValidationResult:
        """
        Validate a reservation request against the current rules.

        Raises:
            RestaurantNotFoundError: If the restaurant does not exist
        """
        restaurant = self.get_restaurant(request.restaurant_id)
        area = self.get_area(request.area_id) if request.area_id else None
        return validate_reservation(restaurant, area, request, self.clock())

    def _get_row(self, reservation_id: int) -> Reservation:
        reservation = self.db.get(Reservation, reservation_id)
        if reservation is None:
            raise ReservationNotFoundError(f"Reservation {reservation_id} not found")
        return reservation

    def get_reservation(self, reservation_id: int) -> ReservationRecord:
        """
        Get a reservation by ID.

        Raises:
            ReservationNotFoundError: If reservation not found
        """
        return ReservationRecord.model_validate(self._get_row(reservation_id))

    def create_reservation(self, request: ReservationRequest) -> ReservationRecord:
        """
        Validate and store a new reservation as pending.

        Args:
            request: Reservation submitted by the booking form

        Returns:
            Stored reservation record

        Raises:
            RestaurantNotFoundError: If the restaurant does not exist
            ReservationRejectedError: If the request violates booking rules
        """
        result = self.validate(request)
        if not result.is_valid:
            logger.warning(
                f"Rejected reservation for restaurant {request.restaurant_id}: "
                f"{result.reason.value} ({result.message})"
            )
            raise ReservationRejectedError(result)

        reservation = Reservation(
            restaurant_id=request.restaurant_id,
            area_id=request.area_id,
            party_size=request.party_size,
            reservation_date=request.reservation_date,
            reservation_time=request.reservation_time,
            reservation_type=request.reservation_type.value,
            customer_name=request.customer_name,
            customer_phone=request.customer_phone,
            customer_email=request.customer_email,
            special_requests=request.special_requests or None,
            status=ReservationStatus.PENDING.value,
        )

        self.db.add(reservation)
        self.db.commit()
        self.db.refresh(reservation)

        logger.info(
            f"Created reservation {reservation.id} for {reservation.party_size} on "
            f"{reservation.reservation_date.isoformat()} at {format_time_of_day(reservation.reservation_time)}"
        )
        return ReservationRecord.model_validate(reservation)

    def update_reservation(self, reservation_id: int, changes: ReservationUpdate) -> ReservationRecord:
        """
        Apply management edits to a reservation after re-validating it.

        Args:
            reservation_id: ID of the reservation to update
            changes: Fields to change; unset fields, and nulls on required
                fields, keep their value

        Returns:
            Updated reservation record

        Raises:
            ReservationNotFoundError: If reservation not found
            ReservationRejectedError: If the edited reservation violates booking rules
        """
        reservation = self._get_row(reservation_id)

        # null clears nullable fields and is ignored for required ones
        update = {
            name: value
            for name, value in changes.model_dump(exclude_unset=True).items()
            if value is not None or name in NULLABLE_UPDATE_FIELDS
        }

        current = ReservationRequest.model_validate(reservation)
        merged = current.model_copy(update=update)
        candidate = ReservationRequest.model_validate(merged.model_dump())

        result = self.validate(candidate)
        if not result.is_valid:
            logger.warning(
                f"Rejected update of reservation {reservation_id}: "
                f"{result.reason.value} ({result.message})"
            )
            raise ReservationRejectedError(result)

        reservation.area_id = candidate.area_id
        reservation.party_size = candidate.party_size
        reservation.reservation_date = candidate.reservation_date
        reservation.reservation_time = candidate.reservation_time
        reservation.reservation_type = candidate.reservation_type.value
        reservation.customer_name = candidate.customer_name
        reservation.customer_phone = candidate.customer_phone
        reservation.customer_email = candidate.customer_email
        reservation.special_requests = candidate.special_requests or None

        self.db.commit()
        self.db.refresh(reservation)

        logger.info(f"Updated reservation {reservation_id}")
        return ReservationRecord.model_validate(reservation)

    def update_status(self, reservation_id: int, status: ReservationStatus) -> ReservationRecord:
        """
        Set the status of a reservation.

        Raises:
            ReservationNotFoundError: If reservation not found
        """
        reservation = self._get_row(reservation_id)
        previous = reservation.status
        reservation.status = status.value

        self.db.commit()
        self.db.refresh(reservation)

        logger.info(f"Reservation {reservation_id} status {previous} -> {status.value}")
        return ReservationRecord.model_validate(reservation)
