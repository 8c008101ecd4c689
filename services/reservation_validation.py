"""
Reservation validation against effective booking rules.

Every path that creates or edits a reservation runs validate_reservation()
with a fresh "now" right before writing, so a booking never lands outside
policy because the client showed stale availability or the rules changed in
the meantime. Policy violations come back as a ValidationResult, never as
exceptions; only misconfigured rules raise InvalidConfigurationError.
"""

import logging
import dataclasses
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from core.config import settings
from core.restaurant_config import BookingRules, resolve_booking_rules
from core.utils_datetime import format_time_of_day, parse_time_of_day
from domain.enums import RejectionReason, ReservationType
from services.availability import generate_dates, generate_slots


logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Result of validating a reservation: accepted, or rejected with a reason."""
    is_valid: bool
    reason: Optional[RejectionReason] = None
    message: Optional[str] = None
    field: Optional[str] = None
    details: Dict[str, Any] = dataclasses.field(default_factory=dict)

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(is_valid=True)

    @classmethod
    def rejected(
        cls,
        reason: RejectionReason,
        message: str,
        field: Optional[str] = None,
        **details: Any
    ) -> "ValidationResult":
        return cls(is_valid=False, reason=reason, message=message, field=field, details=details)


# ============================================================================
# Dining-only areas
# ============================================================================

def is_dining_only_area(area: Optional[Any], keywords: Optional[Sequence[str]] = None) -> bool:
    """
    Check whether an area only takes meal reservations.

    An explicit dining_only flag on the area wins. Areas without the flag fall
    back to the naming convention: a name containing one of the configured
    keywords ("terrace", "deck" by default) is dining-only.

    Args:
        area: Reservation area record, or None for "no area selected"
        keywords: Name fragments to match (defaults to settings)

    Returns:
        True if drinks-only reservations are not allowed in the area
    """
    if area is None:
        return False

    flag = getattr(area, "dining_only", None)
    if flag is not None:
        return bool(flag)

    if keywords is None:
        keywords = settings.dining_only_area_keywords
    name = (getattr(area, "name", "") or "").lower()
    return any(keyword in name for keyword in keywords)


def allowed_reservation_types(rules: BookingRules, area: Optional[Any] = None) -> List[ReservationType]:
    """Reservation types that may be offered for the rules and area."""
    if rules.meal_only_reservations or is_dining_only_area(area):
        return [ReservationType.MEAL]
    return [ReservationType.MEAL, ReservationType.DRINKS]


# ============================================================================
# Complete Reservation Validation
# ============================================================================

def _area_matches(restaurant: Any, area: Optional[Any], requested_area_id: Optional[str]) -> bool:
    if area is None:
        return requested_area_id is None
    if requested_area_id is not None and str(area.id) != str(requested_area_id):
        return False
    return str(area.restaurant_id) == str(restaurant.id) and bool(area.is_active)


def validate_reservation(
    restaurant: Any,
    area: Optional[Any],
    reservation: Any,
    now: datetime
) -> ValidationResult:
    """
    Validate a prospective reservation, stopping at the first failure.

    Checks, in order: reservations enabled, area valid, party size, date,
    time, reservation type. Date and time checks reuse the generators so the
    validator accepts exactly what the booking form offers.

    Args:
        restaurant: Restaurant record
        area: Selected reservation area record, or None
        reservation: Reservation request (party_size, reservation_date,
            reservation_time, reservation_type, area_id)
        now: Current wall-clock time

    Returns:
        ValidationResult

    Raises:
        InvalidConfigurationError: If the effective rules are misconfigured
    """
    # -------------------------------------------------------------------------
    # 1. Restaurant accepts reservations
    # -------------------------------------------------------------------------
    if not restaurant.reservation_enabled:
        return ValidationResult.rejected(
            RejectionReason.RESTAURANT_CLOSED,
            f"{restaurant.name} is not accepting reservations",
        )

    # -------------------------------------------------------------------------
    # 2. Area belongs to the restaurant and is active
    # -------------------------------------------------------------------------
    requested_area_id = getattr(reservation, "area_id", None)
    if not _area_matches(restaurant, area, requested_area_id):
        return ValidationResult.rejected(
            RejectionReason.INVALID_AREA,
            "The selected area is not available for reservations",
            field="area_id",
            area_id=requested_area_id,
        )

    # -------------------------------------------------------------------------
    # 3. Effective rules
    # -------------------------------------------------------------------------
    rules = resolve_booking_rules(restaurant, area)
    rules.check()

    # -------------------------------------------------------------------------
    # 4. Party size
    # -------------------------------------------------------------------------
    party_size = reservation.party_size
    if not rules.min_party_size <= party_size <= rules.max_party_size:
        return ValidationResult.rejected(
            RejectionReason.PARTY_SIZE_OUT_OF_RANGE,
            f"Party size must be between {rules.min_party_size} and {rules.max_party_size}",
            field="party_size",
            min_party_size=rules.min_party_size,
            max_party_size=rules.max_party_size,
        )

    # -------------------------------------------------------------------------
    # 5. Date
    # -------------------------------------------------------------------------
    reservation_date = reservation.reservation_date
    if reservation_date not in generate_dates(rules, now):
        return ValidationResult.rejected(
            RejectionReason.DATE_NOT_AVAILABLE,
            f"Reservations are not available on {reservation_date.isoformat()}",
            field="reservation_date",
        )

    # -------------------------------------------------------------------------
    # 6. Time
    # -------------------------------------------------------------------------
    requested_time = reservation.reservation_time
    if isinstance(requested_time, str):
        requested_time = parse_time_of_day(requested_time)
    slot_label = format_time_of_day(requested_time)

    # Slots are whole minutes
    off_grid = bool(requested_time.second or requested_time.microsecond)
    if off_grid or slot_label not in generate_slots(rules, reservation_date, now):
        return ValidationResult.rejected(
            RejectionReason.TIME_NOT_AVAILABLE,
            f"{slot_label} is not an available time on {reservation_date.isoformat()}",
            field="reservation_time",
        )

    # -------------------------------------------------------------------------
    # 7. Reservation type
    # -------------------------------------------------------------------------
    reservation_type = getattr(reservation, "reservation_type", ReservationType.MEAL)
    if reservation_type == ReservationType.DRINKS and ReservationType.DRINKS not in allowed_reservation_types(rules, area):
        return ValidationResult.rejected(
            RejectionReason.DINING_ONLY_AREA,
            "Only meal reservations are accepted here",
            field="reservation_type",
        )

    return ValidationResult.ok()
