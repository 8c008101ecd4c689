"""
Booking rules for restaurants and reservation areas.

A reservation area overrides its restaurant's rules field by field; any field
the area leaves empty is inherited from the restaurant, and any field the
restaurant leaves empty falls back to the system default below.
"""

from dataclasses import dataclass, field
from datetime import date, time
from typing import Any, Dict, FrozenSet, Optional

from core.utils_datetime import (
    ISO_WEEKDAYS,
    format_time_of_day,
    minutes_since_midnight,
    parse_time_of_day,
)


class InvalidConfigurationError(ValueError):
    """Raised when booking rules cannot produce meaningful availability."""
    pass


# System defaults used when neither the area nor the restaurant sets a value
DEFAULT_OPENING_TIME = time(9, 0)
DEFAULT_CLOSING_TIME = time(22, 0)
DEFAULT_SLOT_DURATION_MINUTES = 30
DEFAULT_ADVANCE_BOOKING_DAYS = 15
DEFAULT_MIN_ADVANCE_HOURS = 0.0
DEFAULT_MIN_PARTY_SIZE = 1
DEFAULT_MAX_PARTY_SIZE = 12
DEFAULT_ALLOWED_DAYS_OF_WEEK = ISO_WEEKDAYS

# Fields an area may override (area attribute == restaurant attribute name)
OVERRIDABLE_FIELDS = (
    "opening_time",
    "closing_time",
    "slot_duration_minutes",
    "advance_booking_days",
    "min_advance_hours",
    "min_party_size",
    "max_party_size",
    "allowed_days_of_week",
    "blocked_dates",
)


@dataclass(frozen=True)
class BookingRules:
    """Effective booking rules for a restaurant, or a restaurant area."""
    opening_time: time = DEFAULT_OPENING_TIME
    closing_time: time = DEFAULT_CLOSING_TIME
    slot_duration_minutes: int = DEFAULT_SLOT_DURATION_MINUTES
    advance_booking_days: int = DEFAULT_ADVANCE_BOOKING_DAYS
    min_advance_hours: float = DEFAULT_MIN_ADVANCE_HOURS
    min_party_size: int = DEFAULT_MIN_PARTY_SIZE
    max_party_size: int = DEFAULT_MAX_PARTY_SIZE
    allowed_days_of_week: FrozenSet[int] = DEFAULT_ALLOWED_DAYS_OF_WEEK
    blocked_dates: FrozenSet[date] = field(default_factory=frozenset)
    meal_only_reservations: bool = False

    @property
    def opening_minutes(self) -> int:
        return minutes_since_midnight(self.opening_time)

    @property
    def closing_minutes(self) -> int:
        return minutes_since_midnight(self.closing_time)

    def check_slot_duration(self) -> None:
        """Fail fast on a slot duration that would never advance."""
        if self.slot_duration_minutes <= 0:
            raise InvalidConfigurationError(
                f"slot_duration_minutes must be positive (got {self.slot_duration_minutes})"
            )

    def check_party_bounds(self) -> None:
        """Fail fast on an empty or nonsensical party size range."""
        if self.min_party_size < 1:
            raise InvalidConfigurationError(
                f"min_party_size must be at least 1 (got {self.min_party_size})"
            )
        if self.min_party_size > self.max_party_size:
            raise InvalidConfigurationError(
                f"min_party_size ({self.min_party_size}) exceeds "
                f"max_party_size ({self.max_party_size})"
            )

    def check(self) -> None:
        """
        Validate the rules as a whole.

        Raises:
            InvalidConfigurationError: On the first configuration defect found
        """
        self.check_slot_duration()
        self.check_party_bounds()
        if self.advance_booking_days <= 0:
            raise InvalidConfigurationError(
                f"advance_booking_days must be positive (got {self.advance_booking_days})"
            )
        if self.min_advance_hours < 0:
            raise InvalidConfigurationError(
                f"min_advance_hours cannot be negative (got {self.min_advance_hours})"
            )
        unknown_days = set(self.allowed_days_of_week) - ISO_WEEKDAYS
        if unknown_days:
            raise InvalidConfigurationError(
                f"allowed_days_of_week contains codes outside 1..7: {sorted(unknown_days)}"
            )


def _coalesce(*values: Any) -> Any:
    """Return the first value that is not None."""
    for value in values:
        if value is not None:
            return value
    return None


def _empty_as_none(value: Any) -> Any:
    """Treat an empty weekday list as unset."""
    if value is not None and len(value) == 0:
        return None
    return value


def _as_date(value: Any) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


def resolve_booking_rules(restaurant: Any, area: Optional[Any] = None) -> BookingRules:
    """
    Merge area overrides with restaurant defaults into effective rules.

    Resolution never fails on missing data: every field ends up with the area
    value, the restaurant value, or the system default, in that order.
    meal_only_reservations is a restaurant-level setting and is not
    overridable by areas.

    Args:
        restaurant: Restaurant record (profile model or ORM row)
        area: Optional reservation area record

    Returns:
        Fully populated BookingRules
    """
    def pick(name: str) -> Any:
        area_value = getattr(area, name, None) if area is not None else None
        restaurant_value = getattr(restaurant, name, None)
        if name == "allowed_days_of_week":
            return _coalesce(_empty_as_none(area_value), _empty_as_none(restaurant_value))
        return _coalesce(area_value, restaurant_value)

    values = {name: pick(name) for name in OVERRIDABLE_FIELDS}

    opening_time = values["opening_time"]
    closing_time = values["closing_time"]
    allowed_days = values["allowed_days_of_week"]
    blocked_dates = values["blocked_dates"]

    return BookingRules(
        opening_time=parse_time_of_day(opening_time) if opening_time is not None else DEFAULT_OPENING_TIME,
        closing_time=parse_time_of_day(closing_time) if closing_time is not None else DEFAULT_CLOSING_TIME,
        slot_duration_minutes=_coalesce(values["slot_duration_minutes"], DEFAULT_SLOT_DURATION_MINUTES),
        advance_booking_days=_coalesce(values["advance_booking_days"], DEFAULT_ADVANCE_BOOKING_DAYS),
        min_advance_hours=float(_coalesce(values["min_advance_hours"], DEFAULT_MIN_ADVANCE_HOURS)),
        min_party_size=_coalesce(values["min_party_size"], DEFAULT_MIN_PARTY_SIZE),
        max_party_size=_coalesce(values["max_party_size"], DEFAULT_MAX_PARTY_SIZE),
        allowed_days_of_week=frozenset(allowed_days) if allowed_days is not None else DEFAULT_ALLOWED_DAYS_OF_WEEK,
        blocked_dates=frozenset(_as_date(d) for d in blocked_dates) if blocked_dates else frozenset(),
        meal_only_reservations=bool(getattr(restaurant, "meal_only_reservations", False) or False),
    )


def describe_booking_rules(rules: BookingRules) -> Dict[str, Any]:
    """
    Get a JSON-safe summary of effective rules.

    Returns:
        Dict with times as HH:MM, dates as ISO strings and sorted lists
    """
    return {
        "opening_time": format_time_of_day(rules.opening_time),
        "closing_time": format_time_of_day(rules.closing_time),
        "slot_duration_minutes": rules.slot_duration_minutes,
        "advance_booking_days": rules.advance_booking_days,
        "min_advance_hours": rules.min_advance_hours,
        "min_party_size": rules.min_party_size,
        "max_party_size": rules.max_party_size,
        "allowed_days_of_week": sorted(rules.allowed_days_of_week),
        "blocked_dates": [d.isoformat() for d in sorted(rules.blocked_dates)],
        "meal_only_reservations": rules.meal_only_reservations,
    }
