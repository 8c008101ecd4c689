"""
Tests for booking rule resolution.
Covers area overrides, restaurant defaults, system defaults and configuration checks.
"""

import pytest
from datetime import date, time

from core.restaurant_config import (
    BookingRules,
    InvalidConfigurationError,
    describe_booking_rules,
    resolve_booking_rules,
)
from db.models_sqlalchemy import Restaurant, ReservationArea
from domain.models import RestaurantProfile, ReservationAreaProfile


# ============================================================================
# Resolution Tests
# ============================================================================

class TestResolveBookingRules:
    """Tests for merging area, restaurant and system values."""

    def test_system_defaults_when_nothing_set(self):
        """A bare restaurant gets the hard-coded defaults."""
        rules = resolve_booking_rules(RestaurantProfile(id="r", name="Bare"))

        assert rules.opening_time == time(9, 0)
        assert rules.closing_time == time(22, 0)
        assert rules.slot_duration_minutes == 30
        assert rules.advance_booking_days == 15
        assert rules.min_advance_hours == 0
        assert rules.min_party_size == 1
        assert rules.max_party_size == 12
        assert rules.allowed_days_of_week == frozenset({1, 2, 3, 4, 5, 6, 7})
        assert rules.blocked_dates == frozenset()
        assert rules.meal_only_reservations is False

    def test_restaurant_values_used_without_area(self, restaurant_profile):
        """Restaurant values replace system defaults."""
        rules = resolve_booking_rules(restaurant_profile)

        assert rules.opening_time == time(17, 0)
        assert rules.closing_time == time(20, 45)
        assert rules.slot_duration_minutes == 15
        assert rules.max_party_size == 12

    def test_area_overrides_only_set_fields(self, restaurant_profile, small_area_profile):
        """Area values win field by field; unset area fields inherit."""
        rules = resolve_booking_rules(restaurant_profile, small_area_profile)

        assert rules.max_party_size == 4
        assert rules.opening_time == time(17, 0)
        assert rules.slot_duration_minutes == 15

    def test_area_zero_is_an_override(self, restaurant_profile):
        """Zero is a value, not an unset field."""
        restaurant = restaurant_profile.model_copy(update={"min_advance_hours": 2})
        area = ReservationAreaProfile(id="a", restaurant_id="rest-1", name="Bar", min_advance_hours=0)

        assert resolve_booking_rules(restaurant, area).min_advance_hours == 0

    def test_empty_weekdays_fall_back_to_all_days(self):
        """An empty weekday list at both levels means every day."""
        restaurant = RestaurantProfile(id="r", name="R", allowed_days_of_week=[])
        area = ReservationAreaProfile(id="a", restaurant_id="r", name="A", allowed_days_of_week=[])

        rules = resolve_booking_rules(restaurant, area)

        assert rules.allowed_days_of_week == frozenset(range(1, 8))

    def test_empty_area_weekdays_inherit_restaurant(self):
        """An empty area weekday list does not close the area."""
        restaurant = RestaurantProfile(id="r", name="R", allowed_days_of_week=[6, 7])
        area = ReservationAreaProfile(id="a", restaurant_id="r", name="A", allowed_days_of_week=[])

        assert resolve_booking_rules(restaurant, area).allowed_days_of_week == frozenset({6, 7})

    def test_meal_only_comes_from_restaurant(self):
        """meal_only_reservations is a restaurant-level setting."""
        restaurant = RestaurantProfile(id="r", name="R", meal_only_reservations=True)
        area = ReservationAreaProfile(id="a", restaurant_id="r", name="Bar")

        assert resolve_booking_rules(restaurant, area).meal_only_reservations is True

    def test_blocked_dates_parsed_from_iso_strings(self):
        """ORM rows store blocked dates as ISO strings."""
        restaurant = Restaurant(id="r", name="R", blocked_dates=["2024-01-05", "2024-01-06"])

        rules = resolve_booking_rules(restaurant)

        assert rules.blocked_dates == frozenset({date(2024, 1, 5), date(2024, 1, 6)})

    def test_orm_rows_resolve_like_profiles(self):
        """Resolution works directly on ORM rows."""
        restaurant = Restaurant(id="r", name="R", opening_time=time(12, 0), max_party_size=10)
        area = ReservationArea(id="a", restaurant_id="r", name="Garden", opening_time=time(18, 0))

        rules = resolve_booking_rules(restaurant, area)

        assert rules.opening_time == time(18, 0)
        assert rules.max_party_size == 10

    def test_time_strings_are_accepted(self):
        """HH:MM and HH:MM:SS strings resolve to times."""
        class Row:
            opening_time = "11:30:00"
            closing_time = "23:00"

        rules = resolve_booking_rules(Row())

        assert rules.opening_time == time(11, 30)
        assert rules.closing_time == time(23, 0)


# ============================================================================
# Configuration Checks
# ============================================================================

class TestBookingRulesCheck:
    """Tests for configuration defect detection."""

    def test_defaults_are_valid(self):
        """Default rules pass the check."""
        BookingRules().check()

    def test_zero_slot_duration_rejected(self):
        """A zero slot duration would never advance."""
        with pytest.raises(InvalidConfigurationError, match="slot_duration_minutes"):
            BookingRules(slot_duration_minutes=0).check()

    def test_negative_slot_duration_rejected(self):
        """A negative slot duration is a defect."""
        with pytest.raises(InvalidConfigurationError):
            BookingRules(slot_duration_minutes=-15).check()

    def test_inverted_party_bounds_rejected(self):
        """min_party_size above max_party_size is a defect."""
        with pytest.raises(InvalidConfigurationError, match="exceeds"):
            BookingRules(min_party_size=6, max_party_size=4).check()

    def test_non_positive_advance_days_rejected(self):
        """The advance window must contain at least today."""
        with pytest.raises(InvalidConfigurationError, match="advance_booking_days"):
            BookingRules(advance_booking_days=0).check()

    def test_negative_min_advance_rejected(self):
        """Minimum notice cannot be negative."""
        with pytest.raises(InvalidConfigurationError, match="min_advance_hours"):
            BookingRules(min_advance_hours=-1).check()

    def test_unknown_weekday_rejected(self):
        """Weekday codes must be 1..7."""
        with pytest.raises(InvalidConfigurationError, match="1..7"):
            BookingRules(allowed_days_of_week=frozenset({0, 1})).check()

    def test_invalid_configuration_is_value_error(self):
        """Callers catching ValueError also catch configuration defects."""
        assert issubclass(InvalidConfigurationError, ValueError)


class TestDescribeBookingRules:
    """Tests for the JSON-safe rules summary."""

    def test_describe_formats_values(self):
        """Times, dates and weekday sets are serialized predictably."""
        rules = BookingRules(
            opening_time=time(17, 0),
            closing_time=time(20, 45),
            allowed_days_of_week=frozenset({7, 6}),
            blocked_dates=frozenset({date(2024, 1, 6), date(2024, 1, 5)}),
        )

        summary = describe_booking_rules(rules)

        assert summary["opening_time"] == "17:00"
        assert summary["closing_time"] == "20:45"
        assert summary["allowed_days_of_week"] == [6, 7]
        assert summary["blocked_dates"] == ["2024-01-05", "2024-01-06"]
