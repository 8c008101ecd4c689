"""
Date/time utilities for the availability engine.

All times are naive local wall-clock values. The only place a timezone is
consulted is get_current_datetime(), which reads the clock in the configured
restaurant timezone and strips the offset.
"""
from datetime import datetime, date, time
from typing import Union

import pytz

from core.config import settings


# 1=Monday..7=Sunday, as stored on restaurants and areas
ISO_WEEKDAYS = frozenset(range(1, 8))


def get_timezone() -> pytz.BaseTzInfo:
    """Get the configured restaurant timezone."""
    return pytz.timezone(settings.restaurant_timezone)


def get_current_datetime() -> datetime:
    """Get the current naive wall-clock datetime in the restaurant timezone."""
    return datetime.now(get_timezone()).replace(tzinfo=None)


def to_wall_clock(value: datetime) -> datetime:
    """Drop any tzinfo so the value compares as local wall-clock time."""
    if value.tzinfo is not None:
        return value.replace(tzinfo=None)
    return value


def parse_time_of_day(value: Union[str, time]) -> time:
    """
    Parse an "HH:MM" (or "HH:MM:SS") string into a time object.

    Args:
        value: Time string or time object

    Returns:
        time object with seconds dropped

    Raises:
        ValueError: If the string is not a valid time of day
    """
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)

    parts = value.strip().split(":")
    if len(parts) < 2:
        raise ValueError(f"Invalid time of day: {value!r}")
    return time(int(parts[0]), int(parts[1]))


def format_time_of_day(value: time) -> str:
    """Format a time as zero-padded HH:MM."""
    return f"{value.hour:02d}:{value.minute:02d}"


def minutes_since_midnight(value: time) -> int:
    """Convert a time of day to total minutes since midnight."""
    return value.hour * 60 + value.minute


def minutes_to_time(total_minutes: int) -> time:
    """Convert minutes since midnight back to a time of day."""
    hours, minutes = divmod(total_minutes, 60)
    return time(hours, minutes)


def iso_to_sunday_based(iso_weekday: int) -> int:
    """
    Convert a 1=Monday..7=Sunday weekday code to 0=Sunday..6=Saturday.

    Args:
        iso_weekday: Weekday code in 1..7

    Returns:
        Weekday code in 0..6
    """
    return 0 if iso_weekday == 7 else iso_weekday


def sunday_based_weekday(day: date) -> int:
    """Weekday of a date with 0=Sunday..6=Saturday."""
    return day.isoweekday() % 7
