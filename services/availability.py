"""
Date and time slot availability.

Both generators are pure functions of (rules, now) or (rules, day, now); the
caller supplies "now" so results are reproducible.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Iterator, List

from core.restaurant_config import BookingRules
from core.utils_datetime import (
    format_time_of_day,
    iso_to_sunday_based,
    minutes_to_time,
    sunday_based_weekday,
    to_wall_clock,
)


logger = logging.getLogger(__name__)


def minimum_start(rules: BookingRules, now: datetime) -> datetime:
    """Earliest wall-clock instant a reservation may start at."""
    return to_wall_clock(now) + timedelta(hours=rules.min_advance_hours)


def _iter_slot_starts(rules: BookingRules, day: date) -> Iterator[datetime]:
    """Yield every slot start on a day, from opening up to closing inclusive."""
    rules.check_slot_duration()

    step = rules.opening_minutes
    close = rules.closing_minutes
    while step <= close:
        yield datetime.combine(day, minutes_to_time(step))
        step += rules.slot_duration_minutes


def has_valid_slot_after(rules: BookingRules, day: date, cutoff: datetime) -> bool:
    """
    Check whether any slot on a day starts at or after the cutoff.

    Args:
        rules: Effective booking rules
        day: Date to scan
        cutoff: Earliest acceptable slot start

    Returns:
        True if at least one slot qualifies
    """
    return any(start >= cutoff for start in _iter_slot_starts(rules, day))


def generate_slots(rules: BookingRules, day: date, now: datetime) -> List[str]:
    """
    Generate bookable time slots for a date.

    Slots start at the opening time and are spaced by slot_duration_minutes;
    a slot landing exactly on the closing time is included. Slots starting
    before now + min_advance_hours are left out.

    Args:
        rules: Effective booking rules
        day: Date the slots are for
        now: Current wall-clock time

    Returns:
        Ascending list of "HH:MM" strings (empty if nothing qualifies)

    Raises:
        InvalidConfigurationError: If slot_duration_minutes is not positive
    """
    cutoff = minimum_start(rules, now)
    return [
        format_time_of_day(start.time())
        for start in _iter_slot_starts(rules, day)
        if start >= cutoff
    ]


def generate_dates(rules: BookingRules, now: datetime) -> List[date]:
    """
    Generate bookable dates within the advance booking window.

    The window is [today, today + advance_booking_days). Today is only offered
    while at least one of its slots is still far enough ahead. Dates on a
    weekday outside allowed_days_of_week, or listed in blocked_dates, are
    skipped.

    Args:
        rules: Effective booking rules
        now: Current wall-clock time

    Returns:
        Ascending list of dates (empty if nothing qualifies)

    Raises:
        InvalidConfigurationError: If the rules are misconfigured
    """
    rules.check()

    now = to_wall_clock(now)
    today = now.date()
    cutoff = minimum_start(rules, now)
    allowed_weekdays = {iso_to_sunday_based(day) for day in rules.allowed_days_of_week}

    dates = []
    for offset in range(rules.advance_booking_days):
        candidate = today + timedelta(days=offset)

        if offset == 0 and not has_valid_slot_after(rules, candidate, cutoff):
            logger.debug(f"No slots left today ({candidate.isoformat()}) after {cutoff:%H:%M}")
            continue

        if sunday_based_weekday(candidate) not in allowed_weekdays:
            continue

        if candidate in rules.blocked_dates:
            continue

        dates.append(candidate)

    return dates
