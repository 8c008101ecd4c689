"""Party size options for the booking form."""

from typing import List

from core.restaurant_config import BookingRules


# The "N+" bucket is only shown for mid-sized maximums
OVERFLOW_MIN_MAX_PARTY = 8
OVERFLOW_MAX_MAX_PARTY = 20


def shows_overflow_option(rules: BookingRules) -> bool:
    """Check whether the form should offer an extra "N+" option."""
    return OVERFLOW_MIN_MAX_PARTY <= rules.max_party_size < OVERFLOW_MAX_MAX_PARTY


def generate_party_size_options(rules: BookingRules, include_overflow: bool = True) -> List[int]:
    """
    Generate selectable party sizes.

    The overflow option (max_party_size + 1) is for display only; the
    validator still rejects party sizes above max_party_size.

    Args:
        rules: Effective booking rules
        include_overflow: Append the "N+" bucket when applicable

    Returns:
        Ascending list of party sizes

    Raises:
        InvalidConfigurationError: If min_party_size > max_party_size
    """
    rules.check_party_bounds()

    options = list(range(rules.min_party_size, rules.max_party_size + 1))
    if include_overflow and shows_overflow_option(rules):
        options.append(rules.max_party_size + 1)
    return options


def party_size_label(size: int, rules: BookingRules) -> str:
    """Display label for a party size option ("N+" for the overflow bucket)."""
    if size > rules.max_party_size and shows_overflow_option(rules):
        return f"{size}+"
    return str(size)
