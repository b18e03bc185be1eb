"""Utility constants and helpers for gzcal.

Time unit constants represent durations in seconds.
These are used throughout the API for consistent time representation.
"""

# Time unit constants (all values in seconds)
SECOND = 1
MINUTE = 60
HOUR = 3600
DAY = 86400
WEEK = 604800

WEEKDAYS = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)


def unsigned_modulo(value: int, modulus: int) -> tuple[int, int]:
    """Split a signed value into a floored divisor and a non-negative remainder.

    The result satisfies ``value == divisor * modulus + remainder`` with
    ``0 <= remainder < modulus``. The divisor rounds toward negative infinity,
    so block indices derived from it never need a sign fix-up.

    A modulus of zero has no valid answer; ``(1, 0)`` is returned.

    Example:
        >>> unsigned_modulo(-7, 3)
        (-3, 2)
    """
    if modulus < 0:
        raise ValueError(
            f"unsigned_modulo() requires a non-negative modulus, got {modulus}.\n"
            f"Example: unsigned_modulo(-7, 3) == (-3, 2)"
        )
    if modulus == 0:
        return 1, 0
    return divmod(value, modulus)


def is_leap_year(year: int) -> bool:
    """Gregorian leap year rule (every 4th year, except centuries not divisible by 400)."""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)
