"""Conversion between Unix seconds and calendar fields.

The engine never consults the platform: the zone and DST status to convert
for are always passed in explicitly. Block arithmetic runs relative to
2001-01-01 00:00:00 UTC, the first day of a 400-year Gregorian cycle and a
Monday, so every block index and weekday falls out of a single floored
division.

With ``y2038=True`` the seconds are treated as a signed 32-bit ``time_t``
that may have overflowed: the value is re-based to the 2030 epoch with 32-bit
wrap-around before the 2001 re-basing, which maps the full 32-bit range onto
roughly 1962 to 2098 instead of 1901 to 2038.
"""

from dataclasses import replace

from gzcal.calendar import Calendar
from gzcal.tables import (
    ANCHOR_YEAR,
    DAYS_PER_100_YEARS,
    DAYS_PER_400_YEARS,
    DAYS_PER_4_YEARS,
    DAYS_PER_NORMAL_YEAR,
    SECONDS_PER_100_YEARS,
    SECONDS_PER_400_YEARS,
    SECONDS_PER_4_YEARS,
    SECONDS_PER_NORMAL_YEAR,
    SECONDS_PER_WEEK,
    SECONDS_TILL_MONTH,
    TIME_T_2001,
    TIME_T_2030,
    TIME_T_2030_2001,
)
from gzcal.util import DAY, HOUR, MINUTE, is_leap_year, unsigned_modulo
from gzcal.zone import UTC, Dst, TimeZone, utc_deviation

_INT32_SPAN = 1 << 32
_INT32_MIN = -(1 << 31)


def _wrap_int32(value: int) -> int:
    """Truncate to a signed 32-bit integer the way a C cast does."""
    return (value - _INT32_MIN) % _INT32_SPAN + _INT32_MIN


def _rebase(seconds: int, y2038: bool) -> int:
    """Unix seconds -> seconds since the 2001 anchor."""
    if not y2038:
        return seconds - TIME_T_2001
    return _wrap_int32(_wrap_int32(seconds) - TIME_T_2030) + TIME_T_2030_2001


def _unbase(anchored: int, y2038: bool) -> int:
    """Seconds since the 2001 anchor -> Unix seconds (possibly wrapped)."""
    if not y2038:
        return anchored + TIME_T_2001
    return _wrap_int32(_wrap_int32(anchored - TIME_T_2030_2001) + TIME_T_2030)


def effective_seconds(seconds: int, *, y2038: bool = False) -> int:
    """The real Unix instant a (possibly wrapped) seconds count stands for."""
    return _rebase(seconds, y2038) + TIME_T_2001


def to_calendar(
    seconds: int,
    zone: TimeZone = UTC,
    dst: Dst = Dst.UNSPECIFIED,
    *,
    y2038: bool = False,
) -> Calendar:
    """Convert Unix seconds to calendar fields for the given zone and DST status.

    The wall clock is shifted by the relative offset of ``zone``/``dst``
    (geographic zone plus one hour when DST is active) before decomposition,
    and the result is stamped with ``zone`` and ``dst`` unchanged.

    Args:
        seconds: Unix seconds (signed)
        zone: ``Geographic`` or ``Relative`` zone of the requested wall clock
        dst: DST status matching ``zone`` (UNSPECIFIED for relative zones)
        y2038: Interpret ``seconds`` as a possibly overflowed 32-bit value

    Returns:
        Calendar with all derived fields (weekday, day of year, calendar week)

    Example:
        >>> to_calendar(1078880523)
        Calendar(year=2004, month=3, day=10, hour=1, minute=2, second=3, ...)
    """
    anchored = _rebase(seconds, y2038) + utc_deviation(zone, dst).seconds
    return _decompose(anchored, zone, dst)


def from_calendar(calendar: Calendar, *, y2038: bool = False) -> int:
    """Convert calendar fields back to Unix seconds.

    Derived fields (weekday, day of year, calendar week) are ignored. Field
    ranges are not checked: month 13 or day 32 give undefined results.

    Args:
        calendar: Calendar to convert; its zone and DST status define the offset
        y2038: Produce a signed 32-bit value re-based through the 2030 epoch

    Returns:
        Unix seconds
    """
    anchored = _wall_seconds(calendar) - calendar.utc_offset
    return _unbase(anchored, y2038)


def refresh(calendar: Calendar) -> Calendar:
    """Recompute weekday, day of year and calendar week from the wall clock fields."""
    derived = _decompose(_wall_seconds(calendar), calendar.zone, calendar.dst)
    return replace(
        calendar,
        day_in_week=derived.day_in_week,
        day_in_year=derived.day_in_year,
        calendar_week=derived.calendar_week,
    )


def _wall_seconds(calendar: Calendar) -> int:
    """Seconds from the anchor to the calendar's wall clock, ignoring its zone."""
    k, rem400 = unsigned_modulo(calendar.year - ANCHOR_YEAR, 400)
    j, rem100 = unsigned_modulo(rem400, 100)
    i, h = unsigned_modulo(rem100, 4)

    anchored = (
        k * SECONDS_PER_400_YEARS
        + j * SECONDS_PER_100_YEARS
        + i * SECONDS_PER_4_YEARS
        + h * SECONDS_PER_NORMAL_YEAR
    )
    leap = is_leap_year(calendar.year)
    anchored += SECONDS_TILL_MONTH[leap][calendar.month - 1]
    anchored += (calendar.day - 1) * DAY
    anchored += calendar.hour * HOUR + calendar.minute * MINUTE + calendar.second
    return anchored


def _decompose(anchored: int, zone: TimeZone, dst: Dst) -> Calendar:
    """Split wall-clock seconds since the anchor into calendar fields."""
    # 400 year block index (negative before 2001)
    k, block400 = unsigned_modulo(anchored, SECONDS_PER_400_YEARS)

    # 100 year block index; 4 only on Dec 31 closing the 400 year block
    j, block100 = unsigned_modulo(block400, SECONDS_PER_100_YEARS)
    if j == 4:
        j, block100 = 3, block100 + SECONDS_PER_100_YEARS

    # 4 year block index
    i, block4 = unsigned_modulo(block100, SECONDS_PER_4_YEARS)

    # Single year; 4 only on Dec 31 closing a leap year
    h, block1 = unsigned_modulo(block4, SECONDS_PER_NORMAL_YEAR)
    if h == 4:
        h, block1 = 3, block1 + SECONDS_PER_NORMAL_YEAR

    year = ANCHOR_YEAR + 400 * k + 100 * j + 4 * i + h
    days_before_year = (
        k * DAYS_PER_400_YEARS
        + j * DAYS_PER_100_YEARS
        + i * DAYS_PER_4_YEARS
        + h * DAYS_PER_NORMAL_YEAR
    )

    # Table entry 0 is 0, so the scan always stops
    starts = SECONDS_TILL_MONTH[is_leap_year(year)]
    month = next(m for m in range(11, -1, -1) if block1 >= starts[m])
    day, rest = unsigned_modulo(block1 - starts[month], DAY)
    hour, rest = unsigned_modulo(rest, HOUR)
    minute, second = unsigned_modulo(rest, MINUTE)

    weeks, within_week = unsigned_modulo(anchored, SECONDS_PER_WEEK)
    # Week index of the first Monday on or after January 1st
    first_monday_week = -(-days_before_year // 7)

    return Calendar(
        year=year,
        month=month + 1,
        day=day + 1,
        hour=hour,
        minute=minute,
        second=second,
        zone=zone,
        dst=dst,
        day_in_week=within_week // DAY + 1,
        day_in_year=block1 // DAY + 1,
        calendar_week=weeks - first_monday_week + 1,
    )
