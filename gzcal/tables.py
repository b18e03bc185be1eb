"""Leap-year block tables for the epoch/calendar engine.

Every block is laid out with its leap-rule dependent year at the end: a
4-year block covers years 1-4 of the cycle (leap day in year 4), a 100-year
block drops the leap day of its final year, and a 400-year block adds it back.
Blocks are counted from 2001-01-01, the first day of a 400-year cycle.
"""

from gzcal.util import DAY, WEEK, is_leap_year

DAYS_PER_NORMAL_YEAR = 365
DAYS_PER_4_YEARS = 4 * DAYS_PER_NORMAL_YEAR + 1
DAYS_PER_100_YEARS = 25 * DAYS_PER_4_YEARS - 1
DAYS_PER_400_YEARS = 4 * DAYS_PER_100_YEARS + 1

SECONDS_PER_WEEK = WEEK
SECONDS_PER_NORMAL_YEAR = DAYS_PER_NORMAL_YEAR * DAY
SECONDS_PER_4_YEARS = DAYS_PER_4_YEARS * DAY
SECONDS_PER_100_YEARS = DAYS_PER_100_YEARS * DAY
SECONDS_PER_400_YEARS = DAYS_PER_400_YEARS * DAY

# Anchors (Unix seconds)
ANCHOR_YEAR = 2001
TIME_T_2001 = 978307200
TIME_T_2030 = 1893456000
TIME_T_2030_2001 = TIME_T_2030 - TIME_T_2001

# Index 0 is unused so that months can be looked up 1-based
DAYS_OF_MONTH: tuple[tuple[int, ...], tuple[int, ...]] = (
    (0, 31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31),
    (0, 31, 29, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31),
)


def _seconds_till_month(leap: int) -> tuple[int, ...]:
    starts = [0]
    for month in range(1, 12):
        starts.append(starts[-1] + DAYS_OF_MONTH[leap][month] * DAY)
    return tuple(starts)


# Seconds elapsed from January 1st 00:00:00 to the first of each month
# (0-based month index), for normal [0] and leap [1] years
SECONDS_TILL_MONTH: tuple[tuple[int, ...], tuple[int, ...]] = (
    _seconds_till_month(0),
    _seconds_till_month(1),
)

def days_in_month(year: int, month: int) -> int:
    """Number of days in ``month`` (1-12) of ``year``."""
    return DAYS_OF_MONTH[is_leap_year(year)][month]
