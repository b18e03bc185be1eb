"""Tests for the epoch/calendar conversion engine."""

from datetime import datetime, timedelta, timezone

import pytest

from gzcal import Calendar, Dst, Geographic, Relative, UTC
from gzcal.engine import effective_seconds, from_calendar, refresh, to_calendar

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def ts(*args) -> int:
    """Unix seconds of a UTC wall clock."""
    return int(datetime(*args, tzinfo=timezone.utc).timestamp())


def assert_matches_datetime(seconds: int) -> None:
    """Compare every calendar field against the standard library."""
    cal = to_calendar(seconds)
    expected = EPOCH + timedelta(seconds=seconds)
    assert (cal.year, cal.month, cal.day) == (expected.year, expected.month, expected.day)
    assert (cal.hour, cal.minute, cal.second) == (expected.hour, expected.minute, expected.second)
    assert cal.day_in_week == expected.isoweekday()
    assert cal.day_in_year == expected.timetuple().tm_yday
    assert cal.calendar_week == int(expected.strftime("%W"))


def test_known_instant():
    """Test the reference instant 1078880523."""
    cal = to_calendar(1078880523)
    assert (cal.year, cal.month, cal.day) == (2004, 3, 10)
    assert (cal.hour, cal.minute, cal.second) == (1, 2, 3)
    assert cal.zone == UTC
    assert cal.dst == Dst.UNSPECIFIED
    assert cal.weekday_name == "Wednesday"
    assert cal.day_in_year == 31 + 29 + 10


def test_anchor_is_monday():
    """Test that 2001-01-01 00:00:00 UTC decomposes to the anchor Monday."""
    cal = to_calendar(978307200)
    assert (cal.year, cal.month, cal.day, cal.hour) == (2001, 1, 1, 0)
    assert cal.day_in_week == 1
    assert cal.day_in_year == 1
    assert cal.calendar_week == 1


def test_before_epoch():
    """Test negative seconds."""
    cal = to_calendar(-1)
    assert (cal.year, cal.month, cal.day) == (1969, 12, 31)
    assert (cal.hour, cal.minute, cal.second) == (23, 59, 59)
    assert cal.weekday_name == "Wednesday"


def test_leap_day_follows_february_28():
    """Test that 2024-02-28 23:59:59 + 1 s is Feb 29, not Mar 1."""
    cal = to_calendar(ts(2024, 2, 28, 23, 59, 59) + 1)
    assert (cal.year, cal.month, cal.day) == (2024, 2, 29)
    assert cal.day_in_year == 60


def test_century_leap_rules():
    """Test that 2000 has a Feb 29 and 1900 does not."""
    cal = to_calendar(ts(2000, 2, 28) + 86400)
    assert (cal.month, cal.day) == (2, 29)

    cal = to_calendar(ts(1900, 2, 28) + 86400)
    assert (cal.month, cal.day) == (3, 1)


@pytest.mark.parametrize(
    "moment",
    [
        (2000, 12, 31, 23, 59, 59),
        (2004, 12, 31, 12, 0, 0),
        (2100, 12, 31, 0, 0, 0),
        (2400, 12, 31, 18, 30, 0),
        (1600, 12, 31, 23, 59, 59),
        (1996, 12, 31, 0, 0, 0),
    ],
)
def test_last_day_of_leap_blocks_stays_in_its_year(moment):
    """Test Dec 31 at the end of 4, 100 and 400 year blocks."""
    assert_matches_datetime(ts(*moment))


def test_matches_datetime_across_centuries():
    """Test block boundaries and month ends from 1600 to 2500."""
    years = [*range(1600, 1610), *range(1896, 1906), *range(1996, 2106), 2399, 2400, 2401, 2500]
    for year in years:
        for month, day in ((1, 1), (2, 28), (3, 1), (6, 30), (12, 31)):
            assert_matches_datetime(ts(year, month, day, 13, 14, 15))


def test_calendar_week_matches_strftime_w():
    """Test week numbers of every day from 2020 through 2028."""
    start = ts(2020, 1, 1, 12)
    for offset in range(0, 9 * 366):
        seconds = start + offset * 86400
        expected = EPOCH + timedelta(seconds=seconds)
        assert to_calendar(seconds).calendar_week == int(expected.strftime("%W"))


def test_days_before_first_monday_are_week_zero():
    """Test that Jan 1 2023 (a Sunday) belongs to week 0."""
    cal = to_calendar(ts(2023, 1, 1))
    assert cal.day_in_week == 7
    assert cal.calendar_week == 0
    assert to_calendar(ts(2023, 1, 2)).calendar_week == 1


def test_year_round_trip_1970_to_2099():
    """Test that every year start and end survives decomposition and recomposition."""
    for year in range(1970, 2100):
        for month, day in ((1, 1), (12, 31)):
            seconds = ts(year, month, day, 23, 59, 59)
            cal = to_calendar(seconds)
            assert (cal.year, cal.month, cal.day) == (year, month, day)
            assert from_calendar(cal) == seconds


@pytest.mark.parametrize(
    "zone, dst, hour",
    [
        (Geographic(1), Dst.ACTIVE, 2),
        (Geographic(1), Dst.INACTIVE, 1),
        (Relative(5, 30), Dst.UNSPECIFIED, 5),
        (Relative(-3, -30), Dst.UNSPECIFIED, 20),
        (Geographic(-8), Dst.ACTIVE, 17),
    ],
)
def test_zone_shift_and_round_trip(zone, dst, hour):
    """Test that the wall clock moves by the relative offset and converts back."""
    for seconds in (0, 1078880523, -2208988800, 4102444800):
        cal = to_calendar(seconds, zone, dst)
        assert cal.zone == zone
        assert cal.dst == dst
        assert from_calendar(cal) == seconds

    assert to_calendar(0, zone, dst).hour == hour


def test_fractional_zone_minutes():
    """Test that zone minutes shift the wall clock too."""
    cal = to_calendar(0, Relative(5, 30))
    assert (cal.hour, cal.minute) == (5, 30)

    cal = to_calendar(0, Relative(-3, -30))
    assert (cal.day, cal.hour, cal.minute) == (31, 20, 30)


def test_far_years():
    """Test years outside the datetime range in both directions."""
    for year in (-4713, -1, 0, 10000, 123456):
        cal = Calendar(year=year, month=2, day=29 if year % 4 == 0 and year % 100 != 0 else 28)
        back = to_calendar(from_calendar(cal))
        assert (back.year, back.month, back.day) == (cal.year, cal.month, cal.day)


def test_y2038_wrapped_value_maps_after_2038():
    """Test that an overflowed 32-bit count is read as a date after 2038."""
    real = ts(2039, 2, 10)
    assert real == 2180908800
    wrapped = real - (1 << 32)
    assert wrapped == -2114058496

    cal = to_calendar(wrapped, y2038=True)
    assert (cal.year, cal.month, cal.day) == (2039, 2, 10)
    assert from_calendar(cal, y2038=True) == wrapped
    assert effective_seconds(wrapped, y2038=True) == real

    # Without reinterpretation the same count lies in 1903
    assert to_calendar(wrapped).year == 1903


def test_y2038_leaves_mid_range_values_alone():
    """Test that values between 1962 and 2098 convert the same either way."""
    for seconds in (0, 1078880523, ts(2037, 12, 31), -200000000):
        assert to_calendar(seconds, y2038=True) == to_calendar(seconds)
        assert from_calendar(to_calendar(seconds), y2038=True) == seconds


def test_y2038_maps_early_values_to_the_end_of_the_century():
    """Test that counts before 1962 are read as late 21st century dates."""
    cal = to_calendar(-300000000, y2038=True)
    expected = EPOCH + timedelta(seconds=-300000000 + (1 << 32))
    assert (cal.year, cal.month, cal.day) == (expected.year, expected.month, expected.day)


def test_refresh_computes_derived_fields():
    """Test that refresh fills weekday, day of year and calendar week."""
    cal = Calendar(year=2024, month=12, day=31, hour=23, zone=Geographic(1), dst=Dst.INACTIVE)
    assert cal.day_in_week is None

    cal = refresh(cal)
    assert cal.weekday_name == "Tuesday"
    assert cal.day_in_year == 366
    assert cal.calendar_week == int(datetime(2024, 12, 31).strftime("%W"))
