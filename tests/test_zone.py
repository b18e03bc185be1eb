"""Tests for zone types, DST status and calendar construction rules."""

from datetime import datetime, timedelta, timezone

import pytest

from gzcal import (
    UTC,
    Calendar,
    Dst,
    Geographic,
    InvalidCalendarField,
    Relative,
    utc_deviation,
)


def test_utc_deviation_adds_an_hour_for_dst():
    """Test relative offsets of geographic zones."""
    assert utc_deviation(Geographic(1), Dst.ACTIVE) == Relative(2)
    assert utc_deviation(Geographic(1), Dst.INACTIVE) == Relative(1)
    assert utc_deviation(Geographic(-3, -30), Dst.ACTIVE) == Relative(-2, -30)
    assert Geographic(-5).relative(Dst.ACTIVE) == Relative(-4)


def test_utc_deviation_keeps_relative_zones():
    """Test that a relative zone already is its own deviation."""
    assert utc_deviation(Relative(5, 30), Dst.UNSPECIFIED) == Relative(5, 30)


def test_zone_rendering():
    """Test the ±hh:mm form used by the canonical string."""
    assert str(UTC) == "+00:00"
    assert str(Geographic(1)) == "+01:00"
    assert str(Relative(-3, -30)) == "-03:30"
    assert str(Relative(0, -30)) == "-00:30"
    assert str(Geographic(14)) == "+14:00"


def test_zone_kinds_are_distinct():
    """Test that a geographic and a relative zone never compare equal."""
    assert Geographic(1) != Relative(1)
    assert Geographic(1) == Geographic(1, 0)


def test_zone_minutes_validation():
    """Test the minutes range and the shared sign rule."""
    with pytest.raises(ValueError, match="within -59..59"):
        Relative(0, 75)
    with pytest.raises(ValueError, match="share a sign"):
        Geographic(-3, 30)


def test_zone_from_seconds():
    """Test offsets given in seconds."""
    assert Relative.from_seconds(19800) == Relative(5, 30)
    assert Geographic.from_seconds(-12600) == Geographic(-3, -30)
    assert Relative.from_seconds(-1800) == Relative(0, -30)


def test_dst_tokens():
    """Test the status tokens of the canonical string."""
    assert Dst.UNSPECIFIED.token == "UTC"
    assert Dst.INACTIVE.token == "STD"
    assert Dst.ACTIVE.token == "DST"
    assert Dst.from_token("DST") == Dst.ACTIVE
    with pytest.raises(ValueError, match="Invalid DST token"):
        Dst.from_token("XXX")


def test_dst_from_flag():
    """Test tm_isdst style flags."""
    assert Dst.from_flag(1) == Dst.ACTIVE
    assert Dst.from_flag(0) == Dst.INACTIVE
    assert Dst.from_flag(-1) == Dst.UNSPECIFIED
    assert Dst.from_flag(None) == Dst.UNSPECIFIED


def test_calendar_rejects_mismatched_zone_and_dst():
    """Test that relative zones carry no DST and geographic zones need one."""
    with pytest.raises(ValueError, match="relative zone carries no DST"):
        Calendar(year=2023, month=1, day=1, zone=Relative(1), dst=Dst.ACTIVE)
    with pytest.raises(ValueError, match="needs a DST status"):
        Calendar(year=2023, month=1, day=1, zone=Geographic(1))
    with pytest.raises(TypeError, match="Geographic or Relative"):
        Calendar(year=2023, month=1, day=1, zone="+01:00")


def test_calendar_validate():
    """Test explicit range checks."""
    Calendar(year=2024, month=2, day=29).validate()

    with pytest.raises(InvalidCalendarField, match="day must be within 1..28"):
        Calendar(year=2023, month=2, day=29).validate()
    with pytest.raises(InvalidCalendarField, match="month"):
        Calendar(year=2023, month=13, day=1).validate()
    with pytest.raises(InvalidCalendarField, match="hour"):
        Calendar(year=2023, month=1, day=1, hour=24).validate()
    with pytest.raises(InvalidCalendarField, match=r"zone must be within -14:00..\+14:00"):
        Calendar(year=2023, month=1, day=1, zone=Relative(15)).validate()
    with pytest.raises(InvalidCalendarField, match=r"got \+14:30"):
        Calendar(year=2023, month=1, day=1, zone=Relative(14, 30)).validate()
    Calendar(year=2023, month=1, day=1, zone=Relative(-14)).validate()


def test_calendar_offsets_and_datetime():
    """Test utc_offset and the datetime view."""
    cal = Calendar(year=2023, month=9, day=20, hour=17, zone=Geographic(1), dst=Dst.ACTIVE)
    assert cal.utc_offset == 7200
    assert cal.relative_zone == Relative(2)
    assert cal.to_datetime() == datetime(2023, 9, 20, 15, tzinfo=timezone.utc)
    assert cal.to_datetime().utcoffset() == timedelta(hours=2)
    assert not cal.is_leap_year
