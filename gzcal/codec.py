"""Canonical text encoding of calendars and durations.

Calendar::

    2023-06-03#12:30:23#DST#+01:00
    YYYY-MM-DD#hh:mm:ss#status#zone

The status is ``STD`` or ``DST`` for a geographic zone (the zone is then the
region's standard-time offset) and ``UTC`` for a relative zone (the zone is
the actual UTC offset).

Duration::

    D-324#02:34:10
    D<days>#hh:mm:ss

Only the day count carries the sign, so a negative span shorter than a day is
written ``D-0#...``.
"""

import re

from gzcal.calendar import Calendar
from gzcal.duration import Duration, from_duration, to_duration
from gzcal.engine import refresh
from gzcal.errors import InvalidCalendarField, MalformedText
from gzcal.zone import Dst, Geographic, Relative

CALENDAR_FORMAT = (
    "{year:04d}-{month:02d}-{day:02d}#{hour:02d}:{minute:02d}:{second:02d}#{status}#{zone}"
)
DURATION_FORMAT = "D{sign}{days}#{hours:02d}:{minutes:02d}:{seconds:02d}"

_CALENDAR_RE = re.compile(
    r"(?P<year>-\d{3,}|\d{4,})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"#(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})"
    r"#(?P<status>UTC|STD|DST)"
    r"#(?P<sign>[+-])(?P<zone_hours>\d{2}):(?P<zone_minutes>\d{2})",
    re.ASCII,
)
_DURATION_RE = re.compile(
    r"D(?P<sign>-?)(?P<days>\d+)#(?P<hours>\d{2}):(?P<minutes>\d{2}):(?P<seconds>\d{2})",
    re.ASCII,
)


def encode_calendar(calendar: Calendar) -> str:
    """Render a calendar as its canonical string.

    Example:
        >>> encode_calendar(Calendar(year=2023, month=6, day=3, hour=12, minute=30,
        ...                          second=23, zone=Geographic(1), dst=Dst.ACTIVE))
        '2023-06-03#12:30:23#DST#+01:00'
    """
    return CALENDAR_FORMAT.format(
        year=calendar.year,
        month=calendar.month,
        day=calendar.day,
        hour=calendar.hour,
        minute=calendar.minute,
        second=calendar.second,
        status=calendar.dst.token,
        zone=calendar.zone,
    )


def decode_calendar(text: str) -> Calendar:
    """Parse a canonical calendar string.

    Every field is range checked; weekday, day of year and calendar week are
    computed for the result.

    Raises:
        MalformedText: If the text does not match or a field is out of range
    """
    match = _CALENDAR_RE.fullmatch(text)
    if match is None:
        raise MalformedText(
            f"Not a calendar string: {text!r}\n"
            f"Expected: YYYY-MM-DD#hh:mm:ss#STD|DST|UTC#+hh:mm\n"
            f"Example: 2023-06-03#12:30:23#DST#+01:00"
        )

    dst = Dst.from_token(match["status"])
    sign = -1 if match["sign"] == "-" else 1
    zone_type = Relative if dst == Dst.UNSPECIFIED else Geographic
    try:
        zone = zone_type(sign * int(match["zone_hours"]), sign * int(match["zone_minutes"]))
        calendar = Calendar(
            year=int(match["year"]),
            month=int(match["month"]),
            day=int(match["day"]),
            hour=int(match["hour"]),
            minute=int(match["minute"]),
            second=int(match["second"]),
            zone=zone,
            dst=dst,
        ).validate()
    except (InvalidCalendarField, ValueError) as exc:
        raise MalformedText(f"Invalid calendar string {text!r}: {exc}") from exc
    return refresh(calendar)


def encode_duration(duration: Duration) -> str:
    """Render a duration as its canonical string (normalized first).

    Example:
        >>> encode_duration(Duration(days=95, minutes=42, seconds=22))
        'D95#00:42:22'
    """
    normal = to_duration(from_duration(duration))
    return DURATION_FORMAT.format(
        sign="-" if normal.sign < 0 else "",
        days=normal.days,
        hours=normal.hours,
        minutes=normal.minutes,
        seconds=normal.seconds,
    )


def decode_duration(text: str) -> Duration:
    """Parse a canonical duration string.

    Raises:
        MalformedText: If the text does not match or a field is out of range
    """
    match = _DURATION_RE.fullmatch(text)
    if match is None:
        raise MalformedText(
            f"Not a duration string: {text!r}\n"
            f"Expected: D<days>#hh:mm:ss\n"
            f"Example: D-324#02:34:10"
        )

    hours, minutes, seconds = (int(match[name]) for name in ("hours", "minutes", "seconds"))
    if hours > 23 or minutes > 59 or seconds > 59:
        raise MalformedText(
            f"Invalid duration string {text!r}: "
            f"hours must be within 0..23, minutes and seconds within 0..59"
        )
    return Duration(
        days=int(match["days"]),
        hours=hours,
        minutes=minutes,
        seconds=seconds,
        sign=-1 if match["sign"] else 1,
    )


def decode(text: str) -> Calendar | Duration:
    """Parse either kind of canonical string; a leading ``D`` marks a duration."""
    if text.startswith("D"):
        return decode_duration(text)
    return decode_calendar(text)


def encode(value: Calendar | Duration) -> str:
    if isinstance(value, Duration):
        return encode_duration(value)
    if isinstance(value, Calendar):
        return encode_calendar(value)
    raise TypeError(
        f"Expected a Calendar or Duration, got {type(value).__name__!r}"
    )
