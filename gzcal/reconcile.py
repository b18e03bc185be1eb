"""Moving calendar values between zones.

Translating to a *relative* offset is always possible: the instant is known,
so the wall clock is simply shifted by the difference of the two UTC
offsets. Translating to another *geographic* zone is not: whether DST applies
there depends on the region's rules for that date, which this library does
not have. Such requests must carry the target DST status explicitly.
"""

import logging
from dataclasses import replace

from gzcal.calendar import Calendar
from gzcal.engine import refresh
from gzcal.errors import UnsupportedZoneTranslation
from gzcal.tables import days_in_month
from gzcal.util import DAY, HOUR, MINUTE
from gzcal.zone import Dst, Geographic, Relative, TimeZone, utc_deviation

logger = logging.getLogger(__name__)


def set_time_zone(calendar: Calendar, zone: TimeZone, dst: Dst = Dst.UNSPECIFIED) -> Calendar:
    """Re-stamp a calendar with another zone, keeping the instant.

    The offset difference is carried through hour, day, month and year
    (month lengths are leap-year aware), then weekday, day of year and
    calendar week are recomputed for the new date.

    Args:
        calendar: Source calendar
        zone: Target zone
        dst: DST status for a geographic target (UNSPECIFIED for relative)

    Returns:
        New calendar at the target zone
    """
    delta = utc_deviation(zone, dst).seconds - calendar.utc_offset
    shifted = _shift_wall_clock(calendar, delta)
    return refresh(replace(shifted, zone=zone, dst=dst))


def translate(calendar: Calendar, target: TimeZone, dst: Dst | None = None) -> Calendar:
    """Express a calendar's instant in another zone.

    Args:
        calendar: Source calendar
        target: ``Relative`` offset, or ``Geographic`` zone together with ``dst``
        dst: DST status at the target; required for a different geographic zone

    Returns:
        Calendar showing the same instant at ``target``

    Raises:
        UnsupportedZoneTranslation: For a geographic target without DST status

    Example:
        >>> cal = Calendar(year=2023, month=9, day=20, hour=17,
        ...                zone=Geographic(1), dst=Dst.ACTIVE)
        >>> translate(cal, Relative(5)).hour
        20
    """
    if isinstance(target, Relative):
        if dst not in (None, Dst.UNSPECIFIED):
            raise ValueError(
                f"A relative zone carries no DST information, got dst={dst!r}.\n"
                f"Hint: translate(cal, Geographic({target.hours}), dst) for a "
                f"geographic target"
            )
        return set_time_zone(calendar, target, Dst.UNSPECIFIED)

    if not isinstance(target, Geographic):
        raise TypeError(
            f"Translation target must be Geographic or Relative, "
            f"got {type(target).__name__!r}"
        )

    if dst is None or dst == Dst.UNSPECIFIED:
        if calendar.zone == target:
            return calendar
        raise UnsupportedZoneTranslation(
            f"Cannot translate from {type(calendar.zone).__name__} zone "
            f"{calendar.zone} to geographic zone {target} without DST information.\n"
            f"Whether DST applies at the target depends on its region, not its offset.\n"
            f"Hint: pass the target DST status explicitly:\n"
            f"  translate(cal, Geographic({target.hours}), Dst.INACTIVE)\n"
            f"Or translate to a plain UTC offset:\n"
            f"  translate(cal, Relative({target.hours}))"
        )

    logger.debug("Translating %s to %s with caller supplied %s", calendar.zone, target, dst.name)
    return set_time_zone(calendar, target, dst)


def _shift_wall_clock(calendar: Calendar, delta: int) -> Calendar:
    """Add ``delta`` seconds to the wall clock fields with day/month/year carries."""
    total = calendar.hour * HOUR + calendar.minute * MINUTE + calendar.second + delta
    day_delta, rest = divmod(total, DAY)
    hour, rest = divmod(rest, HOUR)
    minute, second = divmod(rest, MINUTE)

    year, month, day = calendar.year, calendar.month, calendar.day + day_delta
    while day > days_in_month(year, month):
        day -= days_in_month(year, month)
        month += 1
        if month > 12:
            month = 1
            year += 1
    while day < 1:
        month -= 1
        if month < 1:
            month = 12
            year -= 1
        day += days_in_month(year, month)

    return replace(
        calendar, year=year, month=month, day=day, hour=hour, minute=minute, second=second
    )
