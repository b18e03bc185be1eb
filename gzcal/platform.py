"""Access to the host's local-time facility.

The conversion engine never looks at the host clock itself. Everything that
depends on the local zone (the "local" calendar view, building an instant from
local wall clock fields) goes through a ``LocalClock``. ``SystemClock`` reads
named zones through ``zoneinfo`` and the host zone through python-dateutil;
tests and callers with their own zone rules can supply any other
implementation.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone, tzinfo
from functools import cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil import tz
from typing_extensions import override

from gzcal.errors import PlatformZoneUnavailable
from gzcal.util import HOUR
from gzcal.zone import Dst

logger = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class WallClock:
    """Plain wall clock fields as the platform reports them.

    Attributes:
        weekday: 1 (Monday) to 7 (Sunday)
        yearday: 1-366
    """

    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0
    weekday: int | None = None
    yearday: int | None = None

    @classmethod
    def from_datetime(cls, moment: datetime) -> "WallClock":
        return cls(
            year=moment.year,
            month=moment.month,
            day=moment.day,
            hour=moment.hour,
            minute=moment.minute,
            second=moment.second,
            weekday=moment.isoweekday(),
            yearday=moment.timetuple().tm_yday,
        )


class LocalClock(ABC):
    """Local-time facility: zone and DST rules of the host (or a stand-in)."""

    @abstractmethod
    def zone_and_dst(self, instant: int) -> tuple[int, Dst]:
        """Return ``(geographic offset in seconds, DST status)`` at ``instant``.

        When DST cannot be determined the relative offset is returned together
        with ``Dst.UNSPECIFIED``.

        Raises:
            PlatformZoneUnavailable: If the instant is outside the platform's range
        """
        pass

    @abstractmethod
    def wall_clock_fields_to_instant(self, fields: WallClock, dst_hint: Dst) -> int:
        """Return the Unix seconds of a local wall clock value.

        ``dst_hint`` selects between the two candidates of an ambiguous wall
        clock (the repeated hour when DST ends).
        """
        pass

    def to_wall_clock_fields(self, instant: int, zone_offset: int) -> WallClock:
        """Wall clock fields of ``instant`` at a fixed UTC offset in seconds."""
        try:
            moment = datetime.fromtimestamp(
                instant, tz=timezone(timedelta(seconds=zone_offset))
            )
        except (OverflowError, OSError, ValueError) as exc:
            raise PlatformZoneUnavailable(
                f"Instant {instant} is outside the platform's datetime range"
            ) from exc
        return WallClock.from_datetime(moment)


class SystemClock(LocalClock):
    """Local clock for a named IANA zone or the host's zone.

    Named zones are read with ``zoneinfo.ZoneInfo``; the host zone uses
    ``dateutil.tz.tzlocal()``. Ambiguous and imaginary wall clocks are resolved
    with dateutil's ``enfold``/``resolve_imaginary`` helpers.

    Args:
        tz_name: IANA zone name (e.g. "Europe/Berlin"), or None for the host's
            local zone

    Only whole-hour DST is representable as a geographic zone plus DST flag;
    instants with any other DST amount (Lord Howe, negative DST) are reported
    as a relative offset with ``Dst.UNSPECIFIED``.
    """

    def __init__(self, tz_name: str | None = None):
        if tz_name is None:
            zone: tzinfo = tz.tzlocal()
        else:
            try:
                zone = ZoneInfo(tz_name)
            except (ZoneInfoNotFoundError, ValueError) as exc:
                raise ValueError(
                    f"Unknown time zone name: {tz_name!r}\n"
                    f"Hint: use an IANA name such as 'Europe/Berlin' or 'US/Pacific',\n"
                    f"      or SystemClock() for the host's local zone"
                ) from exc
        self.tz_name: str | None = tz_name
        self.zone: tzinfo = zone

    @override
    def zone_and_dst(self, instant: int) -> tuple[int, Dst]:
        try:
            moment = datetime.fromtimestamp(instant, tz=self.zone)
        except (OverflowError, OSError, ValueError) as exc:
            raise PlatformZoneUnavailable(
                f"Local zone is unavailable for instant {instant}: {exc}"
            ) from exc

        offset = moment.utcoffset()
        if offset is None:
            raise PlatformZoneUnavailable(
                f"Local zone {self.zone!r} reports no UTC offset for instant {instant}"
            )
        relative = int(offset.total_seconds())
        shift = moment.dst()
        if shift is None:
            logger.warning(
                "DST status unknown for %s at %d, falling back to relative offset",
                self.zone,
                instant,
            )
            return relative, Dst.UNSPECIFIED
        shift_seconds = int(shift.total_seconds())
        if shift_seconds == 0:
            return relative, Dst.INACTIVE
        if shift_seconds == HOUR:
            return relative - HOUR, Dst.ACTIVE
        logger.warning(
            "DST of %d s for %s at %d is not a whole hour, falling back to relative offset",
            shift_seconds,
            self.zone,
            instant,
        )
        return relative, Dst.UNSPECIFIED

    @override
    def wall_clock_fields_to_instant(self, fields: WallClock, dst_hint: Dst) -> int:
        try:
            moment = datetime(
                fields.year,
                fields.month,
                fields.day,
                fields.hour,
                fields.minute,
                fields.second,
                tzinfo=self.zone,
            )
        except (OverflowError, ValueError) as exc:
            raise PlatformZoneUnavailable(
                f"Local zone is unavailable for {fields}: {exc}"
            ) from exc

        if not tz.datetime_exists(moment):
            logger.debug("Wall clock %s does not exist in %s, moving forward", fields, self.zone)
            moment = tz.resolve_imaginary(moment)
        elif tz.datetime_ambiguous(moment):
            # fold=0 is the first (DST) occurrence of the repeated hour
            moment = tz.enfold(moment, fold=1 if dst_hint == Dst.INACTIVE else 0)
        return int(moment.timestamp())

    def __repr__(self) -> str:
        return f"SystemClock({self.tz_name!r})"


@cache
def default_clock() -> SystemClock:
    """Shared clock for the host's local zone."""
    return SystemClock()
