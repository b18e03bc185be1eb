import logging
from dataclasses import dataclass, replace
from time import time as current_time
from typing import Literal, TypeAlias

from gzcal import codec, engine, text
from gzcal.calendar import Calendar
from gzcal.duration import Duration, from_duration, to_duration
from gzcal.errors import PlatformZoneUnavailable, UnsupportedZoneTranslation
from gzcal.platform import LocalClock, WallClock, default_clock
from gzcal.zone import UTC, Dst, Geographic, Relative, TimeZone

logger = logging.getLogger(__name__)

ZoneRequest: TypeAlias = Literal["local", "utc", "as_utc"] | TimeZone


@dataclass(frozen=True, order=True)
class Time:
    """An instant as signed seconds since 1970-01-01 00:00:00 UTC.

    The seconds count is the only state; calendars and durations are derived
    on demand.

    Example:
        >>> t = Time(1078880523)
        >>> t.calendar("utc")
        Calendar(year=2004, month=3, day=10, hour=1, minute=2, second=3, ...)
        >>> (t + Duration(days=1)).to_string(zone="utc")
        '2004-03-11#01:02:03#UTC#+00:00'
    """

    seconds: int = 0

    @classmethod
    def now(cls) -> "Time":
        return cls(int(current_time()))

    @classmethod
    def from_calendar(cls, calendar: Calendar, *, y2038: bool = False) -> "Time":
        """Instant of a calendar (its zone and DST status define the offset)."""
        return cls(engine.from_calendar(calendar, y2038=y2038))

    @classmethod
    def from_duration(cls, duration: Duration) -> "Time":
        """Time span as a seconds count (e.g. for adding to another instant)."""
        return cls(from_duration(duration))

    @classmethod
    def from_fields(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        *,
        zone: TimeZone | None = None,
        dst: Dst | None = None,
        clock: LocalClock | None = None,
    ) -> "Time":
        """Instant of wall clock fields.

        Args:
            zone: Zone of the fields; None for the local zone of ``clock``
            dst: Required for a ``Geographic`` zone; for local fields it only
                picks between the two candidates of an ambiguous wall clock
            clock: Local clock (defaults to the host's)

        Raises:
            InvalidCalendarField: If a field is out of range
        """
        if zone is None:
            Calendar(
                year=year, month=month, day=day, hour=hour, minute=minute, second=second
            ).validate()
            fields = WallClock(
                year=year, month=month, day=day, hour=hour, minute=minute, second=second
            )
            clock = clock or default_clock()
            hint = Dst.UNSPECIFIED if dst is None else dst
            return cls(clock.wall_clock_fields_to_instant(fields, hint))

        if isinstance(zone, Geographic) and dst in (None, Dst.UNSPECIFIED):
            raise ValueError(
                f"A geographic zone needs a DST status to define an instant.\n"
                f"Hint: Time.from_fields(..., zone=Geographic({zone.hours}), dst=Dst.INACTIVE)\n"
                f"      or zone=Relative(...) for a plain UTC offset"
            )
        calendar = Calendar(
            year=year,
            month=month,
            day=day,
            hour=hour,
            minute=minute,
            second=second,
            zone=zone,
            dst=Dst.UNSPECIFIED if dst is None else dst,
        )
        return cls.from_calendar(calendar.validate())

    @classmethod
    def parse(
        cls, source: str, format: str | None = None, *, clock: LocalClock | None = None
    ) -> "Time":
        """Parse a canonical calendar or duration string, or text in ``format``.

        Without a format the text must be a canonical string
        (``2023-06-03#12:30:23#DST#+01:00``, or ``D95#00:42:22`` for a span).

        Raises:
            MalformedText: If the text does not match (``ParseError`` for formats)
        """
        if format is not None:
            return cls.from_text(source, format, clock=clock)
        if source.startswith("D"):
            return cls.from_duration(codec.decode_duration(source))
        return cls.from_calendar(codec.decode_calendar(source))

    @classmethod
    def from_text(
        cls, source: str, format: str | None = None, *, clock: LocalClock | None = None
    ) -> "Time":
        """Parse free-form text (or text in a ``strptime`` format).

        Text without a zone is taken as local time of ``clock``.

        Example:
            >>> Time.from_text("2023-09-20 17:00 CEST").to_string(zone="utc")
            '2023-09-20#15:00:00#UTC#+00:00'
        """
        parsed = text.parse(source, format)
        fields = parsed.fields
        return cls.from_fields(
            fields.year,
            fields.month,
            fields.day,
            fields.hour,
            fields.minute,
            fields.second,
            zone=parsed.zone,
            dst=parsed.dst,
            clock=clock,
        )

    def calendar(
        self,
        zone: ZoneRequest = "local",
        dst: Dst | None = None,
        *,
        clock: LocalClock | None = None,
        y2038: bool = False,
    ) -> Calendar:
        """Calendar view of this instant.

        Args:
            zone: One of
                - ``"local"``: the local zone, with the DST status the local
                  clock reports for this instant
                - ``"utc"``: UTC
                - ``"as_utc"``: the local wall clock with its zone expressed as a
                  plain UTC offset (DST folded into the offset)
                - ``Relative(h)``: the wall clock at UTC offset ``h``
                - ``Geographic(h)``: the wall clock in zone ``h`` with DST ``dst``;
                  without ``dst`` only the local geographic zone is accepted
            dst: DST status for a ``Geographic`` request
            clock: Local clock (defaults to the host's)
            y2038: Treat the seconds as a possibly overflowed 32-bit count

        Raises:
            UnsupportedZoneTranslation: For a foreign geographic zone without DST
        """
        seconds = self.seconds

        if isinstance(zone, str):
            if dst is not None:
                raise ValueError(
                    f"dst only applies to a Geographic zone request, got zone={zone!r}"
                )
            if zone == "utc":
                return engine.to_calendar(seconds, UTC, Dst.UNSPECIFIED, y2038=y2038)
            if zone in ("local", "as_utc"):
                local_zone, local_dst = self._local_zone(clock, y2038)
                local = engine.to_calendar(seconds, local_zone, local_dst, y2038=y2038)
                if zone == "local":
                    return local
                return replace(local, zone=local.relative_zone, dst=Dst.UNSPECIFIED)
            raise ValueError(
                f"Unknown zone request: {zone!r}\n"
                f"Valid requests: 'local', 'utc', 'as_utc', Relative(h), Geographic(h)"
            )

        if isinstance(zone, Relative):
            if dst not in (None, Dst.UNSPECIFIED):
                raise ValueError(
                    f"A relative zone carries no DST information, got dst={dst!r}.\n"
                    f"Hint: calendar(Geographic({zone.hours}), dst) for a geographic zone"
                )
            return engine.to_calendar(seconds, zone, Dst.UNSPECIFIED, y2038=y2038)

        if not isinstance(zone, Geographic):
            raise TypeError(
                f"Zone request must be 'local', 'utc', 'as_utc', Geographic or Relative, "
                f"got {type(zone).__name__!r}"
            )

        if dst is not None and dst != Dst.UNSPECIFIED:
            return engine.to_calendar(seconds, zone, dst, y2038=y2038)

        local_zone, local_dst = self._local_zone(clock, y2038)
        if local_zone == zone:
            return engine.to_calendar(seconds, zone, local_dst, y2038=y2038)
        raise UnsupportedZoneTranslation(
            f"Cannot show geographic zone {zone} without DST information: "
            f"it is not the local zone ({local_zone}).\n"
            f"Hint: pass the DST status explicitly:\n"
            f"  time.calendar(Geographic({zone.hours}), Dst.INACTIVE)\n"
            f"Or ask for a plain UTC offset:\n"
            f"  time.calendar(Relative({zone.hours}))"
        )

    def _local_zone(self, clock: LocalClock | None, y2038: bool) -> tuple[TimeZone, Dst]:
        """Local zone and DST of this instant, or of the current moment as fallback."""
        clock = clock or default_clock()
        instant = engine.effective_seconds(self.seconds, y2038=y2038)
        try:
            return _classify(*clock.zone_and_dst(instant))
        except PlatformZoneUnavailable as exc:
            logger.warning(
                "Local zone unavailable for %d (%s), using the current moment's zone", instant, exc
            )
            return _classify(*clock.zone_and_dst(int(current_time())))

    def duration(self) -> Duration:
        """This seconds count as a span (days, hours, minutes, seconds, sign)."""
        return to_duration(self.seconds)

    def to_string(
        self,
        format: str | None = None,
        zone: ZoneRequest = "local",
        dst: Dst | None = None,
        *,
        clock: LocalClock | None = None,
        y2038: bool = False,
    ) -> str:
        """Render the calendar view: canonical string, or ``strftime`` style ``format``.

        In a format ``%U`` is the DST status token and ``%z`` the zone as ±hh:mm.
        """
        calendar = self.calendar(zone, dst, clock=clock, y2038=y2038)
        if format is None:
            return codec.encode_calendar(calendar)
        return text.format(calendar, format)

    def to_duration_string(self) -> str:
        return codec.encode_duration(self.duration())

    def __str__(self) -> str:
        return self.to_string()

    def __add__(self, other: "Time | Duration | int") -> "Time":
        seconds = _seconds_of(other)
        if seconds is None:
            return NotImplemented
        return Time(self.seconds + seconds)

    __radd__ = __add__

    def __sub__(self, other: "Time | Duration | int") -> "Time":
        seconds = _seconds_of(other)
        if seconds is None:
            return NotImplemented
        return Time(self.seconds - seconds)

    def __neg__(self) -> "Time":
        return Time(-self.seconds)


def _seconds_of(value: object) -> int | None:
    if isinstance(value, Time):
        return value.seconds
    if isinstance(value, Duration):
        return from_duration(value)
    if isinstance(value, int):
        return value
    return None


def _classify(offset: int, dst: Dst) -> tuple[TimeZone, Dst]:
    # Without a DST status only the relative offset is known
    if dst == Dst.UNSPECIFIED:
        return Relative.from_seconds(offset), dst
    return Geographic.from_seconds(offset), dst


def local_time_zone(clock: LocalClock | None = None) -> tuple[TimeZone, Dst]:
    """Geographic zone and DST status of the local clock right now.

    Returns a ``Relative`` zone with ``Dst.UNSPECIFIED`` when the clock cannot
    tell whether DST is active.
    """
    clock = clock or default_clock()
    return _classify(*clock.zone_and_dst(int(current_time())))
