from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from gzcal.errors import InvalidCalendarField
from gzcal.tables import days_in_month
from gzcal.util import HOUR, WEEKDAYS, is_leap_year
from gzcal.zone import UTC, Dst, Geographic, MAX_ZONE_HOURS, Relative, TimeZone, utc_deviation


@dataclass(frozen=True, kw_only=True)
class Calendar:
    """Human readable view of an instant, bound to a zone and DST status.

    Attributes:
        year: Gregorian year (any sign, no upper bound)
        month: 1-12
        day: 1-31
        hour: 0-23
        minute: 0-59
        second: 0-59
        zone: ``Geographic`` (standard-time offset) or ``Relative`` (UTC offset)
        dst: ``Dst.ACTIVE``/``Dst.INACTIVE`` for geographic zones,
            ``Dst.UNSPECIFIED`` for relative zones
        day_in_week: 1 (Monday) to 7 (Sunday), None until computed
        day_in_year: 1-366, None until computed
        calendar_week: Full Monday-to-Sunday weeks of the year, week 1 starting
            with the first Monday; 0 for days still belonging to the previous
            year's last week. None until computed.
        leap_second: Reserved, not computed
        pico_seconds: Reserved, not computed

    Field ranges are a precondition of the conversion engine and are not
    checked on construction; call ``validate()`` for an explicit check.
    """

    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0
    zone: TimeZone = UTC
    dst: Dst = Dst.UNSPECIFIED
    day_in_week: int | None = None
    day_in_year: int | None = None
    calendar_week: int | None = None
    leap_second: int = 0
    pico_seconds: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.zone, (Geographic, Relative)):
            raise TypeError(
                f"Calendar zone must be Geographic or Relative, "
                f"got {type(self.zone).__name__!r}"
            )
        if isinstance(self.zone, Relative) and self.dst != Dst.UNSPECIFIED:
            raise ValueError(
                f"A relative zone carries no DST information, got dst={self.dst!r}.\n"
                f"Hint: use Geographic({self.zone.hours}) for a standard-time zone "
                f"with DST, or dst=Dst.UNSPECIFIED for a plain UTC offset"
            )
        if isinstance(self.zone, Geographic) and self.dst == Dst.UNSPECIFIED:
            raise ValueError(
                f"A geographic zone needs a DST status (ACTIVE or INACTIVE).\n"
                f"Hint: use Relative({self.zone.hours}) if the DST status is unknown"
            )

    @property
    def relative_zone(self) -> Relative:
        """The actual UTC offset of this wall clock value."""
        return utc_deviation(self.zone, self.dst)

    @property
    def utc_offset(self) -> int:
        """UTC offset in seconds."""
        return self.relative_zone.seconds

    @property
    def is_leap_year(self) -> bool:
        return is_leap_year(self.year)

    @property
    def weekday_name(self) -> str | None:
        if self.day_in_week is None:
            return None
        return WEEKDAYS[self.day_in_week - 1]

    def validate(self) -> "Calendar":
        """Check every field against its range and return self.

        Raises:
            InvalidCalendarField: If a field is out of range
        """
        checks = [
            ("month", self.month, 1, 12),
            ("hour", self.hour, 0, 23),
            ("minute", self.minute, 0, 59),
            ("second", self.second, 0, 59),
        ]
        for name, value, low, high in checks:
            if not low <= value <= high:
                raise InvalidCalendarField(
                    f"Calendar {name} must be within {low}..{high}, got {value}"
                )
        if abs(self.zone.seconds) > MAX_ZONE_HOURS * HOUR:
            raise InvalidCalendarField(
                f"Calendar zone must be within -{MAX_ZONE_HOURS:02d}:00..+{MAX_ZONE_HOURS:02d}:00, "
                f"got {self.zone}"
            )
        last_day = days_in_month(self.year, self.month)
        if not 1 <= self.day <= last_day:
            raise InvalidCalendarField(
                f"Calendar day must be within 1..{last_day} "
                f"for {self.year:04d}-{self.month:02d}, got {self.day}"
            )
        return self

    def to_datetime(self) -> datetime:
        """Timezone-aware datetime at this calendar's UTC offset.

        Only years 1-9999 can be represented by ``datetime``.
        """
        return datetime(
            self.year,
            self.month,
            self.day,
            self.hour,
            self.minute,
            self.second,
            tzinfo=timezone(timedelta(seconds=self.utc_offset)),
        )
