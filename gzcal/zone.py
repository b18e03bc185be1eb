"""Time zone and daylight-saving types.

A *geographic* zone is a region's standard-time offset from UTC and does not
change when the clocks are moved forward. A *relative* zone is the actual
wall-clock deviation from UTC. The two only coincide outside of DST:

    relative = geographic + 1 hour    (DST active)
    relative = geographic             (DST inactive)

Which of the two a calendar carries is encoded in the type of its zone, and
the DST flag that goes with it must agree (see ``Calendar``).
"""

from dataclasses import dataclass
from enum import IntEnum

from typing_extensions import Self

from gzcal.util import HOUR, MINUTE

# Largest offset in use anywhere (Line Islands, +14:00)
MAX_ZONE_HOURS = 14


class Dst(IntEnum):
    """Daylight-saving status of a wall clock value."""

    UNSPECIFIED = -1
    INACTIVE = 0
    ACTIVE = 1

    @property
    def token(self) -> str:
        """Status token of the canonical calendar string."""
        return _TOKENS[self]

    @classmethod
    def from_token(cls, token: str) -> "Dst":
        for dst, name in _TOKENS.items():
            if name == token:
                return dst
        valid = ", ".join(_TOKENS.values())
        raise ValueError(f"Invalid DST token: {token!r}\nValid tokens: {valid}")

    @classmethod
    def from_flag(cls, flag: int | None) -> "Dst":
        """Map a ``tm_isdst`` style flag (negative or None = unknown)."""
        if flag is None or flag < 0:
            return cls.UNSPECIFIED
        return cls.ACTIVE if flag > 0 else cls.INACTIVE


_TOKENS: dict[Dst, str] = {
    Dst.UNSPECIFIED: "UTC",
    Dst.INACTIVE: "STD",
    Dst.ACTIVE: "DST",
}


@dataclass(frozen=True)
class TimeZone:
    """Offset from UTC in hours and minutes.

    ``minutes`` carries the same sign as ``hours``, so -03:30 is
    ``TimeZone(-3, -30)``. Use the ``Geographic`` or ``Relative`` subclasses;
    the base class only exists for typing and shared arithmetic.
    """

    hours: int
    minutes: int = 0

    def __post_init__(self) -> None:
        if abs(self.minutes) >= 60:
            raise ValueError(
                f"Zone minutes must be within -59..59, got {self.minutes}.\n"
                f"Hint: express whole hours in the hours field: "
                f"{type(self).__name__}(5, 30) for +05:30"
            )
        if self.hours * self.minutes < 0:
            raise ValueError(
                f"Zone hours and minutes must share a sign, "
                f"got hours={self.hours}, minutes={self.minutes}.\n"
                f"Example: {type(self).__name__}(-3, -30) for -03:30"
            )

    @property
    def seconds(self) -> int:
        return self.hours * HOUR + self.minutes * MINUTE

    @classmethod
    def from_seconds(cls, seconds: int) -> Self:
        """Build a zone from an offset in seconds (rounded to whole minutes)."""
        sign = -1 if seconds < 0 else 1
        hours, minutes = divmod(round(abs(seconds) / MINUTE), 60)
        return cls(sign * hours, sign * minutes)

    def __str__(self) -> str:
        sign = "-" if self.seconds < 0 else "+"
        hours, minutes = divmod(abs(self.seconds) // MINUTE, 60)
        return f"{sign}{hours:02d}:{minutes:02d}"


@dataclass(frozen=True)
class Geographic(TimeZone):
    """Standard-time offset of a region, independent of DST."""

    def relative(self, dst: Dst) -> "Relative":
        return utc_deviation(self, dst)


@dataclass(frozen=True)
class Relative(TimeZone):
    """Actual deviation from UTC; carries no DST information."""


UTC = Relative(0)


def utc_deviation(zone: TimeZone, dst: Dst) -> Relative:
    """Return the relative (UTC) offset for a zone and DST status.

    Relative zones are returned unchanged. A geographic zone gains one hour
    when DST is active.

    Example:
        >>> utc_deviation(Geographic(1), Dst.ACTIVE)
        Relative(hours=2, minutes=0)
    """
    if isinstance(zone, Relative):
        return zone
    shift = HOUR if dst == Dst.ACTIVE else 0
    return Relative.from_seconds(zone.seconds + shift)
