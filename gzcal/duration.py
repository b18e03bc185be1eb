"""Elapsed time spans without calendar semantics.

Years and months are deliberately not duration units: their length depends on
where they fall in the calendar. A duration is days, hours, minutes and
seconds plus a sign.
"""

from dataclasses import dataclass

from gzcal.util import DAY, HOUR, MINUTE


@dataclass(frozen=True, kw_only=True)
class Duration:
    """Absolute elapsed span.

    Attributes:
        days: Number of days (>= 0)
        hours: Number of hours (>= 0)
        minutes: Number of minutes (>= 0)
        seconds: Number of seconds (>= 0)
        sign: +1 or -1

    Each field may be as large as wanted; the span is the sum of all of them.
    ``to_duration()`` always produces the normalized form (hours < 24,
    minutes and seconds < 60).
    """

    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    sign: int = 1

    def __post_init__(self) -> None:
        if self.sign not in (1, -1):
            raise ValueError(f"Duration sign must be 1 or -1, got {self.sign}")
        for name in ("days", "hours", "minutes", "seconds"):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(
                    f"Duration {name} must be >= 0, got {value}.\n"
                    f"Hint: put the direction into sign: "
                    f"Duration({name}={-value}, sign=-1)"
                )

    @property
    def total_seconds(self) -> int:
        return from_duration(self)


def to_duration(seconds: int) -> Duration:
    """Decompose signed seconds into a normalized duration.

    Example:
        >>> to_duration(-90061)
        Duration(days=1, hours=1, minutes=1, seconds=1, sign=-1)
    """
    sign = -1 if seconds < 0 else 1
    days, rest = divmod(abs(seconds), DAY)
    hours, rest = divmod(rest, HOUR)
    minutes, secs = divmod(rest, MINUTE)
    return Duration(days=days, hours=hours, minutes=minutes, seconds=secs, sign=sign)


def from_duration(duration: Duration) -> int:
    """Signed total of a duration in seconds."""
    total = (
        duration.days * DAY
        + duration.hours * HOUR
        + duration.minutes * MINUTE
        + duration.seconds
    )
    return duration.sign * total
