from importlib.resources import files

from .calendar import Calendar
from .codec import (
    decode,
    decode_calendar,
    decode_duration,
    encode,
    encode_calendar,
    encode_duration,
)
from .core import Time, ZoneRequest, local_time_zone
from .duration import Duration, from_duration, to_duration
from .engine import from_calendar, to_calendar
from .errors import (
    GzcalError,
    InvalidCalendarField,
    MalformedText,
    ParseError,
    PlatformZoneUnavailable,
    UnsupportedZoneTranslation,
)
from .platform import LocalClock, SystemClock, WallClock
from .reconcile import set_time_zone, translate
from .util import DAY, HOUR, MINUTE, SECOND, WEEK, unsigned_modulo
from .zone import UTC, Dst, Geographic, Relative, TimeZone, utc_deviation

# Load documentation files for programmatic access by agents and code-aware tools
_docs_path = files(__package__) / "docs"
docs = {
    "readme": (_docs_path / "README.md").read_text(),
    "api": (_docs_path / "API.md").read_text(),
}

__all__ = [
    "Time",
    "Calendar",
    "Duration",
    "TimeZone",
    "Geographic",
    "Relative",
    "UTC",
    "Dst",
    "ZoneRequest",
    "LocalClock",
    "SystemClock",
    "WallClock",
    "to_calendar",
    "from_calendar",
    "to_duration",
    "from_duration",
    "utc_deviation",
    "translate",
    "set_time_zone",
    "local_time_zone",
    "encode",
    "decode",
    "encode_calendar",
    "decode_calendar",
    "encode_duration",
    "decode_duration",
    "unsigned_modulo",
    "SECOND",
    "MINUTE",
    "HOUR",
    "DAY",
    "WEEK",
    "GzcalError",
    "MalformedText",
    "ParseError",
    "InvalidCalendarField",
    "UnsupportedZoneTranslation",
    "PlatformZoneUnavailable",
    "docs",
]
