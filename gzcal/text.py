"""Free-form and format-driven text conversion.

Thin layer over ``dateutil.parser`` and ``datetime.strptime``/``strftime`` for
text that is not in the canonical ``YYYY-MM-DD#hh:mm:ss#STD#+01:00`` shape
(see ``gzcal.codec`` for that one).

Zone abbreviations are mapped to a geographic zone plus DST status, so
"14:00 CEST" is understood as ``Geographic(1)`` with DST active rather than a
bare +02:00 offset.
"""

import logging
import re
import warnings
from dataclasses import dataclass
from datetime import datetime

from dateutil import parser, tz

from gzcal.calendar import Calendar
from gzcal.errors import ParseError
from gzcal.platform import WallClock
from gzcal.util import HOUR
from gzcal.zone import UTC, Dst, Geographic, Relative, TimeZone

logger = logging.getLogger(__name__)

# abbreviation -> (standard-time hours, DST status); None marks plain UTC
_ZONE_ABBREVIATIONS: dict[str, tuple[int, Dst] | None] = {
    "UTC": None,
    "GMT": None,
    "WET": (0, Dst.INACTIVE),
    "WEST": (0, Dst.ACTIVE),
    "BST": (0, Dst.ACTIVE),
    "CET": (1, Dst.INACTIVE),
    "CEST": (1, Dst.ACTIVE),
    "MEZ": (1, Dst.INACTIVE),
    "MESZ": (1, Dst.ACTIVE),
    "EET": (2, Dst.INACTIVE),
    "EEST": (2, Dst.ACTIVE),
    "EST": (-5, Dst.INACTIVE),
    "EDT": (-5, Dst.ACTIVE),
    "CST": (-6, Dst.INACTIVE),
    "CDT": (-6, Dst.ACTIVE),
    "MST": (-7, Dst.INACTIVE),
    "MDT": (-7, Dst.ACTIVE),
    "PST": (-8, Dst.INACTIVE),
    "PDT": (-8, Dst.ACTIVE),
}


def _tzinfos() -> dict[str, tz.tzoffset]:
    infos = {}
    for name, rule in _ZONE_ABBREVIATIONS.items():
        if rule is None:
            infos[name] = tz.tzoffset(name, 0)
        else:
            hours, dst = rule
            infos[name] = tz.tzoffset(name, hours * HOUR + (HOUR if dst == Dst.ACTIVE else 0))
    return infos


_TZINFOS = _tzinfos()

# %U is the status token, %z the ±hh:mm offset; %% stays literal
_DIRECTIVE = re.compile(r"%[%Uz]")


@dataclass(frozen=True)
class Parsed:
    """Result of parsing text.

    Attributes:
        fields: Wall clock fields as written
        zone: Zone found in the text, or None when the text names none
        dst: DST status matching ``zone``
    """

    fields: WallClock
    zone: TimeZone | None = None
    dst: Dst = Dst.UNSPECIFIED


def parse(text: str, format: str | None = None) -> Parsed:
    """Parse date/time text.

    Args:
        text: Text to parse
        format: ``strptime`` format, or None for free-form parsing

    Returns:
        Parsed wall clock fields with the zone the text carries (if any)

    Raises:
        ParseError: If the text cannot be parsed or names an unknown zone

    Example:
        >>> parse("2023-09-20 17:00 CEST").zone
        Geographic(hours=1, minutes=0)
    """
    if format is None:
        moment = _parse_free_form(text)
    else:
        try:
            moment = datetime.strptime(text, format)
        except ValueError as exc:
            raise ParseError(
                f"Cannot parse {text!r} with format {format!r}: {exc}"
            ) from exc

    zone, dst = _zone_of(moment)
    return Parsed(fields=WallClock.from_datetime(moment), zone=zone, dst=dst)


def _parse_free_form(text: str) -> datetime:
    with warnings.catch_warnings():
        warnings.simplefilter("error", parser.UnknownTimezoneWarning)
        try:
            return parser.parse(text, tzinfos=_TZINFOS)
        except parser.UnknownTimezoneWarning as exc:
            raise ParseError(
                f"Unknown zone in {text!r}: {exc}\n"
                f"Hint: write the offset numerically (e.g. +01:00) or use one of: "
                f"{', '.join(_ZONE_ABBREVIATIONS)}"
            ) from exc
        except (parser.ParserError, ValueError, OverflowError) as exc:
            raise ParseError(f"Cannot parse {text!r}: {exc}") from exc


def _zone_of(moment: datetime) -> tuple[TimeZone | None, Dst]:
    offset = moment.utcoffset()
    if offset is None:
        return None, Dst.UNSPECIFIED

    name = moment.tzname()
    if name in _ZONE_ABBREVIATIONS:
        rule = _ZONE_ABBREVIATIONS[name]
        if rule is None:
            return UTC, Dst.UNSPECIFIED
        hours, dst = rule
        return Geographic(hours), dst

    logger.debug("Zone %r of parsed text taken as a plain UTC offset", name)
    return Relative.from_seconds(int(offset.total_seconds())), Dst.UNSPECIFIED


def format(calendar: Calendar, format: str) -> str:
    """Render a calendar with a ``strftime`` format.

    Besides the usual directives, ``%U`` renders the DST status token
    (UTC/STD/DST) and ``%z`` the offset as ``±hh:mm`` (geographic zones print
    their standard-time offset, as in the canonical string).

    Example:
        >>> format(cal, "%d.%m.%Y %H:%M %U")
        '20.09.2023 17:00 DST'
    """
    replacements = {"%U": calendar.dst.token, "%z": str(calendar.zone), "%%": "%%"}
    prepared = _DIRECTIVE.sub(lambda match: replacements[match.group()], format)
    if not 1 <= calendar.year <= 9999:
        raise ValueError(
            f"Formatted output supports years 1-9999, got {calendar.year}.\n"
            f"Hint: use the canonical string (gzcal.codec.encode_calendar) for other years"
        )
    return calendar.to_datetime().strftime(prepared)
