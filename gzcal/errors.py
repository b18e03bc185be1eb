"""Exceptions raised by gzcal.

Arithmetic and calendar decomposition never raise. Only text decoding,
explicit calendar validation, geographic zone translation and the local
clock can fail, and they do so with one of the classes below.
"""


class GzcalError(Exception):
    """Base class for all gzcal errors."""


class MalformedText(GzcalError, ValueError):
    """Text does not match the fixed-field calendar or duration grammar."""


class ParseError(MalformedText):
    """The general-purpose parser could not read the text or its zone token."""


class InvalidCalendarField(GzcalError, ValueError):
    """A calendar field lies outside its valid range."""


class UnsupportedZoneTranslation(GzcalError, ValueError):
    """Translation between geographic zones was requested without DST information."""


class PlatformZoneUnavailable(GzcalError, RuntimeError):
    """The local-time facility cannot provide a zone for the requested instant."""
