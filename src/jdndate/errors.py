"""Error definitions for date parsing and conversion."""

from __future__ import annotations


class DateError(ValueError):
    """Base class for input that cannot be turned into a date."""


class MalformedDateError(DateError):
    """Raised when text does not have the shape of a date."""


class DateParseError(DateError):
    """Raised when a date component or layout fails to parse."""


class UnsupportedScanTypeError(TypeError):
    """Raised when a database value has a type that cannot be scanned."""


class InvalidDateLiteral(RuntimeError):
    """Raised by the ``must_*`` helpers when a literal does not parse.

    Not a ``ValueError``: a bad literal is a programming error, not bad input.
    """
