from __future__ import annotations

from importlib import metadata

from .date import ZERO, ZERO_TIME, Date, must_from_string, must_parse
from .errors import (
    DateError,
    DateParseError,
    InvalidDateLiteral,
    MalformedDateError,
    UnsupportedScanTypeError,
)

try:
    __version__ = metadata.version("jdndate")
except metadata.PackageNotFoundError:
    __version__ = "0.0.0+local"

__all__ = [
    "ZERO",
    "ZERO_TIME",
    "Date",
    "DateError",
    "DateParseError",
    "InvalidDateLiteral",
    "MalformedDateError",
    "UnsupportedScanTypeError",
    "must_from_string",
    "must_parse",
]
