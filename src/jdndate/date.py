"""Calendar dates stored as a single Julian Day Number.

``Date`` wraps one integer, so equality, hashing and ordering are plain integer
operations and values work as dict keys or sort keys. ``Date()`` (JDN 0) is the
"no date" sentinel: it prints as an empty string, stores as NULL and converts
to :data:`ZERO_TIME`.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import TYPE_CHECKING, Any, Final, Protocol, overload

from pydantic_core import core_schema

from . import julian
from .errors import (
    DateError,
    DateParseError,
    InvalidDateLiteral,
    MalformedDateError,
    UnsupportedScanTypeError,
)

if TYPE_CHECKING:
    from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
    from pydantic.json_schema import JsonSchemaValue

log = logging.getLogger(__name__)

ZERO_TIME: Final[datetime] = datetime.min.replace(tzinfo=UTC)
TEXT_PATTERN: Final[str] = r"^(\d{4}-\d{2}-\d{2})?$"

_NUMBER = re.compile(r"[+-]?[0-9]+")
_DIRECTIVE = re.compile(r"%.")


class Clock(Protocol):
    def __call__(self) -> datetime: ...


def _utcnow() -> datetime:
    return datetime.now(UTC)


def is_zero_time(value: date) -> bool:
    """Return whether ``value`` is the zero timestamp (0001-01-01 at midnight UTC)."""

    if isinstance(value, datetime):
        if value.utcoffset():
            return False
        return value.replace(tzinfo=None) == datetime.min
    return value == date.min


def _parse_number(part: str, text: str) -> int:
    if _NUMBER.fullmatch(part) is None:
        raise DateParseError(f"cannot convert '{text}' to date: '{part}' is not a number")
    return int(part)


def _ymd_int_to_jdn(value: int) -> int:
    year, rest = divmod(value, 10000)
    month, day = divmod(rest, 100)
    return julian.ymd_to_jdn(year, month, day)


def _decode(data: bytes | bytearray | memoryview, encoding: str) -> str:
    try:
        return bytes(data).decode(encoding)
    except UnicodeDecodeError as exc:
        raise MalformedDateError(f"cannot convert {bytes(data)!r} to date") from exc


@dataclass(frozen=True, order=True, slots=True)
class Date:
    """A calendar date in the proleptic Gregorian calendar.

    ``jd`` is the Julian Day Number, or ``0`` for the sentinel. Values are
    immutable; the database and text adapters (``scan``, ``unmarshal_text``)
    are classmethods that build new instances.

    Examples:
        >>> d = Date.from_string("2010-11-12")
        >>> str(d.add_date(3, -2, 1))
        '2013-09-13'
        >>> d.add_date(0, 0, 1) - d
        1
    """

    jd: int = 0

    # Construction ---------------------------------------------------------

    @classmethod
    def from_jd(cls, jd: int) -> Date:
        return cls(jd)

    @classmethod
    def from_ymd(cls, year: int, month: int, day: int) -> Date:
        return cls(julian.ymd_to_jdn(year, month, day))

    @classmethod
    def from_string(cls, text: str) -> Date:
        """Parse ``YYYY-MM-DD``; the empty string gives the sentinel.

        Components are not range-checked, so ``2021-02-30`` is 2021-03-02.
        """

        if not text:
            return cls()
        if len(text) != 10 or text[4] != "-" or text[7] != "-":
            raise MalformedDateError(f"cannot convert '{text}' to date")
        year = _parse_number(text[0:4], text)
        month = _parse_number(text[5:7], text)
        day = _parse_number(text[8:10], text)
        return cls(julian.ymd_to_jdn(year, month, day))

    @classmethod
    def parse(cls, layout: str, text: str) -> Date:
        """Parse ``text`` with a ``strptime`` layout, keeping only the date.

        Time-of-day directives in ``layout`` are matched and then dropped.
        """

        try:
            parsed = datetime.strptime(text, layout)  # noqa: DTZ007
        except ValueError as exc:
            raise DateParseError(f"cannot parse '{text}' as '{layout}'") from exc
        return cls.from_time(parsed)

    @classmethod
    def from_time(cls, value: date | None) -> Date:
        """Return the calendar date of a timestamp; the zero timestamp gives the sentinel."""

        if value is None or is_zero_time(value):
            return cls()
        return cls(julian.timestamp_to_jdn(value))

    @classmethod
    def today(cls, *, clock: Clock = _utcnow) -> Date:
        return cls.from_time(clock())

    # Accessors ------------------------------------------------------------

    def is_zero(self) -> bool:
        return self.jd == 0

    def __bool__(self) -> bool:
        return self.jd != 0

    def __str__(self) -> str:
        if self.jd == 0:
            return ""
        return julian.jdn_to_iso(self.jd)

    def __repr__(self) -> str:
        if self.jd == 0:
            return "Date.from_jd(0)"
        return f"Date('{self}')"

    def __format__(self, format_spec: str) -> str:
        if not format_spec:
            return str(self)
        return self.format(format_spec)

    def format(self, layout: str) -> str:
        """Render with a ``strftime`` layout; the sentinel renders :data:`ZERO_TIME`.

        ``%Y`` is always four digits so that ``parse`` reads the output back.
        Raises :class:`DateError` for dates outside the ``datetime`` range.
        """

        moment = self.to_datetime()
        year = f"{moment.year:04d}"
        layout = _DIRECTIVE.sub(lambda m: year if m.group() == "%Y" else m.group(), layout)
        return moment.strftime(layout)

    def to_datetime(self) -> datetime:
        """Return midnight UTC of this date, or :data:`ZERO_TIME` for the sentinel.

        Raises :class:`DateError` for dates before year 1 or after year 9999.
        """

        if self.jd == 0:
            return ZERO_TIME
        year, month, day = julian.jdn_to_ymd(self.jd)
        try:
            return datetime(year, month, day, tzinfo=UTC)
        except ValueError as exc:
            raise DateError(f"{self!s} is outside the datetime range") from exc

    def to_date(self) -> date | None:
        if self.jd == 0:
            return None
        try:
            return date(*julian.jdn_to_ymd(self.jd))
        except ValueError as exc:
            raise DateError(f"{self!s} is outside the date range") from exc

    def ymd(self) -> tuple[int, int, int]:
        # The sentinel reads as the calendar date of ZERO_TIME.
        if self.jd == 0:
            return (1, 1, 1)
        return julian.jdn_to_ymd(self.jd)

    @property
    def year(self) -> int:
        return self.ymd()[0]

    @property
    def month(self) -> int:
        return self.ymd()[1]

    @property
    def day(self) -> int:
        return self.ymd()[2]

    def weekday(self) -> int:
        """Return the day of the week, Monday == 0."""
        return self.jd % 7

    # Arithmetic -----------------------------------------------------------

    def add_date(self, years: int, months: int, days: int) -> Date:
        """Shift by years, months and days.

        Day-only shifts are integer addition on the JDN, the sentinel included.
        Otherwise months overflow into the following month the way
        ``2021-01-31`` plus one month lands on ``2021-03-03``, and a result of
        0001-01-01 is the zero timestamp, hence the sentinel.
        """

        if years == 0 and months == 0:
            return Date(self.jd + days)
        year, month, day = self.ymd()
        year, month = julian.add_months(year, month, years * 12 + months)
        jdn = julian.ymd_to_jdn(year, month, day) + days
        if jdn == _ZERO_TIME_JDN:
            return ZERO
        return Date(jdn)

    def sub(self, other: Date) -> int:
        """Return the signed number of days from ``other`` to ``self``."""
        return self.jd - other.jd

    def __add__(self, days: int) -> Date:
        if not isinstance(days, int) or isinstance(days, bool):
            return NotImplemented
        return self.add_date(0, 0, days)

    __radd__ = __add__

    @overload
    def __sub__(self, other: Date) -> int: ...

    @overload
    def __sub__(self, other: int) -> Date: ...

    def __sub__(self, other: Date | int) -> int | Date:
        if isinstance(other, Date):
            return self.sub(other)
        if isinstance(other, int) and not isinstance(other, bool):
            return self.add_date(0, 0, -other)
        return NotImplemented

    # Database adapter -----------------------------------------------------

    @classmethod
    def scan(cls, value: object) -> Date:
        """Build a date from a value returned by a database driver.

        Accepts ``YYYYMMDD`` integers (floats are truncated), ISO-8601 text as
        ``str`` or bytes, ``date``/``datetime`` objects and ``None``.
        """

        if value is None:
            return cls()
        if isinstance(value, bool):
            raise UnsupportedScanTypeError("unable to scan type bool into Date")
        if isinstance(value, int):
            return cls(_ymd_int_to_jdn(value))
        if isinstance(value, float):
            if not math.isfinite(value):
                raise MalformedDateError(f"cannot convert {value!r} to date")
            if not value.is_integer():
                log.debug("Truncating fractional YYYYMMDD value %r", value)
            return cls(_ymd_int_to_jdn(int(value)))
        if isinstance(value, (bytes, bytearray, memoryview)):
            return cls._scan_text(_decode(value, "ascii"))
        if isinstance(value, str):
            return cls._scan_text(value)
        if isinstance(value, date):
            return cls.from_time(value)
        raise UnsupportedScanTypeError(f"unable to scan type {type(value).__name__} into Date")

    @classmethod
    def _scan_text(cls, text: str) -> Date:
        if not text:
            return cls()
        return cls(julian.iso_to_jdn(text))

    def value(self) -> str | None:
        """Return the storable form: ``YYYY-MM-DD``, or ``None`` for the sentinel."""
        if self.jd == 0:
            return None
        return str(self)

    def ymd_int(self) -> int | None:
        if self.jd == 0:
            return None
        year, month, day = julian.jdn_to_ymd(self.jd)
        return year * 10000 + month * 100 + day

    # Text serialization ---------------------------------------------------

    def marshal_text(self) -> bytes:
        return str(self).encode("utf-8")

    @classmethod
    def unmarshal_text(cls, data: bytes | bytearray | str) -> Date:
        text = data if isinstance(data, str) else _decode(data, "utf-8")
        return cls.from_string(text)

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        source_type: Any,
        handler: GetCoreSchemaHandler,
    ) -> core_schema.CoreSchema:
        _ = source_type, handler
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.to_string_ser_schema(),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls,
        schema: core_schema.CoreSchema,
        handler: GetJsonSchemaHandler,
    ) -> JsonSchemaValue:
        _ = schema, handler
        return {"type": "string", "pattern": TEXT_PATTERN}

    @classmethod
    def _validate(cls, value: Any) -> Date:
        if isinstance(value, Date):
            return value
        if isinstance(value, (str, bytes, bytearray)):
            return cls.unmarshal_text(value)
        if isinstance(value, date):
            return cls.from_time(value)
        raise MalformedDateError(f"cannot convert {type(value).__name__} to date")


ZERO: Final[Date] = Date()

_ZERO_TIME_JDN: Final[int] = julian.ymd_to_jdn(1, 1, 1)


def must_from_string(text: str) -> Date:
    """Parse a ``YYYY-MM-DD`` literal, raising :class:`InvalidDateLiteral` on failure."""

    try:
        return Date.from_string(text)
    except DateError as exc:
        raise InvalidDateLiteral(f"parse date: {exc}") from exc


def must_parse(layout: str, text: str) -> Date:
    try:
        return Date.parse(layout, text)
    except DateError as exc:
        raise InvalidDateLiteral(f"parse date: {exc}") from exc


__all__ = [
    "TEXT_PATTERN",
    "ZERO",
    "ZERO_TIME",
    "Clock",
    "Date",
    "is_zero_time",
    "must_from_string",
    "must_parse",
]
