"""Julian Day Number conversions for the proleptic Gregorian calendar.

``jdcal`` works in Julian Dates split as ``(MJD_0, mjd)`` where the sum is the
Julian Date at midnight. The Julian Day Number of a calendar day is the Julian
Date at the following noon, so ``jdn = mjd + MJD_0 + 0.5``.
"""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import Final

import jdcal
from dateutil.parser import isoparse

from .errors import DateParseError, MalformedDateError

MJD_OFFSET: Final[int] = int(jdcal.MJD_0 + 0.5)


def ymd_to_jdn(year: int, month: int, day: int) -> int:
    """Return the JDN of a calendar date.

    Components are not validated: months outside 1..12 roll into adjacent
    years and days past the end of a month roll into the next one.
    """

    year, month = add_months(year, 1, month - 1)
    _, mjd = jdcal.gcal2jd(year, month, 1)
    return int(mjd) + MJD_OFFSET + day - 1


def jdn_to_ymd(jdn: int) -> tuple[int, int, int]:
    year, month, day, _ = jdcal.jd2gcal(jdcal.MJD_0, jdn - MJD_OFFSET)
    return int(year), int(month), int(day)


def jdn_to_iso(jdn: int) -> str:
    year, month, day = jdn_to_ymd(jdn)
    return f"{year:04d}-{month:02d}-{day:02d}"


def iso_to_jdn(text: str) -> int:
    """Parse any ISO-8601 date or timestamp accepted by ``dateutil`` into a JDN."""

    try:
        parsed = isoparse(text)
    except (ValueError, OverflowError) as exc:
        raise DateParseError(f"cannot convert '{text}' to date") from exc
    return timestamp_to_jdn(parsed)


def timestamp_to_jdn(value: date) -> int:
    """Return the JDN of a timestamp's calendar date, read in UTC when aware."""

    if isinstance(value, datetime) and value.utcoffset() is not None:
        try:
            value = value.astimezone(UTC)
        except OverflowError as exc:
            raise MalformedDateError(f"{value.isoformat()} is outside the UTC date range") from exc
    return ymd_to_jdn(value.year, value.month, value.day)


def add_months(year: int, month: int, months: int) -> tuple[int, int]:
    """Shift ``(year, month)`` by ``months``, carrying into the year."""

    carried_year, month_index = divmod(year * 12 + (month - 1) + months, 12)
    return carried_year, month_index + 1


__all__ = [
    "MJD_OFFSET",
    "add_months",
    "iso_to_jdn",
    "jdn_to_iso",
    "jdn_to_ymd",
    "timestamp_to_jdn",
    "ymd_to_jdn",
]
