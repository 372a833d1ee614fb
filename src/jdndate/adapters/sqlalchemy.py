"""SQLAlchemy column types that store ``Date`` values."""

from __future__ import annotations

import logging

from sqlalchemy import Dialect, Integer, String, TypeDecorator
from sqlalchemy.types import TypeEngine

from jdndate.config import DateColumnConfig, StorageFormat
from jdndate.date import Date

log = logging.getLogger(__name__)


def _coerce(value: object) -> Date:
    if isinstance(value, Date):
        return value
    log.debug("Coercing %s bind parameter into Date", type(value).__name__)
    return Date.scan(value)


class IsoDateType(TypeDecorator[Date]):
    """Stores dates as ``YYYY-MM-DD`` text; the sentinel is stored as NULL."""

    impl = String(10)
    cache_ok = True

    def process_bind_param(self, value: object, dialect: Dialect) -> str | None:
        _ = dialect
        if value is None:
            return None
        return _coerce(value).value()

    def process_result_value(self, value: object, dialect: Dialect) -> Date:
        _ = dialect
        return Date.scan(value)


class YmdIntegerDateType(TypeDecorator[Date]):
    """Stores dates as ``YYYYMMDD`` integers; the sentinel is stored as NULL."""

    impl = Integer
    cache_ok = True

    def process_bind_param(self, value: object, dialect: Dialect) -> int | None:
        _ = dialect
        if value is None:
            return None
        return _coerce(value).ymd_int()

    def process_result_value(self, value: object, dialect: Dialect) -> Date:
        _ = dialect
        return Date.scan(value)


def date_column_type(config: DateColumnConfig | None = None) -> TypeEngine[Date]:
    """Return the column type matching ``config`` (ISO text by default)."""

    storage = (config or DateColumnConfig()).storage
    if storage is StorageFormat.YMD_INTEGER:
        return YmdIntegerDateType()
    return IsoDateType()


__all__ = ["IsoDateType", "YmdIntegerDateType", "date_column_type"]
