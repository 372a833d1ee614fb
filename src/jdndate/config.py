"""Storage configuration for date columns."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ConfigurationError(RuntimeError):
    """Raised when configuration values are invalid."""


class StorageFormat(StrEnum):
    """How a date column stores its values."""

    ISO_TEXT = "iso"
    YMD_INTEGER = "ymd"


@dataclass(frozen=True, slots=True)
class DateColumnConfig:
    storage: StorageFormat = StorageFormat.ISO_TEXT

    @classmethod
    def from_value(cls, value: str | StorageFormat) -> DateColumnConfig:
        try:
            storage = StorageFormat(value.strip().lower())
        except ValueError as exc:
            choices = ", ".join(member.value for member in StorageFormat)
            raise ConfigurationError(
                f"Unknown date storage format {value!r} (expected one of: {choices})"
            ) from exc
        return cls(storage=storage)


__all__ = ["ConfigurationError", "DateColumnConfig", "StorageFormat"]
