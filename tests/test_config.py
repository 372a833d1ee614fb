from __future__ import annotations

import pytest

from jdndate.config import ConfigurationError, DateColumnConfig, StorageFormat


def test_default_storage_is_iso_text() -> None:
    assert DateColumnConfig().storage is StorageFormat.ISO_TEXT


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("iso", StorageFormat.ISO_TEXT),
        (" YMD ", StorageFormat.YMD_INTEGER),
        (StorageFormat.YMD_INTEGER, StorageFormat.YMD_INTEGER),
    ],
)
def test_from_value_normalises_input(value: str, expected: StorageFormat) -> None:
    assert DateColumnConfig.from_value(value).storage is expected


def test_from_value_rejects_unknown_formats() -> None:
    with pytest.raises(ConfigurationError) as exc:
        DateColumnConfig.from_value("epoch")

    assert "epoch" in str(exc.value)
    assert "iso, ymd" in str(exc.value)
