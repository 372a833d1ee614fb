from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import Column, Integer, MetaData, Table, create_engine
from sqlalchemy.engine import Engine  # noqa: TC002

from jdndate.adapters.sqlalchemy import IsoDateType, YmdIntegerDateType

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture
def event_table() -> Table:
    metadata = MetaData()
    return Table(
        "event",
        metadata,
        Column("id", Integer, primary_key=True),
        Column("iso_on", IsoDateType()),
        Column("ymd_on", YmdIntegerDateType()),
    )


@pytest.fixture
def sqlite_engine(event_table: Table) -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    event_table.metadata.create_all(engine)
    try:
        yield engine
    finally:
        engine.dispose()
