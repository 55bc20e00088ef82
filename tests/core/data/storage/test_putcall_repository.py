"""Tests for put/call persistence."""

from datetime import date

import pytest

from riskdash.core.data.storage import (
    PUT_CALL_RATIOS_TABLE,
    SPX_PUTCALL_HISTORY_TABLE,
    PutCallRepository,
)
from riskdash.core.exceptions import StorageError
from riskdash.core.models import DailyPutCallStats, PutCallObservation


def _stats(day: date, ratio: float = 1.1) -> DailyPutCallStats:
    return DailyPutCallStats(date=day, ratio=ratio, call_volume=1000, put_volume=1100, total_volume=2100)


def test_schema_ddl_declares_date_primary_key() -> None:
    ddl = SPX_PUTCALL_HISTORY_TABLE.create_ddl()

    assert "CREATE TABLE IF NOT EXISTS spx_putcall_history" in ddl
    assert "PRIMARY KEY (date)" in ddl
    assert PUT_CALL_RATIOS_TABLE.column_names == [
        "date",
        "ratio",
        "call_volume",
        "put_volume",
        "total_volume",
        "created_at",
    ]


def test_tables_are_created_on_init(connection) -> None:
    PutCallRepository(connection)

    tables = {row[0] for row in connection.execute("SELECT table_name FROM information_schema.tables").fetchall()}
    assert {"spx_putcall_history", "put_call_ratios"} <= tables


@pytest.mark.asyncio
async def test_spx_history_upserts_by_date(repository) -> None:
    await repository.upsert_spx_putcall(PutCallObservation(date=date(2024, 6, 13), ratio=0.95))
    written = await repository.bulk_upsert_spx_putcall(
        [
            PutCallObservation(date=date(2024, 6, 14), ratio=1.12),
            PutCallObservation(date=date(2024, 6, 13), ratio=0.97),
        ]
    )

    history = await repository.get_spx_putcall_history()

    assert written == 2
    assert history == [
        PutCallObservation(date=date(2024, 6, 13), ratio=0.97),
        PutCallObservation(date=date(2024, 6, 14), ratio=1.12),
    ]
    assert await repository.bulk_upsert_spx_putcall([]) == 0


@pytest.mark.asyncio
async def test_daily_ratios_latest_and_by_date(repository) -> None:
    for day in (date(2024, 6, 10), date(2024, 6, 11), date(2024, 6, 12)):
        await repository.upsert_put_call_ratio(_stats(day))
    await repository.upsert_put_call_ratio(_stats(date(2024, 6, 11), ratio=1.3))

    latest = await repository.get_latest_put_call_ratios(limit=2)
    selected = await repository.get_put_call_ratios([date(2024, 6, 12), date(2024, 6, 11), date(2024, 6, 3)])

    assert [row.date for row in latest] == [date(2024, 6, 12), date(2024, 6, 11)]
    assert [row.date for row in selected] == [date(2024, 6, 11), date(2024, 6, 12)]
    assert selected[0].ratio == 1.3
    assert await repository.get_put_call_ratios([]) == []


@pytest.mark.asyncio
async def test_database_errors_become_storage_errors(connection) -> None:
    repository = PutCallRepository(connection)
    connection.execute("DROP TABLE put_call_ratios")

    with pytest.raises(StorageError) as excinfo:
        await repository.get_latest_put_call_ratios()

    assert excinfo.value.details["table"] == "put_call_ratios"
