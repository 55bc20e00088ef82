"""Put/call persistence on DuckDB."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import UTC, date, datetime

import duckdb
from duckdb import DuckDBPyConnection

from riskdash.core.data.storage.schema import (
    PUT_CALL_RATIOS_TABLE,
    SPX_PUTCALL_HISTORY_TABLE,
    ensure_putcall_tables,
)
from riskdash.core.exceptions import StorageError
from riskdash.core.logging import logger
from riskdash.core.models import DailyPutCallStats, PutCallObservation


def _utcnow() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


class PutCallRepository:
    """Date-keyed, upsert-only storage for scraped put/call readings."""

    def __init__(self, conn: DuckDBPyConnection, *, now: Callable[[], datetime] = _utcnow):
        self.conn = conn
        self._now = now
        ensure_putcall_tables(conn)

    def _execute(self, table: str, sql: str, params: list | None = None) -> DuckDBPyConnection:
        try:
            return self.conn.execute(sql, params or [])
        except duckdb.Error as exc:
            raise StorageError(f"Query on {table} failed: {exc}", table=table) from exc

    async def upsert_spx_putcall(self, observation: PutCallObservation) -> None:
        self._execute(
            SPX_PUTCALL_HISTORY_TABLE.name,
            SPX_PUTCALL_HISTORY_TABLE.upsert_sql(),
            [observation.date, observation.ratio, self._now()],
        )

    async def bulk_upsert_spx_putcall(self, observations: Iterable[PutCallObservation]) -> int:
        """Upsert many readings; returns how many rows were written."""
        stamp = self._now()
        rows = [[obs.date, obs.ratio, stamp] for obs in observations]
        if not rows:
            return 0
        try:
            self.conn.executemany(SPX_PUTCALL_HISTORY_TABLE.upsert_sql(), rows)
        except duckdb.Error as exc:
            raise StorageError(
                f"Bulk upsert into {SPX_PUTCALL_HISTORY_TABLE.name} failed: {exc}",
                table=SPX_PUTCALL_HISTORY_TABLE.name,
            ) from exc
        logger.debug(f"Upserted {len(rows)} rows into {SPX_PUTCALL_HISTORY_TABLE.name}")
        return len(rows)

    async def get_spx_putcall_history(self) -> list[PutCallObservation]:
        """All stored SPX readings, ascending by date."""
        rows = self._execute(
            SPX_PUTCALL_HISTORY_TABLE.name,
            f"SELECT date, ratio FROM {SPX_PUTCALL_HISTORY_TABLE.name} ORDER BY date",
        ).fetchall()
        return [PutCallObservation(date=row[0], ratio=row[1]) for row in rows]

    async def count_spx_putcall(self) -> int:
        row = self._execute(
            SPX_PUTCALL_HISTORY_TABLE.name,
            f"SELECT COUNT(*) FROM {SPX_PUTCALL_HISTORY_TABLE.name}",
        ).fetchone()
        return int(row[0]) if row else 0

    async def upsert_put_call_ratio(self, stats: DailyPutCallStats) -> None:
        self._execute(
            PUT_CALL_RATIOS_TABLE.name,
            PUT_CALL_RATIOS_TABLE.upsert_sql(),
            [
                stats.date,
                stats.ratio,
                stats.call_volume,
                stats.put_volume,
                stats.total_volume,
                self._now(),
            ],
        )

    async def get_latest_put_call_ratios(self, limit: int = 30) -> list[DailyPutCallStats]:
        """Most recent daily readings, newest first."""
        rows = self._execute(
            PUT_CALL_RATIOS_TABLE.name,
            f"SELECT date, ratio, call_volume, put_volume, total_volume "
            f"FROM {PUT_CALL_RATIOS_TABLE.name} ORDER BY date DESC LIMIT ?",
            [limit],
        ).fetchall()
        return [
            DailyPutCallStats(
                date=row[0],
                ratio=row[1],
                call_volume=row[2],
                put_volume=row[3],
                total_volume=row[4],
            )
            for row in rows
        ]

    async def get_put_call_ratios(self, dates: Iterable[date]) -> list[DailyPutCallStats]:
        """Stored daily readings for ``dates``, ascending."""
        wanted = sorted(set(dates))
        if not wanted:
            return []
        placeholders = ", ".join("?" for _ in wanted)
        rows = self._execute(
            PUT_CALL_RATIOS_TABLE.name,
            f"SELECT date, ratio, call_volume, put_volume, total_volume "
            f"FROM {PUT_CALL_RATIOS_TABLE.name} WHERE date IN ({placeholders}) ORDER BY date",
            list(wanted),
        ).fetchall()
        return [
            DailyPutCallStats(
                date=row[0],
                ratio=row[1],
                call_volume=row[2],
                put_volume=row[3],
                total_volume=row[4],
            )
            for row in rows
        ]
