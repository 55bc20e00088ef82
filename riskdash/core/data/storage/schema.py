"""DuckDB table schemas for persisted put/call history."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from duckdb import DuckDBPyConnection


@dataclass(frozen=True)
class ColumnDef:
    """Represents a DuckDB table column definition."""

    name: str
    data_type: str
    constraints: Sequence[str] = ()

    def render(self) -> str:
        parts = [self.name, self.data_type, *self.constraints]
        return " ".join(parts)


@dataclass(frozen=True)
class TableSchema:
    """Utility wrapper describing a DuckDB table schema."""

    name: str
    columns: Sequence[ColumnDef]
    primary_key: Sequence[str] = ()

    @property
    def column_names(self) -> list[str]:
        return [column.name for column in self.columns]

    def create_ddl(self) -> str:
        column_defs: list[str] = [column.render() for column in self.columns]
        if self.primary_key:
            pk_cols = ", ".join(self.primary_key)
            column_defs.append(f"PRIMARY KEY ({pk_cols})")
        columns_sql = ",\n                ".join(column_defs)
        return f"""
            CREATE TABLE IF NOT EXISTS {self.name} (
                {columns_sql}
            )
            """.strip()

    def upsert_sql(self) -> str:
        """``INSERT OR REPLACE`` statement with one placeholder per column."""
        placeholders = ", ".join("?" for _ in self.columns)
        return f"INSERT OR REPLACE INTO {self.name} ({', '.join(self.column_names)}) VALUES ({placeholders})"

    def ensure(self, conn: DuckDBPyConnection) -> None:
        """Create the table on the provided connection if it does not exist."""

        conn.execute(self.create_ddl())


SPX_PUTCALL_HISTORY_TABLE = TableSchema(
    name="spx_putcall_history",
    columns=(
        ColumnDef("date", "DATE", ("NOT NULL",)),
        ColumnDef("ratio", "DOUBLE", ("NOT NULL",)),
        ColumnDef("updated_at", "TIMESTAMP", ("NOT NULL",)),
    ),
    primary_key=("date",),
)

PUT_CALL_RATIOS_TABLE = TableSchema(
    name="put_call_ratios",
    columns=(
        ColumnDef("date", "DATE", ("NOT NULL",)),
        ColumnDef("ratio", "DOUBLE", ("NOT NULL",)),
        ColumnDef("call_volume", "BIGINT", ("NOT NULL",)),
        ColumnDef("put_volume", "BIGINT", ("NOT NULL",)),
        ColumnDef("total_volume", "BIGINT", ("NOT NULL",)),
        ColumnDef("created_at", "TIMESTAMP", ("NOT NULL",)),
    ),
    primary_key=("date",),
)


def putcall_tables() -> Sequence[TableSchema]:
    """Return the schemas backing the put/call repository."""

    return (SPX_PUTCALL_HISTORY_TABLE, PUT_CALL_RATIOS_TABLE)


def ensure_putcall_tables(conn: DuckDBPyConnection) -> None:
    """Create all put/call tables on the provided DuckDB connection."""

    for table in putcall_tables():
        table.ensure(conn)

