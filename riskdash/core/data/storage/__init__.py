"""DuckDB persistence for scraped put/call series."""

from riskdash.core.data.storage.factory import DuckDBFactory, DuckDBFactoryConfig
from riskdash.core.data.storage.repository import PutCallRepository
from riskdash.core.data.storage.schema import (
    PUT_CALL_RATIOS_TABLE,
    SPX_PUTCALL_HISTORY_TABLE,
    ColumnDef,
    TableSchema,
    ensure_putcall_tables,
)

__all__ = [
    "ColumnDef",
    "TableSchema",
    "SPX_PUTCALL_HISTORY_TABLE",
    "PUT_CALL_RATIOS_TABLE",
    "ensure_putcall_tables",
    "DuckDBFactory",
    "DuckDBFactoryConfig",
    "PutCallRepository",
]
