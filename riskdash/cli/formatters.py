"""Output formatters for CLI commands."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Mapping, Sequence, TextIO

from rich.box import SIMPLE
from rich.console import Console
from rich.table import Table


class OutputFormatter:
    """Base class for record renderers."""

    name: str

    def render(
        self,
        rows: Sequence[Mapping[str, object]],
        *,
        stream: TextIO,
        columns: Sequence[str] | None = None,
    ) -> None:
        raise NotImplementedError


@dataclass(slots=True)
class TableFormatter(OutputFormatter):
    """Render records as a Rich table, one row per record."""

    name: str = "table"
    no_color: bool = False
    title: str | None = None

    def render(
        self,
        rows: Sequence[Mapping[str, object]],
        *,
        stream: TextIO,
        columns: Sequence[str] | None = None,
    ) -> None:
        console = Console(file=stream, color_system=None if self.no_color else "auto", no_color=self.no_color)
        resolved = list(columns) if columns else _union_columns(rows)

        table = Table(box=SIMPLE, title=self.title)
        header_style = "" if self.no_color else "bold"
        for column in resolved:
            table.add_column(column, header_style=header_style, justify="left" if column == "date" else "right")
        for row in rows:
            table.add_row(*(self._format_cell(row.get(column)) for column in resolved))

        if resolved:
            console.print(table)
        if not rows:
            console.print("No records.")

    def _format_cell(self, value: object) -> str:
        if value is None:
            return "-"
        if isinstance(value, bool):
            return "yes" if value else "no"
        if isinstance(value, (list, tuple)):
            return ", ".join(str(item) for item in value)
        return str(value)


@dataclass(slots=True)
class JSONLFormatter(OutputFormatter):
    """Render records as JSON Lines."""

    name: str = "jsonl"

    def render(
        self,
        rows: Sequence[Mapping[str, object]],
        *,
        stream: TextIO,
        columns: Sequence[str] | None = None,
    ) -> None:
        for row in rows:
            record = {column: row.get(column) for column in columns} if columns else dict(row)
            json.dump(record, stream, ensure_ascii=False, default=str)
            stream.write("\n")
        stream.flush()


def _union_columns(rows: Sequence[Mapping[str, object]]) -> list[str]:
    # Columns in order of first appearance across all rows.
    seen: dict[str, None] = {}
    for row in rows:
        for key in row:
            seen.setdefault(key, None)
    return list(seen)


def create_formatter(name: str, *, no_color: bool = False) -> OutputFormatter:
    """Instantiate a formatter by name."""

    normalized = name.strip().lower()
    if normalized == "table":
        return TableFormatter(no_color=no_color)
    if normalized == "jsonl":
        return JSONLFormatter()
    raise ValueError(f"Unsupported format '{name}'. Available formats: table, jsonl.")


__all__ = ["OutputFormatter", "TableFormatter", "JSONLFormatter", "create_formatter"]
