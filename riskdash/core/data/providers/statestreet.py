"""State Street (SPDR) fund-data workbook adapter."""

from __future__ import annotations

import io
from collections.abc import Iterable
from datetime import date, datetime, timedelta

import pandas as pd

from riskdash.core.data.providers.base import SeriesAdapter, SeriesBundle, clip, parse_number
from riskdash.core.data.providers.cboe import normalise_column
from riskdash.core.data.providers.http import HttpClient
from riskdash.core.exceptions import ParseError
from riskdash.core.monitoring import MetricsCollector

STATE_STREET_URL = (
    "https://www.ssga.com/library-content/products/fund-data/etfs/us/{dataset}-us-en-{ticker}.xlsx"
)
XLSX_ACCEPT = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

_EXCEL_EPOCH = date(1899, 12, 30)
_DATE_FORMATS = ("%d-%b-%y", "%d-%b-%Y", "%b %d, %Y", "%m/%d/%Y", "%m/%d/%y", "%Y-%m-%d")

VALUE_FIELD = "value"


def parse_sheet_date(cell: object) -> date | None:
    """Parse a workbook date cell: datetimes, Excel serials or the usual text layouts."""
    if cell is None:
        return None
    if isinstance(cell, datetime):
        return cell.date()
    if isinstance(cell, date):
        return cell
    if isinstance(cell, (int, float)):
        if cell != cell or cell <= 0:
            return None
        return _EXCEL_EPOCH + timedelta(days=int(cell))
    text = str(cell).strip()
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


class StateStreetAdapter(SeriesAdapter):
    """SPDR premium/discount (``pdhist``) and NAV (``navhist``) history workbooks.

    Datasets are named ``"<kind>-<ticker>"``, e.g. ``"pdhist-jnk"``. The field
    ``"value"`` reads the first column after the date; any other field is
    matched against the header row.
    """

    name = "statestreet"

    def __init__(
        self,
        http: HttpClient | None = None,
        *,
        url_template: str = STATE_STREET_URL,
        metrics: MetricsCollector | None = None,
    ):
        super().__init__(http, metrics=metrics)
        self.url_template = url_template

    def url_for(self, dataset: str) -> str:
        kind, _, ticker = dataset.rpartition("-")
        if not kind or not ticker:
            raise ParseError(f"Dataset '{dataset}' is not of the form '<kind>-<ticker>'", self.name)
        return self.url_template.format(dataset=kind, ticker=ticker)

    async def fetch(self, dataset: str, fields: Iterable[str], start: date, end: date) -> SeriesBundle:
        response = await self.http.get(
            self.url_for(dataset), provider=self.name, headers={"Accept": XLSX_ACCEPT}
        )
        try:
            sheet = pd.read_excel(io.BytesIO(response.content), sheet_name=0, header=None, engine="openpyxl")
        except Exception as exc:
            raise ParseError(f"Could not read workbook for {dataset}: {exc}", self.name) from exc
        return self.parse(dataset, sheet, list(fields), start, end)

    def parse(
        self,
        dataset: str,
        sheet: pd.DataFrame,
        fields: list[str],
        start: date,
        end: date,
    ) -> SeriesBundle:
        rows = sheet.astype(object).where(sheet.notna(), None).values.tolist()
        positions = {field: self._column_for(field, rows, dataset) for field in fields}

        bundle: SeriesBundle = {field: {} for field in fields}
        dropped = 0
        seen_data = False
        for row in rows:
            if not row:
                continue
            day = parse_sheet_date(row[0])
            if day is None:
                # Preamble and footnote rows carry no date.
                continue
            seen_data = True
            for field, col in positions.items():
                value = parse_number(row[col]) if col < len(row) else None
                if value is None:
                    dropped += 1
                    continue
                bundle[field][day] = value

        if not seen_data:
            raise ParseError(f"No dated rows found in workbook {dataset}", self.name)

        self.report_dropped(dataset, dropped)
        return {field: clip(values, start, end) for field, values in bundle.items()}

    def _column_for(self, field: str, rows: list[list[object]], dataset: str) -> int:
        if field == VALUE_FIELD:
            return 1
        wanted = normalise_column(field)
        for row in rows:
            for idx, cell in enumerate(row):
                if cell is not None and normalise_column(cell) == wanted:
                    return idx
        raise ParseError(f"Column '{field}' not found in workbook {dataset}", self.name)
