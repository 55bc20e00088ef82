"""Trailing-twelve-month S&P 500 earnings scraped from multpl.com."""

from __future__ import annotations

import calendar
import io
from collections.abc import Iterable
from datetime import date

import pandas as pd

from riskdash.core.data.providers.base import SeriesAdapter, SeriesBundle, clip
from riskdash.core.data.providers.http import HttpClient
from riskdash.core.exceptions import ParseError
from riskdash.core.monitoring import MetricsCollector

MULTPL_EPS_URL = "https://www.multpl.com/s-p-500-earnings/table/by-month"

# First number in a value cell; cells may carry an estimate marker or footnote.
_NUMBER_PATTERN = r"(-?\d[\d,]*(?:\.\d+)?)"


def month_end(year: int, month: int) -> date:
    return date(year, month, calendar.monthrange(year, month)[1])


def parse_eps_table(html: str) -> tuple[dict[date, float], int]:
    """Return month-end keyed EPS values and the number of rows skipped."""
    try:
        tables = pd.read_html(io.StringIO(html))
    except ValueError:
        raise ParseError("Could not find data table on Multpl page", "multpl") from None
    frame = next((table for table in tables if table.shape[1] >= 2), None)
    if frame is None:
        raise ParseError("Could not find data table on Multpl page", "multpl")

    dates = pd.to_datetime(frame.iloc[:, 0].astype(str).str.strip(), errors="coerce", format="mixed")
    values = pd.to_numeric(
        frame.iloc[:, 1].astype(str).str.extract(_NUMBER_PATTERN, expand=False).str.replace(",", "", regex=False),
        errors="coerce",
    )
    valid = dates.notna() & values.notna() & (values > 0)
    parsed = {
        month_end(ts.year, ts.month): float(value)
        for ts, value in zip(dates[valid], values[valid], strict=True)
    }
    return parsed, int((~valid).sum())


class MultplEpsAdapter(SeriesAdapter):
    """Monthly trailing-twelve-month EPS, each row dated at its month end."""

    name = "multpl"

    def __init__(
        self,
        http: HttpClient | None = None,
        *,
        url: str = MULTPL_EPS_URL,
        metrics: MetricsCollector | None = None,
    ):
        super().__init__(http, metrics=metrics)
        self.url = url

    async def fetch(self, dataset: str, fields: Iterable[str], start: date, end: date) -> SeriesBundle:
        response = await self.http.get(self.url, provider=self.name)
        values, dropped = parse_eps_table(response.text)
        self.report_dropped(dataset, dropped)
        clipped = clip(values, start, end)
        return {field: dict(clipped) for field in fields}
