"""CBOE put/call sources: the CSV archive and the daily statistics page."""

from __future__ import annotations

import io
import re
from collections.abc import Iterable
from datetime import date

import pandas as pd

from riskdash.core.data.providers.base import SeriesAdapter, SeriesBundle, clip, parse_number
from riskdash.core.data.providers.http import HttpClient
from riskdash.core.exceptions import ParseError
from riskdash.core.logging import logger
from riskdash.core.models import DailyPutCallStats
from riskdash.core.monitoring import MetricsCollector

CBOE_ARCHIVE_URL = "https://cdn.cboe.com/resources/options/volume_and_call_put_ratios/{dataset}.csv"
CBOE_DAILY_URL = "https://www.cboe.com/us/options/market_statistics/daily/?dt={date}"

# Rows scanned after an "SPX + SPXW" label when looking for its figures.
_DAILY_LOOKAHEAD = 10
_SPX_LABEL_RE = re.compile(r"SPX\s*\+\s*SPXW")
# Smallest figure read as a contract volume; ratios sit well below it.
_MIN_VOLUME = 1000


def normalise_column(name: object) -> str:
    """Loose header key: ``"CALLS"`` and ``"Call"`` both become ``"call"``."""
    return re.sub(r"[^a-z]", "", str(name).lower()).rstrip("s")


def locate_header(text: str) -> int:
    """Index of the line whose first cell is ``DATE``."""
    for idx, line in enumerate(text.splitlines()):
        first = line.split(",", 1)[0].strip().strip('"').upper()
        if first == "DATE":
            return idx
    return -1


class CboeArchiveAdapter(SeriesAdapter):
    """CBOE historical put/call CSV archive (``indexpc``, ``equitypc``, ...)."""

    name = "cboe"

    def __init__(
        self,
        http: HttpClient | None = None,
        *,
        url_template: str = CBOE_ARCHIVE_URL,
        metrics: MetricsCollector | None = None,
    ):
        super().__init__(http, metrics=metrics)
        self.url_template = url_template

    async def fetch(self, dataset: str, fields: Iterable[str], start: date, end: date) -> SeriesBundle:
        response = await self.http.get(self.url_template.format(dataset=dataset), provider=self.name)
        return self.parse(dataset, response.text, list(fields), start, end)

    def parse(self, dataset: str, text: str, fields: list[str], start: date, end: date) -> SeriesBundle:
        header_idx = locate_header(text)
        if header_idx < 0:
            raise ParseError(f"No DATE header row in {dataset}.csv", self.name)

        body = "\n".join(text.splitlines()[header_idx:])
        frame = pd.read_csv(io.StringIO(body), dtype=str, skipinitialspace=True)
        columns = {normalise_column(col): col for col in frame.columns}

        missing = [f for f in fields if normalise_column(f) not in columns]
        if missing:
            raise ParseError(
                f"Columns {missing} not found in {dataset}.csv",
                self.name,
                details={"columns": list(frame.columns)},
            )

        dates = pd.to_datetime(frame[frame.columns[0]].str.strip(), errors="coerce", format="mixed")
        bundle: SeriesBundle = {}
        dropped = 0
        for field in fields:
            values = pd.to_numeric(
                frame[columns[normalise_column(field)]].str.replace(",", "", regex=False),
                errors="coerce",
            )
            valid = dates.notna() & values.notna()
            dropped = max(dropped, int((~valid).sum()))
            series = {
                ts.date(): float(value)
                for ts, value in zip(dates[valid], values[valid], strict=True)
            }
            bundle[field] = clip(series, start, end)

        self.report_dropped(dataset, dropped)
        return bundle


class CboeDailyStatsScraper:
    """Reads the SPX + SPXW put/call row from the CBOE daily statistics page."""

    name = "cboe-daily"

    def __init__(self, http: HttpClient | None = None, *, url_template: str = CBOE_DAILY_URL):
        self.http = http or HttpClient()
        self.url_template = url_template

    async def scrape(self, day: date) -> DailyPutCallStats | None:
        """Return the day's SPX + SPXW figures, or ``None`` when the row is absent."""
        response = await self.http.get(self.url_template.format(date=day.isoformat()), provider=self.name)
        stats = parse_daily_stats(response.text, day)
        if stats is None:
            logger.bind(provider=self.name).info(f"SPX+SPXW row not found for {day}")
        return stats

    async def close(self) -> None:
        await self.http.close()


def _is_spx_label(cell: object) -> bool:
    return isinstance(cell, str) and _SPX_LABEL_RE.search(cell) is not None


def _table_rows(frame: pd.DataFrame) -> list[list[object]]:
    """Header rows (text cells only) followed by the body rows."""
    columns = frame.columns
    if isinstance(columns, pd.MultiIndex):
        header = [list(columns.get_level_values(level)) for level in range(columns.nlevels)]
    else:
        header = [list(columns)]
    rows = [[cell for cell in row if isinstance(cell, str)] for row in header]
    return [row for row in rows if row] + frame.values.tolist()


def _row_figures(row: list[object]) -> tuple[float, list[int]] | None:
    numbers = [parse_number(cell) for cell in row if not _is_spx_label(cell)]
    numbers = [n for n in numbers if n is not None]
    ratios = [n for n in numbers if n < _MIN_VOLUME]
    volumes = [int(n) for n in numbers if n >= _MIN_VOLUME and n.is_integer()]
    if not ratios or len(volumes) < 3:
        return None
    return ratios[0], volumes


def parse_daily_stats(html: str, day: date) -> DailyPutCallStats | None:
    """Read ratio and call/put/total volume from the table holding the ``SPX + SPXW`` row.

    The label row and the rows following it are searched for the first row
    carrying both a ratio and three volumes.
    """
    if not html.strip():
        return None
    try:
        tables = pd.read_html(io.StringIO(html), match=_SPX_LABEL_RE)
    except ValueError:
        # no table mentions SPX + SPXW
        return None

    for table in tables:
        rows = _table_rows(table)
        for idx, row in enumerate(rows):
            if not any(_is_spx_label(cell) for cell in row):
                continue
            for candidate in rows[idx : idx + _DAILY_LOOKAHEAD]:
                figures = _row_figures(candidate)
                if figures is None:
                    continue
                ratio, volumes = figures
                return DailyPutCallStats(
                    date=day,
                    ratio=ratio,
                    call_volume=volumes[0],
                    put_volume=volumes[1],
                    total_volume=volumes[2],
                )
    return None
