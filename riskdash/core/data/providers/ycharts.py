"""SPX put/call ratio scraped from YCharts."""

from __future__ import annotations

import io
import re
from dataclasses import dataclass, field
from datetime import date

import lxml.html
import pandas as pd

from riskdash.core.data.providers.http import HttpClient
from riskdash.core.logging import logger
from riskdash.core.models import PutCallObservation

YCHARTS_SPX_PUTCALL_URL = "https://ycharts.com/indicators/cboe_spx_put_call_ratio"
HTML_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"

_LATEST_RE = re.compile(r"(\d+(?:\.\d+)?)\s+for\s+([A-Za-z]{3})\s+(\d{2})\s+(\d{4})")

_MONTHS = {
    "jan": 1, "january": 1,
    "feb": 2, "february": 2,
    "mar": 3, "march": 3,
    "apr": 4, "april": 4,
    "may": 5,
    "jun": 6, "june": 6,
    "jul": 7, "july": 7,
    "aug": 8, "august": 8,
    "sep": 9, "september": 9,
    "oct": 10, "october": 10,
    "nov": 11, "november": 11,
    "dec": 12, "december": 12,
}  # fmt: skip


@dataclass
class ScrapedPutCall:
    latest: PutCallObservation | None = None
    historical: list[PutCallObservation] = field(default_factory=list)

    def observations(self) -> list[PutCallObservation]:
        """Historical rows plus the headline value when it is not among them."""
        rows = list(self.historical)
        if self.latest is not None and all(r.date != self.latest.date for r in rows):
            rows.append(self.latest)
        return rows


def _make_date(month_name: str, day: str, year: str) -> date | None:
    month = _MONTHS.get(month_name.lower())
    if month is None:
        return None
    try:
        return date(int(year), month, int(day))
    except ValueError:
        return None


def _page_text(html: str) -> str:
    if not html.strip():
        return ""
    return " ".join(lxml.html.fromstring(html).text_content().split())


def _historical_rows(html: str) -> list[PutCallObservation]:
    try:
        tables = pd.read_html(io.StringIO(html))
    except ValueError:
        return []

    rows: dict[date, PutCallObservation] = {}
    for table in tables:
        if table.shape[1] < 2:
            continue
        dates = pd.to_datetime(table.iloc[:, 0].astype(str).str.strip(), errors="coerce", format="mixed")
        values = pd.to_numeric(table.iloc[:, 1], errors="coerce")
        valid = dates.notna() & values.notna()
        for ts, value in zip(dates[valid], values[valid], strict=True):
            rows.setdefault(ts.date(), PutCallObservation(date=ts.date(), ratio=float(value)))
    return sorted(rows.values(), key=lambda obs: obs.date)


def parse_ycharts_page(html: str) -> ScrapedPutCall:
    """Extract the headline reading and the historical data table."""
    result = ScrapedPutCall(historical=_historical_rows(html))

    latest = _LATEST_RE.search(_page_text(html))
    if latest:
        day = _make_date(latest.group(2), latest.group(3), latest.group(4))
        if day is not None:
            result.latest = PutCallObservation(date=day, ratio=float(latest.group(1)))
    return result


class YChartsPutCallScraper:
    """Fetches the YCharts SPX put/call page."""

    name = "ycharts"

    def __init__(self, http: HttpClient | None = None, *, url: str = YCHARTS_SPX_PUTCALL_URL):
        self.http = http or HttpClient()
        self.url = url

    async def scrape(self) -> ScrapedPutCall:
        response = await self.http.get(
            self.url,
            provider=self.name,
            headers={"Accept": HTML_ACCEPT, "Accept-Language": "en-US,en;q=0.5"},
        )
        scraped = parse_ycharts_page(response.text)
        logger.bind(provider=self.name).info(
            f"Scraped {len(scraped.historical)} historical rows, latest={scraped.latest}"
        )
        return scraped

    async def close(self) -> None:
        await self.http.close()
