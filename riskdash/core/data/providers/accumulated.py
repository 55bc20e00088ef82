"""Series accumulated in DuckDB from repeated scrapes."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from riskdash.core.data.providers.base import SeriesAdapter, SeriesBundle, clip
from riskdash.core.data.providers.ycharts import YChartsPutCallScraper
from riskdash.core.data.storage import PutCallRepository
from riskdash.core.exceptions import AcquisitionError
from riskdash.core.logging import logger
from riskdash.core.monitoring import MetricsCollector

SPX_PUTCALL_DATASET = "spx-putcall"


class AccumulatedSeriesAdapter(SeriesAdapter):
    """Scrape, upsert into storage, then serve the full stored history.

    The source page only shows a recent slice; the stored history grows with
    each fetch.
    """

    name = "accumulated"

    def __init__(
        self,
        scraper: YChartsPutCallScraper,
        repository: PutCallRepository,
        *,
        metrics: MetricsCollector | None = None,
    ):
        super().__init__(scraper.http, metrics=metrics)
        self.scraper = scraper
        self.repository = repository

    async def fetch(self, dataset: str, fields: Iterable[str], start: date, end: date) -> SeriesBundle:
        if dataset != SPX_PUTCALL_DATASET:
            raise AcquisitionError(f"Unknown accumulated dataset '{dataset}'", self.name)

        scraped = await self.scraper.scrape()
        written = await self.repository.bulk_upsert_spx_putcall(scraped.observations())
        history = await self.repository.get_spx_putcall_history()
        logger.bind(provider=self.name).info(
            f"Stored {written} scraped rows; history now holds {len(history)} readings"
        )

        values = clip({obs.date: obs.ratio for obs in history}, start, end)
        return {field: dict(values) for field in fields}
