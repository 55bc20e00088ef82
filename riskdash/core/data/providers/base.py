"""Series adapter interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import date

from riskdash.core.data.providers.http import HttpClient
from riskdash.core.logging import logger
from riskdash.core.models import DateValueMap
from riskdash.core.monitoring import MetricsCollector, get_metrics_collector

SeriesBundle = dict[str, DateValueMap]
"""Field name to date-keyed values, as returned by :meth:`SeriesAdapter.fetch`."""


class SeriesAdapter(ABC):
    """Fetches date-keyed observations from one external source.

    Rows that cannot be parsed are skipped and counted; a document that cannot
    be interpreted at all raises :class:`~riskdash.core.exceptions.ParseError`.
    """

    name: str = ""

    def __init__(self, http: HttpClient | None = None, *, metrics: MetricsCollector | None = None):
        self.http = http or HttpClient()
        self._metrics = metrics

    @property
    def metrics(self) -> MetricsCollector:
        return self._metrics or get_metrics_collector()

    @abstractmethod
    async def fetch(
        self,
        dataset: str,
        fields: Iterable[str],
        start: date,
        end: date,
    ) -> SeriesBundle:
        """Return ``{field: {date: value}}`` for ``dataset`` within ``[start, end]``."""

    async def close(self) -> None:
        await self.http.close()

    def report_dropped(self, dataset: str, count: int) -> None:
        if count <= 0:
            return
        source = f"{self.name}:{dataset}"
        self.metrics.record_dropped_observations(source, count)
        logger.bind(provider=self.name).warning(f"Dropped {count} unparseable rows from {source}")


def clip(values: DateValueMap, start: date, end: date) -> DateValueMap:
    """Keep observations dated within ``[start, end]``."""
    return {day: value for day, value in values.items() if start <= day <= end}


def parse_number(raw: object) -> float | None:
    """Parse a provider cell into a float; ``None`` for blanks and placeholders."""
    if raw is None:
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        text = str(raw).strip().replace(",", "").replace("$", "").rstrip("%")
        if not text or text == ".":
            return None
        try:
            value = float(text)
        except ValueError:
            return None
    if value != value:  # NaN
        return None
    return value
