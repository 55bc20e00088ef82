"""FRED series observations adapter."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from riskdash.core.data.providers.base import SeriesAdapter, SeriesBundle, parse_number
from riskdash.core.data.providers.http import HttpClient
from riskdash.core.exceptions import AcquisitionError, CredentialError, ParseError
from riskdash.core.logging import logger
from riskdash.core.monitoring import MetricsCollector

FRED_OBSERVATIONS_URL = "https://api.stlouisfed.org/fred/series/observations"
MISSING_VALUE = "."


class FredAdapter(SeriesAdapter):
    """Federal Reserve Economic Data (FRED) ``series/observations`` endpoint.

    Every FRED dataset is a single series; all requested fields receive the
    same observations.
    """

    name = "fred"

    def __init__(
        self,
        api_key: str | None,
        http: HttpClient | None = None,
        *,
        base_url: str = FRED_OBSERVATIONS_URL,
        metrics: MetricsCollector | None = None,
    ):
        super().__init__(http, metrics=metrics)
        self.api_key = api_key
        self.base_url = base_url

    async def fetch(self, dataset: str, fields: Iterable[str], start: date, end: date) -> SeriesBundle:
        if not self.api_key:
            raise CredentialError(
                "FRED_API_KEY is not set. Get a free key at https://fred.stlouisfed.org/docs/api/api_key.html",
                self.name,
                credential="FRED_API_KEY",
            )

        params = {
            "series_id": dataset,
            "api_key": self.api_key,
            "file_type": "json",
            "observation_start": start.isoformat(),
            "observation_end": end.isoformat(),
        }
        response = await self.http.get(self.base_url, provider=self.name, params=params)
        try:
            payload = response.json()
        except ValueError as exc:
            raise ParseError(f"FRED returned invalid JSON for {dataset}", self.name) from exc

        observations = payload.get("observations") if isinstance(payload, dict) else None
        if observations is None:
            raise AcquisitionError(
                f"No observations returned for {dataset}", self.name, details={"dataset": dataset}
            )

        values: dict[date, float] = {}
        dropped = 0
        for obs in observations:
            raw = obs.get("value")
            if raw in (MISSING_VALUE, "", None):
                continue
            value = parse_number(raw)
            try:
                day = date.fromisoformat(str(obs.get("date")))
            except ValueError:
                day = None
            if value is None or day is None:
                dropped += 1
                continue
            values[day] = value

        self.report_dropped(dataset, dropped)
        logger.bind(provider=self.name).debug(f"Fetched {len(values)} observations for {dataset}")
        return {field: dict(values) for field in fields}
