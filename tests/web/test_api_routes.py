"""Tests for the HTTP API."""

from __future__ import annotations

from datetime import date

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from riskdash.core.config import CacheConfig, DashboardConfig
from riskdash.core.exceptions import CredentialError, NetworkError, ParseError, StorageError
from riskdash.core.indicators.base import IndicatorSpec
from riskdash.core.models import DailyPutCallStats, IndicatorSeries, Period, ScoredPoint
from riskdash.core.services import IndicatorService, PutCallWindowService, ServiceContainer
from riskdash.web.app import create_app

TODAY = date(2024, 6, 17)


class StubPipeline:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.calls: list[tuple[str, Period, date]] = []

    async def run(self, spec: IndicatorSpec, period: Period, as_of: date) -> IndicatorSeries:
        self.calls.append((spec.name, period, as_of))
        if self.error is not None:
            raise self.error
        return IndicatorSeries(
            indicator=spec.name,
            period=period,
            value_field=spec.value_field,
            window_size=spec.window,
            display_start=date(2023, 6, 17),
            display_end=as_of,
            points=[
                ScoredPoint(
                    date=date(2024, 6, 14),
                    raw_fields={"tbill3m": 5.25, "sofr90": 5.31},
                    value=6.0,
                    z_score=-0.004,
                    window_filled=True,
                )
            ],
            decimals=spec.field_decimals(),
        )


class StubScraper:
    name = "cboe-daily"

    async def scrape(self, day: date) -> DailyPutCallStats | None:
        return DailyPutCallStats(date=day, ratio=1.2, call_volume=10, put_volume=12, total_volume=22)


def _app(repository, pipeline: StubPipeline | None = None) -> FastAPI:
    config = DashboardConfig(cache=CacheConfig(enabled=False))
    services = ServiceContainer(
        config=config,
        indicators=IndicatorService(pipeline or StubPipeline(), config=config.cache),
        putcall=PutCallWindowService(StubScraper(), repository, config=config.cache),
    )
    return create_app(services=services, clock=lambda: TODAY)


def _client(repository, pipeline: StubPipeline | None = None) -> TestClient:
    return TestClient(_app(repository, pipeline))


def test_indicator_catalogue(repository) -> None:
    response = _client(repository).get("/api/indicators")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert [entry["name"] for entry in body["data"]][:2] == ["vix-term-structure", "hy-spread"]


def test_history_uses_application_clock(repository) -> None:
    pipeline = StubPipeline()

    response = _client(repository, pipeline).get("/api/sofr-spread/history", params={"period": "1y"})

    assert response.status_code == 200
    data = response.json()["data"]
    assert pipeline.calls == [("sofr-spread", Period.ONE_YEAR, TODAY)]
    assert data["zscore_field"] == "spreadZScore"
    assert data["records"] == [
        {"date": "2024-06-14", "sofr90": 5.31, "tbill3m": 5.25, "spread": 6, "spreadZScore": 0.0}
    ]


def test_latest_record(repository) -> None:
    response = _client(repository).get("/api/sofr-spread/latest")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["period"] == "2y"
    assert data["record"]["spread"] == 6
    assert data["window_filled"] is True


def test_putcall_window(repository) -> None:
    response = _client(repository).get("/api/putcall/window")

    assert response.status_code == 200
    rows = response.json()["data"]
    assert len(rows) == 7
    assert rows[-1] == {"date": "2024-06-14", "ratio": 1.2, "callVolume": 10, "putVolume": 12, "totalVolume": 22}


def test_unknown_indicator_is_404(repository) -> None:
    response = _client(repository).get("/api/vix/history")

    assert response.status_code == 404
    assert response.json()["error"] == "UNKNOWN_INDICATOR"


def test_unsupported_period_is_400(repository) -> None:
    response = _client(repository).get("/api/hy-spread/history", params={"period": "max"})

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "UNSUPPORTED_PERIOD"
    assert body["details"]["supported"] == ["1y", "2y", "5y", "10y"]


@pytest.mark.parametrize(
    ("error", "status", "code"),
    [
        (CredentialError("FRED_API_KEY is not set", "fred", credential="FRED_API_KEY"), 503, "CREDENTIAL_MISSING"),
        (NetworkError("upstream 500", "fred", status_code=500), 502, "NETWORK_ERROR"),
        (ParseError("layout changed", "cboe"), 502, "PARSE_ERROR"),
        (StorageError("disk full", table="put_call_ratios"), 500, "STORAGE_ERROR"),
    ],
)
def test_domain_errors_map_to_status(repository, error: Exception, status: int, code: str) -> None:
    response = _client(repository, StubPipeline(error)).get("/api/hy-spread/history")

    assert response.status_code == status
    assert response.json()["error"] == code


def test_unexpected_error_is_500(repository) -> None:
    client = TestClient(_app(repository, StubPipeline(RuntimeError("bug"))), raise_server_exceptions=False)

    response = client.get("/api/hy-spread/history")

    assert response.status_code == 500
    assert response.json()["error"] == "INTERNAL_ERROR"


def test_unknown_route_uses_error_envelope(repository) -> None:
    response = _client(repository).get("/api/hy-spread/forecast")

    assert response.status_code == 404
    assert response.json()["error"] == "HTTP_ERROR"


def test_request_id_is_echoed(repository) -> None:
    response = _client(repository).get("/api/health", headers={"X-Request-ID": "req-42"})

    assert response.headers["X-Request-ID"] == "req-42"
    body = response.json()
    assert body["request_id"] == "req-42"
    assert body["data"]["status"] == "healthy"
    assert body["data"]["components"]["fred"] == "missing api key"


def test_generated_request_id_is_returned_in_body(repository) -> None:
    response = _client(repository).get("/api/health")

    generated = response.headers["X-Request-ID"]
    assert generated
    assert response.json()["request_id"] == generated


def test_error_body_carries_generated_request_id(repository) -> None:
    response = _client(repository).get("/api/vix/history")

    assert response.status_code == 404
    assert response.json()["request_id"] == response.headers["X-Request-ID"]
