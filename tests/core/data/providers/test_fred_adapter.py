"""Tests for the FRED adapter."""

from datetime import date

import httpx
import pytest

from riskdash.core.data.providers import FredAdapter, HttpClient
from riskdash.core.exceptions import AcquisitionError, CredentialError, ParseError

START = date(2024, 1, 1)
END = date(2024, 1, 31)


def _adapter(handler, metrics, api_key: str | None = "secret") -> FredAdapter:
    return FredAdapter(api_key, HttpClient(transport=httpx.MockTransport(handler)), metrics=metrics)


@pytest.mark.asyncio
async def test_observations_are_parsed_and_placeholders_skipped(metrics) -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(
            200,
            json={
                "observations": [
                    {"date": "2024-01-02", "value": "3.41"},
                    {"date": "2024-01-03", "value": "."},
                    {"date": "2024-01-04", "value": "n/a"},
                    {"date": "2024-01-05", "value": "3.52"},
                ]
            },
        )

    adapter = _adapter(handler, metrics)
    bundle = await adapter.fetch("BAMLH0A0HYM2", ["value"], START, END)

    assert bundle == {"value": {date(2024, 1, 2): 3.41, date(2024, 1, 5): 3.52}}
    params = requests[0].url.params
    assert params["series_id"] == "BAMLH0A0HYM2"
    assert params["observation_start"] == "2024-01-01"
    assert params["file_type"] == "json"
    assert metrics.registry.get_sample_value(
        "riskdash_dropped_observations_total", {"source": "fred:BAMLH0A0HYM2"}
    ) == 1.0


@pytest.mark.asyncio
async def test_missing_api_key_raises_credential_error(metrics) -> None:
    adapter = _adapter(lambda request: httpx.Response(200, json={}), metrics, api_key=None)

    with pytest.raises(CredentialError) as excinfo:
        await adapter.fetch("DGS10", ["value"], START, END)

    assert excinfo.value.credential == "FRED_API_KEY"


@pytest.mark.asyncio
async def test_missing_observations_key_raises(metrics) -> None:
    adapter = _adapter(lambda request: httpx.Response(200, json={"error_message": "bad series"}), metrics)

    with pytest.raises(AcquisitionError):
        await adapter.fetch("NOPE", ["value"], START, END)


@pytest.mark.asyncio
async def test_invalid_json_raises_parse_error(metrics) -> None:
    adapter = _adapter(lambda request: httpx.Response(200, text="<html>"), metrics)

    with pytest.raises(ParseError):
        await adapter.fetch("DGS10", ["value"], START, END)
