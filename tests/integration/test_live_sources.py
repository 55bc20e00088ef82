"""Live checks against upstream sources; run with --riskdash-run-integration."""

import os
from datetime import date, timedelta

import pytest

from riskdash.core.config import ProviderConfig
from riskdash.core.data.providers import CboeArchiveAdapter, FredAdapter, MultplEpsAdapter, create_http_client

pytestmark = pytest.mark.integration


@pytest.mark.asyncio
async def test_fred_returns_recent_treasury_yields() -> None:
    api_key = os.getenv("FRED_API_KEY")
    if not api_key:
        pytest.skip("FRED_API_KEY is not set")
    end = date.today()

    async with create_http_client(ProviderConfig()) as http:
        bundle = await FredAdapter(api_key, http).fetch("DGS10", ["value"], end - timedelta(days=30), end)

    assert bundle["value"]


@pytest.mark.asyncio
async def test_cboe_archive_has_index_volumes() -> None:
    async with create_http_client(ProviderConfig()) as http:
        bundle = await CboeArchiveAdapter(http).fetch("indexpc", ["CALL", "PUT"], date(2010, 1, 1), date(2010, 12, 31))

    assert len(bundle["CALL"]) > 200


@pytest.mark.asyncio
async def test_multpl_eps_table_parses() -> None:
    async with create_http_client(ProviderConfig()) as http:
        bundle = await MultplEpsAdapter(http).fetch("sp500-eps", ["value"], date(2015, 1, 1), date.today())

    assert all(day.day >= 28 for day in bundle["value"])
