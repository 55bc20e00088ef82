"""Tests for the shared HTTP client."""

import httpx
import pytest

from riskdash.core.data.providers import HttpClient, HttpConfig
from riskdash.core.exceptions import NetworkError


@pytest.mark.asyncio
async def test_successful_response_is_returned() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text="ok")

    async with HttpClient(HttpConfig(user_agent="riskdash-test/1.0"), transport=httpx.MockTransport(handler)) as client:
        response = await client.get("https://example.test/data", provider="sample")

    assert response.text == "ok"
    assert seen[0].headers["User-Agent"] == "riskdash-test/1.0"


@pytest.mark.asyncio
async def test_non_success_status_raises_network_error() -> None:
    client = HttpClient(transport=httpx.MockTransport(lambda request: httpx.Response(503)))

    with pytest.raises(NetworkError) as excinfo:
        await client.get("https://example.test/data", provider="sample")
    await client.close()

    assert excinfo.value.status_code == 503
    assert excinfo.value.details == {"provider": "sample", "status_code": 503}


@pytest.mark.asyncio
async def test_transport_failure_raises_network_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    client = HttpClient(transport=httpx.MockTransport(handler))

    with pytest.raises(NetworkError) as excinfo:
        await client.get("https://example.test/data", provider="sample")
    await client.close()

    assert excinfo.value.status_code is None
    assert excinfo.value.provider_name == "sample"


def test_config_rejects_non_positive_timeout() -> None:
    with pytest.raises(ValueError):
        HttpConfig(timeout=0)
