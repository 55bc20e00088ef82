"""Shared HTTP client for series adapters."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import httpx

from riskdash.core.exceptions import NetworkError
from riskdash.core.logging import logger


@dataclass
class HttpConfig:
    """Configuration for HTTP client behavior."""

    timeout: float = 30.0
    max_redirects: int = 5
    user_agent: str = "riskdash/0.1"
    headers: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if self.max_redirects < 0:
            raise ValueError("max_redirects must be non-negative")


class HttpClient:
    """Lazily created ``httpx.AsyncClient`` mapping failures to :class:`NetworkError`.

    No retries: a failed request fails the fetch that issued it.
    """

    def __init__(
        self,
        config: HttpConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config or HttpConfig()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> HttpClient:
        self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            headers = {"User-Agent": self.config.user_agent, **self.config.headers}
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.config.timeout),
                follow_redirects=True,
                max_redirects=self.config.max_redirects,
                headers=headers,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def get(self, url: str, *, provider: str, **kwargs: Any) -> httpx.Response:
        """GET ``url``; transport errors and non-2xx responses raise :class:`NetworkError`."""
        client = self._ensure_client()
        try:
            response = await client.get(url, **kwargs)
        except httpx.HTTPError as exc:
            logger.bind(provider=provider).warning(f"Request to {_redact(url)} failed: {exc}")
            raise NetworkError(f"Request to {provider} failed: {exc}", provider) from exc

        if not response.is_success:
            logger.bind(provider=provider).warning(
                f"Request to {_redact(url)} returned HTTP {response.status_code}"
            )
            raise NetworkError(
                f"{provider} responded with HTTP {response.status_code}",
                provider,
                status_code=response.status_code,
            )
        return response


def _redact(url: str) -> str:
    return url.split("?", 1)[0]
