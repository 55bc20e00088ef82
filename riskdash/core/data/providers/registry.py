"""Provider registry for series adapters."""

from __future__ import annotations

from riskdash.core.data.providers.base import SeriesAdapter
from riskdash.core.exceptions import DashboardError, ErrorCode
from riskdash.core.logging import logger


class ProviderRegistry:
    """Registry mapping provider names to adapters."""

    def __init__(self) -> None:
        self._providers: dict[str, SeriesAdapter] = {}

    def register(self, adapter: SeriesAdapter, name: str | None = None) -> None:
        """Register ``adapter`` under ``name`` (defaults to ``adapter.name``)."""
        provider_name = name or adapter.name
        if not provider_name:
            raise DashboardError(
                "Provider name cannot be empty",
                ErrorCode.CONFIGURATION_ERROR.value,
                {"provider_class": type(adapter).__name__},
            )
        if provider_name in self._providers:
            logger.warning(f"Overriding existing provider: {provider_name}")
        self._providers[provider_name] = adapter
        logger.debug(f"Registered provider: {provider_name}")

    def unregister(self, name: str) -> bool:
        return self._providers.pop(name, None) is not None

    def get(self, name: str) -> SeriesAdapter:
        try:
            return self._providers[name]
        except KeyError:
            raise DashboardError(
                f"No provider registered under '{name}'",
                ErrorCode.CONFIGURATION_ERROR.value,
                {"provider": name, "registered": sorted(self._providers)},
            ) from None

    def __contains__(self, name: object) -> bool:
        return name in self._providers

    def names(self) -> list[str]:
        return list(self._providers)

    async def close(self) -> None:
        """Close every adapter's HTTP client."""
        for adapter in self._providers.values():
            await adapter.close()
