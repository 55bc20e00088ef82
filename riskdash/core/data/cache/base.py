"""Cache strategy interface."""

from abc import ABC, abstractmethod
from typing import Any


class CacheStrategy(ABC):
    """Abstract async cache."""

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """Return the cached value, or ``None`` when absent or expired."""
        pass

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: int) -> None:
        """Store ``value`` for ``ttl`` seconds."""
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        pass

    @abstractmethod
    async def clear(self) -> None:
        pass

    @abstractmethod
    async def get_ttl(self, key: str) -> int | None:
        """Remaining lifetime in whole seconds."""
        pass
