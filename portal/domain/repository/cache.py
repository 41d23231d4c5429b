"""Key-value cache interface."""

from abc import ABC, abstractmethod


class CacheStore(ABC):
    """String key-value store with per-entry TTL."""

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the live value for ``key`` or None."""
        pass

    @abstractmethod
    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store ``value`` under ``key`` for ``ttl_seconds``."""
        pass

    @abstractmethod
    async def add(self, key: str, value: str, ttl_seconds: int) -> bool:
        """Store ``value`` only if ``key`` has no live entry.

        Returns:
            True if the value was stored
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove ``key`` if present."""
        pass
