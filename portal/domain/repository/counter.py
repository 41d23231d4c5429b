"""Sliding window counter interface."""

from abc import ABC, abstractmethod


class CounterStore(ABC):
    """Counts events per key over a sliding time window.

    Counter writes happen outside invite transactions and are never rolled
    back.
    """

    @abstractmethod
    async def hit(self, key: str, window_seconds: int) -> int:
        """Record one event and count events in the window.

        Args:
            key: Counter key
            window_seconds: Window length

        Returns:
            Number of events for ``key`` in the window, including this one
        """
        pass

    @abstractmethod
    async def count(self, key: str, window_seconds: int) -> int:
        """Count events in the window without recording one.

        Args:
            key: Counter key
            window_seconds: Window length

        Returns:
            Number of events for ``key`` in the window
        """
        pass
