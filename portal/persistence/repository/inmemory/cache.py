"""In-memory key-value stores for testing."""

import time
from collections import defaultdict, deque

from portal.domain.repository import CacheStore, CounterStore


class InMemoryCacheStore(CacheStore):
    """Dict-backed cache with monotonic-clock expiry."""

    def __init__(self) -> None:
        self._entries: dict[str, tuple[str, float]] = {}
        self.fail = False

    async def get(self, key: str) -> str | None:
        self._maybe_fail()
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires = entry
        if expires <= time.monotonic():
            del self._entries[key]
            return None
        return value

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        self._maybe_fail()
        self._entries[key] = (value, time.monotonic() + ttl_seconds)

    async def add(self, key: str, value: str, ttl_seconds: int) -> bool:
        self._maybe_fail()
        entry = self._entries.get(key)
        if entry is not None and entry[1] > time.monotonic():
            return False
        self._entries[key] = (value, time.monotonic() + ttl_seconds)
        return True

    async def delete(self, key: str) -> None:
        self._maybe_fail()
        self._entries.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def _maybe_fail(self) -> None:
        if self.fail:
            raise ConnectionError("cache unavailable")


class InMemoryCounterStore(CounterStore):
    """Sliding window log per key."""

    def __init__(self) -> None:
        self._events: dict[str, deque[float]] = defaultdict(deque)
        self.fail = False

    async def hit(self, key: str, window_seconds: int) -> int:
        self._maybe_fail()
        now = time.monotonic()
        events = self._prune(key, now, window_seconds)
        events.append(now)
        return len(events)

    async def count(self, key: str, window_seconds: int) -> int:
        self._maybe_fail()
        return len(self._prune(key, time.monotonic(), window_seconds))

    def _prune(self, key: str, now: float, window_seconds: int) -> deque[float]:
        events = self._events[key]
        while events and events[0] <= now - window_seconds:
            events.popleft()
        return events

    def _maybe_fail(self) -> None:
        if self.fail:
            raise ConnectionError("counter store unavailable")
