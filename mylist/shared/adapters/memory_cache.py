"""
In-memory cache backend.

Single-process stand-in for Redis with the same semantics the list caches
rely on: TTL expiry, set-if-absent and atomic increment. Suitable for
local development and tests; entries are not shared between processes.

Every method runs without yielding to the event loop, so each operation is
atomic with respect to other coroutines.

Expired keys are dropped when read, and writes sweep the whole store at most
once per sweep interval, so keys nobody reads again (pages orphaned by a
version bump) are still reclaimed.
"""

import time
from typing import Callable, Dict, Optional, Tuple


class InMemoryCacheBackend:
    """Dict-backed CacheBackend with lazy expiry and periodic sweeps."""

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        sweep_interval: float = 30.0,
    ) -> None:
        """
        Args:
            clock: Monotonic seconds source; injectable so tests can advance time
            sweep_interval: Minimum seconds between full expiry sweeps
        """
        self._clock = clock
        self._sweep_interval = sweep_interval
        self._next_sweep = clock() + sweep_interval
        self._store: Dict[str, Tuple[str, Optional[float]]] = {}

    def _live(self, key: str) -> Optional[Tuple[str, Optional[float]]]:
        entry = self._store.get(key)
        if entry is None:
            return None
        _, expires_at = entry
        if expires_at is not None and self._clock() >= expires_at:
            del self._store[key]
            return None
        return entry

    def _sweep(self) -> None:
        now = self._clock()
        if now < self._next_sweep:
            return
        self._next_sweep = now + self._sweep_interval
        expired = [
            key
            for key, (_, expires_at) in self._store.items()
            if expires_at is not None and now >= expires_at
        ]
        for key in expired:
            del self._store[key]

    def _deadline(self, ttl: Optional[int]) -> Optional[float]:
        return self._clock() + ttl if ttl else None

    async def get(self, key: str) -> Optional[str]:
        entry = self._live(key)
        return entry[0] if entry else None

    async def set(
        self,
        key: str,
        value: str,
        ttl: Optional[int] = None,
        nx: bool = False,
    ) -> bool:
        self._sweep()
        if nx and self._live(key) is not None:
            return False
        self._store[key] = (value, self._deadline(ttl))
        return True

    async def incr(self, key: str, amount: int = 1) -> int:
        self._sweep()
        entry = self._live(key)
        current, expires_at = entry if entry else ("0", None)
        new_value = int(current) + amount
        self._store[key] = (str(new_value), expires_at)
        return new_value

    async def expire(self, key: str, ttl: int) -> bool:
        entry = self._live(key)
        if entry is None:
            return False
        self._store[key] = (entry[0], self._deadline(ttl))
        return True

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        self._store.clear()

    def size(self) -> int:
        """Stored entries, including expired ones not yet swept."""
        return len(self._store)

    def ttl_remaining(self, key: str) -> Optional[float]:
        """Seconds until expiry, None for persistent or missing keys."""
        entry = self._live(key)
        if entry is None or entry[1] is None:
            return None
        return entry[1] - self._clock()

