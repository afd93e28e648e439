"""
Cache backend protocol and factory.

The version cache and page cache talk to storage only through this
protocol, so tests and local runs can swap Redis for an in-process or
disabled backend.

Backends:
=========
- RedisAdapter          ← production (CACHE_BACKEND=redis)
- InMemoryCacheBackend  ← single process (CACHE_BACKEND=memory)
- NullCacheBackend      ← cache disabled (CACHE_BACKEND=none)

Implementations raise CacheUnavailableError on transport failure.
"""

from typing import Optional, Protocol, runtime_checkable

from mylist.config.settings import settings
from mylist.shared.adapters.memory_cache import InMemoryCacheBackend
from mylist.shared.adapters.redis_adapter import get_redis_adapter


@runtime_checkable
class CacheBackend(Protocol):
    """Async key-value store with TTL, set-if-absent and counters."""

    async def get(self, key: str) -> Optional[str]:
        ...

    async def set(
        self,
        key: str,
        value: str,
        ttl: Optional[int] = None,
        nx: bool = False,
    ) -> bool:
        ...

    async def incr(self, key: str, amount: int = 1) -> int:
        ...

    async def expire(self, key: str, ttl: int) -> bool:
        ...

    async def ping(self) -> bool:
        ...

    async def close(self) -> None:
        ...


class NullCacheBackend:
    """Cache disabled: reads always miss, writes are dropped."""

    async def get(self, key: str) -> Optional[str]:
        return None

    async def set(
        self,
        key: str,
        value: str,
        ttl: Optional[int] = None,
        nx: bool = False,
    ) -> bool:
        return False

    async def incr(self, key: str, amount: int = 1) -> int:
        return 0

    async def expire(self, key: str, ttl: int) -> bool:
        return False

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        return None


_memory_backend: Optional[InMemoryCacheBackend] = None


def build_cache_backend(kind: Optional[str] = None) -> CacheBackend:
    """
    Backend selected by CACHE_BACKEND.

    The memory backend is a process-wide singleton so every request shares it.
    """
    global _memory_backend

    kind = kind or settings.CACHE_BACKEND
    if kind == "none":
        return NullCacheBackend()
    if kind == "memory":
        if _memory_backend is None:
            _memory_backend = InMemoryCacheBackend()
        return _memory_backend
    return get_redis_adapter()
