"""
Redis adapter - Version counters and page cache storage.

Provides:
- Key-value get/set with TTL and set-if-absent
- Atomic counters with expiry

Every transport failure (connection refused, timeout, protocol error) is
re-raised as CacheUnavailableError. Callers log it and decide how to
degrade; the adapter never hides a failure as a miss.
"""

import functools
from typing import Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from ...config.settings import settings
from ..core.exceptions import CacheUnavailableError


class RedisAdapter:
    """
    Adapter for Redis operations.

    Implements the CacheBackend protocol on top of redis.asyncio with
    short socket timeouts so a slow cache cannot stall a request.
    """

    def __init__(self, url: Optional[str] = None, socket_timeout: Optional[float] = None):
        """
        Initialize Redis adapter.

        Args:
            url: Redis URL (redis://host:port/db)
            socket_timeout: Per-operation timeout in seconds
        """
        self.url = url or settings.REDIS_URL
        self.socket_timeout = socket_timeout or settings.REDIS_SOCKET_TIMEOUT
        self._client: Optional[redis.Redis] = None

    @property
    def client(self) -> redis.Redis:
        """Lazy-loaded Redis client."""
        if self._client is None:
            self._client = redis.from_url(
                self.url,
                decode_responses=True,
                socket_timeout=self.socket_timeout,
                socket_connect_timeout=self.socket_timeout,
            )
        return self._client

    async def get(self, key: str) -> Optional[str]:
        """
        Get a value.

        Args:
            key: Cache key

        Returns:
            Stored value or None when absent

        Raises:
            CacheUnavailableError: On transport failure
        """
        try:
            return await self.client.get(key)
        except RedisError as e:
            raise CacheUnavailableError("get", key, e) from e

    async def set(
        self,
        key: str,
        value: str,
        ttl: Optional[int] = None,
        nx: bool = False,
    ) -> bool:
        """
        Set a value.

        Args:
            key: Cache key
            value: Value to store
            ttl: Time-to-live in seconds
            nx: Only set if the key does not exist yet

        Returns:
            True if the value was written, False if nx and the key existed

        Raises:
            CacheUnavailableError: On transport failure
        """
        try:
            return bool(await self.client.set(key, value, ex=ttl, nx=nx))
        except RedisError as e:
            raise CacheUnavailableError("set", key, e) from e

    async def incr(self, key: str, amount: int = 1) -> int:
        """
        Atomically increment a counter, creating it at 0 first if absent.

        Returns:
            New counter value

        Raises:
            CacheUnavailableError: On transport failure
        """
        try:
            return int(await self.client.incrby(key, amount))
        except RedisError as e:
            raise CacheUnavailableError("incr", key, e) from e

    async def expire(self, key: str, ttl: int) -> bool:
        """
        Set expiry on a key.

        Returns:
            True if the key exists and the expiry was set

        Raises:
            CacheUnavailableError: On transport failure
        """
        try:
            return bool(await self.client.expire(key, ttl))
        except RedisError as e:
            raise CacheUnavailableError("expire", key, e) from e

    async def ping(self) -> bool:
        """
        Check Redis connectivity.

        Returns:
            True if connected
        """
        try:
            return bool(await self.client.ping())
        except RedisError:
            return False

    async def close(self) -> None:
        """Release the connection pool."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None


@functools.lru_cache(maxsize=1)
def get_redis_adapter() -> RedisAdapter:
    """Get or create Redis adapter singleton."""
    return RedisAdapter()
