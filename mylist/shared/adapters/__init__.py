"""
Adapters Package

External service integrations.

Components:
===========
- redis_adapter: Redis-backed cache storage
- memory_cache: In-process cache storage for development and tests

Usage:
======
    from mylist.shared.adapters import get_redis_adapter

    redis = get_redis_adapter()
    await redis.set("key", "value", ttl=60, nx=True)
"""

from mylist.shared.adapters.redis_adapter import RedisAdapter, get_redis_adapter
from mylist.shared.adapters.memory_cache import InMemoryCacheBackend

__all__ = [
    "RedisAdapter",
    "get_redis_adapter",
    "InMemoryCacheBackend",
]
