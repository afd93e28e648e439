"""
List Caches

Read-through caching for list pages, invalidated by per-user version
counters instead of key-by-key deletion.

    VersionCache  ← mylist:<user>:version, INCR on every mutation
    PageCache     ← mylist:<user>:v<version>:..., SET NX EX on every miss

The cache is advisory: every failure degrades to the membership store.
"""

from mylist.shared.cache.backend import CacheBackend, NullCacheBackend, build_cache_backend
from mylist.shared.cache.keys import page_cache_key, user_version_key
from mylist.shared.cache.page_cache import PageCache
from mylist.shared.cache.version_cache import VersionCache

__all__ = [
    "CacheBackend",
    "NullCacheBackend",
    "build_cache_backend",
    "page_cache_key",
    "user_version_key",
    "PageCache",
    "VersionCache",
]
