"""
Page Cache

Stores computed list pages under version-tagged keys.

- get(): lookup only. Unreachable cache and undecodable payloads are
  reported as a miss.
- put(): write-once (SET NX EX). A slow request finishing late cannot
  clobber a page already written under the same key; both are snapshots
  of the same version, so the first writer wins.

Pages are never deleted. Bumping the user's version makes old keys
unreachable and the TTL reclaims them.
"""

import json
from typing import Any, Optional

from mylist.config.settings import settings
from mylist.shared.cache.backend import CacheBackend
from mylist.shared.cache.keys import page_cache_key
from mylist.shared.core.exceptions import CacheUnavailableError
from mylist.shared.core.logging import get_logger


logger = get_logger(__name__)


class PageCache:
    """Version-tagged list pages on top of a CacheBackend."""

    def __init__(
        self,
        backend: CacheBackend,
        ttl_seconds: Optional[int] = None,
    ) -> None:
        """
        Args:
            backend: Cache storage
            ttl_seconds: Page lifetime (default MYLIST_CACHE_TTL_SECONDS)
        """
        self.backend = backend
        self.ttl_seconds = ttl_seconds or settings.MYLIST_CACHE_TTL_SECONDS

    @staticmethod
    def key_for(
        user_id: str,
        version: int,
        limit: int,
        cursor: Optional[str] = None,
        content_type: Optional[str] = None,
        include_total: bool = False,
    ) -> str:
        """Cache key for a page request at a given version."""
        return page_cache_key(user_id, version, limit, cursor, content_type, include_total)

    async def get(self, key: str) -> Optional[dict[str, Any]]:
        """
        Cached page for a key.

        Returns:
            The page dict, or None on miss, failure or corrupt payload
        """
        try:
            raw = await self.backend.get(key)
        except CacheUnavailableError as e:
            logger.warning("Page cache read failed", key=key, error=e.message)
            return None

        if raw is None:
            return None

        try:
            page = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Discarding undecodable cached page", key=key)
            return None
        return page if isinstance(page, dict) else None

    async def put(
        self,
        key: str,
        page: dict[str, Any],
        ttl_seconds: Optional[int] = None,
    ) -> bool:
        """
        Store a page unless the key already holds one.

        Returns:
            True if this call wrote the page
        """
        try:
            return await self.backend.set(
                key,
                json.dumps(page),
                ttl=ttl_seconds or self.ttl_seconds,
                nx=True,
            )
        except CacheUnavailableError as e:
            logger.warning("Page cache write failed", key=key, error=e.message)
            return False
