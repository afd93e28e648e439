"""
Version Cache

Per-user monotonic counter used as the page cache invalidation epoch.

Semantics:
==========
- get_or_init(user): current version; when absent it is initialized to 0
  with set-if-absent, so concurrent first reads converge on whatever value
  won the race.
- bump(user): +1 via atomic INCR, then refresh a long expiry so counters of
  inactive users eventually disappear. Failures are logged and swallowed;
  the mutation that triggered the bump is already durable.

There is no decrement, reset or compare-and-swap.
"""

from typing import Optional

from mylist.config.settings import settings
from mylist.shared.cache.backend import CacheBackend
from mylist.shared.cache.keys import user_version_key
from mylist.shared.core.exceptions import CacheUnavailableError
from mylist.shared.core.logging import get_logger


logger = get_logger(__name__)

INITIAL_VERSION = 0


class VersionCache:
    """Per-user version counters on top of a CacheBackend."""

    def __init__(
        self,
        backend: CacheBackend,
        ttl_seconds: Optional[int] = None,
    ) -> None:
        """
        Args:
            backend: Cache storage
            ttl_seconds: Expiry refreshed on every bump (default 30 days)
        """
        self.backend = backend
        self.ttl_seconds = ttl_seconds or settings.MYLIST_VERSION_TTL_SECONDS

    async def get_or_init(self, user_id: str) -> Optional[int]:
        """
        Current version for a user, initializing it when absent.

        Returns:
            The version, or None when the cache is unreachable or holds
            something that is not a counter
        """
        key = user_version_key(user_id)
        try:
            raw = await self.backend.get(key)
            if raw is None:
                if await self.backend.set(key, str(INITIAL_VERSION), nx=True):
                    return INITIAL_VERSION
                # Lost the race: read what the winner wrote
                raw = await self.backend.get(key)
                if raw is None:
                    return None
            return int(raw)
        except CacheUnavailableError as e:
            logger.warning("Version lookup failed", user_id=user_id, error=e.message)
            return None
        except ValueError:
            logger.warning("Version counter is not an integer", user_id=user_id)
            return None

    async def bump(self, user_id: str) -> Optional[int]:
        """
        Retire the current version.

        Returns:
            The new version, or None if the bump could not be applied
        """
        key = user_version_key(user_id)
        try:
            version = await self.backend.incr(key)
        except CacheUnavailableError as e:
            logger.warning("Version bump failed", user_id=user_id, error=e.message)
            return None

        try:
            await self.backend.expire(key, self.ttl_seconds)
        except CacheUnavailableError as e:
            logger.warning("Version expiry refresh failed", user_id=user_id, error=e.message)

        logger.debug("Version bumped", user_id=user_id, version=version)
        return version
