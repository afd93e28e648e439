"""
My List Service

Business logic for a user's saved list: add, remove, and paginated reads
served through a version-tagged page cache.

CACHING ARCHITECTURE:
- Every user has a version counter (VersionCache)
- Pages are cached under keys that embed that version (PageCache)
- A successful mutation commits, then bumps the version; pages cached under
  the old version become unreachable and expire on their own
- The cache is advisory: when it is down, reads go to the store and
  mutations skip the bump

Usage:
======
    from mylist.shared.services.mylist_service import MyListService

    service = MyListService(db, VersionCache(backend), PageCache(backend))
    item, created = await service.add_item(user_id, payload)
    page = await service.list_items(user_id, limit=20, cursor=None)
"""

from typing import Optional, Tuple
from uuid import UUID

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from mylist.config.settings import settings
from mylist.shared.cache.page_cache import PageCache
from mylist.shared.cache.version_cache import VersionCache
from mylist.shared.core.exceptions import (
    DuplicateResourceError,
    InternalServerError,
    InvalidIdentifierError,
    UserNotFoundError,
)
from mylist.shared.core.logging import get_logger
from mylist.shared.models.enums import ContentType
from mylist.shared.models.my_list_item import MyListItem
from mylist.shared.repositories.catalog_repository import CatalogRepository
from mylist.shared.repositories.my_list_item_repository import MyListItemRepository
from mylist.shared.schemas.mylist import AddItemRequest, MyListItemResponse, MyListPage
from mylist.shared.services.content_resolver import ContentLookup, build_target
from mylist.shared.utils.cursor import decode_cursor, encode_cursor


logger = get_logger(__name__)


def parse_identifier(field: str, value: str) -> UUID:
    """
    Parse a client-supplied id.

    Raises:
        InvalidIdentifierError: If value is not a UUID
    """
    try:
        return UUID(str(value))
    except (TypeError, ValueError) as e:
        raise InvalidIdentifierError(field, value) from e


class MyListService:
    """
    Service for My List business logic.

    Handles:
    - Adding content (validated against the catalog, idempotent on repeat)
    - Removing content
    - Newest-first keyset pagination with page caching
    """

    def __init__(
        self,
        session: AsyncSession,
        version_cache: VersionCache,
        page_cache: PageCache,
        lookup: Optional[ContentLookup] = None,
        max_limit: Optional[int] = None,
        default_limit: Optional[int] = None,
        page_ttl_seconds: Optional[int] = None,
        duplicate_conflict: Optional[bool] = None,
    ) -> None:
        """
        Initialize MyListService.

        Args:
            session: Async database session
            version_cache: Per-user invalidation counters
            page_cache: Version-tagged page storage
            lookup: Content and user lookups (default: catalog tables)
            max_limit: Largest page size (default MYLIST_MAX_LIMIT)
            default_limit: Page size when none is given (default MYLIST_DEFAULT_LIMIT)
            page_ttl_seconds: Cached page lifetime (default MYLIST_CACHE_TTL_SECONDS)
            duplicate_conflict: Raise on duplicate add instead of returning
                the existing item (default MYLIST_DUPLICATE_ADD_CONFLICT)
        """
        self.session = session
        self.version_cache = version_cache
        self.page_cache = page_cache
        self.lookup: ContentLookup = lookup or CatalogRepository(session)
        self.item_repo = MyListItemRepository(session)

        self.max_limit = max_limit or settings.MYLIST_MAX_LIMIT
        self.default_limit = default_limit or settings.MYLIST_DEFAULT_LIMIT
        self.page_ttl_seconds = page_ttl_seconds or settings.MYLIST_CACHE_TTL_SECONDS
        self.duplicate_conflict = (
            settings.MYLIST_DUPLICATE_ADD_CONFLICT
            if duplicate_conflict is None
            else duplicate_conflict
        )

    # ═══════════════════════════════════════════════════════════════════════════
    # MUTATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def add_item(
        self,
        user_id: str,
        payload: AddItemRequest,
    ) -> Tuple[MyListItem, bool]:
        """
        Add content to a user's list.

        Flow:
        1. Validate ids and the content type / episode combination
        2. Check the user, then resolve the content (and episode) in the catalog
        3. Take the client snapshot or synthesize one from the catalog
        4. Insert, commit, bump the user's version
        5. If the item was already listed, return the stored one

        Args:
            user_id: User's id
            payload: Add request

        Returns:
            Tuple of (item, created)

        Raises:
            ValidationError: Malformed id, or an episode on a movie
            NotFoundError: Unknown user, content or episode
            ConflictError: Episode of another show, or a duplicate add when
                           duplicate_conflict is set
            InternalServerError: Store failure
        """
        user_uuid = parse_identifier("userId", user_id)
        content_uuid = parse_identifier("contentId", payload.content_id)
        episode_uuid = (
            parse_identifier("episodeId", payload.episode_id)
            if payload.episode_id is not None
            else None
        )
        target = build_target(payload.content_type, content_uuid, episode_uuid)

        try:
            if not await self.lookup.user_exists(user_uuid):
                raise UserNotFoundError(str(user_uuid))
            resolved = await target.resolve(self.lookup)

            snapshot = payload.snapshot.to_record() if payload.snapshot else resolved.snapshot()

            try:
                item = await self.item_repo.insert(
                    user_id=user_uuid,
                    content_id=resolved.content_id,
                    content_type=resolved.content_type,
                    episode_id=resolved.episode_id,
                    snapshot=snapshot,
                )
                await self.session.commit()
            except DuplicateResourceError:
                if self.duplicate_conflict:
                    raise
                return await self._existing_item(user_uuid, content_uuid), False
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("List item add failed", user_id=str(user_uuid), error=str(e))
            raise InternalServerError("Failed to add item") from e

        await self.version_cache.bump(str(user_uuid))
        logger.info(
            "List item added",
            user_id=str(user_uuid),
            content_id=str(content_uuid),
            content_type=resolved.content_type.value,
        )
        return item, True

    async def _existing_item(self, user_uuid: UUID, content_uuid: UUID) -> MyListItem:
        """Recover a duplicate add into the stored item."""
        existing = await self.item_repo.get_user_item(user_uuid, content_uuid)
        if existing is None:
            logger.error(
                "Duplicate key but fetch failed",
                user_id=str(user_uuid),
                content_id=str(content_uuid),
            )
            raise InternalServerError("duplicate key but fetch failed")

        await self.version_cache.bump(str(user_uuid))
        logger.info("List item already present", user_id=str(user_uuid), content_id=str(content_uuid))
        return existing

    async def remove_item(self, user_id: str, content_id: str) -> bool:
        """
        Remove content from a user's list.

        Returns:
            True if an item was removed, False if the content was not listed

        Raises:
            ValidationError: Malformed id
            InternalServerError: Store failure
        """
        user_uuid = parse_identifier("userId", user_id)
        content_uuid = parse_identifier("contentId", content_id)

        try:
            removed = await self.item_repo.delete_by_user_and_content(user_uuid, content_uuid)
            if removed:
                await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("List item remove failed", user_id=str(user_uuid), error=str(e))
            raise InternalServerError("Failed to remove item") from e

        if not removed:
            return False

        await self.version_cache.bump(str(user_uuid))
        logger.info("List item removed", user_id=str(user_uuid), content_id=str(content_uuid))
        return True

    # ═══════════════════════════════════════════════════════════════════════════
    # READS
    # ═══════════════════════════════════════════════════════════════════════════

    def clamp_limit(self, limit: Optional[int]) -> int:
        """Page size within [1, max_limit]; absent or non-positive means default."""
        if limit is None or limit <= 0:
            limit = self.default_limit
        return max(1, min(limit, self.max_limit))

    async def list_items(
        self,
        user_id: str,
        limit: Optional[int] = None,
        cursor: Optional[str] = None,
        content_type: Optional[ContentType] = None,
        include_total: bool = False,
    ) -> MyListPage:
        """
        One page of a user's list, newest first.

        Pages are served from the page cache when the user's current version
        has one for this (limit, cursor, filter) shape. When the version
        cannot be read, the page cache is skipped for this request.

        Args:
            user_id: User's id
            limit: Page size, clamped to [1, max_limit]
            cursor: nextCursor of the previous page
            content_type: Only movies or only shows
            include_total: Attach the item count (scoped to content_type)

        Returns:
            MyListPage with items, next_cursor and, if requested, total

        Raises:
            ValidationError: Malformed user id or cursor
            InternalServerError: Store failure
        """
        user_uuid = parse_identifier("userId", user_id)
        limit = self.clamp_limit(limit)
        # Decoded before the cache lookup; the raw string is part of the key
        after = decode_cursor(cursor) if cursor else None

        version = await self.version_cache.get_or_init(str(user_uuid))
        cache_key = None
        if version is not None:
            cache_key = self.page_cache.key_for(
                str(user_uuid),
                version,
                limit,
                cursor,
                content_type.value if content_type else None,
                include_total,
            )
            cached = await self._cached_page(cache_key)
            if cached is not None:
                logger.debug("Page cache hit", key=cache_key)
                return cached
            logger.debug("Page cache miss", key=cache_key)

        try:
            rows = await self.item_repo.query_page(
                user_uuid,
                limit,
                content_type=content_type,
                after=after,
            )
            total = (
                await self.item_repo.count_for_user(user_uuid, content_type)
                if include_total
                else None
            )
        except SQLAlchemyError as e:
            logger.error("List query failed", user_id=str(user_uuid), error=str(e))
            raise InternalServerError("Failed to load list") from e

        next_cursor = None
        if len(rows) > limit:
            rows = rows[:limit]
            last = rows[-1]
            next_cursor = encode_cursor(last.added_at, last.id)

        fields = {
            "items": [MyListItemResponse.from_record(row) for row in rows],
            "next_cursor": next_cursor,
        }
        if include_total:
            fields["total"] = total
        page = MyListPage(**fields)

        if cache_key is not None:
            await self.page_cache.put(cache_key, page.to_cache(), self.page_ttl_seconds)

        return page

    async def _cached_page(self, key: str) -> Optional[MyListPage]:
        cached = await self.page_cache.get(key)
        if cached is None:
            return None
        try:
            return MyListPage.model_validate(cached)
        except PydanticValidationError:
            logger.warning("Discarding malformed cached page", key=key)
            return None
