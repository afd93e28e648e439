"""
MyListItem Repository

The membership store: durable (user, content) records with a uniqueness
guarantee and a stable newest-first ordering.

Common Operations:
==================
- insert()                      → Create, DuplicateResourceError on (user, content) clash
- get_user_item()               → Find the membership for a (user, content) pair
- delete_by_user_and_content()  → Remove at most one record
- query_page()                  → Keyset page, (added_at DESC, id DESC)
- count_for_user()              → Total memberships, optionally per content type

Keyset Query:
=============
    SELECT * FROM my_list_items
    WHERE user_id = :user
      [AND content_type = :type]
      [AND (added_at < :after_ts OR (added_at = :after_ts AND id < :after_id))]
    ORDER BY added_at DESC, id DESC
    LIMIT :limit + 1

The extra row tells the caller another page exists without a COUNT query.
"""

from typing import Any, Optional
from uuid import UUID

from sqlalchemy import and_, delete, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from mylist.shared.core.exceptions import DuplicateResourceError
from mylist.shared.models.enums import ContentType
from mylist.shared.models.my_list_item import MyListItem
from mylist.shared.repositories.base import BaseRepository
from mylist.shared.utils.cursor import CursorPosition


UNIQUE_CONSTRAINT = "uq_my_list_items_user_content"


def is_duplicate_membership(error: IntegrityError) -> bool:
    """True when an IntegrityError comes from the (user_id, content_id) constraint."""
    message = str(error.orig)
    # SQLite names the columns instead of the constraint
    return UNIQUE_CONSTRAINT in message or (
        "UNIQUE constraint failed" in message
        and "my_list_items.user_id" in message
        and "my_list_items.content_id" in message
    )


class MyListItemRepository(BaseRepository[MyListItem]):
    """Repository for MyListItem entity."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(MyListItem, session)

    # ═══════════════════════════════════════════════════════════════════════════
    # WRITE METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    async def insert(self, **fields: Any) -> MyListItem:
        """
        Insert a membership record.

        The unique constraint on (user_id, content_id) is the only duplicate
        check. A failed INSERT leaves the transaction unusable, so it is
        rolled back before anything is reported. Other integrity failures
        (a user removed between the existence check and the insert) are
        re-raised unchanged.

        Returns:
            The stored record with its id and added_at

        Raises:
            DuplicateResourceError: If the user already has this content
        """
        try:
            return await self.create(**fields)
        except IntegrityError as e:
            await self.session.rollback()
            if not is_duplicate_membership(e):
                raise
            raise DuplicateResourceError(
                details={
                    "userId": str(fields.get("user_id")),
                    "contentId": str(fields.get("content_id")),
                }
            ) from e

    async def delete_by_user_and_content(self, user_id: UUID, content_id: UUID) -> bool:
        """
        Delete the membership for a (user, content) pair.

        Returns:
            True if a record was removed, False if none matched
        """
        result = await self.session.execute(
            delete(MyListItem).where(
                MyListItem.user_id == user_id,
                MyListItem.content_id == content_id,
            )
        )
        await self.session.flush()
        return (result.rowcount or 0) > 0

    # ═══════════════════════════════════════════════════════════════════════════
    # READ METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_user_item(self, user_id: UUID, content_id: UUID) -> Optional[MyListItem]:
        """Find the membership for a (user, content) pair."""
        stmt = select(MyListItem).where(
            MyListItem.user_id == user_id,
            MyListItem.content_id == content_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def query_page(
        self,
        user_id: UUID,
        limit: int,
        content_type: Optional[ContentType] = None,
        after: Optional[CursorPosition] = None,
    ) -> list[MyListItem]:
        """
        Fetch up to limit + 1 records, newest first.

        Args:
            user_id: Owner of the list
            limit: Page size; one extra row is fetched
            content_type: Optional movie/show filter
            after: Only return records strictly after this position
                   in (added_at DESC, id DESC) order

        Returns:
            At most limit + 1 records
        """
        stmt = select(MyListItem).where(MyListItem.user_id == user_id)

        if content_type is not None:
            stmt = stmt.where(MyListItem.content_type == content_type)

        if after is not None:
            stmt = stmt.where(
                or_(
                    MyListItem.added_at < after.added_at,
                    and_(
                        MyListItem.added_at == after.added_at,
                        MyListItem.id < after.record_id,
                    ),
                )
            )

        stmt = stmt.order_by(MyListItem.added_at.desc(), MyListItem.id.desc()).limit(limit + 1)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_for_user(
        self,
        user_id: UUID,
        content_type: Optional[ContentType] = None,
    ) -> int:
        """Total memberships for a user, scoped to content_type when given."""
        filters: dict[str, Any] = {"user_id": user_id}
        if content_type is not None:
            filters["content_type"] = content_type
        return await self.count(filters)
