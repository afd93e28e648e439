"""
MyListItem Entity Model

One user's saved reference to one piece of content (optionally a specific
episode of a show).

SAMPLE MY_LIST_ITEM RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 550e8400-e29b-41d4-a716-446655440000                      │
│ user_id          │ 660e8400-e29b-41d4-a716-446655440000                      │
│ content_id       │ 770e8400-e29b-41d4-a716-446655440000                      │
│ content_type     │ "movie"                                                   │
│ episode_id       │ NULL                                                      │
│ added_at         │ 2024-01-15T10:30:00.123456Z                               │
│ snapshot         │ {"title": "Inception", "genres": ["Sci-Fi"], ...}         │
│ visibility       │ "available"                                               │
└──────────────────────────────────────────────────────────────────────────────┘

Indexes:
========
- uq_my_list_items_user_content (user_id, content_id) UNIQUE
    ← sole duplicate-prevention mechanism
- ix_my_list_items_user_added_id (user_id, added_at, id)
    ← keyset pagination, newest first

Records are created and deleted, never updated in place. The snapshot is
captured once at add time and is never refreshed from the catalog.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Any, Optional
import uuid

from sqlalchemy import (
    DateTime,
    Enum as SQLEnum,
    ForeignKey,
    Index,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from mylist.shared.models.base import Base, TimestampMixin, utcnow
from mylist.shared.models.enums import ContentType, ContentVisibility


if TYPE_CHECKING:
    from mylist.shared.models.user import User


class MyListItem(Base, TimestampMixin):
    """
    MyListItem model - a (user, content) list membership.

    Attributes:
        id: Unique identifier (UUID v4), ordering tiebreaker
        user_id: Owner of the list
        content_id: Movie or TV show id (polymorphic on content_type)
        content_type: movie or show
        episode_id: Optional episode of the show
        added_at: Creation time, immutable, primary ordering key
        snapshot: Denormalized display metadata captured at add time
        visibility: Catalog availability (soft-delete propagation)
    """

    __tablename__ = "my_list_items"
    __table_args__ = (
        UniqueConstraint("user_id", "content_id", name="uq_my_list_items_user_content"),
        Index("ix_my_list_items_user_added_id", "user_id", "added_at", "id"),
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # PRIMARY KEY
    # ═══════════════════════════════════════════════════════════════════════════

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # MEMBERSHIP
    # ═══════════════════════════════════════════════════════════════════════════

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    # No foreign key: points at movies or tv_shows depending on content_type
    content_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        nullable=False,
    )

    content_type: Mapped[ContentType] = mapped_column(
        SQLEnum(ContentType, name="content_type", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )

    episode_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(as_uuid=True),
        nullable=True,
    )

    # Assigned in-process so ties are rare and the value is known before flush
    added_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # DENORMALIZED DISPLAY DATA
    # ═══════════════════════════════════════════════════════════════════════════

    snapshot: Mapped[dict[str, Any]] = mapped_column(nullable=False)

    visibility: Mapped[ContentVisibility] = mapped_column(
        SQLEnum(
            ContentVisibility,
            name="content_visibility",
            values_callable=lambda e: [m.value for m in e],
        ),
        default=ContentVisibility.AVAILABLE,
        nullable=False,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    user: Mapped["User"] = relationship(
        "User",
        back_populates="list_items",
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"<MyListItem(id={self.id}, user_id={self.user_id}, "
            f"content_id={self.content_id})>"
        )
