"""
User Entity Model

Represents a viewer. Identity itself is managed upstream; this table only
exists so list writes can check that the user is real.

SAMPLE USER RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 550e8400-e29b-41d4-a716-446655440000                      │
│ username         │ "jdoe"                                                    │
│ first_name       │ "Jane"                                                    │
│ preferences      │ {"favoriteGenres": ["Drama"], "dislikedGenres": []}       │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from typing import TYPE_CHECKING, Any, Optional
import uuid

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from mylist.shared.models.base import Base, TimestampMixin


if TYPE_CHECKING:
    from mylist.shared.models.my_list_item import MyListItem


class User(Base, TimestampMixin):
    """
    User model.

    Attributes:
        id: Unique identifier (UUID v4)
        username: Unique handle
        first_name / last_name: Display name parts
        preferences: Favorite and disliked genres

    Relationships:
        list_items: The user's list memberships
    """

    __tablename__ = "users"

    # ═══════════════════════════════════════════════════════════════════════════
    # PRIMARY KEY
    # ═══════════════════════════════════════════════════════════════════════════

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # PROFILE
    # ═══════════════════════════════════════════════════════════════════════════

    username: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )

    first_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    preferences: Mapped[dict[str, Any]] = mapped_column(
        default=lambda: {"favoriteGenres": [], "dislikedGenres": []},
        nullable=False,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    list_items: Mapped[list["MyListItem"]] = relationship(
        "MyListItem",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<User(id={self.id}, username={self.username})>"
