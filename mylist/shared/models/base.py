"""
Base Model Classes

This module provides the foundational classes for all SQLAlchemy models in MyList.
It includes the declarative base and the common timestamp mixin.

Model Hierarchy:
================
    Base                    ← SQLAlchemy declarative base
       │
       └── TimestampMixin   ← Automatic created_at/updated_at

Usage:
======
    from mylist.shared.models.base import Base, TimestampMixin, JSONType

    class Movie(Base, TimestampMixin):
        __tablename__ = "movies"
        id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
        genres: Mapped[list[str]] = mapped_column(JSONType, default=list)
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, DateTime, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")


def utcnow() -> datetime:
    """Timezone-aware current time, microsecond resolution."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Provides:
    - Type annotation support for columns
    - JSON type mapping (JSONB on PostgreSQL) for dict columns
    """

    type_annotation_map = {
        dict[str, Any]: JSONType,
    }


class TimestampMixin:
    """
    Mixin that adds automatic timestamp tracking to models.

    Provides two timestamp columns that are automatically managed:
    - created_at: Set when the record is first inserted
    - updated_at: Updated whenever the record is modified

    Database Behavior:
    ==================
    - created_at: Set by the database on INSERT via server_default
    - updated_at: Set on INSERT, updated by SQLAlchemy on UPDATE via onupdate
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=utcnow,
        nullable=False,
    )
