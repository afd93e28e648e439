"""
Catalog Entity Models

Movies, TV shows and episodes. The list service only reads these to
validate adds and to build snapshots; catalog management lives elsewhere.

Model Hierarchy:
================
    Movie
    TVShow
       └── episodes (Episode[])
"""

from datetime import datetime
from typing import Optional
import uuid

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from mylist.shared.models.base import Base, JSONType, TimestampMixin


class Movie(Base, TimestampMixin):
    """A feature film."""

    __tablename__ = "movies"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    genres: Mapped[list[str]] = mapped_column(JSONType, default=list, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    poster_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    release_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    director: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    actors: Mapped[list[str]] = mapped_column(JSONType, default=list, nullable=False)
    duration_minutes: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    def __repr__(self) -> str:
        return f"<Movie(id={self.id}, title={self.title!r})>"


class TVShow(Base, TimestampMixin):
    """A series made of episodes."""

    __tablename__ = "tv_shows"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    genres: Mapped[list[str]] = mapped_column(JSONType, default=list, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    poster_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    seasons: Mapped[int] = mapped_column(Integer, default=1, nullable=False)

    episodes: Mapped[list["Episode"]] = relationship(
        "Episode",
        back_populates="show",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<TVShow(id={self.id}, title={self.title!r})>"


class Episode(Base, TimestampMixin):
    """A single episode of a TV show."""

    __tablename__ = "episodes"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    show_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("tv_shows.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    season: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    episode_number: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    title: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    duration_minutes: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    show: Mapped["TVShow"] = relationship("TVShow", back_populates="episodes")

    def __repr__(self) -> str:
        return f"<Episode(id={self.id}, show_id={self.show_id})>"
