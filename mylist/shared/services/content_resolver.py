"""
Content Resolver

Turns an add request's (contentType, contentId, episodeId?) into a resolved
catalog entry, applying the rule that belongs to each kind of content:

    MovieTarget   → movie must exist; an episode id is a malformed payload
    ShowTarget    → show must exist; an episode, when given, must exist and
                    belong to that show

Resolution goes through a ContentLookup, so the service never touches the
catalog tables directly. CatalogRepository is the SQL implementation; tests
can pass any object with the same coroutine methods.

Usage:
======
    target = build_target(ContentType.SHOW, show_id, episode_id)
    resolved = await target.resolve(lookup)
    snapshot = resolved.snapshot()
"""

from dataclasses import dataclass
from typing import Any, Optional, Protocol, Union
from uuid import UUID

from mylist.shared.core.exceptions import (
    ContentNotFoundError,
    EpisodeMismatchError,
    EpisodeNotFoundError,
    ValidationError,
)
from mylist.shared.models.enums import ContentType
from mylist.shared.schemas.mylist import SnapshotSchema


class ContentMetadata(Protocol):
    """What the resolver reads from a movie or show."""

    id: UUID
    title: str
    poster_url: Optional[str]
    genres: Optional[list[str]]
    description: Optional[str]


class ContentLookup(Protocol):
    """Catalog and user lookups consumed by the list service."""

    async def find_movie(self, movie_id: UUID) -> Optional[Any]: ...

    async def find_show(self, show_id: UUID) -> Optional[Any]: ...

    async def find_episode(self, episode_id: UUID) -> Optional[Any]: ...

    async def user_exists(self, user_id: UUID) -> bool: ...


@dataclass(frozen=True)
class ResolvedContent:
    """A catalog entry that passed its target's validation."""

    content_type: ContentType
    content_id: UUID
    content: ContentMetadata
    episode_id: Optional[UUID] = None

    def snapshot(self) -> dict[str, Any]:
        """Display metadata synthesized from the entry's current catalog data."""
        return SnapshotSchema(
            title=self.content.title,
            poster_url=self.content.poster_url,
            genres=list(self.content.genres or []),
            short_description=self.content.description or "",
        ).to_record()


@dataclass(frozen=True)
class MovieTarget:
    """An add request aimed at a movie."""

    content_id: UUID
    content_type: ContentType = ContentType.MOVIE

    async def resolve(self, lookup: ContentLookup) -> ResolvedContent:
        movie = await lookup.find_movie(self.content_id)
        if movie is None:
            raise ContentNotFoundError("movie", str(self.content_id))
        return ResolvedContent(
            content_type=self.content_type,
            content_id=self.content_id,
            content=movie,
        )


@dataclass(frozen=True)
class ShowTarget:
    """An add request aimed at a TV show, optionally pinned to an episode."""

    content_id: UUID
    episode_id: Optional[UUID] = None
    content_type: ContentType = ContentType.SHOW

    async def resolve(self, lookup: ContentLookup) -> ResolvedContent:
        show = await lookup.find_show(self.content_id)
        if show is None:
            raise ContentNotFoundError("show", str(self.content_id))

        if self.episode_id is not None:
            episode = await lookup.find_episode(self.episode_id)
            if episode is None:
                raise EpisodeNotFoundError(str(self.episode_id))
            if episode.show_id != self.content_id:
                raise EpisodeMismatchError(str(self.episode_id), str(self.content_id))

        return ResolvedContent(
            content_type=self.content_type,
            content_id=self.content_id,
            content=show,
            episode_id=self.episode_id,
        )


ContentTarget = Union[MovieTarget, ShowTarget]


def build_target(
    content_type: ContentType,
    content_id: UUID,
    episode_id: Optional[UUID] = None,
) -> ContentTarget:
    """
    Pick the target variant for a content type.

    Raises:
        ValidationError: INVALID_PAYLOAD if a movie carries an episode id
    """
    if content_type == ContentType.MOVIE:
        if episode_id is not None:
            raise ValidationError(
                "episodeId is only valid for shows",
                details={"contentType": content_type.value},
                error_code="INVALID_PAYLOAD",
            )
        return MovieTarget(content_id=content_id)
    return ShowTarget(content_id=content_id, episode_id=episode_id)
