"""
My List Pydantic schemas.

Wire format is camelCase:

    {
      "id": "550e8400-...",
      "userId": "660e8400-...",
      "contentId": "770e8400-...",
      "contentType": "movie",
      "episodeId": null,
      "addedAt": "2024-01-15T10:30:00.123456Z",
      "snapshot": {"title": "Inception", "posterUrl": null, "genres": [], "shortDescription": ""},
      "visibility": "available"
    }
"""

from datetime import datetime, timezone
from typing import Any, List, Optional
from uuid import UUID

from pydantic import Field, field_validator

from mylist.shared.models.enums import ContentType, ContentVisibility
from mylist.shared.schemas.common import BaseSchema


class SnapshotSchema(BaseSchema):
    """Display metadata captured when the item was added."""

    title: str = Field(description="Content title")
    poster_url: Optional[str] = Field(None, description="Poster image URL")
    genres: List[str] = Field(default_factory=list, description="Genres")
    short_description: Optional[str] = Field(None, description="Short description")

    def to_record(self) -> dict[str, Any]:
        """Storage form: every key present, camelCase."""
        return {
            "title": self.title,
            "posterUrl": self.poster_url,
            "genres": list(self.genres),
            "shortDescription": self.short_description,
        }


class AddItemRequest(BaseSchema):
    """Request to add content to the list."""

    content_id: str = Field(min_length=1, description="Movie or TV show id")
    content_type: ContentType = Field(description="movie or show")
    episode_id: Optional[str] = Field(None, min_length=1, description="Episode of the show")
    snapshot: Optional[SnapshotSchema] = Field(
        None,
        description="Display metadata; built from the catalog when omitted",
    )


class MyListItemResponse(BaseSchema):
    """A list membership."""

    id: UUID
    user_id: UUID
    content_id: UUID
    content_type: ContentType
    episode_id: Optional[UUID] = None
    added_at: datetime
    snapshot: SnapshotSchema
    visibility: ContentVisibility = ContentVisibility.AVAILABLE

    @field_validator("added_at")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @classmethod
    def from_record(cls, item: Any) -> "MyListItemResponse":
        """Build from a MyListItem row with every field explicitly set."""
        snapshot = item.snapshot or {}
        return cls(
            id=item.id,
            user_id=item.user_id,
            content_id=item.content_id,
            content_type=item.content_type,
            episode_id=item.episode_id,
            added_at=item.added_at,
            snapshot=SnapshotSchema(
                title=snapshot.get("title") or "",
                poster_url=snapshot.get("posterUrl"),
                genres=snapshot.get("genres") or [],
                short_description=snapshot.get("shortDescription"),
            ),
            visibility=item.visibility,
        )


class AddItemResponse(BaseSchema):
    """Response after adding content to the list."""

    success: bool = True
    created: bool = Field(description="False when the item was already in the list")
    item: MyListItemResponse


class MyListPage(BaseSchema):
    """
    One page of a user's list.

    total is only set when the caller asked for it; pages are serialized
    with exclude_unset so it is omitted otherwise.
    """

    items: List[MyListItemResponse]
    next_cursor: Optional[str] = None
    total: Optional[int] = None

    def to_cache(self) -> dict[str, Any]:
        """JSON-safe form stored in the page cache."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)
