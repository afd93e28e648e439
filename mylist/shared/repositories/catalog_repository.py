"""
Catalog Repository

Read-only lookups against the movie, TV show and episode tables, plus the
user existence check. This is the SQL implementation of the content lookup
the list service consumes.

Usage Example:
==============
    catalog = CatalogRepository(db)
    movie = await catalog.find_movie(content_id)
    if movie is None:
        raise ContentNotFoundError("movie", str(content_id))
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from mylist.shared.models.catalog import Episode, Movie, TVShow
from mylist.shared.repositories.user_repository import UserRepository


class CatalogRepository:
    """Content lookup over the catalog tables."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.user_repo = UserRepository(session)

    async def find_movie(self, movie_id: UUID) -> Optional[Movie]:
        """Movie by id, or None."""
        result = await self.session.execute(select(Movie).where(Movie.id == movie_id))
        return result.scalar_one_or_none()

    async def find_show(self, show_id: UUID) -> Optional[TVShow]:
        """TV show by id, or None."""
        result = await self.session.execute(select(TVShow).where(TVShow.id == show_id))
        return result.scalar_one_or_none()

    async def find_episode(self, episode_id: UUID) -> Optional[Episode]:
        """Episode by id, or None."""
        result = await self.session.execute(select(Episode).where(Episode.id == episode_id))
        return result.scalar_one_or_none()

    async def user_exists(self, user_id: UUID) -> bool:
        """Whether the user is known."""
        return await self.user_repo.exists(user_id)
