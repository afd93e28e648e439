"""
Base Repository

This module provides a generic base repository with common CRUD operations.
All entity-specific repositories inherit from this class.

What This Provides:
===================
- exists(id)     → Check if record exists
- count()        → Count records with filtering
- create()       → Create new record

Generic Type Pattern:
=====================
    class UserRepository(BaseRepository[User]):
        pass

    repo = UserRepository(db)
    found = await repo.exists(user_id)

flush() vs commit():
====================
- flush(): Sends SQL to database but doesn't commit transaction
  - Changes are visible within the same session
  - Can be rolled back if error occurs later

- commit(): Permanently saves all changes
  - Issued by the list service after a mutation, or by get_db()
    after the request handler completes
  - Repository methods only flush
"""

from typing import Any, Generic, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.functions import count as sql_count

from mylist.shared.models.base import Base


# TypeVar bound to Base ensures we only work with SQLAlchemy models
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository providing common CRUD operations.

    Type Parameter:
        ModelType: The SQLAlchemy model class this repository manages

    Attributes:
        model: The SQLAlchemy model class
        session: The async database session
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession) -> None:
        """
        Initialize the repository.

        Args:
            model: SQLAlchemy model class (e.g., User, Movie, MyListItem)
            session: Async database session from get_db()
        """
        self.model = model
        self.session = session

    # ═══════════════════════════════════════════════════════════════════════════
    # READ OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def exists(self, record_id: UUID) -> bool:
        """
        Check if a record exists without loading it.

        SQL Generated:
            SELECT COUNT(*) FROM users WHERE id = '...'
        """
        result = await self.session.execute(
            select(sql_count()).select_from(self.model).where(self.model.id == record_id)
        )
        return (result.scalar() or 0) > 0

    async def count(self, filters: Optional[dict[str, Any]] = None) -> int:
        """
        Count records with optional equality filtering.

        Args:
            filters: Dict of field=value for WHERE clauses

        Returns:
            Number of matching records
        """
        query = select(sql_count()).select_from(self.model)

        if filters:
            for field, value in filters.items():
                if hasattr(self.model, field):
                    query = query.where(getattr(self.model, field) == value)

        result = await self.session.execute(query)
        return result.scalar() or 0

    # ═══════════════════════════════════════════════════════════════════════════
    # WRITE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def create(self, **kwargs: Any) -> ModelType:
        """
        Create a new record.

        Creates a new instance of the model, adds it to the session,
        and flushes to get the generated ID and defaults.

        Args:
            **kwargs: Field values for the new record

        Returns:
            The created model instance with all DB-generated values
        """
        instance = self.model(**kwargs)
        self.session.add(instance)

        # Flush sends the INSERT; refresh picks up server defaults
        await self.session.flush()
        await self.session.refresh(instance)

        return instance

