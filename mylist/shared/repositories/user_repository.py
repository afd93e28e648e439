"""
User Repository

Database operations specific to the User model.

Common Operations:
==================
- exists()           → Inherited; consulted before list writes
"""

from sqlalchemy.ext.asyncio import AsyncSession

from mylist.shared.repositories.base import BaseRepository
from mylist.shared.models.user import User


class UserRepository(BaseRepository[User]):
    """Repository for User database operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(User, session)
