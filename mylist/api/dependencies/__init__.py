"""
API Dependencies

FastAPI dependencies for injection into route handlers.

Dependencies:
=============
- Database: get_db(), DbSession
- User: get_current_user_id(), CurrentUserId
- Cache & services: get_cache_backend(), get_mylist_service()

Usage:
======
    from mylist.api.dependencies import CurrentUserId, get_mylist_service

    @router.get("")
    async def list_items(
        user_id: CurrentUserId,
        service: MyListService = Depends(get_mylist_service),
    ):
        return await service.list_items(user_id)
"""

from mylist.api.dependencies.database import (
    get_db,
    DbSession,
)
from mylist.api.dependencies.auth import (
    get_current_user_id,
    CurrentUserId,
)
from mylist.api.dependencies.services import (
    get_cache_backend,
    get_version_cache,
    get_page_cache,
    get_mylist_service,
)

__all__ = [
    # Database
    "get_db",
    "DbSession",
    # User
    "get_current_user_id",
    "CurrentUserId",
    # Cache & services
    "get_cache_backend",
    "get_version_cache",
    "get_page_cache",
    "get_mylist_service",
]
