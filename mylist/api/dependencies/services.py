"""
Service Dependencies

FastAPI dependencies for cache and service injection.

Services are created per-request with the request's db session. The cache
backend is process-wide (Redis connection pool or in-memory store); tests
override get_cache_backend to swap it.

Usage:
======
    from mylist.api.dependencies.services import get_mylist_service

    @router.get("")
    async def list_items(service: MyListService = Depends(get_mylist_service)):
        ...
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from mylist.api.dependencies.database import get_db
from mylist.shared.cache import CacheBackend, PageCache, VersionCache, build_cache_backend
from mylist.shared.services.mylist_service import MyListService


async def get_cache_backend() -> CacheBackend:
    """Backend selected by CACHE_BACKEND."""
    return build_cache_backend()


async def get_version_cache(
    backend: CacheBackend = Depends(get_cache_backend),
) -> VersionCache:
    """Dependency to get a VersionCache over the configured backend."""
    return VersionCache(backend)


async def get_page_cache(
    backend: CacheBackend = Depends(get_cache_backend),
) -> PageCache:
    """Dependency to get a PageCache over the configured backend."""
    return PageCache(backend)


async def get_mylist_service(
    db: AsyncSession = Depends(get_db),
    version_cache: VersionCache = Depends(get_version_cache),
    page_cache: PageCache = Depends(get_page_cache),
) -> MyListService:
    """
    Dependency to get MyListService instance.

    Creates a new service instance per request with the request's db session.
    """
    return MyListService(db, version_cache, page_cache)
