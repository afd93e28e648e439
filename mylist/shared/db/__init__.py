"""
Database Module

Connectivity and session management for the membership store.

Architecture Overview:
======================
    FastAPI Route
        │  Dependency Injection: get_db()
        ▼
    AsyncSession (one per request, commit on success, rollback on error)
        │  Passed to the list service
        ▼
    Repositories (MyListItemRepository, CatalogRepository, UserRepository)
        │  SQL
        ▼
    PostgreSQL

Usage in FastAPI:
=================
    from fastapi import Depends
    from mylist.shared.db import get_db

    @app.get("/items")
    async def list_items(db: AsyncSession = Depends(get_db)):
        ...
"""

from mylist.shared.db.session import (
    get_db,
    init_db,
    ping_db,
    close_db,
    get_engine,
    get_sessionmaker,
)

__all__ = [
    "get_db",  # FastAPI dependency for getting a database session
    "init_db",  # Initialize database on app startup
    "ping_db",  # Readiness probe
    "close_db",  # Close database on app shutdown
    "get_engine",  # Database engine (for scripts, etc.)
    "get_sessionmaker",  # Session factory for manual session creation
]
