"""
MyList Backend

Per-user watchlist service over a relational store, with a Redis read-through
cache invalidated by per-user version counters.

Package Structure:
==================
    mylist/
    ├── api/        ← FastAPI application
    ├── shared/     ← Shared code (models, services, caches, etc.)
    ├── scripts/    ← Seeding utilities
    └── config/     ← Configuration

Running the Application:
========================
    # API Server
    uvicorn mylist.api.main:app --reload

    # Seed sample data
    mylist-seed --items 50
"""
