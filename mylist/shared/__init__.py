"""
Shared Module

Domain code used by the API and the operational scripts:
- Models: SQLAlchemy ORM models
- Repositories: Data access layer
- Cache: Version counters and page cache
- Services: Business logic layer
- Schemas: Pydantic request/response models
- Core: Logging, exceptions
- Adapters: Redis and in-memory cache backends

Package Structure:
==================
    shared/
    ├── core/           ← Logging, exceptions
    ├── db/             ← Database session management
    ├── models/         ← SQLAlchemy models
    ├── repositories/   ← Data access layer
    ├── cache/          ← Version and page caches, key builders
    ├── services/       ← Business logic
    ├── schemas/        ← Pydantic schemas
    ├── adapters/       ← Cache backends
    └── utils/          ← Cursor codec

Usage:
======
    from mylist.shared.models import MyListItem, Movie
    from mylist.shared.repositories import MyListItemRepository
    from mylist.shared.services import MyListService
    from mylist.shared.schemas import AddItemRequest, MyListPage
    from mylist.shared.core import logger, MyListException
"""
