"""
Repository Pattern Implementations

Repositories encapsulate database queries and provide a clean API for data access.

Repository Hierarchy:
=====================
    BaseRepository[ModelType]           ← Generic CRUD operations
         │
         ├── UserRepository             ← User lookups
         └── MyListItemRepository       ← Membership store (keyset pages)

    CatalogRepository                   ← Movie / show / episode lookups

Usage Example:
==============
    from mylist.shared.repositories import MyListItemRepository

    repo = MyListItemRepository(db)
    rows = await repo.query_page(user_id, limit=20)
"""

from mylist.shared.repositories.base import BaseRepository
from mylist.shared.repositories.user_repository import UserRepository
from mylist.shared.repositories.catalog_repository import CatalogRepository
from mylist.shared.repositories.my_list_item_repository import MyListItemRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "CatalogRepository",
    "MyListItemRepository",
]
