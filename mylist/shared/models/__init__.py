"""
MyList SQLAlchemy Models

Model Hierarchy:
================
    User
       └── list_items (MyListItem[])

    Movie
    TVShow
       └── episodes (Episode[])

Models Overview:
================
- Base: Base class and timestamp mixin
- User: Viewer whose list is being managed
- Movie / TVShow / Episode: Read-only catalog used to validate adds
- MyListItem: One (user, content) list membership

Usage:
======
    from mylist.shared.models import MyListItem, Movie, TVShow
"""

from mylist.shared.models.base import Base, TimestampMixin, JSONType, utcnow
from mylist.shared.models.enums import ContentType, ContentVisibility
from mylist.shared.models.user import User
from mylist.shared.models.catalog import Movie, TVShow, Episode
from mylist.shared.models.my_list_item import MyListItem

__all__ = [
    # Base classes and mixins
    "Base",
    "TimestampMixin",
    "JSONType",
    "utcnow",
    # Enums
    "ContentType",
    "ContentVisibility",
    # Models
    "User",
    "Movie",
    "TVShow",
    "Episode",
    "MyListItem",
]
