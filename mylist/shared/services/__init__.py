"""
Business Logic Services

Services sit between the API handlers and the repositories.

Services:
=========
- MyListService: Add, remove and paginated reads of a user's list
- content_resolver: Movie / show targets validated against the catalog
"""

from mylist.shared.services.content_resolver import (
    ContentLookup,
    MovieTarget,
    ResolvedContent,
    ShowTarget,
    build_target,
)
from mylist.shared.services.mylist_service import MyListService, parse_identifier

__all__ = [
    "ContentLookup",
    "MovieTarget",
    "ShowTarget",
    "ResolvedContent",
    "build_target",
    "MyListService",
    "parse_identifier",
]
