"""
Enums used across the application.
"""

from enum import Enum


class ContentType(str, Enum):
    """Kind of catalog entry a list item points at."""

    MOVIE = "movie"
    SHOW = "show"


class ContentVisibility(str, Enum):
    """
    Platform-level availability of the referenced content.

    Reserved for soft-delete propagation from the catalog; the list
    service only ever writes AVAILABLE.
    """

    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"
    REMOVED = "removed"
