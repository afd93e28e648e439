"""
Cache key builders for the list caches.

Key Formats:
============
    Version counter:  mylist:<userId>:version
    List page:        mylist:<userId>:v<version>:limit<limit>:cursor<cursor|start>
                      [:type<contentType>][:total]

The version segment ties a page to an invalidation epoch: bumping the
counter orphans every page key built from the old value. The optional
suffixes only appear for filtered or counted pages, so unfiltered keys keep
the base format.
"""

from typing import Optional

KEY_PREFIX = "mylist"
START_CURSOR = "start"


def user_version_key(user_id: str) -> str:
    """Key of the per-user version counter."""
    return f"{KEY_PREFIX}:{user_id}:version"


def page_cache_key(
    user_id: str,
    version: int,
    limit: int,
    cursor: Optional[str] = None,
    content_type: Optional[str] = None,
    include_total: bool = False,
) -> str:
    """Key of one cached list page."""
    key = f"{KEY_PREFIX}:{user_id}:v{version}:limit{limit}:cursor{cursor or START_CURSOR}"
    if content_type:
        key += f":type{content_type}"
    if include_total:
        key += ":total"
    return key
