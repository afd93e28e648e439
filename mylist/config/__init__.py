"""
Configuration Module

Application configuration loaded from environment variables.

Usage:
======
    from mylist.config.settings import settings

    max_limit = settings.MYLIST_MAX_LIMIT
    is_dev = settings.is_development
"""

from mylist.config.settings import settings, get_settings, Settings

__all__ = [
    "settings",
    "get_settings",
    "Settings",
]
