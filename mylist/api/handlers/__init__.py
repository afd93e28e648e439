"""
API Route Handlers

- health_handler: /health, /ready, /live
- mylist_handler: /api/mylist
"""

from mylist.api.handlers import health_handler, mylist_handler

__all__ = [
    "health_handler",
    "mylist_handler",
]
