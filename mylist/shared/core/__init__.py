"""
Core Module

Provides core functionality shared across the application:
- Structured logging
- Custom exceptions

Usage:
======
    from mylist.shared.core.logging import logger, get_logger
    from mylist.shared.core.exceptions import MyListException, NotFoundError

    logger.info("Starting operation", user_id=user_id)
"""

from mylist.shared.core.logging import (
    logger,
    get_logger,
    log_context,
    clear_log_context,
)
from mylist.shared.core.exceptions import (
    MyListException,
    AuthenticationError,
    NotFoundError,
    UserNotFoundError,
    ContentNotFoundError,
    EpisodeNotFoundError,
    ListItemNotFoundError,
    ValidationError,
    InvalidIdentifierError,
    InvalidCursorError,
    ConflictError,
    EpisodeMismatchError,
    DuplicateResourceError,
    InternalServerError,
    ServiceUnavailableError,
    CacheUnavailableError,
)

__all__ = [
    # Logging
    "logger",
    "get_logger",
    "log_context",
    "clear_log_context",
    # Exceptions
    "MyListException",
    "AuthenticationError",
    "NotFoundError",
    "UserNotFoundError",
    "ContentNotFoundError",
    "EpisodeNotFoundError",
    "ListItemNotFoundError",
    "ValidationError",
    "InvalidIdentifierError",
    "InvalidCursorError",
    "ConflictError",
    "EpisodeMismatchError",
    "DuplicateResourceError",
    "InternalServerError",
    "ServiceUnavailableError",
    "CacheUnavailableError",
]
