"""
Custom Exceptions

Application-specific exceptions with HTTP status codes and error codes.

Exception Hierarchy:
====================
    MyListException (base)
       │
       ├── AuthenticationError (401)    ← Missing user identification
       ├── NotFoundError (404)          ← Resource not found
       │      ├── UserNotFoundError         USER_NOT_FOUND
       │      ├── ContentNotFoundError      CONTENT_NOT_FOUND
       │      ├── EpisodeNotFoundError      EPISODE_NOT_FOUND
       │      └── ListItemNotFoundError     ITEM_NOT_FOUND
       ├── ValidationError (400)        ← Invalid input data
       │      ├── InvalidIdentifierError    INVALID_<FIELD>_ID
       │      └── InvalidCursorError        INVALID_CURSOR
       ├── ConflictError (409)          ← Resource conflict
       │      ├── EpisodeMismatchError      EPISODE_MISMATCH
       │      └── DuplicateResourceError    DUPLICATE_ITEM
       ├── InternalServerError (500)    ← Store failure
       └── ServiceUnavailableError (503)
              └── CacheUnavailableError     ← Never reaches clients

Usage:
======
    from mylist.shared.core.exceptions import NotFoundError, ValidationError

    raise ContentNotFoundError("movie", content_id)
    # Results in: {"error": {"code": "CONTENT_NOT_FOUND", "message": "movie with id '...' not found"}}

Exception Handling:
===================
    Exceptions are caught by the error handler middleware and converted to JSON:
    {
        "error": {
            "code": "INVALID_CURSOR",
            "message": "Invalid cursor",
            "details": {}
        }
    }
"""

from typing import Any, Optional


class MyListException(Exception):
    """
    Base exception for all MyList application errors.

    All custom exceptions inherit from this class, providing:
    - HTTP status code mapping
    - Error code for programmatic handling
    - Optional details dictionary
    - Consistent JSON serialization

    Attributes:
        message: Human-readable error message
        status_code: HTTP status code (default 500)
        error_code: Machine-readable error code
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or "INTERNAL_ERROR"
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Returns:
            Dictionary with error details for JSON response
        """
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            }
        }


# ═══════════════════════════════════════════════════════════════════════════════
# AUTHENTICATION ERRORS (401)
# ═══════════════════════════════════════════════════════════════════════════════


class AuthenticationError(MyListException):
    """
    Authentication failed error (401 Unauthorized).

    Raised when the upstream identity header is missing.
    """

    def __init__(
        self,
        message: str = "Authentication failed",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=401,
            error_code="AUTHENTICATION_ERROR",
            details=details,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# NOT FOUND ERRORS (404)
# ═══════════════════════════════════════════════════════════════════════════════


class NotFoundError(MyListException):
    """
    Resource not found error (404 Not Found).

    Base class for all "not found" errors with automatic message formatting.

    Example:
        raise NotFoundError("User", user_id)
        # Message: "User with id 'abc-123' not found"
    """

    def __init__(
        self,
        resource: str,
        resource_id: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        error_code: str = "NOT_FOUND",
    ) -> None:
        message = f"{resource} not found"
        if resource_id:
            message = f"{resource} with id '{resource_id}' not found"
        super().__init__(
            message=message,
            status_code=404,
            error_code=error_code,
            details=details,
        )


class UserNotFoundError(NotFoundError):
    """User not found error."""

    def __init__(self, user_id: str) -> None:
        super().__init__(resource="User", resource_id=user_id, error_code="USER_NOT_FOUND")


class ContentNotFoundError(NotFoundError):
    """Movie or TV show not found error."""

    def __init__(self, content_type: str, content_id: str) -> None:
        super().__init__(
            resource=content_type.capitalize(),
            resource_id=content_id,
            error_code="CONTENT_NOT_FOUND",
        )


class EpisodeNotFoundError(NotFoundError):
    """Episode not found error."""

    def __init__(self, episode_id: str) -> None:
        super().__init__(resource="Episode", resource_id=episode_id, error_code="EPISODE_NOT_FOUND")


class ListItemNotFoundError(NotFoundError):
    """No list membership exists for the (user, content) pair."""

    def __init__(self, content_id: str) -> None:
        super().__init__(resource="List item", resource_id=content_id, error_code="ITEM_NOT_FOUND")


# ═══════════════════════════════════════════════════════════════════════════════
# VALIDATION & CONFLICT ERRORS (400, 409)
# ═══════════════════════════════════════════════════════════════════════════════


class ValidationError(MyListException):
    """
    Validation error (400 Bad Request).

    Raised when input data fails validation.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        details: Optional[dict[str, Any]] = None,
        error_code: str = "VALIDATION_ERROR",
    ) -> None:
        super().__init__(
            message=message,
            status_code=400,
            error_code=error_code,
            details=details,
        )


class InvalidIdentifierError(ValidationError):
    """
    Malformed identifier.

    Example:
        raise InvalidIdentifierError("contentId", "not-a-uuid")
        # code: INVALID_CONTENT_ID
    """

    def __init__(self, field: str, value: Optional[str] = None) -> None:
        code_name = field[:-2] if field.endswith("Id") else field
        super().__init__(
            message=f"invalid {field}",
            details={"field": field, "value": value},
            error_code=f"INVALID_{code_name.upper()}_ID",
        )


class InvalidCursorError(ValidationError):
    """Pagination cursor does not decode to a (timestamp, id) pair."""

    def __init__(self, message: str = "Invalid cursor") -> None:
        super().__init__(message=message, error_code="INVALID_CURSOR")


class ConflictError(MyListException):
    """
    Resource conflict error (409 Conflict).

    Raised when operation conflicts with existing resource.
    """

    def __init__(
        self,
        message: str = "Resource conflict",
        details: Optional[dict[str, Any]] = None,
        error_code: str = "CONFLICT",
    ) -> None:
        super().__init__(
            message=message,
            status_code=409,
            error_code=error_code,
            details=details,
        )


class EpisodeMismatchError(ConflictError):
    """Episode exists but belongs to a different show."""

    def __init__(self, episode_id: str, show_id: str) -> None:
        super().__init__(
            message="episode does not belong to provided tv show",
            details={"episodeId": episode_id, "contentId": show_id},
            error_code="EPISODE_MISMATCH",
        )


class DuplicateResourceError(ConflictError):
    """
    Duplicate resource error.

    Raised by the store when the (user, content) uniqueness constraint fires.
    The list service normally recovers it into an idempotent success.
    """

    def __init__(
        self,
        message: str = "Item already in list",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, details=details, error_code="DUPLICATE_ITEM")


# ═══════════════════════════════════════════════════════════════════════════════
# SERVER & SERVICE ERRORS (500, 503)
# ═══════════════════════════════════════════════════════════════════════════════


class InternalServerError(MyListException):
    """Unexpected store failure (500)."""

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=500,
            error_code="INTERNAL_ERROR",
            details=details,
        )


class ServiceUnavailableError(MyListException):
    """
    Service temporarily unavailable error (503).

    Raised when external services (Redis, etc.) are down.
    """

    def __init__(
        self,
        message: str = "Service temporarily unavailable",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=503,
            error_code="SERVICE_UNAVAILABLE",
            details=details,
        )


class CacheUnavailableError(ServiceUnavailableError):
    """
    Cache transport failure.

    Raised by cache backends; the version and page caches catch it and
    degrade to the source of truth.
    """

    def __init__(self, operation: str, key: str, error: Optional[Exception] = None) -> None:
        super().__init__(
            message=f"Cache {operation} failed",
            details={"key": key, "error": str(error) if error else None},
        )
        self.operation = operation
        self.key = key
