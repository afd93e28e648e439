"""
Pydantic Schemas

Request and response models for the API.

Schema Categories:
==================
- common: Base schema, message and error responses, health
- mylist: List items, pages and add requests

Usage:
======
    from mylist.shared.schemas.mylist import AddItemRequest, MyListPage
    from mylist.shared.schemas.common import ErrorResponse
"""

from mylist.shared.schemas.common import (
    BaseSchema,
    MessageResponse,
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
    ReadinessResponse,
)
from mylist.shared.schemas.mylist import (
    SnapshotSchema,
    AddItemRequest,
    AddItemResponse,
    MyListItemResponse,
    MyListPage,
)

__all__ = [
    # Common
    "BaseSchema",
    "MessageResponse",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    "ReadinessResponse",
    # My List
    "SnapshotSchema",
    "AddItemRequest",
    "AddItemResponse",
    "MyListItemResponse",
    "MyListPage",
]
