"""
My List Handler

Add, remove and list endpoints for the caller's saved content.

ARCHITECTURE:
=============
    Handler → Service → Repository / Caches → Model

Handlers should ONLY:
- Parse HTTP requests
- Call service methods
- Format HTTP responses

Business logic belongs in the SERVICE layer.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from mylist.api.dependencies import CurrentUserId
from mylist.api.dependencies.services import get_mylist_service
from mylist.shared.core.exceptions import ListItemNotFoundError
from mylist.shared.models.enums import ContentType
from mylist.shared.schemas.common import ErrorResponse, MessageResponse
from mylist.shared.schemas.mylist import (
    AddItemRequest,
    AddItemResponse,
    MyListItemResponse,
    MyListPage,
)
from mylist.shared.services.mylist_service import MyListService


router = APIRouter(
    responses={
        400: {"model": ErrorResponse, "description": "Malformed id, cursor or payload"},
        401: {"model": ErrorResponse, "description": "Missing X-User-Id"},
    },
)


@router.post(
    "",
    response_model=AddItemResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def add_item(
    request: AddItemRequest,
    user_id: CurrentUserId,
    service: MyListService = Depends(get_mylist_service),
):
    """
    Add a movie or show to the caller's list.

    Adding content that is already listed returns the stored item with
    created=false.
    """
    item, created = await service.add_item(user_id, request)
    return AddItemResponse(
        success=True,
        created=created,
        item=MyListItemResponse.from_record(item),
    )


@router.get(
    "",
    response_model=MyListPage,
    response_model_exclude_unset=True,
)
async def list_items(
    user_id: CurrentUserId,
    service: MyListService = Depends(get_mylist_service),
    limit: Optional[int] = Query(None, description="Page size (default 20, max 100)"),
    cursor: Optional[str] = Query(None, description="nextCursor from the previous page"),
    content_type: Optional[ContentType] = Query(
        None, alias="contentType", description="Only movies or only shows"
    ),
    include_total: bool = Query(
        False, alias="includeTotal", description="Include the item count"
    ),
):
    """
    List the caller's saved content, newest first.

    Follow nextCursor until it is null to walk the whole list.
    """
    return await service.list_items(
        user_id,
        limit=limit,
        cursor=cursor,
        content_type=content_type,
        include_total=include_total,
    )


@router.delete(
    "/{content_id}",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse}},
)
async def remove_item(
    content_id: str,
    user_id: CurrentUserId,
    service: MyListService = Depends(get_mylist_service),
):
    """Remove content from the caller's list."""
    removed = await service.remove_item(user_id, content_id)
    if not removed:
        raise ListItemNotFoundError(content_id)
    return MessageResponse(success=True, message="Removed")
