"""
User Identification Dependency

Authentication happens upstream (API gateway). The gateway forwards the
authenticated user's id in the X-User-Id header; this dependency only
requires that it is present. Its format is validated by the service.

Type Aliases:
=============
    CurrentUserId - Raw user id from the X-User-Id header

Usage:
======
    from mylist.api.dependencies.auth import CurrentUserId

    @router.get("")
    async def list_items(user_id: CurrentUserId):
        ...
"""

from typing import Annotated, Optional

from fastapi import Depends, Header

from mylist.shared.core.exceptions import AuthenticationError


USER_ID_HEADER = "X-User-Id"


async def get_current_user_id(
    x_user_id: Annotated[Optional[str], Header(alias=USER_ID_HEADER)] = None,
) -> str:
    """
    Read the caller's user id.

    Returns:
        The header value, stripped

    Raises:
        AuthenticationError: If the header is missing or blank
    """
    if x_user_id is None or not x_user_id.strip():
        raise AuthenticationError(f"{USER_ID_HEADER} header required")
    return x_user_id.strip()


# ═══════════════════════════════════════════════════════════════════════════════
# TYPE ALIASES
# ═══════════════════════════════════════════════════════════════════════════════

CurrentUserId = Annotated[str, Depends(get_current_user_id)]
