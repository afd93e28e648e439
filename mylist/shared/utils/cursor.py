"""
Cursor Codec

Opaque, stateless pagination tokens for keyset pagination over the
(added_at, id) ordering key.

Token Format:
=============
    base64("<ISO-8601 added_at>|<record uuid>")

    e.g. "2024-01-15T10:30:00.123456+00:00|550e8400-e29b-41d4-a716-446655440000"
      →  "MjAyNC0wMS0xNVQxMDozMDowMC4xMjM0NTYrMDA6MDB8NTUwZTg0MDAt..."

Timestamps are always normalized to UTC with microsecond precision, so the
same position always produces the same token. Tokens are neither signed nor
encrypted; forging one only moves a client within its own list.

Usage:
======
    from mylist.shared.utils.cursor import encode_cursor, decode_cursor

    token = encode_cursor(item.added_at, item.id)
    position = decode_cursor(token)   # CursorPosition(added_at, record_id)
"""

import base64
import binascii
from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import UUID

from mylist.shared.core.exceptions import InvalidCursorError
from mylist.shared.core.logging import get_logger


logger = get_logger(__name__)

SEPARATOR = "|"


@dataclass(frozen=True)
class CursorPosition:
    """Resume point: the ordering key of the last item of the previous page."""

    added_at: datetime
    record_id: UUID


def _normalize(added_at: datetime) -> datetime:
    # Naive values come back from stores without timezone support and are UTC
    if added_at.tzinfo is None:
        return added_at.replace(tzinfo=timezone.utc)
    return added_at.astimezone(timezone.utc)


def encode_cursor(added_at: datetime, record_id: UUID) -> str:
    """
    Encode an ordering key into an opaque cursor token.

    Args:
        added_at: Timestamp of the last item on the page
        record_id: Id of the last item on the page

    Returns:
        Base64 text token
    """
    raw = f"{_normalize(added_at).isoformat(timespec='microseconds')}{SEPARATOR}{record_id}"
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")


def decode_cursor(token: str) -> CursorPosition:
    """
    Decode a cursor token back into its ordering key.

    A token must be exactly what encode_cursor would produce for the decoded
    position; anything else (bad base64, bad timestamp, bad id, non-canonical
    spelling) is rejected.

    Raises:
        InvalidCursorError: If the token is malformed
    """
    try:
        raw = base64.b64decode(token.encode("ascii"), validate=True).decode("utf-8")
        added_at_str, sep, id_str = raw.partition(SEPARATOR)
        if not sep or not added_at_str or not id_str:
            raise ValueError("invalid cursor format")

        position = CursorPosition(
            added_at=_normalize(datetime.fromisoformat(added_at_str)),
            record_id=UUID(id_str),
        )
    except (binascii.Error, UnicodeError, ValueError) as e:
        logger.info("Cursor decode failed", error=str(e))
        raise InvalidCursorError() from e

    if encode_cursor(position.added_at, position.record_id) != token:
        logger.info("Cursor is not canonical")
        raise InvalidCursorError()

    return position
