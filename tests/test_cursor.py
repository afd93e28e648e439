import base64
import uuid
from datetime import datetime, timedelta, timezone

import pytest

from mylist.shared.core.exceptions import InvalidCursorError
from mylist.shared.utils.cursor import CursorPosition, decode_cursor, encode_cursor


def _b64(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def test_round_trip_preserves_position():
    added_at = datetime(2024, 1, 15, 10, 30, 0, 123456, tzinfo=timezone.utc)
    record_id = uuid.uuid4()

    token = encode_cursor(added_at, record_id)

    assert decode_cursor(token) == CursorPosition(added_at=added_at, record_id=record_id)


def test_token_is_base64_of_timestamp_and_id():
    added_at = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
    record_id = uuid.UUID("550e8400-e29b-41d4-a716-446655440000")

    token = encode_cursor(added_at, record_id)

    assert base64.b64decode(token).decode() == (
        "2024-01-15T10:30:00.000000+00:00|550e8400-e29b-41d4-a716-446655440000"
    )


def test_naive_timestamps_are_treated_as_utc():
    naive = datetime(2024, 3, 1, 8, 0, 0, 1)
    record_id = uuid.uuid4()

    token = encode_cursor(naive, record_id)

    assert token == encode_cursor(naive.replace(tzinfo=timezone.utc), record_id)
    assert decode_cursor(token).added_at.tzinfo is not None


def test_same_instant_in_other_offset_encodes_identically():
    utc = datetime(2024, 3, 1, 8, 0, tzinfo=timezone.utc)
    plus_two = utc.astimezone(timezone(timedelta(hours=2)))
    record_id = uuid.uuid4()

    assert encode_cursor(plus_two, record_id) == encode_cursor(utc, record_id)


@pytest.mark.parametrize(
    "token",
    [
        "",
        "not base64 at all!",
        _b64("no-separator-here"),
        _b64("|550e8400-e29b-41d4-a716-446655440000"),
        _b64("2024-01-15T10:30:00.000000+00:00|"),
        _b64("yesterday|550e8400-e29b-41d4-a716-446655440000"),
        _b64("2024-01-15T10:30:00.000000+00:00|not-a-uuid"),
    ],
)
def test_malformed_tokens_are_rejected(token):
    with pytest.raises(InvalidCursorError) as exc_info:
        decode_cursor(token)

    assert exc_info.value.error_code == "INVALID_CURSOR"
    assert exc_info.value.status_code == 400


def test_truncated_token_is_rejected():
    token = encode_cursor(datetime.now(timezone.utc), uuid.uuid4())

    for cut in (1, 4, len(token) // 2):
        with pytest.raises(InvalidCursorError):
            decode_cursor(token[:-cut])


def test_non_canonical_spelling_is_rejected():
    # Decodes to a valid position, but encode_cursor would never produce it
    loose = _b64("2024-01-15T10:30:00+00:00|550e8400-e29b-41d4-a716-446655440000")

    with pytest.raises(InvalidCursorError):
        decode_cursor(loose)
