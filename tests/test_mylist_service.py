import uuid
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import IntegrityError

from mylist.shared.cache.backend import NullCacheBackend
from mylist.shared.cache.keys import user_version_key
from mylist.shared.core.exceptions import (
    ContentNotFoundError,
    DuplicateResourceError,
    EpisodeMismatchError,
    EpisodeNotFoundError,
    InternalServerError,
    InvalidCursorError,
    InvalidIdentifierError,
    UserNotFoundError,
    ValidationError,
)
from mylist.shared.models.enums import ContentType
from mylist.shared.repositories.my_list_item_repository import MyListItemRepository
from mylist.shared.schemas.mylist import AddItemRequest, SnapshotSchema
from mylist.shared.utils.cursor import encode_cursor


def movie(content, **kwargs) -> AddItemRequest:
    return AddItemRequest(content_id=str(content.id), content_type=ContentType.MOVIE, **kwargs)


def show(content, episode=None, **kwargs) -> AddItemRequest:
    return AddItemRequest(
        content_id=str(content.id),
        content_type=ContentType.SHOW,
        episode_id=str(episode.id) if episode else None,
        **kwargs,
    )


async def _version(backend, user) -> str:
    return await backend.get(user_version_key(str(user.id)))


async def _walk(service, user_id, limit, **kwargs):
    """Follow nextCursor until the end of the list."""
    items, cursor = [], None
    while True:
        page = await service.list_items(user_id, limit=limit, cursor=cursor, **kwargs)
        items.extend(page.items)
        cursor = page.next_cursor
        if cursor is None:
            return items


# ═══════════════════════════════════════════════════════════════════════════════
# ADD
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_add_movie_synthesizes_snapshot_from_catalog(make_service, catalog, memory_backend):
    service = make_service()

    item, created = await service.add_item(str(catalog.alice.id), movie(catalog.inception))

    assert created is True
    assert item.user_id == catalog.alice.id
    assert item.content_id == catalog.inception.id
    assert item.content_type == ContentType.MOVIE
    assert item.episode_id is None
    assert item.snapshot == {
        "title": "Inception",
        "posterUrl": "https://img.example/inception.jpg",
        "genres": ["SciFi", "Action"],
        "shortDescription": "A thief who steals corporate secrets through dreams.",
    }
    assert await _version(memory_backend, catalog.alice) == "1"


@pytest.mark.asyncio
async def test_missing_description_becomes_empty_short_description(make_service, catalog):
    item, _ = await make_service().add_item(str(catalog.alice.id), movie(catalog.matrix))

    assert item.snapshot["shortDescription"] == ""
    assert item.snapshot["posterUrl"] is None


@pytest.mark.asyncio
async def test_client_snapshot_is_stored_as_given(make_service, catalog):
    request = movie(catalog.inception, snapshot=SnapshotSchema(title="Inception (Director's Cut)"))

    item, _ = await make_service().add_item(str(catalog.alice.id), request)

    assert item.snapshot["title"] == "Inception (Director's Cut)"
    assert item.snapshot["genres"] == []


@pytest.mark.asyncio
async def test_add_show_with_its_episode(make_service, catalog):
    item, created = await make_service().add_item(
        str(catalog.alice.id), show(catalog.dark, catalog.dark_ep1)
    )

    assert created is True
    assert item.content_type == ContentType.SHOW
    assert item.episode_id == catalog.dark_ep1.id
    assert item.snapshot["title"] == "Dark"


@pytest.mark.asyncio
async def test_episode_of_another_show_is_a_conflict(make_service, catalog):
    with pytest.raises(EpisodeMismatchError) as exc_info:
        await make_service().add_item(str(catalog.alice.id), show(catalog.dark, catalog.office_ep1))

    assert exc_info.value.status_code == 409
    assert exc_info.value.error_code == "EPISODE_MISMATCH"


@pytest.mark.asyncio
async def test_integrity_failure_other_than_duplicate_is_internal_error(
    make_service, catalog, monkeypatch
):
    service = make_service()

    async def failing_create(**fields):
        raise IntegrityError(
            "INSERT INTO my_list_items ...",
            {},
            Exception('violates foreign key constraint "my_list_items_user_id_fkey"'),
        )

    monkeypatch.setattr(service.item_repo, "create", failing_create)

    with pytest.raises(InternalServerError):
        await service.add_item(str(catalog.alice.id), movie(catalog.inception))


@pytest.mark.asyncio
async def test_unknown_episode_is_not_found(make_service, catalog):
    request = AddItemRequest(
        content_id=str(catalog.dark.id),
        content_type=ContentType.SHOW,
        episode_id=str(uuid.uuid4()),
    )

    with pytest.raises(EpisodeNotFoundError):
        await make_service().add_item(str(catalog.alice.id), request)


@pytest.mark.asyncio
async def test_movie_with_episode_is_a_bad_request(make_service, catalog):
    request = AddItemRequest(
        content_id=str(catalog.inception.id),
        content_type=ContentType.MOVIE,
        episode_id=str(catalog.dark_ep1.id),
    )

    with pytest.raises(ValidationError) as exc_info:
        await make_service().add_item(str(catalog.alice.id), request)

    assert exc_info.value.error_code == "INVALID_PAYLOAD"


@pytest.mark.asyncio
async def test_content_type_must_match_catalog(make_service, catalog):
    # A show id sent as a movie does not resolve
    request = AddItemRequest(content_id=str(catalog.dark.id), content_type=ContentType.MOVIE)

    with pytest.raises(ContentNotFoundError) as exc_info:
        await make_service().add_item(str(catalog.alice.id), request)

    assert exc_info.value.error_code == "CONTENT_NOT_FOUND"


@pytest.mark.asyncio
async def test_unknown_user_is_not_found(make_service, catalog):
    with pytest.raises(UserNotFoundError):
        await make_service().add_item(str(uuid.uuid4()), movie(catalog.inception))


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "user_id, content_id, episode_id, code",
    [
        ("nope", None, None, "INVALID_USER_ID"),
        (None, "nope", None, "INVALID_CONTENT_ID"),
        (None, None, "nope", "INVALID_EPISODE_ID"),
    ],
)
async def test_malformed_identifiers(make_service, catalog, user_id, content_id, episode_id, code):
    request = AddItemRequest(
        content_id=content_id or str(catalog.dark.id),
        content_type=ContentType.SHOW,
        episode_id=episode_id,
    )

    with pytest.raises(InvalidIdentifierError) as exc_info:
        await make_service().add_item(user_id or str(catalog.alice.id), request)

    assert exc_info.value.error_code == code
    assert exc_info.value.status_code == 400


@pytest.mark.asyncio
async def test_repeated_add_is_idempotent(make_service, catalog, session):
    service = make_service()

    first, created_first = await service.add_item(str(catalog.alice.id), movie(catalog.inception))
    second, created_second = await service.add_item(str(catalog.alice.id), movie(catalog.inception))

    assert (created_first, created_second) == (True, False)
    assert second.id == first.id
    assert second.snapshot == first.snapshot
    assert await MyListItemRepository(session).count_for_user(catalog.alice.id) == 1


@pytest.mark.asyncio
async def test_repeated_add_can_be_configured_as_conflict(make_service, catalog):
    service = make_service(duplicate_conflict=True)
    await service.add_item(str(catalog.alice.id), movie(catalog.inception))

    with pytest.raises(DuplicateResourceError) as exc_info:
        await service.add_item(str(catalog.alice.id), movie(catalog.inception))

    assert exc_info.value.status_code == 409


# ═══════════════════════════════════════════════════════════════════════════════
# REMOVE
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_remove_listed_item_bumps_version(make_service, catalog, memory_backend, session):
    service = make_service()
    await service.add_item(str(catalog.alice.id), movie(catalog.inception))

    assert await service.remove_item(str(catalog.alice.id), str(catalog.inception.id)) is True
    assert await _version(memory_backend, catalog.alice) == "2"
    assert await MyListItemRepository(session).count_for_user(catalog.alice.id) == 0


@pytest.mark.asyncio
async def test_remove_unlisted_item_reports_not_found(make_service, catalog, memory_backend, session):
    service = make_service()
    await service.add_item(str(catalog.bob.id), movie(catalog.inception))

    removed = await service.remove_item(str(catalog.alice.id), str(catalog.inception.id))

    assert removed is False
    assert await _version(memory_backend, catalog.alice) is None
    assert await MyListItemRepository(session).count_for_user(catalog.bob.id) == 1


@pytest.mark.asyncio
async def test_remove_rejects_malformed_content_id(make_service, catalog):
    with pytest.raises(InvalidIdentifierError):
        await make_service().remove_item(str(catalog.alice.id), "not-a-uuid")


# ═══════════════════════════════════════════════════════════════════════════════
# LIST
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_single_page_then_cursor_to_older_item(make_service, catalog):
    service = make_service()
    user_id = str(catalog.alice.id)

    a, _ = await service.add_item(user_id, movie(catalog.inception))
    page = await service.list_items(user_id, limit=1)
    assert [item.id for item in page.items] == [a.id]
    assert page.items[0].content_type == ContentType.MOVIE
    assert page.next_cursor is None

    b, _ = await service.add_item(user_id, movie(catalog.matrix))
    page = await service.list_items(user_id, limit=1)
    assert [item.id for item in page.items] == [b.id]
    assert page.next_cursor == encode_cursor(b.added_at, b.id)

    page = await service.list_items(user_id, limit=1, cursor=page.next_cursor)
    assert [item.id for item in page.items] == [a.id]
    assert page.next_cursor is None


@pytest.mark.asyncio
async def test_walking_cursors_returns_every_item_once_in_order(make_service, catalog, session):
    repo = MyListItemRepository(session)
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    for i in range(23):
        # Groups of three share a timestamp
        await repo.insert(
            user_id=catalog.alice.id,
            content_id=uuid.uuid4(),
            content_type=ContentType.MOVIE if i % 2 else ContentType.SHOW,
            added_at=base + timedelta(seconds=i // 3),
            snapshot={"title": f"t{i}", "posterUrl": None, "genres": [], "shortDescription": ""},
        )
    await session.commit()

    items = await _walk(make_service(), str(catalog.alice.id), limit=4)

    assert len(items) == 23
    assert len({item.id for item in items}) == 23
    keys = [(item.added_at, item.id) for item in items]
    assert keys == sorted(keys, reverse=True)


@pytest.mark.asyncio
async def test_walking_filtered_list(make_service, catalog):
    service = make_service()
    user_id = str(catalog.alice.id)
    await service.add_item(user_id, movie(catalog.inception))
    await service.add_item(user_id, show(catalog.dark))
    await service.add_item(user_id, movie(catalog.matrix))
    await service.add_item(user_id, show(catalog.office))

    shows = await _walk(service, user_id, limit=1, content_type=ContentType.SHOW)

    assert [item.content_id for item in shows] == [catalog.office.id, catalog.dark.id]


@pytest.mark.asyncio
@pytest.mark.parametrize("requested, expected", [(None, 2), (0, 2), (-5, 2), (1, 1), (500, 3)])
async def test_limit_is_clamped(make_service, catalog, requested, expected):
    service = make_service(default_limit=2, max_limit=3)
    user_id = str(catalog.alice.id)
    for content in (catalog.inception, catalog.matrix):
        await service.add_item(user_id, movie(content))
    for content in (catalog.dark, catalog.office):
        await service.add_item(user_id, show(content))

    page = await service.list_items(user_id, limit=requested)

    assert len(page.items) == expected


@pytest.mark.asyncio
async def test_total_is_only_present_when_requested(make_service, catalog):
    service = make_service()
    user_id = str(catalog.alice.id)
    await service.add_item(user_id, movie(catalog.inception))
    await service.add_item(user_id, show(catalog.dark))

    plain = await service.list_items(user_id, limit=1)
    counted = await service.list_items(user_id, limit=1, include_total=True)
    movies = await service.list_items(
        user_id, limit=1, content_type=ContentType.MOVIE, include_total=True
    )

    assert "total" not in plain.model_dump(exclude_unset=True)
    assert counted.total == 2
    assert movies.total == 1


@pytest.mark.asyncio
async def test_invalid_cursor_is_rejected(make_service, catalog):
    with pytest.raises(InvalidCursorError):
        await make_service().list_items(str(catalog.alice.id), cursor="garbage")


@pytest.mark.asyncio
async def test_empty_list(make_service, catalog):
    page = await make_service().list_items(str(catalog.alice.id))

    assert page.items == []
    assert page.next_cursor is None


# ═══════════════════════════════════════════════════════════════════════════════
# CACHING
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_repeat_read_is_served_from_cache_until_ttl(make_service, catalog, session, clock):
    service = make_service(page_ttl_seconds=60)
    user_id = str(catalog.alice.id)
    await service.add_item(user_id, movie(catalog.inception))
    first = await service.list_items(user_id, include_total=True)

    # Written behind the service's back: no version bump
    await MyListItemRepository(session).insert(
        user_id=catalog.alice.id,
        content_id=catalog.matrix.id,
        content_type=ContentType.MOVIE,
        snapshot={"title": "The Matrix"},
    )
    await session.commit()

    cached = await service.list_items(user_id, include_total=True)
    assert cached == first
    assert cached.total == 1

    clock.advance(61)
    fresh = await service.list_items(user_id, include_total=True)
    assert fresh.total == 2


@pytest.mark.asyncio
async def test_mutations_invalidate_cached_pages(make_service, catalog):
    service = make_service()
    user_id = str(catalog.alice.id)
    await service.add_item(user_id, movie(catalog.inception))
    assert len((await service.list_items(user_id)).items) == 1

    await service.add_item(user_id, movie(catalog.matrix))
    assert len((await service.list_items(user_id)).items) == 2

    await service.remove_item(user_id, str(catalog.inception.id))
    page = await service.list_items(user_id)
    assert [item.content_id for item in page.items] == [catalog.matrix.id]


@pytest.mark.asyncio
@pytest.mark.parametrize("cursor", ["start", "start:typemovie"])
async def test_cursor_shaped_like_a_cache_key_is_rejected(make_service, catalog, cursor):
    service = make_service()
    user_id = str(catalog.alice.id)
    await service.add_item(user_id, movie(catalog.inception))
    await service.list_items(user_id, limit=5)
    await service.list_items(user_id, limit=5, content_type=ContentType.MOVIE)

    with pytest.raises(InvalidCursorError):
        await service.list_items(user_id, limit=5, cursor=cursor)


@pytest.mark.asyncio
async def test_cached_and_uncached_reads_agree(make_service, catalog):
    cached_service = make_service()
    uncached_service = make_service(backend=NullCacheBackend())
    user_id = str(catalog.alice.id)
    await cached_service.add_item(user_id, movie(catalog.inception))
    await cached_service.add_item(user_id, show(catalog.dark, catalog.dark_ep1))
    await cached_service.add_item(user_id, movie(catalog.matrix))

    for _ in range(2):  # second pass hits the cache
        cursor_a = cursor_b = None
        while True:
            a = await cached_service.list_items(user_id, limit=2, cursor=cursor_a, include_total=True)
            b = await uncached_service.list_items(user_id, limit=2, cursor=cursor_b, include_total=True)
            assert a.model_dump() == b.model_dump()
            cursor_a, cursor_b = a.next_cursor, b.next_cursor
            if cursor_a is None:
                break


@pytest.mark.asyncio
async def test_unreachable_cache_does_not_fail_requests(make_service, catalog, failing_backend):
    service = make_service(backend=failing_backend)
    user_id = str(catalog.alice.id)

    _, created = await service.add_item(user_id, movie(catalog.inception))
    page = await service.list_items(user_id)
    removed = await service.remove_item(user_id, str(catalog.inception.id))

    assert created is True
    assert [item.content_id for item in page.items] == [catalog.inception.id]
    assert removed is True
    assert (await service.list_items(user_id)).items == []
    # Version unreadable: pages are neither read nor written
    assert "set" not in failing_backend.calls
