import pytest

from mylist.shared.cache.keys import user_version_key
from mylist.shared.cache.version_cache import INITIAL_VERSION, VersionCache


@pytest.mark.asyncio
async def test_get_or_init_initializes_absent_counter(memory_backend):
    cache = VersionCache(memory_backend, ttl_seconds=3600)

    assert await cache.get_or_init("u1") == INITIAL_VERSION
    assert await memory_backend.get(user_version_key("u1")) == "0"


@pytest.mark.asyncio
async def test_get_or_init_returns_existing_counter(memory_backend):
    await memory_backend.set(user_version_key("u1"), "7")
    cache = VersionCache(memory_backend, ttl_seconds=3600)

    assert await cache.get_or_init("u1") == 7


@pytest.mark.asyncio
async def test_get_or_init_adopts_value_of_concurrent_initializer(memory_backend):
    key = user_version_key("u1")
    real_set = memory_backend.set

    async def racing_set(k, value, ttl=None, nx=False):
        # Another request initializes and bumps between our GET and SET NX
        await real_set(k, "4")
        return await real_set(k, value, ttl=ttl, nx=nx)

    memory_backend.set = racing_set
    cache = VersionCache(memory_backend, ttl_seconds=3600)

    assert await cache.get_or_init("u1") == 4
    assert await memory_backend.get(key) == "4"


@pytest.mark.asyncio
async def test_bump_increments_and_refreshes_expiry(memory_backend, clock):
    cache = VersionCache(memory_backend, ttl_seconds=3600)
    await cache.get_or_init("u1")

    assert await cache.bump("u1") == 1
    assert await cache.bump("u1") == 2
    assert memory_backend.ttl_remaining(user_version_key("u1")) == pytest.approx(3600)

    clock.advance(3601)
    assert await memory_backend.get(user_version_key("u1")) is None


@pytest.mark.asyncio
async def test_bump_creates_missing_counter(memory_backend):
    cache = VersionCache(memory_backend, ttl_seconds=60)

    assert await cache.bump("fresh") == 1


@pytest.mark.asyncio
async def test_versions_are_per_user(memory_backend):
    cache = VersionCache(memory_backend, ttl_seconds=60)
    await cache.bump("u1")

    assert await cache.get_or_init("u2") == 0
    assert await cache.get_or_init("u1") == 1


@pytest.mark.asyncio
async def test_unreachable_cache_is_swallowed(failing_backend):
    cache = VersionCache(failing_backend, ttl_seconds=60)

    assert await cache.get_or_init("u1") is None
    assert await cache.bump("u1") is None


@pytest.mark.asyncio
async def test_non_integer_counter_reads_as_unavailable(memory_backend):
    await memory_backend.set(user_version_key("u1"), "garbage")
    cache = VersionCache(memory_backend, ttl_seconds=60)

    assert await cache.get_or_init("u1") is None
