import os
from types import SimpleNamespace
from typing import Optional

# Settings are read on import; point everything at local test doubles first
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("CACHE_BACKEND", "memory")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import httpx
import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from mylist.api.dependencies.database import get_db
from mylist.api.dependencies.services import get_cache_backend
from mylist.api.main import create_application
from mylist.shared.adapters.memory_cache import InMemoryCacheBackend
from mylist.shared.cache import PageCache, VersionCache
from mylist.shared.core.exceptions import CacheUnavailableError
from mylist.shared.models import Base, Episode, Movie, TVShow, User
from mylist.shared.services.mylist_service import MyListService


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FailingCacheBackend:
    """Every operation fails the way an unreachable Redis does."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    async def get(self, key: str) -> Optional[str]:
        self.calls.append("get")
        raise CacheUnavailableError("get", key, ConnectionError("refused"))

    async def set(self, key: str, value: str, ttl: Optional[int] = None, nx: bool = False) -> bool:
        self.calls.append("set")
        raise CacheUnavailableError("set", key, ConnectionError("refused"))

    async def incr(self, key: str, amount: int = 1) -> int:
        self.calls.append("incr")
        raise CacheUnavailableError("incr", key, ConnectionError("refused"))

    async def expire(self, key: str, ttl: int) -> bool:
        self.calls.append("expire")
        raise CacheUnavailableError("expire", key, ConnectionError("refused"))

    async def ping(self) -> bool:
        return False

    async def close(self) -> None:
        return None


# ═══════════════════════════════════════════════════════════════════════════════
# STORE
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'mylist.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def sessionmaker(engine):
    return async_sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def session(sessionmaker):
    async with sessionmaker() as session:
        yield session


@pytest.fixture
async def catalog(sessionmaker):
    """Two users, two movies, two shows with episodes."""
    async with sessionmaker() as s:
        alice = User(username="alice", first_name="Alice")
        bob = User(username="bob", first_name="Bob")
        inception = Movie(
            title="Inception",
            genres=["SciFi", "Action"],
            description="A thief who steals corporate secrets through dreams.",
            poster_url="https://img.example/inception.jpg",
        )
        matrix = Movie(title="The Matrix", genres=["SciFi"], description=None)
        dark = TVShow(title="Dark", genres=["Drama"], description="Time travel in a small town.")
        office = TVShow(title="The Office", genres=["Comedy"], description="Paper sales.")
        s.add_all([alice, bob, inception, matrix, dark, office])
        await s.flush()

        dark_ep1 = Episode(show_id=dark.id, season=1, episode_number=1, title="Secrets")
        office_ep1 = Episode(show_id=office.id, season=1, episode_number=1, title="Pilot")
        s.add_all([dark_ep1, office_ep1])
        await s.commit()

    return SimpleNamespace(
        alice=alice,
        bob=bob,
        inception=inception,
        matrix=matrix,
        dark=dark,
        office=office,
        dark_ep1=dark_ep1,
        office_ep1=office_ep1,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# CACHE
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def memory_backend(clock):
    return InMemoryCacheBackend(clock=clock)


@pytest.fixture
def failing_backend():
    return FailingCacheBackend()


@pytest.fixture
def make_service(session, memory_backend):
    """Build a MyListService over the test session; backend defaults to memory."""

    def _make(backend=None, **kwargs) -> MyListService:
        backend = memory_backend if backend is None else backend
        return MyListService(session, VersionCache(backend), PageCache(backend), **kwargs)

    return _make


# ═══════════════════════════════════════════════════════════════════════════════
# HTTP
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
def app(sessionmaker, memory_backend):
    application = create_application()

    async def _test_db():
        async with sessionmaker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def _test_cache_backend():
        return memory_backend

    application.dependency_overrides[get_db] = _test_db
    application.dependency_overrides[get_cache_backend] = _test_cache_backend
    return application


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
