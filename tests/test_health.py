import pytest

from mylist.api.dependencies.services import get_cache_backend
from mylist.api.handlers import health_handler


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["service"] == "mylist"


@pytest.mark.asyncio
async def test_live(client):
    response = await client.get("/live")

    assert response.json() == {"status": "alive"}


@pytest.mark.asyncio
async def test_ready_reports_store_and_cache(client, monkeypatch):
    async def fake_ping_db():
        return True

    monkeypatch.setattr(health_handler, "ping_db", fake_ping_db)

    response = await client.get("/ready")

    assert response.status_code == 200
    assert response.json() == {"status": "ready", "database": True, "cache": True}


@pytest.mark.asyncio
async def test_ready_with_cache_down_is_still_ready(app, client, failing_backend, monkeypatch):
    async def fake_ping_db():
        return True

    async def _failing():
        return failing_backend

    monkeypatch.setattr(health_handler, "ping_db", fake_ping_db)
    app.dependency_overrides[get_cache_backend] = _failing

    response = await client.get("/ready")

    assert response.status_code == 200
    assert response.json()["cache"] is False


@pytest.mark.asyncio
async def test_not_ready_without_store(client, monkeypatch):
    async def fake_ping_db():
        return False

    monkeypatch.setattr(health_handler, "ping_db", fake_ping_db)

    response = await client.get("/ready")

    assert response.status_code == 503
    assert response.json()["status"] == "not_ready"
