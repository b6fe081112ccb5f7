"""API tests for the /api routes, backed by a store in a temporary directory."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from noticeboard.infrastructure.dependencies import get_message_store
from noticeboard.infrastructure.storage.json_file_store import JsonFileMessageStore
from noticeboard.main import create_app


@pytest_asyncio.fixture
async def store(tmp_path) -> JsonFileMessageStore:
    return await JsonFileMessageStore.open(tmp_path / "data")


@pytest_asyncio.fixture
async def client(store: JsonFileMessageStore):
    app = create_app()
    app.dependency_overrides[get_message_store] = lambda: store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def _post(client: AsyncClient, **overrides) -> dict:
    body = {"title": "Notice", "content": "Body", "author": "alice", "priority": "normal"}
    body.update(overrides)
    response = await client.post("/api/messages", json=body)
    assert response.status_code == 201
    return response.json()


@pytest.mark.asyncio
async def test_create_and_get_message(client: AsyncClient):
    created = await _post(client, priority="urgent")

    assert created["priority"] == "urgent"
    assert created["enabled"] is True
    assert created["created_at"] == created["updated_at"]

    response = await client.get(f"/api/messages/{created['id']}")
    assert response.status_code == 200
    assert response.json()["title"] == "Notice"


@pytest.mark.asyncio
async def test_invalid_priority_is_rejected(client: AsyncClient):
    response = await client.post(
        "/api/messages",
        json={"title": "t", "content": "c", "author": "a", "priority": "critical"},
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_missing_priority_is_rejected(client: AsyncClient):
    response = await client.post(
        "/api/messages", json={"title": "t", "content": "c", "author": "a"}
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_naive_expiry_keeps_listings_and_stats_working(client: AsyncClient):
    created = await _post(client, priority="high", expires_at="2099-01-01T00:00:00")
    assert datetime.fromisoformat(created["expires_at"]) == datetime(2099, 1, 1, tzinfo=timezone.utc)

    response = await client.put(
        f"/api/messages/{created['id']}", json={"expires_at": "2099-06-01T08:30:00"}
    )
    assert response.status_code == 200
    expires_at = datetime.fromisoformat(response.json()["expires_at"])
    assert expires_at == datetime(2099, 6, 1, 8, 30, tzinfo=timezone.utc)

    active = await client.get("/api/messages/active")
    page = await client.get("/api/messages/paginated")
    stats = await client.get("/api/stats")

    assert active.status_code == 200
    assert [m["id"] for m in active.json()] == [created["id"]]
    assert page.status_code == 200
    assert page.json()["total"] == 1
    assert stats.status_code == 200
    assert stats.json()["active_messages"] == 1


@pytest.mark.asyncio
async def test_offset_expiry_is_returned_in_utc(client: AsyncClient):
    created = await _post(client, expires_at="2099-01-01T02:00:00+02:00")
    expires_at = datetime.fromisoformat(created["expires_at"])
    assert expires_at.utcoffset() == timedelta(0)
    assert expires_at.hour == 0

    response = await client.put(
        f"/api/messages/{created['id']}", json={"expires_at": "2099-01-01T19:00:00-05:00"}
    )
    expires_at = datetime.fromisoformat(response.json()["expires_at"])
    assert expires_at.utcoffset() == timedelta(0)
    assert expires_at == datetime(2099, 1, 2, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_malformed_id_is_400_and_unknown_id_is_404(client: AsyncClient):
    assert (await client.get("/api/messages/not-a-uuid")).status_code == 400
    assert (await client.get(f"/api/messages/{uuid4()}")).status_code == 404
    assert (await client.delete(f"/api/messages/{uuid4()}")).status_code == 404
    assert (await client.post("/api/messages/nope/toggle")).status_code == 400


@pytest.mark.asyncio
async def test_partial_update(client: AsyncClient):
    created = await _post(client, title="Old", content="Keep")

    response = await client.put(f"/api/messages/{created['id']}", json={"title": "New"})

    body = response.json()
    assert response.status_code == 200
    assert body["title"] == "New"
    assert body["content"] == "Keep"
    assert datetime.fromisoformat(body["updated_at"]) > datetime.fromisoformat(created["updated_at"])


@pytest.mark.asyncio
async def test_toggle(client: AsyncClient):
    created = await _post(client)
    response = await client.post(f"/api/messages/{created['id']}/toggle")
    assert response.status_code == 200
    assert response.json()["enabled"] is False


@pytest.mark.asyncio
async def test_delete(client: AsyncClient):
    created = await _post(client)
    response = await client.delete(f"/api/messages/{created['id']}")
    assert response.status_code == 204
    assert (await client.get(f"/api/messages/{created['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_active_and_all_listings(client: AsyncClient):
    past = (datetime.now(timezone.utc) - timedelta(hours=1)).isoformat()
    expired = await _post(client, title="Expired", expires_at=past)
    live = await _post(client, title="Live")

    all_ids = [m["id"] for m in (await client.get("/api/messages")).json()]
    active_ids = [m["id"] for m in (await client.get("/api/messages/active")).json()]

    assert set(all_ids) == {expired["id"], live["id"]}
    assert active_ids == [live["id"]]


@pytest.mark.asyncio
async def test_pagination(client: AsyncClient):
    for i in range(25):
        await _post(client, title=f"n{i}")

    third = (await client.get("/api/messages/paginated", params={"page": 3, "page_size": 10})).json()
    fourth = (await client.get("/api/messages/paginated", params={"page": 4, "page_size": 10})).json()
    clamped = (await client.get("/api/messages/paginated", params={"page": 0, "page_size": 500})).json()

    assert third["total"] == 25
    assert third["total_pages"] == 3
    assert len(third["data"]) == 5
    assert fourth["data"] == []
    assert clamped["page"] == 1
    assert clamped["page_size"] == 100
    assert len(clamped["data"]) == 25


@pytest.mark.asyncio
async def test_clients_and_stats(client: AsyncClient):
    await _post(client)
    response = await client.post(
        "/api/clients/heartbeat", json={"id": "k1", "name": "Kiosk", "device_info": "Pi 4"}
    )
    assert response.status_code == 200
    assert response.json()["is_online"] is True

    assert [c["id"] for c in (await client.get("/api/clients")).json()] == ["k1"]
    assert [c["id"] for c in (await client.get("/api/clients/online")).json()] == ["k1"]

    stats = (await client.get("/api/stats")).json()
    assert stats["total_messages"] == 1
    assert stats["active_messages"] == 1
    assert stats["total_clients"] == 1
    assert stats["online_clients"] == 1

    assert (await client.post("/api/clients/k1/offline")).status_code == 204
    assert (await client.post("/api/clients/unknown/offline")).status_code == 204
    assert (await client.get("/api/clients/online")).json() == []
    assert (await client.get("/api/stats")).json()["online_clients"] == 0


@pytest.mark.asyncio
async def test_storage_failure_is_500(client: AsyncClient, store: JsonFileMessageStore, monkeypatch):
    from noticeboard.domain.exceptions import StorageError

    def fail() -> None:
        raise StorageError(str(store.path), "disk full")

    monkeypatch.setattr(store, "_persist", fail)

    response = await client.post(
        "/api/messages", json={"title": "t", "content": "c", "author": "a", "priority": "low"}
    )
    assert response.status_code == 500
    assert (await client.get("/api/messages")).json() == []
