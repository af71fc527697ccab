import pytest
from sqlalchemy.exc import OperationalError

from askiep import main


@pytest.mark.asyncio
async def test_health_ok(client):
    response = await client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert "X-Request-ID" in response.headers


@pytest.mark.asyncio
async def test_health_reports_store_outage(client, monkeypatch):
    class _DownEngine:
        def connect(self):
            raise OperationalError("SELECT 1", {}, Exception("database is down"))

    monkeypatch.setattr(main, "engine", _DownEngine())

    response = await client.get("/api/health")

    assert response.status_code == 503
    assert response.json()["status"] == "error"


@pytest.mark.asyncio
async def test_unknown_route_uses_error_body(client):
    response = await client.get("/api/nope")
    assert response.status_code == 404
    assert set(response.json()) == {"error", "details"}


@pytest.mark.asyncio
async def test_request_id_is_propagated(client):
    response = await client.get("/api/health", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"
