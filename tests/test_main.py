"""
Application wiring: health endpoints and the catch-all error handler.
"""
from httpx import ASGITransport, AsyncClient

from rentdesk.database import get_db
from rentdesk.main import app


async def test_root_and_health(client):
    root = await client.get("/")
    assert root.json()["status"] == "healthy"

    health = (await client.get("/health")).json()
    assert health["status"] == "healthy"
    assert health["push_configured"] is False
    assert health["reminder_loop"] is False


async def test_unhandled_errors_return_json_500():
    async def broken_db():
        raise RuntimeError("no database")
        yield

    app.dependency_overrides[get_db] = broken_db
    try:
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            response = await ac.get("/api/units")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}
