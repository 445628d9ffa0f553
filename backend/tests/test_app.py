import logging

from httpx import ASGITransport, AsyncClient

import documents.interfaces.routes
from main import app


async def test_health(client):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}
    assert resp.headers["X-Request-ID"]


async def test_request_is_logged(client, caplog):
    caplog.set_level(logging.INFO, logger="main")
    await client.get("/health")
    assert any("GET /health | status=200" in r.getMessage() for r in caplog.records)


async def test_unhandled_error_is_still_logged(auth_headers, caplog, monkeypatch):
    async def broken(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(documents.interfaces.routes, "list_visible_documents", broken)
    caplog.set_level(logging.INFO, logger="main")

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        resp = await ac.get("/api/docs", headers=auth_headers)

    assert resp.status_code == 500
    assert any("GET /api/docs | status=500" in r.getMessage() for r in caplog.records)
