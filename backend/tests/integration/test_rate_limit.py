"""Rate limiting is applied per client and path by HTTP middleware."""

import pytest
from httpx import ASGITransport, AsyncClient


@pytest.mark.asyncio
async def test_second_request_within_min_interval_is_429(app_factory):
    app = app_factory(rate_limit_enabled=True)
    transport = ASGITransport(app=app, raise_app_exceptions=False)

    async with AsyncClient(transport=transport, base_url="http://test") as client:
        first = await client.get("/api/health")
        second = await client.get("/api/health")

    assert first.status_code == 200
    assert second.status_code == 429
    assert second.json()["success"] is False
    assert int(second.headers["Retry-After"]) >= 1


@pytest.mark.asyncio
async def test_different_paths_are_limited_independently(app_factory):
    app = app_factory(rate_limit_enabled=True)
    transport = ASGITransport(app=app, raise_app_exceptions=False)

    async with AsyncClient(transport=transport, base_url="http://test") as client:
        health = await client.get("/api/health")
        projects = await client.get("/api/projects")

    assert health.status_code == 200
    assert projects.status_code == 200


@pytest.mark.asyncio
async def test_disabled_limiter_lets_bursts_through(client):
    for _ in range(3):
        assert (await client.get("/api/health")).status_code == 200
