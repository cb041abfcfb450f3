"""Shared fixtures for API tests: an in-memory database and a fresh app per test."""

from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from alfred.config import Settings
from alfred.infrastructure.database import Base
from alfred.infrastructure.database.session import get_db_session
from alfred.main import create_app


def make_settings(**overrides) -> Settings:
    values = {
        "app_env": "test",
        "rate_limit_enabled": False,
        "synthetic_broadcast_enabled": False,
        "seed_demo_data": False,
    }
    values.update(overrides)
    return Settings(**values)


@pytest_asyncio.fixture
async def session_factory() -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


def build_app(session_factory, **overrides):
    app = create_app(make_settings(**overrides))

    async def override_session() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_session
    return app


@pytest.fixture
def app(session_factory):
    return build_app(session_factory)


@pytest_asyncio.fixture
async def hub(app):
    hub = app.state.hub
    yield hub
    await hub.shutdown()


@pytest_asyncio.fixture
async def client(app, hub) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def drain():
    """Pop every queued event for a hub session (skipping the greeting)."""

    def _drain(session) -> list[dict]:
        events = []
        while not session.queue.empty():
            event = session.queue.get_nowait()
            if event is not None and event["event"] != "connected":
                events.append(event)
        return events

    return _drain


@pytest.fixture
def app_factory(session_factory):
    """Build an app over the test database with settings overrides."""

    def _factory(**overrides):
        return build_app(session_factory, **overrides)

    return _factory


@pytest.fixture
def ws_client():
    return TestClient(create_app(make_settings()))
