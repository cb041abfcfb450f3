"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from alfred.config import Settings, get_settings
from alfred.application.services import NotificationHub, SyntheticBroadcaster
from alfred.infrastructure.database import Base, engine
from alfred.infrastructure.database.session import async_session_factory
from alfred.infrastructure.database.seed import seed_demo_data
from alfred.infrastructure.logging.log_config import setup_logging
from alfred.infrastructure.rate_limiter import SlidingWindowRateLimiter
from alfred.presentation.api.router import router as api_router
from alfred.presentation.api.router import ws_router
from alfred.presentation.middleware import register_exception_handlers, register_middleware

logger = logging.getLogger(__name__)


async def _seed_demo_data() -> None:
    """Write the demo sites on an empty database. Safe to call on every startup."""
    try:
        async with async_session_factory() as session:
            if await seed_demo_data(session):
                await session.commit()
    except Exception as exc:
        logger.warning("Could not seed demo data: %s", exc)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — create tables, seed, start the synthetic broadcaster."""
    settings: Settings = app.state.settings
    setup_logging(settings)

    # 1. Create all database tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # 2. Demo data for a fresh database
    if settings.seed_demo_data:
        await _seed_demo_data()

    # 3. Start the synthetic broadcaster
    hub: NotificationHub = app.state.hub
    broadcaster: SyntheticBroadcaster | None = None
    if settings.synthetic_broadcast_enabled:
        broadcaster = SyntheticBroadcaster(
            hub, interval_seconds=settings.synthetic_broadcast_interval_seconds
        )
        await broadcaster.start()

    yield

    # Shutdown
    if broadcaster is not None:
        await broadcaster.stop()
    await hub.shutdown()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.hub = NotificationHub(queue_size=settings.realtime_queue_size)
    app.state.rate_limiter = (
        SlidingWindowRateLimiter(
            max_requests=settings.rate_limit_max_requests,
            window_seconds=settings.rate_limit_window_seconds,
            min_interval_ms=settings.rate_limit_min_interval_ms,
        )
        if settings.rate_limit_enabled
        else None
    )

    register_exception_handlers(app)
    register_middleware(app, settings)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Mount API routes and the websocket channel
    app.include_router(api_router)
    app.include_router(ws_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "alfred.main:app",
        host="0.0.0.0",
        port=3001,
        reload=True,
    )
