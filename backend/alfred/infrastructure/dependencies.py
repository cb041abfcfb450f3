"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator

from fastapi import Depends, Request
from starlette.requests import HTTPConnection
from sqlalchemy.ext.asyncio import AsyncSession

from alfred.config import Settings, get_settings
from alfred.application.services import (
    ActionService,
    CommunicationService,
    MutationNotifier,
    NotificationHub,
    ProjectService,
    WeatherService,
)
from alfred.infrastructure.database.session import get_db_session
from alfred.infrastructure.database.repositories import (
    SQLAlchemyActionItemRepository,
    SQLAlchemyCommunicationRepository,
    SQLAlchemyProjectRepository,
    SQLAlchemyRiskAssessmentRepository,
    SQLAlchemyWeatherRepository,
)
from alfred.infrastructure.rate_limiter import SlidingWindowRateLimiter


def get_notification_hub(connection: HTTPConnection) -> NotificationHub:
    """The app's notification hub, shared by every transport and write path."""
    return connection.app.state.hub


def get_app_settings(request: Request) -> Settings:
    """Settings the running app was built with (falls back to the cached env settings)."""
    return getattr(request.app.state, "settings", None) or get_settings()


def get_rate_limiter(request: Request) -> SlidingWindowRateLimiter:
    return request.app.state.rate_limiter


async def get_mutation_notifier(
    session: AsyncSession = Depends(get_db_session),
    hub: NotificationHub = Depends(get_notification_hub),
) -> MutationNotifier:
    """Provides the commit-then-broadcast bridge bound to the request's session."""
    return MutationNotifier(session, hub)


async def get_project_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[ProjectService, None]:
    """Provides a ProjectService instance with its repository wired up."""
    yield ProjectService(SQLAlchemyProjectRepository(session))


async def get_communication_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[CommunicationService, None]:
    yield CommunicationService(SQLAlchemyCommunicationRepository(session))


async def get_action_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[ActionService, None]:
    """Provides an ActionService with both the action and risk repositories."""
    yield ActionService(
        action_repository=SQLAlchemyActionItemRepository(session),
        risk_repository=SQLAlchemyRiskAssessmentRepository(session),
    )


async def get_weather_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[WeatherService, None]:
    yield WeatherService(SQLAlchemyWeatherRepository(session))
