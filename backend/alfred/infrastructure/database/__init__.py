from .base import Base
from .session import engine, async_session_factory, get_db_session
from .models import (
    ActionItemModel,
    CommunicationModel,
    ProjectModel,
    RiskAssessmentModel,
    WeatherRecordModel,
)

__all__ = [
    "Base",
    "engine",
    "async_session_factory",
    "get_db_session",
    "ActionItemModel",
    "CommunicationModel",
    "ProjectModel",
    "RiskAssessmentModel",
    "WeatherRecordModel",
]
