from .project_repository import ProjectRepository
from .communication_repository import CommunicationRepository
from .action_item_repository import ActionItemRepository
from .risk_assessment_repository import RiskAssessmentRepository
from .weather_repository import WeatherRepository

__all__ = [
    "ProjectRepository",
    "CommunicationRepository",
    "ActionItemRepository",
    "RiskAssessmentRepository",
    "WeatherRepository",
]
