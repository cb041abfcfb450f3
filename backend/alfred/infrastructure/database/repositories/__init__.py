from .project_repository import SQLAlchemyProjectRepository
from .communication_repository import SQLAlchemyCommunicationRepository
from .action_item_repository import SQLAlchemyActionItemRepository
from .risk_assessment_repository import SQLAlchemyRiskAssessmentRepository
from .weather_repository import SQLAlchemyWeatherRepository

__all__ = [
    "SQLAlchemyProjectRepository",
    "SQLAlchemyCommunicationRepository",
    "SQLAlchemyActionItemRepository",
    "SQLAlchemyRiskAssessmentRepository",
    "SQLAlchemyWeatherRepository",
]
