from .project import ProjectModel
from .communication import CommunicationModel
from .action_item import ActionItemModel, RiskAssessmentModel
from .weather_record import WeatherRecordModel

__all__ = [
    "ProjectModel",
    "CommunicationModel",
    "ActionItemModel",
    "RiskAssessmentModel",
    "WeatherRecordModel",
]
