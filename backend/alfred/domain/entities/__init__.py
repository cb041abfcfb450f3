from .project import (
    Coordinates,
    Project,
    ProjectLocation,
    ProjectStatus,
    WeatherSnapshot,
    validate_progress,
)
from .communication import (
    Communication,
    CommunicationPriority,
    CommunicationSource,
    CommunicationType,
)
from .action_item import (
    ActionItem,
    ActionPriority,
    ActionStatus,
    ActionType,
    parse_action_status,
)
from .risk_assessment import (
    RiskAssessment,
    RiskImpact,
    RiskProbability,
    RiskStatus,
)
from .weather_record import (
    WEATHER_CONDITIONS,
    WeatherCondition,
    WeatherRecord,
    normalize_location,
)

__all__ = [
    "Coordinates",
    "Project",
    "ProjectLocation",
    "ProjectStatus",
    "WeatherSnapshot",
    "validate_progress",
    "Communication",
    "CommunicationPriority",
    "CommunicationSource",
    "CommunicationType",
    "ActionItem",
    "ActionPriority",
    "ActionStatus",
    "ActionType",
    "parse_action_status",
    "RiskAssessment",
    "RiskImpact",
    "RiskProbability",
    "RiskStatus",
    "WEATHER_CONDITIONS",
    "WeatherCondition",
    "WeatherRecord",
    "normalize_location",
]
