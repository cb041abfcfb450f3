from .common import ApiResponse, CamelModel, to_payload
from .project import (
    CoordinatesSchema,
    LocationSchema,
    NetworkOverview,
    ProgressUpdate,
    ProjectCreate,
    ProjectMetrics,
    ProjectResponse,
    ProjectSchematic,
    ProjectStatistics,
    ProjectUpdate,
    WeatherSnapshotSchema,
)
from .communication import (
    AIInsightRequest,
    CommunicationCreate,
    CommunicationResponse,
    CommunicationUpdate,
)
from .action import (
    ActionItemCreate,
    ActionItemResponse,
    ActionItemUpdate,
    ActionRiskStatistics,
    ActionStatusUpdate,
    RiskAssessmentCreate,
    RiskAssessmentResponse,
    RiskAssessmentUpdate,
)
from .weather import (
    ExtremeWeather,
    ForecastEntry,
    MultipleLocationsRequest,
    WeatherCreate,
    WeatherResponse,
    WeatherStatistics,
    WeatherUpdate,
)
from .realtime import ProjectSubscription, RealtimeStatus

__all__ = [
    "ApiResponse",
    "CamelModel",
    "to_payload",
    "CoordinatesSchema",
    "LocationSchema",
    "NetworkOverview",
    "ProgressUpdate",
    "ProjectCreate",
    "ProjectMetrics",
    "ProjectResponse",
    "ProjectSchematic",
    "ProjectStatistics",
    "ProjectUpdate",
    "WeatherSnapshotSchema",
    "AIInsightRequest",
    "CommunicationCreate",
    "CommunicationResponse",
    "CommunicationUpdate",
    "ActionItemCreate",
    "ActionItemResponse",
    "ActionItemUpdate",
    "ActionRiskStatistics",
    "ActionStatusUpdate",
    "RiskAssessmentCreate",
    "RiskAssessmentResponse",
    "RiskAssessmentUpdate",
    "ExtremeWeather",
    "ForecastEntry",
    "MultipleLocationsRequest",
    "WeatherCreate",
    "WeatherResponse",
    "WeatherStatistics",
    "WeatherUpdate",
    "ProjectSubscription",
    "RealtimeStatus",
]
