"""Pydantic DTOs for the Project feature."""

from datetime import datetime

from pydantic import Field

from alfred.application.schemas.common import CamelModel
from alfred.domain.entities import ProjectStatus


class CoordinatesSchema(CamelModel):
    lat: float
    lng: float


class LocationSchema(CamelModel):
    city: str = Field(..., min_length=1, examples=["Pune"])
    state: str = Field(..., min_length=1, examples=["MH"])
    coordinates: CoordinatesSchema


class WeatherSnapshotSchema(CamelModel):
    temperature: float = 20
    wind_speed: float = 10
    condition: str = "Clear"
    humidity: float = 50
    pressure: float = 1013
    updated_at: str | None = None


class ProjectCreate(CamelModel):
    """Schema for creating a project; progress and status fall back to 0 / active."""

    name: str = Field(..., min_length=1, max_length=255, examples=["Test Farm"])
    location: LocationSchema
    capacity: str = Field(..., min_length=1, examples=["10 MW"])
    start_date: str = Field(..., min_length=1, examples=["2024-01-01"])
    end_date: str = Field(..., min_length=1, examples=["2024-06-01"])
    progress: int | None = Field(None, ge=0, le=100)
    status: ProjectStatus | None = None
    weather: WeatherSnapshotSchema | None = None


class ProjectUpdate(CamelModel):
    """Schema for updating a project — all fields optional."""

    name: str | None = Field(None, min_length=1, max_length=255)
    location: LocationSchema | None = None
    capacity: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    progress: int | None = Field(None, ge=0, le=100)
    status: ProjectStatus | None = None
    weather: WeatherSnapshotSchema | None = None


class ProgressUpdate(CamelModel):
    """Body of PATCH /projects/{id}/progress. Range is enforced by the service."""

    progress: int


class ProjectResponse(CamelModel):
    id: str
    name: str
    location: LocationSchema
    capacity: str
    progress: int
    status: ProjectStatus
    start_date: str
    end_date: str
    weather: WeatherSnapshotSchema
    created_at: datetime
    updated_at: datetime


class ProjectMetrics(CamelModel):
    total_capacity: str
    progress: int
    deviation: str
    completion_date: str


class ProjectStatistics(CamelModel):
    total_projects: int = 0
    active_projects: int = 0
    completed_projects: int = 0
    average_progress: float = 0
    total_capacity: float = 0


class NetworkStats(CamelModel):
    total_projects: int
    active_sites: int
    total_capacity: float
    network_progress: int


class RegionalCount(CamelModel):
    state: str
    count: int


class NetworkOverview(CamelModel):
    network_stats: NetworkStats
    regional_distribution: list[RegionalCount]


class SchematicTask(CamelModel):
    name: str
    progress: int
    status: str
    button_text: str


class WorkflowStage(CamelModel):
    title: str
    color: str
    tasks: list[SchematicTask]


class ProjectSchematic(CamelModel):
    project_id: str
    project_name: str
    progress: int
    spi: float
    workflow_stages: list[WorkflowStage]
