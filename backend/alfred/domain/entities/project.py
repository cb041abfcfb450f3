"""Domain entity for solar construction projects."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import uuid4

from alfred.domain.exceptions import InvalidFieldValueError

MIN_PROGRESS = 0
MAX_PROGRESS = 100


class ProjectStatus(str, Enum):
    """Lifecycle states of a project."""

    ACTIVE = "active"
    COMPLETED = "completed"
    ON_HOLD = "on-hold"


@dataclass
class Coordinates:
    lat: float
    lng: float


@dataclass
class ProjectLocation:
    """Where a project site is; city/state are the filterable parts."""

    city: str
    state: str
    coordinates: Coordinates


@dataclass
class WeatherSnapshot:
    """Last-known weather embedded in the project document."""

    temperature: float = 20
    wind_speed: float = 10
    condition: str = "Clear"
    humidity: float = 50
    pressure: float = 1013
    updated_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())


def validate_progress(progress: int) -> int:
    """Reject progress values outside 0..100."""
    if progress < MIN_PROGRESS or progress > MAX_PROGRESS:
        raise InvalidFieldValueError(
            "progress", progress, f"Progress must be between {MIN_PROGRESS} and {MAX_PROGRESS}"
        )
    return progress


@dataclass
class Project:
    """A solar-energy construction site being monitored.

    ``capacity`` keeps its unit embedded ("50 MW"); start and end dates are
    ISO date strings exactly as the client supplied them.
    """

    name: str
    location: ProjectLocation
    capacity: str
    start_date: str
    end_date: str
    progress: int = 0
    status: ProjectStatus = ProjectStatus.ACTIVE
    weather: WeatherSnapshot = field(default_factory=WeatherSnapshot)
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        validate_progress(self.progress)

    def update(self, **changes: Any) -> None:
        """Apply the given field changes and refresh the updated_at timestamp.

        ``None`` values are ignored so partial updates can pass every field.
        """
        for name, value in changes.items():
            if value is None:
                continue
            if name == "progress":
                validate_progress(value)
            setattr(self, name, value)
        self.updated_at = datetime.now(timezone.utc)

    def set_progress(self, progress: int) -> None:
        self.progress = validate_progress(progress)
        self.updated_at = datetime.now(timezone.utc)

    @property
    def capacity_mw(self) -> float:
        """Numeric part of ``capacity`` ("50 MW" → 50.0); 0 when unparsable."""
        head = self.capacity.strip().split(" ", 1)[0] if self.capacity else ""
        try:
            return float(head)
        except ValueError:
            return 0.0
