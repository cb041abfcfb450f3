"""Domain entity for per-location weather readings."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import uuid4


class WeatherCondition(str, Enum):
    CLEAR = "Clear"
    PARTLY_CLOUDY = "Partly Cloudy"
    CLOUDY = "Cloudy"
    RAIN = "Rain"
    SNOW = "Snow"
    STORM = "Storm"


WEATHER_CONDITIONS: tuple[str, ...] = tuple(c.value for c in WeatherCondition)


def normalize_location(location: str) -> str:
    """Locations are unique case-insensitively; store them lower-cased."""
    return location.strip().lower()


@dataclass
class WeatherRecord:
    """The current reading for one location; one record per location."""

    location: str
    temperature: float
    wind_speed: float
    condition: str
    humidity: float
    pressure: float
    updated_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        self.location = normalize_location(self.location)

    def update(self, **changes: Any) -> None:
        """Apply the given reading changes and stamp updated_at."""
        for name, value in changes.items():
            if value is not None:
                setattr(self, name, value)
        self.updated_at = datetime.now(timezone.utc).isoformat()
