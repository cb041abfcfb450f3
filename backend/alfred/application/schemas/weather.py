"""Pydantic DTOs for weather readings, forecasts and statistics."""

from pydantic import Field

from alfred.application.schemas.common import CamelModel
from alfred.domain.entities import WeatherCondition


class WeatherCreate(CamelModel):
    """Full reading for POST /weather/location/{location}; ranges match the store limits."""

    temperature: float = Field(..., ge=-50, le=60)
    wind_speed: float = Field(..., ge=0, le=200)
    condition: WeatherCondition
    humidity: float = Field(..., ge=0, le=100)
    pressure: float = Field(..., ge=800, le=1200)


class WeatherUpdate(CamelModel):
    temperature: float | None = Field(None, ge=-50, le=60)
    wind_speed: float | None = Field(None, ge=0, le=200)
    condition: WeatherCondition | None = None
    humidity: float | None = Field(None, ge=0, le=100)
    pressure: float | None = Field(None, ge=800, le=1200)


class MultipleLocationsRequest(CamelModel):
    locations: list[str] = Field(..., min_length=1)


class WeatherResponse(CamelModel):
    id: str
    location: str
    temperature: float
    wind_speed: float
    condition: str
    humidity: float
    pressure: float
    updated_at: str


class ForecastEntry(CamelModel):
    date: str
    temperature: float
    wind_speed: float
    condition: str
    humidity: float
    pressure: float


class WeatherStatistics(CamelModel):
    total_locations: int = 0
    average_temperature: float = 0
    average_humidity: float = 0
    average_wind_speed: float = 0
    average_pressure: float = 0


class LocationTemperature(CamelModel):
    location: str
    temperature: float


class LocationWindSpeed(CamelModel):
    location: str
    wind_speed: float


class LocationHumidity(CamelModel):
    location: str
    humidity: float


class ExtremeWeather(CamelModel):
    hottest: LocationTemperature | None = None
    coldest: LocationTemperature | None = None
    windiest: LocationWindSpeed | None = None
    wettest: LocationHumidity | None = None
