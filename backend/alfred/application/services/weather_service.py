"""Application service (use case) for per-location weather readings."""

import random
from collections.abc import Sequence
from datetime import date
from typing import Any

from alfred.application.interfaces import WeatherRepository
from alfred.application.schemas.weather import (
    ExtremeWeather,
    LocationHumidity,
    LocationTemperature,
    LocationWindSpeed,
    WeatherCreate,
    WeatherStatistics,
    WeatherUpdate,
)
from alfred.application.services import weather_simulation
from alfred.domain.entities import WeatherRecord, normalize_location
from alfred.domain.exceptions import EntityNotFoundError


def _reading(data: WeatherCreate | WeatherUpdate) -> dict[str, Any]:
    values = data.model_dump(exclude_none=True)
    if "condition" in values:
        values["condition"] = getattr(values["condition"], "value", values["condition"])
    return values


class WeatherService:
    """Weather lookups, upserts, simulation and forecasts.

    ``rng`` and ``today`` are injectable so simulations can be replayed.
    """

    def __init__(
        self,
        repository: WeatherRepository,
        rng: random.Random | None = None,
        today: date | None = None,
    ):
        self._repository = repository
        self._rng = rng or random.Random()
        self._today = today

    async def get_weather(self, location: str) -> WeatherRecord:
        record = await self._repository.get_by_location(location)
        if record is None:
            raise EntityNotFoundError("WeatherRecord", normalize_location(location))
        return record

    async def get_many(self, locations: Sequence[str]) -> list[WeatherRecord]:
        return await self._repository.get_many(locations)

    async def upsert_weather(self, location: str, data: WeatherCreate) -> WeatherRecord:
        """Create the reading for ``location`` or replace the existing one."""
        existing = await self._repository.get_by_location(location)
        if existing is None:
            return await self._repository.create(
                WeatherRecord(location=location, **_reading(data))
            )
        existing.update(**_reading(data))
        return await self._repository.update(existing)

    async def update_weather(self, location: str, data: WeatherUpdate) -> WeatherRecord:
        record = await self.get_weather(location)
        record.update(**_reading(data))
        return await self._repository.update(record)

    async def delete_weather(self, location: str) -> str:
        """Delete a location's reading and return the normalised location."""
        key = normalize_location(location)
        if not await self._repository.delete(key):
            raise EntityNotFoundError("WeatherRecord", key)
        return key

    async def forecast(
        self, location: str, days: int = weather_simulation.DEFAULT_FORECAST_DAYS
    ) -> list[dict[str, Any]]:
        current = await self.get_weather(location)
        return weather_simulation.forecast(current, days, rng=self._rng, today=self._today)

    async def simulate(self, location: str) -> WeatherRecord:
        """Persist a simulated next reading for an existing location."""
        current = await self.get_weather(location)
        current.update(**weather_simulation.simulate(current, self._rng))
        return await self._repository.update(current)

    async def get_statistics(self) -> WeatherStatistics:
        records = await self._repository.get_all()
        if not records:
            return WeatherStatistics()
        n = len(records)
        return WeatherStatistics(
            total_locations=n,
            average_temperature=sum(r.temperature for r in records) / n,
            average_humidity=sum(r.humidity for r in records) / n,
            average_wind_speed=sum(r.wind_speed for r in records) / n,
            average_pressure=sum(r.pressure for r in records) / n,
        )

    async def get_extremes(self) -> ExtremeWeather:
        records = await self._repository.get_all()
        if not records:
            return ExtremeWeather()
        hottest = max(records, key=lambda r: r.temperature)
        coldest = min(records, key=lambda r: r.temperature)
        windiest = max(records, key=lambda r: r.wind_speed)
        wettest = max(records, key=lambda r: r.humidity)
        return ExtremeWeather(
            hottest=LocationTemperature(location=hottest.location, temperature=hottest.temperature),
            coldest=LocationTemperature(location=coldest.location, temperature=coldest.temperature),
            windiest=LocationWindSpeed(location=windiest.location, wind_speed=windiest.wind_speed),
            wettest=LocationHumidity(location=wettest.location, humidity=wettest.humidity),
        )
