"""Unit tests for the WeatherService and the simulation helpers."""

import random
from datetime import date

import pytest

from alfred.application.interfaces import WeatherRepository
from alfred.application.schemas import WeatherCreate, WeatherUpdate
from alfred.application.services import WeatherService, weather_simulation
from alfred.domain.entities import WEATHER_CONDITIONS, WeatherRecord, normalize_location
from alfred.domain.exceptions import EntityNotFoundError


class FakeWeatherRepository(WeatherRepository):
    def __init__(self):
        self._records: dict[str, WeatherRecord] = {}

    async def get_by_location(self, location):
        return self._records.get(normalize_location(location))

    async def get_many(self, locations):
        wanted = [normalize_location(loc) for loc in locations]
        return [self._records[loc] for loc in wanted if loc in self._records]

    async def get_all(self):
        return list(self._records.values())

    async def create(self, record):
        self._records[record.location] = record
        return record

    async def update(self, record):
        self._records[record.location] = record
        return record

    async def delete(self, location):
        return self._records.pop(normalize_location(location), None) is not None


READING = {"temperature": 30, "windSpeed": 10, "condition": "Clear", "humidity": 50, "pressure": 1010}


@pytest.fixture
def service() -> WeatherService:
    return WeatherService(FakeWeatherRepository(), rng=random.Random(7), today=date(2024, 6, 1))


@pytest.mark.asyncio
async def test_upsert_creates_then_replaces(service: WeatherService):
    created = await service.upsert_weather("Delhi", WeatherCreate.model_validate(READING))
    replaced = await service.upsert_weather(
        "DELHI", WeatherCreate.model_validate({**READING, "condition": "Rain"})
    )

    assert created.location == "delhi"
    assert replaced.id == created.id
    assert replaced.condition == "Rain"


@pytest.mark.asyncio
async def test_update_missing_location_raises(service: WeatherService):
    with pytest.raises(EntityNotFoundError):
        await service.update_weather("atlantis", WeatherUpdate(humidity=10))


@pytest.mark.asyncio
async def test_partial_update(service: WeatherService):
    await service.upsert_weather("delhi", WeatherCreate.model_validate(READING))
    updated = await service.update_weather("delhi", WeatherUpdate(humidity=10))
    assert updated.humidity == 10
    assert updated.temperature == 30


@pytest.mark.asyncio
async def test_forecast_dates_start_tomorrow(service: WeatherService):
    await service.upsert_weather("delhi", WeatherCreate.model_validate(READING))

    entries = await service.forecast("delhi", days=3)

    assert [e["date"] for e in entries] == ["2024-06-02", "2024-06-03", "2024-06-04"]


@pytest.mark.asyncio
async def test_forecast_unknown_location_raises(service: WeatherService):
    with pytest.raises(EntityNotFoundError):
        await service.forecast("atlantis")


@pytest.mark.asyncio
async def test_delete_returns_normalised_key(service: WeatherService):
    await service.upsert_weather("delhi", WeatherCreate.model_validate(READING))
    assert await service.delete_weather(" Delhi ") == "delhi"
    with pytest.raises(EntityNotFoundError):
        await service.delete_weather("delhi")


@pytest.mark.asyncio
async def test_statistics_and_extremes_empty(service: WeatherService):
    assert (await service.get_statistics()).total_locations == 0
    assert (await service.get_extremes()).hottest is None


def test_simulate_stays_within_drift_and_limits():
    rng = random.Random(1)
    edge = WeatherRecord(
        location="antarctica", temperature=-49, wind_speed=199, condition="Snow",
        humidity=99, pressure=801,
    )
    for _ in range(200):
        reading = weather_simulation.simulate(edge, rng)
        assert -50 <= reading["temperature"] <= edge.temperature + weather_simulation.TEMPERATURE_DRIFT
        assert 0 <= reading["wind_speed"] <= 200
        assert 0 <= reading["humidity"] <= 100
        assert 800 <= reading["pressure"] <= 1200
        assert reading["condition"] in WEATHER_CONDITIONS


class PinnedRandom(random.Random):
    """Always draws the low (or high) end of ``uniform``."""

    def __init__(self, high: bool):
        super().__init__(0)
        self.high = high

    def uniform(self, a, b):
        return b if self.high else a


@pytest.mark.parametrize("high", [False, True])
def test_simulate_respects_drift_for_two_decimal_baseline(high):
    current = WeatherRecord(
        location="jaipur", temperature=20.04, wind_speed=5.55, condition="Clear",
        humidity=40.05, pressure=1000.04,
    )

    reading = weather_simulation.simulate(current, PinnedRandom(high))

    assert abs(reading["temperature"] - current.temperature) <= weather_simulation.TEMPERATURE_DRIFT
    assert abs(reading["wind_speed"] - current.wind_speed) <= weather_simulation.WIND_DRIFT
    assert abs(reading["humidity"] - current.humidity) <= weather_simulation.HUMIDITY_DRIFT
    assert abs(reading["pressure"] - current.pressure) <= weather_simulation.PRESSURE_DRIFT
    assert reading["temperature"] == (24.0 if high else 16.1)


def test_forecast_length_matches_days():
    current = WeatherRecord(
        location="pune", temperature=25, wind_speed=5, condition="Clear", humidity=40, pressure=1000
    )
    entries = weather_simulation.forecast(current, 14, rng=random.Random(3), today=date(2024, 12, 30))
    assert len(entries) == 14
    assert entries[0]["date"] == "2024-12-31"
    assert entries[-1]["date"] == "2025-01-13"
