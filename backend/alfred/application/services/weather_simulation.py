"""Weather simulation and forecast generation from a current reading."""

import math
import random
from datetime import date, timedelta
from typing import Any

from alfred.domain.entities import WEATHER_CONDITIONS, WeatherRecord

TEMPERATURE_DRIFT = 4.0
WIND_DRIFT = 3.0
HUMIDITY_DRIFT = 7.5
PRESSURE_DRIFT = 5.0

TEMPERATURE_RANGE = (-50.0, 60.0)
WIND_RANGE = (0.0, 200.0)
HUMIDITY_RANGE = (0.0, 100.0)
PRESSURE_RANGE = (800.0, 1200.0)

MIN_FORECAST_DAYS = 1
MAX_FORECAST_DAYS = 14
DEFAULT_FORECAST_DAYS = 5


def _drift(value: float, spread: float, bounds: tuple[float, float], rng: random.Random) -> float:
    lo, hi = bounds
    # Bounds snap inward to one decimal so rounding cannot step outside them.
    lo = math.ceil(round(max(lo, value - spread) * 10, 6)) / 10
    hi = math.floor(round(min(hi, value + spread) * 10, 6)) / 10
    return round(min(max(value + rng.uniform(-spread, spread), lo), hi), 1)


def simulate(current: WeatherRecord, rng: random.Random | None = None) -> dict[str, Any]:
    """Return a plausible next reading around ``current``.

    Each value moves by at most its drift and stays inside the store limits;
    the condition is drawn uniformly.
    """
    rng = rng or random.Random()
    return {
        "temperature": _drift(current.temperature, TEMPERATURE_DRIFT, TEMPERATURE_RANGE, rng),
        "wind_speed": _drift(current.wind_speed, WIND_DRIFT, WIND_RANGE, rng),
        "condition": rng.choice(WEATHER_CONDITIONS),
        "humidity": _drift(current.humidity, HUMIDITY_DRIFT, HUMIDITY_RANGE, rng),
        "pressure": _drift(current.pressure, PRESSURE_DRIFT, PRESSURE_RANGE, rng),
    }


def forecast(
    current: WeatherRecord,
    days: int = DEFAULT_FORECAST_DAYS,
    *,
    rng: random.Random | None = None,
    today: date | None = None,
) -> list[dict[str, Any]]:
    """``days`` simulated readings dated tomorrow onwards, all from the same baseline."""
    rng = rng or random.Random()
    start = (today or date.today()) + timedelta(days=1)
    return [
        {"date": (start + timedelta(days=offset)).isoformat(), **simulate(current, rng)}
        for offset in range(days)
    ]
