"""API tests for /api/weather."""

from datetime import date, timedelta

import pytest

READING = {
    "temperature": 31.5,
    "windSpeed": 12,
    "condition": "Clear",
    "humidity": 55,
    "pressure": 1008,
}


@pytest.mark.asyncio
async def test_upsert_normalises_location_and_broadcasts(client, hub, drain):
    session = hub.connect()

    response = await client.post("/api/weather/location/Mumbai", json=READING)

    assert response.status_code == 200
    assert response.json()["data"]["location"] == "mumbai"
    events = drain(session)
    assert [e["event"] for e in events] == ["weather-update"]
    assert events[0]["data"]["location"] == "mumbai"
    assert events[0]["data"]["data"]["temperature"] == 31.5

    again = await client.post("/api/weather/location/MUMBAI", json={**READING, "temperature": 20})
    assert again.json()["data"]["id"] == response.json()["data"]["id"]


@pytest.mark.asyncio
async def test_out_of_range_reading_is_400(client):
    response = await client.post("/api/weather/location/delhi", json={**READING, "humidity": 140})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_forecast_unknown_location_is_404(client):
    response = await client.get("/api/weather/forecast/atlantis")

    assert response.status_code == 404
    assert "data" not in response.json()


@pytest.mark.asyncio
async def test_forecast_days_and_dates(client):
    await client.post("/api/weather/location/delhi", json=READING)

    response = await client.get("/api/weather/forecast/delhi", params={"days": 3})

    entries = response.json()["data"]
    assert len(entries) == 3
    tomorrow = date.today() + timedelta(days=1)
    assert [e["date"] for e in entries] == [
        (tomorrow + timedelta(days=i)).isoformat() for i in range(3)
    ]
    for entry in entries:
        assert -50 <= entry["temperature"] <= 60
        assert 0 <= entry["humidity"] <= 100


@pytest.mark.asyncio
async def test_forecast_days_out_of_range_is_400(client):
    await client.post("/api/weather/location/delhi", json=READING)
    response = await client.get("/api/weather/forecast/delhi", params={"days": 30})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_simulate_persists_and_broadcasts(client, hub, drain):
    await client.post("/api/weather/location/bangalore", json=READING)
    session = hub.connect()

    response = await client.post("/api/weather/simulate/bangalore")

    assert response.status_code == 200
    simulated = response.json()["data"]
    assert abs(simulated["temperature"] - READING["temperature"]) <= 4
    assert [e["event"] for e in drain(session)] == ["weather-update"]
    stored = (await client.get("/api/weather/location/bangalore")).json()["data"]
    assert stored["temperature"] == simulated["temperature"]


@pytest.mark.asyncio
async def test_delete_then_get_is_404(client, hub, drain):
    await client.post("/api/weather/location/delhi", json=READING)
    session = hub.connect()

    response = await client.delete("/api/weather/location/Delhi")

    assert response.status_code == 200
    assert drain(session) == [{"event": "weather-deleted", "data": {"location": "delhi"}}]
    assert (await client.get("/api/weather/location/delhi")).status_code == 404


@pytest.mark.asyncio
async def test_multiple_and_statistics(client):
    await client.post("/api/weather/location/delhi", json=READING)
    await client.post("/api/weather/location/mumbai", json={**READING, "temperature": 21.5})

    many = (await client.post("/api/weather/multiple", json={"locations": ["Delhi", "Mumbai", "Nowhere"]})).json()
    assert sorted(r["location"] for r in many["data"]) == ["delhi", "mumbai"]

    stats = (await client.get("/api/weather/stats/overview")).json()["data"]
    assert stats["totalLocations"] == 2
    assert stats["averageTemperature"] == 26.5

    extremes = (await client.get("/api/weather/stats/extreme")).json()["data"]
    assert extremes["hottest"]["location"] == "delhi"
    assert extremes["coldest"]["location"] == "mumbai"
