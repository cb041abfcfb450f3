"""Unit tests for the SyntheticBroadcaster."""

import asyncio
import random

import pytest

from alfred.application.services import NotificationHub, SyntheticBroadcaster


def _events(session) -> list[dict]:
    events = []
    while not session.queue.empty():
        event = session.queue.get_nowait()
        if event and event["event"] != "connected":
            events.append(event)
    return events


@pytest.mark.asyncio
async def test_tick_emits_one_event_of_each_kind():
    hub = NotificationHub()
    session = hub.connect()
    broadcaster = SyntheticBroadcaster(hub, rng=random.Random(0))

    await broadcaster.tick()

    events = _events(session)
    assert [e["event"] for e in events] == [
        "communication-new",
        "weather-update",
        "project-update",
        "ai-insight",
    ]
    weather = events[1]["data"]
    assert weather["location"] in ("mumbai", "delhi", "bangalore")
    assert 15 <= weather["data"]["temperature"] <= 45
    progress = events[2]["data"]
    assert progress["id"] == "site-alpha"
    assert 70 <= progress["progress"] <= 90
    insight = events[3]["data"]
    assert set(insight) == {"id", "type", "message", "priority", "timestamp"}
    assert insight["priority"] == "high"

    await broadcaster.tick()
    again = _events(session)[3]["data"]
    assert again["message"] == insight["message"]
    assert again["id"] != insight["id"]


@pytest.mark.asyncio
async def test_loop_runs_on_interval_and_stops():
    hub = NotificationHub()
    session = hub.connect()
    broadcaster = SyntheticBroadcaster(hub, interval_seconds=0.01)

    await broadcaster.start()
    assert broadcaster.running
    await asyncio.sleep(0.05)
    await broadcaster.stop()

    assert not broadcaster.running
    assert len(_events(session)) >= 4


@pytest.mark.asyncio
async def test_failing_tick_does_not_stop_loop(monkeypatch):
    hub = NotificationHub()
    broadcaster = SyntheticBroadcaster(hub, interval_seconds=0.01)
    calls = 0

    async def flaky_tick():
        nonlocal calls
        calls += 1
        if calls == 1:
            raise RuntimeError("boom")

    monkeypatch.setattr(broadcaster, "tick", flaky_tick)
    await broadcaster.start()
    await asyncio.sleep(0.05)
    await broadcaster.stop()

    assert calls >= 2
