"""Unit tests for the NotificationHub and SSE framing."""

import asyncio
import json

import pytest

from alfred.application.services import NotificationHub, format_sse
from alfred.domain.events import EventTopic, project_group


def _pending(session) -> list[dict]:
    events = []
    while not session.queue.empty():
        events.append(session.queue.get_nowait())
    return events


@pytest.mark.asyncio
async def test_connect_queues_greeting():
    hub = NotificationHub()
    session = hub.connect()

    assert _pending(session) == [{"event": "connected", "data": {"sessionId": session.id}}]
    assert hub.client_count == 1


@pytest.mark.asyncio
async def test_broadcast_all_reaches_every_session():
    hub = NotificationHub()
    first, second = hub.connect(), hub.connect()

    delivered = await hub.broadcast_all(EventTopic.PROJECT_NEW, {"id": "p1"})

    assert delivered == 2
    for session in (first, second):
        assert _pending(session)[-1] == {"event": "project-new", "data": {"id": "p1"}}


@pytest.mark.asyncio
async def test_broadcast_without_sessions_is_a_noop():
    assert await NotificationHub().broadcast_all("weather-test", {}) == 0


@pytest.mark.asyncio
async def test_join_is_idempotent_and_leave_unknown_group_is_harmless():
    hub = NotificationHub()
    session = hub.connect()
    group = project_group("site-alpha")

    assert hub.join(session.id, group)
    assert hub.join(session.id, group)
    assert hub.groups_of(session.id) == {"project-site-alpha"}
    assert hub.leave(session.id, "project-other")
    assert hub.groups_of(session.id) == {"project-site-alpha"}
    assert not hub.join("unknown", group)


@pytest.mark.asyncio
async def test_disconnect_removes_group_memberships():
    hub = NotificationHub()
    session = hub.connect()
    hub.join(session.id, "project-a")

    hub.disconnect(session.id)

    assert hub.client_count == 0
    assert hub.groups_of(session.id) == set()
    assert await hub.broadcast_to_group("project-a", "project-update", {}) == 0
    hub.disconnect(session.id)


@pytest.mark.asyncio
async def test_full_queue_drops_the_session():
    hub = NotificationHub(queue_size=2)
    slow = hub.connect()
    fast = hub.connect()

    await hub.broadcast_all("weather-test", {"n": 1})
    _pending(fast)
    delivered = await hub.broadcast_all("weather-test", {"n": 2})

    assert delivered == 1
    assert hub.get(slow.id) is None
    assert hub.client_count == 1


@pytest.mark.asyncio
async def test_subscribe_yields_until_disconnect():
    hub = NotificationHub()
    session = hub.connect()
    received = []

    async def consume():
        async for event in hub.subscribe(session):
            received.append(event["event"])

    consumer = asyncio.create_task(consume())
    await hub.broadcast_all("communication-new", {"id": "c1"})
    await asyncio.sleep(0)
    hub.disconnect(session.id)
    await asyncio.wait_for(consumer, timeout=1)

    assert received == ["connected", "communication-new"]


@pytest.mark.asyncio
async def test_shutdown_closes_all_sessions():
    hub = NotificationHub()
    sessions = [hub.connect() for _ in range(3)]

    await hub.shutdown()

    assert hub.client_count == 0
    for session in sessions:
        assert _pending(session)[-1] is None


def test_format_sse_frame():
    frame = format_sse({"event": "project-deleted", "data": {"id": "p1"}})
    assert frame == f"event: project-deleted\ndata: {json.dumps({'id': 'p1'})}\n\n"
