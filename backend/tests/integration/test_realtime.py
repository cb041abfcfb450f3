"""Realtime transports: WebSocket channel and SSE group management."""

import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect


def test_websocket_greets_joins_and_answers_ping(ws_client):
    hub = ws_client.app.state.hub

    with ws_client.websocket_connect("/ws") as ws:
        greeting = ws.receive_json()
        assert greeting["event"] == "connected"
        session_id = greeting["data"]["sessionId"]
        assert session_id in hub.session_ids

        ws.send_json({"event": "join-project", "data": {"projectId": "site-alpha"}})
        ws.send_json({"event": "join-project", "data": "site-beta"})
        ws.send_json({"event": "ping"})

        pong = ws.receive_json()
        assert pong == {"event": "pong", "data": {"sessionId": session_id}}
        assert hub.groups_of(session_id) == {"project-site-alpha", "project-site-beta"}

        ws.send_json({"event": "leave-project", "data": {"projectId": "site-beta"}})
        ws.send_json({"event": "ping"})
        ws.receive_json()
        assert hub.groups_of(session_id) == {"project-site-alpha"}


def test_websocket_ignores_unknown_messages(ws_client):
    with ws_client.websocket_connect("/ws") as ws:
        ws.receive_json()
        ws.send_json({"event": "dance"})
        ws.send_text("not json")
        ws.send_json({"event": "ping"})
        assert ws.receive_json()["event"] == "pong"


@pytest.mark.asyncio
async def test_session_join_and_leave_endpoints(client, hub):
    session = hub.connect()

    joined = await client.post(
        f"/api/realtime/sessions/{session.id}/join", json={"projectId": "site-alpha"}
    )
    assert joined.status_code == 200
    assert joined.json()["data"] == ["project-site-alpha"]

    left = await client.post(
        f"/api/realtime/sessions/{session.id}/leave", json={"projectId": "site-alpha"}
    )
    assert left.json()["data"] == []


@pytest.mark.asyncio
async def test_join_unknown_session_is_404(client, hub):
    response = await client.post(
        "/api/realtime/sessions/nope/join", json={"projectId": "site-alpha"}
    )
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Session not found"}


@pytest.mark.asyncio
async def test_status_reports_connected_sessions(client, hub):
    first = hub.connect()
    second = hub.connect()

    data = (await client.get("/api/realtime/status")).json()["data"]

    assert data["connectedClients"] == 2
    assert sorted(data["sessionIds"]) == sorted([first.id, second.id])


@pytest.mark.asyncio
async def test_group_broadcast_reaches_only_members(client, hub, drain):
    member = hub.connect()
    outsider = hub.connect()
    await client.post(f"/api/realtime/sessions/{member.id}/join", json={"projectId": "site-alpha"})

    delivered = await hub.broadcast_to_group("project-site-alpha", "project-update", {"id": "site-alpha"})

    assert delivered == 1
    assert [e["event"] for e in drain(member)] == ["project-update"]
    assert drain(outsider) == []


def test_hub_queue_size_follows_app_settings(app_factory):
    hub = app_factory(realtime_queue_size=3).state.hub
    session = hub.connect()

    assert session.queue.maxsize == 3


def test_websocket_is_closed_when_hub_drops_the_session(app_factory):
    app = app_factory(realtime_queue_size=2)
    hub = app.state.hub

    async def flood():
        for progress in range(5):
            await hub.broadcast_all("project-update", {"id": "site-alpha", "progress": progress})

    with TestClient(app).websocket_connect("/ws") as ws:
        session_id = ws.receive_json()["data"]["sessionId"]
        ws.portal.call(flood)

        with pytest.raises(WebSocketDisconnect) as closed:
            while True:
                ws.receive_json()

    assert closed.value.code == 1013
    assert session_id not in hub.session_ids
