"""API tests for /api/communications."""

import pytest

MESSAGE = {
    "type": "permit",
    "title": "Grid interconnection permit approved",
    "content": "The DISCOM approved the interconnection application.",
    "source": "authority",
    "projectId": "site-alpha",
    "tags": ["permit", "grid"],
}


@pytest.mark.asyncio
async def test_create_defaults_and_broadcasts(client, hub, drain):
    session = hub.connect()

    response = await client.post("/api/communications", json=MESSAGE)

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["priority"] == "normal"
    assert data["isAI"] is False
    assert data["postedAt"]
    events = drain(session)
    assert [e["event"] for e in events] == ["communication-new"]
    assert events[0]["data"]["isAI"] is False


@pytest.mark.asyncio
async def test_search_matches_title_content_and_tags(client):
    await client.post("/api/communications", json=MESSAGE)
    await client.post(
        "/api/communications",
        json={**MESSAGE, "title": "Crew rotation", "content": "Night shift", "tags": ["staffing"]},
    )

    by_tag = (await client.get("/api/communications/search", params={"q": "GRID"})).json()["data"]
    by_content = (await client.get("/api/communications/search", params={"q": "night"})).json()["data"]

    assert [c["title"] for c in by_tag] == [MESSAGE["title"]]
    assert [c["title"] for c in by_content] == ["Crew rotation"]


@pytest.mark.asyncio
async def test_ai_insight_is_stored_and_broadcast(client, hub, drain):
    session = hub.connect()

    response = await client.post(
        "/api/communications/ai-insight",
        json={"projectId": "site-alpha", "insightType": "schedule-risk", "content": "Slipping"},
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["isAI"] is True
    assert data["source"] == "ai"
    events = drain(session)
    assert [e["event"] for e in events] == ["ai-insight"]

    insights = (await client.get("/api/communications/ai-insights")).json()["data"]
    assert [i["id"] for i in insights] == [data["id"]]


@pytest.mark.asyncio
async def test_list_cache_headers_and_project_filter(client):
    await client.post("/api/communications", json=MESSAGE)
    await client.post("/api/communications", json={**MESSAGE, "projectId": "site-beta"})

    response = await client.get("/api/communications", params={"projectId": "site-beta"})

    assert "max-age=30" in response.headers["Cache-Control"]
    assert [c["projectId"] for c in response.json()["data"]] == ["site-beta"]


@pytest.mark.asyncio
async def test_test_socket_emits_without_persisting(client, hub, drain):
    session = hub.connect()

    response = await client.post("/api/communications/test-socket")

    assert response.status_code == 200
    assert [e["event"] for e in drain(session)] == ["communication-new", "ai-insight"]
    assert (await client.get("/api/communications")).json()["data"] == []
