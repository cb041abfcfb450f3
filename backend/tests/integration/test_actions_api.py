"""API tests for /api/actions, including risk assessments."""

import pytest

ACTION = {
    "title": "Confirm inverter pad dimensions",
    "description": "RFI to the EPC contractor",
    "dueDate": "2024-03-01T00:00:00Z",
    "projectId": "site-alpha",
    "type": "rfi",
    "priority": "high",
}

RISK = {
    "projectId": "site-alpha",
    "riskType": "weather",
    "description": "Monsoon may delay module delivery",
    "mitigation": "Pre-stage modules in covered storage",
    "impact": "high",
    "probability": "medium",
}


@pytest.mark.asyncio
async def test_create_action_broadcasts_action_new(client, hub, drain):
    session = hub.connect()

    response = await client.post("/api/actions", json=ACTION)

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["status"] == "new"
    assert [e["event"] for e in drain(session)] == ["action-new"]


@pytest.mark.asyncio
async def test_bogus_status_is_500_and_record_unchanged(client, hub, drain):
    created = (await client.post("/api/actions", json=ACTION)).json()["data"]
    session = hub.connect()

    response = await client.patch(f"/api/actions/{created['id']}/status", json={"status": "bogus"})

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert "status" in body["error"].lower()
    assert drain(session) == []
    fetched = await client.get(f"/api/actions/{created['id']}")
    assert fetched.json()["data"]["status"] == "new"


@pytest.mark.asyncio
async def test_valid_status_change_emits_action_update(client, hub, drain):
    created = (await client.post("/api/actions", json=ACTION)).json()["data"]
    session = hub.connect()

    response = await client.patch(
        f"/api/actions/{created['id']}/status", json={"status": "in-progress"}
    )

    assert response.status_code == 200
    events = drain(session)
    assert [e["event"] for e in events] == ["action-update"]
    assert events[0]["data"]["status"] == "in-progress"


@pytest.mark.asyncio
async def test_overdue_lists_only_unresolved_past_due(client):
    await client.post("/api/actions", json=ACTION)
    await client.post("/api/actions", json={**ACTION, "title": "Done", "status": "resolved"})
    await client.post("/api/actions", json={**ACTION, "title": "Later", "dueDate": "2999-01-01"})

    response = await client.get("/api/actions/overdue")

    titles = [a["title"] for a in response.json()["data"]]
    assert titles == [ACTION["title"]]


@pytest.mark.asyncio
async def test_risks_alias_and_high_filter(client, hub, drain):
    session = hub.connect()
    await client.post("/api/actions/risks", json=RISK)
    await client.post("/api/actions/risks", json={**RISK, "impact": "low", "riskType": "supply"})
    assert [e["event"] for e in drain(session)] == ["risk-new", "risk-new"]

    everything = (await client.get("/api/actions/risks/all")).json()["data"]
    high = (await client.get("/api/actions/risks/high")).json()["data"]
    low = (await client.get("/api/actions/risks", params={"impact": "low"})).json()["data"]

    assert len(everything) == 2
    assert [r["riskType"] for r in high] == ["weather"]
    assert [r["riskType"] for r in low] == ["supply"]


@pytest.mark.asyncio
async def test_delete_risk_emits_deleted_then_404(client, hub, drain):
    risk = (await client.post("/api/actions/risks", json=RISK)).json()["data"]
    session = hub.connect()

    response = await client.delete(f"/api/actions/risks/{risk['id']}")

    assert response.status_code == 200
    assert drain(session) == [{"event": "risk-deleted", "data": {"id": risk["id"]}}]
    assert (await client.get(f"/api/actions/risks/{risk['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_statistics(client):
    await client.post("/api/actions", json=ACTION)
    await client.post("/api/actions", json={**ACTION, "status": "resolved"})
    await client.post("/api/actions/risks", json=RISK)

    stats = (await client.get("/api/actions/stats/overview")).json()["data"]

    assert stats["actions"]["totalActions"] == 2
    assert stats["actions"]["resolvedActions"] == 1
    assert stats["risks"]["openRisks"] == 1
    assert stats["risks"]["highImpactRisks"] == 1
