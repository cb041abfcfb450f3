"""Unit tests for the client-side DashboardStore reconciliation."""

import pytest

from alfred.client import DashboardStore, FilteredCollection, insight_to_communication


def _project(pid: str, **extra) -> dict:
    return {"id": pid, "name": f"Site {pid}", "progress": 10, "status": "active", **extra}


@pytest.fixture
def store() -> DashboardStore:
    store = DashboardStore()
    store.projects.replace_all([_project("p1"), _project("p2", status="completed")])
    store.actions.replace_all([
        {"id": "a1", "projectId": "site-alpha", "priority": "high", "status": "new"},
    ])
    return store


def test_new_record_prepends_and_respects_filter(store: DashboardStore):
    store.set_filters("projects", status="active")
    assert [p["id"] for p in store.projects.filtered] == ["p1"]

    assert store.apply_event("project-new", _project("p3", status="completed"))
    assert [p["id"] for p in store.projects.items] == ["p3", "p1", "p2"]
    assert [p["id"] for p in store.projects.filtered] == ["p1"]

    store.apply_event("project-new", _project("p4"))
    assert [p["id"] for p in store.projects.filtered] == ["p4", "p1"]


def test_update_moves_record_in_and_out_of_filtered_view(store: DashboardStore):
    store.set_filters("actions", status="new")

    store.apply_event("action-update", {"id": "a1", "projectId": "site-alpha", "status": "resolved"})
    assert store.actions.filtered == []
    assert store.actions.get("a1")["status"] == "resolved"

    store.apply_event("action-update", {"id": "a1", "projectId": "site-alpha", "status": "new"})
    assert [a["id"] for a in store.actions.filtered] == ["a1"]


def test_reduced_progress_payload_is_merged(store: DashboardStore):
    assert store.apply_event(
        "project-update", {"id": "p1", "progress": 77, "updatedAt": "2024-01-01T00:00:00Z"}
    )
    merged = store.projects.get("p1")
    assert merged["progress"] == 77
    assert merged["name"] == "Site p1"


def test_reduced_payload_for_unknown_project_is_ignored(store: DashboardStore):
    assert not store.apply_event("project-update", {"id": "site-alpha", "progress": 80})
    assert store.projects.get("site-alpha") is None


def test_delete_removes_from_both_lists(store: DashboardStore):
    store.apply_event("project-deleted", {"id": "p1"})
    assert store.projects.get("p1") is None
    assert all(p["id"] != "p1" for p in store.projects.filtered)


def test_weather_events_set_and_drop_location(store: DashboardStore):
    store.apply_event("weather-update", {"location": "delhi", "data": {"temperature": 33}})
    assert store.weather["delhi"] == {"temperature": 33, "location": "delhi"}

    store.apply_event("weather-deleted", {"location": "delhi"})
    assert "delhi" not in store.weather


def test_synthetic_insight_becomes_ai_communication(store: DashboardStore):
    store.apply_event(
        "ai-insight",
        {"id": "i1", "type": "safety", "message": "Hydrate", "priority": "high", "timestamp": "t"},
    )
    item = store.communications.items[0]
    assert item["title"] == "AI Insight: safety"
    assert item["content"] == "Hydrate"
    assert item["projectId"] == "site-alpha"
    assert item["tags"] == ["ai", "insight", "safety"]
    assert item["isAI"] is True


def test_full_insight_record_is_kept_as_is():
    record = {"id": "c9", "content": "x", "source": "ai", "title": "AI Insight: y"}
    assert insight_to_communication(record) is record


def test_untracked_topics_are_ignored(store: DashboardStore):
    assert not store.apply_event("weather-test", {"message": "hi"})
    assert not store.apply_event("connected", {"sessionId": "s"})
    assert not store.apply_event("project-new", "not a dict")
    assert len(store.notifications) == 0


def test_notifications_are_bounded():
    store = DashboardStore(max_notifications=3)
    for i in range(5):
        store.apply_event("risk-new", {"id": f"r{i}"})
    assert len(store.notifications) == 3


def test_dotted_filters_and_clear():
    collection = FilteredCollection()
    collection.replace_all([
        {"id": "1", "location": {"city": "Pune"}},
        {"id": "2", "location": {"city": "Delhi"}},
    ])
    collection.set_filters(**{"location.city": "Delhi"})
    assert [r["id"] for r in collection.filtered] == ["2"]

    collection.set_filters(**{"location.city": None})
    assert len(collection.filtered) == 2
    collection.set_filters(id="1")
    collection.clear_filters()
    assert len(collection.filtered) == 2


def test_unknown_collection_name_raises(store: DashboardStore):
    with pytest.raises(ValueError):
        store.set_filters("widgets", status="x")


def test_mark_disconnected_flags_stale(store: DashboardStore):
    store.mark_disconnected()
    assert store.possibly_stale
    assert store.notifications[-1]["title"] == "Socket Disconnected"
