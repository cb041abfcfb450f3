"""Client-side reconciliation store.

Holds a cached copy of the dashboard collections and folds pushed events
into it. Each collection keeps its raw list plus a filtered view that is
maintained incrementally: new records are prepended, updates are
re-checked against the active filter, deletes drop the record from both.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from alfred.client.api_client import DashboardApiClient

logger = logging.getLogger(__name__)

Record = dict[str, Any]

MAX_NOTIFICATIONS = 50
DEMO_PROJECT_ID = "site-alpha"
_REDUCED_PROJECT_KEYS = frozenset({"id", "progress", "updatedAt"})


def _lookup(record: Record, path: str) -> Any:
    """Read a possibly dotted key (``location.city``) from a record."""
    value: Any = record
    for part in path.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


@dataclass
class FilteredCollection:
    """A raw list of records and the view of it the active filters accept."""

    items: list[Record] = field(default_factory=list)
    filters: dict[str, Any] = field(default_factory=dict)
    filtered: list[Record] = field(default_factory=list)

    def accepts(self, record: Record) -> bool:
        return all(_lookup(record, key) == value for key, value in self.filters.items())

    def replace_all(self, records: list[Record]) -> None:
        self.items = list(records)
        self._refilter()

    def set_filters(self, **filters: Any) -> None:
        """Merge filters; a ``None`` value removes that filter."""
        for key, value in filters.items():
            if value is None:
                self.filters.pop(key, None)
            else:
                self.filters[key] = value
        self._refilter()

    def clear_filters(self) -> None:
        self.filters = {}
        self._refilter()

    def get(self, record_id: str) -> Record | None:
        return next((r for r in self.items if r.get("id") == record_id), None)

    def add(self, record: Record) -> None:
        self.items.insert(0, record)
        if self.accepts(record):
            self.filtered.insert(0, record)

    def upsert(self, record: Record, *, merge: bool = False) -> Record | None:
        """Replace (or merge into) the record with the same id.

        Unknown ids are added as new records unless ``merge`` is set, in
        which case a partial payload has nothing to merge into and is ignored.
        """
        index = self._index(self.items, record.get("id"))
        if index is None:
            if merge:
                return None
            self.add(record)
            return record

        updated = {**self.items[index], **record} if merge else record
        self.items[index] = updated

        view_index = self._index(self.filtered, updated.get("id"))
        if self.accepts(updated):
            if view_index is None:
                self.filtered.insert(0, updated)
            else:
                self.filtered[view_index] = updated
        elif view_index is not None:
            del self.filtered[view_index]
        return updated

    def remove(self, record_id: str) -> bool:
        before = len(self.items)
        self.items = [r for r in self.items if r.get("id") != record_id]
        self.filtered = [r for r in self.filtered if r.get("id") != record_id]
        return len(self.items) != before

    def _refilter(self) -> None:
        self.filtered = [r for r in self.items if self.accepts(r)]

    @staticmethod
    def _index(records: list[Record], record_id: Any) -> int | None:
        for i, r in enumerate(records):
            if r.get("id") == record_id:
                return i
        return None


def insight_to_communication(payload: Record) -> Record:
    """Turn a bare ``{id, type, message, priority, timestamp}`` insight into a feed item."""
    if "content" in payload and "source" in payload:
        return payload
    insight_type = payload.get("type", "insight")
    return {
        "id": payload.get("id") or str(uuid4()),
        "type": "insight",
        "title": f"AI Insight: {insight_type}",
        "content": payload.get("message", ""),
        "priority": payload.get("priority", "high"),
        "source": "ai",
        "projectId": payload.get("projectId", DEMO_PROJECT_ID),
        "tags": ["ai", "insight", insight_type],
        "postedAt": payload.get("timestamp") or datetime.now(timezone.utc).isoformat(),
        "isAI": True,
    }


class DashboardStore:
    """Cached dashboard state driven by REST loads and pushed events."""

    def __init__(self, max_notifications: int = MAX_NOTIFICATIONS) -> None:
        self.projects = FilteredCollection()
        self.communications = FilteredCollection()
        self.actions = FilteredCollection()
        self.risks = FilteredCollection()
        self.weather: dict[str, Record] = {}
        self.notifications: deque[Record] = deque(maxlen=max_notifications)
        self.possibly_stale = False

    def collection(self, name: str) -> FilteredCollection:
        collections = {
            "projects": self.projects,
            "communications": self.communications,
            "actions": self.actions,
            "risks": self.risks,
        }
        try:
            return collections[name]
        except KeyError:
            raise ValueError(f"Unknown collection: {name}") from None

    # ── Loading ─────────────────────────────────────────────────────

    async def load(self, client: DashboardApiClient) -> None:
        """Replace every collection with a fresh REST snapshot."""
        self.projects.replace_all(await client.fetch_projects())
        self.communications.replace_all(await client.fetch_communications())
        self.actions.replace_all(await client.fetch_actions())
        self.risks.replace_all(await client.fetch_risks())
        self.weather = {
            record["location"]: record
            for record in await client.fetch_weather()
            if isinstance(record, dict) and record.get("location")
        }
        self.possibly_stale = False

    # ── Filters ─────────────────────────────────────────────────────

    def set_filters(self, name: str, **filters: Any) -> None:
        self.collection(name).set_filters(**filters)

    def clear_filters(self, name: str) -> None:
        self.collection(name).clear_filters()

    # ── Event folding ───────────────────────────────────────────────

    def apply_event(self, topic: str, payload: Any) -> bool:
        """Fold one pushed event into the store. Returns False for untracked topics."""
        if not isinstance(payload, dict):
            return False

        if topic == "ai-insight":
            self.communications.add(insight_to_communication(payload))
            self._notify("info", "AI Insight", "New AI insight generated")
            return True

        if topic in ("weather-update", "weather-deleted"):
            return self._apply_weather(topic, payload)

        family, _, action = topic.rpartition("-")
        target = {
            "project": self.projects,
            "communication": self.communications,
            "action": self.actions,
            "risk": self.risks,
        }.get(family)
        if target is None or action not in ("new", "update", "deleted"):
            return False

        if action == "new":
            target.add(payload)
            self._notify("info", f"New {family}", f"New {family} received")
        elif action == "update":
            merge = family == "project" and set(payload) <= _REDUCED_PROJECT_KEYS
            updated = target.upsert(payload, merge=merge)
            if updated is None:
                logger.debug("Ignoring partial %s for unknown id %s", topic, payload.get("id"))
                return False
            if merge:
                self._notify(
                    "info", "Progress Update", f"Project progress updated to {payload.get('progress')}%"
                )
            else:
                self._notify("info", f"{family.title()} updated", f"A {family} was updated")
        else:
            target.remove(str(payload.get("id")))
            self._notify("warning", f"{family.title()} removed", f"A {family} was deleted")
        return True

    def _apply_weather(self, topic: str, payload: Record) -> bool:
        location = payload.get("location")
        if not location:
            return False
        if topic == "weather-update":
            self.weather[location] = {**payload.get("data", {}), "location": location}
            self._notify("info", "Weather Update", f"Weather data updated for {location}")
        else:
            self.weather.pop(location, None)
            self._notify("warning", "Weather removed", f"Weather data removed for {location}")
        return True

    def mark_disconnected(self) -> None:
        """Events may have been missed; the caller decides whether to ``load()`` again."""
        self.possibly_stale = True
        self._notify("warning", "Socket Disconnected", "Disconnected from real-time updates")

    def _notify(self, kind: str, title: str, message: str) -> None:
        self.notifications.append(
            {
                "id": uuid4().hex,
                "type": kind,
                "title": title,
                "message": message,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            }
        )
