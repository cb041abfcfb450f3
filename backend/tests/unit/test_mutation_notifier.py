"""Unit tests for the commit-then-notify bridge."""

import pytest

from alfred.application.services import MutationNotifier, NotificationHub
from alfred.domain.events import EventTopic


class FakeSession:
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.commits = 0

    async def commit(self):
        if self.error is not None:
            raise self.error
        self.commits += 1


def _events(session) -> list[dict]:
    events = []
    while not session.queue.empty():
        event = session.queue.get_nowait()
        if event is not None and event["event"] != "connected":
            events.append(event)
    return events


@pytest.mark.asyncio
async def test_publish_commits_then_broadcasts():
    hub = NotificationHub()
    listener = hub.connect()
    db = FakeSession()

    await MutationNotifier(db, hub).publish(EventTopic.PROJECT_NEW, {"id": "site-alpha"})

    assert db.commits == 1
    assert _events(listener) == [{"event": "project-new", "data": {"id": "site-alpha"}}]


@pytest.mark.asyncio
async def test_failed_commit_propagates_and_broadcasts_nothing():
    hub = NotificationHub()
    listener = hub.connect()
    notifier = MutationNotifier(FakeSession(RuntimeError("commit failed")), hub)

    with pytest.raises(RuntimeError, match="commit failed"):
        await notifier.publish("project-new", {"id": "site-alpha"})

    assert _events(listener) == []
