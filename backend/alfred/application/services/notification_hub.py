"""Notification hub — in-process broadcaster for realtime dashboard events."""

import asyncio
import json
import logging
from collections.abc import AsyncGenerator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from uuid import uuid4

from alfred.domain.events import EventTopic
from alfred.infrastructure.logging.colored_logger import BroadcastLogger

logger = logging.getLogger(__name__)
_trace = BroadcastLogger("NotificationHub")

DEFAULT_QUEUE_SIZE = 256

Event = dict[str, Any]


def _topic_name(topic: str | Enum) -> str:
    return topic.value if isinstance(topic, Enum) else str(topic)


def format_sse(event: Event) -> str:
    """Render a queued event as one Server-Sent Events frame."""
    return f"event: {event['event']}\ndata: {json.dumps(event['data'])}\n\n"


@dataclass
class ClientSession:
    """One connected transport (WebSocket or SSE stream)."""

    id: str
    queue: asyncio.Queue[Event | None]
    groups: set[str] = field(default_factory=set)

    def close(self) -> None:
        """Wake the consumer with the end-of-stream sentinel, discarding backlog if full."""
        while True:
            try:
                self.queue.put_nowait(None)
                return
            except asyncio.QueueFull:
                self.queue.get_nowait()


class NotificationHub:
    """Tracks connected sessions and pushes events to them.

    Each session gets its own bounded asyncio.Queue. Delivery is
    fire-and-forget: nothing is stored, retried or acknowledged, and a
    session whose queue is full is dropped. Groups are plain names
    (``project-<id>``) a session can join and leave any number of times.
    """

    def __init__(self, queue_size: int = DEFAULT_QUEUE_SIZE) -> None:
        self._queue_size = queue_size
        self._sessions: dict[str, ClientSession] = {}

    # ── Connection bookkeeping ──────────────────────────────────────

    def connect(self) -> ClientSession:
        """Register a new session and queue its ``connected`` greeting."""
        session = ClientSession(id=uuid4().hex, queue=asyncio.Queue(maxsize=self._queue_size))
        self._sessions[session.id] = session
        session.queue.put_nowait(
            {"event": EventTopic.CONNECTED.value, "data": {"sessionId": session.id}}
        )
        _trace.session("connected", session.id, clients=self.client_count)
        return session

    def disconnect(self, session_id: str) -> None:
        """Forget a session together with all of its group memberships."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            return
        session.groups.clear()
        session.close()
        _trace.session("disconnected", session_id, clients=self.client_count)

    def join(self, session_id: str, group: str) -> bool:
        """Add the session to ``group``. Returns False for an unknown session."""
        session = self._sessions.get(session_id)
        if session is None:
            return False
        session.groups.add(group)
        _trace.session("joined", session_id, group=group)
        return True

    def leave(self, session_id: str, group: str) -> bool:
        """Remove the session from ``group``. Returns False for an unknown session."""
        session = self._sessions.get(session_id)
        if session is None:
            return False
        session.groups.discard(group)
        _trace.session("left", session_id, group=group)
        return True

    def get(self, session_id: str) -> ClientSession | None:
        return self._sessions.get(session_id)

    def groups_of(self, session_id: str) -> set[str]:
        session = self._sessions.get(session_id)
        return set(session.groups) if session else set()

    # ── Delivery ────────────────────────────────────────────────────

    async def broadcast_all(self, topic: str | Enum, payload: Any) -> int:
        """Push an event to every connected session. Returns the recipient count."""
        return self._deliver(list(self._sessions.values()), topic, payload, target="all")

    async def broadcast_to_group(self, group: str, topic: str | Enum, payload: Any) -> int:
        """Push an event only to sessions that joined ``group``."""
        members = [s for s in self._sessions.values() if group in s.groups]
        return self._deliver(members, topic, payload, target=group)

    def _deliver(
        self,
        sessions: list[ClientSession],
        topic: str | Enum,
        payload: Any,
        *,
        target: str,
    ) -> int:
        name = _topic_name(topic)
        event: Event = {"event": name, "data": payload}
        delivered = 0
        dead: list[ClientSession] = []

        for session in sessions:
            try:
                session.queue.put_nowait(event)
                delivered += 1
            except asyncio.QueueFull:
                dead.append(session)

        for session in dead:
            _trace.dropped(session.id, "queue full")
            self.disconnect(session.id)

        _trace.emitted(name, recipients=delivered, target=target)
        return delivered

    async def subscribe(self, session: ClientSession) -> AsyncGenerator[Event, None]:
        """Yield queued events for ``session`` until it is closed.

        The generator disconnects the session when the consumer goes away.
        """
        try:
            while True:
                event = await session.queue.get()
                if event is None:
                    break
                yield event
        finally:
            self.disconnect(session.id)

    async def shutdown(self) -> None:
        """Disconnect all connected sessions."""
        for session_id in list(self._sessions):
            self.disconnect(session_id)
        logger.info("NotificationHub shut down")

    @property
    def client_count(self) -> int:
        return len(self._sessions)

    @property
    def session_ids(self) -> list[str]:
        return list(self._sessions)
