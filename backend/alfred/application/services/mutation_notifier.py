"""Commit-then-notify bridge between write handlers and the notification hub."""

from enum import Enum
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from alfred.application.services.notification_hub import NotificationHub


class MutationNotifier:
    """Emits exactly one event per successful write.

    ``publish`` commits the request's unit of work first; if the commit
    raises, the exception propagates and nothing is broadcast.
    """

    def __init__(self, session: AsyncSession, hub: NotificationHub) -> None:
        self._session = session
        self._hub = hub

    async def publish(self, topic: str | Enum, payload: Any) -> None:
        await self._session.commit()
        await self._hub.broadcast_all(topic, payload)
