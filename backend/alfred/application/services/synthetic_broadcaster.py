"""Synthetic broadcaster — asyncio task that keeps the live feed moving.

Every tick fabricates one event of each kind the dashboard renders
(a status-update communication, a weather reading, a progress bump for
the demo site and an AI insight) and hands them to the notification hub.
Nothing is persisted.
"""

import asyncio
import logging
import random
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from alfred.application.services.notification_hub import NotificationHub
from alfred.domain.events import EventTopic

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 120.0
DEMO_PROJECT_ID = "site-alpha"

SYNTHETIC_LOCATIONS = ("mumbai", "delhi", "bangalore")
SYNTHETIC_CONDITIONS = ("Clear", "Partly Cloudy", "Cloudy", "Rain")

_INSIGHT_TYPE = "schedule"
_INSIGHT_MESSAGE = "Panel installation is trending two days ahead of the baseline plan."


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class SyntheticBroadcaster:
    """Emits fabricated events at a fixed interval.

    Runs as an asyncio.Task inside FastAPI's lifespan. A failing tick is
    logged and the loop carries on with the next one.
    """

    def __init__(
        self,
        hub: NotificationHub,
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
        rng: random.Random | None = None,
    ) -> None:
        self._hub = hub
        self._interval = interval_seconds
        self._rng = rng or random.Random()
        self._running = False
        self._task: asyncio.Task | None = None

    async def start(self) -> None:
        """Start the broadcast loop."""
        self._running = True
        self._task = asyncio.create_task(self._loop())
        logger.info("SyntheticBroadcaster started (every %ss)", self._interval)

    async def stop(self) -> None:
        """Cancel the broadcast loop; called by the lifespan on shutdown."""
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        logger.info("SyntheticBroadcaster stopped")

    @property
    def running(self) -> bool:
        return self._running and self._task is not None and not self._task.done()

    async def _loop(self) -> None:
        while self._running:
            await asyncio.sleep(self._interval)
            try:
                await self.tick()
            except asyncio.CancelledError:
                break
            except Exception:
                logger.exception("SyntheticBroadcaster tick failed")

    async def tick(self) -> None:
        """Emit one synthetic event of each kind."""
        await self._hub.broadcast_all(EventTopic.COMMUNICATION_NEW, self.communication())
        await self._hub.broadcast_all(EventTopic.WEATHER_UPDATE, self.weather())
        await self._hub.broadcast_all(EventTopic.PROJECT_UPDATE, self.project_progress())
        await self._hub.broadcast_all(EventTopic.AI_INSIGHT, self.insight())

    # ── Payload factories ───────────────────────────────────────────

    def communication(self) -> dict[str, Any]:
        now = _now()
        return {
            "id": str(uuid4()),
            "type": "status-update",
            "title": "Automated Status Update",
            "content": "Routine system check completed. All monitored sites are reporting.",
            "priority": "normal",
            "source": "system",
            "projectId": DEMO_PROJECT_ID,
            "tags": ["automated", "system"],
            "postedAt": now,
            "isAI": False,
            "createdAt": now,
            "updatedAt": now,
        }

    def weather(self) -> dict[str, Any]:
        rng = self._rng
        return {
            "location": rng.choice(SYNTHETIC_LOCATIONS),
            "data": {
                "temperature": round(rng.uniform(15, 45), 1),
                "windSpeed": round(rng.uniform(5, 25), 1),
                "condition": rng.choice(SYNTHETIC_CONDITIONS),
                "humidity": round(rng.uniform(30, 70), 1),
                "pressure": round(rng.uniform(1000, 1030), 1),
                "updatedAt": _now(),
            },
        }

    def project_progress(self) -> dict[str, Any]:
        return {
            "id": DEMO_PROJECT_ID,
            "progress": self._rng.randint(70, 90),
            "updatedAt": _now(),
        }

    def insight(self) -> dict[str, Any]:
        return {
            "id": str(uuid4()),
            "type": _INSIGHT_TYPE,
            "message": _INSIGHT_MESSAGE,
            "priority": "high",
            "timestamp": _now(),
        }
