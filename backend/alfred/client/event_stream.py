"""Server-sent event listener feeding a ``DashboardStore``."""

import asyncio
import json
import logging
from collections.abc import AsyncIterator
from typing import Any

import httpx

from alfred.client.api_client import DEFAULT_BASE_URL
from alfred.client.store import DashboardStore

logger = logging.getLogger(__name__)

STREAM_PATH = "/api/realtime/stream"


async def iter_sse_events(lines: AsyncIterator[str]) -> AsyncIterator[tuple[str, Any]]:
    """Parse ``event:`` / ``data:`` line pairs into ``(topic, payload)`` tuples.

    Comment lines (``:``) are skipped; a blank line terminates an event.
    Events whose data is not valid JSON are dropped.
    """
    topic = "message"
    data_lines: list[str] = []
    async for raw in lines:
        line = raw.rstrip("\r")
        if not line:
            if data_lines:
                try:
                    yield topic, json.loads("\n".join(data_lines))
                except json.JSONDecodeError:
                    logger.warning("Dropping malformed event '%s'", topic)
            topic, data_lines = "message", []
            continue
        if line.startswith(":"):
            continue
        field, _, value = line.partition(":")
        value = value[1:] if value.startswith(" ") else value
        if field == "event":
            topic = value
        elif field == "data":
            data_lines.append(value)


class EventStreamListener:
    """Keeps a store in sync with the realtime stream.

    On a dropped connection the listener waits with exponential backoff and
    reconnects. Events missed while disconnected are not replayed, so the
    store is flagged ``possibly_stale`` and the caller decides whether to
    reload it.
    """

    def __init__(
        self,
        store: DashboardStore,
        base_url: str = DEFAULT_BASE_URL,
        http_client: httpx.AsyncClient | None = None,
        initial_backoff: float = 1.0,
        max_backoff: float = 30.0,
    ):
        self._store = store
        self._base_url = base_url.rstrip("/")
        self._http_client = http_client
        self._initial_backoff = initial_backoff
        self._max_backoff = max_backoff
        self.connections = 0

    async def _get_client(self) -> httpx.AsyncClient:
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=httpx.Timeout(10.0, read=None))

    async def listen_once(self) -> int:
        """Consume one stream connection until it closes. Returns events applied."""
        client = await self._get_client()
        should_close = self._http_client is None
        applied = 0
        try:
            async with client.stream("GET", f"{self._base_url}{STREAM_PATH}") as response:
                response.raise_for_status()
                self.connections += 1
                async for topic, payload in iter_sse_events(response.aiter_lines()):
                    if topic == "connected":
                        continue
                    if self._store.apply_event(topic, payload):
                        applied += 1
        finally:
            if should_close:
                await client.aclose()
        return applied

    async def run(self, max_connections: int | None = None) -> None:
        """Listen forever (or for ``max_connections`` attempts), reconnecting on failure."""
        backoff = self._initial_backoff
        attempts = 0
        while max_connections is None or attempts < max_connections:
            if attempts > 0:
                self._store.mark_disconnected()
            attempts += 1
            try:
                await self.listen_once()
                backoff = self._initial_backoff
                logger.info("Event stream closed by server")
            except httpx.HTTPError as exc:
                logger.warning("Event stream error: %s", exc)
            if max_connections is not None and attempts >= max_connections:
                break
            await asyncio.sleep(backoff)
            backoff = min(backoff * 2, self._max_backoff)
