"""REST loader for the dashboard store.

Fetches each collection with one GET (weather with one POST). A missing,
failed or malformed response yields an empty list so one broken endpoint
never blocks the rest of the dashboard.
"""

import logging
from collections.abc import Sequence
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:3001"
DEFAULT_WEATHER_LOCATIONS = ("mumbai", "delhi", "bangalore")


class DashboardApiClient:
    """Thin httpx wrapper around the Alfred REST API."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ):
        self._base_url = base_url.rstrip("/")
        self._http_client = http_client
        self._timeout = timeout

    @property
    def base_url(self) -> str:
        return self._base_url

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    async def _request_list(
        self, method: str, path: str, **kwargs: Any
    ) -> list[dict[str, Any]]:
        client = await self._get_client()
        should_close = self._http_client is None
        url = f"{self._base_url}{path}"

        try:
            response = await client.request(method, url, **kwargs)
            response.raise_for_status()
            body = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Loading %s failed: %s", path, exc)
            return []
        finally:
            if should_close:
                await client.aclose()

        data = body.get("data") if isinstance(body, dict) else None
        if not isinstance(data, list):
            logger.warning("Loading %s returned no list payload", path)
            return []
        return data

    async def fetch_projects(self, **filters: str) -> list[dict[str, Any]]:
        return await self._request_list("GET", "/api/projects", params=filters or None)

    async def fetch_communications(self, **filters: str) -> list[dict[str, Any]]:
        return await self._request_list("GET", "/api/communications", params=filters or None)

    async def fetch_actions(self, **filters: str) -> list[dict[str, Any]]:
        return await self._request_list("GET", "/api/actions", params=filters or None)

    async def fetch_risks(self, **filters: str) -> list[dict[str, Any]]:
        return await self._request_list("GET", "/api/actions/risks", params=filters or None)

    async def fetch_weather(
        self, locations: Sequence[str] = DEFAULT_WEATHER_LOCATIONS
    ) -> list[dict[str, Any]]:
        return await self._request_list(
            "POST", "/api/weather/multiple", json={"locations": list(locations)}
        )
