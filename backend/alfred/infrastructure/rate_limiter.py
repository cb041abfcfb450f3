"""In-memory sliding-window rate limiter keyed by client and path."""

import math
import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    retry_after: int = 0
    reason: str = ""


class SlidingWindowRateLimiter:
    """Allows ``max_requests`` per ``window_seconds`` and per key.

    Two requests on the same key closer than ``min_interval_ms`` are
    rejected even when quota remains. Rejected requests are not counted.
    Keys with no hits inside the window are swept once per window.
    """

    def __init__(
        self,
        max_requests: int = 100,
        window_seconds: float = 900,
        min_interval_ms: int = 100,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.min_interval = min_interval_ms / 1000
        self._clock = clock
        self._hits: dict[str, deque[float]] = {}
        self._last_sweep = clock()

    @staticmethod
    def key_for(client_ip: str, path: str) -> str:
        return f"{client_ip}:{path}"

    def hit(self, key: str) -> RateLimitDecision:
        """Record a request on ``key`` if it is allowed."""
        now = self._clock()
        self._maybe_sweep(now)

        hits = self._hits.setdefault(key, deque())
        cutoff = now - self.window_seconds
        while hits and hits[0] <= cutoff:
            hits.popleft()

        if hits and now - hits[-1] < self.min_interval:
            return RateLimitDecision(
                allowed=False,
                retry_after=max(1, math.ceil(self.min_interval - (now - hits[-1]))),
                reason="Too many requests, please slow down.",
            )
        if len(hits) >= self.max_requests:
            return RateLimitDecision(
                allowed=False,
                retry_after=max(1, math.ceil(hits[0] + self.window_seconds - now)),
                reason="Too many requests from this IP, please try again later.",
            )

        hits.append(now)
        return RateLimitDecision(allowed=True)

    def _maybe_sweep(self, now: float) -> None:
        if now - self._last_sweep < self.window_seconds:
            return
        cutoff = now - self.window_seconds
        for key in [k for k, hits in self._hits.items() if not hits or hits[-1] <= cutoff]:
            del self._hits[key]
        self._last_sweep = now

    def reset(self) -> None:
        self._hits.clear()

    def __len__(self) -> int:
        return len(self._hits)
