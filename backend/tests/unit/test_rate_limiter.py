"""Unit tests for the sliding-window rate limiter."""

from alfred.infrastructure.rate_limiter import SlidingWindowRateLimiter


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def test_min_interval_rejects_fast_repeat():
    clock = FakeClock()
    limiter = SlidingWindowRateLimiter(clock=clock)
    key = limiter.key_for("10.0.0.1", "/api/projects")

    assert limiter.hit(key).allowed
    clock.advance(0.05)
    decision = limiter.hit(key)
    assert not decision.allowed
    assert decision.retry_after == 1
    clock.advance(0.06)
    assert limiter.hit(key).allowed


def test_quota_per_window():
    clock = FakeClock()
    limiter = SlidingWindowRateLimiter(max_requests=3, window_seconds=60, clock=clock)
    key = "ip:/api/health"

    for _ in range(3):
        assert limiter.hit(key).allowed
        clock.advance(1)
    rejected = limiter.hit(key)
    assert not rejected.allowed
    assert "try again later" in rejected.reason
    assert rejected.retry_after == 57

    clock.advance(57)
    assert limiter.hit(key).allowed


def test_keys_are_independent():
    clock = FakeClock()
    limiter = SlidingWindowRateLimiter(clock=clock)
    assert limiter.hit(limiter.key_for("a", "/api/x")).allowed
    assert limiter.hit(limiter.key_for("a", "/api/y")).allowed
    assert limiter.hit(limiter.key_for("b", "/api/x")).allowed


def test_rejected_requests_are_not_counted():
    clock = FakeClock()
    limiter = SlidingWindowRateLimiter(max_requests=2, window_seconds=60, clock=clock)
    key = "ip:/api/x"
    limiter.hit(key)
    clock.advance(1)
    limiter.hit(key)
    for _ in range(5):
        clock.advance(1)
        assert not limiter.hit(key).allowed
    clock.advance(55)
    assert limiter.hit(key).allowed


def test_expired_keys_are_swept_once_per_window():
    clock = FakeClock()
    limiter = SlidingWindowRateLimiter(window_seconds=10, clock=clock)
    limiter.hit("old:/api/x")
    assert len(limiter) == 1

    clock.advance(11)
    limiter.hit("new:/api/x")

    assert len(limiter) == 1
    limiter.reset()
    assert len(limiter) == 0
