"""
Cocktail API — Rate Limiter Unit Tests
========================================

What:  Tests for the fixed window RateLimiter and its helpers.
How:   Drives check()/sweep() with explicit `now` values, so no test sleeps.

What we test:
    ✅ Requests up to the ceiling are allowed, the next one is denied
    ✅ Denied decisions carry a positive retry_after
    ✅ A new window starts once the old one has ended
    ✅ Keys are counted independently
    ✅ sweep() drops only expired windows
    ✅ Header values (limit, remaining floor of 0, ISO reset time)
    ✅ build_rate_limiters() follows the settings
"""

import asyncio

import pytest

from cocktail_api.config import Settings
from cocktail_api.middleware.rate_limit import (
    LIMITER_MESSAGES,
    RateLimitDecision,
    RateLimiter,
    build_rate_limiters,
    sweep_periodically,
)

T0 = 1_700_000_000.0


class TestRateLimiterCheck:
    """Tests for counting requests within a window."""

    def setup_method(self):
        self.limiter = RateLimiter(name="test", max_requests=3, window_seconds=60)

    def test_allows_up_to_max_requests(self):
        decisions = [self.limiter.check("1.2.3.4", now=T0 + i) for i in range(3)]
        assert all(d.allowed for d in decisions)
        assert [d.remaining for d in decisions] == [2, 1, 0]

    def test_denies_request_over_the_ceiling(self):
        for i in range(3):
            self.limiter.check("1.2.3.4", now=T0 + i)

        decision = self.limiter.check("1.2.3.4", now=T0 + 10)

        assert decision.allowed is False
        assert decision.remaining == 0
        assert decision.retry_after == 50

    def test_retry_after_is_at_least_one_second(self):
        for _ in range(4):
            decision = self.limiter.check("k", now=T0)
        late = self.limiter.check("k", now=T0 + 59.9)

        assert decision.retry_after == 60
        assert late.retry_after == 1

    def test_new_window_after_reset(self):
        for i in range(5):
            self.limiter.check("k", now=T0 + i)

        decision = self.limiter.check("k", now=T0 + 60)

        assert decision.allowed is True
        assert decision.remaining == 2
        assert decision.reset_at == T0 + 120

    def test_keys_are_independent(self):
        for _ in range(4):
            self.limiter.check("a", now=T0)

        assert self.limiter.check("a", now=T0).allowed is False
        assert self.limiter.check("b", now=T0).allowed is True

    def test_reset_at_is_fixed_for_the_window(self):
        first = self.limiter.check("k", now=T0)
        second = self.limiter.check("k", now=T0 + 30)
        assert first.reset_at == second.reset_at == T0 + 60

    def test_rejects_invalid_configuration(self):
        with pytest.raises(ValueError):
            RateLimiter(name="bad", max_requests=0, window_seconds=60)
        with pytest.raises(ValueError):
            RateLimiter(name="bad", max_requests=1, window_seconds=0)


class TestRateLimiterSweep:
    """Tests for purging expired windows."""

    def test_sweep_removes_only_expired_entries(self):
        limiter = RateLimiter(name="test", max_requests=5, window_seconds=60)
        limiter.check("old", now=T0)
        limiter.check("new", now=T0 + 30)

        removed = limiter.sweep(now=T0 + 60)

        assert removed == 1
        assert "old" not in limiter
        assert "new" in limiter
        assert len(limiter) == 1

    def test_sweep_on_empty_limiter(self):
        limiter = RateLimiter(name="test", max_requests=5, window_seconds=60)
        assert limiter.sweep(now=T0) == 0

    def test_reset_clears_all_entries(self):
        limiter = RateLimiter(name="test", max_requests=5, window_seconds=60)
        limiter.check("a", now=T0)
        limiter.check("b", now=T0)
        limiter.reset()
        assert len(limiter) == 0

    @pytest.mark.asyncio
    async def test_sweep_periodically_runs_until_cancelled(self):
        limiter = RateLimiter(name="test", max_requests=5, window_seconds=0.01)
        limiter.check("k")

        task = asyncio.create_task(sweep_periodically([limiter], interval=0.02))
        await asyncio.sleep(0.1)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert len(limiter) == 0


class TestRateLimitHeaders:
    """Tests for the X-RateLimit-* header values."""

    def test_headers_format(self):
        decision = RateLimitDecision(allowed=True, limit=100, remaining=99, reset_at=T0)
        headers = decision.headers()

        assert headers["X-RateLimit-Limit"] == "100"
        assert headers["X-RateLimit-Remaining"] == "99"
        assert headers["X-RateLimit-Reset"] == "2023-11-14T22:13:20.000Z"

    def test_remaining_never_negative(self):
        limiter = RateLimiter(name="test", max_requests=1, window_seconds=60)
        for _ in range(5):
            decision = limiter.check("k", now=T0)
        assert decision.headers()["X-RateLimit-Remaining"] == "0"


class TestBuildRateLimiters:
    """Tests for building the limiter set from settings."""

    def test_default_policies(self):
        limiters = build_rate_limiters(Settings())

        assert set(limiters) == {"search", "api", "write", "auth"}
        assert limiters["search"].max_requests == 100
        assert limiters["api"].max_requests == 50
        assert limiters["write"].max_requests == 10
        assert limiters["auth"].max_requests == 5
        assert all(limiter.window_seconds == 900 for limiter in limiters.values())

    def test_messages_per_limiter(self):
        limiters = build_rate_limiters(Settings())
        for name, limiter in limiters.items():
            assert limiter.message == LIMITER_MESSAGES[name]

    def test_overrides_from_settings(self):
        limiters = build_rate_limiters(Settings(write_rate_limit_requests=2, write_rate_limit_window=30))
        assert limiters["write"].max_requests == 2
        assert limiters["write"].window_seconds == 30
