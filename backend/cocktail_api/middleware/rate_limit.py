"""
Cocktail API — Rate Limiting
==============================

What:  Per-key fixed window rate limiters, used as per-route guards.
Why:   Protects the API from abuse; write and auth endpoints get stricter
       ceilings than search.
How:   Each RateLimiter keeps one RateLimitEntry per key (client IP by default).
       The route guard built by `rate_limit(name)` counts the request, puts the
       X-RateLimit-* headers on the response and raises RateLimitExceededError
       once the ceiling is crossed.
When:  First guard of every rate-limited route.

Algorithm: Fixed Window Counter
    1. First request for a key (or first after the window expired):
       count = 1, reset_at = now + window
    2. Otherwise: count += 1
    3. allowed = count <= max_requests
    4. Denied: retry_after = ceil(reset_at - now)

    Headers go out on allowed and denied responses alike:
        X-RateLimit-Limit, X-RateLimit-Remaining, X-RateLimit-Reset

Memory:
    sweep() drops entries whose window has ended. `sweep_periodically` runs it
    for every limiter on a fixed cadence from the app lifespan, so the table
    only holds keys that are active in their current window.

Concurrency:
    Single-process asyncio. check() and sweep() never await, so an update on an
    entry cannot interleave with another request or with the sweep. The guard is
    `async def` so FastAPI runs it on the event loop, not in its threadpool.
"""

import asyncio
import logging
import math
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, Optional

from fastapi import Request, Response

from cocktail_api.config import Settings
from cocktail_api.exceptions import RateLimitExceededError

logger = logging.getLogger(__name__)

KeyFunc = Callable[[Request], str]

DEFAULT_MESSAGE = "Too many requests, please try again later"

LIMITER_MESSAGES = {
    "search": "Too many search requests. Please wait before searching again.",
    "api": "Too many API requests. Please wait before making more requests.",
    "write": "Too many write operations. Please wait before creating/updating more resources.",
    "auth": "Too many authentication attempts. Please wait before trying again.",
}


def client_address(request: Request) -> str:
    """Default key: the caller's network address."""
    # request.client is None under some ASGI test transports
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


@dataclass
class RateLimitEntry:
    key: str
    count: int
    window_reset_at: float


@dataclass(frozen=True)
class RateLimitDecision:
    """Outcome of counting one request against a limiter."""

    allowed: bool
    limit: int
    remaining: int
    reset_at: float
    retry_after: Optional[int] = None

    def headers(self) -> Dict[str, str]:
        reset = datetime.fromtimestamp(self.reset_at, tz=timezone.utc)
        return {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": reset.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        }


class RateLimiter:
    """
    In-memory fixed window rate limiter.

    Args:
        name:            Label used in logs (search, api, write, auth)
        max_requests:    Ceiling per window
        window_seconds:  Window length
        message:         Text returned to rate-limited clients
        key_func:        Maps a request to its bucket key (default: client IP)
    """

    def __init__(
        self,
        name: str,
        max_requests: int,
        window_seconds: float,
        message: str = DEFAULT_MESSAGE,
        key_func: Optional[KeyFunc] = None,
    ):
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self.name = name
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.message = message
        self.key_func = key_func or client_address
        self._entries: Dict[str, RateLimitEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def check(self, key: str, now: Optional[float] = None) -> RateLimitDecision:
        """Count one request for `key` and decide whether it may proceed."""
        if now is None:
            now = time.time()

        entry = self._entries.get(key)
        if entry is None or now >= entry.window_reset_at:
            entry = RateLimitEntry(key=key, count=1, window_reset_at=now + self.window_seconds)
            self._entries[key] = entry
        else:
            entry.count += 1

        allowed = entry.count <= self.max_requests
        retry_after = None
        if not allowed:
            retry_after = max(1, math.ceil(entry.window_reset_at - now))

        return RateLimitDecision(
            allowed=allowed,
            limit=self.max_requests,
            remaining=max(0, self.max_requests - entry.count),
            reset_at=entry.window_reset_at,
            retry_after=retry_after,
        )

    def hit(self, request: Request, now: Optional[float] = None) -> RateLimitDecision:
        return self.check(self.key_func(request), now=now)

    def sweep(self, now: Optional[float] = None) -> int:
        """Remove every entry whose window has ended. Returns how many were removed."""
        if now is None:
            now = time.time()
        expired = [key for key, entry in self._entries.items() if entry.window_reset_at <= now]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug("Rate limiter '%s': swept %d expired entries", self.name, len(expired))
        return len(expired)

    def reset(self) -> None:
        self._entries.clear()


def build_rate_limiters(settings: Settings) -> Dict[str, RateLimiter]:
    """One independent limiter per policy in the settings."""
    return {
        name: RateLimiter(
            name=name,
            max_requests=policy["max_requests"],
            window_seconds=policy["window_seconds"],
            message=LIMITER_MESSAGES.get(name, DEFAULT_MESSAGE),
        )
        for name, policy in settings.rate_limit_policies().items()
    }


async def sweep_periodically(limiters: Iterable[RateLimiter], interval: float) -> None:
    """
    Purge expired windows from every limiter until cancelled.

    Started as a background task in the app lifespan.
    """
    limiters = list(limiters)
    while True:
        await asyncio.sleep(interval)
        for limiter in limiters:
            limiter.sweep()


def rate_limit(name: str):
    """
    Build a route guard that counts the request against limiter `name`.

    The limiter is looked up on `request.app.state.rate_limiters`, so every app
    instance has its own independent counters.

    Usage:
        @router.get("/drinks", dependencies=[Depends(rate_limit("search"))])
    """

    async def guard(request: Request, response: Response) -> RateLimitDecision:
        limiter: RateLimiter = request.app.state.rate_limiters[name]
        decision = limiter.hit(request)

        headers = decision.headers()
        # Error handlers copy these onto responses for requests refused later in the chain
        request.state.rate_limit_headers = headers
        for header, value in headers.items():
            response.headers[header] = value

        if not decision.allowed:
            logger.warning(
                "Rate limit '%s' exceeded for %s: %d requests per %ss",
                name,
                limiter.key_func(request),
                limiter.max_requests,
                limiter.window_seconds,
            )
            raise RateLimitExceededError(
                retry_after=decision.retry_after or 1,
                message=limiter.message,
            )
        return decision

    return guard
