from __future__ import annotations
import math, time
from typing import Callable
from fastapi import Request
import structlog
from app.errors import RateLimitExceeded

log = structlog.get_logger()


class FixedWindowLimiter:
    """
    In-process request counter per client key. A key's window opens on its
    first hit and resets `window_seconds` later. State is lost on restart.
    """

    def __init__(self, limit: int, window_seconds: int, clock: Callable[[], float] = time.monotonic):
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._hits: dict[str, tuple[float, int]] = {}

    def hit(self, key: str) -> None:
        """Count one request for `key`; raise RateLimitExceeded past the limit."""
        now = self._clock()
        if len(self._hits) > 10_000:
            self.prune()
        started, count = self._hits.get(key, (now, 0))
        if now - started >= self.window_seconds:
            started, count = now, 0
        count += 1
        self._hits[key] = (started, count)
        if count > self.limit:
            retry_after = math.ceil(self.window_seconds - (now - started))
            raise RateLimitExceeded(retry_after=max(retry_after, 1), limit=self.limit)

    def prune(self) -> None:
        now = self._clock()
        self._hits = {k: v for k, v in self._hits.items() if now - v[0] < self.window_seconds}


def client_key(request: Request) -> str:
    return request.client.host if request.client else "unknown"


async def limit_submissions(request: Request) -> None:
    """Route dependency: count the request against the caller's address."""
    limiter: FixedWindowLimiter = request.app.state.submit_limiter
    key = client_key(request)
    try:
        limiter.hit(key)
    except RateLimitExceeded:
        log.warning("rate_limited", client=key, path=request.url.path)
        raise
