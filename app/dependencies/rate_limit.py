"""In-memory sliding-window rate limiter for registration and verification endpoints.

Buckets are keyed by client IP and request path and live in process memory,
so limits are per worker.
"""
import time
from collections import defaultdict, deque
from typing import Deque, Dict, Optional

from fastapi import HTTPException, Request, status
from app.core.config import settings
from app.utils.helpers import get_client_ip


class SlidingWindowLimiter:
    def __init__(self, limit: int, window_seconds: float):
        self.limit = limit
        self.window_seconds = window_seconds
        self._hits: Dict[str, Deque[float]] = defaultdict(deque)

    def allow(self, key: str, now: Optional[float] = None) -> bool:
        """Record a hit for ``key`` and report whether it fits in the window."""
        now = time.monotonic() if now is None else now
        hits = self._hits[key]
        while hits and hits[0] <= now - self.window_seconds:
            hits.popleft()
        if len(hits) >= self.limit:
            return False
        hits.append(now)
        return True

    def reset(self) -> None:
        self._hits.clear()


limiter = SlidingWindowLimiter(settings.RATE_LIMIT_REQUESTS, settings.RATE_LIMIT_PERIOD_SECONDS)


async def rate_limit(request: Request):
    if not settings.RATE_LIMIT_ENABLED:
        return True

    if not limiter.allow(f"{get_client_ip(request)}:{request.url.path}"):
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many requests. Please slow down.",
        )
    return True
