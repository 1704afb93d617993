"""
Per-client request limiting.

Counters live behind the KeyedCounter interface so a shared store (Redis or
similar) can replace the in-process one without touching the routes.
"""
import logging
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from fastapi import HTTPException, Request, Response, status

from ..config import get_settings
from .security import get_client_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    remaining: int
    reset_at: float  # epoch seconds


class KeyedCounter(ABC):
    """Fixed-window counter keyed by arbitrary strings."""

    @abstractmethod
    def check_and_increment(self, key: str, limit: int, window_seconds: float) -> RateLimitResult:
        """Count one hit for ``key`` unless the window is already full."""
        pass

    @abstractmethod
    def clear(self) -> None:
        pass


class InMemoryKeyedCounter(KeyedCounter):
    """Process-local counter. Stale windows are dropped on each check."""

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._windows: Dict[str, Dict[str, float]] = {}
        self._lock = threading.Lock()

    def _expire(self, now: float, window_seconds: float) -> None:
        window_start = now - window_seconds
        stale = [k for k, w in self._windows.items() if w["reset_at"] < window_start]
        for key in stale:
            del self._windows[key]

    def check_and_increment(self, key: str, limit: int, window_seconds: float) -> RateLimitResult:
        with self._lock:
            now = self._clock()
            self._expire(now, window_seconds)

            current = self._windows.get(key)
            if current is None or current["reset_at"] < now:
                current = {"count": 1, "reset_at": now + window_seconds}
                self._windows[key] = current
                return RateLimitResult(True, limit - 1, current["reset_at"])

            if current["count"] >= limit:
                return RateLimitResult(False, 0, current["reset_at"])

            current["count"] += 1
            return RateLimitResult(True, limit - int(current["count"]), current["reset_at"])

    def clear(self) -> None:
        with self._lock:
            self._windows.clear()


class RateLimiter:
    """Named tiers (parse, scholar, suggestions, ...) over one counter."""

    def __init__(self, counter: Optional[KeyedCounter] = None):
        self.counter = counter or InMemoryKeyedCounter()

    def check(self, tier: str, client_id: str) -> RateLimitResult:
        settings = get_settings()
        result = self.counter.check_and_increment(
            f"{client_id}:{tier}",
            settings.rate_limit_for(tier),
            settings.rate_limit_window_seconds,
        )
        if not result.allowed:
            logger.warning(f"Rate limit exceeded for {client_id} on tier '{tier}'")
        return result

    def reset(self) -> None:
        self.counter.clear()


rate_limiter = RateLimiter()


def get_rate_limiter() -> RateLimiter:
    return rate_limiter


class RateLimit:
    """
    Route dependency enforcing one tier.

    Usage:
        @router.post("/parse-resume", dependencies=[Depends(RateLimit("parse"))])
    """

    def __init__(self, tier: str):
        self.tier = tier

    def __call__(self, request: Request, response: Response) -> RateLimitResult:
        result = get_rate_limiter().check(self.tier, get_client_id(request))
        if not result.allowed:
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail="Too many requests. Please try again later.",
                headers={
                    "X-RateLimit-Remaining": "0",
                    "X-RateLimit-Reset": str(int(result.reset_at)),
                },
            )
        response.headers["X-RateLimit-Remaining"] = str(result.remaining)
        return result
