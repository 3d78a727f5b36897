"""In-memory leaderboard cache.

Holds the last LeaderboardResult and the clock reading it was stored at.
Concurrent misses share one in-flight refresh, so a burst of requests on a
stale cache costs a single upstream call.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional

from .core.models import LeaderboardResult

logger = logging.getLogger(__name__)

Loader = Callable[[], Awaitable[LeaderboardResult]]


def _consume_exception(task: asyncio.Task) -> None:
    # Waiters may all be cancelled before a failed refresh finishes.
    if not task.cancelled():
        task.exception()


class LeaderboardCache:
    """Single-slot TTL cache in front of the refresh pipeline."""

    def __init__(
        self,
        loader: Loader,
        ttl_seconds: float = 600,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._loader = loader
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._result: Optional[LeaderboardResult] = None
        self._stored_at: float = 0.0
        self._inflight: Optional[asyncio.Task] = None

    @property
    def result(self) -> Optional[LeaderboardResult]:
        return self._result

    def is_fresh(self, ttl_seconds: Optional[float] = None) -> bool:
        """True when a result is cached and younger than the TTL."""
        if self._result is None:
            return False
        ttl = self._ttl_seconds if ttl_seconds is None else ttl_seconds
        return (self._clock() - self._stored_at) < ttl

    async def get(self, force_refresh: bool = False, ttl_seconds: Optional[float] = None) -> LeaderboardResult:
        """Return the cached result, refreshing it when stale, empty, or forced.

        A failed refresh propagates its error and leaves the previous result
        in place.
        """
        if not force_refresh and self.is_fresh(ttl_seconds):
            return self._result

        if self._inflight is None:
            self._inflight = asyncio.create_task(self._refresh())
            self._inflight.add_done_callback(_consume_exception)
        else:
            logger.debug("Joining in-flight leaderboard refresh")
        return await asyncio.shield(self._inflight)

    def invalidate(self) -> None:
        """Drop the cached result; the next get() refreshes."""
        self._result = None
        self._stored_at = 0.0

    async def _refresh(self) -> LeaderboardResult:
        try:
            result = await self._loader()
            self._result = result
            self._stored_at = self._clock()
            return result
        finally:
            self._inflight = None
