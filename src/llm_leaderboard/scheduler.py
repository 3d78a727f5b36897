"""Keep-alive self-ping scheduler.

Free hosting tiers put idle services to sleep; pinging our own public URL on
an interval keeps the process (and its warm cache) alive. Disabled unless
SELF_PING_URL is set. Uses asyncio tasks, no external scheduler dependency.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_MINUTES = 10


class KeepAliveScheduler:
    """Periodically GETs a URL so the hosting platform sees traffic."""

    def __init__(
        self,
        url: Optional[str],
        interval_minutes: int = DEFAULT_INTERVAL_MINUTES,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._url = url
        self._interval_seconds = interval_minutes * 60
        self._transport = transport
        self._task: asyncio.Task | None = None
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    async def start(self):
        """Start the background ping loop."""
        if self._running:
            return
        if not self._url:
            logger.info("SELF_PING_URL not set — keep-alive disabled")
            return
        self._running = True
        self._task = asyncio.create_task(self._run_loop())
        logger.info("Keep-alive started (%s every %d minutes)", self._url, self._interval_seconds // 60)

    async def stop(self):
        """Stop the background ping loop."""
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
            logger.info("Keep-alive stopped")

    async def ping(self) -> bool:
        """Send one ping. Failures are logged, never raised."""
        try:
            async with httpx.AsyncClient(timeout=httpx.Timeout(15.0, connect=10.0), transport=self._transport) as client:
                response = await client.get(self._url)
            logger.info("Self-ping %s -> %d", self._url, response.status_code)
            return response.status_code == 200
        except httpx.HTTPError as exc:
            logger.warning("Self-ping %s failed: %s", self._url, exc)
            return False

    async def _run_loop(self):
        while self._running:
            try:
                await asyncio.sleep(self._interval_seconds)
                if not self._running:
                    break
                await self.ping()
            except asyncio.CancelledError:
                break
