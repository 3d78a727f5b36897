"""Tests for the keep-alive self-ping scheduler."""
from __future__ import annotations

import asyncio
import unittest

import httpx

from llm_leaderboard.scheduler import KeepAliveScheduler


class TestKeepAliveScheduler(unittest.TestCase):
    def test_disabled_without_url(self):
        scheduler = KeepAliveScheduler(None)

        async def run():
            await scheduler.start()
            running = scheduler.running
            await scheduler.stop()
            return running

        self.assertFalse(asyncio.run(run()))

    def test_ping_hits_url(self):
        seen = []

        def handler(request):
            seen.append(str(request.url))
            return httpx.Response(200, text="pong")

        scheduler = KeepAliveScheduler("https://example.test/api/ping", transport=httpx.MockTransport(handler))
        self.assertTrue(asyncio.run(scheduler.ping()))
        self.assertEqual(seen, ["https://example.test/api/ping"])

    def test_ping_failure_is_logged_not_raised(self):
        def handler(request):
            raise httpx.ConnectError("down", request=request)

        scheduler = KeepAliveScheduler("https://example.test/api/ping", transport=httpx.MockTransport(handler))
        with self.assertLogs("llm_leaderboard.scheduler", level="WARNING"):
            self.assertFalse(asyncio.run(scheduler.ping()))

    def test_start_and_stop(self):
        scheduler = KeepAliveScheduler("https://example.test/api/ping", interval_minutes=60)

        async def run():
            await scheduler.start()
            await scheduler.start()
            started = scheduler.running
            await scheduler.stop()
            return started

        self.assertTrue(asyncio.run(run()))
        self.assertFalse(scheduler.running)


if __name__ == "__main__":
    unittest.main()
