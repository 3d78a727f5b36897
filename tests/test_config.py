"""Tests for environment-driven settings."""
from __future__ import annotations

import os
import unittest
from unittest.mock import patch

from pydantic import ValidationError

from llm_leaderboard.config import DEFAULT_CACHE_TTL_SECONDS, DEFAULT_PORT, Settings
from llm_leaderboard.core.clients.artificial_analysis import API_URL


class TestSettingsFromEnv(unittest.TestCase):
    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings.from_env()
        self.assertEqual(settings.api_key, "")
        self.assertEqual(settings.api_url, API_URL)
        self.assertEqual(settings.cache_ttl_seconds, DEFAULT_CACHE_TTL_SECONDS)
        self.assertEqual(settings.port, DEFAULT_PORT)
        self.assertIsNone(settings.self_ping_url)
        self.assertEqual(settings.transport, "streamable-http")

    def test_overrides_from_env(self):
        env = {
            "AA_API_KEY": "secret",
            "CACHE_TTL_SECONDS": "60",
            "PORT": "8080",
            "SELF_PING_URL": "https://example.test/api/ping",
            "SELF_PING_INTERVAL_MINUTES": "5",
            "LOG_LEVEL": "debug",
            "OVERRIDES_PATH": "/etc/leaderboard/overrides.json",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = Settings.from_env()
        self.assertEqual(settings.api_key, "secret")
        self.assertEqual(settings.cache_ttl_seconds, 60)
        self.assertEqual(settings.port, 8080)
        self.assertEqual(settings.self_ping_url, "https://example.test/api/ping")
        self.assertEqual(settings.self_ping_interval_minutes, 5)
        self.assertEqual(settings.log_level, "DEBUG")
        self.assertEqual(settings.overrides_path, "/etc/leaderboard/overrides.json")

    def test_invalid_ttl_rejected(self):
        with patch.dict(os.environ, {"CACHE_TTL_SECONDS": "soon"}, clear=True):
            with self.assertRaises(ValidationError):
                Settings.from_env()


if __name__ == "__main__":
    unittest.main()
