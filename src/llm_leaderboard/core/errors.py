"""Error taxonomy for the leaderboard pipeline.

Each error carries the HTTP status the server answers with, so the HTTP
boundary can translate without knowing where the failure happened.
"""

from __future__ import annotations

from typing import Any, Optional


class LeaderboardError(Exception):
    """Base class for every failure the pipeline reports to callers."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_payload(self) -> dict:
        return {"error": self.message}


class ConfigError(LeaderboardError):
    """A required setting (the upstream API key) is missing."""

    status_code = 500


class UpstreamError(LeaderboardError):
    """The upstream API answered with a non-200 status or an unreadable body."""

    def __init__(self, message: str, status_code: int = 502, body: Optional[Any] = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    def to_payload(self) -> dict:
        return {"error": self.message, "body": self.body}


class InternalError(LeaderboardError):
    """Unexpected failure while normalizing upstream records."""

    status_code = 500

    def __init__(self, message: str, details: str = ""):
        super().__init__(message)
        self.details = details

    def to_payload(self) -> dict:
        return {"error": self.message, "details": self.details}
