"""Runtime settings read from the environment (and a local .env file)."""

from __future__ import annotations

import os
from typing import Optional

from pydantic import BaseModel, Field

from .core.clients.artificial_analysis import API_URL, DEFAULT_TIMEOUT_SECONDS

DEFAULT_CACHE_TTL_SECONDS = 600
DEFAULT_PORT = 3000
DEFAULT_SELF_PING_INTERVAL_MINUTES = 10


class Settings(BaseModel):
    """Server configuration. Every field maps to one environment variable."""

    api_key: str = Field("", description="AA_API_KEY")
    api_url: str = Field(API_URL, description="AA_API_URL")
    cache_ttl_seconds: int = Field(DEFAULT_CACHE_TTL_SECONDS, ge=0, description="CACHE_TTL_SECONDS")
    upstream_timeout_seconds: float = Field(DEFAULT_TIMEOUT_SECONDS, gt=0, description="UPSTREAM_TIMEOUT_SECONDS")
    overrides_path: str = Field("overrides.json", description="OVERRIDES_PATH")
    host: str = Field("0.0.0.0", description="HOST")
    port: int = Field(DEFAULT_PORT, description="PORT")
    transport: str = Field("streamable-http", description="MCP_TRANSPORT: streamable-http, sse, or stdio")
    self_ping_url: Optional[str] = Field(None, description="SELF_PING_URL")
    self_ping_interval_minutes: int = Field(DEFAULT_SELF_PING_INTERVAL_MINUTES, gt=0, description="SELF_PING_INTERVAL_MINUTES")
    log_level: str = Field("INFO", description="LOG_LEVEL")

    @classmethod
    def from_env(cls) -> "Settings":
        env = os.environ
        return cls(
            api_key=env.get("AA_API_KEY", ""),
            api_url=env.get("AA_API_URL", API_URL),
            cache_ttl_seconds=env.get("CACHE_TTL_SECONDS", str(DEFAULT_CACHE_TTL_SECONDS)),
            upstream_timeout_seconds=env.get("UPSTREAM_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS)),
            overrides_path=env.get("OVERRIDES_PATH", "overrides.json"),
            host=env.get("HOST", "0.0.0.0"),
            port=env.get("PORT", str(DEFAULT_PORT)),
            transport=env.get("MCP_TRANSPORT", "streamable-http"),
            self_ping_url=env.get("SELF_PING_URL") or None,
            self_ping_interval_minutes=env.get("SELF_PING_INTERVAL_MINUTES", str(DEFAULT_SELF_PING_INTERVAL_MINUTES)),
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )
