"""LLM Leaderboard MCP Server.

FastMCP server with one leaderboard tool plus plain HTTP routes for browsers:
GET /api/llms (cached leaderboard JSON) and GET /api/ping (liveness).
Run: llm-leaderboard-mcp
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from dotenv import load_dotenv
from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse, Response

from .cache import LeaderboardCache
from .config import Settings
from .core.errors import ConfigError, LeaderboardError
from .core.models import LeaderboardResult, NormalizedModelRecord
from .core.overrides import OverrideStore
from .core.query import filter_records, rescore, sort_records
from .pipeline import run_refresh
from .scheduler import KeepAliveScheduler

logger = logging.getLogger(__name__)

READ_ONLY = ToolAnnotations(readOnlyHint=True, destructiveHint=False, idempotentHint=True, openWorldHint=True)

mcp = FastMCP(
    "LLM Leaderboard",
    instructions="Ask your AI which language model leads: benchmark scores, pricing, and speed from Artificial Analysis, normalized into one ranked leaderboard.",
)

_settings: Optional[Settings] = None
_overrides: Optional[OverrideStore] = None
_cache: Optional[LeaderboardCache] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def get_overrides() -> OverrideStore:
    """Override store, loaded from OVERRIDES_PATH on first use (no hot reload)."""
    global _overrides
    if _overrides is None:
        _overrides = OverrideStore.load(get_settings().overrides_path)
    return _overrides


async def _load_leaderboard() -> LeaderboardResult:
    settings = get_settings()
    if not settings.api_key:
        logger.warning("AA_API_KEY missing — cannot refresh leaderboard")
        raise ConfigError("API Key missing on server")
    return await run_refresh(
        settings.api_key,
        get_overrides(),
        api_url=settings.api_url,
        timeout=settings.upstream_timeout_seconds,
    )


def get_cache() -> LeaderboardCache:
    global _cache
    if _cache is None:
        _cache = LeaderboardCache(_load_leaderboard, ttl_seconds=get_settings().cache_ttl_seconds)
    return _cache


def _leaderboard_summary(records: list[NormalizedModelRecord], total: int) -> str:
    if not records:
        return "No models match."
    top = [f"{r.display_name or r.id}: {r.sum_score:.1f}" for r in records[:3]]
    return f"Showing {len(records)} of {total} models. Top: " + " | ".join(top)


# ─── HTTP routes ─────────────────────────────────────────────────────────────


@mcp.custom_route("/api/llms", methods=["GET"])
async def api_llms(request: Request) -> Response:
    """Cached leaderboard. ``?refresh=true`` bypasses the cache."""
    refresh = request.query_params.get("refresh") == "true"
    try:
        result = await get_cache().get(force_refresh=refresh)
    except LeaderboardError as exc:
        logger.error("Leaderboard refresh failed (%d): %s", exc.status_code, exc.message)
        return JSONResponse(exc.to_payload(), status_code=exc.status_code)
    except Exception as exc:
        logger.exception("Unhandled error serving /api/llms")
        return JSONResponse({"error": "Internal server error", "details": str(exc)}, status_code=500)
    return JSONResponse(result.model_dump(mode="json"))


@mcp.custom_route("/api/ping", methods=["GET"])
async def api_ping(request: Request) -> Response:
    return PlainTextResponse("pong")


# ─── Tool: Leaderboard ───────────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
async def llm_leaderboard(
    refresh: bool = False,
    search: str = "",
    metrics: Optional[list[str]] = None,
    sort_by: str = "sum_score",
    descending: bool = True,
    limit: int = 25,
) -> dict:
    """Ranked language-model leaderboard: benchmark sum score, pricing, speed, release date.

    Args:
        refresh: Bypass the cache and fetch fresh data. Default False.
        search: Filter by model display name or creator (case-insensitive).
        metrics: Benchmarks to sum into the score, e.g. ['gpqa', 'hle', 'lcr'].
                 Default: all tracked benchmarks.
        sort_by: 'sum_score', a benchmark name, 'release_date', 'price_blend',
                 'price_input', 'price_output', or 'median_output_tokens_per_second'.
        descending: Sort direction. Models without a value always sort last.
        limit: Maximum number of models returned. Default 25.
    """
    result = await get_cache().get(force_refresh=refresh)

    records = result.data
    if metrics:
        records = rescore(records, metrics)
    records = filter_records(records, search)
    records = sort_records(records, sort_by, descending)
    matched = len(records)
    records = records[:max(0, limit)]

    return {
        "title": "LLM Leaderboard",
        "fetched_at": result.fetched_at.isoformat(),
        "count": len(records),
        "matched": matched,
        "models": [r.model_dump(mode="json") for r in records],
        "summary": _leaderboard_summary(records, result.count),
    }


async def _serve(settings: Settings):
    keepalive = KeepAliveScheduler(settings.self_ping_url, settings.self_ping_interval_minutes)
    await keepalive.start()
    try:
        if settings.transport == "stdio":
            await mcp.run_stdio_async()
        elif settings.transport == "sse":
            await mcp.run_sse_async()
        elif settings.transport == "streamable-http":
            await mcp.run_streamable_http_async()
        else:
            raise ValueError(f"Unknown MCP_TRANSPORT: {settings.transport}")
    finally:
        await keepalive.stop()


def main():
    """Entry point for the CLI command."""
    load_dotenv()
    settings = get_settings()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    get_overrides()
    mcp.settings.host = settings.host
    mcp.settings.port = settings.port
    logger.info("Serving on http://%s:%d (transport: %s)", settings.host, settings.port, settings.transport)
    asyncio.run(_serve(settings))


if __name__ == "__main__":
    main()
