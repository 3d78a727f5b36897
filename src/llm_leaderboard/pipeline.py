"""Fetch-and-build pipeline.

One refresh = one upstream call, every record normalized and scored, the
list ranked by aggregate score and wrapped in a LeaderboardResult. Nothing
is retried; callers (the cache, ultimately a user) decide when to try again.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional, Sequence

import httpx

from .core.clients import artificial_analysis
from .core.errors import InternalError
from .core.models import LeaderboardResult
from .core.overrides import OverrideStore
from .core.scoring import METRICS, build_leaderboard

logger = logging.getLogger(__name__)


async def run_refresh(
    api_key: Optional[str],
    overrides: Optional[OverrideStore] = None,
    api_url: str = artificial_analysis.API_URL,
    timeout: float = artificial_analysis.DEFAULT_TIMEOUT_SECONDS,
    metrics: Sequence[str] = METRICS,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> LeaderboardResult:
    """Fetch the upstream model list and build a ranked leaderboard.

    Raises:
        ConfigError: the API key is missing.
        UpstreamError: the upstream call failed.
        InternalError: normalization failed unexpectedly.
    """
    raw_records = await artificial_analysis.fetch_models(api_key, api_url, timeout, transport=transport)

    try:
        data = build_leaderboard(raw_records, overrides, metrics)
    except Exception as exc:
        logger.error("Failed to normalize %d upstream records: %s", len(raw_records), exc, exc_info=True)
        raise InternalError("Internal server error", details=str(exc)) from exc

    result = LeaderboardResult(
        status=200,
        fetched_at=datetime.now(timezone.utc),
        data=data,
    )
    logger.info("Leaderboard rebuilt: %d models", result.count)
    return result
