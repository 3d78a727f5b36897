"""Artificial Analysis API client.

API docs: https://artificialanalysis.ai/documentation
Authenticated with an ``x-api-key`` header. One request returns every model.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from ..errors import ConfigError, UpstreamError

logger = logging.getLogger(__name__)

API_URL = "https://artificialanalysis.ai/api/v2/data/llms/models"
DEFAULT_TIMEOUT_SECONDS = 30.0


async def fetch_models(
    api_key: Optional[str],
    api_url: str = API_URL,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> list[dict]:
    """Fetch the raw model list.

    Args:
        api_key: Artificial Analysis API key. Required.
        api_url: Endpoint returning ``{"data": [...]}``.
        timeout: Total request timeout in seconds (connect is capped at 10s).
        transport: Optional httpx transport, used by tests.

    Returns:
        The upstream ``data`` list, unmodified.

    Raises:
        ConfigError: if ``api_key`` is empty.
        UpstreamError: on a non-200 status, a non-JSON body, or a transport failure.
    """
    if not api_key:
        raise ConfigError("API Key missing on server")

    headers = {"Accept": "application/json", "x-api-key": api_key}

    logger.info("Fetching data from %s...", api_url)
    try:
        async with httpx.AsyncClient(timeout=httpx.Timeout(timeout, connect=min(10.0, timeout)), transport=transport) as client:
            response = await client.get(api_url, headers=headers)
    except httpx.TimeoutException as exc:
        raise UpstreamError(f"Upstream request timed out: {exc}", status_code=504) from exc
    except httpx.HTTPError as exc:
        raise UpstreamError(f"Upstream request failed: {exc}", status_code=502) from exc

    try:
        body = response.json()
    except ValueError:
        raise UpstreamError("Invalid JSON from upstream", status_code=502, body=response.text)

    if response.status_code != 200:
        message = body.get("error") if isinstance(body, dict) and body.get("error") else "Upstream error"
        status_code = response.status_code if response.status_code >= 400 else 502
        raise UpstreamError(str(message), status_code=status_code, body=body)

    data = body.get("data") if isinstance(body, dict) else None
    if not isinstance(data, list):
        data = []
    logger.info("Fetched %d models.", len(data))
    return data
