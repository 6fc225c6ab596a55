"""httpx wrapper.

Why a wrapper:
- Standardizes base URL, headers, timeout and redirect policy.
- Owns the "fetch failed" boundary: transport, HTTP status and JSON decode
  errors are logged here and turned into `None`.
- Eases testing: a `transport` (e.g. `httpx.MockTransport`) can be injected.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from core.config import AppSettings


logger = logging.getLogger("userdeck.http")


def build_async_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` bound to the API base URL.

    Why a builder:
    - Centralizes base URL/headers so every endpoint behaves the same.
    - No retries and, unless configured, no timeout.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    return httpx.AsyncClient(
        base_url=settings.base_url,
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


async def fetch_json(
    client: httpx.AsyncClient,
    path: str,
    *,
    params: dict[str, str] | None = None,
) -> Any | None:
    """GET `path` and decode the body as JSON.

    Returns `None` on any failure; the failure goes to the `userdeck.http`
    logger and is never raised to the caller.
    """

    try:
        response = await client.get(path, params=params)
        response.raise_for_status()
        return response.json()
    except httpx.HTTPError as exc:
        logger.error("Request to %s failed: %s", path, exc)
    except ValueError as exc:
        logger.error("Could not decode response from %s: %s", path, exc)
    return None
