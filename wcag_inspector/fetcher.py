from __future__ import annotations

import asyncio
import logging
import math

import httpx

from .errors import fetch_failure_error, fetch_timeout_error

logger = logging.getLogger(__name__)

DEFAULT_FETCH_TIMEOUT_MS = 10_000
USER_AGENT = "Mozilla/5.0 (compatible; WCAGAnalyzer/1.0)"


def resolve_timeout_ms(timeout_ms: float | None) -> float:
    if (
        isinstance(timeout_ms, (int, float))
        and not isinstance(timeout_ms, bool)
        and math.isfinite(timeout_ms)
        and timeout_ms > 0
    ):
        return timeout_ms
    return DEFAULT_FETCH_TIMEOUT_MS


async def fetch_document(
    url: str,
    timeout_ms: float | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """Fetch ``url`` once and return its body text.

    The whole request, redirects included, must finish within the timeout;
    on expiry the in-flight request is cancelled and FETCH_TIMEOUT is raised.
    Transport errors and non-2xx answers raise FETCH_FAILURE. There is no retry.
    """
    timeout_ms = resolve_timeout_ms(timeout_ms)
    timeout = timeout_ms / 1000

    async with httpx.AsyncClient(timeout=timeout, follow_redirects=True, transport=transport) as client:
        try:
            res = await asyncio.wait_for(
                client.get(
                    url,
                    headers={
                        "user-agent": USER_AGENT,
                        "accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
                    },
                ),
                timeout=timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            logger.warning("Fetch of %s timed out after %sms", url, timeout_ms)
            raise fetch_timeout_error(timeout_ms) from e
        except (httpx.HTTPError, httpx.InvalidURL, OSError) as e:
            logger.warning("Fetch of %s failed: %s", url, e)
            raise fetch_failure_error() from e

        if not res.is_success:
            logger.warning("Fetch of %s answered with status %s", url, res.status_code)
            raise fetch_failure_error()

        return res.text
