"""HTTP helpers with retry/backoff for the client data layer."""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Awaitable, Callable

import httpx

logger = logging.getLogger(__name__)


def is_retryable_status(status_code: int) -> bool:
    """Server-side failures are transient; client errors are not."""
    return status_code >= 500


def backoff_delay(
    attempt: int, *, base_delay: float, max_delay: float, jitter: bool = True
) -> float:
    """Delay before retry number ``attempt + 1``; doubles per attempt."""
    delay = min(max_delay, base_delay * (2**attempt))
    if delay and jitter:
        delay = delay + random.uniform(0, delay / 2)
    return delay


async def request_with_retries(
    request_fn: Callable[[], Awaitable[httpx.Response]],
    *,
    max_attempts: int = 3,
    base_delay: float = 0.5,
    max_delay: float = 4.0,
    jitter: bool = True,
    retry_status: Callable[[int], bool] = is_retryable_status,
) -> httpx.Response:
    """Execute an HTTP request with exponential backoff retries.

    Retries on transport errors (timeouts included) and on responses for
    which ``retry_status`` is true (5xx by default).
    After the final attempt the last exception is re-raised, or the last
    response is returned for the caller to inspect.
    """
    max_attempts = max(1, max_attempts)

    for attempt in range(max_attempts):
        try:
            response = await request_fn()
        except httpx.RequestError as exc:
            if attempt >= max_attempts - 1:
                raise
            delay = backoff_delay(
                attempt, base_delay=base_delay, max_delay=max_delay, jitter=jitter
            )
            logger.warning(
                "HTTP request failed (%s), retrying attempt %d/%d",
                type(exc).__name__,
                attempt + 2,
                max_attempts,
            )
            if delay:
                await asyncio.sleep(delay)
            continue

        if retry_status(response.status_code) and attempt < max_attempts - 1:
            delay = backoff_delay(
                attempt, base_delay=base_delay, max_delay=max_delay, jitter=jitter
            )
            logger.warning(
                "HTTP request returned %s, retrying attempt %d/%d",
                response.status_code,
                attempt + 2,
                max_attempts,
            )
            if delay:
                await asyncio.sleep(delay)
            continue

        return response

    return response
