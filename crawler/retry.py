"""
Bounded retry around a single fetch.

Each attempt either succeeds, fails with a FetchResult, or raises. Failures
and exceptions both spend one attempt; there is no delay between attempts.
"""
import asyncio
import logging
from enum import Enum
from typing import Awaitable, Protocol, Union

import httpx

from .models import FailureReason, FetchResult

logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    def fetch(self, url: Union[str, httpx.URL]) -> Awaitable[FetchResult]:
        ...


class AttemptState(Enum):
    ATTEMPTING = "attempting"
    SUCCEEDED = "succeeded"
    EXHAUSTED = "exhausted"


async def with_retry(fetcher: Fetcher, url: Union[str, httpx.URL], max_attempts: int) -> FetchResult:
    """Call fetcher.fetch(url) until it succeeds or max_attempts are spent."""
    url_str = str(url)
    attempt = 0
    last_error = "no attempt made"
    succeeded = None
    state = AttemptState.ATTEMPTING if max_attempts > 0 else AttemptState.EXHAUSTED

    while state is AttemptState.ATTEMPTING:
        attempt += 1
        try:
            result = await fetcher.fetch(url)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            last_error = f"{type(e).__name__}: {e}"
            logger.warning(f"Attempt {attempt}/{max_attempts} for {url_str} raised {last_error}", exc_info=True)
        else:
            result.attempts = attempt
            if result.success:
                succeeded = result
                state = AttemptState.SUCCEEDED
                continue
            if not result.retryable:
                logger.warning(f"Attempt {attempt}/{max_attempts} for {url_str} failed permanently: {result.error}")
                return result
            last_error = result.error
            logger.warning(f"Attempt {attempt}/{max_attempts} for {url_str} failed: {last_error}")

        if attempt >= max_attempts:
            state = AttemptState.EXHAUSTED

    if state is AttemptState.SUCCEEDED:
        return succeeded

    logger.error(f"Giving up on {url_str} after {attempt} attempt(s)")
    return FetchResult.failure(
        url_str,
        FailureReason.ATTEMPTS_EXHAUSTED,
        f"Max attempts ({max_attempts}) exceeded, last error: {last_error}",
        attempts=attempt
    )
