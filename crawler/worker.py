"""
Resolve one URL to document text: cache lookup, politeness delay, fetch with retries, cache write.
"""

import asyncio
import base64
import logging
import random
from typing import Awaitable, Callable, Optional

from .models import FailureReason, Resolution
from .retry import Fetcher, with_retry
from .storage import CacheStorage
from .url_validator import InvalidTargetError, UnsupportedSchemeError, parse_target

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 3


class Crawler:
    """Fetches a document through the on-disk cache, waiting a random 1-3s before any network call"""

    def __init__(
        self,
        storage: CacheStorage,
        fetcher: Fetcher,
        min_delay: float = 1.0,
        max_delay: float = 3.0,
        sleep: Callable[[float], Awaitable] = asyncio.sleep,
        rng: Optional[random.Random] = None
    ):
        if min_delay < 0 or max_delay < min_delay:
            raise ValueError(f"Invalid delay range: {min_delay}..{max_delay}")
        self.storage = storage
        self.fetcher = fetcher
        self.min_delay = min_delay
        self.max_delay = max_delay
        self._sleep = sleep
        self._rng = rng or random.Random()

    async def resolve(self, raw_url: str, max_attempts: int = DEFAULT_MAX_ATTEMPTS) -> Resolution:
        """Return the document at raw_url, from cache when possible"""
        try:
            url = parse_target(raw_url)
        except UnsupportedSchemeError as e:
            logger.error(f"Rejected URL {raw_url!r}: {e}")
            return Resolution.failed(str(raw_url), FailureReason.UNSUPPORTED_SCHEME, str(e))
        except InvalidTargetError as e:
            logger.error(f"Rejected URL {raw_url!r}: {e}")
            return Resolution.failed(str(raw_url), FailureReason.INVALID_URL, str(e))

        url_str = str(url)
        logger.info(f"Requesting [{url_str}]")

        cached = self.storage.read(url)
        if cached is not None:
            logger.info(f"Loaded {url_str} from cache")
            return Resolution(url_str, text=cached, from_cache=True)

        await self._throttle()

        result = await with_retry(self.fetcher, url, max_attempts)
        if not result.success:
            logger.error(f"Fetching {url_str} failed: {result.error}")
            return Resolution.failed(url_str, result.reason, result.error, attempts=result.attempts)

        if result.is_binary:
            data = base64.b64encode(result.content).decode('ascii')
        else:
            data = result.text

        if self.storage.write(url, data):
            logger.info(f"Cached {url_str} ({result.size} bytes, binary={result.is_binary})")

        return Resolution(url_str, text=data, attempts=result.attempts)

    async def _throttle(self):
        """Wait a random delay in [min_delay, max_delay] seconds before hitting the origin"""
        wait = self._rng.uniform(self.min_delay, self.max_delay)
        logger.info(f"Waiting for {wait:.2f} seconds")
        await self._sleep(wait)
