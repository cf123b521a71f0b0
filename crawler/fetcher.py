import logging
import time
from typing import Union

import httpx

from .models import FailureReason, FetchResult
from .url_validator import SUPPORTED_SCHEMES

logger = logging.getLogger(__name__)


class HTTPFetcher:
    def __init__(self, timeout: float = 30.0, max_redirects: int = 5, transport: httpx.AsyncBaseTransport = None):
        """Initialize the HTTP fetcher. `transport` replaces the network layer (used by tests)."""
        self.timeout = timeout
        self.max_redirects = max_redirects

        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            follow_redirects=True,
            max_redirects=self.max_redirects,
            transport=transport
        )

    async def __aenter__(self) -> "HTTPFetcher":
        return self

    async def __aexit__(self, *exc_info):
        await self.close()

    async def close(self):
        """Release pooled connections."""
        await self._client.aclose()

    async def fetch(self, url: Union[str, httpx.URL]) -> FetchResult:
        """Issue one GET for url. Failures come back as a FetchResult, never as an exception."""
        url_str = str(url)
        start_time = time.time()

        try:
            target = httpx.URL(url)
        except httpx.InvalidURL as e:
            logger.warning(f"Invalid URL {url_str}: {e}")
            return FetchResult.failure(url_str, FailureReason.INVALID_URL, f"Invalid URL: {e}")

        if target.scheme not in SUPPORTED_SCHEMES:
            return self._abort(target)

        try:
            response = await self._client.get(target)
            fetch_time = time.time() - start_time

            # raw header value, "image" is matched case-sensitively
            content_type = response.headers.get('content-type', '')
            is_binary = 'image' in content_type

            if not response.is_success:
                logger.warning(f"HTTP {response.status_code} for {url_str}")

            return FetchResult(
                url=url_str,
                status_code=response.status_code,
                content=response.content,
                content_type=content_type,
                encoding=None if is_binary else response.encoding,
                is_binary=is_binary,
                fetch_time=fetch_time
            )

        except httpx.TimeoutException as e:
            error = f"Timeout after {self.timeout}s: {str(e)}"
            logger.warning(f"{error} for {url_str}")

        except httpx.ConnectError as e:
            error = f"Connection error: {str(e)}"
            logger.warning(f"{error} for {url_str}")

        except httpx.HTTPError as e:
            error = f"Transport error: {type(e).__name__}: {str(e)}"
            logger.warning(f"{error} for {url_str}")

        except Exception as e:
            error = f"Unexpected error: {str(e)}"
            logger.error(f"{error} for {url_str}", exc_info=True)

        return FetchResult(
            url=url_str,
            fetch_time=time.time() - start_time,
            error=error,
            reason=FailureReason.TRANSPORT_ERROR
        )

    def _abort(self, target: httpx.URL) -> FetchResult:
        """Build the request for an unsupported scheme and drop it without sending."""
        error = f"Unsupported scheme: {target.scheme}"
        try:
            request = self._client.build_request('GET', target)
            logger.error(f"{error}, aborting {request.method} {request.url}")
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"{error}, request could not be built: {e}")
        return FetchResult.failure(str(target), FailureReason.UNSUPPORTED_SCHEME, error)
