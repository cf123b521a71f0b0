"""
Result types passed between the fetcher, the retry loop and the crawler.
"""
from enum import Enum
from datetime import datetime, timezone
from typing import Optional


class FailureReason(str, Enum):
    INVALID_URL = "invalid_url"
    UNSUPPORTED_SCHEME = "unsupported_scheme"
    TRANSPORT_ERROR = "transport_error"
    ATTEMPTS_EXHAUSTED = "attempts_exhausted"


class FetchResult:
    def __init__(
        self,
        url: str,
        status_code: int = 0,
        content: bytes = b'',
        content_type: str = None,
        encoding: str = None,
        is_binary: bool = False,
        fetch_time: float = 0.0,
        error: str = None,
        reason: FailureReason = None,
        attempts: int = 0
    ):
        """Initialize a FetchResult with response data or a failure reason."""
        self.url = url
        self.status_code = status_code
        self.content = content
        self.content_type = content_type
        self.encoding = encoding
        self.is_binary = is_binary
        self.fetch_time = fetch_time
        self.error = error
        self.reason = reason
        self.attempts = attempts
        self.timestamp = datetime.now(timezone.utc)

    @classmethod
    def failure(cls, url: str, reason: FailureReason, error: str, attempts: int = 0) -> "FetchResult":
        """Build a failed result carrying the reason and a message."""
        return cls(url=url, error=error, reason=reason, attempts=attempts)

    @property
    def success(self) -> bool:
        """Check if a response was received (no failure reason recorded)."""
        return self.reason is None

    @property
    def retryable(self) -> bool:
        """Bad URLs and unsupported schemes never succeed, everything else may on a later attempt."""
        return self.reason not in (FailureReason.INVALID_URL, FailureReason.UNSUPPORTED_SCHEME)

    @property
    def text(self) -> str:
        """Decode the response content to text using detected or fallback encoding."""
        if not self.content:
            return ""
        encoding = self.encoding or 'utf-8'
        try:
            return self.content.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            return self.content.decode('utf-8', errors='replace')

    @property
    def size(self) -> int:
        """Get the size of the response content in bytes."""
        return len(self.content)

    def __repr__(self) -> str:
        if self.success:
            return f"FetchResult(url={self.url!r}, status_code={self.status_code}, size={self.size}, is_binary={self.is_binary})"
        return f"FetchResult(url={self.url!r}, reason={self.reason.value}, error={self.error!r})"


class Resolution:
    """Outcome of Crawler.resolve: the document text, or why it could not be obtained."""

    def __init__(
        self,
        url: str,
        text: str = "",
        from_cache: bool = False,
        attempts: int = 0,
        error: str = None,
        reason: Optional[FailureReason] = None
    ):
        self.url = url
        self.text = text
        self.from_cache = from_cache
        self.attempts = attempts
        self.error = error
        self.reason = reason

    @property
    def ok(self) -> bool:
        return self.reason is None

    @classmethod
    def failed(cls, url: str, reason: FailureReason, error: str, attempts: int = 0) -> "Resolution":
        return cls(url=url, error=error, reason=reason, attempts=attempts)

    def __repr__(self) -> str:
        if self.ok:
            return f"Resolution(url={self.url!r}, size={len(self.text)}, from_cache={self.from_cache})"
        return f"Resolution(url={self.url!r}, reason={self.reason.value}, error={self.error!r})"
