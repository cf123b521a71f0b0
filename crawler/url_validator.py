"""
Turn a raw URL string into a request target the fetcher can use.
"""
import logging
import urllib.parse
from typing import Union

import httpx

logger = logging.getLogger(__name__)

SUPPORTED_SCHEMES = ('http', 'https')


class InvalidTargetError(ValueError):
    """Raised when a raw URL cannot be used as a request target."""


class UnsupportedSchemeError(InvalidTargetError):
    """Raised for well-formed absolute URLs whose scheme is not http(s)."""


def canonicalize(url: httpx.URL) -> httpx.URL:
    """Give an empty path its root slash so https://host and https://host/ are the same target."""
    if url.host and not urllib.parse.urlsplit(str(url)).path:
        return url.copy_with(path="/")
    return url


def canonical_url(url: Union[str, httpx.URL]) -> str:
    """String form used for cache keys. Unparseable input is returned unchanged."""
    try:
        return str(canonicalize(httpx.URL(url)))
    except httpx.InvalidURL:
        return str(url)


def parse_target(raw_url: str) -> httpx.URL:
    """Parse an absolute http(s) URL, raising InvalidTargetError otherwise."""
    if not raw_url or not isinstance(raw_url, str):
        raise InvalidTargetError(f"Empty or invalid URL: {raw_url!r}")

    try:
        url = httpx.URL(raw_url.strip())
    except httpx.InvalidURL as e:
        raise InvalidTargetError(f"Malformed URL {raw_url!r}: {e}") from e

    if not url.scheme or not url.host:
        raise InvalidTargetError(f"URL is not absolute: {raw_url!r}")

    if url.scheme not in SUPPORTED_SCHEMES:
        raise UnsupportedSchemeError(f"Invalid scheme: {url.scheme}")

    return canonicalize(url)
