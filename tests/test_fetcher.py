import asyncio

import httpx

from crawler.fetcher import HTTPFetcher
from crawler.models import FailureReason


def _fetch(handler, url):
    async def go():
        async with HTTPFetcher(timeout=5.0, transport=httpx.MockTransport(handler)) as fetcher:
            return await fetcher.fetch(url)
    return asyncio.run(go())


def test_text_response():
    def handler(request):
        assert request.method == "GET"
        return httpx.Response(200, headers={"content-type": "text/html; charset=utf-8"},
                              content="<code2>FR</code2> é".encode("utf-8"))

    result = _fetch(handler, "https://example.com/codes")

    assert result.success
    assert result.status_code == 200
    assert not result.is_binary
    assert result.text == "<code2>FR</code2> é"
    assert result.reason is None


def test_image_response_is_binary():
    payload = bytes(range(256))

    def handler(request):
        return httpx.Response(200, headers={"content-type": "image/png"}, content=payload)

    result = _fetch(handler, "https://example.com/flag.png")

    assert result.success
    assert result.is_binary
    assert result.content == payload


def test_binary_match_is_case_sensitive():
    def handler(request):
        return httpx.Response(200, headers={"content-type": "Image/PNG"}, content=b"abc")

    assert not _fetch(handler, "https://example.com/x").is_binary


def test_non_2xx_response_still_counts_as_received():
    def handler(request):
        return httpx.Response(404, text="not here")

    result = _fetch(handler, "https://example.com/gone")

    assert result.success
    assert result.status_code == 404


def test_connect_error_becomes_failure():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    result = _fetch(handler, "https://example.com/")

    assert not result.success
    assert result.reason == FailureReason.TRANSPORT_ERROR
    assert "Connection error" in result.error
    assert result.retryable


def test_timeout_becomes_failure():
    def handler(request):
        raise httpx.ReadTimeout("too slow", request=request)

    result = _fetch(handler, "https://example.com/")

    assert result.reason == FailureReason.TRANSPORT_ERROR
    assert result.error.startswith("Timeout")


def test_unsupported_scheme_never_sends():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200)

    result = _fetch(handler, "ftp://example.com/x")

    assert calls == []
    assert result.reason == FailureReason.UNSUPPORTED_SCHEME
    assert not result.retryable


def test_unparseable_url_is_invalid_and_not_retryable():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200)

    result = _fetch(handler, "https://example.com:abc/")

    assert calls == []
    assert result.reason == FailureReason.INVALID_URL
    assert not result.retryable
