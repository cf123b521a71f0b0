import json

import httpx
import pytest

import main
from crawler.fetcher import HTTPFetcher

CONFIG = """
root_url: https://example.com/codes
cache_path: ./cache
output: ./codes.json
fetcher:
  max_attempts: 2
politeness:
  min_delay: 0
  max_delay: 0
logging:
  level: WARNING
  format: console
"""

BODY = (
    "<code2>US</code2><code3>USA</code3><code>1</code>"
    "<code2>US</code2><code3>USA</code3><code>1</code>"
    "<code2>GB</code2><code3>GBR</code3><code>44</code>"
)


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.yaml").write_text(CONFIG)
    return tmp_path


def _patch_transport(monkeypatch, handler):
    monkeypatch.setattr(main, "HTTPFetcher",
                        lambda timeout: HTTPFetcher(timeout=timeout, transport=httpx.MockTransport(handler)))


def test_successful_run_writes_deduplicated_output(workdir, monkeypatch):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, headers={"content-type": "text/html"}, text=BODY)

    _patch_transport(monkeypatch, handler)

    assert main.main() == 0
    assert json.loads((workdir / "codes.json").read_text()) == [
        {"code2": "US", "code3": "USA", "code": "1"},
        {"code2": "GB", "code3": "GBR", "code": "44"},
    ]

    # second run is answered from the cache
    assert main.main() == 0
    assert len(calls) == 1


def test_failed_fetch_exits_non_zero(workdir, monkeypatch):
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    _patch_transport(monkeypatch, handler)

    assert main.main() == 1
    assert not (workdir / "codes.json").exists()
    assert list((workdir / "cache").iterdir()) == []


def test_missing_config_exits_non_zero(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main.main() == 1
