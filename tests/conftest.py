import pytest

from crawler.models import FailureReason, FetchResult
from crawler.storage import CacheStorage

CONFIG_ENV_VARS = (
    "ROOT_URL", "CACHE_PATH", "OUTPUT_PATH",
    "FETCHER_TIMEOUT", "FETCHER_MAX_ATTEMPTS",
    "POLITENESS_MIN_DELAY", "POLITENESS_MAX_DELAY",
    "EXTRACTION_PATTERN", "LOG_LEVEL", "LOG_FORMAT",
)


class FakeFetcher:
    """Replays scripted outcomes; an exception instance in the script is raised."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    async def fetch(self, url):
        self.calls.append(str(url))
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class RecordingSleep:
    def __init__(self):
        self.calls = []

    async def __call__(self, seconds):
        self.calls.append(seconds)


def ok(url="https://example.com/", body=b"hello", content_type="text/html; charset=utf-8", is_binary=False):
    return FetchResult(url=url, status_code=200, content=body, content_type=content_type,
                       encoding=None if is_binary else "utf-8", is_binary=is_binary)


def failed(url="https://example.com/", error="Connection error: refused"):
    return FetchResult.failure(url, FailureReason.TRANSPORT_ERROR, error)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's shell from leaking config overrides into tests."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def storage(tmp_path):
    cache_dir = tmp_path / "cache"
    cache_dir.mkdir()
    return CacheStorage(cache_dir)


@pytest.fixture
def sleep():
    return RecordingSleep()
