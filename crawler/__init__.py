from .fetcher import HTTPFetcher
from .models import FailureReason, FetchResult, Resolution
from .storage import CacheStorage
from .worker import Crawler

__all__ = ["CacheStorage", "Crawler", "FailureReason", "FetchResult", "HTTPFetcher", "Resolution"]
