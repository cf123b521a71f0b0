"""
File cache for fetched documents, one file per URL.

Files are named cache_<md5 of the url>.dat and hold the text payload as-is
(or base64 for binary payloads). Nothing here expires or deletes entries.
"""
import hashlib
import logging
from pathlib import Path
from typing import Optional, Union

import httpx

from .url_validator import canonical_url

logger = logging.getLogger(__name__)

CACHE_PREFIX = 'cache_'
CACHE_SUFFIX = '.dat'


class CacheStorage:
    def __init__(self, cache_path: Union[str, Path]):
        self.cache_path = Path(cache_path)

    @staticmethod
    def key_for(url: Union[str, httpx.URL]) -> str:
        """Map a URL to its cache file name."""
        digest = hashlib.md5(canonical_url(url).encode('utf-8')).hexdigest()
        return f"{CACHE_PREFIX}{digest}{CACHE_SUFFIX}"

    def path_for(self, url: Union[str, httpx.URL]) -> Path:
        return self.cache_path / self.key_for(url)

    def read(self, url: Union[str, httpx.URL]) -> Optional[str]:
        """Return the cached content for url, or None when nothing is cached"""
        cache_file = self.path_for(url)
        if not cache_file.is_file():
            return None

        try:
            return cache_file.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Failed to read cache file {cache_file}: {e}")
            return None

    def write(self, url: Union[str, httpx.URL], content: str) -> bool:
        """Store content for url, overwriting any previous entry"""
        cache_file = self.path_for(url)
        try:
            cache_file.write_text(content, encoding='utf-8')
            return True
        except OSError as e:
            logger.error(f"Failed to write cache file {cache_file}: {e}")
            return False
