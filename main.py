"""
Entrypoint: load config, fetch the root document through the cache, extract calling codes, write JSON
"""

import asyncio
import logging
import re
import sys

import structlog
from dotenv import load_dotenv

from crawler.config import Config
from crawler.fetcher import HTTPFetcher
from crawler.storage import CacheStorage
from crawler.worker import DEFAULT_MAX_ATTEMPTS, Crawler
from extractor import extract_records, write_records
from extractor.patterns import CALLING_CODE_PATTERN

logger = structlog.get_logger(__name__)


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Route stdlib and structlog output to stdout."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, str(level).upper(), logging.INFO),
    )

    renderer = structlog.dev.ConsoleRenderer() if fmt == "console" else structlog.processors.JSONRenderer()
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


async def run(config: Config) -> int:
    """Fetch, extract and write. Returns the process exit code."""
    storage = CacheStorage(config.cache_path)
    fetcher_config = config.fetcher
    politeness = config.politeness

    async with HTTPFetcher(timeout=float(fetcher_config.get('timeout', 30.0))) as fetcher:
        crawler = Crawler(
            storage=storage,
            fetcher=fetcher,
            min_delay=float(politeness.get('min_delay', 1.0)),
            max_delay=float(politeness.get('max_delay', 3.0)),
        )
        resolution = await crawler.resolve(
            config.root_url,
            max_attempts=int(fetcher_config.get('max_attempts', DEFAULT_MAX_ATTEMPTS)),
        )

    if not resolution.ok:
        logger.error("fetch_failed",
                     url=resolution.url,
                     reason=resolution.reason.value,
                     error=resolution.error,
                     attempts=resolution.attempts)
        return 1

    pattern = config.extraction.get('pattern') or CALLING_CODE_PATTERN
    try:
        records = extract_records(resolution.text, pattern)
    except (ValueError, re.error) as e:
        logger.error("extraction_failed", url=resolution.url, error=str(e), exc_info=True)
        return 1

    try:
        write_records(records, config.output)
    except OSError as e:
        logger.error("output_write_failed", path=str(config.output), error=str(e), exc_info=True)
        return 1

    logger.info("done", records=len(records), from_cache=resolution.from_cache)
    return 0


def main(config_path: str = None) -> int:
    load_dotenv()

    try:
        config = Config(config_path)
    except (FileNotFoundError, ValueError) as e:
        setup_logging()
        logger.error("config_load_failed", error=str(e))
        return 1

    log_config = config.logging
    setup_logging(log_config.get('level', 'INFO'), log_config.get('format', 'json'))

    try:
        return asyncio.run(run(config))
    except KeyboardInterrupt:
        logger.info("shutting_down")
        return 130
    except Exception as e:
        logger.error("fatal_error", error=str(e), exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main(sys.argv[1] if len(sys.argv) > 1 else None))
