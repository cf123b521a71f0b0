import structlog
from typing import Iterator, List, Pattern, Union

from .dedupe import dedupe
from .matches import iter_matches
from .models import CallingCode
from .patterns import CALLING_CODE_PATTERN, MATCH_FLAGS

logger = structlog.get_logger(__name__)


def iter_records(text: str, pattern: Union[str, Pattern] = CALLING_CODE_PATTERN) -> Iterator[CallingCode]:
    for groups in iter_matches(pattern, text, MATCH_FLAGS):
        yield CallingCode.from_groups(groups)


def extract_records(text: str, pattern: Union[str, Pattern] = CALLING_CODE_PATTERN) -> List[CallingCode]:
    """Extract calling-code records from text, first occurrence of each (code2, code3) wins."""
    total = 0

    def counted(records):
        nonlocal total
        for record in records:
            total += 1
            yield record

    records = list(dedupe(counted(iter_records(text, pattern))))

    logger.info("records_extracted",
                matched=total,
                unique=len(records),
                duplicates=total - len(records))
    return records
