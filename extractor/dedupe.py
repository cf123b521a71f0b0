from typing import Iterable, Iterator

from .models import CallingCode


def dedupe(records: Iterable[CallingCode]) -> Iterator[CallingCode]:
    """Drop records whose (code2, code3) pair was already seen, keeping order."""
    seen = set()
    for record in records:
        if record.key in seen:
            continue
        seen.add(record.key)
        yield record
