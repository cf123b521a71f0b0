import re
from typing import Dict, Iterator, Pattern, Union

from .patterns import MATCH_FLAGS


def iter_matches(pattern: Union[str, Pattern], content: str, flags: int = MATCH_FLAGS) -> Iterator[Dict[str, str]]:
    """Yield the named groups of every non-overlapping match of pattern in content.

    A precompiled pattern keeps its own flags and gains `flags` on top of them.
    """
    if isinstance(pattern, str):
        pattern = re.compile(pattern, flags)
    elif flags and (pattern.flags & flags) != flags:
        pattern = re.compile(pattern.pattern, pattern.flags | flags)

    if not pattern.groupindex:
        raise ValueError(f"Pattern has no named groups: {pattern.pattern!r}")

    for match in pattern.finditer(content):
        yield match.groupdict()
