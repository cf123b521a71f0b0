import json
import structlog
from pathlib import Path
from typing import Iterable, Union

from .models import CallingCode

logger = structlog.get_logger(__name__)


def write_records(records: Iterable[CallingCode], output_path: Union[str, Path]) -> int:
    """Write records as a pretty-printed JSON array, replacing any existing file."""
    data = [record.model_dump() for record in records]
    path = Path(output_path)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")

    logger.info("output_written", path=str(path), records=len(data))
    return len(data)
