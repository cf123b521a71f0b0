from .models import CallingCode, RecordError
from .pipeline import extract_records
from .writer import write_records

__all__ = ["CallingCode", "RecordError", "extract_records", "write_records"]
