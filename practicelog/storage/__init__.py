from .schema import SUBJECTS, SET_KEYS, NUMERIC_KEYS, DTYPES, PracticeRecord
from .store import (
    ENTRIES_KEY,
    TARGET_KEY,
    RecordStore,
    save_record,
    delete_record,
    records_frame,
    export_parquet,
    export_ndjson,
)

__all__ = [
    "SUBJECTS",
    "SET_KEYS",
    "NUMERIC_KEYS",
    "DTYPES",
    "PracticeRecord",
    "ENTRIES_KEY",
    "TARGET_KEY",
    "RecordStore",
    "save_record",
    "delete_record",
    "records_frame",
    "export_parquet",
    "export_ndjson",
]
