from __future__ import annotations

"""JSON-file key/value store holding the practice log and the daily target.

The store is a plain get/set mapping persisted as one JSON document. The
analytics engine never touches it directly: callers take a snapshot with
``RecordStore.records()`` and pass it in.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence
from uuid import uuid4

import pandas as pd
from pydantic import ValidationError

from .schema import DTYPES, NUMERIC_KEYS, PracticeRecord

logger = logging.getLogger(__name__)

ENTRIES_KEY = "entries"
TARGET_KEY = "daily_target"


class RecordStore:
    """Get/set store backed by a single JSON file.

    Unreadable or malformed files are treated as empty; writes go straight
    through and raise on I/O errors.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._data: Dict[str, Any] = self._load()

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning("Could not read store %s (%s); starting empty", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Store %s does not hold a JSON object; starting empty", self.path)
            return {}
        return data

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as f:
            json.dump(self._data, f, indent=2)

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value
        self._save()

    def records(self) -> tuple[PracticeRecord, ...]:
        """Immutable snapshot of the logged records in insertion order."""
        raw = self.get(ENTRIES_KEY, []) or []
        if not isinstance(raw, list):
            logger.warning("Stored entries in %s are not a list; ignoring them", self.path)
            raw = []
        out = []
        for i, r in enumerate(raw):
            try:
                out.append(PracticeRecord.model_validate(r))
            except ValidationError as exc:
                logger.warning("Skipping stored entry %d in %s (%d error(s))", i, self.path, exc.error_count())
        return tuple(out)

    def daily_target(self, default: Any) -> Any:
        """Stored daily sets target, or ``default`` when none has been saved."""
        return self.get(TARGET_KEY, default)


def save_record(store: RecordStore, data: Mapping[str, Any], record_id: Optional[str] = None) -> PracticeRecord:
    """Insert a new record, or replace the fields of the record with ``record_id``.

    Returns the stored record. Updating an unknown id appends nothing.
    """
    entries = list(store.get(ENTRIES_KEY, []) or [])
    if record_id is None:
        rec = PracticeRecord.model_validate({**dict(data), "id": str(uuid4())})
        entries.append(rec.model_dump())
        logger.debug("Added record %s", rec.id)
    else:
        rec = None
        for i, e in enumerate(entries):
            if e.get("id") == record_id:
                rec = PracticeRecord.model_validate({**e, **dict(data), "id": record_id})
                entries[i] = rec.model_dump()
                break
        if rec is None:
            raise KeyError(f"Unknown record id: {record_id}")
        logger.debug("Updated record %s", record_id)
    store.set(ENTRIES_KEY, entries)
    return rec


def delete_record(store: RecordStore, record_id: str) -> bool:
    """Remove the record with ``record_id``. Returns False if it was not present."""
    entries = list(store.get(ENTRIES_KEY, []) or [])
    kept = [e for e in entries if e.get("id") != record_id]
    if len(kept) == len(entries):
        return False
    store.set(ENTRIES_KEY, kept)
    return True


def records_frame(records: Sequence[Any]) -> pd.DataFrame:
    """Build a typed DataFrame from a record snapshot (records or mappings)."""
    rows = [r.model_dump() if isinstance(r, PracticeRecord) else dict(r) for r in records]
    df = pd.DataFrame(rows)
    for col, dt in DTYPES.items():
        if col in NUMERIC_KEYS or col == "confidence":
            if col not in df.columns:
                df[col] = 0
            # Absent, null or non-numeric values read as 0; counts are whole numbers
            values = pd.to_numeric(df[col], errors="coerce").fillna(0).astype("float64")
            df[col] = values.round() if dt == "Int64" else values
        elif col not in df.columns:
            df[col] = pd.Series(pd.NA, index=df.index, dtype="object")
        df[col] = df[col].astype(dt)
    return df[list(DTYPES.keys())]


def export_parquet(df: pd.DataFrame, out_path: Path) -> None:
    """Write a record frame to Parquet (pyarrow, zstd)."""
    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    df.to_parquet(out_path, engine="pyarrow", compression="zstd", index=False)


def export_ndjson(df: pd.DataFrame, out_path: Path) -> None:
    """Export a DataFrame to line-delimited JSON (NDJSON) for quick inspection."""
    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    df.to_json(out_path, orient="records", lines=True)
