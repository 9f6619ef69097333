from __future__ import annotations

"""Load a store snapshot into a typed frame, plus simple list views over it."""

from datetime import date
from pathlib import Path
from typing import Any, List, Sequence

import pandas as pd

from ..storage.store import RecordStore, records_frame
from .metrics import compute_frame_metrics


def load_and_prepare(store_path: Path | str) -> pd.DataFrame:
    """Read the store and compute per-record metrics with consistent dtypes.

    - Sorts by date (stable, so same-day entries keep logging order).
    - Adds totalSets, accuracy and speed, plus a stable 'entry_idx'.
    """
    df = records_frame(RecordStore(store_path).records())
    df = df.sort_values("date", kind="stable")
    df = compute_frame_metrics(df)
    df["entry_idx"] = range(len(df))
    return df.reset_index(drop=True)


def _get(record: Any, name: str) -> Any:
    return record.get(name) if isinstance(record, dict) else getattr(record, name, None)


def entries_on(records: Sequence[Any], day: date | str) -> List[Any]:
    """Records logged on one calendar day, in input order."""
    key = day.isoformat() if isinstance(day, date) else str(day)[:10]
    return [r for r in records if str(_get(r, "date") or "")[:10] == key]


def active_days(records: Sequence[Any]) -> List[str]:
    """Sorted distinct dates that have at least one record."""
    return sorted({str(_get(r, "date"))[:10] for r in records if _get(r, "date")})


def mistake_log(records: Sequence[Any]) -> List[Any]:
    """Records with non-blank notes, most recently logged first."""
    noted = [r for r in records if isinstance(_get(r, "learnings"), str) and _get(r, "learnings").strip()]
    return noted[::-1]
