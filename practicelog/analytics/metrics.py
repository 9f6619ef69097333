from __future__ import annotations

"""Per-record metric derivation: volume, accuracy and speed."""

from typing import Any, Dict, Iterable

import pandas as pd

from ..storage.schema import SET_KEYS
from .config import AnalyticsConfig


def field_value(record: Any, name: str) -> float:
    """Read a numeric field from a record or mapping; absent or null reads as 0."""
    if isinstance(record, dict):
        v = record.get(name)
    else:
        v = getattr(record, name, None)
    if v is None or v is pd.NA:
        return 0
    if not isinstance(v, (int, float)) or isinstance(v, bool):
        try:
            v = float(v)
        except (TypeError, ValueError):
            return 0
    if v != v:  # NaN
        return 0
    return v


def total_sets(record: Any) -> int:
    return sum(field_value(record, k) for k in SET_KEYS)


def accuracy(record: Any) -> float:
    attempted = field_value(record, "questionsAttempted")
    if not attempted:
        return 0.0
    return field_value(record, "correctAnswers") / attempted * 100


def speed(record: Any) -> float:
    """Minutes per set; 0 when no sets were logged."""
    sets = total_sets(record)
    if not sets:
        return 0.0
    return field_value(record, "timeTaken") / sets


def compute_metrics(record: Any) -> Dict[str, float]:
    """Derive totalSets, accuracy (%) and speed (min/set) for one record."""
    return {"totalSets": total_sets(record), "accuracy": accuracy(record), "speed": speed(record)}


def compute_frame_metrics(df: pd.DataFrame) -> pd.DataFrame:
    """Vectorised counterpart of compute_metrics.

    Returns a copy with added columns:
    - totalSets, accuracy, speed
    """
    out = df.copy()
    out["totalSets"] = out[SET_KEYS].fillna(0).sum(axis=1).astype("int64")
    q = out["questionsAttempted"].fillna(0).astype("float64")
    c = out["correctAnswers"].fillna(0).astype("float64")
    t = out["timeTaken"].fillna(0).astype("float64")
    # Zero denominators give 0, never NaN or inf
    out["accuracy"] = (c / q.where(q > 0, other=1.0) * 100).where(q > 0, other=0.0)
    sets = out["totalSets"].astype("float64")
    out["speed"] = (t / sets.where(sets > 0, other=1.0)).where(sets > 0, other=0.0)
    return out


def summarize(records: Iterable[Any]) -> Dict[str, float]:
    """Dashboard totals over the whole log, using summed counts."""
    sets = correct = attempted = minutes = 0
    for r in records:
        sets += total_sets(r)
        correct += field_value(r, "correctAnswers")
        attempted += field_value(r, "questionsAttempted")
        minutes += field_value(r, "timeTaken")
    overall = correct / attempted * 100 if attempted else 0.0
    avg_speed = minutes / sets if sets else 0.0
    return {"totalSets": sets, "overallAccuracy": round(overall, 2), "avgSpeed": round(avg_speed, 2)}


def accuracy_band(value: float, cfg: AnalyticsConfig | None = None) -> str:
    """Classify an accuracy percentage as 'strong', 'steady' or 'weak'."""
    cfg = cfg or AnalyticsConfig()
    if value >= cfg.strong_accuracy:
        return "strong"
    if value >= cfg.steady_accuracy:
        return "steady"
    return "weak"
