from __future__ import annotations

"""Time-bucketed aggregation of practice records for trend charts.

Bucket accuracy is always computed from summed correct/attempted counts,
never by averaging per-record accuracies.
"""

import logging
import math
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

from ..storage.schema import SUBJECTS
from ..storage.store import records_frame
from .config import AnalyticsConfig
from .metrics import compute_frame_metrics

logger = logging.getLogger(__name__)

GRANULARITIES = ("daily", "weekly", "monthly")
ALL_SUBJECTS = ("all", "Overall")


@dataclass(frozen=True)
class TimeBucket:
    key: str
    label: str
    totalSets: int
    totalCorrect: int
    totalAttempted: int

    @property
    def accuracy(self) -> float:
        if self.totalAttempted == 0:
            return 0.0
        return self.totalCorrect / self.totalAttempted * 100

    def as_point(self) -> Dict[str, Any]:
        return {"label": self.label, "accuracy": round(self.accuracy, 2), "totalSets": self.totalSets}


def week_label(d: date) -> int:
    """Simple Sunday-anchored week number: ceil((dayOfYear + weekday(Jan 1)) / 7).

    dayOfYear is 0-based and weekday counts Sunday as 0. This is not ISO-8601;
    late-December days can land in week 53 depending on the year.
    """
    jan1 = date(d.year, 1, 1)
    day_of_year = (d - jan1).days
    first_weekday = (jan1.weekday() + 1) % 7
    return math.ceil((day_of_year + first_weekday) / 7)


def _prepare(records: Sequence[Any], subject: Optional[str]) -> pd.DataFrame:
    df = records_frame(records)
    if subject is not None and subject not in ALL_SUBJECTS:
        if subject not in SUBJECTS:
            logger.debug("Subject filter %r matches no known subject", subject)
        df = df[(df["subject"] == subject).fillna(False).astype(bool)]
    df = df.assign(day=pd.to_datetime(df["date"].str.slice(0, 10), format="%Y-%m-%d", errors="coerce"))
    bad = int(df["day"].isna().sum())
    if bad:
        logger.debug("Skipping %d record(s) with unparseable dates", bad)
        df = df[df["day"].notna()]
    # Stable sort keeps same-day sessions in input order
    df = df.sort_values("day", kind="stable")
    return compute_frame_metrics(df)


def bucket_records(
    records: Sequence[Any],
    granularity: str,
    subject: Optional[str] = None,
    cfg: AnalyticsConfig | None = None,
) -> List[TimeBucket]:
    """Group records into chronologically ordered buckets.

    - daily: one bucket per record (same-day sessions stay separate), last
      ``cfg.daily_window`` kept
    - weekly: (year, week_label)
    - monthly: (year, month)
    """
    if granularity not in GRANULARITIES:
        raise ValueError(f"Unknown granularity: {granularity}")
    cfg = cfg or AnalyticsConfig()
    df = _prepare(records, subject)
    if df.empty:
        return []

    if granularity == "daily":
        buckets = [
            TimeBucket(
                key=row.date,
                label=f"{row.day:%b} {row.day.day}",
                totalSets=int(row.totalSets),
                totalCorrect=int(row.correctAnswers),
                totalAttempted=int(row.questionsAttempted),
            )
            for row in df.itertuples(index=False)
        ]
        return buckets[-cfg.daily_window:]

    df = df.assign(year=df["day"].dt.year)
    if granularity == "weekly":
        df = df.assign(period=[week_label(d.date()) for d in df["day"]])
    else:
        df = df.assign(period=df["day"].dt.month)

    # sort=False keeps first-occurrence order, which is chronological after the sort above
    sums = df.groupby(["year", "period"], sort=False)[["totalSets", "correctAnswers", "questionsAttempted"]].sum()
    buckets = []
    for (year, period), row in sums.iterrows():
        year, period = int(year), int(period)
        if granularity == "weekly":
            key = label = f"{year}-W{period}"
        else:
            key = f"{year}-{period:02d}"
            label = f"{date(year, period, 1):%b %Y}"
        buckets.append(
            TimeBucket(
                key=key,
                label=label,
                totalSets=int(row["totalSets"]),
                totalCorrect=int(row["correctAnswers"]),
                totalAttempted=int(row["questionsAttempted"]),
            )
        )
    logger.debug("Aggregated %d record(s) into %d %s bucket(s)", len(df), len(buckets), granularity)
    return buckets


def aggregate_by_period(
    records: Sequence[Any],
    granularity: str,
    subject: Optional[str] = None,
    cfg: AnalyticsConfig | None = None,
) -> List[Dict[str, Any]]:
    """Chart-ready points: ordered ``{label, accuracy, totalSets}`` dicts."""
    return [b.as_point() for b in bucket_records(records, granularity, subject, cfg)]
