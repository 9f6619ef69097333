from __future__ import annotations

"""Daily goal progress against a sets target."""

import logging
import math
from dataclasses import dataclass
from datetime import date
from typing import Any, Sequence

from ..storage.store import TARGET_KEY, RecordStore
from .config import AnalyticsConfig
from .metrics import total_sets

logger = logging.getLogger(__name__)

BELOW_HALF = "below-half"
ON_TRACK = "on-track"
MET = "met-or-exceeded"


@dataclass(frozen=True)
class GoalProgress:
    setsToday: int
    target: float
    progress: float
    category: str


def _record_date(record: Any) -> str:
    v = record.get("date") if isinstance(record, dict) else getattr(record, "date", None)
    if isinstance(v, date):
        v = v.isoformat()
    return str(v or "")[:10]


def compute_goal_progress(
    records: Sequence[Any],
    today: date | str,
    target: Any,
    cfg: AnalyticsConfig | None = None,
) -> GoalProgress:
    """Sets logged on ``today`` as a capped percentage of ``target``.

    ``today`` is injected by the caller. A non-positive target yields 0%.
    """
    cfg = cfg or AnalyticsConfig()
    day = (today.isoformat() if isinstance(today, date) else str(today))[:10]
    sets_today = sum(total_sets(r) for r in records if _record_date(r) == day)
    try:
        tgt = float(target)
    except (TypeError, ValueError):
        tgt = 0.0
    progress = min(sets_today / tgt * 100, 100.0) if tgt > 0 else 0.0
    if sets_today >= tgt:
        category = MET
    elif progress > cfg.on_track_percent:
        category = ON_TRACK
    else:
        category = BELOW_HALF
    return GoalProgress(setsToday=sets_today, target=tgt, progress=progress, category=category)


def update_target(current: int, proposed: Any) -> int:
    """Return the new target, or ``current`` when ``proposed`` is not a positive number."""
    try:
        value = float(proposed)
    except (TypeError, ValueError):
        value = 0.0
    if not (math.isfinite(value) and value > 0):
        logger.warning("Rejected daily target %r; keeping %s", proposed, current)
        return current
    return int(value) if value == int(value) else value


def save_target(store: RecordStore, proposed: Any, default: Any) -> Any:
    """Apply a target update to ``store``; a rejected value writes nothing.

    ``default`` is the configured target used while none has been saved.
    """
    current = store.daily_target(default)
    new = update_target(current, proposed)
    if new != current:
        store.set(TARGET_KEY, new)
    return new
