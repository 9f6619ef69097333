from __future__ import annotations

"""Analytics configuration (thresholds and analyzer settings) using Pydantic."""

from typing import FrozenSet
from pydantic import BaseModel, Field


DEFAULT_STOP_WORDS = frozenset(
    {"a", "an", "the", "in", "on", "is", "was", "to", "for", "of", "and", "i", "my", "it", "with", "not", "did", "had", "but"}
)


class AnalyticsConfig(BaseModel):
    """Settings for aggregation, keyword ranking and goal tracking.

    - daily_window: number of most recent points kept in daily mode (>0)
    - top_keywords: how many ranked terms the analyzer returns (>0)
    - min_token_length: tokens of this length or shorter are dropped
    - stop_words: closed list of ignored tokens
    - punctuation: characters stripped before tokenizing
    - strong_accuracy / steady_accuracy: accuracy band lower bounds (%)
    - on_track_percent: progress above which an unmet goal is on track
    - default_daily_target: daily sets goal used when none is stored
    """

    daily_window: int = Field(30, gt=0)
    top_keywords: int = Field(5, gt=0)
    min_token_length: int = Field(3, ge=0)
    stop_words: FrozenSet[str] = DEFAULT_STOP_WORDS
    punctuation: str = ".,"
    strong_accuracy: float = Field(80.0, ge=0)
    steady_accuracy: float = Field(60.0, ge=0)
    on_track_percent: float = Field(50.0, ge=0, le=100)
    default_daily_target: int = Field(6, gt=0)

    model_config = {"frozen": True}
