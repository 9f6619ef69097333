from .config import AnalyticsConfig
from .metrics import compute_metrics, compute_frame_metrics, summarize, accuracy_band
from .aggregate import TimeBucket, week_label, bucket_records, aggregate_by_period
from .keywords import KeywordStat, KeywordAnalysis, analyze_keywords, format_insights, tip_for
from .goals import GoalProgress, compute_goal_progress, update_target, save_target
from .prepare import load_and_prepare, entries_on, active_days, mistake_log
from .plots import plot_accuracy_trend, plot_volume

__all__ = [
    "AnalyticsConfig",
    "compute_metrics",
    "compute_frame_metrics",
    "summarize",
    "accuracy_band",
    "TimeBucket",
    "week_label",
    "bucket_records",
    "aggregate_by_period",
    "KeywordStat",
    "KeywordAnalysis",
    "analyze_keywords",
    "format_insights",
    "tip_for",
    "GoalProgress",
    "compute_goal_progress",
    "update_target",
    "save_target",
    "load_and_prepare",
    "entries_on",
    "active_days",
    "mistake_log",
    "plot_accuracy_trend",
    "plot_volume",
]
