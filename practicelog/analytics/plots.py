from __future__ import annotations

"""Matplotlib charts for aggregated accuracy and practice volume."""

from typing import Any, Dict, Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np

from .config import AnalyticsConfig
from .metrics import accuracy_band

BAND_COLORS = {"strong": "#22c55e", "steady": "#0ea5e9", "weak": "#f59e0b"}


def plot_accuracy_trend(
    points: Sequence[Dict[str, Any]],
    *,
    title: str = "Accuracy Trend (%)",
    save_path: Optional[str | bytes | "os.PathLike[str]"] = None,
) -> None:
    if not points:
        return
    labels = [p["label"] for p in points]
    x = np.arange(len(points))
    plt.figure()
    plt.plot(x, [p["accuracy"] for p in points], marker="o", linewidth=2, label="Accuracy")
    plt.xticks(ticks=x, labels=labels, rotation=45, ha="right")
    plt.ylim(0, 100)
    plt.ylabel("Accuracy (%)")
    plt.title(title)
    plt.legend()
    if save_path:
        plt.savefig(save_path, bbox_inches="tight", dpi=150)
    plt.close()


def plot_volume(
    points: Sequence[Dict[str, Any]],
    *,
    cfg: AnalyticsConfig | None = None,
    title: str = "Practice Volume (Total Sets)",
    save_path: Optional[str | bytes | "os.PathLike[str]"] = None,
) -> None:
    """Bar chart of total sets, each bar colored by its accuracy band."""
    if not points:
        return
    cfg = cfg or AnalyticsConfig()
    x = np.arange(len(points))
    colors = [BAND_COLORS[accuracy_band(p["accuracy"], cfg)] for p in points]
    plt.figure()
    plt.bar(x, [p["totalSets"] for p in points], color=colors)
    plt.xticks(ticks=x, labels=[p["label"] for p in points], rotation=45, ha="right")
    plt.ylabel("Total Sets")
    plt.title(title)
    if save_path:
        plt.savefig(save_path, bbox_inches="tight", dpi=150)
    plt.close()
