"""Practice log: derived metrics, trend aggregation and note analysis for study sessions."""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
