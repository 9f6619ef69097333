from __future__ import annotations

"""Configuration loading and validation for the practice log.

This module loads YAML configuration, applies defaults, and validates
enumerations before handing analytics settings to AnalyticsConfig.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import sys

import yaml
from pydantic import ValidationError

from ..analytics.config import AnalyticsConfig
from ..storage.schema import SUBJECTS

ALLOWED_GRANULARITIES = {"daily", "weekly", "monthly"}
ALLOWED_SUBJECTS = set(SUBJECTS) | {"all"}


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        print(f"ERROR: Config file not found: {path}", file=sys.stderr)
        sys.exit(1)


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from YAML or defaults.

    Args:
        path: Optional path to a YAML config. If None, use package defaults.

    Returns:
        A dictionary with configuration values.
    """
    if path:
        return _load_yaml(Path(path))
    return _load_yaml(Path(__file__).with_name("defaults.yml"))


def validate_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Apply defaults and validate configuration values.

    Unsupported enum values are reported and replaced with defaults.

    Args:
        cfg: The raw configuration dictionary.

    Returns:
        The validated and merged configuration dictionary.
    """
    cfg.setdefault("store", {})
    cfg.setdefault("display", {})
    cfg.setdefault("analytics", {})

    store = cfg["store"]
    display = cfg["display"]

    store.setdefault("path", "./practice_log.json")
    display.setdefault("granularity", "weekly")
    display.setdefault("subject", "all")

    granularity = display.get("granularity")
    if granularity not in ALLOWED_GRANULARITIES:
        print(f"WARNING: Unsupported granularity '{granularity}', using 'weekly'.")
        display["granularity"] = "weekly"

    subject = display.get("subject")
    if subject not in ALLOWED_SUBJECTS:
        print(f"WARNING: Unsupported subject '{subject}', using 'all'.")
        display["subject"] = "all"

    return cfg


def analytics_config(cfg: Dict[str, Any]) -> AnalyticsConfig:
    """Build AnalyticsConfig from the 'analytics' section, falling back to defaults on bad values."""
    section = dict(cfg.get("analytics") or {})
    if section.get("stop_words") is None:
        section.pop("stop_words", None)
    elif isinstance(section["stop_words"], (list, tuple, set, frozenset)):
        section["stop_words"] = frozenset(str(w).lower() for w in section["stop_words"])
    try:
        return AnalyticsConfig(**section)
    except ValidationError as exc:
        print(f"WARNING: Invalid analytics settings ({exc.error_count()} error(s)), using defaults.", file=sys.stderr)
        return AnalyticsConfig()
