from __future__ import annotations

"""Keyword frequency analysis over free-text practice notes.

A frequency heuristic: notes are lower-cased, stripped of punctuation and
split on whitespace; stop words and short tokens are dropped, and the
remaining terms are ranked by count with ties going to the term seen first.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Sequence, Tuple

import numpy as np
import pandas as pd

from .config import AnalyticsConfig

logger = logging.getLogger(__name__)

OK = "ok"
NO_DATA = "no-data"
INSUFFICIENT_DATA = "insufficient-data"

NO_DATA_MESSAGE = "No mistakes logged yet. Add learnings to your entries to analyze patterns."
INSUFFICIENT_DATA_MESSAGE = "Not enough data to identify key patterns. Keep logging your mistakes!"

STATIC_TIPS = (
    "For RC passages, try to identify the author's main point before answering questions.",
    "In DI sets, spend the first 2-3 minutes understanding the data representation thoroughly.",
    "Time management is key. Don't get stuck on one question for more than 3 minutes.",
    "Review your mistakes at the end of each day to reinforce learning.",
    "Consistency beats intensity. A few sets every day is better than many sets once a week.",
)


@dataclass(frozen=True)
class KeywordStat:
    term: str
    count: int
    rank: int


@dataclass(frozen=True)
class KeywordAnalysis:
    status: str
    keywords: Tuple[KeywordStat, ...] = field(default_factory=tuple)

    @property
    def has_data(self) -> bool:
        return self.status == OK


def _learnings(record: Any) -> str:
    v = record.get("learnings") if isinstance(record, dict) else getattr(record, "learnings", None)
    return v if isinstance(v, str) else ""


def notes_corpus(records: Sequence[Any]) -> str:
    """Join all non-blank notes in record order."""
    return " ".join(n for n in (_learnings(r) for r in records) if n.strip())


def tokenize(text: str, cfg: AnalyticsConfig | None = None) -> List[str]:
    """Lower-case, strip punctuation, split, then drop stop words and short tokens."""
    cfg = cfg or AnalyticsConfig()
    cleaned = text.lower().translate(str.maketrans("", "", cfg.punctuation))
    return [w for w in cleaned.split() if w not in cfg.stop_words and len(w) > cfg.min_token_length]


def rank_terms(tokens: Sequence[str]) -> List[Tuple[str, int]]:
    """All terms with counts, most frequent first; ties keep first-seen order."""
    if not tokens:
        return []
    # factorize numbers terms in order of first appearance
    codes, uniques = pd.factorize(pd.Series(list(tokens), dtype="object"))
    counts = np.bincount(codes)
    order = np.argsort(-counts, kind="stable")
    return [(str(uniques[i]), int(counts[i])) for i in order]


def analyze_keywords(records: Sequence[Any], cfg: AnalyticsConfig | None = None) -> KeywordAnalysis:
    """Rank the most frequent terms in the notes of ``records``.

    Returns status NO_DATA when there are no notes at all and
    INSUFFICIENT_DATA when notes exist but no term survives filtering.
    """
    cfg = cfg or AnalyticsConfig()
    text = notes_corpus(records)
    if not text.strip():
        return KeywordAnalysis(NO_DATA)
    ranked = rank_terms(tokenize(text, cfg))
    if not ranked:
        return KeywordAnalysis(INSUFFICIENT_DATA)
    top = tuple(KeywordStat(term=t, count=c, rank=i + 1) for i, (t, c) in enumerate(ranked[: cfg.top_keywords]))
    logger.debug("Ranked %d distinct term(s); top: %s", len(ranked), [k.term for k in top])
    return KeywordAnalysis(OK, top)


def format_insights(result: KeywordAnalysis) -> List[str]:
    """Human-readable lines for the insights panel."""
    if result.status == NO_DATA:
        return [NO_DATA_MESSAGE]
    if result.status == INSUFFICIENT_DATA:
        return [INSUFFICIENT_DATA_MESSAGE]
    lines = ["Based on your log, you should focus on:"]
    lines += [f"- {k.term[:1].upper() + k.term[1:]}: This appears frequently in your notes." for k in result.keywords]
    return lines


def tip_for(tick: int) -> str:
    """Static study tip for a rotation tick."""
    return STATIC_TIPS[tick % len(STATIC_TIPS)]
