from __future__ import annotations

"""Schema constants and the Pydantic model for logged practice records."""

from datetime import date
from typing import Literal

from pydantic import BaseModel, Field, field_validator

# --- Constants ---

SUBJECTS = ("LR", "DI", "QUANT", "VARC")
SET_KEYS = ["lrSets", "diSets", "vaultSets", "sectionalSets"]
NUMERIC_KEYS = SET_KEYS + ["timeTaken", "questionsAttempted", "correctAnswers"]

DTYPES = {
    "id": "string",
    "date": "string",
    "subject": "string",
    "topic": "string",
    "lrSets": "Int64",
    "diSets": "Int64",
    "vaultSets": "Int64",
    "sectionalSets": "Int64",
    "timeTaken": "float64",
    "questionsAttempted": "Int64",
    "correctAnswers": "Int64",
    "confidence": "Int64",
    "learnings": "string",
    "isWeakTopic": "boolean",
}


# --- Pydantic models ---

class PracticeRecord(BaseModel):
    """One logged practice session.

    Only type coercion is applied; cross-field rules such as
    correctAnswers <= questionsAttempted are left to the entry form.
    """

    id: str
    date: str
    subject: Literal[SUBJECTS] = "QUANT"  # type: ignore[valid-type]
    topic: str = ""
    lrSets: int = 0
    diSets: int = 0
    vaultSets: int = 0
    sectionalSets: int = 0
    timeTaken: float = 0.0
    questionsAttempted: int = 0
    correctAnswers: int = 0
    confidence: int = Field(3, ge=1, le=5)
    learnings: str = ""
    isWeakTopic: bool = False

    model_config = {"frozen": True}

    @field_validator("date", mode="before")
    @classmethod
    def _iso_date(cls, v):
        if isinstance(v, date):
            return v.isoformat()[:10]
        return str(v)[:10]

    @field_validator(*NUMERIC_KEYS, mode="before")
    @classmethod
    def _none_is_zero(cls, v):
        return 0 if v is None or v == "" else v

    @field_validator("learnings", "topic", mode="before")
    @classmethod
    def _none_is_blank(cls, v):
        return "" if v is None else v
