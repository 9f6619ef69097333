from __future__ import annotations

"""Record builders shared by the test modules."""

from itertools import count
from typing import Any

from practicelog.storage.schema import PracticeRecord

_ids = count(1)


def make_record(**fields: Any) -> PracticeRecord:
    data = {"id": f"rec-{next(_ids):03d}", "date": "2024-03-01", "subject": "QUANT"}
    data.update(fields)
    return PracticeRecord.model_validate(data)
