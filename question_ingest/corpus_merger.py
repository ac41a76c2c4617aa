"""
Identifier assignment and merging of newly accepted questions.
"""

import re
from dataclasses import dataclass
from typing import List

from .data_models import QuestionRecord


ID_PREFIX = "q"

_TRAILING_DIGITS = re.compile(r"(\d+)$")


@dataclass
class MergeResult:
    """
    Attributes:
        merged: Existing corpus followed by the new records
        new_records: The new records alone, with their assigned ids
        first_id: Numeric suffix given to the first new record
    """
    merged: List[QuestionRecord]
    new_records: List[QuestionRecord]
    first_id: int


def numeric_suffix(record_id: str) -> int:
    """Trailing number of an identifier ("q42" -> 42); 0 when there is none."""
    m = _TRAILING_DIGITS.search(record_id or "")
    return int(m.group(1)) if m else 0


def next_identifier(existing: List[QuestionRecord]) -> int:
    """One more than the largest numeric suffix in ``existing``, or 1 if empty."""
    return max((numeric_suffix(r.id) for r in existing), default=0) + 1


def merge_corpus(existing: List[QuestionRecord], new_records: List[QuestionRecord]) -> MergeResult:
    """
    Number ``new_records`` in discovery order and append them to ``existing``.

    Existing identifiers are never changed. New identifiers are contiguous and
    start above the largest existing suffix, so they cannot collide.
    """
    first_id = next_identifier(existing)
    for offset, record in enumerate(new_records):
        record.id = f"{ID_PREFIX}{first_id + offset}"

    return MergeResult(
        merged=list(existing) + list(new_records),
        new_records=list(new_records),
        first_id=first_id,
    )
