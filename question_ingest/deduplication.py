"""
Near-duplicate detection for question texts.

Two questions are near-duplicates when the Jaccard similarity of their
normalized word sets is strictly greater than a threshold (0.8 by default).
Word order and repetition are ignored, so this catches rephrasings of the same
question across sources rather than semantic paraphrases.
"""

import re
from typing import FrozenSet, Iterable, List, Optional

from .data_models import QuestionRecord


DEFAULT_THRESHOLD = 0.8

_NON_WORD = re.compile(r"[^\w\s]|_")
_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Lowercase, replace punctuation by spaces and collapse whitespace."""
    text = _NON_WORD.sub(" ", text.lower())
    return _WHITESPACE.sub(" ", text).strip()


def word_set(text: str) -> FrozenSet[str]:
    normalized = normalize_text(text)
    return frozenset(normalized.split(" ")) if normalized else frozenset()


def jaccard_similarity(a: FrozenSet[str], b: FrozenSet[str]) -> float:
    """|a & b| / |a | b|; two empty sets have similarity 0."""
    union = len(a | b)
    if union == 0:
        return 0.0
    return len(a & b) / union


class QuestionIndex:
    """
    Accepted questions of one run, with their word sets cached.

    The index starts from the existing corpus and grows as new questions are
    accepted, so questions found earlier in the same run also count as
    duplicates of later ones.
    """

    def __init__(
        self,
        records: Iterable[QuestionRecord] = (),
        threshold: float = DEFAULT_THRESHOLD,
    ) -> None:
        self.threshold = threshold
        self._word_sets: List[FrozenSet[str]] = []
        self._records: List[QuestionRecord] = []
        for record in records:
            self.add(record)

    def __len__(self) -> int:
        return len(self._records)

    def add(self, record: QuestionRecord) -> None:
        self._records.append(record)
        self._word_sets.append(word_set(record.question_text))

    def find_duplicate(self, record: QuestionRecord) -> Optional[QuestionRecord]:
        """Return the first indexed record ``record`` duplicates, if any."""
        words = word_set(record.question_text)
        for existing, existing_words in zip(self._records, self._word_sets):
            if jaccard_similarity(words, existing_words) > self.threshold:
                return existing
        return None

    def is_duplicate(self, record: QuestionRecord) -> bool:
        return self.find_duplicate(record) is not None

    def accept(self, record: QuestionRecord) -> bool:
        """Add ``record`` unless it duplicates an indexed one; report whether it was added."""
        if self.is_duplicate(record):
            return False
        self.add(record)
        return True


def is_duplicate(
    candidate: QuestionRecord,
    accepted: Iterable[QuestionRecord],
    threshold: float = DEFAULT_THRESHOLD,
) -> bool:
    """
    Check ``candidate`` against ``accepted`` without building an index.

    Stops at the first record whose similarity exceeds ``threshold``.
    """
    words = word_set(candidate.question_text)
    return any(
        jaccard_similarity(words, word_set(other.question_text)) > threshold
        for other in accepted
    )
