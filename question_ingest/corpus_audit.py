"""
Whole-corpus scan for near-duplicate question pairs.

The import run only checks new questions against what is already accepted.
This module looks inside a corpus for pairs that slipped through earlier (for
instance questions added by hand), using the same normalization and Jaccard
threshold. Word sets are encoded as a binary document-term matrix so that all
pairwise overlaps come out of a single sparse matrix product.
"""

from dataclasses import dataclass
from typing import List, Sequence

import numpy as np
from sklearn.feature_extraction.text import CountVectorizer

from .data_models import QuestionRecord
from .deduplication import DEFAULT_THRESHOLD, word_set


@dataclass
class NearDuplicatePair:
    first_id: str
    second_id: str
    similarity: float


def _tokenize(text: str) -> List[str]:
    return sorted(word_set(text))


def find_near_duplicates(
    records: Sequence[QuestionRecord],
    threshold: float = DEFAULT_THRESHOLD,
) -> List[NearDuplicatePair]:
    """
    Find all pairs of records whose word-set similarity exceeds ``threshold``.

    Args:
        records: Corpus to scan
        threshold: Pairs with Jaccard similarity strictly above this are reported

    Returns:
        Pairs sorted by similarity (highest first), then by corpus position.
        The first record of a pair is always the earlier one in the corpus.
    """
    texts = [r.question_text for r in records]
    if len(texts) < 2 or not any(word_set(t) for t in texts):
        return []

    vectorizer = CountVectorizer(analyzer=_tokenize, binary=True)
    mat = vectorizer.fit_transform(texts)

    sizes = np.asarray(mat.sum(axis=1)).ravel()
    overlaps = (mat @ mat.T).tocoo()

    found = []
    for i, j, shared in zip(overlaps.row, overlaps.col, overlaps.data):
        if i >= j:
            continue
        union = sizes[i] + sizes[j] - shared
        similarity = float(shared) / float(union)
        if similarity > threshold:
            found.append((int(i), int(j), similarity))

    found.sort(key=lambda x: (-x[2], x[0], x[1]))
    return [
        NearDuplicatePair(records[i].id, records[j].id, similarity)
        for i, j, similarity in found
    ]
