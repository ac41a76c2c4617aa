"""
Unit tests for near-duplicate detection.
"""

import pytest

from question_ingest.deduplication import (
    QuestionIndex,
    is_duplicate,
    jaccard_similarity,
    normalize_text,
    word_set,
)

from conftest import make_record


class TestNormalization:

    def test_normalize_lowercases_and_strips_punctuation(self):
        assert normalize_text("  What's   the BEST option?! ") == "what s the best option"

    def test_word_set_ignores_order_and_repetition(self):
        assert word_set("b a a B") == word_set("A b")

    def test_word_set_of_blank_text_is_empty(self):
        assert word_set(" ?! ") == frozenset()


class TestJaccard:

    def test_identical_sets(self):
        assert jaccard_similarity(word_set("a b c"), word_set("c b a")) == 1.0

    def test_disjoint_sets(self):
        assert jaccard_similarity(word_set("a b"), word_set("c d")) == 0.0

    def test_empty_sets_have_zero_similarity(self):
        assert jaccard_similarity(frozenset(), frozenset()) == 0.0


class TestThresholdBoundary:
    """Duplicates need similarity strictly above 0.8."""

    def test_similarity_exactly_080_is_not_duplicate(self):
        existing = make_record("q1", "one two three four")
        candidate = make_record("", "one two three four five")

        assert jaccard_similarity(
            word_set(existing.question_text), word_set(candidate.question_text)
        ) == pytest.approx(0.8)
        assert is_duplicate(candidate, [existing]) is False

    def test_similarity_081_is_duplicate(self):
        # 17 shared words out of 21 distinct: 0.8095...
        shared = " ".join(f"w{i}" for i in range(17))
        existing = make_record("q1", shared + " x1 x2")
        candidate = make_record("", shared + " y1 y2")

        similarity = jaccard_similarity(
            word_set(existing.question_text), word_set(candidate.question_text)
        )
        assert 0.80 < similarity < 0.82
        assert is_duplicate(candidate, [existing]) is True

    def test_rephrased_punctuation_is_duplicate(self):
        existing = make_record("q1", "Which service provides object storage?")
        candidate = make_record("", "Which service provides object-storage")

        assert is_duplicate(candidate, [existing]) is True


class TestQuestionIndex:

    def test_accept_rejects_duplicates_of_earlier_accepted_records(self):
        index = QuestionIndex([make_record("q1", "What is Amazon S3?")])
        first = make_record("", "How does an Auto Scaling group scale in?")
        repeat = make_record("", "How does an Auto Scaling group scale in")

        assert index.accept(first) is True
        assert index.accept(repeat) is False
        assert len(index) == 2

    def test_find_duplicate_returns_first_match(self):
        a = make_record("q1", "alpha beta gamma delta epsilon")
        b = make_record("q2", "alpha beta gamma delta epsilon")
        index = QuestionIndex([a, b])

        assert index.find_duplicate(make_record("", "epsilon delta gamma beta alpha")) is a

    def test_custom_threshold(self):
        index = QuestionIndex([make_record("q1", "one two three four")], threshold=0.5)

        assert index.is_duplicate(make_record("", "one two three four five")) is True
