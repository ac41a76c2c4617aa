"""
Unit tests for identifier assignment and merging.
"""

from question_ingest.corpus_merger import merge_corpus, next_identifier, numeric_suffix

from conftest import make_record


class TestNumericSuffix:

    def test_plain_identifier(self):
        assert numeric_suffix("q42") == 42

    def test_identifier_without_digits(self):
        assert numeric_suffix("intro") == 0

    def test_only_trailing_digits_count(self):
        assert numeric_suffix("imported_v2_17") == 17


class TestNextIdentifier:

    def test_empty_corpus_starts_at_one(self):
        assert next_identifier([]) == 1

    def test_uses_maximum_not_count(self):
        existing = [make_record("q3", "a"), make_record("q42", "b"), make_record("q7", "c")]

        assert next_identifier(existing) == 43


class TestMergeCorpus:

    def test_new_records_numbered_in_discovery_order(self):
        existing = [make_record("q1", "a"), make_record("q42", "b")]
        r1, r2, r3 = make_record("", "r1"), make_record("", "r2"), make_record("", "r3")

        result = merge_corpus(existing, [r1, r2, r3])

        assert [r.id for r in (r1, r2, r3)] == ["q43", "q44", "q45"]
        assert result.first_id == 43
        assert result.new_records == [r1, r2, r3]
        assert [r.id for r in result.merged] == ["q1", "q42", "q43", "q44", "q45"]

    def test_existing_identifiers_are_untouched(self):
        existing = [make_record("custom", "a"), make_record("q9", "b")]

        result = merge_corpus(existing, [make_record("", "new")])

        assert [r.id for r in result.merged] == ["custom", "q9", "q10"]

    def test_merged_identifiers_are_unique(self):
        existing = [make_record(f"q{i}", f"text {i}") for i in (5, 2, 9)]
        new = [make_record("", f"new {i}") for i in range(4)]

        ids = [r.id for r in merge_corpus(existing, new).merged]

        assert len(ids) == len(set(ids))

    def test_empty_existing_corpus(self):
        result = merge_corpus([], [make_record("", "first")])

        assert result.merged[0].id == "q1"

    def test_no_new_records(self):
        existing = [make_record("q1", "a")]

        result = merge_corpus(existing, [])

        assert result.merged == existing
        assert result.new_records == []
