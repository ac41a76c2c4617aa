"""
Unit tests for the source catalog.
"""

import json

import pytest

from question_ingest.catalog import DEFAULT_SOURCES, load_catalog


def test_default_catalog_has_three_sources_in_order():
    assert [s.name for s in DEFAULT_SOURCES] == ["AWS-Practice-Exams", "AWS-Dumps", "Whizlabs-AWS"]
    assert sum(len(s.files) for s in DEFAULT_SOURCES) == 8


def test_document_url_is_base_plus_path():
    source = DEFAULT_SOURCES[1]

    assert source.document_url(source.files[0]) == (
        "https://raw.githubusercontent.com/kananinirav/AWS-Certified-Cloud-Practitioner-Notes/"
        "master/practice-exams/practice-exam-1.md"
    )


def test_load_catalog_keeps_declared_order(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({"sources": [
        {"name": "B", "baseUrl": "https://b/", "files": ["2.md", "1.md"]},
        {"name": "A", "baseUrl": "https://a/", "files": ["x.md"]},
    ]}), encoding="utf-8")

    sources = load_catalog(path)

    assert [s.name for s in sources] == ["B", "A"]
    assert sources[0].files == ("2.md", "1.md")


def test_load_catalog_missing_field_raises(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({"sources": [{"name": "A", "files": []}]}), encoding="utf-8")

    with pytest.raises(KeyError):
        load_catalog(path)
