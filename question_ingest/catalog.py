"""
Source catalog for the question importer.

The default catalog lists the public repositories the corpus is built from.
A JSON catalog file can replace it, e.g. for tests or new sources.
"""

import json
from pathlib import Path
from typing import List

from .data_models import SourceDescriptor


DEFAULT_SOURCES: List[SourceDescriptor] = [
    SourceDescriptor(
        name="AWS-Practice-Exams",
        base_url="https://raw.githubusercontent.com/ExamProCo/AWS-Solutions-Architect-Associate/master/",
        files=(
            "practice-exam-1.md",
            "practice-exam-2.md",
            "practice-exam-3.md",
        ),
    ),
    SourceDescriptor(
        name="AWS-Dumps",
        base_url="https://raw.githubusercontent.com/kananinirav/AWS-Certified-Cloud-Practitioner-Notes/master/",
        files=(
            "practice-exams/practice-exam-1.md",
            "practice-exams/practice-exam-2.md",
        ),
    ),
    SourceDescriptor(
        name="Whizlabs-AWS",
        base_url="https://raw.githubusercontent.com/cloudacademy/aws-solutions-architect-associate-practice-tests/main/",
        files=(
            "test1.md",
            "test2.md",
            "test3.md",
        ),
    ),
]


def load_catalog(path: Path) -> List[SourceDescriptor]:
    """
    Load a source catalog from a JSON file.

    Expected structure::

        {"sources": [{"name": "...", "baseUrl": "https://...", "files": ["a.md", ...]}]}

    Args:
        path: Path to the JSON catalog

    Returns:
        Sources in declared order

    Raises:
        FileNotFoundError: If the file doesn't exist
        json.JSONDecodeError: If the file contains invalid JSON
        KeyError: If required fields are missing from the JSON structure
    """
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)

    sources = []
    for entry in raw.get("sources", []):
        sources.append(
            SourceDescriptor(
                name=entry["name"],
                base_url=entry["baseUrl"],
                files=tuple(entry["files"]),
            )
        )
    return sources
