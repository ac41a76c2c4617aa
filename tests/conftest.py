import sys
from pathlib import Path
from typing import Dict, List

import pytest

# Add the repository root to sys.path so we can import question_ingest
ROOT_PATH = Path(__file__).resolve().parent.parent
if ROOT_PATH.as_posix() not in sys.path:
    sys.path.insert(0, ROOT_PATH.as_posix())

from question_ingest.data_models import Option, QuestionRecord  # noqa: E402
from question_ingest.fetcher import FetchFailure, FetchResult  # noqa: E402


S3_DOCUMENT = """# Practice exam

Q1. What is S3 used for?
A. Block storage
B. Object storage
Answer: B
Explanation: S3 is an object store.
"""


def make_record(question_id: str, text: str, source: str = "Test") -> QuestionRecord:
    return QuestionRecord(
        id=question_id,
        question_text=text,
        options=[Option("Yes", True), Option("No", False)],
        explanation="Because.",
        aws_service="General",
        source=source,
    )


def pad(text: str) -> str:
    """Pad a document past the minimum fetch length."""
    return text + "\n" + ("<!-- padding -->\n" * 10)


class FakeFetcher:
    """Serves documents from a dict; unknown URLs fail with HTTP 404."""

    def __init__(self, documents: Dict[str, str]):
        self.documents = documents
        self.requested: List[str] = []

    def __call__(self, url: str) -> FetchResult:
        self.requested.append(url)
        if url not in self.documents:
            return FetchResult(url, failure=FetchFailure.NON_SUCCESS_STATUS, detail="HTTP 404")
        return FetchResult(url, text=self.documents[url])


@pytest.fixture
def s3_document() -> str:
    return S3_DOCUMENT


@pytest.fixture
def no_sleep():
    """Records requested pauses instead of sleeping."""
    calls: List[float] = []
    return calls.append, calls
