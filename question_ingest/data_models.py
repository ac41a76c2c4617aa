"""
Data models for the question ingestion pipeline.

This module contains the core data structures shared by the parser, the
deduplicator, the merger and the report.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple


# Keys of the persisted corpus format, in the order they are written
RECORD_KEYS = ("id", "questionText", "options", "explanation", "awsService", "source")
OPTION_KEYS = ("text", "isCorrect")


@dataclass
class Option:
    """
    A single answer option of a multiple-choice question.

    Attributes:
        text: The option text, without its letter prefix
        is_correct: Whether this option is the declared answer
        extra: Unknown keys read from an existing corpus, written back untouched
    """
    text: str
    is_correct: bool = False
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"text": self.text, "isCorrect": self.is_correct}
        for key, value in self.extra.items():
            data.setdefault(key, value)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Option":
        return cls(
            text=str(data.get("text", "")),
            is_correct=bool(data.get("isCorrect", False)),
            extra={k: v for k, v in data.items() if k not in OPTION_KEYS},
        )


@dataclass
class QuestionRecord:
    """
    Represents a question of the corpus.

    Attributes:
        id: Unique identifier ("q<n>"); empty until the merger assigns one
        question_text: The question stem
        options: Ordered answer options (at least two for parsed records)
        explanation: Explanation text shown after answering
        aws_service: Service tag assigned by the tagger
        source: Label of the source the question was imported from
        extra: Unknown keys read from an existing corpus, written back untouched
    """
    id: str
    question_text: str
    options: List[Option]
    explanation: str = ""
    aws_service: str = "General"
    source: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def correct_count(self) -> int:
        """Number of options flagged as correct (0 when no answer was declared)."""
        return sum(1 for option in self.options if option.is_correct)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "questionText": self.question_text,
            "options": [option.to_dict() for option in self.options],
            "explanation": self.explanation,
            "awsService": self.aws_service,
            "source": self.source,
        }
        for key, value in self.extra.items():
            data.setdefault(key, value)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "QuestionRecord":
        """
        Build a record from one entry of a persisted corpus.

        Raises:
            KeyError: If the entry has no question text
            TypeError: If the question text is not a string
        """
        question_text = data["questionText"]
        if not isinstance(question_text, str):
            raise TypeError(f"questionText must be a string, got {type(question_text).__name__}")
        return cls(
            id=str(data.get("id", "")),
            question_text=question_text,
            options=[Option.from_dict(o) for o in data.get("options") or []],
            explanation=data.get("explanation") or "",
            aws_service=data.get("awsService") or "General",
            source=data.get("source") or "",
            extra={k: v for k, v in data.items() if k not in RECORD_KEYS},
        )


@dataclass(frozen=True)
class SourceDescriptor:
    """
    A public location holding exam-question documents.

    Attributes:
        name: Source label copied into every record imported from it
        base_url: Location the document paths are resolved against
        files: Ordered document references
    """
    name: str
    base_url: str
    files: Tuple[str, ...]

    def document_url(self, path: str) -> str:
        return self.base_url + path


@dataclass
class RunStatistics:
    """Per-source counters collected during one run."""
    attempted: int = 0
    fetched: int = 0
    failed: int = 0
    found: int = 0
    unique: int = 0
    unanswered: int = 0

    def as_row(self, source: str) -> Dict[str, Any]:
        return {
            "source": source,
            "attempted": self.attempted,
            "fetched": self.fetched,
            "failed": self.failed,
            "found": self.found,
            "unique": self.unique,
            "unanswered": self.unanswered,
        }


def option_letter(index: int) -> str:
    """Letter label of the option at ``index`` (0 -> "A")."""
    return chr(ord("A") + index)

