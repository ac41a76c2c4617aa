"""
Line-oriented parser for exam-question markdown.

Question documents from different repositories share a loose layout::

    Q1. What is S3 used for?
    A. Block storage
    B. Object storage
    Answer: B
    Explanation: S3 is an object store.

The parser scans a document once, top to bottom, holding at most one question
under construction. Anything it does not recognise is skipped silently; a
document with no recognisable question simply yields nothing.

Supporting another layout means adding rows to the pattern tables below.
"""

import enum
import re
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence

from .data_models import Option, QuestionRecord, option_letter


NO_EXPLANATION = "No explanation provided"

# Question markers, tried in order: "Q1.", "Question 2:", "**Question 3**", "4."
QUESTION_START_PATTERNS: Sequence[str] = (
    r"Q\d*[.:)]?",
    r"Question \d+[.:]?",
    r"\*\*Question \d+[.:]?(?:\*\*)?",
    r"\d+\.",
)
OPTION_PATTERN = r"([A-D])[.):]\s*(.*)"
ANSWER_PATTERN = r"(?:Answer|Correct Answer|Solution):\s*(.*)"
EXPLANATION_PATTERN = r"(?:Explanation|Rationale|Why):\s*(.*)"
# Lines starting like a marker never extend an explanation, even when malformed
MARKER_PREFIX_PATTERN = r"(?:Q\d*\b|Question\b|Answer\b|Explanation\b|[A-D][.):])"


class ParserState(enum.Enum):
    IDLE = "idle"
    COLLECTING_OPTIONS = "collecting-options"
    COLLECTING_EXPLANATION = "collecting-explanation"


@dataclass(frozen=True)
class ParserPatterns:
    """Compiled pattern table driving the parser."""
    question_start: re.Pattern
    option: re.Pattern
    answer: re.Pattern
    explanation: re.Pattern
    marker_prefix: re.Pattern

    @classmethod
    def compile(
        cls,
        question_start: Sequence[str] = QUESTION_START_PATTERNS,
        option: str = OPTION_PATTERN,
        answer: str = ANSWER_PATTERN,
        explanation: str = EXPLANATION_PATTERN,
        marker_prefix: str = MARKER_PREFIX_PATTERN,
    ) -> "ParserPatterns":
        start = r"^(?:" + "|".join(question_start) + r")\s+(.*)$"
        return cls(
            question_start=re.compile(start),
            option=re.compile(r"^" + option + r"$"),
            answer=re.compile(r"^" + answer + r"$", re.IGNORECASE),
            explanation=re.compile(r"^" + explanation + r"$", re.IGNORECASE),
            marker_prefix=re.compile(r"^" + marker_prefix, re.IGNORECASE),
        )

    def is_marker(self, line: str) -> bool:
        return bool(self.marker_prefix.match(line))


DEFAULT_PATTERNS = ParserPatterns.compile()


@dataclass
class _Accumulator:
    question_text: str
    options: List[str] = field(default_factory=list)
    answer: str = ""
    explanation: str = ""

    def is_well_formed(self) -> bool:
        return bool(self.question_text) and len(self.options) > 0


class QuestionParser:
    """
    Finite-state accumulator turning one document into question records.

    Records come out without an identifier and with the default service tag;
    the tagger and the merger fill those in later.

    Args:
        patterns: Pattern table to recognise markers with
        require_answer: Drop records where no option could be marked correct.
            By default such records are kept with every option marked incorrect.
    """

    def __init__(
        self,
        patterns: ParserPatterns = DEFAULT_PATTERNS,
        require_answer: bool = False,
    ) -> None:
        self.patterns = patterns
        self.require_answer = require_answer
        self.state = ParserState.IDLE
        self._current: Optional[_Accumulator] = None

    def parse(self, text: str, source: str) -> Iterator[QuestionRecord]:
        """
        Lazily parse ``text`` into question records.

        Args:
            text: Raw markdown of one document
            source: Source label stored on every record

        Yields:
            QuestionRecord for every well-formed question with at least two options
        """
        self._reset()
        for raw_line in text.splitlines():
            flushed = self.step(raw_line.strip())
            if flushed is not None:
                record = self._build(flushed, source)
                if record is not None:
                    yield record

        last = self._flush()
        if last is not None:
            record = self._build(last, source)
            if record is not None:
                yield record

    def step(self, line: str) -> Optional[_Accumulator]:
        """
        Apply one line to the state machine.

        Returns:
            The finished accumulator when ``line`` starts a new question and the
            previous one was well formed, otherwise None
        """
        p = self.patterns

        m = p.question_start.match(line)
        if m:
            finished = self._flush()
            self._current = _Accumulator(question_text=m.group(1).strip())
            self.state = ParserState.COLLECTING_OPTIONS
            return finished

        current = self._current
        if current is None:
            return None

        m = p.option.match(line)
        if m:
            option_text = m.group(2).strip()
            if option_text:
                current.options.append(option_text)
            return None

        m = p.answer.match(line)
        if m:
            current.answer = m.group(1).strip()
            return None

        m = p.explanation.match(line)
        if m:
            current.explanation = m.group(1).strip()
            if current.explanation:
                self.state = ParserState.COLLECTING_EXPLANATION
            else:
                self.state = ParserState.COLLECTING_OPTIONS
            return None

        # Continuation of a multi-line explanation
        if self.state is ParserState.COLLECTING_EXPLANATION and line and not p.is_marker(line):
            current.explanation += " " + line

        return None

    def _flush(self) -> Optional[_Accumulator]:
        current = self._current
        self._reset()
        if current is not None and current.is_well_formed():
            return current
        return None

    def _reset(self) -> None:
        self._current = None
        self.state = ParserState.IDLE

    def _build(self, acc: _Accumulator, source: str) -> Optional[QuestionRecord]:
        if len(acc.options) < 2:
            return None

        answer_letter = acc.answer[:1].upper()
        options = [
            Option(text=text, is_correct=bool(answer_letter) and option_letter(i) == answer_letter)
            for i, text in enumerate(acc.options)
        ]
        record = QuestionRecord(
            id="",
            question_text=acc.question_text,
            options=options,
            explanation=acc.explanation or NO_EXPLANATION,
            source=source,
        )
        if self.require_answer and record.correct_count == 0:
            return None
        return record


def parse_questions(text: str, source: str, require_answer: bool = False) -> Iterator[QuestionRecord]:
    """Parse one document with the default pattern table."""
    return QuestionParser(require_answer=require_answer).parse(text, source)
