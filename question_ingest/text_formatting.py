"""
Readability pass for long scenario questions.

Imported questions often arrive as one long paragraph describing a company,
its architecture, a problem and finally the actual question. This module
splits such paragraphs into labelled sections using an ordered table of
rewrite rules. Texts that already carry section headings are left alone.
"""

import logging
import re
from dataclasses import dataclass
from typing import List

from .data_models import QuestionRecord


logger = logging.getLogger(__name__)

SECTION_HEADINGS = ("**Current Architecture:**", "**Problem:**", "**Background:**")

LONG_TEXT = 200
LONG_SINGLE_LINE = 150


@dataclass(frozen=True)
class RewriteRule:
    pattern: re.Pattern
    replacement: str


def _rule(pattern: str, replacement: str) -> RewriteRule:
    return RewriteRule(re.compile(pattern), replacement)


REWRITE_RULES: List[RewriteRule] = [
    # Company scenario describing an architecture and an analysis task
    _rule(
        r"^(A [^.]+company[^.]+\.) ([^.]+architecture[^.]+\.) ([^.]+stores?[^.]+\.) ([^.]+analyzing[^.]+\.) (.+)$",
        r"\1\n\n**Current Architecture:**\n• \2\n• \3\n\n**Analysis:**\n• \4\n\n**Question:**\n\5",
    ),
    # Startup or company on AWS with a recent problem
    _rule(
        r"^(A [^.]+(?:startup|company)[^.]+AWS\.) ([^.]+(?:architecture|setup)[^.]+\.) ([^.]+(?:Recently|Currently)[^.]+\.) (.+)$",
        r"\1\n\n**Current Setup:**\n• \2\n\n**Problem:**\n• \3\n\n**Question:**\n\4",
    ),
    # Long opening sentence followed by "The ..." background
    _rule(
        r"^([^.]{50,}\.) (The [^.]{50,}\.) ([^.]{30,}\.) (.+)$",
        r"\1\n\n**Background:**\n\2 \3\n\n**Question:**\n\4",
    ),
    # Healthcare, firm or organization with a policy requirement
    _rule(
        r"^(A [^.]+(?:healthcare|firm|organization)[^.]+\.) ([^.]+application[^.]+\.) ([^.]+policy[^.]+\.) (.+)$",
        r"\1\n\n**Current Setup:**\n• \2\n\n**Requirements:**\n• \3\n\n**Question:**\n\4",
    ),
    # Media or streaming scenario
    _rule(
        r"^(A [^.]+(?:media|streaming)[^.]+\.) ([^.]+users[^.]+\.) ([^.]+team[^.]+\.) (.+)$",
        r"\1\n\n**Current Situation:**\n• \2\n\n**Challenge:**\n• \3\n\n**Question:**\n\4",
    ),
    # Team objective
    _rule(
        r"^(The [^.]+team[^.]+\.) ([^.]+wants to[^.]+\.) (.+)$",
        r"\1\n\n**Objective:**\n• \2\n\n**Question:**\n\3",
    ),
    # Trailing interrogative sentence
    _rule(
        r"\. (Which|What|How|As a [^,]+,) ([^?]+\?)",
        r".\n\n**Question:**\n\1 \2",
    ),
    _rule(
        r"\. (Recently|Currently), ([^.]+\.)",
        r".\n\n**Current Status:**\n• \1, \2",
    ),
    _rule(
        r"\. (The (?:company|team|organization) [^.]+\.)",
        r".\n\n**Context:**\n• \1",
    ),
    # Sentence naming two services
    _rule(
        r"([^.]+Amazon [A-Z][^.]+) and ([^.]+Amazon [A-Z][^.]+\.)",
        r"\1\n• \2",
    ),
]

_LONG_SENTENCE = re.compile(r"(\. )([A-Z][^.]{80,}\.)")
_EXTRA_BLANK_LINES = re.compile(r"\n{3,}")


def improve_question_text(text: str) -> str:
    """
    Restructure a long question text into labelled sections.

    Returns ``text`` unchanged if it already contains section headings.
    """
    if any(heading in text for heading in SECTION_HEADINGS):
        return text

    improved = text
    for rule in REWRITE_RULES:
        improved = rule.pattern.sub(rule.replacement, improved)

    if "\n" not in improved:
        improved = _LONG_SENTENCE.sub(r"\1\n\n\2", improved)

    return _EXTRA_BLANK_LINES.sub("\n\n", improved).strip()


def needs_improvement(text: str) -> bool:
    return len(text) > LONG_TEXT or ("\n" not in text and len(text) > LONG_SINGLE_LINE)


def improve_corpus(records: List[QuestionRecord]) -> List[str]:
    """
    Rewrite long question texts in place.

    Returns:
        Identifiers of the records whose text changed
    """
    changed = []
    for record in records:
        if not needs_improvement(record.question_text):
            continue
        improved = improve_question_text(record.question_text)
        if improved != record.question_text:
            logger.debug(
                "Improved %s: %d -> %d characters",
                record.id, len(record.question_text), len(improved),
            )
            record.question_text = improved
            changed.append(record.id)
    return changed
