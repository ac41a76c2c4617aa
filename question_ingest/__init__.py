"""
Question ingestion package.

This package imports exam questions from public markdown sources, removes
near-duplicates against an existing corpus and merges the result into it.
"""

from .catalog import DEFAULT_SOURCES, load_catalog
from .corpus_audit import NearDuplicatePair, find_near_duplicates
from .corpus_merger import MergeResult, merge_corpus, next_identifier
from .corpus_store import CorpusPersistenceError, load_corpus, save_corpus
from .data_models import Option, QuestionRecord, RunStatistics, SourceDescriptor
from .deduplication import QuestionIndex, is_duplicate, jaccard_similarity, normalize_text
from .fetcher import DocumentFetcher, FetchFailure, FetchResult
from .pipeline_runner import IngestConfig, RunResult, run_import, run_pipeline
from .question_parser import ParserPatterns, ParserState, QuestionParser, parse_questions
from .service_tagger import detect_service, tag_record
from .text_formatting import improve_corpus, improve_question_text

__all__ = [
    # Data models
    "Option",
    "QuestionRecord",
    "RunStatistics",
    "SourceDescriptor",

    # Sources and fetching
    "DEFAULT_SOURCES",
    "load_catalog",
    "DocumentFetcher",
    "FetchFailure",
    "FetchResult",

    # Parsing and tagging
    "ParserPatterns",
    "ParserState",
    "QuestionParser",
    "parse_questions",
    "detect_service",
    "tag_record",

    # Deduplication
    "QuestionIndex",
    "is_duplicate",
    "jaccard_similarity",
    "normalize_text",
    "NearDuplicatePair",
    "find_near_duplicates",

    # Corpus persistence and merging
    "CorpusPersistenceError",
    "load_corpus",
    "save_corpus",
    "MergeResult",
    "merge_corpus",
    "next_identifier",
    "improve_corpus",
    "improve_question_text",

    # Main orchestration
    "IngestConfig",
    "RunResult",
    "run_import",
    "run_pipeline",
]
