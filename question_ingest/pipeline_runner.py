"""
Orchestration of an import run.

Sources are processed in catalog order and documents in declared order, one
fetch at a time with a fixed pause after each document. New questions are
tagged, checked against the existing corpus plus everything accepted so far,
and only numbered and written once every source has been processed.
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

from .catalog import DEFAULT_SOURCES, load_catalog
from .corpus_merger import merge_corpus
from .corpus_store import load_corpus, save_corpus
from .data_models import QuestionRecord, RunStatistics, SourceDescriptor
from .deduplication import DEFAULT_THRESHOLD, QuestionIndex
from .fetcher import DEFAULT_TIMEOUT, MIN_DOCUMENT_LENGTH, DocumentFetcher, FetchResult
from .question_parser import QuestionParser
from .report import print_report, save_statistics, statistics_frame
from .service_tagger import tag_record


logger = logging.getLogger(__name__)

DOCUMENT_DELAY_SECONDS = 0.5

FetchFn = Callable[[str], FetchResult]


@dataclass
class IngestConfig:
    """
    Settings of an import run.

    Attributes:
        corpus_path: Corpus read at start and replaced at the end
        backup_path: File receiving only the questions added by this run
        catalog_path: Optional JSON catalog replacing the built-in sources
        delay: Pause after each document, in seconds
        timeout: Per-request timeout, in seconds
        min_length: Shorter responses are treated as failed fetches
        threshold: Similarity above which a question counts as a duplicate
        require_answer: Drop questions where no option could be marked correct
        stats_path: Optional csv/json/xlsx export of the per-source statistics
    """
    corpus_path: Path
    backup_path: Path
    catalog_path: Optional[Path] = None
    delay: float = DOCUMENT_DELAY_SECONDS
    timeout: float = DEFAULT_TIMEOUT
    min_length: int = MIN_DOCUMENT_LENGTH
    threshold: float = DEFAULT_THRESHOLD
    require_answer: bool = False
    stats_path: Optional[Path] = None


@dataclass
class RunResult:
    """
    Attributes:
        accepted: New unique questions in discovery order (not yet numbered)
        stats: Per-source counters, in catalog order
    """
    accepted: List[QuestionRecord] = field(default_factory=list)
    stats: Dict[str, RunStatistics] = field(default_factory=dict)


def run_pipeline(
    sources: Sequence[SourceDescriptor],
    existing: List[QuestionRecord],
    fetch: FetchFn,
    parser: Optional[QuestionParser] = None,
    threshold: float = DEFAULT_THRESHOLD,
    delay: float = DOCUMENT_DELAY_SECONDS,
    sleep: Callable[[float], None] = time.sleep,
) -> RunResult:
    """
    Fetch, parse, tag and deduplicate every document of every source.

    Args:
        sources: Catalog to process, in order
        existing: Questions already in the corpus
        fetch: Callable returning a FetchResult for a document URL
        parser: Parser to use (default pattern table when None)
        threshold: Duplicate similarity threshold
        delay: Pause after each document, in seconds
        sleep: Function used for the pause

    Returns:
        RunResult with the accepted questions and per-source statistics.
        Nothing is written here.
    """
    parser = parser or QuestionParser()
    index = QuestionIndex(existing, threshold=threshold)
    result = RunResult()

    for source in sources:
        print(f"\nProcessing source: {source.name}")
        stats = result.stats.setdefault(source.name, RunStatistics())

        for path in source.files:
            stats.attempted += 1
            print(f"  Downloading: {path}")
            _process_document(source, path, fetch, parser, index, stats, result.accepted)
            sleep(delay)

    return result


def _process_document(
    source: SourceDescriptor,
    path: str,
    fetch: FetchFn,
    parser: QuestionParser,
    index: QuestionIndex,
    stats: RunStatistics,
    accepted: List[QuestionRecord],
) -> None:
    fetched = fetch(source.document_url(path))
    if not fetched.ok:
        stats.failed += 1
        logger.warning(
            "Skipping %s from %s: %s (%s)",
            path, source.name, fetched.failure.value, fetched.detail,
        )
        return
    stats.fetched += 1

    found = 0
    unique = 0
    for record in parser.parse(fetched.text, source.name):
        found += 1
        tag_record(record)
        if index.accept(record):
            unique += 1
            if record.correct_count == 0:
                stats.unanswered += 1
            accepted.append(record)

    stats.found += found
    stats.unique += unique
    print(f"    Found: {found}, Unique: {unique}")


def run_import(
    config: IngestConfig,
    fetch: Optional[FetchFn] = None,
    sources: Optional[Sequence[SourceDescriptor]] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> RunResult:
    """
    Run a complete import: load, process all sources, merge, persist, report.

    Both output files are written only after every source has been processed.
    When no new question was accepted nothing is written.

    Raises:
        CorpusPersistenceError: If the corpus cannot be read or either output
            cannot be written
    """
    existing = load_corpus(config.corpus_path)
    print(f"Current questions: {len(existing)}")

    if sources is None:
        sources = load_catalog(config.catalog_path) if config.catalog_path else DEFAULT_SOURCES

    fetcher = None
    if fetch is None:
        fetcher = DocumentFetcher(timeout=config.timeout, min_length=config.min_length)
        fetch = fetcher.fetch

    try:
        result = run_pipeline(
            sources,
            existing,
            fetch,
            parser=QuestionParser(require_answer=config.require_answer),
            threshold=config.threshold,
            delay=config.delay,
            sleep=sleep,
        )
    finally:
        if fetcher is not None:
            fetcher.close()

    if result.accepted:
        merge = merge_corpus(existing, result.accepted)
        # Backup first: a failed write must leave the corpus untouched
        save_corpus(config.backup_path, merge.new_records)
        save_corpus(config.corpus_path, merge.merged)

    print_report(result.stats, len(existing), result.accepted, config.corpus_path, config.backup_path)

    if config.stats_path is not None:
        save_statistics(statistics_frame(result.stats), config.stats_path)

    return result
