import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from question_ingest import (
    CorpusPersistenceError,
    IngestConfig,
    find_near_duplicates,
    improve_corpus,
    load_corpus,
    run_import,
    save_corpus,
)
from question_ingest.deduplication import DEFAULT_THRESHOLD
from question_ingest.report import STATS_FORMATS


DEFAULT_CORPUS_PATH = Path("client/public/questions.json")
DEFAULT_BACKUP_PATH = Path("new_questions_backup.json")


def run_improve(corpus_path: Path) -> None:
    """Restructure long question texts of the corpus in place."""
    questions = load_corpus(corpus_path)
    changed = improve_corpus(questions)
    if changed:
        save_corpus(corpus_path, questions)

    print(f"Questions examined: {len(questions)}")
    print(f"Questions improved: {len(changed)}")
    for question_id in changed:
        print(f"  Improved {question_id}")


def run_audit(corpus_path: Path, threshold: float) -> None:
    """Report near-duplicate pairs already present in the corpus."""
    questions = load_corpus(corpus_path)
    pairs = find_near_duplicates(questions, threshold=threshold)

    print(f"Total questions: {len(questions)}")
    print(f"Near-duplicate pairs found: {len(pairs)}")
    for pair in pairs[:20]:
        print(f"  {pair.first_id} & {pair.second_id}: {pair.similarity:.2f}")
    if len(pairs) > 20:
        print(f"  ... and {len(pairs) - 20} more")


def main(argv: Optional[List[str]] = None) -> None:
    """Command line interface for the question importer."""
    parser = argparse.ArgumentParser(
        description="Import unique exam questions from public sources into a JSON corpus."
    )
    parser.add_argument(
        "command",
        nargs="?",
        default="import",
        choices=["import", "improve", "audit"],
        help="import: fetch and merge new questions (default); "
        "improve: restructure long question texts; audit: list near-duplicates.",
    )

    # Files
    parser.add_argument(
        "--corpus-file",
        type=Path,
        default=None,
        help="Corpus JSON to read and update. If not provided, uses QUESTION_CORPUS_PATH env var "
        f"or {DEFAULT_CORPUS_PATH}.",
    )
    parser.add_argument(
        "--backup-file",
        type=Path,
        default=DEFAULT_BACKUP_PATH,
        help="File receiving only the questions added by this run.",
    )
    parser.add_argument(
        "--catalog-file",
        type=Path,
        default=None,
        help="Optional JSON catalog of sources replacing the built-in list.",
    )
    parser.add_argument(
        "--stats-file",
        type=Path,
        default=None,
        help="Optional export of per-source statistics (.csv, .json or .xlsx).",
    )

    # Fetching
    parser.add_argument(
        "--delay", type=float, default=0.5, help="Seconds to wait after each document."
    )
    parser.add_argument(
        "--timeout", type=float, default=30.0, help="Per-request timeout in seconds."
    )
    parser.add_argument(
        "--min-length",
        type=int,
        default=100,
        help="Responses shorter than this many characters are treated as failures.",
    )

    # Parsing and deduplication
    parser.add_argument(
        "--threshold",
        type=float,
        default=DEFAULT_THRESHOLD,
        help="Word-set similarity above which a question is a duplicate.",
    )
    parser.add_argument(
        "--require-answer",
        action="store_true",
        help="Drop questions whose answer could not be matched to an option.",
    )

    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Resolve corpus location
    if args.corpus_file:
        corpus_path = args.corpus_file
    else:
        corpus_path = Path(os.getenv("QUESTION_CORPUS_PATH", DEFAULT_CORPUS_PATH))

    if not 0.0 <= args.threshold <= 1.0:
        raise RuntimeError("--threshold must be between 0 and 1")
    if args.stats_file and args.stats_file.suffix.lower() not in STATS_FORMATS:
        raise RuntimeError(f"--stats-file must end in one of {', '.join(STATS_FORMATS)}")

    try:
        if args.command == "improve":
            run_improve(corpus_path)
        elif args.command == "audit":
            run_audit(corpus_path, args.threshold)
        else:
            config = IngestConfig(
                corpus_path=corpus_path,
                backup_path=args.backup_file,
                catalog_path=args.catalog_file,
                delay=args.delay,
                timeout=args.timeout,
                min_length=args.min_length,
                threshold=args.threshold,
                require_answer=args.require_answer,
                stats_path=args.stats_file,
            )
            run_import(config)
    except CorpusPersistenceError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
