"""
Reading and writing the persisted question corpus.

The corpus is a JSON array of question objects. Writes go to a temporary file
next to the target which is then renamed over it, so readers see either the
old or the new corpus and an interrupted run leaves the old one intact.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import List

from .data_models import QuestionRecord


logger = logging.getLogger(__name__)


class CorpusPersistenceError(RuntimeError):
    """The corpus could not be read or written; the run cannot continue."""


def load_corpus(path: Path) -> List[QuestionRecord]:
    """
    Load the corpus at ``path``.

    Args:
        path: Location of the JSON corpus

    Returns:
        Records in file order; an empty list if the file does not exist

    Raises:
        CorpusPersistenceError: If the file cannot be read, is not valid JSON,
            is not a JSON array, or holds an entry without question text
    """
    path = Path(path)
    if not path.exists():
        logger.info("No corpus at %s, starting empty", path)
        return []

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise CorpusPersistenceError(f"Cannot read corpus {path}: {e}") from e

    if not isinstance(raw, list):
        raise CorpusPersistenceError(f"Corpus {path} is not a JSON array")

    try:
        return [QuestionRecord.from_dict(entry) for entry in raw]
    except (KeyError, TypeError, AttributeError) as e:
        raise CorpusPersistenceError(f"Malformed question in corpus {path}: {e!r}") from e


def save_corpus(path: Path, records: List[QuestionRecord]) -> None:
    """
    Atomically replace ``path`` with ``records`` as a JSON array.

    Raises:
        CorpusPersistenceError: If the file cannot be written
    """
    path = Path(path)
    payload = [record.to_dict() for record in records]
    tmp_name = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent)
        )
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise CorpusPersistenceError(f"Cannot write corpus {path}: {e}") from e

    logger.info("Wrote %d questions to %s", len(records), path)
