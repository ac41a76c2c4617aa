"""
Console report and statistics export for an import run.
"""

from pathlib import Path
from typing import Dict, List

import pandas as pd

from .data_models import QuestionRecord, RunStatistics


STAT_COLUMNS = ["source", "attempted", "fetched", "failed", "found", "unique", "unanswered"]
STATS_FORMATS = (".csv", ".json", ".xlsx")


def statistics_frame(stats: Dict[str, RunStatistics]) -> pd.DataFrame:
    """One row per source, in catalog order."""
    rows = [s.as_row(name) for name, s in stats.items()]
    return pd.DataFrame(rows, columns=STAT_COLUMNS)


def service_histogram(records: List[QuestionRecord]) -> pd.DataFrame:
    """
    Count new records per service tag, most frequent first.

    Ties keep the order in which the tags were first seen.
    """
    frame = pd.DataFrame({"service": [r.aws_service for r in records]})
    if frame.empty:
        return pd.DataFrame(columns=["service", "count"])
    counts = frame.groupby("service", sort=False).size().reset_index(name="count")
    return counts.sort_values("count", ascending=False, kind="mergesort").reset_index(drop=True)


def print_report(
    stats: Dict[str, RunStatistics],
    existing_total: int,
    new_records: List[QuestionRecord],
    corpus_path: Path,
    backup_path: Path,
) -> None:
    """Print per-source statistics, totals and the service histogram."""
    print("\nSummary by source:")
    for name, s in stats.items():
        print(f"  {name}:")
        print(f"    - Documents attempted: {s.attempted}")
        print(f"    - Documents failed:    {s.failed}")
        print(f"    - Questions found:     {s.found}")
        print(f"    - Unique questions:    {s.unique}")
        if s.unanswered:
            print(f"    - Without answer:      {s.unanswered}")

    if not new_records:
        print("\nNo new unique questions found.")
        print(f"Total questions: {existing_total}")
        return

    print("\nImport complete")
    print(f"Total questions before: {existing_total}")
    print(f"New unique questions added: {len(new_records)}")
    print(f"Total questions now: {existing_total + len(new_records)}")
    print(f"Corpus updated: {corpus_path}")
    print(f"New questions backup: {backup_path}")

    print("\nNew questions by AWS service:")
    histogram = service_histogram(new_records)
    for service, count in zip(histogram["service"], histogram["count"]):
        print(f"  {service}: {count} questions")


def save_statistics(df: pd.DataFrame, output_path: Path) -> None:
    """
    Save the per-source statistics table.

    The format follows the file extension: ``.csv``, ``.json`` or ``.xlsx``.

    Raises:
        ValueError: If the extension is not supported
    """
    suffix = Path(output_path).suffix.lower()
    if suffix == ".csv":
        df.to_csv(output_path, index=False)
    elif suffix == ".xlsx":
        df.to_excel(output_path, index=False)
    elif suffix == ".json":
        df.to_json(output_path, orient="records", indent=2)
    else:
        raise ValueError(f"Unsupported format: {suffix}")

    print(f"Statistics saved to {output_path}")
