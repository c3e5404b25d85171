"""Merge standings fragments and write the chat-ready standings report.

Usage:
    python -m src.standings_pipeline.run_merge [intake_dir] [output_file]

Examples:
    python -m src.standings_pipeline.run_merge
    python -m src.standings_pipeline.run_merge /path/to/intake result.txt
"""

import logging
import os
import sys
import tempfile
from pathlib import Path
from typing import Iterable, List, Optional

from src.logging_config import setup_logging
from src.standings_pipeline.config import INTAKE_DIR, RESULT_FILE
from src.standings_pipeline.formatting import ReportFormatter, ReportLayout
from src.standings_pipeline.grouping import ClassGrouper
from src.standings_pipeline.ingestion import FragmentLoader
from src.standings_pipeline.merging import DriverMerger
from src.standings_pipeline.models import ClassData, ClassStandings
from src.standings_pipeline.ranking import StandingsRanker

logger = logging.getLogger(__name__)


class ReportWriteError(Exception):
    """Raised when the report cannot be written to its destination."""


def class_sort_key(car_class: str):
    """Case-insensitive class ordering, raw name breaks ties."""
    return (car_class.casefold(), car_class)


def aggregate(class_records: Iterable[ClassData]) -> List[ClassStandings]:
    """Group, merge and rank class records.

    Returns one ClassStandings per class, sorted by class name.
    """
    grouped = ClassGrouper().group(class_records)
    merger = DriverMerger()
    ranker = StandingsRanker()

    results = [
        ClassStandings(
            car_class=car_class,
            standings=ranker.rank(merger.merge(standings)),
        )
        for car_class, standings in grouped.items()
    ]
    results.sort(key=lambda r: class_sort_key(r.car_class))
    return results


def write_report(report: str, output_file: Path) -> Path:
    """Write *report* atomically, so a failure leaves no partial file.

    Raises:
        ReportWriteError: if the report cannot be written.
    """
    output_file = Path(output_file)
    tmp_name = None
    try:
        output_file.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=output_file.parent,
            prefix=f".{output_file.name}.",
            suffix=".tmp",
            delete=False,
        ) as f:
            tmp_name = f.name
            f.write(report)
        os.replace(tmp_name, output_file)
    except OSError as e:
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise ReportWriteError(f"Cannot write report to {output_file}: {e}") from e

    logger.info("Wrote report (%d chars) to %s", len(report), output_file)
    return output_file


def run_pipeline(
    intake_dir: Optional[Path] = None,
    output_file: Optional[Path] = None,
    layout: Optional[ReportLayout] = None,
) -> str:
    """Run the complete standings merge.

    Args:
        intake_dir: Directory containing fragment files.
            Defaults to ``intake/``.
        output_file: Where to write the report.
            Defaults to ``result.txt``.
        layout: Report presentation settings.

    Returns:
        The formatted report.

    Raises:
        SourceUnavailableError: If the intake directory cannot be read.
        MalformedFragmentError: If any fragment is malformed.
        ReportWriteError: If the report cannot be written.
    """
    if intake_dir is None:
        intake_dir = INTAKE_DIR
    if output_file is None:
        output_file = RESULT_FILE

    logger.info("Starting standings merge (intake: %s)", intake_dir)

    # 1. Load
    logger.info("Step 1/3: Loading fragments...")
    class_records = FragmentLoader(intake_dir).read_all()

    # 2. Group, merge, rank
    logger.info("Step 2/3: Merging and ranking standings...")
    results = aggregate(class_records)
    for r in results:
        logger.info("  %s: %d driver(s)", r.car_class, len(r.standings))

    # 3. Format and write
    logger.info("Step 3/3: Formatting report...")
    report = ReportFormatter(layout).format(results)
    write_report(report, output_file)

    return report


if __name__ == "__main__":
    setup_logging()

    intake_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    output_file = Path(sys.argv[2]) if len(sys.argv) > 2 else None

    try:
        report = run_pipeline(intake_dir, output_file)
    except Exception:
        logger.exception("Standings merge failed")
        sys.exit(1)

    print(f"Results formatted and written to {output_file or RESULT_FILE}")
    print()
    print(report)
