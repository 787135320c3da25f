"""
Top cards service.

Entry point for the aggregation core: directory + RunConfig in, ranked cards out.
"""

import logging
from pathlib import Path

from topcards.models.ranking import RankedEntry
from topcards.models.run_config import RunConfig
from topcards.services.aggregator import aggregate_directory
from topcards.services.loader import LoadReport
from topcards.services.ranker import rank_cards

logger = logging.getLogger(__name__)


def run(
    directory: Path,
    config: RunConfig,
    *,
    top_n: int | None = None,
    workers: int = 1,
    report: LoadReport | None = None,
) -> list[RankedEntry]:
    """
    Rank the most played cards in a directory of decklists.

    Args:
        directory: Directory of decklist JSON files
        config: Run configuration (formats, decay, reference date)
        top_n: Maximum number of cards to return (None for all)
        workers: Worker threads for file processing
        report: Optional LoadReport filled in with load statistics

    Returns:
        Cards ordered by weighted score, highest first

    Raises:
        DataDirectoryMissing: If the directory does not exist
    """
    if report is None:
        report = LoadReport()

    weights = aggregate_directory(directory, config, workers=workers, report=report)
    ranked = rank_cards(weights, top_n)

    logger.info(
        "Ranked %d of %d cards from %d records (%d files skipped)",
        len(ranked),
        len(weights),
        report.records_loaded,
        report.skipped_count,
    )
    return ranked
