"""
Weighted card aggregation.

Folds decklist records into a single card -> score mapping, where each card's
score is the sum of `quantity * weight` over every surviving decklist.

INVARIANTS:
- A record with weight 0.0 (too old, undated, filtered out) touches nothing,
  so a card only seen in such records never appears in the result
- The fold is associative and commutative: per-file partial maps can be built
  independently and summed afterwards
- Partial maps are merged in path order on the calling thread, so sequential
  and parallel runs produce the same output
"""

import logging
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from topcards.models.decklist import DecklistRecord
from topcards.models.ranking import AggregateWeight
from topcards.models.run_config import RunConfig
from topcards.services.decay import record_weight
from topcards.services.format_filter import is_format_included
from topcards.services.loader import (
    FileLoadResult,
    LoadReport,
    discover_decklist_files,
    load_decklist_file,
)

logger = logging.getLogger(__name__)


def fold_record(
    weights: AggregateWeight,
    record: DecklistRecord,
    weight: float,
    include_sideboard: bool = True,
) -> None:
    """
    Add one record's weighted card counts into `weights` in place.

    Does nothing when weight is 0.0.
    """
    if weight <= 0.0:
        return

    for entry in record.all_entries(include_sideboard):
        weights[entry.name] = weights.get(entry.name, 0.0) + entry.quantity * weight


def effective_weight(record: DecklistRecord, config: RunConfig) -> float:
    """Weight of a record after the format filter; 0.0 if it is filtered out."""
    if not is_format_included(record.format, config.formats):
        return 0.0
    return record_weight(record, config)


def aggregate_records(
    records: Iterable[DecklistRecord],
    config: RunConfig,
) -> AggregateWeight:
    """
    Aggregate weighted card counts over a stream of records.

    This is the sequential reference implementation.
    """
    weights: AggregateWeight = {}
    folded = 0

    for record in records:
        weight = effective_weight(record, config)
        if weight <= 0.0:
            continue
        fold_record(weights, record, weight, config.include_sideboard)
        folded += 1

    logger.debug("Folded %d records into %d cards", folded, len(weights))
    return weights


def merge_weights(partials: Iterable[AggregateWeight]) -> AggregateWeight:
    """Sum partial maps key by key."""
    merged: AggregateWeight = {}
    for partial in partials:
        for name, score in partial.items():
            merged[name] = merged.get(name, 0.0) + score
    return merged


def _aggregate_file(path: Path, config: RunConfig) -> tuple[FileLoadResult, AggregateWeight]:
    result = load_decklist_file(path)
    return result, aggregate_records(result.records, config)


def aggregate_files(
    paths: Sequence[Path],
    config: RunConfig,
    *,
    workers: int = 1,
    report: LoadReport | None = None,
) -> AggregateWeight:
    """
    Aggregate a list of decklist files.

    Each file is folded into its own partial map; the partial maps are then
    merged in the order of `paths`.

    Args:
        paths: Decklist files to process
        config: Run configuration
        workers: Number of worker threads (1 = sequential)
        report: Optional LoadReport updated with per-file outcomes

    Raises:
        ValueError: If workers is less than 1
    """
    if workers < 1:
        raise ValueError(f"workers must be at least 1, got {workers}")

    if report is not None:
        report.files_found += len(paths)

    if workers == 1 or len(paths) <= 1:
        outcomes = [_aggregate_file(path, config) for path in paths]
    else:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            # map() yields in submission order, keeping the merge deterministic
            outcomes = list(executor.map(lambda p: _aggregate_file(p, config), paths))

    if report is not None:
        for result, _ in outcomes:
            report.add(result)

    return merge_weights(partial for _, partial in outcomes)


def aggregate_directory(
    directory: Path,
    config: RunConfig,
    *,
    workers: int = 1,
    report: LoadReport | None = None,
) -> AggregateWeight:
    """
    Aggregate every decklist file under a directory.

    Raises:
        DataDirectoryMissing: If the directory does not exist
    """
    paths = discover_decklist_files(directory)
    logger.info("Processing %d files...", len(paths))
    return aggregate_files(paths, config, workers=workers, report=report)
