"""
Top cards services.

Loading, weighting, aggregation and ranking of tournament decklists.
"""

from topcards.services.aggregator import (
    aggregate_directory,
    aggregate_files,
    aggregate_records,
    fold_record,
    merge_weights,
)
from topcards.services.data_repository import FetchError, fetch_data_repository
from topcards.services.decay import decay_weight, record_weight
from topcards.services.format_filter import is_format_included, parse_format_list
from topcards.services.loader import (
    DataDirectoryMissing,
    LoadReport,
    ParseSkipped,
    discover_decklist_files,
    iter_decklists,
    load_decklist_file,
)
from topcards.services.ranker import format_entry, format_ranking, rank_cards
from topcards.services.top_cards import run

__all__ = [
    "DataDirectoryMissing",
    "FetchError",
    "LoadReport",
    "ParseSkipped",
    "aggregate_directory",
    "aggregate_files",
    "aggregate_records",
    "decay_weight",
    "discover_decklist_files",
    "fetch_data_repository",
    "fold_record",
    "format_entry",
    "format_ranking",
    "is_format_included",
    "iter_decklists",
    "load_decklist_file",
    "merge_weights",
    "parse_format_list",
    "rank_cards",
    "record_weight",
    "run",
]
