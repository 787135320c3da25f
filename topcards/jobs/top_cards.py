"""
Rank the most played cards across tournament decklists.

Optionally fetches the decklist cache first, then aggregates every decklist
in the requested formats with time-decay weighting and prints one
"<score> <card name>" line per card.

Usage:
    python -m topcards.jobs.top_cards --fetch --formats Modern,Legacy --num 100
"""

import argparse
import logging
import sys
from collections.abc import Sequence
from datetime import date
from pathlib import Path

from pydantic import ValidationError

from topcards.config import Settings, get_settings
from topcards.models.ranking import RankedEntry
from topcards.models.run_config import RunConfig
from topcards.services.data_repository import FetchError, fetch_data_repository
from topcards.services.format_filter import parse_format_list
from topcards.services.loader import DataDirectoryMissing, LoadReport
from topcards.services.ranker import format_ranking
from topcards.services.top_cards import run

logger = logging.getLogger(__name__)


def build_parser(defaults: Settings | None = None) -> argparse.ArgumentParser:
    """Build the argument parser, taking defaults from settings."""
    if defaults is None:
        defaults = get_settings()

    parser = argparse.ArgumentParser(
        prog="top-cards",
        description="Collects the most played cards across specified MTG formats",
    )
    parser.add_argument(
        "-f",
        "--formats",
        default=defaults.formats,
        help=f"Comma-separated list of formats, '*' for all (default: {defaults.formats})",
    )
    parser.add_argument(
        "-n",
        "--num",
        type=int,
        default=defaults.top_n,
        help=f"Number of top cards to output (default: {defaults.top_n})",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output file (default: stdout)",
    )
    parser.add_argument(
        "-d",
        "--dir",
        type=Path,
        default=None,
        help="Base directory to search (defaults to --data-dir when --fetch is used)",
    )
    parser.add_argument(
        "-l",
        "--half-life",
        type=float,
        default=defaults.half_life_days,
        help=f"Half-life in days for time decay (default: {defaults.half_life_days:g})",
    )
    parser.add_argument(
        "-m",
        "--max-age",
        type=float,
        default=defaults.max_age_days,
        help=f"Maximum age in days to include (default: {defaults.max_age_days:g})",
    )
    parser.add_argument(
        "-w",
        "--no-weight",
        action="store_true",
        default=not defaults.weighting_enabled,
        help="Disable time-based weighting",
    )
    parser.add_argument(
        "--mainboard-only",
        action="store_true",
        default=not defaults.include_sideboard,
        help="Ignore sideboard cards",
    )
    parser.add_argument(
        "-F",
        "--fetch",
        action="store_true",
        help="Fetch/update the data repository before processing",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=defaults.data_dir,
        help=f"Directory for the data repository (default: {defaults.data_dir})",
    )
    parser.add_argument(
        "--data-repo",
        default=defaults.data_repo,
        help="Git URL for the data repository",
    )
    parser.add_argument(
        "--sparse-path",
        action="append",
        default=[],
        dest="sparse_paths",
        help="Only check out this path of the data repository (repeatable)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=defaults.workers,
        help=f"Worker threads for reading files (default: {defaults.workers})",
    )
    parser.add_argument(
        "--now",
        type=date.fromisoformat,
        default=None,
        help="Reference date YYYY-MM-DD for ages (default: today)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=defaults.debug,
        help="Enable debug logging",
    )
    return parser


def build_run_config(args: argparse.Namespace) -> RunConfig:
    """
    Build the immutable run config from parsed arguments.

    The reference date is fixed here, once, for the whole run.

    Raises:
        ValueError: If half-life or max age are out of range
    """
    return RunConfig(
        formats=parse_format_list(args.formats),
        half_life_days=args.half_life,
        max_age_days=args.max_age,
        weighting_enabled=not args.no_weight,
        now=args.now or date.today(),
        include_sideboard=not args.mainboard_only,
    )


def resolve_search_dir(args: argparse.Namespace) -> Path:
    """--dir if given, else the data directory when fetching, else the current directory."""
    if args.dir is not None:
        return args.dir
    if args.fetch:
        return args.data_dir
    return Path(".")


def write_ranking(entries: list[RankedEntry], output: Path | None) -> None:
    """Write ranked entries to a file, or stdout when output is None."""
    lines = format_ranking(entries)

    if output is None:
        for line in lines:
            sys.stdout.write(line + "\n")
        sys.stdout.flush()
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, "w", encoding="utf-8") as f:
        for line in lines:
            f.write(line + "\n")
    logger.info("Output written to %s", output)


def run_top_cards(args: argparse.Namespace) -> int:
    """
    Execute a run from parsed arguments.

    Returns:
        Process exit status (0 on success)
    """
    try:
        config = build_run_config(args)
        if args.num < 0:
            raise ValueError(f"--num must be non-negative, got {args.num}")
        if args.workers < 1:
            raise ValueError(f"--workers must be at least 1, got {args.workers}")
    except ValueError as e:
        logger.error("Invalid configuration: %s", e)
        return 1

    if args.fetch:
        try:
            fetch_data_repository(args.data_dir, args.data_repo, sparse_paths=args.sparse_paths)
        except FetchError as e:
            logger.error("Error fetching data: %s", e)
            return 1

    search_dir = resolve_search_dir(args)
    logger.info(
        "Ranking cards in %s for formats %s as of %s",
        search_dir,
        ", ".join(sorted(config.formats)) or "(none)",
        config.now.isoformat(),
    )

    report = LoadReport()
    try:
        entries = run(search_dir, config, top_n=args.num, workers=args.workers, report=report)
    except DataDirectoryMissing as e:
        logger.error("%s", e)
        return 1

    if report.skipped_count:
        logger.warning("Skipped %d unparseable files", report.skipped_count)
        for skipped in report.skipped:
            logger.debug("  %s: %s", skipped.path, skipped.reason)
    if report.invalid_quantities:
        logger.info("Defaulted %d invalid card quantities to 1", report.invalid_quantities)
    if report.invalid_dates:
        logger.info("Excluded %d decklists without a usable date", report.invalid_dates)

    write_ranking(entries, args.output)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point for ranking top cards."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        defaults = get_settings()
    except ValidationError as e:
        logger.error("Invalid configuration: %s", e)
        return 1

    args = build_parser(defaults).parse_args(argv)
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    return run_top_cards(args)


if __name__ == "__main__":
    sys.exit(main())
