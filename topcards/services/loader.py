"""
Decklist loader.

Discovers decklist JSON files under a directory and parses them into
DecklistRecord objects. A bad file never aborts the run: it is recorded as a
ParseSkipped entry and processing continues.
"""

import json
import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from topcards.models.decklist import DecklistRecord
from topcards.parsers.decklist_json import DecklistParseError, parse_decklist_payload

logger = logging.getLogger(__name__)

DECKLIST_SUFFIX = ".json"


class DataDirectoryMissing(Exception):
    """
    Raised when the decklist directory does not exist.

    Usually means the data was never fetched.
    """

    def __init__(self, directory: Path):
        self.directory = directory
        super().__init__(
            f"Decklist directory not found: {directory}. Run with --fetch to download it."
        )


@dataclass(frozen=True)
class ParseSkipped:
    """A file that could not be parsed and was left out of the run."""

    path: Path
    reason: str


@dataclass
class FileLoadResult:
    """Outcome of loading a single file."""

    path: Path
    records: list[DecklistRecord] = field(default_factory=list)
    skipped: ParseSkipped | None = None
    invalid_quantities: int = 0
    invalid_dates: int = 0


@dataclass
class LoadReport:
    """Running totals for a load over many files."""

    files_found: int = 0
    files_parsed: int = 0
    records_loaded: int = 0
    invalid_quantities: int = 0
    invalid_dates: int = 0
    skipped: list[ParseSkipped] = field(default_factory=list)

    @property
    def skipped_count(self) -> int:
        """Number of files left out because they could not be parsed."""
        return len(self.skipped)

    def add(self, result: FileLoadResult) -> None:
        """Fold one file's outcome into the totals."""
        if result.skipped is not None:
            self.skipped.append(result.skipped)
            return

        self.files_parsed += 1
        self.records_loaded += len(result.records)
        self.invalid_quantities += result.invalid_quantities
        self.invalid_dates += result.invalid_dates


def _is_hidden(path: Path, root: Path) -> bool:
    return any(part.startswith(".") for part in path.relative_to(root).parts)


def discover_decklist_files(directory: Path) -> list[Path]:
    """
    Find every decklist file under a directory.

    Args:
        directory: Root directory to search recursively

    Returns:
        Sorted list of JSON file paths. Files inside hidden directories
        (e.g. .git) are ignored.

    Raises:
        DataDirectoryMissing: If the directory does not exist
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise DataDirectoryMissing(directory)

    return sorted(
        path
        for path in directory.rglob(f"*{DECKLIST_SUFFIX}")
        if path.is_file() and not _is_hidden(path, directory)
    )


def load_decklist_file(path: Path) -> FileLoadResult:
    """
    Load all decklist records from one file.

    Never raises for bad content; unreadable or malformed files come back
    with `skipped` set.
    """
    try:
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Skipping unreadable file %s: %s", path, e)
        return FileLoadResult(path=path, skipped=ParseSkipped(path, f"unreadable: {e}"))
    except (ValueError, RecursionError) as e:
        # JSONDecodeError, oversized integer literals and runaway nesting
        logger.warning("Skipping malformed JSON %s: %s", path, e)
        return FileLoadResult(path=path, skipped=ParseSkipped(path, f"invalid JSON: {e}"))

    try:
        parsed = parse_decklist_payload(payload, source=path)
    except DecklistParseError as e:
        logger.warning("Skipping %s: %s", path, e)
        return FileLoadResult(path=path, skipped=ParseSkipped(path, str(e)))

    return FileLoadResult(
        path=path,
        records=parsed.records,
        invalid_quantities=parsed.invalid_quantities,
        invalid_dates=parsed.invalid_dates,
    )


def iter_decklists(
    directory: Path,
    report: LoadReport | None = None,
) -> Iterator[DecklistRecord]:
    """
    Lazily yield every decklist record found under a directory.

    Args:
        directory: Root directory of decklist files
        report: Optional LoadReport updated as files are read

    Raises:
        DataDirectoryMissing: If the directory does not exist (raised on first iteration)
    """
    paths = discover_decklist_files(directory)
    if report is not None:
        report.files_found += len(paths)

    for path in paths:
        result = load_decklist_file(path)
        if report is not None:
            report.add(result)
        yield from result.records
