"""
Decklist data repository.

Clones or updates the git repository holding the decklist cache. Only a
shallow history is fetched; with sparse paths, only those directories are
checked out.
"""

import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path

from topcards.config import DEFAULT_DATA_REPO

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """Raised when a git command for the data repository fails."""

    def __init__(self, command: Sequence[str], detail: str):
        self.command = list(command)
        self.detail = detail
        super().__init__(f"{' '.join(self.command)} failed: {detail}")


def _git(args: Sequence[str], cwd: Path | None = None) -> None:
    command = ["git", *args]
    try:
        completed = subprocess.run(command, cwd=cwd, check=False)
    except OSError as e:
        raise FetchError(command, f"could not run git: {e}") from e

    if completed.returncode != 0:
        raise FetchError(command, f"exit status {completed.returncode}")


def fetch_data_repository(
    data_dir: Path,
    repo_url: str = DEFAULT_DATA_REPO,
    *,
    sparse_paths: Sequence[str] = (),
) -> Path:
    """
    Clone the data repository, or fast-forward it if already cloned.

    Args:
        data_dir: Local checkout directory
        repo_url: Git URL to clone from
        sparse_paths: Directories to check out (empty for the whole tree)

    Returns:
        The checkout directory

    Raises:
        FetchError: If any git command fails
    """
    data_dir = Path(data_dir)

    if (data_dir / ".git").exists():
        logger.info("Updating data repository in %s...", data_dir)
        _git(["pull", "--ff-only"], cwd=data_dir)
        if sparse_paths:
            _git(["sparse-checkout", "set", *sparse_paths], cwd=data_dir)
    else:
        logger.info("Cloning data repository to %s...", data_dir)
        data_dir.parent.mkdir(parents=True, exist_ok=True)

        clone_args = ["clone", "--depth=1"]
        if sparse_paths:
            clone_args += ["--filter=blob:none", "--sparse"]
        _git([*clone_args, repo_url, str(data_dir)])

        if sparse_paths:
            _git(["sparse-checkout", "set", *sparse_paths], cwd=data_dir)

    logger.info("Data repository ready.")
    return data_dir
