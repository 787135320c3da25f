import json
from collections.abc import Callable
from datetime import date
from pathlib import Path
from typing import Any

import pytest
from helpers import NOW

from topcards.models.run_config import RunConfig


@pytest.fixture
def now() -> date:
    """Fixed reference date for deterministic ages."""
    return NOW


@pytest.fixture
def run_config(now: date) -> RunConfig:
    """Default config: main formats, 45-day half-life, five-year cutoff."""
    return RunConfig(
        formats=frozenset({"Standard", "Modern", "Pioneer", "Legacy"}),
        half_life_days=45.0,
        max_age_days=1825.0,
        weighting_enabled=True,
        now=now,
    )


@pytest.fixture
def decklist_dir(tmp_path: Path) -> Path:
    """Empty directory to hold decklist files."""
    directory = tmp_path / "decklists"
    directory.mkdir()
    return directory


@pytest.fixture
def write_decklist(decklist_dir: Path) -> Callable[..., Path]:
    """Factory that writes a payload to <decklist_dir>/<name> and returns the path."""

    def _write(name: str, payload: Any) -> Path:
        path = decklist_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(payload, str):
            path.write_text(payload, encoding="utf-8")
        else:
            path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write
