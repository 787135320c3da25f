"""Tests for the top cards CLI job."""

import argparse
from collections.abc import Callable
from datetime import date
from pathlib import Path
from unittest.mock import patch

import pytest
from helpers import NOW, days_ago, deck, make_tournament

from topcards.config import Settings, get_settings
from topcards.jobs.top_cards import (
    build_parser,
    build_run_config,
    main,
    resolve_search_dir,
    write_ranking,
)
from topcards.models.ranking import RankedEntry
from topcards.services.data_repository import FetchError


@pytest.fixture
def populated_dir(decklist_dir: Path, write_decklist: Callable[..., Path]) -> Path:
    write_decklist(
        "modern.json",
        make_tournament(
            "Modern",
            days_ago(0),
            [deck({"Lightning Bolt": 4, "Ragavan": 4}), deck({"Lightning Bolt": 4})],
        ),
    )
    write_decklist(
        "legacy.json", make_tournament("Legacy", days_ago(45), [deck({"Brainstorm": 4})])
    )
    write_decklist(
        "vintage.json", make_tournament("Vintage", days_ago(0), [deck({"Black Lotus": 1})])
    )
    return decklist_dir


def base_args(*extra: str) -> list[str]:
    return ["--now", NOW.isoformat(), *extra]


class TestBuildParser:
    def test_defaults_from_settings(self) -> None:
        defaults = Settings(
            formats="Pauper",
            top_n=10,
            half_life_days=30.0,
            max_age_days=365.0,
            weighting_enabled=False,
            include_sideboard=False,
        )

        args = build_parser(defaults).parse_args([])

        assert args.formats == "Pauper"
        assert args.num == 10
        assert args.half_life == 30.0
        assert args.max_age == 365.0
        assert args.no_weight is True
        assert args.mainboard_only is True

    def test_short_flags(self) -> None:
        args = build_parser().parse_args(
            ["-f", "Modern", "-n", "3", "-l", "10", "-m", "20", "-w", "-F", "-d", "x"]
        )

        assert args.formats == "Modern"
        assert args.num == 3
        assert args.half_life == 10.0
        assert args.max_age == 20.0
        assert args.no_weight
        assert args.fetch
        assert args.dir == Path("x")

    def test_now_parsed_as_date(self) -> None:
        args = build_parser().parse_args(["--now", "2024-02-29"])
        assert args.now == date(2024, 2, 29)

    def test_sparse_paths_repeatable(self) -> None:
        args = build_parser().parse_args(["--sparse-path", "a", "--sparse-path", "b"])
        assert args.sparse_paths == ["a", "b"]


class TestBuildRunConfig:
    def test_from_args(self) -> None:
        args = build_parser().parse_args(
            ["-f", "Modern, Legacy", "-l", "30", "-w", "--mainboard-only", "--now", "2024-01-02"]
        )

        config = build_run_config(args)

        assert config.formats == frozenset({"Modern", "Legacy"})
        assert config.half_life_days == 30.0
        assert config.weighting_enabled is False
        assert config.include_sideboard is False
        assert config.now == date(2024, 1, 2)

    def test_now_defaults_to_today(self) -> None:
        config = build_run_config(build_parser().parse_args([]))
        assert config.now == date.today()


class TestResolveSearchDir:
    def test_explicit_dir_wins(self) -> None:
        args = argparse.Namespace(dir=Path("a"), fetch=True, data_dir=Path("b"))
        assert resolve_search_dir(args) == Path("a")

    def test_data_dir_when_fetching(self) -> None:
        args = argparse.Namespace(dir=None, fetch=True, data_dir=Path("b"))
        assert resolve_search_dir(args) == Path("b")

    def test_current_directory_otherwise(self) -> None:
        args = argparse.Namespace(dir=None, fetch=False, data_dir=Path("b"))
        assert resolve_search_dir(args) == Path(".")


class TestWriteRanking:
    def test_writes_file(self, tmp_path: Path) -> None:
        output = tmp_path / "out" / "top.txt"

        write_ranking([RankedEntry("A", 2.0), RankedEntry("B", 0.125)], output)

        assert output.read_text(encoding="utf-8") == "2.00 A\n0.12 B\n"

    def test_writes_stdout(self, capsys: pytest.CaptureFixture[str]) -> None:
        write_ranking([RankedEntry("Ponder", 1.5)], None)
        assert capsys.readouterr().out == "1.50 Ponder\n"


class TestMain:
    def test_prints_ranking(
        self, populated_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        status = main(base_args("-d", str(populated_dir)))

        assert status == 0
        assert capsys.readouterr().out.splitlines() == [
            "8.00 Lightning Bolt",
            "4.00 Ragavan",
            "2.00 Brainstorm",
        ]

    def test_num_and_formats(
        self, populated_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        status = main(base_args("-d", str(populated_dir), "-f", "Vintage,Legacy", "-n", "1"))

        assert status == 0
        assert capsys.readouterr().out.splitlines() == ["2.00 Brainstorm"]

    def test_all_formats_no_weight(
        self, populated_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        status = main(base_args("-d", str(populated_dir), "-f", "*", "-w"))

        assert status == 0
        assert capsys.readouterr().out.splitlines() == [
            "8.00 Lightning Bolt",
            "4.00 Brainstorm",
            "4.00 Ragavan",
            "1.00 Black Lotus",
        ]

    def test_output_file(self, populated_dir: Path, tmp_path: Path) -> None:
        output = tmp_path / "top.txt"

        status = main(base_args("-d", str(populated_dir), "-o", str(output)))

        assert status == 0
        assert output.read_text(encoding="utf-8").splitlines()[0] == "8.00 Lightning Bolt"

    def test_missing_directory_fails_without_output(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        output = tmp_path / "top.txt"

        status = main(base_args("-d", str(tmp_path / "missing"), "-o", str(output)))

        assert status == 1
        assert not output.exists()
        assert capsys.readouterr().out == ""

    @pytest.mark.parametrize(
        "flags", [["-l", "0"], ["-l", "nan"], ["-l", "inf"], ["-m", "nan"], ["-m", "-1"]]
    )
    def test_invalid_decay_options(
        self, populated_dir: Path, flags: list[str], capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main(base_args("-d", str(populated_dir), *flags)) == 1
        assert capsys.readouterr().out == ""

    def test_invalid_environment_settings(
        self,
        populated_dir: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setenv("TOP_CARDS_WORKERS", "zero")
        get_settings.cache_clear()
        try:
            status = main(base_args("-d", str(populated_dir)))
        finally:
            get_settings.cache_clear()

        assert status == 1
        assert capsys.readouterr().out == ""

    def test_negative_num(self, populated_dir: Path) -> None:
        assert main(base_args("-d", str(populated_dir), "-n", "-5")) == 1

    def test_fetch_then_process_data_dir(
        self, populated_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with patch("topcards.jobs.top_cards.fetch_data_repository") as mock_fetch:
            status = main(
                base_args("-F", "--data-dir", str(populated_dir), "--data-repo", "repo-url")
            )

        assert status == 0
        mock_fetch.assert_called_once_with(populated_dir, "repo-url", sparse_paths=[])
        assert "8.00 Lightning Bolt" in capsys.readouterr().out

    def test_fetch_failure(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with patch(
            "topcards.jobs.top_cards.fetch_data_repository",
            side_effect=FetchError(["git", "clone"], "exit status 128"),
        ):
            status = main(base_args("-F", "--data-dir", str(tmp_path / "data")))

        assert status == 1
        assert capsys.readouterr().out == ""
