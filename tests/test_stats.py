"""Tests for loading PK statistics (football/stats.py)."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from football_game_theory.football.penalty import DEFAULT_SUCCESS_RATES, Direction
from football_game_theory.football.stats import (
    PkRecord,
    StatsError,
    aggregate_records,
    load_pk_stats,
    parse_direction,
    records_to_matrix,
)

HEADER = "kick_direction,gk_direction,goals,attempts\n"


def _default_csv() -> str:
    names = ["left", "center", "right"]
    lines = [HEADER]
    for i, kick in enumerate(names):
        for j, gk in enumerate(names):
            lines.append(f"{kick},{gk},{round(DEFAULT_SUCCESS_RATES[i][j] * 100)},100\n")
    return "".join(lines)


@pytest.fixture
def stats_file(tmp_path: Path) -> Path:
    path = tmp_path / "pk_stats.csv"
    path.write_text(_default_csv())
    return path


class TestPkRecord:
    """Tests for record validation."""

    def test_success_rate(self) -> None:
        record = PkRecord(kick_direction="left", gk_direction="left", goals=58, attempts=100)
        assert record.success_rate == pytest.approx(0.58)

    def test_zero_attempts(self) -> None:
        record = PkRecord(kick_direction="left", gk_direction="left", goals=0, attempts=0)
        assert record.success_rate == 0.0

    def test_goals_cannot_exceed_attempts(self) -> None:
        with pytest.raises(ValidationError, match="exceed attempts"):
            PkRecord(kick_direction="l", gk_direction="r", goals=11, attempts=10)

    def test_negative_counts(self) -> None:
        with pytest.raises(ValidationError):
            PkRecord(kick_direction="l", gk_direction="r", goals=-1, attempts=10)


class TestParseDirection:
    """Tests for direction aliases."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("left", Direction.LEFT),
            ("Left", Direction.LEFT),
            ("L", Direction.LEFT),
            ("CENTER", Direction.CENTER),
            ("centre", Direction.CENTER),
            ("middle", Direction.CENTER),
            ("m", Direction.CENTER),
            ("c", Direction.CENTER),
            ("r", Direction.RIGHT),
            (" right ", Direction.RIGHT),
        ],
    )
    def test_aliases(self, text: str, expected: Direction) -> None:
        assert parse_direction(text) is expected

    def test_unknown(self) -> None:
        with pytest.raises(StatsError, match="Unknown direction"):
            parse_direction("top-corner")


class TestLoadStats:
    """Tests for reading CSV files."""

    def test_load(self, stats_file: Path) -> None:
        records = load_pk_stats(stats_file)
        assert len(records) == 9
        assert records[0] == PkRecord(kick_direction="left", gk_direction="left", goals=58, attempts=100)

    def test_round_trip_to_matrix(self, stats_file: Path) -> None:
        matrix = records_to_matrix(load_pk_stats(stats_file))
        for row, expected in zip(matrix, DEFAULT_SUCCESS_RATES):
            assert row == pytest.approx(list(expected))

    def test_missing_column(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.csv"
        path.write_text("kick_direction,gk_direction,goals\nleft,left,5\n")
        with pytest.raises(StatsError, match="attempts"):
            load_pk_stats(path)

    def test_invalid_row(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.csv"
        path.write_text(HEADER + "left,left,many,100\n")
        with pytest.raises(StatsError, match=":2:") as exc_info:
            load_pk_stats(path)
        assert isinstance(exc_info.value.__cause__, ValidationError)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_pk_stats(tmp_path / "absent.csv")


class TestAggregation:
    """Tests for combining records and building the matrix."""

    def test_aggregate_is_case_insensitive(self) -> None:
        records = [
            PkRecord(kick_direction="Left", gk_direction="Right", goals=9, attempts=10),
            PkRecord(kick_direction="left", gk_direction="RIGHT", goals=10, attempts=10),
            PkRecord(kick_direction="right", gk_direction="left", goals=1, attempts=2),
        ]
        aggregated = aggregate_records(records)
        assert aggregated == [
            PkRecord(kick_direction="left", gk_direction="right", goals=19, attempts=20),
            PkRecord(kick_direction="right", gk_direction="left", goals=1, attempts=2),
        ]

    def test_missing_cell(self) -> None:
        records = [
            PkRecord(kick_direction=kick.label, gk_direction=gk.label, goals=1, attempts=2)
            for kick in Direction
            for gk in Direction
            if not (kick is Direction.CENTER and gk is Direction.RIGHT)
        ]
        with pytest.raises(StatsError, match="kick=center, gk=right"):
            records_to_matrix(records)

    def test_unknown_direction_in_record(self) -> None:
        records = [PkRecord(kick_direction="up", gk_direction="left", goals=1, attempts=1)]
        with pytest.raises(StatsError, match="Unknown direction"):
            records_to_matrix(records)

    def test_aggregate_merges_aliases(self) -> None:
        records = [
            PkRecord(kick_direction="L", gk_direction="left", goals=3, attempts=5),
            PkRecord(kick_direction="left", gk_direction="l", goals=4, attempts=5),
            PkRecord(kick_direction="Middle", gk_direction="centre", goals=1, attempts=4),
            PkRecord(kick_direction="c", gk_direction="Center", goals=2, attempts=4),
        ]
        aggregated = aggregate_records(records)
        assert aggregated == [
            PkRecord(kick_direction="left", gk_direction="left", goals=7, attempts=10),
            PkRecord(kick_direction="center", gk_direction="center", goals=3, attempts=8),
        ]

    def test_aliased_rows_are_summed_into_matrix(self) -> None:
        records = [
            PkRecord(kick_direction=kick.label, gk_direction=gk.label, goals=1, attempts=2)
            for kick in Direction
            for gk in Direction
        ]
        records.append(PkRecord(kick_direction="L", gk_direction="L", goals=2, attempts=2))
        matrix = records_to_matrix(aggregate_records(records))
        assert matrix[0][0] == pytest.approx(0.75)
        assert matrix[1][1] == pytest.approx(0.5)

    def test_aggregate_rejects_unknown_direction(self) -> None:
        records = [PkRecord(kick_direction="up", gk_direction="left", goals=1, attempts=1)]
        with pytest.raises(StatsError, match="Unknown direction"):
            aggregate_records(records)
