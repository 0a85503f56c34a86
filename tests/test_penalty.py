"""Tests for the penalty kick game (football/penalty.py)."""

import pytest

from football_game_theory.config import SolverConfig
from football_game_theory.errors import ShapeError
from football_game_theory.football.penalty import (
    DEFAULT_SUCCESS_RATES,
    Direction,
    PenaltyKick,
)


class TestDirection:
    """Tests for the Direction enum."""

    def test_index_round_trip(self) -> None:
        for direction in Direction:
            assert Direction.from_index(direction.index) is direction

    def test_labels(self) -> None:
        assert [d.label for d in Direction] == ["Left", "Center", "Right"]

    def test_invalid_index(self) -> None:
        with pytest.raises(ValueError):
            Direction.from_index(3)


class TestPenaltyKick:
    """Tests for the penalty kick analyzer."""

    @pytest.fixture
    def pk(self) -> PenaltyKick:
        return PenaltyKick.with_default_data()

    def test_default_matrix_is_labelled(self, pk: PenaltyKick) -> None:
        assert pk.payoff_matrix.values == DEFAULT_SUCCESS_RATES
        assert pk.payoff_matrix.row_labels[0] == "Kick Left"
        assert pk.payoff_matrix.col_labels[2] == "GK Right"

    def test_requires_three_by_three(self) -> None:
        with pytest.raises(ShapeError):
            PenaltyKick([[0.5, 0.5], [0.5, 0.5]])

    def test_rejects_invalid_probability(self) -> None:
        with pytest.raises(ShapeError):
            PenaltyKick([[0.5, 0.5, 0.5], [0.5, 1.2, 0.5], [0.5, 0.5, 0.5]])

    def test_analyze(self, pk: PenaltyKick) -> None:
        analysis = pk.analyze()

        assert [d for d, _ in analysis.kicker_strategy] == list(Direction)
        assert [d for d, _ in analysis.goalkeeper_strategy] == list(Direction)
        assert analysis.kicker_probabilities() == pytest.approx((0.341, 0.277, 0.382), abs=1e-3)
        assert analysis.goalkeeper_probabilities() == pytest.approx((0.445, 0.121, 0.435), abs=1e-3)
        assert analysis.goal_probability == pytest.approx(0.783, abs=1e-3)
        assert analysis.goal_probability == analysis.solution.game_value

    def test_strategy_strings(self, pk: PenaltyKick) -> None:
        analysis = pk.analyze()
        assert analysis.kicker_strategy_string() == "Left: 34.1%, Center: 27.7%, Right: 38.2%"
        assert analysis.goalkeeper_strategy_string() == "Left: 44.5%, Center: 12.1%, Right: 43.5%"

    def test_strategy_string_omits_unused_directions(self) -> None:
        pk = PenaltyKick(
            [
                [1.0, 1.0, 1.0],
                [0.7, 0.5, 0.7],
                [0.8, 0.8, 0.6],
            ]
        )
        analysis = pk.analyze()
        assert analysis.kicker_strategy_string() == "Left: 100.0%"
        assert analysis.goal_probability == pytest.approx(1.0)

    def test_expected_goal_probability(self, pk: PenaltyKick) -> None:
        assert pk.expected_goal_probability([1, 0, 0], [1, 0, 0]) == pytest.approx(0.58)
        third = [1 / 3] * 3
        assert pk.expected_goal_probability(third, third) == pytest.approx(6.99 / 9)

    def test_equilibrium_is_unexploitable(self, pk: PenaltyKick) -> None:
        analysis = pk.analyze()
        keeper = analysis.goalkeeper_probabilities()
        for direction in Direction:
            pure = [0.0, 0.0, 0.0]
            pure[direction.index] = 1.0
            assert pk.expected_goal_probability(pure, keeper) <= analysis.goal_probability + 1e-9

    def test_config_is_used(self) -> None:
        config = SolverConfig(column_strategy="dual")
        pk = PenaltyKick.with_default_data(config)
        assert pk.config is config
        assert pk.analyze().goal_probability == pytest.approx(0.783, abs=1e-3)
