"""Penalty kicks as a two-player zero-sum game.

The kicker picks a side to shoot at and the goalkeeper picks a side to dive
to, simultaneously. Each cell of the 3x3 success-rate matrix is the
probability of a goal for that (kick, dive) pair, so the kicker maximizes and
the goalkeeper minimizes the same number. The game value is the goal
probability at equilibrium.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from football_game_theory.config import SolverConfig
from football_game_theory.models.matrices import PayoffMatrix
from football_game_theory.models.solution import GameSolution
from football_game_theory.parameters import STRATEGY_DISPLAY_THRESHOLD
from football_game_theory.solver.game import GameSolver

logger = logging.getLogger(__name__)


class Direction(Enum):
    """Side of the goal a kick is aimed at or a keeper dives to."""

    LEFT = 0
    CENTER = 1
    RIGHT = 2

    @property
    def index(self) -> int:
        return self.value

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def from_index(cls, index: int) -> "Direction":
        """Direction for a matrix index.

        Raises:
            ValueError: If index is not 0, 1 or 2
        """
        return cls(index)


KICK_LABELS = tuple(f"Kick {d.label}" for d in Direction)
GK_LABELS = tuple(f"GK {d.label}" for d in Direction)

# Palacios-Huerta (2003) empirical success rates.
# Rows: kick Left, Center, Right. Columns: keeper dives Left, Center, Right.
DEFAULT_SUCCESS_RATES: tuple[tuple[float, ...], ...] = (
    (0.58, 0.93, 0.95),
    (0.83, 0.44, 0.83),
    (0.93, 0.90, 0.60),
)


def _format_strategy(strategy: Sequence[tuple[Direction, float]]) -> str:
    return ", ".join(
        f"{direction.label}: {probability * 100:.1f}%"
        for direction, probability in strategy
        if probability > STRATEGY_DISPLAY_THRESHOLD
    )


@dataclass(frozen=True)
class PenaltyAnalysis:
    """Equilibrium of a penalty kick game.

    Attributes:
        kicker_strategy: (Direction, probability) for every kick direction
        goalkeeper_strategy: (Direction, probability) for every dive direction
        goal_probability: Expected goal probability at equilibrium
        payoff_matrix: Success rates the analysis was computed from
        solution: Raw solver output
    """

    kicker_strategy: tuple[tuple[Direction, float], ...]
    goalkeeper_strategy: tuple[tuple[Direction, float], ...]
    goal_probability: float
    payoff_matrix: PayoffMatrix
    solution: GameSolution

    def kicker_probabilities(self) -> tuple[float, ...]:
        return tuple(p for _, p in self.kicker_strategy)

    def goalkeeper_probabilities(self) -> tuple[float, ...]:
        return tuple(p for _, p in self.goalkeeper_strategy)

    def kicker_strategy_string(self) -> str:
        """Readable kicker mix, e.g. "Left: 34.1%, Center: 27.7%, Right: 38.2%"."""
        return _format_strategy(self.kicker_strategy)

    def goalkeeper_strategy_string(self) -> str:
        """Readable goalkeeper mix. Directions at or below 0.1% are omitted."""
        return _format_strategy(self.goalkeeper_strategy)


class PenaltyKick:
    """Penalty kick game analyzer.

    Args:
        success_rates: 3x3 goal probabilities, rows are kick directions and
            columns are goalkeeper dive directions
        config: Solver settings; defaults to SolverConfig()

    Raises:
        ShapeError: If the table is not 3x3 or an entry is outside [0, 1]
    """

    def __init__(
        self,
        success_rates: Sequence[Sequence[float]],
        config: SolverConfig | None = None,
    ):
        self.payoff_matrix = PayoffMatrix.from_rows(success_rates, KICK_LABELS, GK_LABELS)
        self.config = config or SolverConfig()

    @classmethod
    def with_default_data(cls, config: SolverConfig | None = None) -> "PenaltyKick":
        """Analyzer over the published default success rates."""
        return cls(DEFAULT_SUCCESS_RATES, config=config)

    def analyze(self) -> PenaltyAnalysis:
        """Solve for both players' optimal mixed strategies.

        Raises:
            SolveError: If the solver fails
        """
        solution = GameSolver(config=self.config).solve(self.payoff_matrix)
        analysis = PenaltyAnalysis(
            kicker_strategy=tuple(
                (Direction.from_index(i), p) for i, p in enumerate(solution.row_strategy)
            ),
            goalkeeper_strategy=tuple(
                (Direction.from_index(j), q) for j, q in enumerate(solution.column_strategy)
            ),
            goal_probability=solution.game_value,
            payoff_matrix=self.payoff_matrix,
            solution=solution,
        )
        logger.debug(
            f"Penalty equilibrium: kicker [{analysis.kicker_strategy_string()}], "
            f"goalkeeper [{analysis.goalkeeper_strategy_string()}], "
            f"goal probability {analysis.goal_probability:.4f}"
        )
        return analysis

    def expected_goal_probability(
        self,
        kicker_strategy: Sequence[float],
        goalkeeper_strategy: Sequence[float],
    ) -> float:
        """Goal probability when both players use the given mixes."""
        total = 0.0
        for i, kick_prob in enumerate(kicker_strategy):
            for j, gk_prob in enumerate(goalkeeper_strategy):
                total += kick_prob * gk_prob * self.payoff_matrix.get(i, j)
        return total
