"""Equilibrium result types.

GameSolution is the only solver artifact exposed to the football, analysis,
visualization and CLI layers; they never see LP problems or tableaus.
"""

from dataclasses import dataclass
from typing import Literal

from football_game_theory.models.matrices import PayoffMatrix

Strategy = tuple[float, ...]
"""Probability per discrete action: non-negative, summing to 1."""


@dataclass(frozen=True)
class GameSolution:
    """Result of solving a two-player zero-sum game.

    Attributes:
        row_strategy: Optimal mixed strategy for the row player (maximizer)
        column_strategy: Optimal mixed strategy for the column player (minimizer)
        game_value: Expected payoff at equilibrium, in [0, 1]
        pure: True if a saddle point was found and no LP was solved
        eliminated_rows: Rows removed as weakly dominated
        eliminated_columns: Columns removed as weakly dominated
        iterations: Simplex pivots spent across all LP solves
    """

    row_strategy: Strategy
    column_strategy: Strategy
    game_value: float
    pure: bool = False
    eliminated_rows: tuple[int, ...] = ()
    eliminated_columns: tuple[int, ...] = ()
    iterations: int = 0

    def support(self, player: Literal["row", "column"], threshold: float = 0.0) -> tuple[int, ...]:
        """Indices played with probability above `threshold`."""
        strategy = self.row_strategy if player == "row" else self.column_strategy
        return tuple(i for i, p in enumerate(strategy) if p > threshold)

    def expected_payoff(self, matrix: PayoffMatrix) -> float:
        """p^T A q for this solution's strategies."""
        return sum(
            p * q * matrix.get(i, j)
            for i, p in enumerate(self.row_strategy)
            for j, q in enumerate(self.column_strategy)
        )
