"""Solver for two-player zero-sum games using linear programming.

Row player's LP (maximizer), with w = v + offset so that w >= 0:

    Maximize:    w
    Subject to:  w - sum_i p_i (a_ij + offset) <= 0     for every column j
                 sum_i p_i <= 1
                 p_i >= 0, w >= 0

Shifted payoffs are at least `offset` > 0, so the normalization row is
tight at every optimum, and the origin (all slacks basic) is feasible.

The column player's LP is the same formulation applied to the mirrored game
1 - A^T, in which the column player is the maximizer. Alternatively the
column strategy can be read off the duals of the row player's LP: the dual
variable of the constraint for column j is q_j.
"""

from typing import Iterable, Sequence

import numpy as np

from football_game_theory.config import SolverConfig
from football_game_theory.models.matrices import PayoffMatrix
from football_game_theory.models.solution import GameSolution, Strategy
from football_game_theory.errors import EquilibriumError, EquilibriumViolation
from football_game_theory.solver.nash import (
    EquilibriumValidator,
    dominated_strategies,
    find_saddle_point,
)
from football_game_theory.solver.simplex import (
    LPProblem,
    LPSolution,
    LPSolver,
    Relation,
    SimplexEngine,
)


class GameReducer:
    """Builds game LPs and maps their solutions back to strategies."""

    def __init__(self, config: SolverConfig | None = None):
        self.config = config or SolverConfig()

    def reduce_to_lp(self, matrix: PayoffMatrix) -> LPProblem:
        """Row player's LP over variables (p_0, ..., p_{m-1}, w)."""
        m, n = matrix.shape
        offset = self.config.value_offset

        constraints = [
            [-(matrix.get(i, j) + offset) for i in range(m)] + [1.0]
            for j in range(n)
        ]
        constraints.append([1.0] * m + [0.0])

        return LPProblem(
            objective=[0.0] * m + [1.0],
            constraints=constraints,
            rhs=[0.0] * n + [1.0],
            relations=[Relation.LE] * (n + 1),
            maximize=True,
        )

    def reduce_to_lp_minimizer(self, matrix: PayoffMatrix) -> LPProblem:
        """Column player's LP over variables (q_0, ..., q_{n-1}, w').

        Solved as the row player's LP of the mirrored game, so its optimum
        maps to the original value through `minimizer_game_value`.
        """
        return self.reduce_to_lp(matrix.mirrored())

    def extract_strategy(
        self,
        values: Sequence[float],
        size: int,
        player: str = "row",
    ) -> Strategy:
        """Normalize the leading `size` LP values into a probability vector.

        Values within tolerance of zero snap to 0 before dividing by the sum,
        so the result sums to 1.0 up to a final rounding.

        Raises:
            EquilibriumError: Values are negative or sum to zero
        """
        violation = (
            EquilibriumViolation.ROW_NORMALIZATION
            if player == "row"
            else EquilibriumViolation.COLUMN_NORMALIZATION
        )
        vector = np.array(values[:size], dtype=float)
        vector[np.abs(vector) <= self.config.tolerance] = 0.0
        if np.any(vector < 0.0):
            i = int(np.argmin(vector))
            raise EquilibriumError(
                violation,
                f"LP returned negative {player} probability {vector[i]:.3g} at {i}",
                player=player,
                index=i,
                gap=float(-vector[i]),
            )
        total = float(vector.sum())
        if total <= self.config.tolerance:
            raise EquilibriumError(
                violation,
                f"LP returned an empty {player} strategy",
                player=player,
                gap=1.0,
            )
        return tuple(float(x) for x in vector / total)

    def game_value(self, solution: LPSolution) -> float:
        """Un-shift the row LP optimum."""
        return solution.optimal_value - self.config.value_offset

    def minimizer_game_value(self, solution: LPSolution) -> float:
        """Game value from the mirrored LP optimum (which is 1 - v)."""
        return 1.0 - self.game_value(solution)

    def column_strategy_from_duals(self, solution: LPSolution, num_cols: int) -> Strategy:
        """Column strategy from the duals of the row LP's column constraints."""
        return self.extract_strategy(solution.duals, num_cols, "column")


def _expand(strategy: Strategy, kept: list[int], size: int) -> Strategy:
    """Re-insert zero probability for eliminated strategies."""
    full = [0.0] * size
    for index, probability in zip(kept, strategy):
        full[index] = probability
    return tuple(full)


def _one_hot(index: int, size: int) -> Strategy:
    return tuple(1.0 if i == index else 0.0 for i in range(size))


class GameSolver:
    """Finds optimal mixed strategies and the value of a zero-sum game.

    Each solve is a single pass: dominance reduction, saddle-point check,
    LP reduction and solve, mapping back, validation. Errors from any
    stage propagate unchanged.

    Args:
        lp_solver: Any LPSolver; defaults to a SimplexEngine
        config: Shared numeric settings
    """

    def __init__(self, lp_solver: LPSolver | None = None, config: SolverConfig | None = None):
        self.config = config or SolverConfig()
        self.lp_solver = lp_solver or SimplexEngine(self.config)
        self.reducer = GameReducer(self.config)
        self.validator = EquilibriumValidator(self.config)

    def solve(self, matrix: PayoffMatrix | Iterable[Iterable[float]]) -> GameSolution:
        """Solve the game and return optimal strategies for both players.

        Raises:
            ShapeError: Matrix is malformed (no LP is attempted)
            LPError: The simplex engine failed
            EquilibriumError: The result failed validation
        """
        if not isinstance(matrix, PayoffMatrix):
            matrix = PayoffMatrix.from_rows(matrix)
        tolerance = self.config.tolerance
        m, n = matrix.shape

        removed_rows: tuple[int, ...] = ()
        removed_cols: tuple[int, ...] = ()
        if self.config.eliminate_dominated:
            removed_rows, removed_cols = dominated_strategies(matrix, tolerance)
        rows = [i for i in range(m) if i not in removed_rows]
        cols = [j for j in range(n) if j not in removed_cols]
        reduced = matrix.submatrix(rows, cols)

        iterations = 0
        saddle = find_saddle_point(reduced, tolerance)
        if saddle is not None:
            row_strategy = _one_hot(saddle.row, len(rows))
            column_strategy = _one_hot(saddle.col, len(cols))
            value = saddle.value
        else:
            row_solution = self.lp_solver.solve(self.reducer.reduce_to_lp(reduced))
            iterations += row_solution.iterations
            row_strategy = self.reducer.extract_strategy(row_solution.variable_values, len(rows), "row")
            value = self.reducer.game_value(row_solution)

            if self.config.column_strategy == "dual":
                column_strategy = self.reducer.column_strategy_from_duals(row_solution, len(cols))
            else:
                column_solution = self.lp_solver.solve(self.reducer.reduce_to_lp_minimizer(reduced))
                iterations += column_solution.iterations
                column_strategy = self.reducer.extract_strategy(
                    column_solution.variable_values, len(cols), "column"
                )

        row_strategy = _expand(row_strategy, rows, m)
        column_strategy = _expand(column_strategy, cols, n)
        value = min(1.0, max(0.0, value))

        self.validator.validate(matrix, row_strategy, column_strategy, value)
        return GameSolution(
            row_strategy=row_strategy,
            column_strategy=column_strategy,
            game_value=value,
            pure=saddle is not None,
            eliminated_rows=removed_rows,
            eliminated_columns=removed_cols,
            iterations=iterations,
        )


def solve_zero_sum_game(
    payoff_matrix: PayoffMatrix | Iterable[Iterable[float]],
    config: SolverConfig | None = None,
) -> GameSolution:
    """Solve a zero-sum game given as a PayoffMatrix or a rectangular table.

    Raises:
        ShapeError, LPError, EquilibriumError (all SolveError)
    """
    return GameSolver(config=config).solve(payoff_matrix)
