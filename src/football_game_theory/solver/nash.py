"""Nash equilibrium checks for two-player zero-sum games.

In a zero-sum game every minimax solution is a Nash equilibrium, so the
validator here is a certificate check rather than a search: given both
strategies and a claimed value it confirms that neither player has a
profitable pure deviation.

The module also holds the structural helpers the game solver uses before
reaching for linear programming:
- find_saddle_point: pure equilibria (maximin == minimax)
- dominated_strategies: iterated removal of weakly dominated strategies
- best_response: a player's best pure reply to a fixed opponent strategy
"""

from dataclasses import dataclass
from typing import Literal, Sequence

import numpy as np

from football_game_theory.config import SolverConfig
from football_game_theory.models.matrices import PayoffMatrix
from football_game_theory.parameters import DEFAULT_TOLERANCE
from football_game_theory.errors import (
    EquilibriumError,
    EquilibriumViolation,
    ShapeError,
)


@dataclass(frozen=True)
class SaddlePoint:
    """A cell that is both the minimum of its row and the maximum of its column."""

    row: int
    col: int
    value: float


def expected_payoff(
    matrix: PayoffMatrix,
    row_strategy: Sequence[float],
    column_strategy: Sequence[float],
) -> float:
    """Expected payoff p^T A q."""
    return float(np.asarray(row_strategy) @ matrix.as_array() @ np.asarray(column_strategy))


def row_payoffs(matrix: PayoffMatrix, column_strategy: Sequence[float]) -> np.ndarray:
    """Expected payoff of each pure row against a column strategy (A q)."""
    return matrix.as_array() @ np.asarray(column_strategy, dtype=float)


def column_payoffs(matrix: PayoffMatrix, row_strategy: Sequence[float]) -> np.ndarray:
    """Expected payoff of each pure column against a row strategy (p^T A)."""
    return np.asarray(row_strategy, dtype=float) @ matrix.as_array()


def best_response(
    matrix: PayoffMatrix,
    opponent_strategy: Sequence[float],
    player: Literal["row", "column"],
    tolerance: float = DEFAULT_TOLERANCE,
) -> int:
    """Best pure reply to a fixed opponent strategy.

    The row player maximizes and the column player minimizes. Near-ties
    resolve to the lowest index.
    """
    if player == "row":
        payoffs = row_payoffs(matrix, opponent_strategy)
        best = payoffs.max()
        return int(np.flatnonzero(payoffs >= best - tolerance)[0])
    payoffs = column_payoffs(matrix, opponent_strategy)
    best = payoffs.min()
    return int(np.flatnonzero(payoffs <= best + tolerance)[0])


def find_saddle_point(matrix: PayoffMatrix, tolerance: float) -> SaddlePoint | None:
    """First cell (row-major) that is a row minimum and a column maximum.

    Returns None when the game has no pure-strategy equilibrium.
    """
    a = matrix.as_array()
    row_mins = a.min(axis=1)
    col_maxs = a.max(axis=0)
    if col_maxs.min() - row_mins.max() > tolerance:
        return None
    for i in range(a.shape[0]):
        for j in range(a.shape[1]):
            if a[i, j] <= row_mins[i] + tolerance and a[i, j] >= col_maxs[j] - tolerance:
                return SaddlePoint(row=i, col=j, value=float(a[i, j]))
    return None


def _dominated(lines: np.ndarray, index: int, candidates: list[int], tolerance: float) -> bool:
    """True if some other candidate line is entrywise >= lines[index].

    Lines equal within tolerance count as dominating only from a lower index,
    so exactly one copy of a duplicate survives.
    """
    target = lines[index]
    for other in candidates:
        if other == index:
            continue
        diff = lines[other] - target
        if np.all(diff >= -tolerance):
            if other < index or np.any(diff > tolerance):
                return True
    return False


def dominated_strategies(matrix: PayoffMatrix, tolerance: float) -> tuple[tuple[int, ...], tuple[int, ...]]:
    """Iteratively remove weakly dominated rows and columns.

    A row is removed when another surviving row pays at least as much
    against every surviving column. A column is removed when another
    surviving column concedes no more against every surviving row.
    Removing weakly dominated strategies never changes the value of a
    zero-sum game, and optimal strategies of the reduced game stay optimal
    in the full game.

    Returns:
        (removed_rows, removed_cols), each sorted ascending
    """
    a = matrix.as_array()
    rows = list(range(a.shape[0]))
    cols = list(range(a.shape[1]))
    removed_rows: list[int] = []
    removed_cols: list[int] = []

    changed = True
    while changed:
        changed = False
        row_lines = a[:, cols]
        for r in list(rows):
            if len(rows) > 1 and _dominated(row_lines, r, rows, tolerance):
                rows.remove(r)
                removed_rows.append(r)
                changed = True
        # Column player minimizes: negate so "dominates" means "concedes less"
        col_lines = -a[rows, :].T
        for c in list(cols):
            if len(cols) > 1 and _dominated(col_lines, c, cols, tolerance):
                cols.remove(c)
                removed_cols.append(c)
                changed = True

    return tuple(sorted(removed_rows)), tuple(sorted(removed_cols))


def is_epsilon_nash(
    matrix: PayoffMatrix,
    row_strategy: Sequence[float],
    column_strategy: Sequence[float],
    epsilon: float,
) -> bool:
    """Check that neither player gains more than epsilon by deviating."""
    current = expected_payoff(matrix, row_strategy, column_strategy)
    if row_payoffs(matrix, column_strategy).max() > current + epsilon:
        return False
    if column_payoffs(matrix, row_strategy).min() < current - epsilon:
        return False
    return True


class EquilibriumValidator:
    """Certifies a strategy pair and value as a Nash equilibrium.

    Performs no optimization. `validate` returns None on success and raises
    EquilibriumError naming the first violated condition otherwise.

    Normalization is checked against the shared tolerance. Payoff checks
    use `margin(matrix)`, the tolerance scaled by the number of strategies
    and by the largest shifted payoff (1 + value_offset).
    """

    def __init__(self, config: SolverConfig | None = None):
        self.config = config or SolverConfig()

    def margin(self, matrix: PayoffMatrix) -> float:
        """Allowed payoff gap for `matrix`."""
        m, n = matrix.shape
        return self.config.tolerance * (m + n) * (1.0 + self.config.value_offset)

    def validate(
        self,
        matrix: PayoffMatrix,
        row_strategy: Sequence[float],
        column_strategy: Sequence[float],
        claimed_value: float,
    ) -> None:
        """Check normalization, value consistency and deviations, in that order.

        Raises:
            ShapeError: Strategy length does not match the matrix
            EquilibriumError: A condition is violated beyond tolerance
        """
        margin = self.margin(matrix)
        p = self._check_strategy(row_strategy, matrix.num_rows, "row")
        q = self._check_strategy(column_strategy, matrix.num_cols, "column")
        a = matrix.as_array()

        value = float(p @ a @ q)
        gap = abs(value - claimed_value)
        if gap > margin:
            raise EquilibriumError(
                EquilibriumViolation.VALUE_MISMATCH,
                f"Expected payoff {value:.9f} does not match claimed value {claimed_value:.9f}",
                gap=gap,
            )

        payoffs = a @ q
        i = int(np.argmax(payoffs))
        gap = float(payoffs[i] - claimed_value)
        if gap > margin:
            raise EquilibriumError(
                EquilibriumViolation.ROW_DEVIATION,
                f"Row player gains {gap:.3g} by switching to pure row {i}",
                player="row",
                index=i,
                gap=gap,
            )

        payoffs = p @ a
        j = int(np.argmin(payoffs))
        gap = float(claimed_value - payoffs[j])
        if gap > margin:
            raise EquilibriumError(
                EquilibriumViolation.COLUMN_DEVIATION,
                f"Column player gains {gap:.3g} by switching to pure column {j}",
                player="column",
                index=j,
                gap=gap,
            )

    def _check_strategy(self, strategy: Sequence[float], size: int, player: str) -> np.ndarray:
        violation = (
            EquilibriumViolation.ROW_NORMALIZATION
            if player == "row"
            else EquilibriumViolation.COLUMN_NORMALIZATION
        )
        vector = np.asarray(strategy, dtype=float)
        if vector.shape != (size,):
            raise ShapeError(f"{player} strategy has {vector.size} entries, expected {size}")
        if not np.all(np.isfinite(vector)):
            raise EquilibriumError(violation, f"{player} strategy has non-finite entries", player=player)

        i = int(np.argmin(vector))
        if vector[i] < -self.config.tolerance:
            raise EquilibriumError(
                violation,
                f"{player} strategy has negative probability {vector[i]:.3g} at {i}",
                player=player,
                index=i,
                gap=float(-vector[i]),
            )
        gap = abs(float(vector.sum()) - 1.0)
        if gap > self.config.tolerance:
            raise EquilibriumError(
                violation,
                f"{player} strategy sums to {vector.sum():.9f}, not 1",
                player=player,
                gap=gap,
            )
        return vector
