"""Sensitivity of the penalty equilibrium to the success-rate data.

Each success rate is nudged by a fixed delta and the game is re-solved, which
shows how much the optimal mixes and the goal probability depend on every
individual cell of the empirical matrix. Cells are independent, so a full
sweep can be spread over worker processes.
"""

import logging
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Sequence

from football_game_theory.config import SolverConfig
from football_game_theory.football.penalty import (
    DEFAULT_SUCCESS_RATES,
    PenaltyAnalysis,
    PenaltyKick,
)
from football_game_theory.parameters import DEFAULT_SENSITIVITY_DELTA

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SensitivityResult:
    """Effect of changing one success rate.

    Attributes:
        parameter: Name of the varied cell, e.g. "Success rate [0,1]"
        row: Kick direction index of the varied cell
        col: Goalkeeper direction index of the varied cell
        original_value: Success rate before the change
        new_value: Success rate after the change, clamped to [0, 1]
        kicker_strategy_change: Per-direction change in the kicker's mix
        goalkeeper_strategy_change: Per-direction change in the keeper's mix
        goal_probability_change: Change in equilibrium goal probability
    """

    parameter: str
    row: int
    col: int
    original_value: float
    new_value: float
    kicker_strategy_change: tuple[float, ...]
    goalkeeper_strategy_change: tuple[float, ...]
    goal_probability_change: float

    @property
    def total_strategy_change(self) -> float:
        """Sum of absolute changes across both players' mixes."""
        return sum(abs(x) for x in self.kicker_strategy_change) + sum(
            abs(x) for x in self.goalkeeper_strategy_change
        )


def _analyze_cell(
    base_matrix: tuple[tuple[float, ...], ...],
    config: SolverConfig,
    row: int,
    col: int,
    delta: float,
) -> SensitivityResult:
    """Worker entry point (must be module-level for pickling)."""
    return SensitivityAnalyzer(base_matrix, config).analyze_single_change(row, col, delta)


class SensitivityAnalyzer:
    """Performs sensitivity analysis on penalty kick success rates.

    Args:
        base_matrix: 3x3 success rates to perturb
        config: Solver settings shared by every re-solve
    """

    def __init__(self, base_matrix: Sequence[Sequence[float]], config: SolverConfig | None = None):
        self.config = config or SolverConfig()
        self.base_matrix = tuple(tuple(float(v) for v in row) for row in base_matrix)
        self._base = PenaltyKick(self.base_matrix, self.config)
        self._base_analysis: PenaltyAnalysis | None = None

    @classmethod
    def with_default_data(cls, config: SolverConfig | None = None) -> "SensitivityAnalyzer":
        return cls(DEFAULT_SUCCESS_RATES, config)

    @property
    def base_analysis(self) -> PenaltyAnalysis:
        """Equilibrium of the unperturbed matrix, solved once."""
        if self._base_analysis is None:
            self._base_analysis = self._base.analyze()
        return self._base_analysis

    def analyze_single_change(self, row: int, col: int, delta: float) -> SensitivityResult:
        """Re-solve with one success rate shifted by `delta`.

        Args:
            row: Kick direction index (0=left, 1=center, 2=right)
            col: Goalkeeper direction index
            delta: Amount added to the success rate before clamping

        Raises:
            IndexError: If the cell is outside the matrix
            SolveError: If either solve fails
        """
        original_value = self.base_matrix[row][col]
        new_value = min(1.0, max(0.0, original_value + delta))
        modified = self._base.payoff_matrix.with_entry(row, col, new_value)

        base = self.base_analysis
        changed = PenaltyKick(modified.values, self.config).analyze()

        result = SensitivityResult(
            parameter=f"Success rate [{row},{col}]",
            row=row,
            col=col,
            original_value=original_value,
            new_value=new_value,
            kicker_strategy_change=tuple(
                new - old
                for new, old in zip(changed.kicker_probabilities(), base.kicker_probabilities())
            ),
            goalkeeper_strategy_change=tuple(
                new - old
                for new, old in zip(
                    changed.goalkeeper_probabilities(), base.goalkeeper_probabilities()
                )
            ),
            goal_probability_change=changed.goal_probability - base.goal_probability,
        )
        logger.debug(
            f"{result.parameter}: {original_value:.3f} -> {new_value:.3f}, "
            f"goal probability {result.goal_probability_change:+.4f}"
        )
        return result

    def full_analysis(
        self,
        delta: float = DEFAULT_SENSITIVITY_DELTA,
        max_workers: int | None = None,
    ) -> list[SensitivityResult]:
        """Vary every cell by `delta`.

        Args:
            delta: Amount added to each success rate
            max_workers: Worker processes; None or 1 runs in-process

        Returns:
            One result per cell, in row-major order
        """
        cells = [
            (row, col)
            for row in range(len(self.base_matrix))
            for col in range(len(self.base_matrix[0]))
        ]
        logger.info(f"Sensitivity sweep over {len(cells)} cells, delta={delta}")

        if max_workers is None or max_workers <= 1:
            return [self.analyze_single_change(row, col, delta) for row, col in cells]

        results: dict[tuple[int, int], SensitivityResult] = {}
        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            futures = [
                executor.submit(_analyze_cell, self.base_matrix, self.config, row, col, delta)
                for row, col in cells
            ]
            for future in as_completed(futures):
                result = future.result()
                results[(result.row, result.col)] = result

        return [results[cell] for cell in cells]

    def find_critical_parameters(
        self,
        delta: float = DEFAULT_SENSITIVITY_DELTA,
        max_workers: int | None = None,
    ) -> list[tuple[int, int, float]]:
        """Cells ranked by how much the optimal strategies move.

        Returns:
            (row, col, total absolute strategy change), largest first
        """
        results = self.full_analysis(delta, max_workers)
        critical = [(r.row, r.col, r.total_strategy_change) for r in results]
        critical.sort(key=lambda item: item[2], reverse=True)
        return critical
