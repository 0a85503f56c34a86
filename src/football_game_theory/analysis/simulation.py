"""Monte Carlo simulation of penalty kicks.

Every kick samples a kick direction from the kicker's mix, a dive direction
from the goalkeeper's mix, then scores with the success rate of that cell.
The random stream comes from a `random.Random` seeded per `simulate` call,
so the same seed, strategies and kick count always give the same kicks.
"""

import logging
import math
import random
from dataclasses import dataclass, field
from typing import Sequence

from football_game_theory.config import SolverConfig
from football_game_theory.errors import ShapeError
from football_game_theory.football.penalty import DEFAULT_SUCCESS_RATES, Direction, PenaltyKick
from football_game_theory.parameters import DEFAULT_SEED, SIMULATION_STRATEGY_TOLERANCE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulatedKick:
    """Outcome of one simulated penalty."""

    kick_direction: Direction
    gk_direction: Direction
    is_goal: bool


@dataclass
class SimulationResult:
    """All kicks of one simulation run."""

    kicks: list[SimulatedKick] = field(default_factory=list)
    kicker_strategy: tuple[float, ...] = ()
    goalkeeper_strategy: tuple[float, ...] = ()

    @property
    def total_kicks(self) -> int:
        return len(self.kicks)

    @property
    def goals_scored(self) -> int:
        return sum(1 for kick in self.kicks if kick.is_goal)

    def goal_percentage(self) -> float:
        """Goals as a percentage of kicks (0.0 for an empty run)."""
        if not self.kicks:
            return 0.0
        return self.goals_scored / self.total_kicks * 100.0

    def direction_stats(self) -> list[tuple[tuple[Direction, Direction], int, int]]:
        """((kick, dive), goals, attempts) for every pair that occurred.

        Pairs are listed kick-major in Direction order; pairs with no
        attempts are left out.
        """
        counts: dict[tuple[Direction, Direction], list[int]] = {}
        for kick in self.kicks:
            entry = counts.setdefault((kick.kick_direction, kick.gk_direction), [0, 0])
            entry[0] += int(kick.is_goal)
            entry[1] += 1

        return [
            ((kick_dir, gk_dir), *counts[(kick_dir, gk_dir)])
            for kick_dir in Direction
            for gk_dir in Direction
            if (kick_dir, gk_dir) in counts
        ]


def _validate_strategy(strategy: Sequence[float], name: str) -> tuple[float, ...]:
    """Check that a strategy is a probability vector over the three directions.

    Raises:
        ShapeError: If the length is not 3
        ValueError: If an entry is negative or non-finite, or the sum is not 1
    """
    values = tuple(float(p) for p in strategy)
    if len(values) != len(Direction):
        raise ShapeError(f"{name} strategy has {len(values)} entries, expected {len(Direction)}")
    if any(not math.isfinite(p) or p < 0.0 for p in values):
        raise ValueError(f"{name} strategy has a negative or non-finite probability: {values}")
    if abs(sum(values) - 1.0) > SIMULATION_STRATEGY_TOLERANCE:
        raise ValueError(f"{name} strategy sums to {sum(values):.6f}, not 1")
    return values


class Simulator:
    """Simulates penalty kick scenarios.

    Args:
        success_rates: 3x3 goal probabilities; defaults to the published data
        seed: Seed for the random stream of every `simulate` call
        config: Solver settings used to find the optimal strategies
    """

    def __init__(
        self,
        success_rates: Sequence[Sequence[float]] | None = None,
        seed: int = DEFAULT_SEED,
        config: SolverConfig | None = None,
    ):
        self.penalty_kick = PenaltyKick(
            success_rates if success_rates is not None else DEFAULT_SUCCESS_RATES,
            config=config,
        )
        self.seed = seed

    def with_seed(self, seed: int) -> "Simulator":
        """Copy of this simulator using a different seed."""
        return Simulator(self.penalty_kick.payoff_matrix.values, seed, self.penalty_kick.config)

    def simulate(
        self,
        kicker_strategy: Sequence[float],
        gk_strategy: Sequence[float],
        num_kicks: int,
    ) -> SimulationResult:
        """Simulate `num_kicks` penalties with fixed mixed strategies.

        Raises:
            ShapeError: If a strategy does not have three entries
            ValueError: If a strategy is not a probability vector or
                num_kicks is negative
        """
        kicker = _validate_strategy(kicker_strategy, "kicker")
        keeper = _validate_strategy(gk_strategy, "goalkeeper")
        if num_kicks < 0:
            raise ValueError(f"num_kicks must be non-negative, got {num_kicks}")

        rng = random.Random(self.seed)
        directions = list(Direction)
        matrix = self.penalty_kick.payoff_matrix
        result = SimulationResult(kicker_strategy=kicker, goalkeeper_strategy=keeper)

        for _ in range(num_kicks):
            kick_dir = rng.choices(directions, weights=kicker)[0]
            gk_dir = rng.choices(directions, weights=keeper)[0]
            is_goal = rng.random() < matrix.get(kick_dir.index, gk_dir.index)
            result.kicks.append(SimulatedKick(kick_dir, gk_dir, is_goal))

        logger.info(
            f"Simulated {num_kicks} kicks (seed={self.seed}): "
            f"{result.goals_scored} goals ({result.goal_percentage():.1f}%)"
        )
        return result

    def compare_strategies(
        self,
        alternative_kicker: Sequence[float],
        alternative_gk: Sequence[float],
        num_kicks: int,
    ) -> tuple[SimulationResult, SimulationResult]:
        """Simulate the equilibrium mixes and an alternative pair of mixes.

        Both runs use the same seed.

        Returns:
            (optimal_result, alternative_result)

        Raises:
            SolveError: If the equilibrium cannot be computed
        """
        analysis = self.penalty_kick.analyze()
        optimal = self.simulate(
            analysis.kicker_probabilities(),
            analysis.goalkeeper_probabilities(),
            num_kicks,
        )
        alternative = self.simulate(alternative_kicker, alternative_gk, num_kicks)
        return optimal, alternative
