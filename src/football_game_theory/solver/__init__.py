"""Numerical core: simplex engine, game reduction and equilibrium validation.

Usage:
    from football_game_theory.solver import solve_zero_sum_game

    solution = solve_zero_sum_game([
        [0.58, 0.93, 0.95],
        [0.83, 0.44, 0.83],
        [0.93, 0.90, 0.60],
    ])
    print(solution.row_strategy, solution.column_strategy, solution.game_value)
"""

from football_game_theory.errors import (
    EquilibriumError,
    EquilibriumViolation,
    InfeasibleError,
    LPError,
    LPStatus,
    NoConvergenceError,
    NumericalError,
    ShapeError,
    SolveError,
    UnboundedError,
)
from football_game_theory.solver.simplex import (
    LPProblem,
    LPSolution,
    LPSolver,
    Relation,
    SimplexEngine,
    SimplexTableau,
)
from football_game_theory.solver.nash import (
    EquilibriumValidator,
    SaddlePoint,
    best_response,
    dominated_strategies,
    expected_payoff,
    find_saddle_point,
    is_epsilon_nash,
)
from football_game_theory.solver.game import GameReducer, GameSolver, solve_zero_sum_game

__all__ = [
    # Errors
    "SolveError",
    "ShapeError",
    "LPError",
    "LPStatus",
    "InfeasibleError",
    "UnboundedError",
    "NoConvergenceError",
    "NumericalError",
    "EquilibriumError",
    "EquilibriumViolation",
    # Simplex
    "LPProblem",
    "LPSolution",
    "LPSolver",
    "Relation",
    "SimplexEngine",
    "SimplexTableau",
    # Equilibrium
    "EquilibriumValidator",
    "SaddlePoint",
    "best_response",
    "dominated_strategies",
    "expected_payoff",
    "find_saddle_point",
    "is_epsilon_nash",
    # Games
    "GameReducer",
    "GameSolver",
    "solve_zero_sum_game",
]
