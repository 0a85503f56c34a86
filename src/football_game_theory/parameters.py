"""Numeric parameters for the football game theory solver.

This module is the SINGLE SOURCE OF TRUTH for tunable solver constants.
`SolverConfig` (see config.py) reads its defaults from here; no solver
component reads these values directly at call time.

Parameter Categories:
- Numerics: Tolerance shared by every comparison against zero
- Termination: Iteration cap and anti-cycling fallback
- Reduction: Shift applied to the value variable
- Presentation / Analysis: Defaults for the outer layers

Usage:
    from football_game_theory.parameters import DEFAULT_TOLERANCE
"""

# =============================================================================
# NUMERICS
# =============================================================================

DEFAULT_TOLERANCE = 1e-9
"""Absolute tolerance for every floating-point comparison in the core.

Current: 1e-9

Analysis:
    Payoffs live in [0, 1] and games are at most ~10x10, so accumulated
    pivoting error stays around 1e-15. A value within this distance of zero
    is treated as zero; two values within it of each other are tied.

    The SAME constant is used by the simplex engine (reduced costs, ratio
    test), the reducer (probability snapping) and the validator (deviation
    checks). Mixing tolerances produces solutions that the engine accepts and
    the validator rejects.

Tuning:
    - Loosen toward 1e-7 for badly scaled user matrices
    - Tightening below 1e-12 starts rejecting honest round-off
"""


# =============================================================================
# TERMINATION
# =============================================================================

ITERATION_FACTOR = 50
"""Pivot budget per tableau column.

Current: 50

Analysis:
    The iteration cap is ITERATION_FACTOR x (structural + slack columns).
    A 3x3 game has 4 structural and 4 slack columns, so 400 pivots; real
    solves finish in fewer than 10.

Related: STALL_LIMIT
"""

STALL_LIMIT = 10
"""Consecutive degenerate pivots tolerated before switching to Bland's rule.

Current: 10

Analysis:
    Dantzig's rule converges fastest in practice but can cycle on degenerate
    tableaus. Once this many zero-step pivots happen in a row, the engine
    falls back to Bland's rule, which cannot cycle.
"""


# =============================================================================
# REDUCTION
# =============================================================================

VALUE_OFFSET = 1.0
"""Shift added to every payoff so the game-value variable stays positive.

Current: 1.0

Analysis:
    The value variable w = v + VALUE_OFFSET must be non-negative for the
    simplex engine. With payoffs in [0, 1], shifted payoffs are in [1, 2]
    so the row player's normalisation constraint is tight at every optimum.
"""


# =============================================================================
# PRESENTATION / ANALYSIS
# =============================================================================

STRATEGY_DISPLAY_THRESHOLD = 0.001
"""Probabilities at or below this are omitted from strategy strings."""

DEFAULT_SEED = 12345
"""Seed for the Monte Carlo simulator when none is given."""

DEFAULT_SENSITIVITY_DELTA = 0.05
"""Perturbation applied to each payoff entry in a sensitivity sweep."""

DEFAULT_NUM_KICKS = 10000
"""Number of simulated kicks for the CLI simulate command."""

SIMULATION_STRATEGY_TOLERANCE = 1e-6
"""Allowed deviation from 1.0 in the sum of a simulated strategy.

Looser than DEFAULT_TOLERANCE so hand-typed mixes such as (1/3, 1/3, 1/3)
or percentages rounded to a few decimals are accepted.
"""
