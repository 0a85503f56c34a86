"""Typed errors raised by the solver core.

Every failure of a solve call is one of these. The core never logs or
retries; callers decide what to do with them.

Hierarchy:
    SolveError
    ├── ShapeError            malformed payoff matrix or strategy
    ├── LPError               linear program has no usable optimum
    │   ├── InfeasibleError
    │   ├── UnboundedError
    │   ├── NoConvergenceError
    │   └── NumericalError
    └── EquilibriumError      post-solve validation failed
"""

from enum import Enum


class LPStatus(Enum):
    """Terminal states of a simplex run."""

    OPTIMAL = "optimal"
    INFEASIBLE = "infeasible"
    UNBOUNDED = "unbounded"
    NO_CONVERGENCE = "no_convergence"
    NUMERICAL = "numerical"


class EquilibriumViolation(Enum):
    """The specific equilibrium condition a strategy pair failed."""

    ROW_NORMALIZATION = "row_normalization"
    COLUMN_NORMALIZATION = "column_normalization"
    ROW_DEVIATION = "row_deviation"
    COLUMN_DEVIATION = "column_deviation"
    VALUE_MISMATCH = "value_mismatch"


class SolveError(Exception):
    """Base class for all solver failures."""


class ShapeError(SolveError, ValueError):
    """Payoff matrix or strategy vector is malformed."""


class LPError(SolveError):
    """The linear program could not be solved to optimality."""

    status: LPStatus


class InfeasibleError(LPError):
    """Constraints admit no feasible point."""

    status = LPStatus.INFEASIBLE

    def __init__(self, message: str = "Problem is infeasible"):
        super().__init__(message)


class UnboundedError(LPError):
    """Objective can grow without bound."""

    status = LPStatus.UNBOUNDED

    def __init__(self, message: str = "Problem is unbounded", column: int | None = None):
        super().__init__(message)
        self.column = column


class NoConvergenceError(LPError):
    """Iteration cap exceeded before reaching an optimum."""

    status = LPStatus.NO_CONVERGENCE

    def __init__(self, iterations: int):
        super().__init__(f"Maximum iterations exceeded ({iterations})")
        self.iterations = iterations


class NumericalError(LPError):
    """Round-off pushed the basic solution outside the feasible region."""

    status = LPStatus.NUMERICAL

    def __init__(self, message: str, row: int | None = None):
        super().__init__(message)
        self.row = row


class EquilibriumError(SolveError):
    """A strategy pair failed Nash equilibrium validation.

    Attributes:
        violation: Which condition failed
        player: "row" or "column"
        index: Offending pure strategy index, if the failure is a deviation
        gap: Amount by which the condition was missed
    """

    def __init__(
        self,
        violation: EquilibriumViolation,
        message: str,
        player: str | None = None,
        index: int | None = None,
        gap: float = 0.0,
    ):
        super().__init__(message)
        self.violation = violation
        self.player = player
        self.index = index
        self.gap = gap
