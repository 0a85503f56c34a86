"""Simplex method solver for linear programming problems.

Solves problems of the form:
    Maximize (or minimize): c^T x
    Subject to: each row a_i^T x  (<=, >=, =)  b_i,   x >= 0

Tableau layout (numpy array, one row per constraint plus the objective row):
    [structural | slack / surplus / artificial | RHS]
    last row: reduced costs, with the current objective value in the corner

When every constraint is `<=` with a non-negative right-hand side, the slack
columns form a feasible starting basis and the engine pivots straight away.
This is the case for every LP built by the game reducer. Otherwise a
feasibility phase drives artificial columns to zero first.

Pivoting:
- Entering column: most negative reduced cost (Dantzig), ties to the lowest
  column index. After `stall_limit` consecutive degenerate pivots the engine
  switches to Bland's rule (first negative reduced cost), which cannot cycle.
- Leaving row: exact minimum ratio over rows with a positive pivot entry.
  Near-ties that keep every right-hand side above -tolerance go to the
  lowest basic-variable index.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol, Sequence, runtime_checkable

import numpy as np

from football_game_theory.config import SolverConfig
from football_game_theory.errors import (
    InfeasibleError,
    NoConvergenceError,
    NumericalError,
    UnboundedError,
)


class Relation(Enum):
    """Relation between a constraint row and its right-hand side."""

    LE = "<="
    GE = ">="
    EQ = "="

    def flipped(self) -> "Relation":
        """Relation after multiplying both sides by -1."""
        if self is Relation.LE:
            return Relation.GE
        if self is Relation.GE:
            return Relation.LE
        return self


@dataclass(frozen=True)
class LPProblem:
    """Linear program in standard form.

    Attributes:
        objective: Coefficient per decision variable
        constraints: One coefficient row per constraint
        rhs: Right-hand side per constraint
        relations: Relation per constraint (Relation or "<=", ">=", "=")
        maximize: True to maximize the objective, False to minimize
    """

    objective: Sequence[float]
    constraints: Sequence[Sequence[float]]
    rhs: Sequence[float]
    relations: Sequence[Relation]
    maximize: bool = True

    def __post_init__(self) -> None:
        """Coerce to immutable tuples and validate dimensions."""
        objective = tuple(float(c) for c in self.objective)
        constraints = tuple(tuple(float(a) for a in row) for row in self.constraints)
        rhs = tuple(float(b) for b in self.rhs)
        relations = tuple(r if isinstance(r, Relation) else Relation(r) for r in self.relations)

        if not objective:
            raise ValueError("objective must have at least one coefficient")
        if not len(constraints) == len(rhs) == len(relations):
            raise ValueError(
                f"constraints ({len(constraints)}), rhs ({len(rhs)}) and "
                f"relations ({len(relations)}) must have equal length"
            )
        for i, row in enumerate(constraints):
            if len(row) != len(objective):
                raise ValueError(
                    f"constraint {i} has {len(row)} coefficients, expected {len(objective)}"
                )
        values = objective + rhs + tuple(a for row in constraints for a in row)
        if not all(np.isfinite(values)):
            raise ValueError("all coefficients must be finite")

        object.__setattr__(self, "objective", objective)
        object.__setattr__(self, "constraints", constraints)
        object.__setattr__(self, "rhs", rhs)
        object.__setattr__(self, "relations", relations)

    @property
    def num_variables(self) -> int:
        return len(self.objective)

    @property
    def num_constraints(self) -> int:
        return len(self.constraints)


@dataclass(frozen=True)
class LPSolution:
    """Optimal basic feasible solution of an LPProblem.

    Attributes:
        optimal_value: Objective value at the optimum (original sense)
        variable_values: Value per original decision variable
        duals: Shadow price per constraint (original sense and row sign)
        iterations: Pivots performed, across both phases
    """

    optimal_value: float
    variable_values: tuple[float, ...]
    duals: tuple[float, ...] = ()
    iterations: int = 0


@runtime_checkable
class LPSolver(Protocol):
    """Anything that can solve an LPProblem to optimality."""

    def solve(self, problem: LPProblem) -> LPSolution:
        """Return the optimal solution or raise an LPError."""
        ...


@dataclass
class SimplexTableau:
    """Live simplex state, mutated in place by each pivot.

    Attributes:
        table: (constraints + 1) x (columns + 1) array
        basis: Column index basic in each constraint row
        tolerance: Absolute tolerance for comparisons against zero
        blocked: Columns that may never enter the basis
    """

    table: np.ndarray
    basis: list[int]
    tolerance: float
    blocked: set[int] = field(default_factory=set)

    @property
    def num_rows(self) -> int:
        return self.table.shape[0] - 1

    @property
    def num_columns(self) -> int:
        return self.table.shape[1] - 1

    @property
    def nonbasic(self) -> frozenset[int]:
        return frozenset(range(self.num_columns)) - frozenset(self.basis)

    @property
    def objective_value(self) -> float:
        return float(self.table[-1, -1])

    def reduced_cost(self, column: int) -> float:
        return float(self.table[-1, column])

    def entering_column(self, rule: str = "dantzig") -> int | None:
        """Pick the entering column, or None if the tableau is optimal."""
        costs = self.table[-1, :-1]
        candidates = [
            j for j in range(self.num_columns)
            if j not in self.blocked and costs[j] < -self.tolerance
        ]
        if not candidates:
            return None
        if rule == "bland":
            return candidates[0]
        most_negative = min(costs[j] for j in candidates)
        return next(j for j in candidates if costs[j] <= most_negative + self.tolerance)

    def leaving_row(self, column: int) -> tuple[int, float] | None:
        """Minimum ratio test for `column`.

        Rows whose ratio exceeds the exact minimum by so little that no
        right-hand side would drop below -tolerance count as tied, and ties
        go to the lowest basic-variable index.

        Returns:
            (row, ratio) of the leaving row, or None if no entry is positive
        """
        coeffs = self.table[:-1, column]
        rows = [i for i in range(self.num_rows) if coeffs[i] > self.tolerance]
        if not rows:
            return None
        ratios = {i: self.table[i, -1] / coeffs[i] for i in rows}
        best_ratio = min(ratios.values())
        slack = self.tolerance / max(coeffs[i] for i in rows)
        tied = [i for i in rows if ratios[i] - best_ratio <= slack]
        row = min(tied, key=lambda i: self.basis[i])
        return row, float(ratios[row])

    def pivot(self, row: int, column: int) -> None:
        """Make `column` basic in `row` by Gauss-Jordan elimination.

        Only the right-hand side and the reduced costs are snapped to zero
        afterwards; constraint coefficients keep their full precision.
        """
        self.table[row] /= self.table[row, column]
        for i in range(self.table.shape[0]):
            if i != row:
                factor = self.table[i, column]
                if factor != 0.0:
                    self.table[i] -= factor * self.table[row]
        self.table[:, column] = 0.0
        self.table[row, column] = 1.0
        self.basis[row] = column

        rhs = self.table[:-1, -1]
        rhs[np.abs(rhs) < self.tolerance] = 0.0
        costs = self.table[-1]
        costs[np.abs(costs) < self.tolerance] = 0.0

    def check_feasible(self) -> None:
        """Raise NumericalError if a basic variable sits below -tolerance."""
        negative = np.flatnonzero(self.table[:-1, -1] < -self.tolerance)
        if negative.size:
            i = int(negative[0])
            raise NumericalError(
                f"Basic variable in row {i} is negative ({self.table[i, -1]:.3g})",
                row=i,
            )

    def price_out(self, costs: np.ndarray) -> None:
        """Install a maximization objective and zero out basic reduced costs."""
        row = np.append(-costs, 0.0)
        for i, column in enumerate(self.basis):
            if row[column] != 0.0:
                row -= row[column] * self.table[i]
        row[np.abs(row) < self.tolerance] = 0.0
        self.table[-1] = row

    def basic_values(self) -> np.ndarray:
        """Value of every column at the current basic solution."""
        values = np.zeros(self.num_columns)
        for i, column in enumerate(self.basis):
            values[column] = self.table[i, -1]
        return values


@dataclass
class _Layout:
    """Bookkeeping from building the initial tableau."""

    num_structural: int
    row_signs: np.ndarray
    identity_columns: list[int]
    artificial: list[int]


class SimplexEngine:
    """Simplex implementation of the LPSolver protocol.

    Each call to `solve` builds its own tableau; the engine holds only
    configuration and may be shared freely.
    """

    def __init__(self, config: SolverConfig | None = None):
        self.config = config or SolverConfig()

    def solve(self, problem: LPProblem) -> LPSolution:
        """Solve the linear program.

        Raises:
            InfeasibleError: No point satisfies the constraints
            UnboundedError: The objective grows without bound
            NoConvergenceError: The iteration cap was reached
            NumericalError: Round-off left a basic variable negative
        """
        tolerance = self.config.tolerance
        tableau, layout = self._build_tableau(problem)
        cap = self.config.iteration_cap(tableau.num_columns)
        iterations = 0

        if layout.artificial:
            costs = np.zeros(tableau.num_columns)
            costs[layout.artificial] = -1.0
            tableau.price_out(costs)
            iterations = self._pivot_until_optimal(tableau, iterations, cap)
            if -tableau.objective_value > tolerance:
                raise InfeasibleError(
                    f"Problem is infeasible (residual {-tableau.objective_value:.3g})"
                )
            self._drive_out_artificials(tableau, layout)
            tableau.blocked = set(layout.artificial)

        sense = 1.0 if problem.maximize else -1.0
        costs = np.zeros(tableau.num_columns)
        costs[: layout.num_structural] = sense * np.asarray(problem.objective)
        tableau.price_out(costs)
        iterations = self._pivot_until_optimal(tableau, iterations, cap)
        tableau.check_feasible()

        values = tableau.basic_values()[: layout.num_structural]
        values[np.abs(values) <= tolerance] = 0.0
        duals = [
            sense * layout.row_signs[i] * tableau.reduced_cost(column)
            for i, column in enumerate(layout.identity_columns)
        ]
        return LPSolution(
            optimal_value=sense * tableau.objective_value,
            variable_values=tuple(float(v) for v in values),
            duals=tuple(float(y) + 0.0 for y in duals),
            iterations=iterations,
        )

    def _build_tableau(self, problem: LPProblem) -> tuple[SimplexTableau, _Layout]:
        tolerance = self.config.tolerance
        m, n = problem.num_constraints, problem.num_variables
        a = np.array(problem.constraints, dtype=float).reshape(m, n)
        b = np.array(problem.rhs, dtype=float)
        relations = list(problem.relations)
        signs = np.ones(m)

        for i in range(m):
            if abs(b[i]) <= tolerance:
                b[i] = 0.0
            # A >= row with zero RHS is a <= row after negation, so it keeps
            # the slack start.
            if b[i] < 0.0 or (b[i] == 0.0 and relations[i] is Relation.GE):
                a[i] *= -1.0
                b[i] = -b[i] + 0.0
                signs[i] = -1.0
                relations[i] = relations[i].flipped()

        extra: list[np.ndarray] = []
        basis: list[int] = []
        artificial: list[int] = []
        for i, relation in enumerate(relations):
            unit = np.zeros(m)
            unit[i] = 1.0
            if relation is Relation.GE:
                extra.append(-unit)
            column = n + len(extra)
            extra.append(unit)
            if relation is not Relation.LE:
                artificial.append(column)
            basis.append(column)

        table = np.zeros((m + 1, n + len(extra) + 1))
        table[:m, :n] = a
        if extra:
            table[:m, n:-1] = np.column_stack(extra)
        table[:m, -1] = b

        tableau = SimplexTableau(table=table, basis=basis, tolerance=tolerance)
        layout = _Layout(
            num_structural=n,
            row_signs=signs,
            identity_columns=list(basis),
            artificial=artificial,
        )
        return tableau, layout

    def _pivot_until_optimal(self, tableau: SimplexTableau, iterations: int, cap: int) -> int:
        rule = self.config.pivot_rule
        stalled = 0
        while True:
            column = tableau.entering_column(rule)
            if column is None:
                return iterations
            if iterations >= cap:
                raise NoConvergenceError(iterations)
            choice = tableau.leaving_row(column)
            if choice is None:
                raise UnboundedError(f"Problem is unbounded in column {column}", column=column)
            row, ratio = choice
            tableau.pivot(row, column)
            iterations += 1
            stalled = stalled + 1 if ratio <= tableau.tolerance else 0
            if stalled >= self.config.stall_limit:
                rule = "bland"

    @staticmethod
    def _drive_out_artificials(tableau: SimplexTableau, layout: _Layout) -> None:
        """Replace artificials left basic at zero level.

        Rows with no usable entry are redundant and stay inert: their
        coefficients are all zero outside artificial columns, so they never
        win a ratio test.
        """
        artificial = set(layout.artificial)
        for i, column in enumerate(tableau.basis):
            if column not in artificial:
                continue
            tableau.table[i, -1] = 0.0
            for j in range(tableau.num_columns):
                if j not in artificial and abs(tableau.table[i, j]) > tableau.tolerance:
                    tableau.pivot(i, j)
                    break
