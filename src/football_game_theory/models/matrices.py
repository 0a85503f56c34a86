"""Payoff matrix for two-player zero-sum games.

Entries are success probabilities from the row player's perspective: the
row player (kicker) maximizes, the column player (goalkeeper) minimizes.
Validation happens once, at construction, so every PayoffMatrix that exists
is rectangular, non-empty and bounded to [0, 1].
"""

import math
from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

from football_game_theory.errors import ShapeError


@dataclass(frozen=True)
class PayoffMatrix:
    """Immutable m x n table of probabilities in [0, 1].

    Outcomes are indexed by (row_choice, col_choice). Labels are for display
    only and default to "Row i" / "Col j".
    """

    values: tuple[tuple[float, ...], ...]
    row_labels: tuple[str, ...] = ()
    col_labels: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate shape and entry range."""
        try:
            values = tuple(tuple(float(v) for v in row) for row in self.values)
        except (TypeError, ValueError) as e:
            raise ShapeError(f"Payoff matrix entries must be numeric: {e}") from e
        object.__setattr__(self, "values", values)

        if not self.values or not self.values[0]:
            raise ShapeError("Empty payoff matrix")

        num_cols = len(self.values[0])
        for i, row in enumerate(self.values):
            if len(row) != num_cols:
                raise ShapeError(
                    f"Inconsistent row lengths in payoff matrix: row {i} has "
                    f"{len(row)} entries, expected {num_cols}"
                )
            for j, value in enumerate(row):
                if not math.isfinite(value) or not 0.0 <= value <= 1.0:
                    raise ShapeError(f"Invalid probability at ({i}, {j}): {value}")

        row_labels = self.row_labels or tuple(f"Row {i}" for i in range(len(self.values)))
        col_labels = self.col_labels or tuple(f"Col {j}" for j in range(num_cols))
        if len(row_labels) != len(self.values) or len(col_labels) != num_cols:
            raise ShapeError("Label counts do not match matrix dimensions")
        object.__setattr__(self, "row_labels", tuple(row_labels))
        object.__setattr__(self, "col_labels", tuple(col_labels))

    @classmethod
    def from_rows(
        cls,
        rows: Iterable[Iterable[float]],
        row_labels: Sequence[str] | None = None,
        col_labels: Sequence[str] | None = None,
    ) -> "PayoffMatrix":
        """Build a matrix from any nested iterable of numbers.

        Raises:
            ShapeError: If the table is empty, ragged, non-numeric or out of range
        """
        return cls(tuple(rows), tuple(row_labels or ()), tuple(col_labels or ()))

    @property
    def shape(self) -> tuple[int, int]:
        return len(self.values), len(self.values[0])

    @property
    def num_rows(self) -> int:
        return len(self.values)

    @property
    def num_cols(self) -> int:
        return len(self.values[0])

    def get(self, row: int, col: int) -> float:
        """Payoff for a specific strategy combination."""
        return self.values[row][col]

    def row(self, i: int) -> tuple[float, ...]:
        return self.values[i]

    def column(self, j: int) -> tuple[float, ...]:
        return tuple(row[j] for row in self.values)

    def as_array(self) -> np.ndarray:
        """Read-only numpy copy of the payoffs."""
        array = np.array(self.values, dtype=float)
        array.setflags(write=False)
        return array

    def transpose(self) -> "PayoffMatrix":
        return PayoffMatrix(
            tuple(zip(*self.values)),
            row_labels=self.col_labels,
            col_labels=self.row_labels,
        )

    def mirrored(self) -> "PayoffMatrix":
        """Complement-transpose 1 - A^T.

        In the mirrored game the column player becomes the maximizing row
        player, with the same probabilities read from their side.
        """
        return PayoffMatrix(
            tuple(tuple(1.0 - v for v in col) for col in zip(*self.values)),
            row_labels=self.col_labels,
            col_labels=self.row_labels,
        )

    def submatrix(self, rows: Sequence[int], cols: Sequence[int]) -> "PayoffMatrix":
        """Keep only the given row and column indices, in order."""
        return PayoffMatrix(
            tuple(tuple(self.values[i][j] for j in cols) for i in rows),
            row_labels=tuple(self.row_labels[i] for i in rows),
            col_labels=tuple(self.col_labels[j] for j in cols),
        )

    def with_entry(self, row: int, col: int, value: float) -> "PayoffMatrix":
        """Copy with one entry replaced (validated like any other matrix)."""
        values = [list(r) for r in self.values]
        values[row][col] = value
        return PayoffMatrix(
            tuple(tuple(r) for r in values),
            row_labels=self.row_labels,
            col_labels=self.col_labels,
        )

    def to_expected_payoff(self) -> list[list[float]]:
        """Map success probabilities to goal = +1 / save = -1 payoffs.

        Maps [0, 1] onto [-1, 1] via 2p - 1. Equilibrium strategies are
        unchanged by this affine map; only the value is rescaled.
        """
        return [[2.0 * p - 1.0 for p in row] for row in self.values]

    def display(self) -> str:
        """Fixed-width text table with labels."""
        lines = [f"{'':>12}" + "".join(f"{label:>12}" for label in self.col_labels)]
        for label, row in zip(self.row_labels, self.values):
            lines.append(f"{label:>12}" + "".join(f"{v:>12.3f}" for v in row))
        return "\n".join(lines) + "\n"
