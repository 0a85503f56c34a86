"""Unit tests for models/matrices.py and models/solution.py."""

import pytest

from football_game_theory.errors import ShapeError
from football_game_theory.models.matrices import PayoffMatrix
from football_game_theory.models.solution import GameSolution


class TestPayoffMatrixCreation:
    """Tests for construction and validation."""

    def test_from_rows(self) -> None:
        matrix = PayoffMatrix.from_rows([[0.5, 1], [0, 0.75]])
        assert matrix.values == ((0.5, 1.0), (0.0, 0.75))
        assert matrix.shape == (2, 2)
        assert matrix.num_rows == 2
        assert matrix.num_cols == 2

    def test_default_labels(self) -> None:
        matrix = PayoffMatrix.from_rows([[0.1, 0.2, 0.3]])
        assert matrix.row_labels == ("Row 0",)
        assert matrix.col_labels == ("Col 0", "Col 1", "Col 2")

    def test_custom_labels(self, default_matrix: PayoffMatrix) -> None:
        assert default_matrix.row_labels == ("Kick Left", "Kick Center", "Kick Right")
        assert default_matrix.col_labels == ("GK Left", "GK Center", "GK Right")

    def test_label_count_mismatch(self) -> None:
        with pytest.raises(ShapeError, match="Label counts"):
            PayoffMatrix.from_rows([[0.1, 0.2]], row_labels=["a", "b"])

    def test_ragged(self) -> None:
        with pytest.raises(ShapeError, match="row 1 has 1 entries"):
            PayoffMatrix.from_rows([[0.1, 0.2], [0.3]])

    def test_out_of_range(self) -> None:
        with pytest.raises(ShapeError, match=r"\(0, 1\)"):
            PayoffMatrix.from_rows([[0.1, 1.5]])

    def test_non_numeric(self) -> None:
        with pytest.raises(ShapeError, match="numeric"):
            PayoffMatrix.from_rows([["high", 0.2]])

    def test_empty(self) -> None:
        with pytest.raises(ShapeError, match="Empty"):
            PayoffMatrix.from_rows([])

    def test_is_immutable(self, default_matrix: PayoffMatrix) -> None:
        with pytest.raises(AttributeError):
            default_matrix.values = ()


class TestPayoffMatrixOperations:
    """Tests for derived matrices and accessors."""

    def test_accessors(self, default_matrix: PayoffMatrix) -> None:
        assert default_matrix.get(0, 0) == 0.58
        assert default_matrix.get(1, 2) == 0.83
        assert default_matrix.row(2) == (0.93, 0.90, 0.60)
        assert default_matrix.column(1) == (0.93, 0.44, 0.90)

    def test_as_array_is_read_only(self, default_matrix: PayoffMatrix) -> None:
        array = default_matrix.as_array()
        assert array.shape == (3, 3)
        with pytest.raises(ValueError):
            array[0, 0] = 1.0

    def test_transpose(self) -> None:
        matrix = PayoffMatrix.from_rows([[0.1, 0.2, 0.3], [0.4, 0.5, 0.6]])
        transposed = matrix.transpose()
        assert transposed.shape == (3, 2)
        assert transposed.row(0) == (0.1, 0.4)
        assert transposed.row_labels == matrix.col_labels

    def test_mirrored(self, default_matrix: PayoffMatrix) -> None:
        mirrored = default_matrix.mirrored()
        assert mirrored.get(0, 1) == pytest.approx(1.0 - default_matrix.get(1, 0))
        assert mirrored.row_labels == default_matrix.col_labels
        assert mirrored.col_labels == default_matrix.row_labels

    def test_submatrix(self, default_matrix: PayoffMatrix) -> None:
        sub = default_matrix.submatrix([0, 2], [1])
        assert sub.values == ((0.93,), (0.90,))
        assert sub.row_labels == ("Kick Left", "Kick Right")
        assert sub.col_labels == ("GK Center",)

    def test_with_entry(self, default_matrix: PayoffMatrix) -> None:
        changed = default_matrix.with_entry(1, 1, 0.5)
        assert changed.get(1, 1) == 0.5
        assert default_matrix.get(1, 1) == 0.44
        assert changed.row_labels == default_matrix.row_labels

    def test_with_entry_validates(self, default_matrix: PayoffMatrix) -> None:
        with pytest.raises(ShapeError):
            default_matrix.with_entry(0, 0, 1.2)

    def test_to_expected_payoff(self) -> None:
        matrix = PayoffMatrix.from_rows([[0.5, 1.0], [0.0, 0.75]])
        assert matrix.to_expected_payoff() == pytest.approx([[0.0, 1.0], [-1.0, 0.5]])

    def test_display(self, default_matrix: PayoffMatrix) -> None:
        text = default_matrix.display()
        lines = text.splitlines()
        assert len(lines) == 4
        assert "GK Center" in lines[0]
        assert lines[1].strip().startswith("Kick Left")
        assert "0.580" in lines[1]


class TestGameSolution:
    """Tests for GameSolution helpers."""

    def test_support(self) -> None:
        solution = GameSolution((0.5, 0.0, 0.5), (1.0, 0.0), 0.6)
        assert solution.support("row") == (0, 2)
        assert solution.support("column") == (0,)
        assert solution.support("row", threshold=0.5) == ()

    def test_expected_payoff(self, default_matrix: PayoffMatrix) -> None:
        solution = GameSolution((0.0, 1.0, 0.0), (0.0, 0.0, 1.0), 0.83)
        assert solution.expected_payoff(default_matrix) == pytest.approx(0.83)
