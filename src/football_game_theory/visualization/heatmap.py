"""Shaded text heatmaps of payoff matrices."""

from typing import Sequence

HEAT_LEVELS = (
    "░░░", "░░▒", "░▒▒", "▒▒▒", "▒▒▓",
    "▒▓▓", "▓▓▓", "▓▓█", "▓██", "███",
)
"""Shades from lowest to highest value."""


def _value_range(matrix: Sequence[Sequence[float]]) -> tuple[float, float]:
    values = [v for row in matrix for v in row]
    return min(values), max(values)


def value_to_heat(value: float, low: float, high: float) -> str:
    """Shade for `value` on the scale [low, high].

    A flat matrix (low == high) gets the middle shade.
    """
    if abs(high - low) < 1e-10:
        return HEAT_LEVELS[5]
    index = round((value - low) / (high - low) * (len(HEAT_LEVELS) - 1))
    return HEAT_LEVELS[min(max(index, 0), len(HEAT_LEVELS) - 1)]


class HeatmapRenderer:
    """Renders a matrix as a grid of shaded cells.

    Args:
        cell_width: Width of each column, labels included
    """

    def __init__(self, cell_width: int = 12):
        self.cell_width = cell_width

    def render(
        self,
        matrix: Sequence[Sequence[float]],
        row_labels: Sequence[str],
        col_labels: Sequence[str],
        title: str,
    ) -> str:
        """Full heatmap with title, legend and the value in every cell."""
        low, high = _value_range(matrix)
        w = self.cell_width
        total_width = w * (len(col_labels) + 1) + len(col_labels) + 2

        lines = [
            "",
            f"{title:^{total_width}}",
            f"{self.render_legend(low, high):^{total_width}}",
            "",
            f"{'':>{w}}" + "".join(f" {label:^{w}}" for label in col_labels),
            f"{'':>{w}}" + "".join(f" {'':─^{w}}" for _ in col_labels),
        ]
        for i, row in enumerate(matrix):
            label = row_labels[i] if i < len(row_labels) else ""
            cells = [f"{value_to_heat(v, low, high)} {v:.2f}" for v in row]
            lines.append(f"{label:>{w}}" + "".join(f" {cell:^{w}}" for cell in cells))
        return "\n".join(lines) + "\n"

    def render_compact(
        self,
        matrix: Sequence[Sequence[float]],
        row_labels: Sequence[str],
        col_labels: Sequence[str],
    ) -> str:
        """Shades only, one short line per row."""
        low, high = _value_range(matrix)
        lines = ["         " + "".join(f" {label:^7}" for label in col_labels)]
        for i, row in enumerate(matrix):
            label = row_labels[i] if i < len(row_labels) else ""
            shades = "".join(f" {value_to_heat(v, low, high)} " for v in row)
            lines.append(f"{label:>8} {shades}  <- {label}")
        return "\n".join(lines) + "\n"

    @staticmethod
    def render_legend(low: float, high: float) -> str:
        shades = " ".join(HEAT_LEVELS[i] for i in (0, 2, 5, 7, 9))
        return f"Low ({low:.2f}) {shades} High ({high:.2f})"
