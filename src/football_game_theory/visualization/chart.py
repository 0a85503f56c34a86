"""Horizontal bar charts and sparklines for strategy comparison."""

from typing import Sequence

SPARK_BLOCKS = "▁▂▃▄▅▆▇█"
DISTRIBUTION_SHADES = "█▓░"


class BarChart:
    """Horizontal bar chart renderer.

    Args:
        max_bar_width: Width of a full-scale bar
        label_width: Right-aligned width of the label column
    """

    def __init__(self, max_bar_width: int = 40, label_width: int = 15):
        self.max_bar_width = max_bar_width
        self.label_width = label_width

    def _title(self, title: str) -> list[str]:
        return ["", title, "─" * len(title)]

    def render(self, title: str, data: Sequence[tuple[str, float]], max_value: float = 1.0) -> str:
        """One bar per (label, value), scaled so `max_value` fills the width.

        Values are shown as percentages.
        """
        if max_value <= 0:
            raise ValueError(f"max_value must be positive, got {max_value}")
        lw, bw = self.label_width, self.max_bar_width

        lines = self._title(title) + [""]
        for label, value in data:
            length = min(bw, max(0, round(value / max_value * bw)))
            lines.append(f"{label:>{lw}} │{'█' * length:<{bw}}│ {value * 100:.1f}%")
        lines.append(f"{'':>{lw}} └{'─' * bw}┘")
        lines.append(f"{'':>{lw}}  0%{'':^{bw - 6}}100%")
        return "\n".join(lines) + "\n"

    def render_comparison(
        self,
        title: str,
        labels: Sequence[str],
        series1: tuple[str, Sequence[float]],
        series2: tuple[str, Sequence[float]],
    ) -> str:
        """Two series side by side per label, solid vs light shading.

        Missing values in a shorter series count as 0.
        """
        name1, values1 = series1
        name2, values2 = series2
        lw, bw = self.label_width, self.max_bar_width // 2

        lines = self._title(title)
        lines.append(f"  {name1} = ████  {name2} = ░░░░")
        lines.append("")
        for i, label in enumerate(labels):
            v1 = values1[i] if i < len(values1) else 0.0
            v2 = values2[i] if i < len(values2) else 0.0
            bar1 = "█" * min(bw, max(0, round(v1 * bw)))
            bar2 = "░" * min(bw, max(0, round(v2 * bw)))
            lines.append(
                f"{label:>{lw}} │{bar1:<{bw}}│{bar2:<{bw}}│ {v1 * 100:.1f}% vs {v2 * 100:.1f}%"
            )
        return "\n".join(lines) + "\n"

    def render_distribution(self, title: str, labels: Sequence[str], values: Sequence[float]) -> str:
        """Single stacked bar of shares, followed by a legend."""
        total = sum(values)
        if total <= 0:
            raise ValueError("distribution values must have a positive sum")

        segments = "".join(
            DISTRIBUTION_SHADES[i % len(DISTRIBUTION_SHADES)] * round(v / total * self.max_bar_width)
            for i, v in enumerate(values)
        )
        lines = self._title(title) + ["", f"  [{segments}]", ""]
        for i, (label, value) in enumerate(zip(labels, values)):
            shade = DISTRIBUTION_SHADES[i % len(DISTRIBUTION_SHADES)]
            lines.append(f"  {shade} {label} = {value / total * 100:.1f}%")
        return "\n".join(lines) + "\n"


def sparkline(values: Sequence[float]) -> str:
    """One block character per value, scaled between the min and max.

    Constant input renders as mid-height blocks.
    """
    if not values:
        return ""
    low, high = min(values), max(values)
    span = high - low
    top = len(SPARK_BLOCKS) - 1
    if span < 1e-10:
        return SPARK_BLOCKS[4] * len(values)
    return "".join(SPARK_BLOCKS[min(top, round((v - low) / span * top))] for v in values)
