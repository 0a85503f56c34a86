"""Plain-text rendering of strategies, payoff matrices and comparisons."""

from .ascii import GoalVisualizer, probability_bar, render_pitch
from .chart import BarChart, sparkline
from .heatmap import HEAT_LEVELS, HeatmapRenderer, value_to_heat

__all__ = [
    "BarChart",
    "GoalVisualizer",
    "HEAT_LEVELS",
    "HeatmapRenderer",
    "probability_bar",
    "render_pitch",
    "sparkline",
    "value_to_heat",
]
