"""Tests for text rendering (visualization/)."""

from football_game_theory.football.penalty import DEFAULT_SUCCESS_RATES
from football_game_theory.visualization.ascii import GoalVisualizer, probability_bar, render_pitch
from football_game_theory.visualization.chart import BarChart, sparkline
from football_game_theory.visualization.heatmap import HEAT_LEVELS, HeatmapRenderer, value_to_heat

ROWS = ["Kick L", "Kick C", "Kick R"]
COLS = ["GK Left", "GK Center", "GK Right"]


class TestGoalVisualizer:
    """Tests for goal-mouth diagrams."""

    def test_kicker_strategy(self) -> None:
        output = GoalVisualizer().render_kicker_strategy(0.34, 0.28, 0.38)
        assert "KICKER STRATEGY" in output
        for text in ("LEFT", "CENTER", "RIGHT", "34.0%", "28.0%", "38.0%"):
            assert text in output

    def test_goalkeeper_strategy(self) -> None:
        output = GoalVisualizer().render_goalkeeper_strategy(0.445, 0.121, 0.435)
        assert "GOALKEEPER STRATEGY" in output
        assert "44.5%" in output

    def test_frame_lines_have_equal_width(self) -> None:
        lines = GoalVisualizer().render_kicker_strategy(0.5, 0.0, 0.5).splitlines()
        frame = [line for line in lines if line.strip().startswith(("╔", "║", "╠", "╚"))]
        assert len({len(line) for line in frame if "⚽" not in line}) == 1

    def test_probability_bar(self) -> None:
        assert probability_bar(0.5) == "[█████░░░░░]"
        assert probability_bar(0.0) == "[░░░░░░░░░░]"
        assert probability_bar(1.0) == "[██████████]"

    def test_pitch(self) -> None:
        pitch = render_pitch()
        assert "GOAL" in pitch
        assert "KICKER" in pitch


class TestHeatmap:
    """Tests for shaded matrices."""

    def test_render(self) -> None:
        output = HeatmapRenderer().render(DEFAULT_SUCCESS_RATES, ROWS, COLS, "PK Success Rates")
        assert "PK Success Rates" in output
        assert "Kick L" in output
        assert "GK Center" in output
        assert "0.44" in output
        assert "Low (0.44)" in output
        assert "High (0.95)" in output

    def test_render_compact(self) -> None:
        output = HeatmapRenderer().render_compact(DEFAULT_SUCCESS_RATES, ROWS, COLS)
        lines = output.splitlines()
        assert len(lines) == 4
        assert lines[2].endswith("<- Kick C")
        assert HEAT_LEVELS[0] in lines[2]
        assert HEAT_LEVELS[9] in lines[1]

    def test_heat_levels(self) -> None:
        assert len(HEAT_LEVELS) == 10
        assert value_to_heat(0.0, 0.0, 1.0) == HEAT_LEVELS[0]
        assert value_to_heat(1.0, 0.0, 1.0) == HEAT_LEVELS[9]
        assert value_to_heat(0.5, 0.5, 0.5) == HEAT_LEVELS[5]


class TestBarChart:
    """Tests for bar charts and sparklines."""

    def test_render(self) -> None:
        data = [("Left", 0.34), ("Center", 0.28), ("Right", 0.38)]
        output = BarChart().render("Kicker Strategy", data, 1.0)
        assert "Kicker Strategy" in output
        assert "Left" in output
        assert "34.0%" in output
        assert "0%" in output and "100%" in output

    def test_full_bar(self) -> None:
        output = BarChart(max_bar_width=10).render("T", [("x", 1.0)], 1.0)
        assert "│██████████│" in output

    def test_render_comparison(self) -> None:
        output = BarChart().render_comparison(
            "Optimal vs Uniform",
            ["Left", "Center", "Right"],
            ("Optimal", [0.341, 0.277, 0.382]),
            ("Uniform", [1 / 3, 1 / 3, 1 / 3]),
        )
        assert "Optimal = ████" in output
        assert "34.1% vs 33.3%" in output

    def test_render_distribution(self) -> None:
        output = BarChart().render_distribution("Test", ["A", "B", "C"], [0.3, 0.5, 0.2])
        assert "█ A = 30.0%" in output
        assert "▓ B = 50.0%" in output
        assert "░ C = 20.0%" in output

    def test_sparkline(self) -> None:
        assert len(sparkline([0.1, 0.5, 0.3, 0.9, 0.2])) == 5
        assert sparkline([0.0, 1.0]) == "▁█"
        assert sparkline([0.4, 0.4]) == "▅▅"
        assert sparkline([]) == ""
