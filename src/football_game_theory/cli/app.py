"""Command-line interface for penalty kick analysis.

Usage:
    football-gt analyze [--data CSV] [--heatmap]
    football-gt simulate [--kicks N] [--seed S] [--data CSV]
    football-gt sensitivity [--delta D] [--top K] [--workers W] [--data CSV]

Global options (before the command):
    --log-level LEVEL   DEBUG, INFO, WARNING (default from FOOTBALL_GT_LOG_LEVEL)
    --tolerance TOL     Solver tolerance (default from FOOTBALL_GT_TOLERANCE)
"""

import argparse
import logging
import sys
from typing import Sequence

from football_game_theory.analysis.sensitivity import SensitivityAnalyzer
from football_game_theory.analysis.simulation import Simulator
from football_game_theory.config import SolverConfig, configure_logging
from football_game_theory.errors import SolveError
from football_game_theory.football.penalty import (
    DEFAULT_SUCCESS_RATES,
    Direction,
    PenaltyKick,
)
from football_game_theory.football.stats import (
    StatsError,
    aggregate_records,
    load_pk_stats,
    records_to_matrix,
)
from football_game_theory.parameters import (
    DEFAULT_NUM_KICKS,
    DEFAULT_SEED,
    DEFAULT_SENSITIVITY_DELTA,
)
from football_game_theory.visualization.ascii import GoalVisualizer
from football_game_theory.visualization.chart import BarChart
from football_game_theory.visualization.heatmap import HeatmapRenderer

logger = logging.getLogger(__name__)

UNIFORM_STRATEGY = (1.0 / 3.0, 1.0 / 3.0, 1.0 / 3.0)


def _positive_float(text: str) -> float:
    value = float(text)
    if not value > 0:
        raise argparse.ArgumentTypeError(f"must be positive: {text}")
    return value


def _positive_int(text: str) -> int:
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1: {text}")
    return value


def load_success_rates(data_path: str | None) -> list[list[float]]:
    """Success-rate matrix from a CSV file, or the built-in data if None.

    Raises:
        StatsError: If the file is malformed or incomplete
        OSError: If the file cannot be read
    """
    if data_path is None:
        return [list(row) for row in DEFAULT_SUCCESS_RATES]
    records = aggregate_records(load_pk_stats(data_path))
    return records_to_matrix(records)


def cmd_analyze(args: argparse.Namespace, config: SolverConfig) -> None:
    """Print the matrix, the equilibrium and goal diagrams."""
    pk = PenaltyKick(load_success_rates(args.data), config=config)
    matrix = pk.payoff_matrix

    print("Payoff Matrix (Goal Success Rates):")
    print(matrix.display())
    if args.heatmap:
        print(
            HeatmapRenderer().render(
                matrix.values, matrix.row_labels, matrix.col_labels, "PK Success Rates"
            )
        )

    analysis = pk.analyze()
    print("Optimal Strategies (Nash Equilibrium):")
    print(f"  Kicker:     {analysis.kicker_strategy_string()}")
    print(f"  Goalkeeper: {analysis.goalkeeper_strategy_string()}")
    print(f"  Expected Goal Probability: {analysis.goal_probability * 100:.1f}%")

    visualizer = GoalVisualizer()
    print(visualizer.render_kicker_strategy(*analysis.kicker_probabilities()))
    print(visualizer.render_goalkeeper_strategy(*analysis.goalkeeper_probabilities()))


def cmd_simulate(args: argparse.Namespace, config: SolverConfig) -> None:
    """Simulate equilibrium play against a uniform mix."""
    simulator = Simulator(load_success_rates(args.data), seed=args.seed, config=config)
    optimal, uniform = simulator.compare_strategies(
        UNIFORM_STRATEGY, UNIFORM_STRATEGY, args.kicks
    )

    print(f"=== Simulation: {args.kicks} kicks (seed {args.seed}) ===")
    print(
        f"Optimal strategy:  {optimal.goals_scored} / {optimal.total_kicks} "
        f"({optimal.goal_percentage():.1f}% goals)"
    )
    print(
        f"Uniform strategy:  {uniform.goals_scored} / {uniform.total_kicks} "
        f"({uniform.goal_percentage():.1f}% goals)"
    )

    labels = [d.label for d in Direction]
    print(
        BarChart().render_comparison(
            "Kicker Mix: Optimal vs Uniform",
            labels,
            ("Optimal", optimal.kicker_strategy),
            ("Uniform", uniform.kicker_strategy),
        )
    )


def cmd_sensitivity(args: argparse.Namespace, config: SolverConfig) -> None:
    """Rank success rates by how much they move the equilibrium."""
    analyzer = SensitivityAnalyzer(load_success_rates(args.data), config)
    critical = analyzer.find_critical_parameters(args.delta, args.workers)

    print(f"Most sensitive parameters (delta={args.delta}):")
    for rank, (row, col, sensitivity) in enumerate(critical[: args.top], start=1):
        kick = Direction.from_index(row).label
        dive = Direction.from_index(col).label
        print(f"  {rank}. Kick {kick} vs GK {dive}: sensitivity = {sensitivity:.4f}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="football-gt",
        description="Game-theoretic analysis of football penalty kicks",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (default: FOOTBALL_GT_LOG_LEVEL or WARNING)",
    )
    parser.add_argument(
        "--tolerance",
        type=_positive_float,
        default=None,
        help="Numeric tolerance for the solver",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze = subparsers.add_parser("analyze", help="Solve for the optimal strategies")
    analyze.add_argument("--data", type=str, default=None, help="PK statistics CSV")
    analyze.add_argument("--heatmap", action="store_true", help="Show a heatmap of the matrix")
    analyze.set_defaults(handler=cmd_analyze)

    simulate = subparsers.add_parser("simulate", help="Simulate optimal vs uniform play")
    simulate.add_argument(
        "--kicks",
        type=_positive_int,
        default=DEFAULT_NUM_KICKS,
        help=f"Number of kicks (default: {DEFAULT_NUM_KICKS})",
    )
    simulate.add_argument(
        "--seed",
        type=int,
        default=DEFAULT_SEED,
        help=f"Random seed (default: {DEFAULT_SEED})",
    )
    simulate.add_argument("--data", type=str, default=None, help="PK statistics CSV")
    simulate.set_defaults(handler=cmd_simulate)

    sensitivity = subparsers.add_parser("sensitivity", help="Find the most sensitive success rates")
    sensitivity.add_argument(
        "--delta",
        type=float,
        default=DEFAULT_SENSITIVITY_DELTA,
        help=f"Change applied to each success rate (default: {DEFAULT_SENSITIVITY_DELTA})",
    )
    sensitivity.add_argument(
        "--top", type=_positive_int, default=3, help="How many parameters to list (default: 3)"
    )
    sensitivity.add_argument(
        "--workers",
        type=_positive_int,
        default=None,
        help="Worker processes for the sweep (default: run in-process)",
    )
    sensitivity.add_argument("--data", type=str, default=None, help="PK statistics CSV")
    sensitivity.set_defaults(handler=cmd_sensitivity)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the football-gt command."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    overrides = {}
    if args.tolerance is not None:
        overrides["tolerance"] = args.tolerance
    config = SolverConfig.from_env(**overrides)
    logger.debug(f"Running {args.command} with {config!r}")

    try:
        args.handler(args, config)
    except (SolveError, StatsError, OSError) as e:
        logger.debug(f"{args.command} failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
