"""Penalty kick domain: directions, success rates and CSV statistics."""

from .penalty import (
    DEFAULT_SUCCESS_RATES,
    GK_LABELS,
    KICK_LABELS,
    Direction,
    PenaltyAnalysis,
    PenaltyKick,
)
from .stats import (
    PkRecord,
    StatsError,
    aggregate_records,
    load_pk_stats,
    parse_direction,
    records_to_matrix,
)

__all__ = [
    # Penalty game
    "DEFAULT_SUCCESS_RATES",
    "GK_LABELS",
    "KICK_LABELS",
    "Direction",
    "PenaltyAnalysis",
    "PenaltyKick",
    # Statistics
    "PkRecord",
    "StatsError",
    "aggregate_records",
    "load_pk_stats",
    "parse_direction",
    "records_to_matrix",
]
