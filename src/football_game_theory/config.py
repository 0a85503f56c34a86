"""Solver configuration for football game theory.

This module provides the explicit configuration object threaded into every
solver component, plus environment-variable overrides and logging setup for
the command-line entry points.
"""

import logging
import os
from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator

from football_game_theory.parameters import (
    DEFAULT_TOLERANCE,
    ITERATION_FACTOR,
    STALL_LIMIT,
    VALUE_OFFSET,
)

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


class SolverConfig(BaseModel):
    """Numeric settings for one solve call.

    A single tolerance is shared by the simplex engine, the game reducer and
    the equilibrium validator.
    """

    model_config = ConfigDict(frozen=True)

    tolerance: float = DEFAULT_TOLERANCE
    iteration_factor: int = ITERATION_FACTOR
    max_iterations: int | None = None
    stall_limit: int = STALL_LIMIT
    pivot_rule: Literal["dantzig", "bland"] = "dantzig"
    value_offset: float = VALUE_OFFSET
    column_strategy: Literal["mirrored", "dual"] = "mirrored"
    eliminate_dominated: bool = True

    @field_validator("tolerance", "value_offset")
    @classmethod
    def validate_positive(cls, v: float) -> float:
        if not v > 0:
            raise ValueError("must be positive")
        return v

    @field_validator("iteration_factor", "stall_limit")
    @classmethod
    def validate_positive_int(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be at least 1")
        return v

    @field_validator("max_iterations")
    @classmethod
    def validate_max_iterations(cls, v: int | None) -> int | None:
        if v is not None and v < 1:
            raise ValueError("max_iterations must be at least 1")
        return v

    def iteration_cap(self, num_columns: int) -> int:
        """Pivot budget for a tableau with `num_columns` variable columns."""
        if self.max_iterations is not None:
            return self.max_iterations
        return self.iteration_factor * max(num_columns, 1)

    @classmethod
    def from_env(cls, **overrides) -> "SolverConfig":
        """Build a config from FOOTBALL_GT_* environment variables.

        Explicit keyword overrides win over the environment.
        """
        values: dict = {}
        tolerance = os.environ.get("FOOTBALL_GT_TOLERANCE")
        if tolerance:
            values["tolerance"] = float(tolerance)
        max_iterations = os.environ.get("FOOTBALL_GT_MAX_ITERATIONS")
        if max_iterations:
            values["max_iterations"] = int(max_iterations)
        pivot_rule = os.environ.get("FOOTBALL_GT_PIVOT_RULE")
        if pivot_rule:
            values["pivot_rule"] = pivot_rule.lower()
        values.update(overrides)
        return cls(**values)


def get_log_level() -> str:
    """Get configured log level from environment."""
    return os.environ.get("FOOTBALL_GT_LOG_LEVEL", "WARNING").upper()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for command-line use.

    Args:
        level: Level name (DEBUG, INFO, ...). If None, uses environment config.
    """
    logging.basicConfig(
        level=(level or get_log_level()).upper(),
        format=LOG_FORMAT,
        force=True,
    )
