"""Loading empirical penalty kick statistics from CSV.

Expected format, one row per (kick, dive) pair:

    kick_direction,gk_direction,goals,attempts
    left,left,58,100
    left,center,93,100
    ...

Several rows for the same pair are allowed and are summed by
`aggregate_records`. Direction names are case-insensitive.
"""

import csv
import logging
from collections import defaultdict
from pathlib import Path
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from football_game_theory.football.penalty import Direction

logger = logging.getLogger(__name__)

CSV_FIELDS = ("kick_direction", "gk_direction", "goals", "attempts")

_DIRECTION_ALIASES = {
    "left": Direction.LEFT,
    "l": Direction.LEFT,
    "center": Direction.CENTER,
    "centre": Direction.CENTER,
    "middle": Direction.CENTER,
    "c": Direction.CENTER,
    "m": Direction.CENTER,
    "right": Direction.RIGHT,
    "r": Direction.RIGHT,
}


class StatsError(ValueError):
    """Penalty statistics are unreadable or incomplete."""


class PkRecord(BaseModel):
    """Goals and attempts for one (kick direction, dive direction) pair."""

    model_config = ConfigDict(frozen=True)

    kick_direction: str = Field(min_length=1)
    gk_direction: str = Field(min_length=1)
    goals: int = Field(ge=0)
    attempts: int = Field(ge=0)

    @model_validator(mode="after")
    def validate_goals_within_attempts(self) -> "PkRecord":
        if self.goals > self.attempts:
            raise ValueError(f"goals ({self.goals}) exceed attempts ({self.attempts})")
        return self

    @property
    def success_rate(self) -> float:
        """Goals per attempt, or 0.0 when there were no attempts."""
        if self.attempts == 0:
            return 0.0
        return self.goals / self.attempts


def parse_direction(text: str) -> Direction:
    """Map a direction name or abbreviation to a Direction.

    Raises:
        StatsError: If the name is not recognised
    """
    try:
        return _DIRECTION_ALIASES[text.strip().lower()]
    except KeyError:
        raise StatsError(f"Unknown direction: {text!r}") from None


def load_pk_stats(path: str | Path) -> list[PkRecord]:
    """Read PK records from a CSV file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        StatsError: If the header is wrong or a row fails validation
    """
    path = Path(path)
    records = []
    with path.open(newline="") as f:
        reader = csv.DictReader(f)
        missing = [name for name in CSV_FIELDS if name not in (reader.fieldnames or ())]
        if missing:
            raise StatsError(f"{path}: missing CSV columns: {', '.join(missing)}")
        for line_number, row in enumerate(reader, start=2):
            try:
                records.append(PkRecord.model_validate({name: row[name] for name in CSV_FIELDS}))
            except ValidationError as e:
                raise StatsError(f"{path}:{line_number}: invalid record: {e}") from e

    logger.info(f"Loaded {len(records)} PK records from {path}")
    return records


def aggregate_records(records: Iterable[PkRecord]) -> list[PkRecord]:
    """Sum goals and attempts of records that share a direction pair.

    Directions are matched through `parse_direction`, so aliases such as
    "L" and "left" share a pair. Pairs are returned under their lowercase
    direction names, in order of first appearance.

    Raises:
        StatsError: If a direction is unknown
    """
    totals: dict[tuple[Direction, Direction], list[int]] = defaultdict(lambda: [0, 0])
    for record in records:
        key = (parse_direction(record.kick_direction), parse_direction(record.gk_direction))
        totals[key][0] += record.goals
        totals[key][1] += record.attempts

    return [
        PkRecord(
            kick_direction=kick.label.lower(),
            gk_direction=gk.label.lower(),
            goals=goals,
            attempts=attempts,
        )
        for (kick, gk), (goals, attempts) in totals.items()
    ]


def records_to_matrix(records: Iterable[PkRecord]) -> list[list[float]]:
    """Build the 3x3 success-rate matrix (rows: kick, columns: dive).

    A later record for the same cell replaces an earlier one; call
    `aggregate_records` first to combine them.

    Raises:
        StatsError: If a direction is unknown or any cell has no record
    """
    size = len(Direction)
    matrix = [[0.0] * size for _ in range(size)]
    filled = [[False] * size for _ in range(size)]

    for record in records:
        i = parse_direction(record.kick_direction).index
        j = parse_direction(record.gk_direction).index
        matrix[i][j] = record.success_rate
        filled[i][j] = True

    for kick in Direction:
        for dive in Direction:
            if not filled[kick.index][dive.index]:
                raise StatsError(
                    f"Missing data for kick={kick.label.lower()}, gk={dive.label.lower()}"
                )
    return matrix
