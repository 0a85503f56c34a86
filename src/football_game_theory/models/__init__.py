"""Football game theory data models.

This module exports the payoff matrix and the equilibrium result type.
"""

from .matrices import PayoffMatrix
from .solution import GameSolution, Strategy

__all__ = [
    "PayoffMatrix",
    "GameSolution",
    "Strategy",
]
