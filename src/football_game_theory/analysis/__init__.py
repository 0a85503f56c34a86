"""What-if analyses on top of the penalty kick equilibrium."""

from .sensitivity import SensitivityAnalyzer, SensitivityResult
from .simulation import SimulatedKick, SimulationResult, Simulator

__all__ = [
    "SensitivityAnalyzer",
    "SensitivityResult",
    "SimulatedKick",
    "SimulationResult",
    "Simulator",
]
