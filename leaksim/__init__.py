"""Leaksim - inactivity leak simulator for proof-of-stake validator sets."""

from .config import SimulationConfig
from .exceptions import InvariantViolation, ParamsError, SimulationError
from .simulation import SimulationResult, run_simulation

__all__ = [
    "SimulationConfig",
    "InvariantViolation",
    "ParamsError",
    "SimulationError",
    "SimulationResult",
    "run_simulation",
]
