"""Exceptions for leaksim."""


class SimulationError(Exception):
    """Base error for a simulation run."""


class InvariantViolation(SimulationError):
    """A state or driver invariant was broken; the run cannot continue."""


class ParamsError(SimulationError, ValueError):
    """Invalid protocol parameters."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"Invalid parameter {field}: {message}")
