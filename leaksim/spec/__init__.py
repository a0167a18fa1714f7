"""Inactivity leak model: state, parameters and epoch transition."""

from . import constants
from .params import LeakParams
from .types import EpochResult, State, Validator, new_state
from .state_transition import process_epoch

__all__ = [
    "constants",
    "LeakParams",
    "EpochResult",
    "State",
    "Validator",
    "new_state",
    "process_epoch",
]
