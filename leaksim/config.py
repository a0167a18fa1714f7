"""Configuration for a leaksim run."""

from dataclasses import dataclass
from typing import Optional

from .exceptions import InvariantViolation
from .spec.constants import MAX_EFFECTIVE_BALANCE


@dataclass
class SimulationConfig:
    """Driver inputs for one simulation run."""

    offline_percent: int = 80
    validator_count: int = 1_000_000
    initial_balance: int = MAX_EFFECTIVE_BALANCE
    max_epochs: Optional[int] = None
    seed: Optional[int] = None
    progress_interval: int = 100
    record_history: bool = True

    def validate(self) -> None:
        """Raise InvariantViolation if the inputs cannot describe a run."""
        if not 0 <= self.offline_percent <= 100:
            raise InvariantViolation(
                f"offline percent must be between 0 and 100, got {self.offline_percent}"
            )
        if self.validator_count <= 0:
            raise InvariantViolation(
                f"validator count must be positive, got {self.validator_count}"
            )
        if self.initial_balance < 0:
            raise InvariantViolation(
                f"initial balance must be non-negative, got {self.initial_balance}"
            )
        if self.max_epochs is not None and self.max_epochs <= 0:
            raise InvariantViolation(f"max epochs must be positive, got {self.max_epochs}")

    @property
    def participant_count(self) -> int:
        """Validators with an index below this participate; the rest are offline."""
        return (100 - self.offline_percent) * self.validator_count // 100
