"""Per-validator epoch processing functions."""

from .capacity import compute_inclusion_probability, draw_attestation_included
from .inactivity import process_inactivity_updates_single_pass
from .rewards import process_rewards_and_penalties_single_pass, get_inactivity_penalty
from .registry import (
    is_eligible_for_ejection,
    process_registry_updates_single_pass,
    process_ejections,
)
from .effective_balance import process_effective_balance_updates_single_pass

__all__ = [
    "compute_inclusion_probability",
    "draw_attestation_included",
    "process_inactivity_updates_single_pass",
    "process_rewards_and_penalties_single_pass",
    "get_inactivity_penalty",
    "is_eligible_for_ejection",
    "process_registry_updates_single_pass",
    "process_ejections",
    "process_effective_balance_updates_single_pass",
]
