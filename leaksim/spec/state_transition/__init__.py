"""Inactivity leak state transition implementation.

Implements the per-epoch validator state transition: inactivity scores,
inactivity penalties, ejections through the churn-limited exit queue and
effective balance updates, with attestation inclusion limited by a block
capacity model.
"""

from .transition import process_epoch
from .dispatcher import (
    compute_chunk_ranges,
    fold_results,
    process_validator_chunks,
    process_validator_range,
)
from .helpers.accessors import get_validator_churn_limit, is_in_inactivity_leak
from .helpers.mutators import initiate_validator_exit

__all__ = [
    "process_epoch",
    "compute_chunk_ranges",
    "fold_results",
    "process_validator_chunks",
    "process_validator_range",
    "get_validator_churn_limit",
    "is_in_inactivity_leak",
    "initiate_validator_exit",
]
