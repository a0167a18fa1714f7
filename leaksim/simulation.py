"""Simulation driver.

Seeds a validator population, advances it epoch by epoch until finality is
restored and no active validator carries an inactivity score, and reports how
long the leak lasted and how much stake it burned.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from . import metrics
from .config import SimulationConfig
from .exceptions import InvariantViolation
from .spec.params import LeakParams
from .spec.state_transition import process_epoch
from .spec.state_transition.helpers.misc import compute_epochs_in_days
from .spec.types import State

logger = logging.getLogger(__name__)

Stats = Tuple[int, float, int]


def compute_min_max_avg(values: Sequence[int]) -> Stats:
    """Return (min, avg, max) of a non-empty sequence.

    Raises:
        InvariantViolation: If values is empty
    """
    if len(values) == 0:
        raise InvariantViolation("cannot compute statistics of an empty sample")
    return min(values), sum(values) / len(values), max(values)


@dataclass
class EpochHistory:
    """Per-epoch series recorded by the driver."""

    offline_balances: List[Stats] = field(default_factory=list)
    offline_inactivity_scores: List[Stats] = field(default_factory=list)
    active_validators: List[int] = field(default_factory=list)
    participation: List[float] = field(default_factory=list)
    active_balance: List[int] = field(default_factory=list)
    active_participating_balance: List[int] = field(default_factory=list)


@dataclass
class SimulationResult:
    """Outcome of one simulation run."""

    offline_percent: int
    validator_count: int
    completed: bool
    end_epoch: int
    leak_stop_epoch: Optional[int]
    leak_stop_days: Optional[float]
    fraction_balance_burned: float
    exit_queue_epoch: int
    offline_balances_end: Optional[Stats]
    offline_inactivity_scores_end: Optional[Stats]
    active_validators_end: int
    participation_end: float
    history: EpochHistory


def seed_state(config: SimulationConfig, params: Optional[LeakParams] = None) -> State:
    """Create a state with the configured population.

    Validators below ``config.participant_count`` participate; the rest are
    offline for the whole run.
    """
    config.validate()
    state = State(params=params, seed=config.seed)
    participant_count = config.participant_count
    for index in range(config.validator_count):
        state.add_validator(index < participant_count, config.initial_balance)
    return state


def compute_participation(state: State) -> float:
    if state.active_balance == 0:
        return 0.0
    return state.active_participating_balance / state.active_balance


def compute_fraction_burned(state: State, initial_balance: int) -> float:
    """Return the share of the initial stake lost to penalties."""
    if state.total_initial_balance == 0:
        return 0.0
    burned = sum(
        initial_balance - balance
        for balance in state.balances
        if initial_balance > balance
    )
    return burned / state.total_initial_balance


def run_simulation(
    config: SimulationConfig,
    params: Optional[LeakParams] = None,
    export_metrics: bool = False,
) -> SimulationResult:
    """Run one simulation to completion or until ``config.max_epochs``.

    Args:
        config: Driver inputs
        params: Protocol parameters (mainnet defaults if omitted)
        export_metrics: Update the Prometheus metrics after every epoch

    Returns:
        Summary of the run

    Raises:
        InvariantViolation: If the configuration is invalid
    """
    state = seed_state(config, params)
    params = state.params
    offline_start = config.participant_count

    logger.info(
        f"Starting simulation: {config.validator_count} validators, "
        f"{config.offline_percent}% offline, preset {params.preset_base}"
    )
    if export_metrics:
        metrics.set_run_info(config.offline_percent, config.validator_count, params.preset_base)

    history = EpochHistory()
    leak_stop_epoch: Optional[int] = None
    completed = False

    while True:
        start_time = time.time()
        process_epoch(state)
        elapsed = time.time() - start_time

        in_leak = state.is_in_inactivity_leak()
        if export_metrics:
            metrics.update_epoch(state, elapsed)

        if config.record_history:
            if offline_start < len(state.balances):
                history.offline_balances.append(
                    compute_min_max_avg(state.balances[offline_start:])
                )
                history.offline_inactivity_scores.append(
                    compute_min_max_avg(state.inactivity_scores[offline_start:])
                )
            history.active_validators.append(state.active_count_prev_epoch)
            history.participation.append(compute_participation(state))
            history.active_balance.append(state.active_balance)
            history.active_participating_balance.append(state.active_participating_balance)

        if not in_leak and leak_stop_epoch is None:
            leak_stop_epoch = state.epoch
            logger.info(f"Inactivity leak stopped at epoch {leak_stop_epoch}")

        if config.progress_interval and state.epoch % config.progress_interval == 0:
            logger.info(
                f"epoch {state.epoch}  balance {state.active_balance}  "
                f"participating {state.active_participating_balance}"
            )

        # Finality recovered and no more penalties for active validators
        if not in_leak and state.max_active_inactivity_score == 0:
            completed = True
            break

        if config.max_epochs is not None and state.epoch >= config.max_epochs:
            logger.warning(f"Stopping at max epochs {config.max_epochs} before recovery")
            break

    leak_stop_days = None
    if leak_stop_epoch is not None:
        leak_stop_days = compute_epochs_in_days(
            leak_stop_epoch, params.slots_per_epoch, params.seconds_per_slot
        )

    offline_balances_end = None
    offline_scores_end = None
    if offline_start < len(state.balances):
        offline_balances_end = compute_min_max_avg(state.balances[offline_start:])
        offline_scores_end = compute_min_max_avg(state.inactivity_scores[offline_start:])

    result = SimulationResult(
        offline_percent=config.offline_percent,
        validator_count=config.validator_count,
        completed=completed,
        end_epoch=state.epoch,
        leak_stop_epoch=leak_stop_epoch,
        leak_stop_days=leak_stop_days,
        fraction_balance_burned=compute_fraction_burned(state, config.initial_balance),
        exit_queue_epoch=state.exit_queue_epoch,
        offline_balances_end=offline_balances_end,
        offline_inactivity_scores_end=offline_scores_end,
        active_validators_end=state.active_count_prev_epoch,
        participation_end=compute_participation(state),
        history=history,
    )
    logger.info(
        f"Simulation finished at epoch {result.end_epoch} "
        f"(completed={result.completed}, burned={result.fraction_balance_burned:.6f})"
    )
    return result


def _format_stats(stats: Optional[Stats]) -> str:
    if stats is None:
        return "n/a"
    low, avg, high = stats
    return f"{low} {avg:f} {high}"


def format_report(result: SimulationResult) -> str:
    """Render the summary report of a run."""
    if result.leak_stop_epoch is None:
        leak_stop_epochs = "never"
        leak_stop_days = "never"
    else:
        leak_stop_epochs = f"{result.leak_stop_epoch} epochs"
        leak_stop_days = f"{result.leak_stop_days:f} days"

    lines = [
        f"offline_percent:                {result.offline_percent}",
        f"inactivity_leak_stop:           {leak_stop_epochs}",
        f"inactivity_leak_stop:           {leak_stop_days}",
        f"fraction_eth_burned:            {result.fraction_balance_burned:f}",
        f"balances[end]:                  {_format_stats(result.offline_balances_end)}",
        f"inactivity_scores[end]:         {_format_stats(result.offline_inactivity_scores_end)}",
        f"active_validators[end]:         {result.active_validators_end}",
        f"participation[end]:             {result.participation_end:f}",
        f"state_end_epoch:                {result.end_epoch}",
        f"exit_queue_epoch:               {result.exit_queue_epoch}",
        f"completed:                      {result.completed}",
    ]
    return "\n".join(lines)
