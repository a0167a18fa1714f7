"""Prometheus metrics for leaksim."""

import logging
import threading
from typing import TYPE_CHECKING

from prometheus_client import (
    Counter,
    Gauge,
    Histogram,
    Info,
    start_http_server,
)

if TYPE_CHECKING:
    from ..spec.types import State

logger = logging.getLogger(__name__)

DEFAULT_METRICS_PORT = 8008

# Run info
run_info = Info(
    "leaksim_run",
    "Simulation run information",
)

# Epoch metrics
current_epoch = Gauge(
    "leaksim_epoch",
    "Current simulation epoch",
)

in_inactivity_leak = Gauge(
    "leaksim_in_inactivity_leak",
    "Whether the state is in an inactivity leak (1) or not (0)",
)

# Registry metrics
active_validators = Gauge(
    "leaksim_active_validators",
    "Validators active in the previous epoch",
)

active_balance = Gauge(
    "leaksim_active_balance_gwei",
    "Effective balance of active validators",
)

active_participating_balance = Gauge(
    "leaksim_active_participating_balance_gwei",
    "Effective balance of active participating validators",
)

total_balance = Gauge(
    "leaksim_total_balance_gwei",
    "Raw balance of active validators",
)

max_inactivity_score = Gauge(
    "leaksim_max_active_inactivity_score",
    "Highest inactivity score among active validators",
)

exit_queue_epoch = Gauge(
    "leaksim_exit_queue_epoch",
    "Exit queue cursor epoch",
)

# Attestation capacity metrics
inclusion_probability = Gauge(
    "leaksim_inclusion_probability",
    "Modeled attestation inclusion probability",
)

capacity_misses = Counter(
    "leaksim_capacity_misses_total",
    "Total attestations dropped for lack of block capacity",
)

# Processing metrics
epoch_processing_time = Histogram(
    "leaksim_epoch_processing_seconds",
    "Time to process one epoch",
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)


_server_started = False
_server_lock = threading.Lock()


def start_metrics_server(port: int = DEFAULT_METRICS_PORT) -> bool:
    """Start the Prometheus metrics HTTP server.

    Args:
        port: Port to listen on (default 8008)

    Returns:
        True if server started successfully, False if already running or
        the port could not be bound
    """
    global _server_started

    with _server_lock:
        if _server_started:
            logger.warning("Metrics server already running")
            return False

        try:
            start_http_server(port)
        except OSError as e:
            logger.error(f"Failed to start metrics server: {e}")
            return False

        _server_started = True
        logger.info(f"Prometheus metrics server started on port {port}")
        return True


def set_run_info(offline_percent: int, validator_count: int, preset: str) -> None:
    """Set run information metric."""
    run_info.info({
        "offline_percent": str(offline_percent),
        "validator_count": str(validator_count),
        "preset": preset,
    })


def update_epoch(state: "State", elapsed: float) -> None:
    """Update all per-epoch metrics from the state."""
    current_epoch.set(state.epoch)
    in_inactivity_leak.set(1 if state.is_in_inactivity_leak() else 0)
    active_validators.set(state.active_count_prev_epoch)
    active_balance.set(state.active_balance)
    active_participating_balance.set(state.active_participating_balance)
    total_balance.set(state.total_balance)
    max_inactivity_score.set(state.max_active_inactivity_score)
    exit_queue_epoch.set(state.exit_queue_epoch)
    inclusion_probability.set(state.inclusion_probability)
    capacity_misses.inc(state.capacity_misses)
    epoch_processing_time.observe(elapsed)
