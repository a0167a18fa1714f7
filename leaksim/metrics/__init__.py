"""Prometheus metrics for leaksim."""

from .metrics import start_metrics_server, set_run_info, update_epoch

__all__ = ["start_metrics_server", "set_run_info", "update_epoch"]
