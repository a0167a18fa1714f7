"""Helper functions for state transition."""
