"""Experiment engine.

This package runs Monte Carlo percolation trials and aggregates their
results, including configuration and statistics types.
"""

from percolate.engine.config import ExperimentConfig, TrialStatistics
from percolate.engine.runner import RandomSource, run_configured, run_experiment, run_trial

__all__ = [
    "ExperimentConfig",
    "RandomSource",
    "TrialStatistics",
    "run_configured",
    "run_experiment",
    "run_trial",
]
