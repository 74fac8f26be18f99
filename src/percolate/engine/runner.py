"""Monte Carlo trial driver.

Each trial builds a fresh ``PercolationGrid`` and opens uniformly random
closed sites until the grid percolates. An experiment repeats this for a
fixed number of independent trials, optionally spread over worker
processes, and collects the per-trial open counts.

Seeded experiments spawn one child seed per trial from a single
``numpy.random.SeedSequence``, so results do not depend on the number of
workers.
"""

from collections.abc import Callable, Iterable
from concurrent.futures import ProcessPoolExecutor
from typing import Protocol, runtime_checkable

import numpy as np

from percolate.audit.context import RunContext
from percolate.engine.config import (
    ExperimentConfig,
    TrialStatistics,
    require_positive_int,
    require_seed,
)
from percolate.errors import InvalidArgumentError
from percolate.grid import PercolationGrid

__all__ = [
    "RandomSource",
    "run_trial",
    "run_experiment",
    "run_configured",
]

TrialCallback = Callable[[int, int], None]


@runtime_checkable
class RandomSource(Protocol):
    """Uniform integer source with ``numpy.random.Generator`` semantics."""

    def integers(self, low: int, high: int) -> int:
        """Return a uniform integer in ``[low, high)``."""
        ...


def run_trial(n: int, rng: RandomSource) -> int:
    """Open random sites of a fresh grid until it percolates.

    Draws that land on an already open site are discarded without being
    counted.

    Parameters
    ----------
    n : int
        Side length of the grid.
    rng : RandomSource
        Source of uniform draws.

    Returns
    -------
    int
        Number of sites opened, in ``[1, n * n]``.

    Raises
    ------
    InvalidArgumentError
        If n is not a positive integer.
    """
    require_positive_int("n", n)
    grid = PercolationGrid(n)
    opened = 0

    while not grid.percolates():
        row = int(rng.integers(0, n)) + 1
        col = int(rng.integers(0, n)) + 1
        if grid.is_full(row, col):
            grid.open(row, col)
            opened += 1

    return opened


def _run_seeded_trial(args: tuple[int, np.random.SeedSequence]) -> int:
    """Run one trial with its own generator (picklable worker entry point)."""
    n, seed_seq = args
    return run_trial(n, np.random.default_rng(seed_seq))


def run_experiment(
    n: int,
    trials: int,
    *,
    seed: int | None = None,
    workers: int = 1,
    rng: RandomSource | None = None,
    on_trial: TrialCallback | None = None,
) -> TrialStatistics:
    """Run ``trials`` independent percolation trials on ``n x n`` grids.

    Parameters
    ----------
    n : int
        Side length of every grid.
    trials : int
        Number of trials.
    seed : int | None, optional
        Seed for per-trial generators. Ignored when rng is given.
    workers : int, optional
        Number of worker processes, by default 1 (run in-process).
    rng : RandomSource | None, optional
        Shared source every trial draws from sequentially. Only valid
        with a single worker.
    on_trial : TrialCallback | None, optional
        Called as ``on_trial(index, open_count)`` for each trial, in order.

    Returns
    -------
    TrialStatistics
        Open counts in trial order.

    Raises
    ------
    InvalidArgumentError
        If n, trials or workers are not positive integers, seed is not a
        non-negative integer, or rng is combined with more than one worker.
    """
    require_positive_int("n", n)
    require_positive_int("trials", trials)
    require_positive_int("workers", workers)
    require_seed(seed)

    if rng is not None and workers > 1:
        raise InvalidArgumentError("a shared rng cannot be used with more than one worker")

    stats = TrialStatistics(grid_size=n)

    if rng is not None:
        counts = (run_trial(n, rng) for _ in range(trials))
        _collect(stats, counts, on_trial)
        return stats

    tasks = [(n, child) for child in np.random.SeedSequence(seed).spawn(trials)]

    if workers == 1:
        _collect(stats, map(_run_seeded_trial, tasks), on_trial)
    else:
        chunksize = max(1, trials // (workers * 4))
        with ProcessPoolExecutor(max_workers=workers) as executor:
            _collect(stats, executor.map(_run_seeded_trial, tasks, chunksize=chunksize), on_trial)

    return stats


def _collect(
    stats: TrialStatistics,
    counts: Iterable[int],
    on_trial: TrialCallback | None,
) -> None:
    for index, count in enumerate(counts):
        stats.open_counts.append(count)
        if on_trial is not None:
            on_trial(index, count)


def run_configured(config: ExperimentConfig, run: RunContext | None = None) -> TrialStatistics:
    """Run the experiment described by ``config``.

    When a run context is given, the trial stage is timed and logged, and
    each trial is reported if ``config.log_trials`` is set.

    Parameters
    ----------
    config : ExperimentConfig
        Validated experiment parameters.
    run : RunContext | None, optional
        Audit context for the run.

    Returns
    -------
    TrialStatistics
        Open counts in trial order.
    """
    on_trial: TrialCallback | None = None
    if run is not None and config.log_trials:
        logger = run.audit_logger

        def _log_trial(index: int, count: int) -> None:
            logger.trial_finished(trial=index, open_count=count, grid_size=config.grid_size)

        on_trial = _log_trial

    if run is not None:
        run.start_stage("trials", expected_trials=config.trials)

    stats = run_experiment(
        config.grid_size,
        config.trials,
        seed=config.seed,
        workers=config.workers,
        on_trial=on_trial,
    )

    if run is not None:
        run.finish_stage(
            "trials",
            counters={
                "trials_completed": stats.trials,
                "sites_opened": sum(stats.open_counts),
            },
        )

    return stats
