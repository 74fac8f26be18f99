"""Public API for running percolation experiments.

This module provides the high-level entry points of percolate:
- Running a Monte Carlo experiment, optionally with a full audit trail
- Exporting per-trial results to JSONL and summaries to JSON
"""

import json
from pathlib import Path

from percolate.audit import RunContext
from percolate.engine import ExperimentConfig, TrialStatistics, run_configured

__all__ = [
    "simulate",
    "write_jsonl",
    "write_summary",
]


def write_jsonl(
    stats: TrialStatistics,
    path: str | Path,
    *,
    sort_keys: bool = True,
) -> None:
    """Write one JSON object per trial to a JSONL file.

    Each line holds ``trial`` (0-based index), ``open_count`` and
    ``threshold`` (fraction of the grid that was open).

    Parameters
    ----------
    stats : TrialStatistics
        Experiment results.
    path : str | Path
        Output file path.
    sort_keys : bool, optional
        Whether to sort dictionary keys, by default True.
    """
    file_path = Path(path)
    thresholds = stats.thresholds

    with file_path.open("w", encoding="utf-8", newline="\n") as f:
        for index, count in enumerate(stats.open_counts):
            line = {
                "trial": index,
                "open_count": count,
                "threshold": float(thresholds[index]),
            }
            f.write(json.dumps(line, sort_keys=sort_keys) + "\n")


def write_summary(stats: TrialStatistics, path: str | Path, *, z: float = 1.96) -> None:
    """Write summary statistics of an experiment as indented JSON."""
    with Path(path).open("w", encoding="utf-8") as f:
        json.dump(stats.to_dict(z), f, indent=2, sort_keys=True)
        f.write("\n")


def simulate(
    grid_size: int,
    trials: int,
    *,
    seed: int | None = None,
    workers: int = 1,
    output_dir: str | Path | None = None,
    log_trials: bool = False,
    confidence_z: float = 1.96,
) -> TrialStatistics:
    """Estimate the percolation threshold of ``grid_size x grid_size`` grids.

    Parameters
    ----------
    grid_size : int
        Side length of every grid.
    trials : int
        Number of independent trials.
    seed : int | None, optional
        Seed for reproducible runs.
    workers : int, optional
        Number of worker processes, by default 1.
    output_dir : str | Path | None, optional
        If given, writes ``events.jsonl``, ``trials.jsonl``,
        ``summary.json`` and ``run.json`` there.
    log_trials : bool, optional
        Log one event per trial in ``events.jsonl``, by default False.
        Requires output_dir.
    confidence_z : float, optional
        z-score for the confidence interval in the summary, by default 1.96.

    Returns
    -------
    TrialStatistics
        Per-trial open counts and derived statistics.

    Raises
    ------
    InvalidArgumentError
        If any parameter is invalid.

    Examples
    --------
        >>> from percolate import simulate
        >>> stats = simulate(20, 100, seed=7)
        >>> print(f"{stats.percent_open():.2f}%")
    """
    config = ExperimentConfig(
        grid_size=grid_size,
        trials=trials,
        seed=seed,
        workers=workers,
        confidence_z=confidence_z,
        output_dir=Path(output_dir) if output_dir is not None else None,
        log_trials=log_trials,
    )

    if config.output_dir is None:
        return run_configured(config)

    with RunContext.start(output_dir=config.output_dir, parameters=config.to_dict()) as run:
        stats = run_configured(config, run)
        write_jsonl(stats, config.output_dir / "trials.jsonl")
        write_summary(stats, config.output_dir / "summary.json", z=config.confidence_z)
        run.manifest_writer.set_summary(
            stats.to_dict(config.confidence_z, include_counts=False)
        )

    return stats
