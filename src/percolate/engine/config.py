"""Experiment configuration and result dataclasses."""

import math
import numbers
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import numpy as np

from percolate.errors import InvalidArgumentError


def require_positive_int(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidArgumentError(f"{name} must be a positive integer, got {value!r}")


def require_seed(value: Any) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidArgumentError(f"seed must be a non-negative integer, got {value!r}")


@dataclass
class ExperimentConfig:
    """Configuration for a Monte Carlo percolation experiment.

    Attributes
    ----------
    grid_size : int
        Side length N of each grid.
    trials : int
        Number of independent trials T.
    seed : int | None
        Seed for the random source. If None, draws are not reproducible.
    workers : int
        Number of worker processes running trials (default: 1, in-process).
    confidence_z : float
        z-score used for the threshold confidence interval (default: 1.96).
    output_dir : Path | None
        Directory for run artifacts. If None, nothing is written.
    log_trials : bool
        Emit one audit event per finished trial. Requires output_dir.
    """

    grid_size: int
    trials: int
    seed: int | None = None
    workers: int = 1
    confidence_z: float = 1.96
    output_dir: Path | None = None
    log_trials: bool = False

    def __post_init__(self) -> None:
        """Validate parameters."""
        require_positive_int("grid_size", self.grid_size)
        require_positive_int("trials", self.trials)
        require_positive_int("workers", self.workers)
        require_seed(self.seed)

        z = self.confidence_z
        if (
            isinstance(z, bool)
            or not isinstance(z, numbers.Real)
            or not math.isfinite(z)
            or z <= 0
        ):
            raise InvalidArgumentError(f"confidence_z must be a positive finite number, got {z!r}")

        if self.output_dir is not None:
            self.output_dir = Path(self.output_dir)
        elif self.log_trials:
            raise InvalidArgumentError("log_trials requires output_dir")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data = asdict(self)
        data["output_dir"] = str(self.output_dir) if self.output_dir is not None else None
        return data


@dataclass
class TrialStatistics:
    """Per-trial open counts of an experiment and derived statistics.

    Entries of ``open_counts`` are in trial order and each lies in
    ``[1, grid_size ** 2]``.

    Attributes
    ----------
    grid_size : int
        Side length N shared by every trial.
    open_counts : list[int]
        Number of sites opened before each trial percolated.
    """

    grid_size: int
    open_counts: list[int] = field(default_factory=list)

    @property
    def trials(self) -> int:
        """Number of completed trials."""
        return len(self.open_counts)

    @property
    def thresholds(self) -> np.ndarray:
        """Fraction of sites open at percolation, per trial."""
        return np.asarray(self.open_counts, dtype=float) / (self.grid_size * self.grid_size)

    def mean(self) -> float:
        """Mean number of sites opened per trial."""
        return float(np.mean(self.open_counts))

    def stddev(self) -> float:
        """Sample standard deviation of open counts (NaN for one trial)."""
        if self.trials < 2:
            return math.nan
        return float(np.std(self.open_counts, ddof=1))

    def threshold_mean(self) -> float:
        """Mean percolation threshold estimate."""
        return float(np.mean(self.thresholds))

    def threshold_stddev(self) -> float:
        """Sample standard deviation of the threshold (NaN for one trial)."""
        if self.trials < 2:
            return math.nan
        return float(np.std(self.thresholds, ddof=1))

    def percent_open(self) -> float:
        """Mean share of the grid opened at percolation, in percent."""
        return self.threshold_mean() * 100

    def confidence_interval(self, z: float = 1.96) -> tuple[float, float]:
        """Confidence interval for the threshold mean.

        Parameters
        ----------
        z : float, optional
            z-score of the interval, by default 1.96 (95%).

        Returns
        -------
        tuple[float, float]
            Lower and upper bound; ``(nan, nan)`` for a single trial.
        """
        if self.trials < 2:
            return math.nan, math.nan
        half_width = z * self.threshold_stddev() / math.sqrt(self.trials)
        center = self.threshold_mean()
        return center - half_width, center + half_width

    def to_dict(self, z: float = 1.96, *, include_counts: bool = True) -> dict[str, Any]:
        """Convert to dictionary with summary statistics.

        NaN values are reported as None so the result is valid JSON.
        With ``include_counts=False`` the per-trial ``open_counts`` list is
        left out.
        """

        def _finite(value: float) -> float | None:
            return None if math.isnan(value) else value

        low, high = self.confidence_interval(z)
        data: dict[str, Any] = {
            "grid_size": self.grid_size,
            "trials": self.trials,
            "mean": self.mean(),
            "stddev": _finite(self.stddev()),
            "threshold_mean": self.threshold_mean(),
            "threshold_stddev": _finite(self.threshold_stddev()),
            "percent_open": self.percent_open(),
            "confidence_z": z,
            "confidence_low": _finite(low),
            "confidence_high": _finite(high),
        }
        if include_counts:
            data["open_counts"] = list(self.open_counts)
        return data
