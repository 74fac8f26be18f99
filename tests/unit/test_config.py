"""Tests for experiment configuration and trial statistics."""

import math
from pathlib import Path

import pytest

from percolate.engine import ExperimentConfig, TrialStatistics
from percolate.errors import InvalidArgumentError

# ---------------------------------------------------------------------------
# ExperimentConfig
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_config_defaults() -> None:
    """Test optional fields take their documented defaults."""
    config = ExperimentConfig(grid_size=20, trials=100)

    assert config.seed is None
    assert config.workers == 1
    assert config.confidence_z == 1.96
    assert config.output_dir is None
    assert config.log_trials is False


@pytest.mark.unit
@pytest.mark.parametrize(
    "kwargs",
    [
        {"grid_size": 0, "trials": 1},
        {"grid_size": 5, "trials": 0},
        {"grid_size": -5, "trials": 10},
        {"grid_size": 5, "trials": 10, "workers": 0},
        {"grid_size": 5, "trials": 10, "seed": -1},
        {"grid_size": 5, "trials": 10, "confidence_z": 0.0},
        {"grid_size": 5, "trials": 10, "confidence_z": "wide"},
        {"grid_size": 5, "trials": 10, "confidence_z": float("inf")},
        {"grid_size": 5, "trials": 10, "confidence_z": float("nan")},
        {"grid_size": 5, "trials": 10, "confidence_z": True},
        {"grid_size": 5, "trials": 10, "seed": 2.5},
        {"grid_size": 5, "trials": 10, "log_trials": True},
        {"grid_size": True, "trials": 10},
    ],
)
def test_config_rejects_invalid_values(kwargs: dict) -> None:
    """Test validation in __post_init__."""
    with pytest.raises(InvalidArgumentError):
        ExperimentConfig(**kwargs)


@pytest.mark.unit
def test_config_invalid_argument_is_value_error() -> None:
    """Test InvalidArgumentError can be caught as ValueError."""
    with pytest.raises(ValueError, match="trials"):
        ExperimentConfig(grid_size=5, trials=-1)


@pytest.mark.unit
def test_config_to_dict_serializes_path(tmp_path: Path) -> None:
    """Test to_dict() converts output_dir to a string."""
    config = ExperimentConfig(grid_size=5, trials=3, seed=1, output_dir=str(tmp_path))

    data = config.to_dict()

    assert isinstance(config.output_dir, Path)
    assert data["output_dir"] == str(tmp_path)
    assert data["grid_size"] == 5
    assert data["seed"] == 1


# ---------------------------------------------------------------------------
# TrialStatistics
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_statistics_mean_and_stddev() -> None:
    """Test mean and sample standard deviation of open counts."""
    stats = TrialStatistics(grid_size=4, open_counts=[8, 10, 12])

    assert stats.trials == 3
    assert stats.mean() == pytest.approx(10.0)
    assert stats.stddev() == pytest.approx(2.0)


@pytest.mark.unit
def test_statistics_thresholds() -> None:
    """Test thresholds are counts divided by the number of sites."""
    stats = TrialStatistics(grid_size=4, open_counts=[8, 10, 12])

    assert list(stats.thresholds) == pytest.approx([0.5, 0.625, 0.75])
    assert stats.threshold_mean() == pytest.approx(0.625)
    assert stats.threshold_stddev() == pytest.approx(0.125)
    assert stats.percent_open() == pytest.approx(62.5)


@pytest.mark.unit
def test_statistics_confidence_interval() -> None:
    """Test the interval is centred on the threshold mean."""
    stats = TrialStatistics(grid_size=4, open_counts=[8, 10, 12])
    half_width = 1.96 * 0.125 / math.sqrt(3)

    low, high = stats.confidence_interval()

    assert low == pytest.approx(0.625 - half_width)
    assert high == pytest.approx(0.625 + half_width)


@pytest.mark.unit
def test_statistics_single_trial_has_no_spread() -> None:
    """Test spread measures are NaN for one trial and None in to_dict()."""
    stats = TrialStatistics(grid_size=2, open_counts=[3])

    assert stats.mean() == 3.0
    assert math.isnan(stats.stddev())
    assert all(math.isnan(v) for v in stats.confidence_interval())

    data = stats.to_dict()
    assert data["stddev"] is None
    assert data["confidence_low"] is None
    assert data["confidence_high"] is None


@pytest.mark.unit
def test_statistics_to_dict() -> None:
    """Test to_dict() carries counts and summary values."""
    stats = TrialStatistics(grid_size=4, open_counts=[8, 10, 12])

    data = stats.to_dict(z=2.0)

    assert data["grid_size"] == 4
    assert data["trials"] == 3
    assert data["open_counts"] == [8, 10, 12]
    assert data["mean"] == pytest.approx(10.0)
    assert data["confidence_z"] == 2.0
    assert data["confidence_low"] < data["threshold_mean"] < data["confidence_high"]


@pytest.mark.unit
def test_statistics_to_dict_without_counts() -> None:
    """Test include_counts=False keeps the summary values and drops the counts."""
    stats = TrialStatistics(grid_size=4, open_counts=[8, 10, 12])

    data = stats.to_dict(include_counts=False)

    assert "open_counts" not in data
    assert data["trials"] == 3
    assert data["threshold_mean"] == pytest.approx(0.625)
