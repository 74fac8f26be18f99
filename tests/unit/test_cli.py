"""Tests for CLI module."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from percolate.cli.main import cli


@pytest.fixture
def runner() -> CliRunner:
    """Provide Click test CLI runner."""
    return CliRunner()


# ---------------------------------------------------------------------------
# Top-level CLI
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_cli_version_flag(runner: CliRunner) -> None:
    """Test --version flag outputs version string."""
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "percolate" in result.output


@pytest.mark.unit
def test_cli_help(runner: CliRunner) -> None:
    """Test --help output lists commands."""
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "stats" in result.output
    assert "trial" in result.output


@pytest.mark.unit
def test_cli_invalid_command(runner: CliRunner) -> None:
    """Test invalid command returns non-zero exit code."""
    result = runner.invoke(cli, ["invalid-command"])

    assert result.exit_code != 0


# ---------------------------------------------------------------------------
# stats command
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_stats_prints_summary(runner: CliRunner) -> None:
    """Test stats reports mean, percentage and confidence interval."""
    result = runner.invoke(cli, ["stats", "10", "20", "--seed", "3"])

    assert result.exit_code == 0
    assert "After 20 trials, the average number of sites" in result.output
    assert "opened was" in result.output
    assert "%." in result.output
    assert "95% confidence interval" in result.output


@pytest.mark.unit
def test_stats_single_trial_reports_na(runner: CliRunner) -> None:
    """Test spread measures print as n/a for one trial."""
    result = runner.invoke(cli, ["stats", "4", "1", "--seed", "1"])

    assert result.exit_code == 0
    assert "stddev                  = n/a" in result.output
    assert "[n/a, n/a]" in result.output


@pytest.mark.unit
def test_stats_is_reproducible_with_seed(runner: CliRunner) -> None:
    """Test identical seeds print identical output."""
    first = runner.invoke(cli, ["stats", "8", "10", "--seed", "5"])
    second = runner.invoke(cli, ["stats", "8", "10", "--seed", "5"])

    assert first.output == second.output


@pytest.mark.unit
@pytest.mark.parametrize("args", [["0", "10"], ["10", "0"], ["5", "5", "--workers", "0"]])
def test_stats_invalid_arguments_exit_nonzero(runner: CliRunner, args: list[str]) -> None:
    """Test invalid parameters print an error and exit with status 1."""
    result = runner.invoke(cli, ["stats", *args])

    assert result.exit_code == 1
    assert "Error" in result.output


@pytest.mark.unit
def test_stats_non_integer_argument_is_usage_error(runner: CliRunner) -> None:
    """Test click rejects non-integer sizes before running."""
    result = runner.invoke(cli, ["stats", "ten", "10"])

    assert result.exit_code == 2


@pytest.mark.unit
def test_stats_log_trials_needs_output_dir(runner: CliRunner) -> None:
    """Test --log-trials without --output-dir is a usage error."""
    result = runner.invoke(cli, ["stats", "5", "4", "--log-trials"])

    assert result.exit_code == 2
    assert "--output-dir" in result.output


@pytest.mark.unit
def test_stats_output_dir(runner: CliRunner, tmp_path: Path) -> None:
    """Test --output-dir writes the run artifacts."""
    output_dir = tmp_path / "run"

    result = runner.invoke(
        cli,
        ["stats", "5", "4", "--seed", "2", "-o", str(output_dir), "--log-trials", "-v"],
    )

    assert result.exit_code == 0
    assert (output_dir / "run.json").exists()
    assert (output_dir / "trials.jsonl").exists()
    with (output_dir / "summary.json").open() as f:
        assert json.load(f)["trials"] == 4


# ---------------------------------------------------------------------------
# trial command
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_trial_prints_count(runner: CliRunner) -> None:
    """Test trial prints the number of sites opened."""
    result = runner.invoke(cli, ["trial", "1"])

    assert result.exit_code == 0
    assert result.output.startswith("1 sites opened (100.00% of the grid)")


@pytest.mark.unit
def test_trial_invalid_size(runner: CliRunner) -> None:
    """Test a non-positive grid size exits with status 1."""
    result = runner.invoke(cli, ["trial", "0"])

    assert result.exit_code == 1
