"""Command-line interface for percolate.

Provides CLI commands for running percolation experiments.
"""

import importlib.metadata
import math
import sys

import click
import numpy as np

__all__ = ["cli"]

try:
    __version__ = importlib.metadata.version("percolate")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.3.0"


def _format_float(value: float, spec: str) -> str:
    return "n/a" if math.isnan(value) else format(value, spec)


@click.group()
@click.version_option(version=__version__, prog_name="percolate")
def cli() -> None:
    """Monte Carlo estimation of percolation thresholds on square grids.

    Use 'percolate COMMAND --help' for command-specific help.
    """


@cli.command()
@click.argument("grid_size", type=int)
@click.argument("trials", type=int)
@click.option("--seed", type=int, default=None, help="Seed for reproducible runs")
@click.option(
    "--workers",
    "-w",
    type=int,
    default=1,
    help="Number of worker processes (default: 1)",
)
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False),
    default=None,
    help="Write events, per-trial results, summary and manifest here",
)
@click.option(
    "--log-trials",
    is_flag=True,
    help="Log one event per trial (requires --output-dir)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
def stats(
    grid_size: int,
    trials: int,
    seed: int | None,
    workers: int,
    output_dir: str | None,
    log_trials: bool,
    verbose: bool,
) -> None:
    """Run TRIALS independent trials on GRID_SIZE x GRID_SIZE grids.

    Each trial opens random sites until the grid percolates. Prints the
    mean number of sites opened, the share of the grid this represents,
    and the 95% confidence interval of the percolation threshold.

    Examples
    --------
        percolate stats 20 1000
        percolate stats 200 100 --seed 7 --workers 4 -o runs/n200
    """
    from percolate import simulate

    if log_trials and not output_dir:
        raise click.UsageError("--log-trials requires --output-dir")

    if verbose:
        click.echo("Starting experiment...", err=True)
        click.echo(f"  Grid size: {grid_size}", err=True)
        click.echo(f"  Trials: {trials}", err=True)
        click.echo(f"  Seed: {seed}", err=True)
        click.echo(f"  Workers: {workers}", err=True)
        if output_dir:
            click.echo(f"  Output: {output_dir}", err=True)

    try:
        result = simulate(
            grid_size,
            trials,
            seed=seed,
            workers=workers,
            output_dir=output_dir,
            log_trials=log_trials,
        )
    except Exception as e:
        click.secho(f"✗ Error: {e}", fg="red", err=True)
        if verbose:
            import traceback

            click.echo(traceback.format_exc(), err=True)
        sys.exit(1)

    low, high = result.confidence_interval()
    click.echo(f"After {result.trials} trials, the average number of sites")
    click.echo(f"opened was {result.mean():.2f} or {result.percent_open():.2f}%.")
    click.echo(f"stddev                  = {_format_float(result.stddev(), '.2f')}")
    click.echo(f"threshold mean          = {result.threshold_mean():.6f}")
    click.echo(
        "95% confidence interval = "
        f"[{_format_float(low, '.6f')}, {_format_float(high, '.6f')}]"
    )

    if output_dir and verbose:
        click.secho(f"✓ Wrote run artifacts to {output_dir}", fg="green", err=True)


@cli.command()
@click.argument("grid_size", type=int)
@click.option("--seed", type=int, default=None, help="Seed for reproducible runs")
def trial(grid_size: int, seed: int | None) -> None:
    """Run a single trial on a GRID_SIZE x GRID_SIZE grid.

    Prints the number of sites opened before the grid percolated.

    Examples
    --------
        percolate trial 20 --seed 1
    """
    from percolate import run_trial

    try:
        count = run_trial(grid_size, np.random.default_rng(seed))
    except Exception as e:
        click.secho(f"✗ Error: {e}", fg="red", err=True)
        sys.exit(1)

    click.echo(f"{count} sites opened ({count / (grid_size * grid_size):.2%} of the grid)")


if __name__ == "__main__":
    cli()
