"""Pytest configuration and fixtures for test suite."""

import sys
from collections.abc import Callable, Iterable
from pathlib import Path

import pytest

# Add src directory to path for imports
SRC_PATH = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(SRC_PATH))

from percolate.grid import PercolationGrid  # noqa: E402


class ScriptedSource:
    """Random source replaying a fixed sequence of draws.

    Each ``integers(low, high)`` call returns the next value, which must lie
    in ``[low, high)``.
    """

    def __init__(self, values: Iterable[int]) -> None:
        self._values = list(values)
        self.calls = 0

    def integers(self, low: int, high: int) -> int:
        value = self._values[self.calls]
        self.calls += 1
        assert low <= value < high, f"scripted draw {value} outside [{low}, {high})"
        return value


@pytest.fixture
def scripted_source() -> Callable[..., ScriptedSource]:
    """Factory for random sources that replay 0-based (row, col) draws.

    Pass coordinate pairs; they are flattened into consecutive draws.
    """

    def _factory(*coords: tuple[int, int]) -> ScriptedSource:
        return ScriptedSource(value for pair in coords for value in pair)

    return _factory


@pytest.fixture
def open_grid() -> Callable[..., PercolationGrid]:
    """Factory building a grid with the given 1-based sites opened."""

    def _factory(n: int, *sites: tuple[int, int]) -> PercolationGrid:
        grid = PercolationGrid(n)
        for row, col in sites:
            grid.open(row, col)
        return grid

    return _factory
