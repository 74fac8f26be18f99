"""Percolation grid: site states and top-to-bottom connectivity."""

from percolate.grid.models import BoundaryNode, SiteState
from percolate.grid.percolation import PercolationGrid

__all__ = [
    "BoundaryNode",
    "PercolationGrid",
    "SiteState",
]
