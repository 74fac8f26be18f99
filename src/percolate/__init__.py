"""Monte Carlo estimation of site-percolation thresholds on square grids.

This package provides:
- Union-find (percolate.unionfind) — disjoint sets with path compression
- Grid (percolate.grid) — N-by-N site grid with virtual top/bottom nodes
- Engine (percolate.engine) — trial driver, configuration and statistics
- Audit (percolate.audit) — event logging and run manifests
- CLI (percolate.cli) — command-line interface
- Public API (percolate.api) — high-level convenience functions
"""

__version__ = "0.3.0"
__license__ = "MIT"

from percolate.api import simulate, write_jsonl, write_summary
from percolate.engine import ExperimentConfig, TrialStatistics, run_experiment, run_trial
from percolate.errors import InvalidArgumentError, OutOfRangeError, PercolateError
from percolate.grid import BoundaryNode, PercolationGrid, SiteState
from percolate.unionfind import DisjointSet

__all__ = [
    "__version__",
    "__license__",
    "BoundaryNode",
    "DisjointSet",
    "ExperimentConfig",
    "InvalidArgumentError",
    "OutOfRangeError",
    "PercolateError",
    "PercolationGrid",
    "SiteState",
    "TrialStatistics",
    "run_experiment",
    "run_trial",
    "simulate",
    "write_jsonl",
    "write_summary",
]
