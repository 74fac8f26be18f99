"""N-by-N site grid backed by a disjoint-set with virtual boundary nodes."""

import numpy as np

from percolate.errors import InvalidArgumentError, OutOfRangeError
from percolate.grid.models import BoundaryNode, SiteState
from percolate.unionfind import DisjointSet

__all__ = ["PercolationGrid"]

_NEIGHBOR_OFFSETS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


class PercolationGrid:
    """Square grid of sites that percolates once top and bottom connect.

    Coordinates in the public methods are 1-based, ``(1, 1)`` being the
    upper-left site. Site ``(row, col)`` (0-based) is stored in the
    disjoint-set at ``row * n + col + 1``; element ``0`` is the TOP node and
    element ``n * n + 1`` the BOTTOM node.

    Attributes
    ----------
    site : numpy.ndarray
        ``n x n`` array of ``SiteState`` values, all CLOSED initially.
    sets : DisjointSet
        Connectivity of open sites and the two boundary nodes.
    """

    def __init__(self, n: int) -> None:
        """Create an ``n x n`` grid with every site CLOSED.

        Parameters
        ----------
        n : int
            Side length.

        Raises
        ------
        InvalidArgumentError
            If n is not a positive integer.
        """
        if isinstance(n, bool) or not isinstance(n, int) or n < 1:
            raise InvalidArgumentError(f"grid size must be a positive integer, got {n!r}")

        self._n = n
        self.site = np.full((n, n), SiteState.CLOSED, dtype=np.int8)
        self.sets = DisjointSet(n * n + 2)

    @property
    def size(self) -> int:
        """Side length of the grid."""
        return self._n

    def boundary_index(self, node: BoundaryNode) -> int:
        """Return the disjoint-set element of a virtual boundary node."""
        if node is BoundaryNode.TOP:
            return 0
        return self._n * self._n + 1

    def _index(self, row: int, col: int) -> int:
        return row * self._n + col + 1

    def _to_zero_based(self, row: int, col: int) -> tuple[int, int]:
        """Validate 1-based coordinates and convert them to 0-based."""
        for name, value in (("row", row), ("col", col)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise OutOfRangeError(f"{name} must be an integer, got {value!r}")
            if not 1 <= value <= self._n:
                raise OutOfRangeError(f"{name} {value} outside [1, {self._n}]", value=value)
        return row - 1, col - 1

    def open(self, row: int, col: int) -> None:
        """Open site (row, col) and join it with its open neighbours.

        Opening an already open site leaves its state unchanged; the
        repeated unions are no-ops.

        Parameters
        ----------
        row : int
            1-based row in ``[1, n]``.
        col : int
            1-based column in ``[1, n]``.

        Raises
        ------
        OutOfRangeError
            If either coordinate is off the grid.
        """
        r, c = self._to_zero_based(row, col)
        n = self._n
        here = self._index(r, c)

        self.site[r, c] = SiteState.OPEN

        if r == 0:
            self.sets.union(self.boundary_index(BoundaryNode.TOP), here)
        if r == n - 1:
            self.sets.union(self.boundary_index(BoundaryNode.BOTTOM), here)

        for dr, dc in _NEIGHBOR_OFFSETS:
            nr, nc = r + dr, c + dc
            if 0 <= nr < n and 0 <= nc < n and self.site[nr, nc] == SiteState.OPEN:
                self.sets.union(here, self._index(nr, nc))

    def is_open(self, row: int, col: int) -> bool:
        """Check whether site (row, col) is OPEN."""
        r, c = self._to_zero_based(row, col)
        return bool(self.site[r, c] == SiteState.OPEN)

    def is_full(self, row: int, col: int) -> bool:
        """Check whether site (row, col) is still CLOSED.

        "Full" here means not yet opened, the complement of ``is_open``.
        It does not test for a path of open sites to the top row.
        """
        r, c = self._to_zero_based(row, col)
        return bool(self.site[r, c] == SiteState.CLOSED)

    def percolates(self) -> bool:
        """Check whether an open path joins the top row to the bottom row."""
        return self.sets.connected(
            self.boundary_index(BoundaryNode.TOP),
            self.boundary_index(BoundaryNode.BOTTOM),
        )

    def open_site_count(self) -> int:
        """Return the number of OPEN sites."""
        return int(np.count_nonzero(self.site == SiteState.OPEN))

    def component_count(self) -> int:
        """Return the number of sets in the underlying disjoint-set."""
        return self.sets.component_count()
