"""Site states and boundary roles for percolation grids."""

from enum import IntEnum, StrEnum

__all__ = ["SiteState", "BoundaryNode"]


class SiteState(IntEnum):
    """State of a single grid site.

    Attributes
    ----------
    CLOSED : int
        Default state of every site at construction.
    OPEN : int
        Site has been opened.
    """

    CLOSED = 0
    OPEN = 1


class BoundaryNode(StrEnum):
    """Virtual elements bordering the grid.

    TOP sits above row 1 and is joined to every open site in it; BOTTOM
    sits below row N and is joined to every open site in that row. Their
    element indices depend on N, see ``PercolationGrid.boundary_index``.

    Attributes
    ----------
    TOP : str
        Virtual node above the first row.
    BOTTOM : str
        Virtual node below the last row.
    """

    TOP = "top"
    BOTTOM = "bottom"
