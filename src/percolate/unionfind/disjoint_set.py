"""Union-Find (Disjoint Set Union) over a fixed universe of integers."""

from percolate.errors import InvalidArgumentError, OutOfRangeError

__all__ = ["DisjointSet"]


class DisjointSet:
    """Union-Find data structure with path compression and union by size.

    Elements are the integers ``0 .. size - 1``, each starting in its own
    singleton set.

    Attributes
    ----------
    parent : list[int]
        Parent pointers for each element.
    size : list[int]
        Number of elements in the tree rooted at each index (meaningful
        for roots only).
    count : int
        Number of distinct sets.
    """

    def __init__(self, size: int) -> None:
        """Initialize ``size`` singleton sets.

        Parameters
        ----------
        size : int
            Number of elements in the universe.

        Raises
        ------
        InvalidArgumentError
            If size is not a positive integer.
        """
        if isinstance(size, bool) or not isinstance(size, int) or size < 1:
            raise InvalidArgumentError(f"size must be a positive integer, got {size!r}")

        self.parent: list[int] = list(range(size))
        self.size: list[int] = [1] * size
        self.count: int = size

    def __len__(self) -> int:
        return len(self.parent)

    def _validate(self, x: int) -> None:
        if isinstance(x, bool) or not isinstance(x, int) or not 0 <= x < len(self.parent):
            raise OutOfRangeError(
                f"element {x!r} outside [0, {len(self.parent)})",
                value=x if isinstance(x, int) else None,
            )

    def find(self, x: int) -> int:
        """Find root of set containing x with path compression.

        Parameters
        ----------
        x : int
            Element to find.

        Returns
        -------
        int
            Root of set containing x.

        Raises
        ------
        OutOfRangeError
            If x is not a valid element.
        """
        self._validate(x)
        parent = self.parent

        root = x
        while parent[root] != root:
            root = parent[root]

        while parent[x] != root:
            parent[x], x = root, parent[x]

        return root

    def union(self, a: int, b: int) -> None:
        """Union sets containing a and b using union by size.

        On equal sizes the root of b is attached under the root of a.

        Parameters
        ----------
        a : int
            First element.
        b : int
            Second element.

        Raises
        ------
        OutOfRangeError
            If either element is invalid. Nothing is mutated in that case.
        """
        self._validate(a)
        self._validate(b)

        root_a = self.find(a)
        root_b = self.find(b)

        if root_a == root_b:
            return

        if self.size[root_a] < self.size[root_b]:
            root_a, root_b = root_b, root_a

        self.parent[root_b] = root_a
        self.size[root_a] += self.size[root_b]
        self.count -= 1

    def connected(self, a: int, b: int) -> bool:
        """Check whether a and b belong to the same set."""
        return self.find(a) == self.find(b)

    def component_count(self) -> int:
        """Return the number of distinct sets."""
        return self.count
