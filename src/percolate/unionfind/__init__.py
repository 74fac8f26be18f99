"""Disjoint-set structure used to track connectivity between open sites."""

from percolate.unionfind.disjoint_set import DisjointSet

__all__ = ["DisjointSet"]
