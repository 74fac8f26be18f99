"""Command-line interface for percolate."""
