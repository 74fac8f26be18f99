"""Common utility functions for percolate (hashing and timestamps)."""

from percolate.utils.hashing import calculate_file_sha256, format_sha256
from percolate.utils.timestamps import get_iso_timestamp

__all__ = [
    "get_iso_timestamp",
    "calculate_file_sha256",
    "format_sha256",
]
