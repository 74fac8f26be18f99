"""Exception types raised by percolate."""

__all__ = [
    "PercolateError",
    "OutOfRangeError",
    "InvalidArgumentError",
]


class PercolateError(Exception):
    """Base class for all percolate errors."""


class OutOfRangeError(PercolateError, IndexError):
    """Raised when a coordinate or element index falls outside its range.

    Parameters
    ----------
    message : str
        Error message.
    value : int | None, optional
        Offending value.
    """

    def __init__(self, message: str, value: int | None = None) -> None:
        super().__init__(message)
        self.value = value


class InvalidArgumentError(PercolateError, ValueError):
    """Raised when a size, trial count or configuration value is invalid."""
