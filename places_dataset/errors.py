from __future__ import annotations


class PlacesDatasetError(Exception):
    """Base class for every error raised by this package."""


class DecodeError(PlacesDatasetError):
    """A raw row could not be parsed into typed fields."""

    def __init__(self, message: str, field: str | None = None, row_index: int | None = None):
        self.field = field
        self.row_index = row_index
        prefix = f"row {row_index}: " if row_index is not None else ""
        if field:
            prefix += f"{field}: "
        super().__init__(prefix + message)


class DimensionMismatch(PlacesDatasetError):
    """A vector's length disagrees with the store's dimensionality."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"expected vector of length {expected}, got {actual}")


class InvalidArgument(PlacesDatasetError, ValueError):
    """A caller-supplied parameter is outside the operation's contract."""
