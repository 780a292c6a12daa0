"""Exceptions raised by the tilescape solver."""


class TilescapeError(Exception):
    """Base class for tilescape errors."""


class OutOfBoundsError(TilescapeError, IndexError):
    """A subgrid does not fit inside the landscape.

    Raised when a region exceeds the landscape bounds, or when the landscape
    dimensions are not an exact multiple of the subgrid size.
    """


class UnknownValueError(TilescapeError, ValueError):
    """A cell holds a value outside the configured value domain."""
