"""
Custom exceptions for simindex.
"""


class SimIndexError(Exception):
    """Base exception for simindex."""
    pass


class DimensionMismatchError(SimIndexError, ValueError):
    """Two points of different shape were compared."""
    pass


class EmptyIndexError(SimIndexError):
    """Query issued against an index holding no entries."""
    pass


class DuplicateKeyError(SimIndexError):
    """Key is already present in the index."""
    pass


class KeyNotFoundError(SimIndexError):
    """Key is not present in the graph."""
    pass


class InvalidParameterError(SimIndexError, ValueError):
    """Degenerate construction or query argument."""
    pass
