"""
Abstract base class for all index implementations.

This module defines the interface that every index backend implements, so
callers can swap the exact baseline for the graph index (or any other
backend) without touching call sites.

Thread Safety:
    Indices are single-writer. Mutating calls must be serialized by the
    caller; concurrent ``find`` calls are fine while no ``insert`` is running.
"""

from abc import ABC, abstractmethod
from typing import Any, Hashable, Iterable, List, Tuple

from simindex.exceptions import InvalidParameterError
from simindex.point import Point

# Keys must be hashable and totally ordered (ints, strings, tuples of those).
Key = Hashable


class Index(ABC):
    """
    Abstract base class for nearest-neighbor indices.

    All implementations must inherit from this class and implement
    ``insert``, ``find`` and ``__len__``.
    """

    @abstractmethod
    def insert(self, key: Key, point: Point) -> None:
        """
        Add a new entry to the index.

        Args:
            key: Unique, totally ordered identifier
            point: Point to store under ``key``

        Raises:
            DuplicateKeyError: If ``key`` is already present
        """
        pass

    @abstractmethod
    def find(self, query: Point, n: int) -> List[Tuple[Key, Point]]:
        """
        Find the ``n`` entries nearest to ``query``.

        Args:
            query: Query point
            n: Maximum number of results

        Returns:
            List of (key, point) pairs sorted by distance to ``query``
            (closest first), at most ``min(n, len(self))`` long

        Raises:
            EmptyIndexError: If the index holds no entries
        """
        pass

    @abstractmethod
    def __len__(self) -> int:
        """Number of entries."""
        pass

    @abstractmethod
    def __contains__(self, key: Any) -> bool:
        pass

    def find_keys(self, query: Point, n: int) -> List[Key]:
        """Same as ``find`` but returns keys only."""
        return [key for key, _ in self.find(query, n)]

    def insert_many(self, items: Iterable[Tuple[Key, Point]]) -> int:
        """
        Insert (key, point) pairs in order.

        Stops at the first rejected pair; entries inserted before it stay.

        Returns:
            Number of entries inserted
        """
        count = 0
        for key, point in items:
            self.insert(key, point)
            count += 1
        return count

    @staticmethod
    def _validate_n(n: int) -> None:
        if n < 0:
            raise InvalidParameterError(f"n must be >= 0, got {n}")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(size={len(self)})"
