"""
Exact nearest-neighbor index by linear scan.

Every query scores every stored point, so it is O(N) per query, but the
answer is exact. It serves as the ground truth the graph index is checked
against.
"""

from typing import Dict, List, Tuple

from simindex.exceptions import DuplicateKeyError, EmptyIndexError
from simindex.index import Index, Key
from simindex.point import Point


class NaiveIndex(Index):
    """Brute-force index: sort every stored point by distance to the query."""

    def __init__(self) -> None:
        self._points: Dict[Key, Point] = {}

    def insert(self, key: Key, point: Point) -> None:
        if key in self._points:
            raise DuplicateKeyError(f"Key {key!r} already exists in the index")
        if self._points:
            # Reject incomparable points now rather than at query time
            point.distance(next(iter(self._points.values())))
        self._points[key] = point

    def find(self, query: Point, n: int) -> List[Tuple[Key, Point]]:
        self._validate_n(n)
        if not self._points:
            raise EmptyIndexError("Cannot search an empty index")
        if n == 0:
            return []

        # Ties are broken by key so the ranking never depends on insertion order
        scored = sorted(
            (query.distance(point), key) for key, point in self._points.items()
        )
        return [(key, self._points[key]) for _, key in scored[:n]]

    def __len__(self) -> int:
        return len(self._points)

    def __contains__(self, key: object) -> bool:
        return key in self._points
