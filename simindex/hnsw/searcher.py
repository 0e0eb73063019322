"""
HNSW search algorithm.

This module handles querying the HNSW graph to find approximate nearest neighbors.
The search algorithm:
1. Starts at the entry point (top layer)
2. Greedily navigates down through layers, keeping a single best candidate
3. At layer 0, widens the search to the requested breadth
4. Returns the n nearest neighbors found there

Narrow above, wide at the base: the upper layers only exist to shortcut the
walk to a good starting node, while the dense base layer produces the answer.
``search_layer`` is shared with the builder, which uses it to find the
neighbors of a node being inserted.
"""

from typing import List, Optional, Set, Tuple
import bisect
import heapq

from simindex.exceptions import EmptyIndexError, InvalidParameterError
from simindex.hnsw.graph import HNSWGraph
from simindex.hnsw.utils import Candidate
from simindex.index import Key
from simindex.point import Point


def search_layer(
    graph: HNSWGraph,
    entry: Key,
    query: Point,
    ef: int,
    layer: int,
) -> List[Candidate]:
    """
    Greedy best-first search restricted to one layer.

    Keeps a frontier of discovered-but-unexpanded nodes, a visited set and a
    result list of at most ``ef`` entries. The closest frontier node is
    expanded next; once the result list is full and that node is farther than
    the worst result, nothing left on the frontier can improve the answer and
    the search stops.

    Args:
        graph: Graph to search
        entry: Key of the starting node (must live on ``layer``)
        query: Query point
        ef: Result list size (search breadth)
        layer: Which layer's edges to follow

    Returns:
        Up to ``ef`` (distance, key) pairs sorted by distance to the query
    """
    if ef < 1:
        raise InvalidParameterError(f"ef must be >= 1, got {ef}")

    entry_dist = query.distance(graph.get_node(entry).point)

    # Both lists hold (distance, key); equal distances fall back to key order
    frontier: List[Candidate] = [(entry_dist, entry)]
    visited: Set[Key] = {entry}
    results: List[Candidate] = [(entry_dist, entry)]

    while frontier:
        current_dist, current = heapq.heappop(frontier)

        if len(results) >= ef and current_dist > results[-1][0]:
            break

        for neighbor in graph.neighbors(current, layer):
            if neighbor in visited:
                continue

            visited.add(neighbor)
            dist = query.distance(graph.nodes[neighbor].point)
            heapq.heappush(frontier, (dist, neighbor))

            if len(results) < ef or dist < results[-1][0]:
                bisect.insort(results, (dist, neighbor))
                del results[ef:]

    return results


class HNSWSearcher:
    """
    Handles search queries on the HNSW graph.

    Read-only: any number of searchers may query one graph concurrently as
    long as nothing is inserting into it at the same time.
    """

    def __init__(self, graph: HNSWGraph, ef_search: Optional[int] = None) -> None:
        """
        Initialize searcher with a graph.

        Args:
            graph: The HNSWGraph to search in
            ef_search: Minimum base-layer breadth (None = exactly n per query)
        """
        self.graph = graph
        self.ef_search = ef_search

    def search(
        self, query: Point, n: int, ef_search: Optional[int] = None
    ) -> List[Tuple[Key, float]]:
        """
        Search for the n nearest neighbors of the query point.

        Args:
            query: Query point
            n: Number of nearest neighbors to return
            ef_search: Override the default ef_search for this query

        Returns:
            List of (key, distance) tuples, sorted by distance (closest first)

        Raises:
            EmptyIndexError: If the graph holds no nodes
        """
        if n < 0:
            raise InvalidParameterError(f"n must be >= 0, got {n}")
        if self.graph.size() == 0:
            raise EmptyIndexError("Cannot search an empty index")
        if n == 0:
            return []

        ef = ef_search if ef_search is not None else self.ef_search
        breadth = max(n, ef) if ef is not None else n

        entry = self._descend(query)
        candidates = search_layer(self.graph, entry, query, breadth, layer=0)

        return [(key, dist) for dist, key in candidates[:n]]

    def _descend(self, query: Point) -> Key:
        """
        Walk from the entry point down to layer 1, one best node per layer.

        Returns:
            Key of the node to start the base-layer search from
        """
        current = self.graph.entry_point
        for layer in range(self.graph.max_level, 0, -1):
            current = search_layer(self.graph, current, query, ef=1, layer=layer)[0][1]
        return current
