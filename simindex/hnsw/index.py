"""
Approximate nearest-neighbor index backed by an HNSW graph.
"""

from dataclasses import replace
from typing import Any, Dict, List, Optional, Tuple

from simindex.config import HNSWConfig, get_default_config
from simindex.exceptions import DuplicateKeyError
from simindex.hnsw.builder import HNSWBuilder
from simindex.hnsw.graph import HNSWGraph
from simindex.hnsw.searcher import HNSWSearcher
from simindex.hnsw.utils import RandomStream, SeededRandomStream, assign_layer
from simindex.index import Index, Key
from simindex.log import get_logger
from simindex.point import Point

logger = get_logger(__name__)


class HNSWIndex(Index):
    """
    Hierarchical Navigable Small World index.

    Points are inserted one at a time into a multi-layer proximity graph;
    queries descend from a sparse top layer into the dense base layer.
    Results are approximate. For a fixed seed (or random stream), parameters
    and insertion sequence the graph, and therefore every result, is
    reproducible.

    Example:
        >>> from simindex import VectorPoint
        >>> index = HNSWIndex(M=8, construction_expansion_factor=64, seed=7)
        >>> index.insert("a", VectorPoint([1.0, 0.0]))
        >>> index.insert("b", VectorPoint([0.0, 1.0]))
        >>> index.find_keys(VectorPoint([0.9, 0.1]), 1)
        ['a']
    """

    def __init__(
        self,
        M: Optional[int] = None,
        construction_expansion_factor: Optional[int] = None,
        normalization_factor: Optional[float] = None,
        seed: Optional[int] = None,
        ef_search: Optional[int] = None,
        neighbor_selection: Optional[str] = None,
        config: Optional[HNSWConfig] = None,
        random_stream: Optional[RandomStream] = None,
    ) -> None:
        """
        Initialize an empty index.

        Args:
            M: Maximum neighbors per node per level
            construction_expansion_factor: Search breadth used while inserting
            normalization_factor: Level multiplier; larger means more layers
            seed: Seed for layer assignment (ignored when random_stream is given)
            ef_search: Minimum base-layer breadth for queries
            neighbor_selection: "simple" or "heuristic"
            config: HNSWConfig to start from. Explicit arguments take precedence.
            random_stream: Custom uniform stream for layer assignment

        Raises:
            InvalidParameterError: If any parameter is degenerate
        """
        if config is None:
            config = get_default_config()

        overrides = {
            "M": M,
            "construction_expansion_factor": construction_expansion_factor,
            "normalization_factor": normalization_factor,
            "seed": seed,
            "ef_search": ef_search,
            "neighbor_selection": neighbor_selection,
        }
        # replace() re-runs validation on the merged values
        self.config = replace(
            config, **{name: value for name, value in overrides.items() if value is not None}
        )

        self._graph = HNSWGraph(M=self.config.M)
        self._builder = HNSWBuilder(
            self._graph,
            construction_expansion_factor=self.config.construction_expansion_factor,
            neighbor_selection=self.config.neighbor_selection,
        )
        self._searcher = HNSWSearcher(self._graph, ef_search=self.config.ef_search)
        self._stream = (
            random_stream if random_stream is not None else SeededRandomStream(self.config.seed)
        )

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def graph(self) -> HNSWGraph:
        """Underlying graph. Treat as read-only."""
        return self._graph

    @property
    def max_level(self) -> int:
        """Highest level of any node, -1 when empty."""
        return self._graph.max_level

    @property
    def entry_point(self) -> Optional[Key]:
        """Key every search starts from, None when empty."""
        return self._graph.entry_point

    def set_random_stream(self, stream: RandomStream) -> None:
        """Replace the stream that drives layer assignment for later inserts."""
        self._stream = stream

    # =========================================================================
    # INDEX CONTRACT
    # =========================================================================

    def insert(self, key: Key, point: Point) -> None:
        """
        Insert a point under a new key.

        All checks run before the random stream is advanced or any node is
        touched, so a rejected insert leaves the index exactly as it was.

        Raises:
            DuplicateKeyError: If ``key`` is already present
            DimensionMismatchError: If ``point`` cannot be compared with the stored points
        """
        if key in self._graph:
            raise DuplicateKeyError(f"Key {key!r} already exists in the index")

        if self._graph.entry_point is not None:
            point.distance(self._graph.get_node(self._graph.entry_point).point)

        level = assign_layer(self._stream, self.config.normalization_factor)
        logger.debug("Inserting %r at level %d", key, level)

        self._builder.insert(key, point, level)

    def find(self, query: Point, n: int) -> List[Tuple[Key, Point]]:
        self._validate_n(n)
        nodes = self._graph.nodes
        return [(key, nodes[key].point) for key, _ in self._searcher.search(query, n)]

    def search(
        self, query: Point, n: int, ef_search: Optional[int] = None
    ) -> List[Tuple[Key, float]]:
        """
        Like ``find`` but returns distances instead of points.

        Args:
            query: Query point
            n: Number of results
            ef_search: Base-layer breadth for this query only

        Returns:
            List of (key, distance) tuples, closest first
        """
        return self._searcher.search(query, n, ef_search=ef_search)

    def __len__(self) -> int:
        return self._graph.size()

    def __contains__(self, key: object) -> bool:
        return key in self._graph

    # =========================================================================
    # INTROSPECTION
    # =========================================================================

    def stats(self) -> Dict[str, Any]:
        """
        Summary of the graph shape.

        Returns:
            Dict with size, max_level, entry_point, per-level node counts
            and the average base-layer degree
        """
        nodes = self._graph.nodes.values()
        level_counts = [0] * (self._graph.max_level + 1)
        for node in nodes:
            for level in range(node.level + 1):
                level_counts[level] += 1

        size = self._graph.size()
        total_degree = sum(node.degree(0) for node in nodes)

        return {
            "size": size,
            "max_level": self._graph.max_level,
            "entry_point": self._graph.entry_point,
            "nodes_per_level": level_counts,
            "avg_degree_layer0": total_degree / size if size else 0.0,
            "config": self.config.to_dict(),
        }

    def __repr__(self) -> str:
        return (
            f"HNSWIndex(size={len(self)}, max_level={self.max_level}, "
            f"M={self.config.M}, efc={self.config.construction_expansion_factor})"
        )
