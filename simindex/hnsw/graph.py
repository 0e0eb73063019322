"""
HNSW graph data structures.

This module defines the core data structures for storing the HNSW graph:
- HNSWNode: A single keyed point with its connections at every level it lives on
- HNSWGraph: Container for all nodes plus the entry point used to start searches

The graph is hierarchical: layer 0 holds every node, while higher layers
contain progressively fewer nodes for faster coarse-grained search. A node
assigned level L appears on layers 0 through L.

Edges are undirected. They are only ever created or removed through
``HNSWGraph.add_edge`` / ``HNSWGraph.remove_edge``, which touch both
endpoints, so adjacency stays symmetric at every level.
"""

from typing import Dict, List, Optional, Set

from simindex.exceptions import DuplicateKeyError, KeyNotFoundError
from simindex.index import Key
from simindex.point import Point


class HNSWNode:
    """
    Represents a single node in the HNSW graph.

    The node appears in layers 0 through its assigned ``level`` and keeps a
    neighbor set for each of them.
    """

    __slots__ = ("key", "point", "level", "neighbors")

    def __init__(self, key: Key, point: Point, level: int) -> None:
        """
        Create a new HNSW node.

        Args:
            key: Caller-supplied unique key
            point: The point stored under ``key``
            level: Maximum layer this node appears in (0 = base layer only)
        """
        if level < 0:
            raise ValueError(f"Node level must be >= 0, got {level}")

        self.key = key
        self.point = point
        self.level = level

        # {layer: {neighbor_key, ...}}, empty until the builder links the node
        self.neighbors: Dict[int, Set[Key]] = {layer: set() for layer in range(level + 1)}

    def get_neighbors(self, layer: int) -> List[Key]:
        """
        Get all neighbors at a specific layer, in key order.

        Sorting makes every traversal independent of set iteration order,
        which varies with the hash seed for string keys.

        Args:
            layer: Which layer to query

        Returns:
            Sorted list of neighbor keys (empty above the node's level)
        """
        if layer > self.level:
            return []

        return sorted(self.neighbors[layer])

    def degree(self, layer: int) -> int:
        """Number of neighbors at ``layer``."""
        if layer > self.level:
            return 0
        return len(self.neighbors[layer])

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"HNSWNode(key={self.key!r}, level={self.level}, degree0={self.degree(0)})"


class HNSWGraph:
    """
    Container for the entire HNSW graph structure.

    Manages all nodes, tracks the entry point for searches and the highest
    level assigned so far.
    """

    def __init__(self, M: int = 16) -> None:
        """
        Initialize an empty HNSW graph.

        Args:
            M: Maximum number of neighbors per node per level
        """
        self.M = M

        # Insertion-ordered storage for all nodes
        self.nodes: Dict[Key, HNSWNode] = {}

        # Entry point: where every top-down search begins (None when empty)
        self.entry_point: Optional[Key] = None

        # Highest level of any node, -1 when empty
        self.max_level: int = -1

    def add_node(self, key: Key, point: Point, level: int) -> HNSWNode:
        """
        Register a new, unconnected node.

        The entry point is not moved here; the builder promotes the node once
        it has been linked in.

        Args:
            key: Unique key for the node
            point: Point payload
            level: Maximum layer this node should appear in

        Returns:
            The new HNSWNode

        Raises:
            DuplicateKeyError: If ``key`` is already in the graph
        """
        if key in self.nodes:
            raise DuplicateKeyError(f"Key {key!r} already exists in the graph")

        node = HNSWNode(key, point, level)
        self.nodes[key] = node
        return node

    def get_node(self, key: Key) -> HNSWNode:
        """
        Retrieve a node by key.

        Raises:
            KeyNotFoundError: If no node has this key
        """
        try:
            return self.nodes[key]
        except KeyError:
            raise KeyNotFoundError(f"Node not found: {key!r}") from None

    def neighbors(self, key: Key, layer: int) -> List[Key]:
        """Sorted neighbor keys of ``key`` at ``layer``."""
        return self.get_node(key).get_neighbors(layer)

    def add_edge(self, key1: Key, key2: Key, layer: int) -> None:
        """
        Create a bidirectional connection between two nodes at a layer.

        Raises:
            KeyNotFoundError: If either node is missing
            ValueError: If either node does not live on ``layer``, or on a self-loop
        """
        node1 = self.get_node(key1)
        node2 = self.get_node(key2)

        if key1 == key2:
            raise ValueError(f"Cannot connect node {key1!r} to itself")
        if layer > node1.level or layer > node2.level:
            raise ValueError(
                f"Cannot connect {key1!r} (level {node1.level}) and "
                f"{key2!r} (level {node2.level}) at layer {layer}"
            )

        node1.neighbors[layer].add(key2)
        node2.neighbors[layer].add(key1)

    def remove_edge(self, key1: Key, key2: Key, layer: int) -> None:
        """Remove the connection between two nodes at a layer, if present."""
        node1 = self.get_node(key1)
        node2 = self.get_node(key2)

        if layer <= node1.level:
            node1.neighbors[layer].discard(key2)
        if layer <= node2.level:
            node2.neighbors[layer].discard(key1)

    def promote(self, key: Key) -> bool:
        """
        Make ``key`` the entry point if it opens a new top layer.

        The first node always becomes the entry point. Later nodes only take
        over when their level is strictly above the current ``max_level``.

        Returns:
            True if the entry point moved
        """
        node = self.get_node(key)
        if self.entry_point is None or node.level > self.max_level:
            self.entry_point = key
            self.max_level = node.level
            return True
        return False

    def get_max_level(self) -> int:
        """Maximum layer level in the graph, or -1 if the graph is empty."""
        return self.max_level

    def size(self) -> int:
        """Total number of nodes in the graph."""
        return len(self.nodes)

    def __contains__(self, key: object) -> bool:
        return key in self.nodes

    def __len__(self) -> int:
        return len(self.nodes)

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"HNSWGraph(nodes={self.size()}, max_level={self.max_level}, "
            f"M={self.M}, entry_point={self.entry_point!r})"
        )
