"""
HNSW graph construction and insertion logic.

This module handles adding new nodes to the HNSW graph. The insertion algorithm:
1. Registers the node with its pre-drawn level and no edges
2. Starting at the highest layer the node shares with the graph, searches for
   its nearest neighbors using the construction breadth
3. Connects the new node to the selected neighbors in both directions
4. Shrinks any neighbor pushed past M connections back to its M closest
5. Seeds the next layer down with the closest node found on this one
6. Makes the node the entry point if it opened new top layers
"""

from typing import List

from simindex.hnsw.graph import HNSWGraph
from simindex.hnsw.searcher import search_layer
from simindex.hnsw.utils import (
    Candidate,
    select_neighbors_heuristic,
    select_neighbors_simple,
)
from simindex.index import Key
from simindex.log import get_logger
from simindex.point import Point

logger = get_logger(__name__)


class HNSWBuilder:
    """
    Handles insertion of nodes into the HNSW graph.

    This class encapsulates the logic for adding new points to the index,
    including neighbor search, connection creation, and pruning.
    """

    def __init__(
        self,
        graph: HNSWGraph,
        construction_expansion_factor: int = 200,
        neighbor_selection: str = "simple",
    ) -> None:
        """
        Initialize builder with a graph to operate on.

        Args:
            graph: The HNSWGraph to insert nodes into
            construction_expansion_factor: Search breadth while linking a new node
            neighbor_selection: "simple" (closest M) or "heuristic" (diversity-aware)
        """
        self.graph = graph
        self.construction_expansion_factor = construction_expansion_factor
        self.neighbor_selection = neighbor_selection

    def insert(self, key: Key, point: Point, level: int) -> None:
        """
        Insert a new node into the graph at a specific level.

        Callers are expected to have validated the key and point; the graph
        is modified across several nodes and is only consistent again once
        this method returns.

        Args:
            key: Key of the new node
            point: Point of the new node
            level: Maximum layer for this node
        """
        previous_entry = self.graph.entry_point
        previous_max_level = self.graph.max_level

        self.graph.add_node(key, point, level)

        # First node: nothing to connect to
        if previous_entry is not None:
            current_entry = previous_entry

            for layer in range(min(level, previous_max_level), -1, -1):
                candidates = search_layer(
                    self.graph,
                    entry=current_entry,
                    query=point,
                    ef=self.construction_expansion_factor,
                    layer=layer,
                )

                neighbors = self._select_neighbors(candidates)
                for _, neighbor_key in neighbors:
                    self.graph.add_edge(key, neighbor_key, layer)
                    self._shrink_neighbors(neighbor_key, layer)

                logger.debug(
                    "Linked %r to %d neighbors at layer %d", key, len(neighbors), layer
                )

                current_entry = candidates[0][1]

        if self.graph.promote(key):
            logger.info(
                "Node %r is the new entry point (max level %d -> %d)",
                key, previous_max_level, level,
            )

    def _select_neighbors(self, candidates: List[Candidate]) -> List[Candidate]:
        """
        Choose which candidates become edges of the new node.

        Args:
            candidates: (distance, key) pairs from the layer search

        Returns:
            Up to M (distance, key) pairs, closest first
        """
        M = self.graph.M

        if self.neighbor_selection == "heuristic":
            nodes = self.graph.nodes
            return select_neighbors_heuristic(
                candidates,
                M,
                distance_between=lambda a, b: nodes[a].point.distance(nodes[b].point),
            )

        return select_neighbors_simple(candidates, M)

    def _shrink_neighbors(self, key: Key, layer: int) -> None:
        """
        Prune connections of a node if it exceeds the M constraint.

        Keeps the M neighbors closest to the node itself and removes the rest
        of its edges at this layer from both endpoints.

        Args:
            key: Node to prune
            layer: Which layer to prune at
        """
        node = self.graph.get_node(key)

        if node.degree(layer) <= self.graph.M:
            return

        scored = [
            (node.point.distance(self.graph.nodes[neighbor_key].point), neighbor_key)
            for neighbor_key in node.get_neighbors(layer)
        ]
        kept = {k for _, k in select_neighbors_simple(scored, self.graph.M)}

        for _, neighbor_key in scored:
            if neighbor_key not in kept:
                self.graph.remove_edge(key, neighbor_key, layer)
                logger.debug("Pruned edge %r-%r at layer %d", key, neighbor_key, layer)
