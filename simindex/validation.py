"""Structural checks for HNSW graphs.

The builder is expected to keep four properties true after every insert:
adjacency is symmetric at every level, no node has more than M neighbors at
any level, every node's levels run contiguously from 0, and the graph's
max_level and entry point agree with the nodes it holds. GraphValidator
reports every violation it finds instead of stopping at the first one, which
makes a broken graph much easier to diagnose.
"""

from typing import Dict, List
from collections import deque

from simindex.hnsw.graph import HNSWGraph
from simindex.index import Key


class GraphValidator:
    """Validates the structure of an HNSWGraph.

    Read-only: the graph is never modified.
    """

    def __init__(self, graph: HNSWGraph) -> None:
        """Initialize the validator.

        Args:
            graph: Graph to inspect
        """
        self.graph = graph

    def check_symmetry(self) -> List[str]:
        """Every edge must be present at both endpoints, on a level both live on.

        Returns:
            List of violation messages (empty if the graph is symmetric)
        """
        violations = []
        nodes = self.graph.nodes

        for key, node in nodes.items():
            for layer, neighbor_keys in node.neighbors.items():
                for neighbor_key in neighbor_keys:
                    if neighbor_key == key:
                        violations.append(f"{key!r} links to itself at layer {layer}")
                        continue

                    neighbor = nodes.get(neighbor_key)
                    if neighbor is None:
                        violations.append(
                            f"{key!r} links to missing node {neighbor_key!r} at layer {layer}"
                        )
                    elif layer > neighbor.level:
                        violations.append(
                            f"{key!r} links to {neighbor_key!r} at layer {layer} "
                            f"above its level {neighbor.level}"
                        )
                    elif key not in neighbor.neighbors[layer]:
                        violations.append(
                            f"Edge {key!r}->{neighbor_key!r} at layer {layer} has no reverse"
                        )

        return violations

    def check_degree(self) -> List[str]:
        """No neighbor set may exceed M entries.

        Returns:
            List of violation messages
        """
        M = self.graph.M
        violations = []

        for key, node in self.graph.nodes.items():
            for layer, neighbor_keys in node.neighbors.items():
                if len(neighbor_keys) > M:
                    violations.append(
                        f"{key!r} has {len(neighbor_keys)} neighbors at layer {layer} (M={M})"
                    )

        return violations

    def check_levels(self) -> List[str]:
        """Levels must be contiguous and max_level/entry point must be consistent.

        Returns:
            List of violation messages
        """
        violations = []
        graph = self.graph

        for key, node in graph.nodes.items():
            if sorted(node.neighbors) != list(range(node.level + 1)):
                violations.append(
                    f"{key!r} has levels {sorted(node.neighbors)}, expected 0..{node.level}"
                )

        if not graph.nodes:
            if graph.entry_point is not None or graph.max_level != -1:
                violations.append("Empty graph has an entry point or max_level != -1")
            return violations

        highest = max(node.level for node in graph.nodes.values())
        if graph.max_level != highest:
            violations.append(f"max_level is {graph.max_level}, highest node level is {highest}")

        entry = graph.nodes.get(graph.entry_point)
        if entry is None:
            violations.append(f"Entry point {graph.entry_point!r} is not in the graph")
        elif entry.level != graph.max_level:
            violations.append(
                f"Entry point {graph.entry_point!r} has level {entry.level}, "
                f"max_level is {graph.max_level}"
            )

        return violations

    def validate(self) -> List[str]:
        """Run every check.

        Returns:
            All violation messages, symmetry first
        """
        return self.check_symmetry() + self.check_degree() + self.check_levels()

    def is_valid(self) -> bool:
        """True if no check reports a violation."""
        return not self.validate()

    def level_population(self) -> Dict[int, int]:
        """Number of nodes living on each level.

        Returns:
            Dictionary mapping level -> node count
        """
        population: Dict[int, int] = {}
        for node in self.graph.nodes.values():
            for layer in range(node.level + 1):
                population[layer] = population.get(layer, 0) + 1
        return population

    def reachable_from_entry(self, layer: int = 0) -> int:
        """Count nodes reachable from the entry point at a layer.

        Uses BFS over the layer's edges. Pruning can strand nodes, so this is
        a quality measure rather than an invariant.

        Args:
            layer: Layer whose edges to follow

        Returns:
            Number of reachable nodes, including the entry point
        """
        start = self.graph.entry_point
        if start is None:
            return 0

        visited = {start}
        queue: deque = deque([start])

        while queue:
            current: Key = queue.popleft()
            for neighbor in self.graph.neighbors(current, layer):
                if neighbor not in visited:
                    visited.add(neighbor)
                    queue.append(neighbor)

        return len(visited)
