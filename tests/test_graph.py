"""
Tests for HNSW graph data structures.

These tests verify the graph container and node structures work correctly:
- Node creation and per-level neighbor sets
- Node registration and key uniqueness
- Edge creation and removal, always bidirectional
- Entry point tracking
"""

import pytest
from simindex.exceptions import DuplicateKeyError, KeyNotFoundError
from simindex.hnsw.graph import HNSWNode, HNSWGraph
from simindex.point import VectorPoint


def test_create_node():
    """Create a basic HNSW node"""
    point = VectorPoint([1.0, 2.0, 3.0])
    node = HNSWNode(key=42, point=point, level=2)

    assert node.key == 42
    assert node.point is point
    assert node.level == 2
    # Should have empty neighbor sets for layers 0, 1, 2
    assert node.neighbors == {0: set(), 1: set(), 2: set()}


def test_node_negative_level():
    """Levels start at 0"""
    with pytest.raises(ValueError):
        HNSWNode(key=1, point=VectorPoint([1.0]), level=-1)


def test_get_neighbors_above_level():
    """Getting neighbors at layer > node level should return empty list"""
    node = HNSWNode(key=1, point=VectorPoint([1.0]), level=1)

    assert node.get_neighbors(layer=5) == []
    assert node.degree(layer=5) == 0


def test_get_neighbors_sorted():
    """Neighbor lists come back in key order regardless of insertion order"""
    node = HNSWNode(key="m", point=VectorPoint([1.0]), level=0)
    node.neighbors[0].update({"z", "a", "k"})

    assert node.get_neighbors(0) == ["a", "k", "z"]


def test_create_empty_graph():
    """Initialize an empty HNSW graph"""
    graph = HNSWGraph(M=16)

    assert graph.M == 16
    assert graph.size() == 0
    assert graph.entry_point is None
    assert graph.get_max_level() == -1


def test_add_node_does_not_move_entry_point():
    """Registering a node leaves entry point bookkeeping to promote()"""
    graph = HNSWGraph(M=4)
    node = graph.add_node("a", VectorPoint([1.0, 0.0]), level=2)

    assert graph.size() == 1
    assert "a" in graph
    assert graph.get_node("a") is node
    assert graph.entry_point is None


def test_add_duplicate_node():
    """Keys are unique"""
    graph = HNSWGraph(M=4)
    graph.add_node(1, VectorPoint([1.0, 0.0]), level=0)

    with pytest.raises(DuplicateKeyError):
        graph.add_node(1, VectorPoint([0.0, 1.0]), level=0)


def test_get_nonexistent_node():
    """Getting a node that doesn't exist should raise"""
    graph = HNSWGraph(M=4)

    with pytest.raises(KeyNotFoundError):
        graph.get_node(999)


def test_promote_updates_entry_point():
    """Entry point follows the first node, then strictly higher levels"""
    graph = HNSWGraph(M=4)

    graph.add_node(1, VectorPoint([1.0, 0.0]), level=0)
    assert graph.promote(1) is True
    assert graph.entry_point == 1
    assert graph.get_max_level() == 0

    graph.add_node(2, VectorPoint([0.0, 1.0]), level=2)
    assert graph.promote(2) is True
    assert graph.entry_point == 2
    assert graph.get_max_level() == 2

    graph.add_node(3, VectorPoint([1.0, 1.0]), level=2)
    assert graph.promote(3) is False, "Equal level should not take over"
    assert graph.entry_point == 2

    graph.add_node(4, VectorPoint([1.0, 1.0]), level=1)
    assert graph.promote(4) is False
    assert graph.get_max_level() == 2


def test_add_edge_bidirectional():
    """Adding an edge should create bidirectional connection"""
    graph = HNSWGraph(M=4)
    graph.add_node(1, VectorPoint([1.0, 0.0]), level=1)
    graph.add_node(2, VectorPoint([0.0, 1.0]), level=1)

    graph.add_edge(1, 2, layer=0)

    assert graph.neighbors(1, 0) == [2]
    assert graph.neighbors(2, 0) == [1]
    assert graph.neighbors(1, 1) == []


def test_add_edge_twice_is_idempotent():
    graph = HNSWGraph(M=4)
    graph.add_node(1, VectorPoint([1.0, 0.0]), level=0)
    graph.add_node(2, VectorPoint([0.0, 1.0]), level=0)

    graph.add_edge(1, 2, layer=0)
    graph.add_edge(2, 1, layer=0)

    assert graph.get_node(1).degree(0) == 1
    assert graph.get_node(2).degree(0) == 1


def test_add_edge_above_node_level():
    """Both endpoints must live on the layer"""
    graph = HNSWGraph(M=4)
    graph.add_node(1, VectorPoint([1.0, 0.0]), level=2)
    graph.add_node(2, VectorPoint([0.0, 1.0]), level=0)

    with pytest.raises(ValueError):
        graph.add_edge(1, 2, layer=1)

    assert graph.neighbors(1, 1) == []


def test_add_edge_self_loop():
    graph = HNSWGraph(M=4)
    graph.add_node(1, VectorPoint([1.0, 0.0]), level=0)

    with pytest.raises(ValueError):
        graph.add_edge(1, 1, layer=0)


def test_add_edge_invalid_node():
    """Adding edge with non-existent node should raise error"""
    graph = HNSWGraph(M=4)
    graph.add_node(1, VectorPoint([1.0, 0.0]), level=1)

    with pytest.raises(KeyNotFoundError):
        graph.add_edge(1, 999, layer=0)


def test_remove_edge_bidirectional():
    """Removing an edge clears both directions"""
    graph = HNSWGraph(M=4)
    for key in (1, 2, 3):
        graph.add_node(key, VectorPoint([1.0, float(key)]), level=0)
    graph.add_edge(1, 2, layer=0)
    graph.add_edge(1, 3, layer=0)

    graph.remove_edge(2, 1, layer=0)

    assert graph.neighbors(1, 0) == [3]
    assert graph.neighbors(2, 0) == []

    # Removing a missing edge is a no-op
    graph.remove_edge(2, 3, layer=0)
    assert graph.neighbors(3, 0) == [1]
