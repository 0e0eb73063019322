"""
HNSW (Hierarchical Navigable Small World) implementation module.

This module contains the core HNSW algorithm components for building and searching
graph-based approximate nearest neighbor indexes.

Components:
- utils: Random streams, layer assignment, neighbor selection
- graph: Node store, symmetric edges, entry point bookkeeping
- searcher: Greedy layer search and top-down query descent
- builder: Insertion algorithm
- index: HNSWIndex, the public face of all of the above
"""

from simindex.hnsw.graph import HNSWNode, HNSWGraph
from simindex.hnsw.utils import RandomStream, SeededRandomStream, assign_layer
from simindex.hnsw.searcher import HNSWSearcher, search_layer
from simindex.hnsw.builder import HNSWBuilder
from simindex.hnsw.index import HNSWIndex

__all__ = [
    "HNSWNode",
    "HNSWGraph",
    "RandomStream",
    "SeededRandomStream",
    "assign_layer",
    "HNSWSearcher",
    "search_layer",
    "HNSWBuilder",
    "HNSWIndex",
]
