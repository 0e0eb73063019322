"""
simindex - nearest-neighbor search behind one interface

Two interchangeable backends answer "which stored points are closest to this
query": NaiveIndex scans everything and is exact, HNSWIndex walks a
hierarchical proximity graph and is approximate but fast.
"""

__version__ = "0.1.0"

from simindex.point import Point, VectorPoint
from simindex.index import Index
from simindex.naive import NaiveIndex
from simindex.hnsw.index import HNSWIndex
from simindex.config import (
    HNSWConfig,
    get_default_config,
    get_high_recall_config,
)
from simindex.exceptions import (
    SimIndexError,
    DimensionMismatchError,
    EmptyIndexError,
    DuplicateKeyError,
    InvalidParameterError,
    KeyNotFoundError,
)

__all__ = [
    "Point",
    "VectorPoint",
    "Index",
    "NaiveIndex",
    "HNSWIndex",
    "HNSWConfig",
    "get_default_config",
    "get_high_recall_config",
    "SimIndexError",
    "DimensionMismatchError",
    "EmptyIndexError",
    "DuplicateKeyError",
    "InvalidParameterError",
    "KeyNotFoundError",
]
