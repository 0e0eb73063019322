"""
Utility functions for HNSW graph construction.

This module provides helper functions used while building the index:
- Random streams: the seeded source of uniforms that drives layer assignment
- Layer assignment: Determines which layers a new node should appear in
- Neighbor selection: Chooses which discovered candidates become edges

The layer assignment uses an exponentially decaying distribution, so most
nodes live only in layer 0 and each higher layer holds a shrinking fraction.
That hierarchy is what gives search its logarithmic depth.
"""

from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Tuple
import math

import numpy as np

from simindex.index import Key

# (distance to the query, key), the currency of every search and selection step
Candidate = Tuple[float, Key]

DEFAULT_SEED = 0


class RandomStream(ABC):
    """
    Sequential source of uniform draws for layer assignment.

    Each call to ``next_uniform`` consumes exactly one step of the stream, so
    an index built from the same stream state and the same insertion sequence
    always produces the same graph. Tests can substitute a scripted stream to
    pin node levels exactly.
    """

    @abstractmethod
    def next_uniform(self) -> float:
        """Next draw, uniform in (0, 1]."""
        pass


class SeededRandomStream(RandomStream):
    """Uniform stream backed by a seeded numpy ``Generator``."""

    def __init__(self, seed: Optional[int] = DEFAULT_SEED) -> None:
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def next_uniform(self) -> float:
        # random() is in [0, 1); flip it so the log below never sees 0
        return 1.0 - float(self._rng.random())

    def __repr__(self) -> str:
        return f"SeededRandomStream(seed={self.seed})"


def assign_layer(stream: RandomStream, normalization_factor: float) -> int:
    """
    Randomly assign a layer for a new node.

    Formula (Malkov & Yashunin 2016): layer = floor(-ln(U) * mL)
    where U is uniform in (0, 1] and mL is the normalization factor.
    There is no upper clip: a lucky draw may open several new layers at once.

    Args:
        stream: Random stream to draw U from (advanced by exactly one step)
        normalization_factor: Level multiplier mL, typically 1/ln(M)

    Returns:
        Layer number (0 = bottom layer, higher = sparser upper layers)

    Example:
        >>> # For mL = 1/ln(16): ~93.75% at layer 0, ~5.9% at layer 1
        >>> stream = SeededRandomStream(42)
        >>> layers = [assign_layer(stream, 1 / math.log(16)) for _ in range(10000)]
    """
    u = stream.next_uniform()
    return int(math.floor(-math.log(u) * normalization_factor))


def select_neighbors_simple(candidates: List[Candidate], M: int) -> List[Candidate]:
    """
    Select the M nearest candidates.

    Args:
        candidates: (distance, key) pairs, in any order
        M: Maximum number of neighbors to select

    Returns:
        Up to M (distance, key) pairs, closest first

    Example:
        >>> select_neighbors_simple([(0.5, 10), (0.2, 20), (0.8, 30), (0.3, 40)], M=2)
        [(0.2, 20), (0.3, 40)]
    """
    return sorted(candidates)[:M]


def select_neighbors_heuristic(
    candidates: List[Candidate],
    M: int,
    distance_between: Callable[[Key, Key], float],
    keep_pruned: bool = True,
) -> List[Candidate]:
    """
    Select neighbors using the diversity heuristic (HNSW paper, Algorithm 4).

    Walking candidates closest first, a candidate is kept only if it is closer
    to the query than to every neighbor already kept. Candidates that fail
    this test sit "behind" an existing neighbor and add little navigability,
    so dropping them leaves room for edges pointing in other directions.

    Args:
        candidates: (distance to query, key) pairs, in any order
        M: Maximum number of neighbors to select
        distance_between: Distance between two candidate keys
        keep_pruned: Top the result up to M with the closest rejected candidates

    Returns:
        Up to M (distance, key) pairs, closest first
    """
    selected: List[Candidate] = []
    rejected: List[Candidate] = []

    for dist, key in sorted(candidates):
        if len(selected) >= M:
            break

        if all(dist < distance_between(key, kept_key) for _, kept_key in selected):
            selected.append((dist, key))
        else:
            rejected.append((dist, key))

    if keep_pruned and len(selected) < M:
        selected.extend(rejected[:M - len(selected)])
        selected.sort()

    return selected
