"""
Metrics for evaluating approximate search quality.

This module provides functions to:
- Compute recall@k (fraction of ground truth neighbors retrieved)
- Compute exact ground truth via brute force search
"""

from typing import Iterable, List, Sequence, Tuple

from simindex.index import Key
from simindex.naive import NaiveIndex
from simindex.point import Point


def compute_recall_at_k(
    retrieved_ids: Sequence[Key],
    ground_truth_ids: Sequence[Key],
    k: int = 10
) -> float:
    """
    Compute recall@k: fraction of ground truth neighbors retrieved.

    Args:
        retrieved_ids: Keys returned by search (ordered by relevance)
        ground_truth_ids: True k-nearest neighbor keys
        k: Number of neighbors to consider

    Returns:
        Recall@k value between 0.0 (no correct neighbors) and 1.0 (all correct)

    Example:
        >>> compute_recall_at_k([1, 2, 3, 99, 98], [1, 2, 3, 4, 5], k=5)
        0.6
    """
    if k <= 0:
        return 0.0

    ground_truth_set = set(ground_truth_ids[:k])
    if not ground_truth_set:
        return 0.0

    correct_retrievals = len(set(retrieved_ids[:k]) & ground_truth_set)

    # Fewer than k true neighbors exist when the index is smaller than k
    return correct_retrievals / len(ground_truth_set)


def exact_neighbors(
    points: Iterable[Tuple[Key, Point]],
    query: Point,
    k: int,
) -> List[Key]:
    """
    Compute exact k nearest neighbors by brute force.

    Args:
        points: (key, point) pairs to search
        query: Query point
        k: Number of neighbors

    Returns:
        Keys of the k nearest points, closest first
    """
    index = NaiveIndex()
    index.insert_many(points)
    return index.find_keys(query, k)
