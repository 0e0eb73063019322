"""
Points and the distances between them.

An index never looks inside a point: it only asks two points how far apart they
are and ranks by the answer. Anything with a symmetric, non-negative
``distance`` method can be indexed. The triangle inequality is not required.

``VectorPoint`` is the stock implementation: a fixed-length float vector
compared by cosine distance, which is what text and image embeddings are
usually ranked by. Cosine distance ignores magnitude and ranges from 0
(same direction) to 2 (opposite directions).
"""

from abc import ABC, abstractmethod
from typing import Iterable, Union

import numpy as np
import numpy.typing as npt

from simindex.exceptions import DimensionMismatchError

Vector = npt.NDArray[np.float64]

# A zero vector has no direction, so it ranks behind every real match.
MAX_COSINE_DISTANCE = 2.0


def cosine_similarity(v1: Vector, v2: Vector) -> float:
    """
    Compute cosine similarity between two vectors.

    Cosine similarity measures the cosine of the angle between two vectors.
    It ranges from -1 (opposite directions) to 1 (same direction).

    Args:
        v1: First vector (1D numpy array)
        v2: Second vector (1D numpy array)

    Returns:
        Similarity score between -1 and 1 (0.0 if either vector is zero)

    Raises:
        DimensionMismatchError: If the vectors have different lengths

    Example:
        >>> cosine_similarity(np.array([1.0, 0.0]), np.array([1.0, 0.0]))
        1.0
    """
    if v1.shape != v2.shape:
        raise DimensionMismatchError(
            f"Cannot compare vectors of dimension {len(v1)} and {len(v2)}"
        )

    norm_v1 = np.linalg.norm(v1)
    norm_v2 = np.linalg.norm(v2)

    if norm_v1 == 0.0 or norm_v2 == 0.0:
        return 0.0

    # Rounding can push the ratio just past +/-1
    similarity = float(np.dot(v1, v2) / (norm_v1 * norm_v2))
    return min(1.0, max(-1.0, similarity))


def cosine_distance(v1: Vector, v2: Vector) -> float:
    """
    Compute cosine distance between two vectors.

    Cosine distance is ``1 - cosine_similarity``, ranging from 0 (identical
    direction) to 2 (opposite directions). When either vector is all zeros the
    direction is undefined and the maximal distance is returned instead.

    Args:
        v1: First vector (1D numpy array)
        v2: Second vector (1D numpy array)

    Returns:
        Distance between 0 and 2 (lower means more similar)

    Raises:
        DimensionMismatchError: If the vectors have different lengths
    """
    if v1.shape != v2.shape:
        raise DimensionMismatchError(
            f"Cannot compare vectors of dimension {len(v1)} and {len(v2)}"
        )

    if not np.any(v1) or not np.any(v2):
        return MAX_COSINE_DISTANCE

    return 1.0 - cosine_similarity(v1, v2)


def normalize_vector(v: Vector) -> Vector:
    """
    Normalize a vector to unit length (L2 norm = 1).

    Args:
        v: Input vector (1D numpy array)

    Returns:
        Normalized vector, or the input unchanged if it is all zeros
    """
    norm = np.linalg.norm(v)

    if norm == 0.0:
        return v

    return v / norm


class Point(ABC):
    """
    Anything an index can rank.

    Implementations must return a non-negative real that is symmetric in its
    arguments, and must raise ``DimensionMismatchError`` rather than return a
    value when the two points cannot be compared.
    """

    @abstractmethod
    def distance(self, other: "Point") -> float:
        """Distance from this point to ``other``."""
        pass


class VectorPoint(Point):
    """
    Fixed-length float vector compared by cosine distance.

    The values are copied into a read-only float64 array on construction so
    that a point held by an index cannot change underneath its graph edges.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Union[Iterable[float], Vector]) -> None:
        array = np.array(values, dtype=np.float64)
        if array.ndim != 1:
            raise DimensionMismatchError(f"Point must be 1D, got {array.ndim}D")
        array.flags.writeable = False
        self._values = array

    @property
    def values(self) -> Vector:
        """Read-only view of the coordinates."""
        return self._values

    @property
    def dimension(self) -> int:
        return len(self._values)

    def distance(self, other: Point) -> float:
        if not isinstance(other, VectorPoint):
            raise DimensionMismatchError(
                f"Cannot compare VectorPoint with {type(other).__name__}"
            )
        return cosine_distance(self._values, other._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VectorPoint):
            return NotImplemented
        return self._values.shape == other._values.shape and bool(
            np.array_equal(self._values, other._values)
        )

    def __hash__(self) -> int:
        return hash(self._values.tobytes())

    def __repr__(self) -> str:
        return f"VectorPoint({self._values.tolist()})"
