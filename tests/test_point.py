"""
Tests for points and distance metrics.

These tests verify that distance functions correctly measure similarity between
vectors, and that VectorPoint refuses to compare incompatible shapes.
"""

import numpy as np
import pytest
from simindex.exceptions import DimensionMismatchError
from simindex.point import (
    MAX_COSINE_DISTANCE,
    VectorPoint,
    cosine_distance,
    cosine_similarity,
    normalize_vector,
)


def test_cosine_similarity_identical_vectors():
    """Identical vectors should have similarity of 1.0"""
    v1 = np.array([1.0, 2.0, 3.0])
    v2 = np.array([1.0, 2.0, 3.0])

    assert np.isclose(cosine_similarity(v1, v2), 1.0), "Identical vectors should have similarity 1.0"


def test_cosine_similarity_orthogonal_vectors():
    """Orthogonal vectors should have similarity of 0.0"""
    v1 = np.array([1.0, 0.0, 0.0])
    v2 = np.array([0.0, 1.0, 0.0])

    assert np.isclose(cosine_similarity(v1, v2), 0.0)


def test_cosine_similarity_opposite_vectors():
    """Opposite direction vectors should have similarity of -1.0"""
    v1 = np.array([1.0, 2.0, 3.0])

    assert np.isclose(cosine_similarity(v1, -v1), -1.0)


def test_cosine_similarity_ignores_magnitude():
    """Scaling a vector should not change its similarity"""
    v1 = np.array([1.0, 2.0])
    v2 = np.array([10.0, 20.0])

    assert np.isclose(cosine_similarity(v1, v2), 1.0)


def test_cosine_distance_range():
    """Distance is 0 for same direction and 2 for opposite"""
    v = np.array([3.0, 4.0])

    assert np.isclose(cosine_distance(v, v), 0.0)
    assert np.isclose(cosine_distance(v, -v), 2.0)
    assert np.isclose(cosine_distance(np.array([1.0, 0.0]), np.array([0.0, 1.0])), 1.0)


def test_cosine_distance_zero_vector_is_maximal():
    """A zero vector has no direction and ranks last"""
    zero = np.array([0.0, 0.0])
    v = np.array([1.0, 0.0])

    assert cosine_distance(zero, v) == MAX_COSINE_DISTANCE
    assert cosine_distance(v, zero) == MAX_COSINE_DISTANCE
    assert cosine_distance(zero, zero) == MAX_COSINE_DISTANCE


def test_cosine_distance_dimension_mismatch():
    """Vectors of different lengths cannot be compared"""
    with pytest.raises(DimensionMismatchError):
        cosine_distance(np.array([1.0, 0.0]), np.array([1.0, 0.0, 0.0]))

    with pytest.raises(DimensionMismatchError):
        cosine_similarity(np.array([1.0]), np.array([1.0, 0.0]))


def test_normalize_vector():
    """Normalized vectors have unit length; zero vectors pass through"""
    normalized = normalize_vector(np.array([3.0, 4.0]))
    assert np.isclose(np.linalg.norm(normalized), 1.0)
    assert np.allclose(normalized, [0.6, 0.8])

    zero = np.array([0.0, 0.0])
    assert np.array_equal(normalize_vector(zero), zero)


def test_vector_point_distance_is_symmetric():
    """distance(a, b) == distance(b, a)"""
    a = VectorPoint([1.0, 2.0, 0.5])
    b = VectorPoint([-0.3, 1.0, 2.0])

    assert a.distance(b) == pytest.approx(b.distance(a))
    assert a.distance(b) >= 0.0


def test_vector_point_dimension_mismatch():
    """Comparing points of different length raises"""
    a = VectorPoint([1.0, 0.0])
    b = VectorPoint([1.0, 0.0, 0.0])

    with pytest.raises(DimensionMismatchError):
        a.distance(b)


def test_vector_point_rejects_foreign_points():
    """A VectorPoint cannot be compared with another Point type"""
    class OtherPoint:
        def distance(self, other):
            return 0.0

    with pytest.raises(DimensionMismatchError):
        VectorPoint([1.0]).distance(OtherPoint())


def test_vector_point_must_be_1d():
    """Matrices are not points"""
    with pytest.raises(DimensionMismatchError):
        VectorPoint([[1.0, 0.0], [0.0, 1.0]])


def test_vector_point_is_immutable_copy():
    """Mutating the source array must not change the point"""
    source = np.array([1.0, 0.0])
    point = VectorPoint(source)
    source[0] = 5.0

    assert point.values[0] == 1.0
    with pytest.raises(ValueError):
        point.values[0] = 2.0


def test_vector_point_equality_and_len():
    """Points compare and hash by value"""
    a = VectorPoint([1.0, 2.0])
    b = VectorPoint(np.array([1.0, 2.0], dtype=np.float32))

    assert a == b
    assert hash(a) == hash(b)
    assert a != VectorPoint([2.0, 1.0])
    assert a != VectorPoint([1.0, 2.0, 0.0])
    assert len(a) == 2
    assert a.dimension == 2
