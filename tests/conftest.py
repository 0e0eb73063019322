"""
Pytest configuration and shared fixtures for simindex tests
"""

import math
from typing import List, Tuple

import numpy as np
import pytest

from simindex.hnsw.utils import RandomStream
from simindex.point import VectorPoint


class ScriptedStream(RandomStream):
    """Random stream that replays fixed uniforms, to pin node levels exactly."""

    def __init__(self, values: List[float]) -> None:
        self.values = list(values)
        self.draws = 0

    def next_uniform(self) -> float:
        value = self.values[self.draws]
        self.draws += 1
        return value


def uniform_for_level(level: int, normalization_factor: float = 1.0) -> float:
    """Uniform draw that assign_layer maps to exactly ``level``."""
    return math.exp(-(level + 0.5) / normalization_factor)


@pytest.fixture
def square_points() -> List[Tuple[int, VectorPoint]]:
    """Corners of the unit square, zero vector included."""
    return [
        (0, VectorPoint([1.0, 0.0])),
        (1, VectorPoint([0.0, 1.0])),
        (2, VectorPoint([0.0, 0.0])),
        (3, VectorPoint([1.0, 1.0])),
    ]


@pytest.fixture
def random_points() -> List[Tuple[int, VectorPoint]]:
    """200 seeded 16-dimensional points."""
    rng = np.random.default_rng(42)
    return [(i, VectorPoint(v)) for i, v in enumerate(rng.standard_normal((200, 16)))]


@pytest.fixture
def random_queries() -> List[VectorPoint]:
    """20 seeded queries matching random_points."""
    rng = np.random.default_rng(7)
    return [VectorPoint(v) for v in rng.standard_normal((20, 16))]


@pytest.fixture
def scripted_stream():
    """Factory for ScriptedStream."""
    return ScriptedStream


@pytest.fixture
def level_uniform():
    """Function mapping a wanted level to the uniform that produces it."""
    return uniform_for_level
