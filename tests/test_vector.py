"""Tests for vector arithmetic."""

import numpy as np
import pytest
from gravsim.physics.vector import vector, freeze, dot, add, subtract, scale, average, distance


def test_vector_is_read_only():
    """Test that vectors cannot be modified in place."""
    v = vector(1.0, 2.0, 3.0)
    assert v.shape == (3,)
    assert v.dtype == np.float64
    with pytest.raises(ValueError):
        v[0] = 5.0


def test_freeze_copies():
    """Test that freezing leaves the source array writable."""
    source = np.array([1.0, 2.0, 3.0])
    frozen = freeze(source)
    source[0] = 9.0
    assert frozen[0] == 1.0


def test_arithmetic():
    """Test the basic vector operations."""
    a = vector(1.0, 2.0, 3.0)
    b = vector(4.0, -5.0, 6.0)

    assert dot(a, b) == 1.0 * 4.0 - 2.0 * 5.0 + 3.0 * 6.0
    assert np.array_equal(add(a, b), [5.0, -3.0, 9.0])
    assert np.array_equal(subtract(a, b), [-3.0, 7.0, -3.0])
    assert np.array_equal(scale(2.0, a), [2.0, 4.0, 6.0])
    assert np.array_equal(average(a, b), [2.5, -1.5, 4.5])


def test_distance():
    """Test Euclidean distance."""
    a = vector(1.0, 1.0, 1.0)
    b = vector(4.0, 5.0, 1.0)
    assert distance(a, b) == 5.0
    assert distance(a, a) == 0.0
    assert distance(a, b) == distance(b, a)


def test_stacked_vectors():
    """Test row-wise operations on (n, 3) arrays."""
    a = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0]])
    b = np.array([[3.0, 4.0, 0.0], [1.0, 0.0, 2.0]])
    assert np.allclose(distance(a, b), [5.0, 2.0])
    assert np.allclose(dot(a, b), [0.0, 1.0])
