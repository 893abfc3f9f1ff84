"""Three-component vector arithmetic.

Vectors are float64 numpy arrays of shape (3,). Every function returns a new
array; inputs are never modified. The arithmetic functions also broadcast over
stacked (n, 3) arrays, in which case ``dot`` and ``distance`` reduce along the
last axis.
"""

import numpy as np


def vector(x: float, y: float, z: float) -> np.ndarray:
    """Build a read-only vector from its components."""
    return freeze(np.array([x, y, z], dtype=np.float64))


def freeze(array) -> np.ndarray:
    """Return a read-only float64 copy of ``array``."""
    frozen = np.array(array, dtype=np.float64)
    frozen.flags.writeable = False
    return frozen


def dot(a, b):
    return np.sum(np.multiply(a, b), axis=-1)


def add(a, b) -> np.ndarray:
    return np.add(a, b)


def subtract(a, b) -> np.ndarray:
    return np.subtract(a, b)


def scale(k, a) -> np.ndarray:
    return np.multiply(k, a)


def average(a, b) -> np.ndarray:
    return np.add(a, b) / 2.0


def distance(a, b):
    """Euclidean distance between two position vectors.

    This is also the error metric used to compare simulated positions
    against reference positions.
    """
    d = subtract(a, b)
    return np.sqrt(dot(d, d))
