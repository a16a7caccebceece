"""Vector helpers for inertial-frame geometry.

Vectors are numpy float64 arrays of shape (3,), in km unless stated otherwise.
"""

import numpy as np
from numpy.typing import NDArray


def vector(x: float, y: float, z: float) -> NDArray[np.float64]:
    """Build a 3-vector."""
    return np.array([x, y, z], dtype=np.float64)


def length(v: NDArray[np.float64]) -> float:
    """Euclidean length of a vector."""
    return float(np.linalg.norm(v))


def normalize(v: NDArray[np.float64]) -> NDArray[np.float64]:
    """Normalize vector to unit length.

    Args:
        v: Vector [x, y, z]

    Returns:
        Unit vector pointing the same way

    Raises:
        ValueError: If the vector has zero length
    """
    norm = np.linalg.norm(v)
    if norm < 1e-15:
        raise ValueError("Cannot normalize a zero-length vector")
    return np.asarray(v, dtype=np.float64) / norm


def is_unit(v: NDArray[np.float64], atol: float = 1e-9) -> bool:
    return bool(abs(np.linalg.norm(v) - 1.0) <= atol)


def clamp(low: float, x: float, high: float) -> float:
    """Clamp x into [low, high]."""
    if x < low:
        return low
    if x > high:
        return high
    return x
