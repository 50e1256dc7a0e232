"""
2D vector helpers.

Vectors are plain numpy arrays of shape (2,). The engine only needs a
handful of operations on them, all collected here.
"""

from __future__ import annotations
import math

import numpy as np


def vec2(x: float, y: float) -> np.ndarray:
    """Build a float64 2-vector."""
    return np.array([x, y], dtype=np.float64)


def length(v: np.ndarray) -> float:
    """Euclidean norm of a 2-vector."""
    return math.hypot(v[0], v[1])


def angle(v: np.ndarray) -> float:
    """Angle of a 2-vector from the +x axis, in (-π, π]."""
    return math.atan2(v[1], v[0])


def rotate(v: np.ndarray, theta: float) -> np.ndarray:
    """Rotate a 2-vector counter-clockwise by ``theta`` radians."""
    c, s = math.cos(theta), math.sin(theta)
    return np.array([c * v[0] - s * v[1], s * v[0] + c * v[1]], dtype=np.float64)
