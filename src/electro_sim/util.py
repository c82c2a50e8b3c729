# MIT License (see LICENSE)
"""
Small 2D vector helpers.

All vectors are numpy float64 arrays of shape (2,).
"""
from __future__ import annotations

import numpy as np


def f64(x) -> np.ndarray:
    """Convert any array-like to a float64 numpy array (always a copy)."""
    return np.array(x, dtype=np.float64)


def norm2(v: np.ndarray) -> float:
    """Squared magnitude of a 2D vector."""
    return float(v[0] * v[0] + v[1] * v[1])


def norm(v: np.ndarray) -> float:
    """Magnitude (length) of a 2D vector."""
    return float(np.hypot(v[0], v[1]))


def perp(v: np.ndarray) -> np.ndarray:
    """Rotate a 2D vector by +90°: (x, y) -> (-y, x)."""
    return np.array([-v[1], v[0]], dtype=np.float64)


def clamp_magnitude(v: np.ndarray, limit: float) -> np.ndarray:
    """
    Scale v down so that |v| <= limit, keeping its direction.

    Vectors already within the limit are returned unchanged (same object).
    An infinite limit never clamps.
    """
    mag = norm(v)
    if mag > limit:
        return v * (limit / mag)
    return v
