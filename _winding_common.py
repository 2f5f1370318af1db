"""Shared helpers used by both winding and stl2winding.

This module provides:

* **Type alias**: :data:`_F`
* **Normalization constants**: :data:`FOUR_PI`, :data:`TWO_PI`
* **Math helpers**: :func:`dot`, :func:`length`, :func:`cross2`
* **Array coercion**: :func:`as_points`, :func:`as_indices`

Not meant to be imported directly by end users — import from
``winding`` or ``stl2winding`` instead.
"""

from __future__ import annotations

from math import pi

import numpy as np
import numpy.typing as npt

# ---------------------------------------------------------------------------
# Type alias
# ---------------------------------------------------------------------------
_F = npt.NDArray[np.floating]

__all__ = [
    "_F",
    "FOUR_PI", "TWO_PI",
    "dot", "length", "cross2",
    "as_points", "as_indices",
]

# Total solid angle of the unit sphere / total turning angle of the circle.
FOUR_PI = 4.0 * pi
TWO_PI = 2.0 * pi


# ===========================================================================
# Math helpers
# ===========================================================================

def dot(a: _F, b: _F) -> _F:
    """Dot product along the last axis."""
    return np.sum(a * b, axis=-1)


def length(v: _F) -> _F:
    """Euclidean length along the last axis."""
    return np.sqrt(dot(v, v))


def cross2(a: _F, b: _F) -> _F:
    """z-component of the cross product of two ``(..., 2)`` arrays."""
    return a[..., 0] * b[..., 1] - a[..., 1] * b[..., 0]


# ===========================================================================
# Array coercion
# ===========================================================================

def as_points(x, dim: int | None = None) -> _F:
    """Return *x* as a float64 array; flat size-0 input becomes ``(0, dim)``."""
    arr = np.asarray(x, dtype=np.float64)
    if arr.size == 0 and arr.ndim != 2 and dim is not None:
        return arr.reshape(0, dim)
    return arr


def as_indices(x, dim: int | None = None) -> np.ndarray:
    """Return *x* as an integer array of any width.

    Size-0 input carries no dtype information (``[]`` is float64) and is
    returned as ``np.intp``; flat size-0 input becomes ``(0, dim)``.
    Non-integer input raises :class:`TypeError`.
    """
    arr = np.asarray(x)
    if arr.size == 0:
        if arr.ndim != 2 and dim is not None:
            return np.empty((0, dim), dtype=np.intp)
        return arr.astype(np.intp)
    if not np.issubdtype(arr.dtype, np.integer):
        raise TypeError(f"index arrays must have an integer dtype, got {arr.dtype}")
    return arr
