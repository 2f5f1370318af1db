"""Batch entry points for 3D triangle meshes and 2D polylines.

Two calling conventions are offered:

* **Flat buffers** — :func:`winding_number_3`, :func:`winding_number_2`.
  Vertices, connectivity and origins arrive as 1-D buffers holding the rows
  of an ``(count, d)`` matrix in column-major order (all x, then all y, ...),
  together with the declared row counts.  Any object numpy can view as a 1-D
  array works (``array.array``, ``memoryview``, lists, ndarrays).
* **Dense matrices** — :func:`winding_number` takes ``(n, d)`` vertices,
  ``(m, d)`` connectivity and ``(no, d)`` origins and dispatches on the
  connectivity width (3 → triangles, 2 → segments).

Example
-------
>>> import numpy as np
>>> from winding import winding_number
>>> V = np.array([[0., 0.], [1., 0.], [1., 1.], [0., 1.]])
>>> E = np.array([[0, 1], [1, 2], [2, 3], [3, 0]])
>>> winding_number(V, E, [[0.5, 0.5], [2.0, 0.5]]).round(6) + 0.0
array([1., 0.])
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from _winding_common import _F, as_indices, as_points

from .config import WindingConfig
from .engine import evaluate
from .errors import ShapeMismatchError


# ---------------------------------------------------------------------------
# Flat-buffer helpers
# ---------------------------------------------------------------------------

def _unflatten(buf, rows: int, cols: int, name: str, *, index: bool = False) -> np.ndarray:
    """View the column-major buffer *buf* as a ``(rows, cols)`` matrix."""
    if int(rows) < 0:
        raise ShapeMismatchError(f"{name}: row count must be >= 0, got {rows}")
    arr = as_indices(buf) if index else as_points(buf)
    if arr.ndim != 1:
        raise ShapeMismatchError(f"{name} must be a flat buffer, got shape {arr.shape}")
    if arr.size != rows * cols:
        raise ShapeMismatchError(
            f"{name} holds {arr.size} values, expected {rows} x {cols} = {rows * cols}"
        )
    return arr.reshape((rows, cols), order="F")


def _check_output(S: Optional[np.ndarray], no: int) -> None:
    if S is None:
        return
    if not isinstance(S, np.ndarray) or S.dtype != np.float64:
        raise ShapeMismatchError("output buffer must be a float64 numpy array")
    if S.size != no:
        raise ShapeMismatchError(f"output buffer holds {S.size} values, expected {no}")
    if not S.flags.writeable:
        raise ShapeMismatchError("output buffer is read-only")


def _winding_number_flat(dim, V, n, F, m, O, no, S, config):
    V2 = _unflatten(V, n, dim, "V")
    F2 = _unflatten(F, m, dim, "F", index=True)
    O2 = _unflatten(O, no, dim, "O")
    _check_output(S, no)
    result = evaluate(V2, F2, O2, config=config)
    if S is None:
        return result
    np.copyto(S, result.reshape(S.shape))
    return S


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def winding_number_3(
    V,
    n: int,
    F,
    m: int,
    O,
    no: int,
    S: Optional[np.ndarray] = None,
    *,
    config: Optional[WindingConfig] = None,
) -> _F:
    """Winding numbers of *no* origins w.r.t. a triangle mesh.

    Parameters
    ----------
    V:
        Flat buffer of ``n × 3`` vertex coordinates, column-major.
    n:
        Number of mesh vertices.
    F:
        Flat buffer of ``m × 3`` triangle indices, column-major.  Any
        integer dtype.
    m:
        Number of triangles.
    O:
        Flat buffer of ``no × 3`` query coordinates, column-major.
    no:
        Number of origins.
    S:
        Optional preallocated float64 output of ``no`` elements.
    config:
        Parallel granularity; see :class:`winding.config.WindingConfig`.

    Returns
    -------
    numpy.ndarray
        *S* if given, otherwise a new ``(no,)`` array.
    """
    return _winding_number_flat(3, V, n, F, m, O, no, S, config)


def winding_number_2(
    V,
    n: int,
    F,
    m: int,
    O,
    no: int,
    S: Optional[np.ndarray] = None,
    *,
    config: Optional[WindingConfig] = None,
) -> _F:
    """Winding numbers of *no* origins w.r.t. a polyline of *m* edges.

    Same conventions as :func:`winding_number_3` with 2 columns per row.
    """
    return _winding_number_flat(2, V, n, F, m, O, no, S, config)


_FLAT_ENTRY = {
    3: winding_number_3,
    2: winding_number_2,
}


def winding_number(
    V: _F,
    F: np.ndarray,
    O: _F,
    *,
    config: Optional[WindingConfig] = None,
) -> _F:
    """Winding numbers of origins *O* w.r.t. the mesh or polyline ``(V, F)``.

    *F* with 3 columns is read as triangles (3D), with 2 columns as edges
    (2D).  *V* and *O* must have the same number of columns as *F*.

    Raises
    ------
    ShapeMismatchError
        Before any computation if the shapes are inconsistent.
    """
    V = np.asarray(V, dtype=np.float64)
    if V.ndim != 2:
        raise ShapeMismatchError(f"vertices must be a (n, d) matrix, got shape {V.shape}")
    dim = V.shape[1]
    F = as_indices(F, dim)
    O = as_points(O, dim)

    if F.ndim != 2 or F.shape[1] not in _FLAT_ENTRY:
        raise ShapeMismatchError(
            f"connectivity must have 2 (edges) or 3 (triangles) columns, got shape {F.shape}"
        )
    k = F.shape[1]
    if dim != k:
        raise ShapeMismatchError(
            f"{k}-column connectivity needs {k}D vertices, got {dim} columns"
        )
    if O.ndim != 2 or O.shape[1] != dim:
        raise ShapeMismatchError(f"origins must have shape (no, {dim}), got {O.shape}")

    return _FLAT_ENTRY[k](
        V.ravel(order="F"), len(V),
        F.ravel(order="F"), len(F),
        O.ravel(order="F"), len(O),
        config=config,
    )
