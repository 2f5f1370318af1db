"""Grid sampling utilities for winding number fields."""

from __future__ import annotations

import os
from typing import Tuple

import numpy as np
import numpy.typing as npt

from .errors import ShapeMismatchError
from .field import WindingField

_Array = npt.NDArray[np.floating]
_Bounds2D = Tuple[Tuple[float, float], Tuple[float, float]]
_Bounds3D = Tuple[Tuple[float, float], Tuple[float, float], Tuple[float, float]]
_Resolution2D = Tuple[int, int]
_Resolution3D = Tuple[int, int, int]


def _cell_centres(lo: float, hi: float, n: int) -> np.ndarray:
    return np.linspace(lo, hi, n, endpoint=False) + (hi - lo) / (2.0 * n)


def sample_winding_2d(
    field: WindingField,
    bounds: _Bounds2D,
    resolution: _Resolution2D,
) -> _Array:
    """Sample a 2-D *field* on a uniform cell-centred grid.

    Parameters
    ----------
    field:
        A 2-D :class:`~winding.field.WindingField`.
    bounds:
        ``((x0, x1), (y0, y1))`` physical extents of the domain.
    resolution:
        ``(nx, ny)`` number of cells along each axis.

    Returns
    -------
    numpy.ndarray
        Shape ``(ny, nx)`` array of winding numbers, row-major (y first).
    """
    if field.dim != 2:
        raise ShapeMismatchError(f"sample_winding_2d needs a 2D field, got {field.dim}D")
    (x0, x1), (y0, y1) = bounds
    nx, ny = resolution

    xs = _cell_centres(x0, x1, nx)
    ys = _cell_centres(y0, y1, ny)

    Y, X = np.meshgrid(ys, xs, indexing="ij")
    p = np.stack([X, Y], axis=-1)
    return field(p)


def sample_winding_3d(
    field: WindingField,
    bounds: _Bounds3D,
    resolution: _Resolution3D,
) -> _Array:
    """Sample a 3-D *field* on a uniform cell-centred grid.

    Parameters
    ----------
    field:
        A 3-D :class:`~winding.field.WindingField`.
    bounds:
        ``((x0, x1), (y0, y1), (z0, z1))`` physical extents of the domain.
    resolution:
        ``(nx, ny, nz)`` number of cells along each axis.

    Returns
    -------
    numpy.ndarray
        Shape ``(nz, ny, nx)`` array of winding numbers, z-first indexing.
    """
    if field.dim != 3:
        raise ShapeMismatchError(f"sample_winding_3d needs a 3D field, got {field.dim}D")
    (x0, x1), (y0, y1), (z0, z1) = bounds
    nx, ny, nz = resolution

    xs = _cell_centres(x0, x1, nx)
    ys = _cell_centres(y0, y1, ny)
    zs = _cell_centres(z0, z1, nz)

    Z, Y, X = np.meshgrid(zs, ys, xs, indexing="ij")
    p = np.stack([X, Y, Z], axis=-1)
    return field(p)


def save_npy(path: str, arr: _Array) -> None:
    """Save *arr* to *path* (creates parent directories if needed)."""
    out_dir = os.path.dirname(path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    np.save(path, arr)
