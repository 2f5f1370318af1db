"""Public helpers turning mesh files into winding number fields."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple, Union

import numpy as np

from winding.config import WindingConfig
from winding.field import WindingField
from winding.grid import sample_winding_3d

from .mesh_io import load_mesh, load_stl

_Bounds3D = Tuple[Tuple[float, float], Tuple[float, float], Tuple[float, float]]
_Resolution3D = Tuple[int, int, int]


def stl_to_field(
    path: Union[str, Path],
    *,
    config: Optional[WindingConfig] = None,
) -> WindingField:
    """Load an STL file and return a :class:`winding.field.WindingField`.

    Unlike ray-parity inside tests, the winding number stays meaningful for
    meshes with holes, duplicated facets or flipped triangles: values near
    1 are inside, near 0 outside, in between near defects.

    Examples
    --------
    >>> from stl2winding import stl_to_field
    >>> field = stl_to_field("mars_wheel.stl")
    >>> inside = field.inside(np.array([[0.0, 0.0, 0.0]]))
    """
    V, F = load_stl(path)
    return WindingField(V, F, config=config)


def mesh_file_to_field(
    path: Union[str, Path],
    *,
    config: Optional[WindingConfig] = None,
) -> WindingField:
    """Like :func:`stl_to_field` for any format :func:`load_mesh` reads."""
    V, F = load_mesh(path)
    return WindingField(V, F, config=config)


def sample_winding_from_stl(
    path: Union[str, Path],
    bounds: _Bounds3D,
    resolution: _Resolution3D,
    *,
    config: Optional[WindingConfig] = None,
) -> np.ndarray:
    """Load an STL file and sample its winding number on a cell-centred grid.

    The grid layout is identical to :func:`winding.grid.sample_winding_3d`:
    ``(nz, ny, nx)``, z-first.
    """
    return sample_winding_3d(stl_to_field(path, config=config), bounds, resolution)
