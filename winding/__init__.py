"""
winding — Generalized Winding Numbers
======================================

Computes the generalized winding number of query points with respect to a
triangle mesh (3D) or a polyline (2D), following Jacobson et al.,
"Robust Inside-Outside Segmentation using Generalized Winding Numbers"
(SIGGRAPH 2013).  The value is ~1 inside and ~0 outside a closed,
consistently oriented boundary and degrades gracefully for open,
self-intersecting or non-manifold input.

Implemented features
--------------------
- Signed solid angle / turning angle kernels (numerically stable atan2 forms)
- Brute-force O(F × N) evaluation, parallel over query points
- Flat column-major entry points: :func:`winding_number_3`,
  :func:`winding_number_2`
- Dense entry point with dimension dispatch: :func:`winding_number`
- Field wrapper with flip / translate / union: :class:`WindingField`
- Grid sampling: :func:`sample_winding_2d`, :func:`sample_winding_3d`

Quick start
-----------

::

    import numpy as np
    from winding import winding_number

    V = np.array([[0, 0, 0], [1, 0, 0], [0, 1, 0], [0, 0, 1]], dtype=float)
    F = np.array([[0, 2, 1], [0, 1, 3], [0, 3, 2], [1, 2, 3]])
    w = winding_number(V, F, [[0.1, 0.1, 0.1], [2.0, 2.0, 2.0]])
    # w ≈ [1.0, 0.0]

Parallelism is tuned with :class:`WindingConfig`::

    from winding import WindingConfig
    w = winding_number(V, F, O, config=WindingConfig(max_workers=1))
"""

from .api import winding_number, winding_number_2, winding_number_3
from .config import DEFAULT_CONFIG, MIN_PARALLEL_WORK, WindingConfig
from .engine import evaluate, partition_origins
from .errors import IndexOutOfRangeError, ShapeMismatchError, WindingNumberError
from .field import WindingField
from .grid import sample_winding_2d, sample_winding_3d, save_npy

__version__ = "0.1.0"

__all__ = [
    # Entry points
    "winding_number",
    "winding_number_2",
    "winding_number_3",
    "evaluate",
    "partition_origins",

    # Configuration
    "WindingConfig",
    "DEFAULT_CONFIG",
    "MIN_PARALLEL_WORK",

    # Errors
    "WindingNumberError",
    "IndexOutOfRangeError",
    "ShapeMismatchError",

    # Fields and grids
    "WindingField",
    "sample_winding_2d",
    "sample_winding_3d",
    "save_npy",
]
