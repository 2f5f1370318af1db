"""Brute-force winding number evaluation over all (origin, primitive) pairs.

For every origin ``o`` the engine sums the signed angle of every face
(3D triangles) or edge (2D segments) and normalizes by the full angle::

    S[o] = sum_f angle(f, o) / (4π  in 3D,  2π  in 2D)

Work is split along the origin axis only.  Each worker owns a contiguous
range of origins and writes a disjoint slice of the output, so no locking
is needed; the inner sum over primitives is always folded left to right in
ascending face order, which keeps results bit-identical for any partition
or tile size.

Complexity: O(F × N) where F = number of primitives, N = number of origins.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

import numpy as np

from _winding_common import _F, FOUR_PI, TWO_PI, as_indices, as_points

from ._math import _solid_angle, _turning_angle
from .config import DEFAULT_CONFIG, WindingConfig
from .errors import IndexOutOfRangeError, ShapeMismatchError

logger = logging.getLogger(__name__)

# dimension -> (angle kernel, full angle)
_KERNELS = {
    3: (_solid_angle, FOUR_PI),
    2: (_turning_angle, TWO_PI),
}


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def _check_indices(F: np.ndarray, n: int) -> None:
    """Raise :class:`IndexOutOfRangeError` for the first index outside ``[0, n)``."""
    if F.size == 0:
        return
    bad = (F < 0) | (F >= n)
    if bad.any():
        face, corner = np.argwhere(bad)[0]
        raise IndexOutOfRangeError(int(face), int(F[face, corner]), n)


def _check_shapes(V: np.ndarray, F: np.ndarray, O: np.ndarray) -> int:
    if V.ndim != 2 or V.shape[1] not in _KERNELS:
        raise ShapeMismatchError(f"vertices must have shape (n, 2) or (n, 3), got {V.shape}")
    dim = V.shape[1]
    if F.ndim != 2 or F.shape[1] != dim:
        raise ShapeMismatchError(
            f"{dim}D input needs connectivity of shape (m, {dim}), got {F.shape}"
        )
    if O.ndim != 2 or O.shape[1] != dim:
        raise ShapeMismatchError(f"origins must have shape (no, {dim}), got {O.shape}")
    return dim


# ---------------------------------------------------------------------------
# Partitioning
# ---------------------------------------------------------------------------

def partition_origins(
    n_origins: int,
    n_faces: int,
    config: Optional[WindingConfig] = None,
) -> List[slice]:
    """Split ``range(n_origins)`` into contiguous ranges, one per worker.

    A single range is returned when the pair count ``n_origins * n_faces``
    does not give every worker at least ``config.min_parallel_work`` pairs.
    """
    cfg = DEFAULT_CONFIG if config is None else config
    if n_origins == 0:
        return []
    work = n_origins * n_faces
    n_parts = min(cfg.workers, n_origins, work // cfg.min_parallel_work)
    if n_parts <= 1:
        return [slice(0, n_origins)]
    bounds = [(i * n_origins) // n_parts for i in range(n_parts + 1)]
    return [slice(lo, hi) for lo, hi in zip(bounds[:-1], bounds[1:])]


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------

def _evaluate_range(
    corners: np.ndarray,
    O: np.ndarray,
    S: np.ndarray,
    part: slice,
    cfg: WindingConfig,
) -> None:
    """Fill ``S[part]`` with winding numbers of ``O[part]``.

    *corners* is ``(m, d, d)``: corner ``k`` of primitive ``f`` is
    ``corners[f, k]``.
    """
    dim = corners.shape[1]
    kernel, full_angle = _KERNELS[dim]
    m = len(corners)

    for o0 in range(part.start, part.stop, cfg.origin_block):
        o1 = min(o0 + cfg.origin_block, part.stop)
        P = O[o0:o1, None, :]                      # (K, 1, d)
        acc = np.zeros(o1 - o0)
        for f0 in range(0, m, cfg.face_block):
            block = corners[f0:f0 + cfg.face_block]
            tile = kernel(P, *(block[:, k] for k in range(dim)))   # (K, B)
            # cumsum is a strict left fold: ((acc + t0) + t1) + ...
            tile[:, 0] += acc
            acc = np.cumsum(tile, axis=1)[:, -1]
        S[o0:o1] = acc / full_angle


def evaluate(
    V: _F,
    F: np.ndarray,
    O: _F,
    *,
    config: Optional[WindingConfig] = None,
) -> _F:
    """Generalized winding number of every origin in *O* w.r.t. ``(V, F)``.

    Parameters
    ----------
    V:
        ``(n, d)`` vertex positions, ``d`` is 2 or 3.
    F:
        ``(m, d)`` zero-based vertex indices: triangles in 3D, segments in
        2D.  Any integer dtype.
    O:
        ``(no, d)`` query points.
    config:
        Parallel granularity; defaults to :data:`winding.config.DEFAULT_CONFIG`.

    Returns
    -------
    numpy.ndarray
        ``(no,)`` float64 winding numbers in origin order.

    Raises
    ------
    ShapeMismatchError
        If the column counts disagree with each other.
    IndexOutOfRangeError
        If any index in *F* is outside ``[0, n)``.
    """
    cfg = DEFAULT_CONFIG if config is None else config
    V = np.asarray(V, dtype=np.float64)
    dim = V.shape[1] if V.ndim == 2 else None
    F = as_indices(F, dim)
    O = as_points(O, dim)
    dim = _check_shapes(V, F, O)
    _check_indices(F, len(V))

    no, m = len(O), len(F)
    S = np.zeros(no, dtype=np.float64)
    if no == 0 or m == 0:
        return S

    corners = V[F.astype(np.intp, copy=False)]    # (m, d, d)
    parts = partition_origins(no, m, cfg)
    logger.debug(
        "winding number: %d origins x %d %s, %d partition(s)",
        no, m, "faces" if dim == 3 else "edges", len(parts),
    )

    if len(parts) == 1:
        _evaluate_range(corners, O, S, parts[0], cfg)
        return S

    with ThreadPoolExecutor(max_workers=len(parts)) as pool:
        futures = [
            pool.submit(_evaluate_range, corners, O, S, part, cfg) for part in parts
        ]
        for future in futures:
            future.result()
    return S
