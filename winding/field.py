"""Winding number fields bound to a fixed mesh or polyline."""

from __future__ import annotations

from typing import Optional

import numpy as np
import numpy.typing as npt

from _winding_common import as_indices

from .config import WindingConfig
from .engine import _check_indices, _check_shapes, evaluate
from .errors import ShapeMismatchError

_Array = npt.NDArray[np.floating]


class WindingField:
    """Generalized winding number of a fixed boundary, evaluated on demand.

    Wraps vertices ``(n, d)`` and connectivity ``(m, d)`` (triangles for
    ``d == 3``, edges for ``d == 2``).  Calling the field on a ``(..., d)``
    array of points returns a ``(...)`` array of winding numbers.

    Implements:
    - Evaluation:     :meth:`winding_number` / ``__call__``, :meth:`inside`
    - Orientation:    :meth:`flipped` (also ``-field``)
    - Transforms:     :meth:`translate`
    - Combination:    :meth:`union` (also ``field + other``)

    The mesh is validated once and stored as read-only private copies.
    """

    def __init__(
        self,
        vertices: _Array,
        faces: np.ndarray,
        *,
        config: Optional[WindingConfig] = None,
    ) -> None:
        V = np.array(vertices, dtype=np.float64)
        dim = V.shape[1] if V.ndim == 2 else None
        F = as_indices(faces, dim).astype(np.intp)
        _check_shapes(V, F, np.empty((0, dim or 0)))
        _check_indices(F, len(V))
        V.flags.writeable = False
        F.flags.writeable = False
        self._V = V
        self._F = F
        self._config = config

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def dim(self) -> int:
        return self._V.shape[1]

    @property
    def vertices(self) -> _Array:
        return self._V

    @property
    def faces(self) -> np.ndarray:
        return self._F

    def __repr__(self) -> str:
        kind = "triangles" if self.dim == 3 else "edges"
        return f"WindingField({len(self._V)} vertices, {len(self._F)} {kind})"

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def winding_number(self, p: _Array) -> _Array:
        """Evaluate at *p* (shape ``(..., d)``); returns shape ``(...)``."""
        p = np.asarray(p, dtype=np.float64)
        if p.ndim == 0 or p.shape[-1] != self.dim:
            raise ShapeMismatchError(
                f"query points must have shape (..., {self.dim}), got {p.shape}"
            )
        shape = p.shape[:-1]
        w = evaluate(self._V, self._F, p.reshape(-1, self.dim), config=self._config)
        return w.reshape(shape)

    def __call__(self, p: _Array) -> _Array:
        return self.winding_number(p)

    def inside(self, p: _Array, threshold: float = 0.5) -> np.ndarray:
        """Boolean mask: winding number strictly above *threshold*."""
        return self.winding_number(p) > threshold

    # ------------------------------------------------------------------
    # Derived fields
    # ------------------------------------------------------------------

    def _derive(self, V: _Array, F: np.ndarray) -> WindingField:
        return WindingField(V, F, config=self._config)

    def flipped(self) -> WindingField:
        """Reverse every face/edge; the resulting field is negated."""
        return self._derive(self._V, self._F[:, ::-1])

    def __neg__(self) -> WindingField:
        return self.flipped()

    def translate(self, *offset: float) -> WindingField:
        """Translate by ``(tx, ty)`` or ``(tx, ty, tz)``."""
        if len(offset) != self.dim:
            raise ShapeMismatchError(
                f"translate needs {self.dim} offsets, got {len(offset)}"
            )
        return self._derive(self._V + np.array(offset, dtype=np.float64), self._F)

    def union(self, other: WindingField) -> WindingField:
        """Concatenate two boundaries; the field is the sum of both fields."""
        if other.dim != self.dim:
            raise ShapeMismatchError(
                f"cannot combine a {self.dim}D field with a {other.dim}D field"
            )
        V = np.concatenate([self._V, other._V])
        F = np.concatenate([self._F, other._F + len(self._V)])
        return self._derive(V, F)

    def __add__(self, other: WindingField) -> WindingField:
        if not isinstance(other, WindingField):
            return NotImplemented
        return self.union(other)
