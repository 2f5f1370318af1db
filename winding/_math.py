"""Per-primitive angle kernels for the generalized winding number.

All symbols here are private (underscore-prefixed).  Users should import
only from :mod:`winding`.

Algorithms
----------
Solid angle (3D) — Van Oosterom & Strackee (1983).
    With ``A, B, C`` the triangle corners relative to the query point,
    ``tan(Ω/2) = A·(B×C) / (|A||B||C| + (A·B)|C| + (A·C)|B| + (B·C)|A|)``.
    ``np.arctan2`` keeps the quadrant, so the formula stays accurate for
    points close to the supporting plane but far from the triangle, where
    an arccos-based formula cancels catastrophically.

Turning angle (2D) — ``atan2(A×B, A·B)`` for a segment with endpoints
    ``A, B`` relative to the query point.

Zero contributions
    A point coinciding with a corner, a degenerate primitive (zero area or
    zero length) and a point lying in the primitive's supporting plane/line
    all contribute exactly 0.  On the primitive itself the one-sided limits
    are ±2π (3D) and ±π (2D); 0 is their mean, which puts points on a closed
    boundary at winding number 1/2.

Every kernel broadcasts over leading axes: ``P`` of shape ``(K, 1, d)``
against corners of shape ``(B, d)`` yields a ``(K, B)`` tile.
"""

from __future__ import annotations

import numpy as np

from _winding_common import _F, cross2, dot, length

# Relative tolerance for coincident points and degenerate primitives,
# measured against the primitive's own extent.
_EPS = 1e-12
# |triple product| (or |cross|) below this fraction of the length product
# counts as lying in the supporting plane (line).
_COPLANAR_TOL = 1e-12


def _solid_angle(P: _F, a: _F, b: _F, c: _F) -> _F:
    """Signed solid angle of triangle ``(a, b, c)`` seen from each point in *P*.

    Positive when *P* lies on the side the right-hand normal of ``(a, b, c)``
    points away from, i.e. inside an outward-oriented closed mesh.
    """
    A = a - P
    B = b - P
    C = c - P

    la = length(A)
    lb = length(B)
    lc = length(C)

    det = dot(A, np.cross(B, C))
    den = la * lb * lc + dot(A, B) * lc + dot(A, C) * lb + dot(B, C) * la
    omega = 2.0 * np.arctan2(det, den)

    ab = b - a
    ac = c - a
    bc = c - b
    longest = np.maximum(np.maximum(dot(ab, ab), dot(ac, ac)), dot(bc, bc))
    flat = length(np.cross(ab, ac)) <= _EPS * longest
    near = _EPS * np.sqrt(longest)

    zero = (
        (la <= near) | (lb <= near) | (lc <= near)
        | flat
        | (np.abs(det) <= _COPLANAR_TOL * la * lb * lc)
    )
    return np.where(zero, 0.0, omega)


def _turning_angle(P: _F, a: _F, b: _F) -> _F:
    """Signed angle of segment ``(a, b)`` seen from each point in *P*.

    Positive when the segment turns counter-clockwise around *P*, i.e. for
    points inside a counter-clockwise polygon.
    """
    A = a - P
    B = b - P

    la = length(A)
    lb = length(B)

    cr = cross2(A, B)
    theta = np.arctan2(cr, dot(A, B))

    lab = length(b - a)
    short = lab <= _EPS * np.maximum(la, lb)
    near = _EPS * lab

    zero = (
        (la <= near) | (lb <= near)
        | short
        | (np.abs(cr) <= _COPLANAR_TOL * la * lb)
    )
    return np.where(zero, 0.0, theta)
