"""Mesh files → indexed ``(V, F)`` arrays.

No pip dependencies beyond numpy itself.

Supported formats
-----------------
STL (binary and ASCII)
    A triangle soup: every facet carries its own three vertices.  With
    ``weld=True`` (the default) bit-identical positions are merged with
    ``np.unique``, so facets sharing a corner share an index.  Welding does
    not change winding numbers; it only shrinks ``V``.

OBJ
    ``v`` and ``f`` records.  Face corners may use ``v/vt/vn`` syntax and
    negative (relative) indices.  Polygons are fan-triangulated.

OFF
    ``OFF`` header, counts line, vertex and face records.  ``#`` starts a
    comment.  Polygons are fan-triangulated.

Every loader returns ``V`` as ``(n, 3)`` float64 and ``F`` as ``(m, 3)``
``np.intp`` with zero-based indices.
"""

from __future__ import annotations

import logging
import struct
from pathlib import Path
from typing import List, Sequence, Tuple, Union

import numpy as np

logger = logging.getLogger(__name__)

_Mesh = Tuple[np.ndarray, np.ndarray]


def _empty_mesh() -> _Mesh:
    return np.empty((0, 3), dtype=np.float64), np.empty((0, 3), dtype=np.intp)


def _fan(polygon: Sequence[int]) -> List[Tuple[int, int, int]]:
    """Fan-triangulate a polygon given by its corner indices."""
    return [(polygon[0], polygon[k], polygon[k + 1]) for k in range(1, len(polygon) - 1)]


# ---------------------------------------------------------------------------
# STL
# ---------------------------------------------------------------------------

def load_stl(path: Union[str, Path], *, weld: bool = True) -> _Mesh:
    """Load an STL file as an indexed triangle mesh.

    Parameters
    ----------
    path:
        Path to the ``.stl`` file (binary or ASCII).
    weld:
        Merge bit-identical vertex positions.  Without welding every
        triangle gets three fresh vertices.

    Returns
    -------
    (V, F)
        ``(n, 3)`` float64 vertices and ``(m, 3)`` intp triangle indices.
    """
    path = Path(path)
    raw = path.read_bytes()

    # Prefer the binary-size invariant: a valid binary STL satisfies
    # len(raw) == 84 + 50 * triangle_count.  Some CAD tools write binary
    # files whose 80-byte header starts with "solid".
    triangles = None
    if len(raw) >= 84:
        count = struct.unpack_from("<I", raw, 80)[0]
        if len(raw) == 84 + 50 * count:
            triangles = _binary_stl_triangles(raw)
    if triangles is None:
        triangles = _ascii_stl_triangles(raw.decode("ascii", errors="replace"))

    soup = triangles.reshape(-1, 3)
    if len(soup) == 0:
        logger.warning("No triangles found in %s", path)
        return _empty_mesh()

    if weld:
        V, inverse = np.unique(soup, axis=0, return_inverse=True)
        F = inverse.reshape(-1, 3).astype(np.intp)
    else:
        V = soup
        F = np.arange(len(soup), dtype=np.intp).reshape(-1, 3)

    logger.info("Loaded %d triangles (%d vertices) from %s", len(F), len(V), path)
    return V, F


def _binary_stl_triangles(raw: bytes) -> np.ndarray:
    """Parse a binary STL bytestring into ``(T, 3, 3)`` corners."""
    # Header: 80 bytes; triangle count: uint32 at offset 80
    count = struct.unpack_from("<I", raw, 80)[0]
    # Each record: 12 bytes normal + 36 bytes vertices + 2 bytes attr = 50 bytes
    dtype = np.dtype([
        ("normal", "<f4", (3,)),
        ("vertices", "<f4", (3, 3)),
        ("attr", "<u2"),
    ])
    records = np.frombuffer(raw, dtype=dtype, count=count, offset=84)
    return records["vertices"].astype(np.float64)


def _ascii_stl_triangles(text: str) -> np.ndarray:
    """Parse an ASCII STL string into ``(T, 3, 3)`` corners."""
    verts: list[list[float]] = []
    for line in text.splitlines():
        line = line.strip()
        if line.startswith("vertex"):
            parts = line.split()
            verts.append([float(parts[1]), float(parts[2]), float(parts[3])])
    if len(verts) % 3:
        raise ValueError(f"ASCII STL has {len(verts)} vertices, not a multiple of 3")
    return np.array(verts, dtype=np.float64).reshape(-1, 3, 3)


# ---------------------------------------------------------------------------
# OBJ
# ---------------------------------------------------------------------------

def load_obj(path: Union[str, Path]) -> _Mesh:
    """Load the vertices and (fan-triangulated) faces of a Wavefront OBJ file."""
    path = Path(path)
    verts: list[list[float]] = []
    tris: list[tuple[int, int, int]] = []

    for lineno, line in enumerate(path.read_text(errors="replace").splitlines(), 1):
        parts = line.split("#", 1)[0].split()
        if not parts:
            continue
        if parts[0] == "v":
            verts.append([float(x) for x in parts[1:4]])
        elif parts[0] == "f":
            corners = []
            for token in parts[1:]:
                idx = int(token.split("/")[0])
                if idx == 0:
                    raise ValueError(f"{path}:{lineno}: OBJ indices are 1-based, got 0")
                corners.append(idx - 1 if idx > 0 else len(verts) + idx)
            if len(corners) < 3:
                raise ValueError(f"{path}:{lineno}: face with fewer than 3 corners")
            tris.extend(_fan(corners))

    V = np.array(verts, dtype=np.float64).reshape(-1, 3)
    F = np.array(tris, dtype=np.intp).reshape(-1, 3)
    logger.info("Loaded %d triangles (%d vertices) from %s", len(F), len(V), path)
    return V, F


# ---------------------------------------------------------------------------
# OFF
# ---------------------------------------------------------------------------

def load_off(path: Union[str, Path]) -> _Mesh:
    """Load the vertices and (fan-triangulated) faces of an OFF file."""
    path = Path(path)
    records = [
        line.split("#", 1)[0].split()
        for line in path.read_text(errors="replace").splitlines()
    ]
    records = [r for r in records if r]
    if not records or not records[0][0].endswith("OFF"):
        raise ValueError(f"{path}: missing OFF header")

    # Counts either follow the keyword on the same line or sit on the next one
    if len(records[0]) > 1:
        header, body = records[0][1:], records[1:]
    elif len(records) > 1:
        header, body = records[1], records[2:]
    else:
        raise ValueError(f"{path}: missing OFF counts line")
    n_verts, n_faces = int(header[0]), int(header[1])
    if len(body) < n_verts + n_faces:
        raise ValueError(
            f"{path}: expected {n_verts} vertices and {n_faces} faces, "
            f"found {len(body)} records"
        )

    V = np.array([[float(x) for x in r[:3]] for r in body[:n_verts]],
                 dtype=np.float64).reshape(-1, 3)
    tris: list[tuple[int, int, int]] = []
    for r in body[n_verts:n_verts + n_faces]:
        k = int(r[0])
        if k < 3:
            raise ValueError(f"{path}: face with fewer than 3 corners")
        if len(r) - 1 < k:
            raise ValueError(f"{path}: face lists {len(r) - 1} of its {k} corners")
        tris.extend(_fan([int(i) for i in r[1:1 + k]]))
    F = np.array(tris, dtype=np.intp).reshape(-1, 3)
    logger.info("Loaded %d triangles (%d vertices) from %s", len(F), len(V), path)
    return V, F


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

_LOADERS = {
    ".stl": load_stl,
    ".obj": load_obj,
    ".off": load_off,
}


def load_mesh(path: Union[str, Path]) -> _Mesh:
    """Load a triangle mesh, choosing the reader from the file suffix."""
    path = Path(path)
    loader = _LOADERS.get(path.suffix.lower())
    if loader is None:
        raise ValueError(
            f"unsupported mesh format {path.suffix!r}; expected one of {sorted(_LOADERS)}"
        )
    return loader(path)
