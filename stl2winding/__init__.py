"""stl2winding — mesh files to generalized winding number fields (pure numpy).

Reads STL / OBJ / OFF triangle meshes into indexed ``(V, F)`` arrays and
binds them to :class:`winding.WindingField` for inside/outside queries.

Quick start
-----------
>>> from stl2winding import sample_winding_from_stl
>>> w = sample_winding_from_stl(
...     "my_mesh.stl",
...     bounds=((0, 1), (0, 1), (0, 1)),
...     resolution=(32, 32, 32),
... )
>>> w.shape
(32, 32, 32)

No watertight requirement
-------------------------
Ray-parity sign tests break near holes and non-manifold edges.  The
winding number instead varies smoothly across gaps, so thresholding at 0.5
still gives a sensible inside/outside split for imperfect scans and CAD
exports.

Performance
-----------
Complexity is O(F × N) where F = number of triangles and N = number of
query points, split over threads along N.  For production workloads a
hierarchical (Barnes–Hut) evaluation would be necessary.
"""

from .geometry import mesh_file_to_field, sample_winding_from_stl, stl_to_field
from .mesh_io import load_mesh, load_obj, load_off, load_stl

__all__ = [
    "load_stl",
    "load_obj",
    "load_off",
    "load_mesh",
    "stl_to_field",
    "mesh_file_to_field",
    "sample_winding_from_stl",
]
