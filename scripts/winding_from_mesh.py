"""Sample the winding number of a mesh file on a uniform grid.

Reads an STL / OBJ / OFF triangle mesh, evaluates the generalized winding
number at the cell centres of a grid padded around the mesh bounding box,
and writes the ``(nz, ny, nx)`` array to ``.npy``.  Optionally saves a
mid-Z slice as a PNG (needs matplotlib).

Usage
-----
python scripts/winding_from_mesh.py bunny.obj                  # --res 32
python scripts/winding_from_mesh.py part.stl --res 64 --png part.png
python scripts/winding_from_mesh.py part.off --workers 1       # single thread

Outputs
-------
<mesh>_winding.npy  — (nz, ny, nx) float64 winding numbers
<png>               — optional mid-Z heatmap with the w = 0.5 contour
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

# Ensure the repo root (parent of scripts/) is importable regardless of cwd
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np

from stl2winding import mesh_file_to_field
from winding import WindingConfig, sample_winding_3d, save_npy
from winding.logging_config import setup_logging

logger = logging.getLogger("winding.scripts.winding_from_mesh")


def _padded_bounds(V: np.ndarray, pad: float):
    lo, hi = V.min(axis=0), V.max(axis=0)
    margin = pad * float(np.max(hi - lo))
    return tuple((float(a - margin), float(b + margin)) for a, b in zip(lo, hi))


def _save_slice_png(w: np.ndarray, bounds, out: Path) -> None:
    import matplotlib.pyplot as plt

    (x0, x1), (y0, y1), _ = bounds
    mid = w[w.shape[0] // 2]
    fig, ax = plt.subplots(figsize=(5, 5))
    im = ax.imshow(mid, origin="lower", extent=[x0, x1, y0, y1], cmap="RdBu_r",
                   vmin=-1.0, vmax=1.0)
    if np.nanmin(mid) < 0.5 < np.nanmax(mid):
        ax.contour(mid, levels=[0.5], colors="k", linewidths=1.0, extent=[x0, x1, y0, y1])
    fig.colorbar(im, ax=ax, label="winding number")
    ax.set_title("mid-Z slice")
    fig.savefig(out, dpi=150, bbox_inches="tight")
    plt.close(fig)
    logger.info("Saved slice to %s", out)


def main() -> None:
    parser = argparse.ArgumentParser(description="Mesh file → winding number grid")
    parser.add_argument("mesh", type=Path, help="Path to .stl, .obj or .off file")
    parser.add_argument(
        "--res", type=int, default=32,
        help="Cubic grid resolution (default 32)"
    )
    parser.add_argument(
        "--pad", type=float, default=0.1,
        help="Grid padding as a fraction of the largest bbox side (default 0.1)"
    )
    parser.add_argument("--out", type=Path, default=None, help="Output .npy path")
    parser.add_argument("--png", type=Path, default=None, help="Optional mid-Z slice PNG")
    parser.add_argument("--workers", type=int, default=None, help="Thread count (default: all CPUs)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    if not args.mesh.exists():
        logger.error("Mesh file not found: %s", args.mesh)
        sys.exit(1)

    config = WindingConfig.from_env()
    if args.workers is not None:
        config = config.with_overrides(max_workers=args.workers)

    field = mesh_file_to_field(args.mesh, config=config)
    if len(field.faces) == 0:
        logger.error("No triangles in %s", args.mesh)
        sys.exit(1)

    bounds = _padded_bounds(field.vertices, args.pad)
    logger.info("Sampling %s on a %d^3 grid over %s", field, args.res, bounds)
    w = sample_winding_3d(field, bounds, (args.res, args.res, args.res))

    out = args.out or args.mesh.with_name(args.mesh.stem + "_winding.npy")
    save_npy(str(out), w)
    logger.info("Saved %s  (inside fraction %.3f)", out, float(np.mean(w > 0.5)))

    if args.png is not None:
        _save_slice_png(w, bounds, args.png)


if __name__ == "__main__":
    main()
