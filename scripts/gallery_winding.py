"""Render winding number fields of a few polylines and meshes on one page.

2D boundaries are sampled directly; 3D meshes are shown as a mid-height
z-slice.  The white contour is the w = 0.5 inside/outside threshold.

Usage::

    python scripts/gallery_winding.py                   # saves gallery_winding.png
    python scripts/gallery_winding.py --out my_file.png # custom output path
    python scripts/gallery_winding.py --res 128         # faster, coarser

Requirements: numpy, matplotlib
"""
from __future__ import annotations

import argparse
import logging
import os
import sys

# Ensure the repo root (parent of scripts/) is importable regardless of cwd
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import matplotlib.pyplot as plt
import numpy as np

from winding import WindingField, sample_winding_2d
from winding.logging_config import setup_logging

_BOUNDS = ((-1.0, 1.0), (-1.0, 1.0))
_EXTENT = [-1, 1, -1, 1]


# ---------------------------------------------------------------------------
# Boundary catalogue  (label, field)
# ---------------------------------------------------------------------------

def _polyline(points: np.ndarray, closed: bool = True) -> WindingField:
    n = len(points)
    starts = np.arange(n if closed else n - 1)
    E = np.stack([starts, (starts + 1) % n], axis=-1)
    return WindingField(points, E)


def _circle(r: float, n: int = 96, turns: int = 1, start: float = 0.0, sweep: float = 2 * np.pi):
    t = start + np.linspace(0.0, sweep * turns, n * turns, endpoint=False)
    return np.stack([r * np.cos(t), r * np.sin(t)], axis=-1)


def _cube(h: float = 0.6) -> tuple[np.ndarray, np.ndarray]:
    V = np.array([
        [-h, -h, -h], [h, -h, -h], [h, h, -h], [-h, h, -h],
        [-h, -h, h], [h, -h, h], [h, h, h], [-h, h, h],
    ])
    F = np.array([
        (0, 2, 1), (0, 3, 2), (4, 5, 6), (4, 6, 7),
        (0, 4, 7), (0, 7, 3), (1, 2, 6), (1, 6, 5),
        (0, 1, 5), (0, 5, 4), (3, 7, 6), (3, 6, 2),
    ])
    return V, F


class _Slice:
    """Present a 3D field as a 2D one on the plane z = *z*."""

    def __init__(self, field: WindingField, z: float = 0.0) -> None:
        self.field = field
        self.z = z
        self.dim = 2

    def __call__(self, p: np.ndarray) -> np.ndarray:
        q = np.concatenate([p, np.full(p.shape[:-1] + (1,), self.z)], axis=-1)
        return self.field(q)


def _make_fields() -> list[tuple[str, object]]:
    V, F = _cube()
    cube = WindingField(V, F)
    # Drop the +X face and flip one -Z triangle
    holed = WindingField(V, np.delete(F, [6, 7], axis=0))
    F_bad = F.copy()
    F_bad[0] = F_bad[0, ::-1]
    flipped_tri = WindingField(V, F_bad)

    star = np.array([
        [np.cos(a) * 0.8, np.sin(a) * 0.8]
        for a in np.pi / 2 + np.arange(5) * 4 * np.pi / 5
    ])

    return [
        ("closed circle",          _polyline(_circle(0.7))),
        ("open arc (3/4)",         _polyline(_circle(0.7, sweep=1.5 * np.pi), closed=False)),
        ("wound twice",            _polyline(_circle(0.7, turns=2))),
        ("pentagram",              _polyline(star)),
        ("clockwise circle",       _polyline(_circle(0.7)[::-1])),
        ("cube  z=0",              _Slice(cube)),
        ("cube missing +X",        _Slice(holed)),
        ("cube, one face flipped", _Slice(flipped_tri, z=-0.3)),
    ]


def _sample(field, res: int) -> np.ndarray:
    if isinstance(field, WindingField):
        return sample_winding_2d(field, _BOUNDS, (res, res))
    (x0, x1), (y0, y1) = _BOUNDS
    xs = np.linspace(x0, x1, res, endpoint=False) + (x1 - x0) / (2.0 * res)
    ys = np.linspace(y0, y1, res, endpoint=False) + (y1 - y0) / (2.0 * res)
    Y, X = np.meshgrid(ys, xs, indexing="ij")
    return field(np.stack([X, Y], axis=-1))


def render_gallery(fields: list[tuple[str, object]], out_path: str, res: int, ncols: int = 4) -> None:
    nrows = (len(fields) + ncols - 1) // ncols
    fig, axes = plt.subplots(
        nrows, ncols,
        figsize=(ncols * 3.2, nrows * 3.2),
        facecolor="#111111",
    )
    axes = np.asarray(axes).ravel()

    for ax, (label, field) in zip(axes, fields):
        w = _sample(field, res)
        ax.set_facecolor("#111111")
        ax.set_xticks([])
        ax.set_yticks([])
        ax.set_title(label, color="white", fontsize=8, pad=3)
        for spine in ax.spines.values():
            spine.set_edgecolor("#444444")

        lim = max(np.nanmax(np.abs(w)), 1.0)
        ax.imshow(w, origin="lower", extent=_EXTENT,
                  cmap="RdBu_r", vmin=-lim, vmax=lim, interpolation="bilinear")
        if np.nanmin(w) < 0.5 < np.nanmax(w):
            ax.contour(w, levels=[0.5], colors="white", linewidths=1.0, extent=_EXTENT)

    # Hide unused axes
    for ax in axes[len(fields):]:
        ax.set_visible(False)

    fig.suptitle("winding — Generalized Winding Number Gallery", color="white",
                 fontsize=13, y=1.002)
    plt.tight_layout(pad=0.4)
    fig.savefig(out_path, dpi=200, bbox_inches="tight", facecolor=fig.get_facecolor())
    plt.close(fig)
    print(f"Saved: {out_path}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Render winding number fields to a PNG gallery.")
    parser.add_argument("--out", default="gallery_winding.png", help="Output PNG path")
    parser.add_argument("--cols", type=int, default=4, help="Number of columns (default 4)")
    parser.add_argument("--res", type=int, default=256, help="Pixels per side (default 256)")
    parser.add_argument("--verbose", action="store_true", help="Log engine dispatch decisions")
    args = parser.parse_args()

    setup_logging(logging.DEBUG if args.verbose else logging.INFO)
    render_gallery(_make_fields(), args.out, args.res, ncols=args.cols)


if __name__ == "__main__":
    main()
