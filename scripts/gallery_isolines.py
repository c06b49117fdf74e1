"""Render the isoline edge graphs of a few analytic fields on one page.

Usage::

    python scripts/gallery_isolines.py                   # saves gallery_isolines.png
    python scripts/gallery_isolines.py --out my_file.png # custom output path

Requirements: numpy, matplotlib
"""
from __future__ import annotations

import argparse
import os
import sys

# Ensure the repo root (parent of scripts/) is importable regardless of cwd
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.collections import LineCollection

from iso2d import IsolineError, isoline_cartesian, symmetric_grid

# ---------------------------------------------------------------------------
# Field catalogue — (label, field, context, iso)
# ---------------------------------------------------------------------------

def _make_fields() -> list[tuple[str, object, object, float]]:
    def circle(p, r):
        return np.hypot(p[..., 0], p[..., 1]) - r

    def ellipse(p, ab):
        return (p[..., 0] / ab[0]) ** 2 + (p[..., 1] / ab[1]) ** 2

    def square_band(p, t):
        return -2.0 * t * (np.cos(np.pi * p[..., 0]) + np.cos(np.pi * p[..., 1]))

    def saddle(p, ctx):
        return p[..., 0] ** 2 - p[..., 1] ** 2

    def ripples(p, k):
        return np.sin(k * p[..., 0]) * np.cos(k * p[..., 1])

    def two_wells(p, ctx):
        d1 = (p[..., 0] - 0.4) ** 2 + p[..., 1] ** 2
        d2 = (p[..., 0] + 0.4) ** 2 + p[..., 1] ** 2
        return np.exp(-8.0 * d1) + np.exp(-8.0 * d2)

    return [
        ("circle r=0.6",        circle,      0.6,         0.0),
        ("ellipse",             ellipse,     (0.8, 0.4),  1.0),
        ("tight binding, E=-1", square_band, 1.0,         -1.0),
        ("saddle",              saddle,      None,        0.05),
        ("ripples",             ripples,     6.0,         0.3),
        ("two wells",           two_wells,   None,        0.5),
    ]


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

_N = 80


def render_gallery(fields, out_path: str, ncols: int = 3) -> None:
    nrows = (len(fields) + ncols - 1) // ncols
    fig, axes = plt.subplots(
        nrows, ncols,
        figsize=(ncols * 3.2, nrows * 3.2),
        facecolor="#111111",
    )
    axes = np.asarray(axes).ravel()
    grid = symmetric_grid(-1.0, 1.0, -1.0, 1.0, _N)

    for ax, (label, field, ctx, level) in zip(axes, fields):
        ax.set_facecolor("#111111")
        ax.set_xticks([])
        ax.set_yticks([])
        ax.set_xlim(-1, 1)
        ax.set_ylim(-1, 1)
        ax.set_aspect("equal")
        for spine in ax.spines.values():
            spine.set_edgecolor("#444444")

        try:
            vertices, edges = isoline_cartesian(grid, field, ctx, level, vectorized=True)
        except IsolineError as exc:
            ax.set_title(label, color="white", fontsize=7, pad=3)
            ax.text(0.5, 0.5, "extraction error", ha="center", va="center",
                    color="red", transform=ax.transAxes, fontsize=8)
            print(f"{label}: {exc}")
            continue

        ax.set_title(f"{label}  ({len(vertices)} v, {len(edges)} e)",
                     color="white", fontsize=7, pad=3)
        if len(edges):
            ax.add_collection(LineCollection(vertices[edges], colors="white", linewidths=0.8))

    for ax in axes[len(fields):]:
        ax.set_visible(False)

    fig.suptitle("iso2d — Isoline Gallery", color="white", fontsize=13, y=1.002)
    plt.tight_layout(pad=0.4)
    fig.savefig(out_path, dpi=200, bbox_inches="tight", facecolor=fig.get_facecolor())
    plt.close(fig)
    print(f"Saved: {out_path}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Render isolines of sample fields to a PNG gallery.")
    parser.add_argument("--out", default="gallery_isolines.png", help="Output PNG path")
    parser.add_argument("--cols", type=int, default=3, help="Number of columns (default 3)")
    args = parser.parse_args()

    render_gallery(_make_fields(), args.out, ncols=args.cols)


if __name__ == "__main__":
    main()
