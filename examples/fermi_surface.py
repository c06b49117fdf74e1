"""Fermi surface cross-section of a simple-cubic tight-binding band.

Demonstrates: symmetric_grid, isoline_cartesian, configure_logging
Output:       text dump on stdout (or --out), optional PNG (--png)

Band:  E(k) = -2 t (cos kx a + cos ky a + cos kz a), evaluated at kz = 0
Level: E(k) = mu, over the first Brillouin zone [-pi/a, pi/a]^2

Text format::

    # <n_vertices> <n_edges>
    x y s          one line per vertex, s = sin(4 atan2(ky, kx))
    i j            one line per edge

Usage::

    python examples/fermi_surface.py
    python examples/fermi_surface.py --mu -1.0 --n 200 --png fermi.png
"""
from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Optional, TextIO

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np

from iso2d import Isoline, configure_logging, isoline_cartesian, symmetric_grid

LATTICE_CONSTANT = 1.0

logger = logging.getLogger("iso2d.examples.fermi_surface")


def band_energy(k: np.ndarray, params: dict) -> float:
    """Simple-cubic band at the 3-D wave vector *k*."""
    a = LATTICE_CONSTANT
    return -2.0 * params["t"] * (np.cos(k[0] * a) + np.cos(k[1] * a) + np.cos(k[2] * a))


def band_kz0(k: np.ndarray, params: dict) -> float:
    return band_energy((k[0], k[1], 0.0), params)


def d_wave_weight(k) -> float:
    """``sin(4·atan2(ky, kx))``, defined as 0 on the ky axis."""
    if abs(k[0]) < 1e-6:
        return 0.0
    return float(np.sin(4.0 * np.arctan2(k[1], k[0])))


def write_isoline(stream: TextIO, iso: Isoline) -> None:
    vertices, edges = iso
    stream.write(f"# {len(vertices)} {len(edges)}\n")
    for v in vertices:
        stream.write(f"{v[0]:.10g} {v[1]:.10g} {d_wave_weight(v):.10g}\n")
    for i, j in edges:
        stream.write(f"{i} {j}\n")


def _render_png(iso: Isoline, k0: float, out_path: str, title: str = "") -> None:
    try:
        import matplotlib.pyplot as plt
        from matplotlib.collections import LineCollection
    except ImportError:
        print("  matplotlib not available, skipping PNG")
        return

    vertices, edges = iso
    fig, ax = plt.subplots(figsize=(5, 5), facecolor="#111111")
    ax.set_facecolor("#111111")
    if len(edges):
        ax.add_collection(LineCollection(vertices[edges], colors="white", linewidths=0.8))
    if len(vertices):
        weights = [d_wave_weight(v) for v in vertices]
        ax.scatter(vertices[:, 0], vertices[:, 1], c=weights, cmap="coolwarm",
                   s=4, vmin=-1.0, vmax=1.0, zorder=3)
    ax.set_xlim(-k0, k0)
    ax.set_ylim(-k0, k0)
    ax.set_aspect("equal")
    ax.set_title(title, color="white", fontsize=10)
    ax.tick_params(colors="#888888")
    fig.savefig(out_path, dpi=150, bbox_inches="tight", facecolor=fig.get_facecolor())
    plt.close(fig)
    print(f"  Saved: {out_path}")


def main(argv: Optional[list] = None) -> None:
    parser = argparse.ArgumentParser(description="Fermi surface of a simple-cubic band at kz = 0.")
    parser.add_argument("--t", type=float, default=1.0, help="hopping amplitude (default 1.0)")
    parser.add_argument("--mu", type=float, default=0.0, help="chemical potential (default 0.0)")
    parser.add_argument("--n", type=int, default=100, help="grid nodes along kx (default 100)")
    parser.add_argument("--eps", type=float, default=1e-6, help="bisection tolerance")
    parser.add_argument("--out", default=None, help="write the text dump here instead of stdout")
    parser.add_argument("--png", default=None, help="also render the contour to this PNG")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    args = parser.parse_args(argv)

    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)

    params = {"t": args.t}
    k0 = np.pi / LATTICE_CONSTANT
    grid = symmetric_grid(-k0, k0, -k0, k0, args.n)
    iso = isoline_cartesian(grid, band_kz0, params, args.mu, eps=args.eps)
    logger.info("mu=%g: %d vertices, %d edges", args.mu, len(iso.vertices), len(iso.edges))

    if args.out is None:
        write_isoline(sys.stdout, iso)
    else:
        with open(args.out, "w") as fh:
            write_isoline(fh, iso)

    if args.png:
        _render_png(iso, k0, args.png, title=f"E(k) = {args.mu:g},  kz = 0")


if __name__ == "__main__":
    main()
