"""Contour edges between nearby vertices.

Two vertices are joined when their distance is strictly below the grid-cell
diagonal.  Pairs exactly one diagonal apart are left unconnected.
"""

from __future__ import annotations

import logging
import math
from collections import defaultdict
from typing import Dict, List, Tuple

import numpy as np
import numpy.typing as npt

from .grid import CartesianGrid

logger = logging.getLogger(__name__)

_Array = npt.NDArray[np.floating]
_Edges = npt.NDArray[np.intp]

__all__ = [
    "BUCKETED_THRESHOLD",
    "build_edges",
    "build_edges_bucketed",
    "connect_vertices",
]

# vertex count above which method="auto" switches to the spatial hash
BUCKETED_THRESHOLD = 2048


def _as_points(vertices) -> _Array:
    pts = np.asarray(vertices, dtype=np.float64)
    return pts.reshape(-1, 2)


def _empty_edges() -> _Edges:
    return np.empty((0, 2), dtype=np.intp)


def build_edges(vertices, threshold: float) -> _Edges:
    """All index pairs ``(i, j)``, ``i < j``, closer than *threshold*.

    Plain O(V²) scan, vectorised over ``j``.  Edges are returned in
    lexicographic order as an ``(E, 2)`` integer array.
    """
    pts = _as_points(vertices)
    blocks: List[_Edges] = []
    for i in range(len(pts) - 1):
        rest = pts[i + 1:]
        d = np.hypot(rest[:, 0] - pts[i, 0], rest[:, 1] - pts[i, 1])
        js = np.nonzero(d < threshold)[0] + (i + 1)
        if js.size:
            blocks.append(np.column_stack([np.full(js.size, i, dtype=np.intp), js]))
    if not blocks:
        return _empty_edges()
    return np.concatenate(blocks).astype(np.intp)


def build_edges_bucketed(vertices, threshold: float) -> _Edges:
    """Same result as :func:`build_edges`, using a uniform spatial hash.

    Buckets are ``2 · threshold`` wide so any qualifying pair lands in the
    same or a neighbouring bucket even after rounding of the bucket keys.
    """
    pts = _as_points(vertices)
    if len(pts) < 2 or not threshold > 0.0:
        return _empty_edges()
    if not math.isfinite(threshold):
        return build_edges(pts, threshold)

    size = 2.0 * threshold
    keys = np.floor(pts / size).astype(np.int64)
    buckets: Dict[Tuple[int, int], List[int]] = defaultdict(list)
    for idx, (kx, ky) in enumerate(keys.tolist()):
        buckets[(kx, ky)].append(idx)

    pairs: List[Tuple[int, int]] = []
    for i, (kx, ky) in enumerate(keys.tolist()):
        xi, yi = pts[i]
        for bx in (kx - 1, kx, kx + 1):
            for by in (ky - 1, ky, ky + 1):
                for j in buckets.get((bx, by), ()):
                    if j <= i:
                        continue
                    if np.hypot(pts[j, 0] - xi, pts[j, 1] - yi) < threshold:
                        pairs.append((i, j))

    if not pairs:
        return _empty_edges()
    edges = np.array(pairs, dtype=np.intp)
    order = np.lexsort((edges[:, 1], edges[:, 0]))
    return edges[order]


def connect_vertices(vertices, grid: CartesianGrid, method: str = "auto") -> _Edges:
    """Edges between vertices closer than ``grid.diagonal``.

    Parameters
    ----------
    vertices:
        ``(V, 2)`` vertex coordinates.
    grid:
        The grid the vertices were extracted on.
    method:
        ``"pairwise"``, ``"bucketed"`` or ``"auto"`` (bucketed above
        :data:`BUCKETED_THRESHOLD` vertices).  All give the same edges.
    """
    pts = _as_points(vertices)
    if method == "auto":
        method = "bucketed" if len(pts) > BUCKETED_THRESHOLD else "pairwise"
    if method == "pairwise":
        edges = build_edges(pts, grid.diagonal)
    elif method == "bucketed":
        edges = build_edges_bucketed(pts, grid.diagonal)
    else:
        raise ValueError(f"unknown edge method {method!r}")
    logger.debug("%s scan over %d vertices gave %d edges", method, len(pts), len(edges))
    return edges
