"""
iso2d — Isolines of 2-D Scalar Fields
=====================================

Extracts the level curve ``f(x, y) = iso`` of a scalar field sampled on a
rectangular grid, as a set of points on the curve plus a graph of short
edges joining neighbouring points.

Implemented features
--------------------
- Grid construction: :func:`cartesian_grid`, :func:`symmetric_grid`
- Field sampling: :func:`sample_field` (per node or one vectorised call)
- Sign-change sweeps along both axes: :func:`detect_crossings`
- Bisection with linear correction: :func:`bisect`, :func:`refine_crossing`
- Edge assembly, O(V²) or spatial hash: :func:`connect_vertices`
- One-call queries: :func:`isoline_cartesian`, :func:`extract_isoline`

Quick start
-----------
::

    from iso2d import extract_isoline

    def circle(p, ctx):
        return p[0] ** 2 + p[1] ** 2 - ctx["r"] ** 2

    vertices, edges = extract_isoline(-2, 2, -2, 2, 50, circle, {"r": 1.0})

The context object is never inspected; it is only forwarded to the field.
"""

import logging

from .errors import (
    IsolineError,
    InvalidGridError,
    DegenerateBracketError,
    FieldEvaluationError,
)
from .grid import CartesianGrid, cartesian_grid, symmetric_grid, sample_field
from .crossings import Crossing, have_opposite_signs, detect_crossings
from .refine import DEFAULT_EPS, DEFAULT_MAX_ITER, bisect, linear_correction, refine_crossing
from .segments import build_edges, build_edges_bucketed, connect_vertices
from .isoline import Isoline, collect_vertices, isoline_cartesian, extract_isoline
from .utils import configure_logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Errors
    "IsolineError",
    "InvalidGridError",
    "DegenerateBracketError",
    "FieldEvaluationError",

    # Grid
    "CartesianGrid",
    "cartesian_grid",
    "symmetric_grid",
    "sample_field",

    # Crossings
    "Crossing",
    "have_opposite_signs",
    "detect_crossings",

    # Refinement
    "DEFAULT_EPS",
    "DEFAULT_MAX_ITER",
    "bisect",
    "linear_correction",
    "refine_crossing",

    # Edges
    "build_edges",
    "build_edges_bucketed",
    "connect_vertices",

    # Queries
    "Isoline",
    "collect_vertices",
    "isoline_cartesian",
    "extract_isoline",

    # Logging
    "configure_logging",
]
