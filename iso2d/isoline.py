"""Isoline extraction on a Cartesian grid.

The query runs in a fixed pipeline::

    sample_field -> detect_crossings -> collect_vertices -> connect_vertices

and returns an :class:`Isoline` with the refined crossing points and the
short edges joining neighbouring points.  The edges form a graph, not an
ordered polyline, and a contour may be reported as several components.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, NamedTuple

import numpy as np
import numpy.typing as npt

from .crossings import Crossing, detect_crossings
from .grid import CartesianGrid, FieldFunc, cartesian_grid, sample_field, symmetric_grid
from .refine import DEFAULT_EPS, DEFAULT_MAX_ITER, check_tolerances, refine_crossing
from .segments import connect_vertices

logger = logging.getLogger(__name__)

_Array = npt.NDArray[np.floating]
_Edges = npt.NDArray[np.intp]

__all__ = ["Isoline", "collect_vertices", "isoline_cartesian", "extract_isoline"]


class Isoline(NamedTuple):
    """Result of an isoline query.

    ``vertices`` has shape ``(V, 2)``; ``edges`` has shape ``(E, 2)`` and
    holds index pairs ``(i, j)`` with ``i < j``.  Both may be empty.
    """

    vertices: _Array
    edges: _Edges


def collect_vertices(
    crossings: Iterable[Crossing],
    field: FieldFunc,
    context: Any = None,
    iso: float = 0.0,
    eps: float = DEFAULT_EPS,
    max_iter: int = DEFAULT_MAX_ITER,
) -> _Array:
    """Refine each crossing in turn; returns a ``(V, 2)`` array in crossing order."""
    points = [refine_crossing(c, field, context, iso, eps, max_iter) for c in crossings]
    if not points:
        return np.empty((0, 2), dtype=np.float64)
    return np.array(points, dtype=np.float64)


def isoline_cartesian(
    grid: CartesianGrid,
    field: FieldFunc,
    context: Any = None,
    iso: float = 0.0,
    *,
    eps: float = DEFAULT_EPS,
    max_iter: int = DEFAULT_MAX_ITER,
    vectorized: bool = False,
    method: str = "auto",
) -> Isoline:
    """Extract the isoline ``field(p, context) == iso`` on *grid*.

    Parameters
    ----------
    grid:
        Sampling grid; re-validated, so a hand-built :class:`CartesianGrid`
        with fewer than 2 nodes per axis raises :class:`InvalidGridError`.
    field:
        ``field(point, context) -> float`` where *point* is a length-2
        array ``(x, y)``.
    context:
        Caller-owned data passed unchanged to every *field* call.
    iso:
        Level to extract.
    eps:
        Bisection stops once the bracket is no wider than *eps*.
    max_iter:
        Cap on bisection steps per crossing.
    vectorized:
        Sample the grid with one array call to *field* (see
        :func:`~iso2d.grid.sample_field`).  Bisection always calls *field*
        per point.
    method:
        Edge builder, see :func:`~iso2d.segments.connect_vertices`.

    Returns
    -------
    Isoline
        ``(vertices, edges)``.  Empty when *iso* is not crossed on the grid.

    Raises
    ------
    InvalidGridError, DegenerateBracketError, FieldEvaluationError
    """
    check_tolerances(eps, max_iter)
    grid = cartesian_grid(*grid)

    samples = sample_field(grid, field, context, iso, vectorized=vectorized)
    crossings = detect_crossings(grid, samples)
    vertices = collect_vertices(crossings, field, context, iso, eps, max_iter)
    edges = connect_vertices(vertices, grid, method=method)

    logger.debug(
        "isoline %r on %dx%d grid: %d vertices, %d edges",
        iso, grid.nx, grid.ny, len(vertices), len(edges),
    )
    return Isoline(vertices, edges)


def extract_isoline(
    x1: float,
    x2: float,
    y1: float,
    y2: float,
    n: int,
    field: FieldFunc,
    context: Any = None,
    iso: float = 0.0,
    **kwargs: Any,
) -> Isoline:
    """Extract an isoline over ``[x1, x2] × [y1, y2]`` at resolution *n*.

    The grid comes from :func:`~iso2d.grid.symmetric_grid`; keyword
    arguments are forwarded to :func:`isoline_cartesian`.
    """
    grid = symmetric_grid(x1, x2, y1, y2, n)
    return isoline_cartesian(grid, field, context, iso, **kwargs)
