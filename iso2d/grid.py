"""Cartesian grid construction and field sampling."""

from __future__ import annotations

import logging
import math
import operator
from typing import Any, Callable, NamedTuple, Tuple

import numpy as np
import numpy.typing as npt

from .errors import FieldEvaluationError, InvalidGridError

logger = logging.getLogger(__name__)

_Array = npt.NDArray[np.floating]
# field(point, context) -> float, point is a length-2 array (x, y)
FieldFunc = Callable[[_Array, Any], float]

__all__ = [
    "CartesianGrid",
    "FieldFunc",
    "cartesian_grid",
    "symmetric_grid",
    "sample_field",
    "shifted_value",
]


class CartesianGrid(NamedTuple):
    """``nx × ny`` nodes at ``(x0 + i·dx, y0 + j·dy)``."""

    nx: int
    ny: int
    x0: float
    dx: float
    y0: float
    dy: float

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.nx, self.ny)

    @property
    def xs(self) -> _Array:
        """x coordinates of the grid columns, shape ``(nx,)``."""
        return self.x0 + np.arange(self.nx, dtype=np.float64) * self.dx

    @property
    def ys(self) -> _Array:
        """y coordinates of the grid rows, shape ``(ny,)``."""
        return self.y0 + np.arange(self.ny, dtype=np.float64) * self.dy

    @property
    def diagonal(self) -> float:
        """Length of a cell diagonal, ``hypot(dx, dy)``."""
        return float(np.hypot(self.dx, self.dy))

    def points(self) -> _Array:
        """All node coordinates as an ``(nx, ny, 2)`` array (``[i, j] -> (x_i, y_j)``)."""
        X, Y = np.meshgrid(self.xs, self.ys, indexing="ij")
        return np.stack([X, Y], axis=-1)


def cartesian_grid(
    nx: int, ny: int, x0: float, dx: float, y0: float, dy: float
) -> CartesianGrid:
    """Build a :class:`CartesianGrid` from explicit parameters.

    Raises
    ------
    InvalidGridError
        If a node count is not an integer or is smaller than 2, or a step
        is not a positive finite number.
    """
    try:
        nx = operator.index(nx)
        ny = operator.index(ny)
    except TypeError as exc:
        raise InvalidGridError(f"node counts must be integers, got nx={nx!r}, ny={ny!r}") from exc
    if nx < 2 or ny < 2:
        raise InvalidGridError(f"grid needs at least 2 nodes per axis, got nx={nx}, ny={ny}")
    dx = float(dx)
    dy = float(dy)
    if not (0.0 < dx < math.inf and 0.0 < dy < math.inf):
        raise InvalidGridError(f"grid steps must be positive and finite, got dx={dx}, dy={dy}")
    return CartesianGrid(nx, ny, float(x0), dx, float(y0), dy)


def symmetric_grid(x1: float, x2: float, y1: float, y2: float, n: int) -> CartesianGrid:
    """Grid with square cells, centred on ``[x1, x2] × [y1, y2]``.

    The x-axis gets ``n`` nodes (at least 2) spanning ``[x1, x2]`` exactly.
    The y-axis reuses the x step and gets as many nodes as fit, placed
    symmetrically about the midpoint of ``[y1, y2]``.

    Parameters
    ----------
    x1, x2:
        x extent; ``x1`` is the first node.
    y1, y2:
        y extent the y nodes are centred on.
    n:
        Requested number of x nodes.
    """
    n = max(2, operator.index(n))
    dx = (x2 - x1) / (n - 1)
    if not 0.0 < dx < math.inf:
        raise InvalidGridError(f"cannot derive a positive grid step from x range [{x1}, {x2}]")

    span = (y2 - y1) / dx
    if not math.isfinite(span):
        raise InvalidGridError(f"cannot fit y range [{y1}, {y2}] to step {dx}")
    ny = max(2, int(math.floor(span + 0.5)) + 1)
    dy = dx
    y0 = (y1 + y2 - (ny - 1) * dy) / 2.0
    return cartesian_grid(n, ny, x1, dx, y0, dy)


def shifted_value(field: FieldFunc, point: _Array, context: Any, iso: float) -> float:
    """Evaluate ``field(point, context) - iso`` as a Python float.

    Any exception from *field*, or from converting its result to a float,
    is re-raised as :class:`FieldEvaluationError`.
    """
    try:
        value = float(field(point, context))
    except Exception as exc:
        raise FieldEvaluationError(
            f"field evaluation failed at ({float(point[0])}, {float(point[1])}): {exc}", point
        ) from exc
    return value - iso


def sample_field(
    grid: CartesianGrid,
    field: FieldFunc,
    context: Any = None,
    iso: float = 0.0,
    vectorized: bool = False,
) -> _Array:
    """Sample the shifted field ``f(x, y) - iso`` at every node of *grid*.

    Parameters
    ----------
    grid:
        Nodes to evaluate.
    field:
        ``field(point, context) -> float``.  *context* is passed through
        untouched.
    context:
        Caller-owned data forwarded to every call.
    iso:
        Iso-value subtracted from each sample.
    vectorized:
        When true, call *field* once with the ``(nx, ny, 2)`` array from
        :meth:`CartesianGrid.points` instead of once per node.  It must
        return an array of shape ``(nx, ny)``.

    Returns
    -------
    numpy.ndarray
        Shape ``(nx, ny)`` float64 buffer, ``samples[i, j]`` belongs to
        node ``(x_i, y_j)``.
    """
    if vectorized:
        pts = grid.points()
        try:
            samples = np.asarray(field(pts, context), dtype=np.float64)
        except Exception as exc:
            raise FieldEvaluationError(f"vectorized field evaluation failed: {exc}") from exc
        if samples.shape != grid.shape:
            raise FieldEvaluationError(
                f"vectorized field returned shape {samples.shape}, expected {grid.shape}"
            )
        logger.debug("sampled %d x %d nodes in one vectorized call", grid.nx, grid.ny)
        return samples - iso

    xs = grid.xs
    ys = grid.ys
    samples = np.empty(grid.shape, dtype=np.float64)
    for i in range(grid.nx):
        for j in range(grid.ny):
            samples[i, j] = shifted_value(field, np.array([xs[i], ys[j]]), context, iso)
    logger.debug("sampled %d x %d nodes", grid.nx, grid.ny)
    return samples
