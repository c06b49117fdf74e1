"""Sign-change detection along grid lines.

Zero counts as non-negative: two adjacent zeros are not a crossing, but a
zero next to a negative value is.
"""

from __future__ import annotations

import logging
from typing import List, NamedTuple, Tuple

import numpy as np
import numpy.typing as npt

from .errors import InvalidGridError
from .grid import CartesianGrid

logger = logging.getLogger(__name__)

_Array = npt.NDArray[np.floating]

__all__ = [
    "AXIS_X",
    "AXIS_Y",
    "Crossing",
    "have_opposite_signs",
    "opposite_sign_mask",
    "detect_crossings",
]

AXIS_X = 0
AXIS_Y = 1


class Crossing(NamedTuple):
    """A grid-line segment whose end samples have opposite signs.

    ``axis`` is the coordinate that varies along the segment (``AXIS_X`` or
    ``AXIS_Y``); ``fixed`` is the value of the other one.  ``a`` and ``b``
    are the varying coordinate at the two nodes, ``va`` and ``vb`` the
    shifted samples there.  ``index`` is the grid index ``(i, j)`` of the
    first node.
    """

    axis: int
    fixed: float
    a: float
    b: float
    va: float
    vb: float
    index: Tuple[int, int]

    def endpoints(self) -> Tuple[Tuple[float, float], Tuple[float, float]]:
        """The two node coordinates as ``(x, y)`` pairs."""
        if self.axis == AXIS_X:
            return (self.a, self.fixed), (self.b, self.fixed)
        return (self.fixed, self.a), (self.fixed, self.b)


def have_opposite_signs(v1: float, v2: float) -> bool:
    return (v1 >= 0.0 and v2 < 0.0) or (v1 < 0.0 and v2 >= 0.0)


def opposite_sign_mask(a: _Array, b: _Array) -> npt.NDArray[np.bool_]:
    """Element-wise :func:`have_opposite_signs`."""
    return ((a >= 0.0) & (b < 0.0)) | ((a < 0.0) & (b >= 0.0))


def detect_crossings(grid: CartesianGrid, samples: _Array) -> List[Crossing]:
    """Return every sign-changing pair of adjacent nodes.

    All x-direction crossings come first, then all y-direction ones.  Inside
    each sweep the order is ``i`` outer, ``j`` inner.
    """
    samples = np.asarray(samples, dtype=np.float64)
    if samples.shape != grid.shape:
        raise InvalidGridError(
            f"sample buffer has shape {samples.shape}, grid expects {grid.shape}"
        )

    xs = grid.xs
    ys = grid.ys
    crossings: List[Crossing] = []

    # x-sweep: (i, j) -> (i + 1, j)
    mask = opposite_sign_mask(samples[:-1, :], samples[1:, :])
    for i, j in zip(*np.nonzero(mask)):
        i, j = int(i), int(j)
        crossings.append(Crossing(
            AXIS_X, float(ys[j]), float(xs[i]), float(xs[i] + grid.dx),
            float(samples[i, j]), float(samples[i + 1, j]), (i, j),
        ))
    n_x = len(crossings)

    # y-sweep: (i, j) -> (i, j + 1)
    mask = opposite_sign_mask(samples[:, :-1], samples[:, 1:])
    for i, j in zip(*np.nonzero(mask)):
        i, j = int(i), int(j)
        crossings.append(Crossing(
            AXIS_Y, float(xs[i]), float(ys[j]), float(ys[j] + grid.dy),
            float(samples[i, j]), float(samples[i, j + 1]), (i, j),
        ))

    logger.debug("found %d x-crossings and %d y-crossings", n_x, len(crossings) - n_x)
    return crossings
