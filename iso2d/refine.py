"""Root refinement of a bracketed zero crossing.

Bisection halves the bracket until it is no wider than ``eps`` (or the
iteration budget runs out), then a single linear interpolation between the
two final endpoints gives the root estimate.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Tuple

import numpy as np

from .crossings import AXIS_X, Crossing, have_opposite_signs
from .errors import DegenerateBracketError
from .grid import FieldFunc, shifted_value

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_EPS",
    "DEFAULT_MAX_ITER",
    "check_tolerances",
    "linear_correction",
    "bisect",
    "refine_crossing",
]

DEFAULT_EPS = 1e-6
# 2048 halvings exhaust any finite float64 interval
DEFAULT_MAX_ITER = 2048


def check_tolerances(eps: float, max_iter: int) -> None:
    """Raise :class:`ValueError` unless ``eps >= 0`` and ``max_iter >= 0``."""
    if not eps >= 0.0:
        raise ValueError(f"eps must be non-negative, got {eps!r}")
    if max_iter < 0:
        raise ValueError(f"max_iter must be non-negative, got {max_iter!r}")


def linear_correction(a: float, b: float, va: float, vb: float) -> float:
    """Zero of the straight line through ``(a, va)`` and ``(b, vb)``.

    Computed as ``c·b + (1 − c)·a`` with ``c = va / (va − vb)``.  Both values
    are assumed to have opposite signs.

    Raises
    ------
    DegenerateBracketError
        If ``va == vb``.
    """
    if va == vb:
        raise DegenerateBracketError(
            f"degenerate bracket [{a!r}, {b!r}]: both endpoint values equal {va!r}",
            bracket=(a, b, va, vb),
        )
    c = va / (va - vb)
    return c * b + (1.0 - c) * a


def bisect(
    fn: Callable[[float], float],
    a: float,
    b: float,
    va: float,
    vb: float,
    eps: float = DEFAULT_EPS,
    max_iter: int = DEFAULT_MAX_ITER,
) -> float:
    """Locate the zero of *fn* inside the bracket ``[a, b]``.

    Parameters
    ----------
    fn:
        One-dimensional function, ``fn(t) -> float``.
    a, b:
        Bracket endpoints, ``a < b`` for the loop to run.
    va, vb:
        ``fn(a)`` and ``fn(b)``; they must have opposite signs.
    eps:
        Stop once ``b - a <= eps``.
    max_iter:
        Maximum number of midpoint evaluations.

    Returns
    -------
    float
        Linear interpolation between the final bracket endpoints.
    """
    check_tolerances(eps, max_iter)
    remaining = max_iter
    while b - a > eps and remaining > 0:
        remaining -= 1
        mid = (a + b) / 2.0
        vmid = fn(mid)
        if have_opposite_signs(vmid, vb):
            a, va = mid, vmid
        else:
            b, vb = mid, vmid
    if remaining == 0 and b - a > eps:
        logger.debug("bisection hit max_iter=%d with width %g", max_iter, b - a)
    return linear_correction(a, b, va, vb)


def refine_crossing(
    crossing: Crossing,
    field: FieldFunc,
    context: Any = None,
    iso: float = 0.0,
    eps: float = DEFAULT_EPS,
    max_iter: int = DEFAULT_MAX_ITER,
) -> Tuple[float, float]:
    """Refine *crossing* to a point ``(x, y)`` on the isoline."""
    fixed = crossing.fixed
    if crossing.axis == AXIS_X:
        def along(t: float) -> float:
            return shifted_value(field, np.array([t, fixed]), context, iso)
    else:
        def along(t: float) -> float:
            return shifted_value(field, np.array([fixed, t]), context, iso)

    try:
        t = bisect(along, crossing.a, crossing.b, crossing.va, crossing.vb, eps, max_iter)
    except DegenerateBracketError as exc:
        raise DegenerateBracketError(
            f"crossing at grid node {crossing.index} (axis {crossing.axis}): {exc}",
            bracket=crossing,
        ) from exc

    if crossing.axis == AXIS_X:
        return (t, fixed)
    return (fixed, t)
