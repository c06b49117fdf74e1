"""Exception types raised by :mod:`iso2d`.

Every failure aborts the whole query; there is no partial-result mode.
An empty vertex list is a valid result, never an error.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

__all__ = [
    "IsolineError",
    "InvalidGridError",
    "DegenerateBracketError",
    "FieldEvaluationError",
]


class IsolineError(Exception):
    """Base class for all isoline extraction errors."""


class InvalidGridError(IsolineError, ValueError):
    """Grid parameters cannot bracket a sign change (``nx < 2`` or ``ny < 2``)."""


class DegenerateBracketError(IsolineError, ArithmeticError):
    """Linear correction on a bracket whose endpoint values are equal.

    Raised when ``va == vb``: either the field returned inconsistent values
    between sampling and bisection, or it is locally constant at the crossing.
    """

    def __init__(self, message: str, bracket: Any = None) -> None:
        super().__init__(message)
        self.bracket = bracket


class FieldEvaluationError(IsolineError, RuntimeError):
    """The field callback raised while being evaluated at :attr:`point`.

    The original exception is chained as ``__cause__``.
    """

    def __init__(self, message: str, point: Optional[Sequence[float]] = None) -> None:
        super().__init__(message)
        self.point = None if point is None else tuple(float(c) for c in point)
