"""
Pearson product-moment correlation with a significance gate.

    r = (N Sxy - Sx Sy) / sqrt((N Sxx - Sx^2) (N Syy - Sy^2))

Two outcomes replace r with 0 and attach a message:

    - the denominator is exactly zero (one series is constant)
    - the significance gate is on and |r| is below
      STRONG_CORRELATION_THRESHOLD

Callers that want the raw coefficient pass significance_gate=False or
read CorrelationResult.raw_r.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray

from pycurvefit.core.exceptions import CorrelationUndefinedError
from pycurvefit.core.compute.tolerances import STRONG_CORRELATION_THRESHOLD


DIVISION_BY_ZERO = "Division by zero"
NO_STRONG_DEPENDENCY = "No strong linear dependency detected."


@dataclass(frozen=True)
class CorrelationResult:
    """
    Outcome of a Pearson correlation.

    Attributes:
        r: Reported coefficient (0.0 when undefined or gated)
        message: Diagnostic text, empty when r is the true value
        raw_r: Ungated coefficient, None when undefined
        gated: True when the significance gate suppressed raw_r
    """
    r: float
    message: str
    raw_r: float | None
    gated: bool = False

    @property
    def is_defined(self) -> bool:
        return self.raw_r is not None

    def __iter__(self):
        # Allows `r, message = pearson_correlation(x, y)`
        return iter((self.r, self.message))


def pearson_from_sums(
    x: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
    *,
    significance_gate: bool = True,
    threshold: float = STRONG_CORRELATION_THRESHOLD,
    strict: bool = False,
) -> CorrelationResult:
    """
    Compute Pearson's r from raw sums of validated samples.

    Args:
        x: First series (n,)
        y: Second series (n,)
        significance_gate: Report r = 0 when |r| < threshold
        threshold: Gate threshold on |r|
        strict: Raise instead of returning the zero-denominator result

    Returns:
        CorrelationResult

    Raises:
        CorrelationUndefinedError: If strict and the denominator is zero
    """
    n = float(x.shape[0])
    sum_x = float(np.sum(x))
    sum_y = float(np.sum(y))
    sum_xy = float(np.sum(x * y))
    sum_xx = float(np.sum(x * x))
    sum_yy = float(np.sum(y * y))

    numerator = n * sum_xy - sum_x * sum_y
    radicand = (n * sum_xx - sum_x * sum_x) * (n * sum_yy - sum_y * sum_y)
    # Rounding can push a zero-variance product slightly negative
    denominator = float(np.sqrt(max(radicand, 0.0)))
    # A constant series leaves round-off in the sums; treat it as exact zero
    if np.ptp(x) == 0.0 or np.ptp(y) == 0.0:
        denominator = 0.0

    if denominator == 0.0:
        if strict:
            raise CorrelationUndefinedError(
                "Pearson correlation undefined: zero denominator "
                "(x or y has no variation)",
                denominator=denominator,
            )
        return CorrelationResult(r=0.0, message=DIVISION_BY_ZERO, raw_r=None)

    r = numerator / denominator
    if significance_gate and abs(r) < threshold:
        return CorrelationResult(r=0.0, message=NO_STRONG_DEPENDENCY, raw_r=r, gated=True)

    return CorrelationResult(r=r, message="", raw_r=r)
