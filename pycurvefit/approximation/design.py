"""
Approximation Design.

Design holds the validated sample set: two equal-length 1-D float64
arrays x and y. Everything downstream trusts a Design, so all input
checking happens once, here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pycurvefit.core.validation import (
    check_array,
    check_finite,
    check_1d,
    check_consistent_length,
    check_min_samples,
)


@dataclass(frozen=True)
class ApproximationDesign:
    """
    Validated (x, y) sample set.

    Immutable after construction.

    Construction:
        ApproximationDesign.from_arrays(x, y)
    """
    _x: NDArray[np.floating[Any]]
    _y: NDArray[np.floating[Any]]
    _n: int

    @classmethod
    def from_arrays(cls, x: ArrayLike, y: ArrayLike) -> ApproximationDesign:
        """Build Design directly from array-likes."""
        x_arr = check_array(x, 'x')
        y_arr = check_array(y, 'y')
        return cls._build(x_arr, y_arr)

    @classmethod
    def _build(cls, x: NDArray, y: NDArray) -> ApproximationDesign:
        """Internal builder with validation."""
        # Accept column vectors
        if x.ndim == 2 and x.shape[1] == 1:
            x = x.ravel()
        if y.ndim == 2 and y.shape[1] == 1:
            y = y.ravel()

        check_1d(x, 'x')
        check_1d(y, 'y')
        check_finite(x, 'x')
        check_finite(y, 'y')
        check_consistent_length(x, y, names=('x', 'y'))
        check_min_samples(x, 1, 'x')

        # Private copies so callers can't mutate the design
        x = np.array(x, dtype=np.float64)
        y = np.array(y, dtype=np.float64)
        x.flags.writeable = False
        y.flags.writeable = False

        return cls(_x=x, _y=y, _n=x.shape[0])

    # === Properties ===

    @property
    def x(self) -> NDArray[np.floating[Any]]:
        """Abscissae (n,)."""
        return self._x

    @property
    def y(self) -> NDArray[np.floating[Any]]:
        """Observed values (n,)."""
        return self._y

    @property
    def n(self) -> int:
        """Number of samples."""
        return self._n

    def __repr__(self) -> str:
        return f"ApproximationDesign(n={self._n})"
