"""
Direct Cholesky solve for symmetric positive definite systems.

Used as the reference method against which the iterative solver is
checked, and selectable on its own with method='cholesky'.
"""

from typing import Any
import numpy as np
from numpy.typing import NDArray
from scipy.linalg import cho_factor, cho_solve, LinAlgError

from pycurvefit.core.exceptions import NonConvergenceError


def cholesky_solve_cpu(
    A: NDArray[np.floating[Any]],
    b: NDArray[np.floating[Any]],
) -> NDArray[np.floating[Any]]:
    """
    Solve A x = b via Cholesky factorization (LAPACK through SciPy).

    Args:
        A: Symmetric positive definite matrix (n x n)
        b: Right-hand side (n,)

    Returns:
        Solution vector (n,)

    Raises:
        NonConvergenceError: If A is not positive definite
    """
    try:
        factor = cho_factor(A, lower=True, check_finite=True)
    except LinAlgError as e:
        raise NonConvergenceError(
            f"Cholesky: matrix is not positive definite ({e})",
            iterations=0,
            reason='not_positive_definite',
        ) from e
    return cho_solve(factor, b)
