"""
Gauss-Seidel iteration for square linear systems.

Normal-equation matrices are symmetric positive (semi-)definite, which
is the condition under which Gauss-Seidel sweeps converge. The solver
updates each unknown in place, so later rows in a sweep already see the
new values of earlier rows.
"""

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray

from pycurvefit.core.exceptions import DimensionError, NonConvergenceError
from pycurvefit.core.validation import check_square
from pycurvefit.core.compute.tolerances import (
    GAUSS_SEIDEL_TOL,
    GAUSS_SEIDEL_MAX_ITER,
    PIVOT_EPS,
)


@dataclass(frozen=True)
class GaussSeidelResult:
    """
    Result of a Gauss-Seidel solve.

    Attributes:
        x: Solution vector (n,)
        iterations: Number of full sweeps performed
        final_change: Largest absolute update in the last sweep
        converged: Always True; failures raise instead
    """
    x: NDArray[np.floating[Any]]
    iterations: int
    final_change: float
    converged: bool = True


def gauss_seidel_solve(
    A: NDArray[np.floating[Any]],
    b: NDArray[np.floating[Any]],
    tol: float = GAUSS_SEIDEL_TOL,
    max_iter: int = GAUSS_SEIDEL_MAX_ITER,
) -> GaussSeidelResult:
    """
    Solve A x = b by Gauss-Seidel iteration starting from x = 0.

    Each sweep computes, for i = 0..n-1 in order,

        x[i] = (b[i] - sum_{j != i} A[i, j] * x[j]) / A[i, i]

    using the values already updated in the current sweep. Iteration stops
    when the largest absolute change in a sweep is below ``tol``.

    Args:
        A: Square coefficient matrix (n x n)
        b: Right-hand side (n,)
        tol: Stopping threshold on the per-sweep maximum change
        max_iter: Maximum number of sweeps

    Returns:
        GaussSeidelResult with the solution and iteration diagnostics

    Raises:
        DimensionError: If A is not square or b does not match it
        NonConvergenceError: On a (near-)zero pivot, non-finite iterates,
            or when max_iter sweeps do not reach tol
    """
    A = np.asarray(A, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64).ravel()
    check_square(A, 'A')
    n = b.shape[0]
    if A.shape[0] != n:
        raise DimensionError(f"b: expected length {A.shape[0]}, got {n}")

    diag = np.diag(A)
    small = np.abs(diag) < PIVOT_EPS
    if np.any(small):
        i = int(np.argmax(small))
        raise NonConvergenceError(
            f"Gauss-Seidel: zero pivot A[{i}, {i}] = {diag[i]!r}",
            iterations=0,
            reason='zero_pivot',
            threshold=tol,
        )

    x = np.zeros(n, dtype=np.float64)
    delta = np.inf
    for iteration in range(1, max_iter + 1):
        delta = 0.0
        for i in range(n):
            s = A[i, :i] @ x[:i] + A[i, i + 1:] @ x[i + 1:]
            x_new = (b[i] - s) / diag[i]
            d = abs(x_new - x[i])
            if d > delta:
                delta = d
            x[i] = x_new

        if not np.isfinite(delta) or not np.all(np.isfinite(x)):
            raise NonConvergenceError(
                f"Gauss-Seidel: non-finite iterate after {iteration} sweeps",
                iterations=iteration,
                final_change=float(delta),
                reason='diverging',
                threshold=tol,
            )

        if delta < tol:
            return GaussSeidelResult(x=x, iterations=iteration, final_change=float(delta))

    raise NonConvergenceError(
        f"Gauss-Seidel: no convergence after {max_iter} sweeps "
        f"(last change {delta:.3e}, tolerance {tol:.1e})",
        iterations=max_iter,
        final_change=float(delta),
        reason='max_iterations',
        threshold=tol,
    )
