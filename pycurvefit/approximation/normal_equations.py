"""
Per-family least-squares setup.

Polynomial models are fitted by forming the normal equations directly:

    A[i, k] = sum_j x_j^(i+k),    b[i] = sum_j x_j^i y_j,    i, k = 0..m

The other families are linearized with a logarithm and handed back to
the degree-1 polynomial fit:

    Exponential  y = a exp(b x)  ->  ln y  = ln a + b x
    Power        y = a x^b       ->  ln y  = ln a + b ln x
    Logarithmic  y = a + b ln x  ->  y     = a    + b ln x

so the 2-parameter linear solve has a single implementation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal
import numpy as np
from numpy.typing import NDArray

from pycurvefit.core.exceptions import UnsupportedFamilyError
from pycurvefit.core.validation import check_positive
from pycurvefit.core.compute.tolerances import GAUSS_SEIDEL_TOL, GAUSS_SEIDEL_MAX_ITER
from pycurvefit.core.compute.linalg import gauss_seidel_solve, cholesky_solve_cpu
from pycurvefit.approximation.families import Model, FamilyType


SolverMethod = Literal['gauss_seidel', 'cholesky']

_LINEAR = Model.polynomial(1)


@dataclass(frozen=True)
class CoefficientFit:
    """
    Coefficients plus solver diagnostics.

    Attributes:
        coefficients: Coefficient vector in the model's layout
        iterations: Gauss-Seidel sweeps used (0 for direct solves)
        final_change: Last per-sweep maximum update (0.0 for direct solves)
    """
    coefficients: NDArray[np.floating[Any]]
    iterations: int
    final_change: float


def build_normal_equations(
    x: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
    degree: int,
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    """
    Form the polynomial normal equations A c = b.

    Args:
        x: Abscissae (n,)
        y: Observations (n,)
        degree: Polynomial degree m

    Returns:
        (A, b) with A of shape (m+1, m+1) and b of shape (m+1,)
    """
    V = np.vander(x, degree + 1, increasing=True)
    A = V.T @ V
    b = V.T @ y
    return A, b


def fit_coefficients(
    model: Model,
    x: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
    *,
    method: SolverMethod = 'gauss_seidel',
    tol: float = GAUSS_SEIDEL_TOL,
    max_iter: int = GAUSS_SEIDEL_MAX_ITER,
) -> CoefficientFit:
    """
    Compute least-squares coefficients for one model family.

    Args:
        model: Function family to fit
        x: Validated abscissae (n,)
        y: Validated observations (n,)
        method: 'gauss_seidel' (iterative) or 'cholesky' (direct)
        tol: Gauss-Seidel stopping threshold
        max_iter: Gauss-Seidel sweep bound

    Returns:
        CoefficientFit

    Raises:
        DomainError: If a log transform meets a non-positive value
        NonConvergenceError: If the linear system cannot be solved
        UnsupportedFamilyError: If the family has no setup
    """
    family = model.type
    name = model.describe()

    if family is FamilyType.POLYNOMIAL:
        A, b = build_normal_equations(x, y, model.degree)
        if method == 'cholesky':
            coef = cholesky_solve_cpu(A, b)
            return CoefficientFit(coefficients=coef, iterations=0, final_change=0.0)
        if method == 'gauss_seidel':
            gs = gauss_seidel_solve(A, b, tol=tol, max_iter=max_iter)
            return CoefficientFit(
                coefficients=gs.x,
                iterations=gs.iterations,
                final_change=gs.final_change,
            )
        raise ValueError(f"Unknown solver method: {method!r}")

    if family is FamilyType.EXPONENTIAL:
        check_positive(y, 'y', name)
        inner = fit_coefficients(_LINEAR, x, np.log(y), method=method, tol=tol, max_iter=max_iter)
        return _exp_intercept(inner)

    if family is FamilyType.POWER:
        check_positive(x, 'x', name)
        check_positive(y, 'y', name)
        inner = fit_coefficients(_LINEAR, np.log(x), np.log(y), method=method, tol=tol, max_iter=max_iter)
        return _exp_intercept(inner)

    if family is FamilyType.LOGARITHMIC:
        check_positive(x, 'x', name)
        return fit_coefficients(_LINEAR, np.log(x), y, method=method, tol=tol, max_iter=max_iter)

    raise UnsupportedFamilyError(f"No regression setup for family {family!r}", family=family)


def _exp_intercept(inner: CoefficientFit) -> CoefficientFit:
    """Map (ln a, b) from the log-space fit back to (a, b)."""
    coef = inner.coefficients.copy()
    coef[0] = np.exp(coef[0])
    return CoefficientFit(
        coefficients=coef,
        iterations=inner.iterations,
        final_change=inner.final_change,
    )
