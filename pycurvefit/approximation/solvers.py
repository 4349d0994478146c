"""
Solver dispatch for curve fitting.

This module provides the public API: fit(), find_best_function(),
rank_functions(), approximate(), evaluate() and pearson_correlation().
"""

from __future__ import annotations

from dataclasses import dataclass, replace
import math
import warnings
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pycurvefit.core.exceptions import DomainError, NonConvergenceError
from pycurvefit.core.compute.timing import timed
from pycurvefit.core.compute.tolerances import GAUSS_SEIDEL_MAX_ITER
from pycurvefit.approximation.design import ApproximationDesign
from pycurvefit.approximation.families import Model, CANDIDATE_MODELS, resolve_model
from pycurvefit.approximation.normal_equations import SolverMethod
from pycurvefit.approximation.correlation import CorrelationResult, pearson_from_sums
from pycurvefit.approximation.solution import ApproximationSolution
from pycurvefit.approximation.backends.cpu import CPUNormalEquationsBackend


@dataclass(frozen=True)
class CandidateScore:
    """
    One entry of a model-selection ranking.

    Attributes:
        model: Candidate function family
        rmse: Residual standard deviation, inf if the fit failed
        error: Failure message, None if the fit succeeded
    """
    model: Model
    rmse: float
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


def _ensure_design(x: ArrayLike | ApproximationDesign, y: ArrayLike | None) -> ApproximationDesign:
    """Convert raw arrays to ApproximationDesign if needed."""
    if isinstance(x, ApproximationDesign):
        if y is not None:
            raise ValueError("y must be omitted when passing an ApproximationDesign")
        return x
    if y is None:
        raise ValueError("y required when x is an array")
    return ApproximationDesign.from_arrays(x, y)


def fit(
    x: ArrayLike | ApproximationDesign,
    y: ArrayLike | None = None,
    model: str | Model = 'linear',
    *,
    method: SolverMethod = 'gauss_seidel',
    max_iter: int = GAUSS_SEIDEL_MAX_ITER,
) -> ApproximationSolution:
    """
    Fit one function family by least squares.

    Args:
        x: Abscissae, or an ApproximationDesign (then omit y)
        y: Observations, same length as x
        model: Model instance or name ('linear', 'quadratic', 'cubic',
            'exponential', 'logarithmic', 'power', 'constant')
        method: 'gauss_seidel' (iterative, default) or 'cholesky' (direct)
        max_iter: Gauss-Seidel sweep bound

    Returns:
        ApproximationSolution with coefficients, phi, epsilon and RMSE

    Raises:
        ValidationError: If inputs are invalid
        DimensionError: If x and y have inconsistent lengths
        DomainError: If a log-linearized family meets non-positive samples
        NonConvergenceError: If the normal equations cannot be solved

    Example:
        >>> from pycurvefit.approximation import fit
        >>> sol = fit([1, 2, 3, 4], [5, 7, 9, 11], 'linear')
        >>> sol.coefficients      # approximately [3., 2.]
        >>> print(sol.summary())
    """
    # This is the boundary - validate here, trust everywhere else
    design = _ensure_design(x, y)
    model = resolve_model(model)

    backend = CPUNormalEquationsBackend(method=method, max_iter=max_iter)
    result = backend.solve(design, model)

    return ApproximationSolution(_result=result, _design=design)


def _rank(
    design: ApproximationDesign,
    backend: CPUNormalEquationsBackend,
) -> tuple[list[CandidateScore], Exception | None]:
    """Score every candidate; also return the last fitting error seen."""
    scores = []
    last_error = None
    for model in CANDIDATE_MODELS:
        try:
            result = backend.solve(design, model)
        except (DomainError, NonConvergenceError) as e:
            scores.append(CandidateScore(model=model, rmse=math.inf, error=str(e)))
            last_error = e
            continue
        rmse = result.params.rmse
        if math.isnan(rmse):
            scores.append(CandidateScore(model=model, rmse=math.inf, error="non-finite residuals"))
            continue
        scores.append(CandidateScore(model=model, rmse=rmse))

    # sorted() is stable: equal RMSE keeps candidate order
    return sorted(scores, key=lambda s: s.rmse), last_error


def _select(
    design: ApproximationDesign,
    backend: CPUNormalEquationsBackend,
) -> tuple[Model, tuple[str, ...]]:
    """Pick the best candidate and describe the skipped ones."""
    scores, last_error = _rank(design, backend)
    skipped = tuple(
        f"Skipping {s.model.describe()} in model selection: {s.error}"
        for s in scores if not s.succeeded
    )
    best = scores[0]
    if not best.succeeded:
        if last_error is not None:
            raise last_error
        raise NonConvergenceError(
            "No candidate function could be fitted: residuals are non-finite",
            iterations=0,
            reason='diverging',
        )
    return best.model, skipped


def rank_functions(
    x: ArrayLike | ApproximationDesign,
    y: ArrayLike | None = None,
    *,
    method: SolverMethod = 'gauss_seidel',
    max_iter: int = GAUSS_SEIDEL_MAX_ITER,
) -> list[CandidateScore]:
    """
    Fit every candidate family and rank them by RMSE.

    Candidates, in tie-breaking order: Polynomial(1), Polynomial(2),
    Polynomial(3), Exponential, Logarithmic, Power. Families whose fit
    fails are ranked last with rmse=inf and the failure message.

    Returns:
        List of CandidateScore, best first
    """
    design = _ensure_design(x, y)
    backend = CPUNormalEquationsBackend(method=method, max_iter=max_iter)
    scores, _ = _rank(design, backend)
    return scores


def find_best_function(
    x: ArrayLike | ApproximationDesign,
    y: ArrayLike | None = None,
    *,
    method: SolverMethod = 'gauss_seidel',
    max_iter: int = GAUSS_SEIDEL_MAX_ITER,
) -> Model:
    """
    Select the function family with the smallest residual standard deviation.

    Ties go to the earlier candidate in the order Polynomial(1),
    Polynomial(2), Polynomial(3), Exponential, Logarithmic, Power.
    Candidates that cannot be fitted (e.g. exponential with y <= 0) are
    skipped with a UserWarning.

    Returns:
        The winning Model; call fit() with it to get coefficients

    Raises:
        DomainError, NonConvergenceError: If no candidate can be fitted
    """
    design = _ensure_design(x, y)
    backend = CPUNormalEquationsBackend(method=method, max_iter=max_iter)
    best, skipped = _select(design, backend)
    for message in skipped:
        warnings.warn(message, UserWarning, stacklevel=2)
    return best


def approximate(
    x: ArrayLike | ApproximationDesign,
    y: ArrayLike | None = None,
    *,
    method: SolverMethod = 'gauss_seidel',
    max_iter: int = GAUSS_SEIDEL_MAX_ITER,
    significance_gate: bool = True,
) -> ApproximationSolution:
    """
    Full pipeline: pick the best family, fit it, attach Pearson's r.

    The correlation diagnostic ('Division by zero' or 'No strong linear
    dependency detected.') is appended to the solution's warnings. The
    solution keeps the significance_gate setting, so its correlation()
    and summary() report the same r. Time spent ranking candidates is
    recorded as timing['selection'].

    Returns:
        ApproximationSolution for the best-fitting family
    """
    design = _ensure_design(x, y)
    backend = CPUNormalEquationsBackend(method=method, max_iter=max_iter)
    with timed() as selection_timer:
        best, skipped = _select(design, backend)

    solution = fit(design, model=best, method=method, max_iter=max_iter)
    corr = pearson_from_sums(design.x, design.y, significance_gate=significance_gate)

    notes = skipped + ((corr.message,) if corr.message else ())
    timing = dict(solution.timing or {})
    timing['selection'] = selection_timer.result()['total_seconds']
    result = replace(solution._result, timing=timing, warnings=solution.warnings + notes)
    return ApproximationSolution(
        _result=result,
        _design=design,
        _significance_gate=significance_gate,
        _correlation=corr,
    )


def evaluate(
    model: str | Model,
    coefficients: ArrayLike,
    x: ArrayLike,
) -> NDArray[np.floating[Any]] | float:
    """Evaluate a fitted function in original units at scalar or array x."""
    return resolve_model(model).evaluate(coefficients, x)


def pearson_correlation(
    x: ArrayLike,
    y: ArrayLike,
    *,
    significance_gate: bool = True,
    strict: bool = False,
) -> CorrelationResult:
    """
    Pearson product-moment correlation of two sample series.

    Args:
        x, y: Equal-length numeric series
        significance_gate: Report r = 0 with a message when |r| < 0.8
        strict: Raise CorrelationUndefinedError on a zero denominator

    Returns:
        CorrelationResult; unpacks as (r, message)

    Example:
        >>> r, message = pearson_correlation([1, 2, 3], [2, 4, 6])
        >>> round(r, 12), message
        (1.0, '')
    """
    design = ApproximationDesign.from_arrays(x, y)
    return pearson_from_sums(
        design.x, design.y,
        significance_gate=significance_gate,
        strict=strict,
    )
