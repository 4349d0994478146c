"""
Curve fitting by least squares.

Fits four function families to (x, y) samples, picks the family with the
smallest residual standard deviation, and reports Pearson's r.

Public API:
    fit(x, y, model)            -> ApproximationSolution
    find_best_function(x, y)    -> Model
    rank_functions(x, y)        -> list[CandidateScore]
    approximate(x, y)           -> ApproximationSolution for the best model
    evaluate(model, coef, x)    -> function values
    pearson_correlation(x, y)   -> CorrelationResult

Example:
    >>> from pycurvefit.approximation import approximate
    >>> sol = approximate(x, y)
    >>> print(sol.model_name, sol.function_string)
    >>> print(sol.summary())
"""

from pycurvefit.approximation.families import Model, FamilyType, CANDIDATE_MODELS, resolve_model
from pycurvefit.approximation.design import ApproximationDesign
from pycurvefit.approximation.correlation import CorrelationResult
from pycurvefit.approximation.solution import ApproximationSolution, ApproximationParams
from pycurvefit.approximation.solvers import (
    fit,
    find_best_function,
    rank_functions,
    approximate,
    evaluate,
    pearson_correlation,
    CandidateScore,
)

__all__ = [
    "fit",
    "find_best_function",
    "rank_functions",
    "approximate",
    "evaluate",
    "pearson_correlation",
    "Model",
    "FamilyType",
    "CANDIDATE_MODELS",
    "resolve_model",
    "ApproximationDesign",
    "ApproximationSolution",
    "ApproximationParams",
    "CorrelationResult",
    "CandidateScore",
]
