"""
PyCurveFit: least-squares curve fitting with model selection.

Fits polynomial (degree <= 3), exponential, logarithmic and power-law
models to (x, y) samples, chooses the family with the smallest residual
standard deviation, and reports Pearson's correlation coefficient.

Submodules:
    approximation: Model families, fitting, selection, correlation
    core: Exceptions, validation, result envelope, numeric kernels
"""

__version__ = "0.1.0"

from pycurvefit import approximation
from pycurvefit.approximation import (
    Model,
    fit,
    find_best_function,
    approximate,
    pearson_correlation,
)

__all__ = [
    "__version__",
    "approximation",
    "Model",
    "fit",
    "find_best_function",
    "approximate",
    "pearson_correlation",
]
