"""
Core infrastructure for PyCurveFit.

This module provides shared abstractions, utilities, and numeric kernels
used by the approximation module.

Key components:
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing, tolerances, linear algebra kernels
"""

from pycurvefit.core.result import Result
from pycurvefit.core.exceptions import (
    PyCurveFitError,
    ValidationError,
    DimensionError,
    DomainError,
    InvalidStateError,
    UnsupportedFamilyError,
    NumericalError,
    CorrelationUndefinedError,
    NonConvergenceError,
)

__all__ = [
    # Result
    "Result",
    # Exceptions
    "PyCurveFitError",
    "ValidationError",
    "DimensionError",
    "DomainError",
    "InvalidStateError",
    "UnsupportedFamilyError",
    "NumericalError",
    "CorrelationUndefinedError",
    "NonConvergenceError",
]
