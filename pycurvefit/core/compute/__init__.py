"""
Shared compute infrastructure for PyCurveFit.

This module provides timing utilities, solver constants and linear
algebra kernels shared by the fitting backends.

IMPORTANT: This is NOT where domain-specific backends live. Those go in
{domain}/backends/. This module contains shared NUMERIC infrastructure.

Submodules:
    timing: Execution timing utilities
    tolerances: Solver constants and tolerance tiers
    linalg: Linear algebra kernels (Gauss-Seidel, Cholesky)
"""

from pycurvefit.core.compute.timing import Timer, timed

__all__ = [
    "Timer",
    "timed",
]
