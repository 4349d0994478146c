"""
Linear algebra kernels for PyCurveFit.

All functions follow these conventions:
    - Inputs and outputs are float64 NumPy arrays
    - Each iterative operation returns a structured result dataclass
    - Errors are raised immediately with clear messages

Submodules:
    gauss_seidel: Iterative solver for normal equations
    cholesky: Direct SPD solver (reference)
"""

from pycurvefit.core.compute.linalg.gauss_seidel import (
    GaussSeidelResult,
    gauss_seidel_solve,
)
from pycurvefit.core.compute.linalg.cholesky import cholesky_solve_cpu

__all__ = [
    "GaussSeidelResult",
    "gauss_seidel_solve",
    "cholesky_solve_cpu",
]
