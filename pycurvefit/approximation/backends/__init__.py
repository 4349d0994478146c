"""
Approximation backends.

Available backends:
    CPUNormalEquationsBackend: normal equations solved by Gauss-Seidel
        iteration or, with method='cholesky', a direct SPD solve
"""

from pycurvefit.approximation.backends.cpu import CPUNormalEquationsBackend

__all__ = [
    "CPUNormalEquationsBackend",
]
