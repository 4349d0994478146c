"""
Generic result container for PyCurveFit computations.

The Result class is the envelope every backend returns. It separates the
domain payload from solver metadata so that solutions can expose timing,
iteration counts and non-fatal diagnostics uniformly.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (solver, iterations, rmse)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True)
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for fitting computations.

    Type Parameters:
        P: The domain-specific parameter payload type

    Attributes:
        params: Domain-specific parameters (coefficients, phi, epsilon)
        info: Structured metadata (method, iterations, diagnostics)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=ApproximationParams(...),
        ...     info={'method': 'gauss_seidel', 'iterations': 12},
        ...     timing={'total_seconds': 0.001},
        ...     backend_name='cpu_normal_equations'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)
