"""
Numerical constants and tolerance tiers.

Solver constants used by the fitting engine live here so that every
tolerance is named in exactly one place. The ToleranceTier records are
used by the test suite to compare results across solver methods.
"""

from dataclasses import dataclass


# Gauss-Seidel stops once the largest update in a sweep drops below this.
GAUSS_SEIDEL_TOL = 1e-4

# Sweep bound; well-posed normal equations converge in far fewer sweeps.
GAUSS_SEIDEL_MAX_ITER = 100_000

# Diagonal entries with smaller magnitude are treated as zero pivots.
PIVOT_EPS = 1e-300

# |r| below this is reported as "no strong linear dependency".
STRONG_CORRELATION_THRESHOLD = 0.8


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# Direct Cholesky solve of normal equations (condition number is squared)
CHOLESKY_FP64 = ToleranceTier(
    rtol=1e-8,
    atol=1e-8,
    name='cholesky_fp64',
    description='Direct SPD solve in double precision',
)

# Gauss-Seidel at the default 1e-4 stopping rule
GAUSS_SEIDEL_DEFAULT = ToleranceTier(
    rtol=1e-3,
    atol=5e-3,
    name='gauss_seidel_default',
    description='Iterative solve, agrees with direct solve to the stopping tolerance',
)

# Gauss-Seidel on ill-conditioned systems (cubic fits on wide x ranges)
GAUSS_SEIDEL_ILL_CONDITIONED = ToleranceTier(
    rtol=0.2,
    atol=0.2,
    name='gauss_seidel_ill_conditioned',
    description='Iterative solve, slow convergence on ill-conditioned systems',
)


def select_tolerance(
    method: str,
    is_ill_conditioned: bool = False,
) -> ToleranceTier:
    """Select appropriate tolerance tier for a given solver method."""
    if method == 'cholesky':
        return CHOLESKY_FP64
    if is_ill_conditioned:
        return GAUSS_SEIDEL_ILL_CONDITIONED
    return GAUSS_SEIDEL_DEFAULT
