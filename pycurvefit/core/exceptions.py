"""
Exception hierarchy for PyCurveFit.

All exceptions inherit from PyCurveFitError to allow catching any
library-specific error. Domain-specific exceptions should inherit from
the appropriate base class here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyCurveFitError(Exception):
    """Base exception for all PyCurveFit errors."""
    pass


class ValidationError(PyCurveFitError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when array shapes don't match expected dimensions or
    when multiple arrays have inconsistent shapes.
    """
    pass


class DomainError(ValidationError):
    """
    Sample values lie outside the domain of a linearizing transform.

    Raised when a non-positive value reaches the logarithm used to
    linearize the exponential, logarithmic or power families.

    Attributes:
        series: Which sample series was rejected ('x' or 'y')
        family: Name of the function family being fitted
        n_invalid: Number of non-positive values found
    """

    def __init__(
        self,
        message: str,
        series: str | None = None,
        family: str | None = None,
        n_invalid: int | None = None
    ):
        super().__init__(message)
        self.series = series
        self.family = family
        self.n_invalid = n_invalid


class InvalidStateError(PyCurveFitError):
    """
    Operation is not meaningful for this object.

    Raised when a family-specific accessor (e.g. the degree of a
    polynomial) is requested on a model of another family.
    """
    pass


class UnsupportedFamilyError(InvalidStateError):
    """
    A function family tag reached a dispatch point that does not handle it.

    Attributes:
        family: The offending family tag
    """

    def __init__(self, message: str, family: object = None):
        super().__init__(message)
        self.family = family


class NumericalError(PyCurveFitError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class CorrelationUndefinedError(NumericalError):
    """
    Pearson correlation is undefined for the given samples.

    Raised in strict mode when the denominator of the product-moment
    formula is zero, i.e. one of the series is constant.

    Attributes:
        denominator: The value of the formula's denominator
    """

    def __init__(self, message: str, denominator: float | None = None):
        super().__init__(message)
        self.denominator = denominator


class NonConvergenceError(PyCurveFitError):
    """
    Iterative solver failed to converge.

    Raised when Gauss-Seidel iteration exceeds its iteration bound,
    meets a (near-)zero pivot, or produces non-finite iterates.

    Attributes:
        iterations: Number of sweeps completed
        final_change: Maximum absolute update in the last sweep
        reason: Why convergence failed ('max_iterations', 'zero_pivot',
                'diverging', 'not_positive_definite')
        threshold: The convergence threshold that was not met
    """

    def __init__(
        self,
        message: str,
        iterations: int,
        final_change: float | None = None,
        reason: str | None = None,
        threshold: float | None = None
    ):
        super().__init__(message)
        self.iterations = iterations
        self.final_change = final_change
        self.reason = reason
        self.threshold = threshold
