"""
Function family specifications.

A Model names one of four function shapes with free real parameters:

    Polynomial(m):  y = c0 + c1 x + ... + cm x^m
    Exponential:    y = a exp(b x)
    Logarithmic:    y = a + b ln(x)
    Power:          y = a x^b

Each Model knows how many coefficients it takes, how to evaluate itself
in original units, and how to render a fitted coefficient vector as a
human-readable expression. Only the polynomial family has a degree.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pycurvefit.core.exceptions import (
    InvalidStateError,
    UnsupportedFamilyError,
    ValidationError,
)


class FamilyType(Enum):
    """Closed set of supported function families."""
    POLYNOMIAL = 'polynomial'
    EXPONENTIAL = 'exponential'
    LOGARITHMIC = 'logarithmic'
    POWER = 'power'


# Families fitted through a log transform of x and/or y.
LINEARIZED_FAMILIES = frozenset({
    FamilyType.EXPONENTIAL,
    FamilyType.LOGARITHMIC,
    FamilyType.POWER,
})


@dataclass(frozen=True)
class Model:
    """
    Immutable tagged description of a function family.

    Build with the named constructors rather than directly:

        Model.polynomial(2)
        Model.exponential()
        Model.logarithmic()
        Model.power()
    """
    _type: FamilyType
    _degree: int | None = None

    def __post_init__(self):
        if not isinstance(self._type, FamilyType):
            raise UnsupportedFamilyError(
                f"Unknown function family: {self._type!r}", family=self._type
            )
        if self._type is FamilyType.POLYNOMIAL:
            degree = self._degree
            if isinstance(degree, bool) or not isinstance(degree, (int, np.integer)):
                raise ValidationError(
                    f"degree: expected a non-negative integer, got {degree!r}"
                )
            if degree < 0:
                raise ValidationError(f"degree: must be >= 0, got {degree}")
            object.__setattr__(self, '_degree', int(degree))
        elif self._degree is not None:
            raise ValidationError(
                f"degree: only polynomial models take a degree, "
                f"got degree={self._degree!r} for {self._type.value}"
            )

    # === Constructors ===

    @classmethod
    def polynomial(cls, degree: int) -> Model:
        return cls(FamilyType.POLYNOMIAL, degree)

    @classmethod
    def exponential(cls) -> Model:
        return cls(FamilyType.EXPONENTIAL)

    @classmethod
    def logarithmic(cls) -> Model:
        return cls(FamilyType.LOGARITHMIC)

    @classmethod
    def power(cls) -> Model:
        return cls(FamilyType.POWER)

    # === Properties ===

    @property
    def type(self) -> FamilyType:
        """The family tag."""
        return self._type

    @property
    def degree(self) -> int:
        """
        Polynomial degree.

        Raises:
            InvalidStateError: If this is not a polynomial model
        """
        if self._type is not FamilyType.POLYNOMIAL:
            raise InvalidStateError(
                f"Cannot get degree of a non-polynomial model ({self.describe()})"
            )
        return self._degree

    @property
    def is_polynomial(self) -> bool:
        return self._type is FamilyType.POLYNOMIAL

    @property
    def is_linearized(self) -> bool:
        """True when fitted through a log transform."""
        return self._type in LINEARIZED_FAMILIES

    @property
    def n_coefficients(self) -> int:
        """Length of the coefficient vector for this family."""
        if self._type is FamilyType.POLYNOMIAL:
            return self._degree + 1
        return 2

    # === Representations ===

    def describe(self) -> str:
        """Short tag used in reports, e.g. 'Polynomial(2)' or 'Power'."""
        if self._type is FamilyType.POLYNOMIAL:
            return f"Polynomial({self._degree})"
        if self._type is FamilyType.EXPONENTIAL:
            return "Exponential"
        if self._type is FamilyType.LOGARITHMIC:
            return "Logarithmic"
        if self._type is FamilyType.POWER:
            return "Power"
        raise UnsupportedFamilyError(
            f"Unknown function family: {self._type!r}", family=self._type
        )

    def render(self, coefficients: ArrayLike) -> str:
        """
        Format fitted coefficients as an expression string.

        Coefficients are printed with four decimals. Polynomials list terms
        from the highest power down and skip terms whose coefficient is
        exactly zero; a polynomial with no remaining terms renders as '0'.

        Args:
            coefficients: Coefficient vector in this model's layout

        Returns:
            Expression such as '2.5000x^2+1.0000', '1.0000*exp(0.5000x)',
            '1.0000 + 2.0000*ln(x)' or '3.0000x^1.5000'
        """
        coef = self._check_coefficients(coefficients)

        if self._type is FamilyType.POLYNOMIAL:
            return _render_polynomial(coef)
        if self._type is FamilyType.EXPONENTIAL:
            return f"{coef[0]:.4f}*exp({coef[1]:.4f}x)"
        if self._type is FamilyType.LOGARITHMIC:
            return f"{coef[0]:.4f} + {coef[1]:.4f}*ln(x)"
        if self._type is FamilyType.POWER:
            return f"{coef[0]:.4f}x^{coef[1]:.4f}"
        raise UnsupportedFamilyError(
            f"Unknown function family: {self._type!r}", family=self._type
        )

    # === Evaluation ===

    def evaluate(self, coefficients: ArrayLike, x: ArrayLike) -> NDArray[np.floating[Any]] | float:
        """
        Evaluate the fitted function in original units.

        Args:
            coefficients: Coefficient vector in this model's layout
            x: Scalar or array of abscissae

        Returns:
            Function value(s), same shape as x
        """
        coef = self._check_coefficients(coefficients)
        x = np.asarray(x, dtype=np.float64)

        if self._type is FamilyType.POLYNOMIAL:
            values = np.polynomial.polynomial.polyval(x, coef)
        elif self._type is FamilyType.EXPONENTIAL:
            values = coef[0] * np.exp(coef[1] * x)
        elif self._type is FamilyType.LOGARITHMIC:
            values = coef[0] + coef[1] * np.log(x)
        elif self._type is FamilyType.POWER:
            values = coef[0] * np.power(x, coef[1])
        else:
            raise UnsupportedFamilyError(
                f"Unknown function family: {self._type!r}", family=self._type
            )

        if values.ndim == 0:
            return float(values)
        return values

    def _check_coefficients(self, coefficients: ArrayLike) -> NDArray[np.floating[Any]]:
        coef = np.asarray(coefficients, dtype=np.float64).ravel()
        if coef.shape[0] != self.n_coefficients:
            raise ValidationError(
                f"coefficients: {self.describe()} takes {self.n_coefficients} "
                f"coefficients, got {coef.shape[0]}"
            )
        return coef

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        if self._type is FamilyType.POLYNOMIAL:
            return f"Model.polynomial({self._degree})"
        return f"Model.{self._type.value}()"


def _render_polynomial(coef: NDArray[np.floating[Any]]) -> str:
    """Render ascending-order polynomial coefficients, highest power first."""
    parts = []
    for i in range(coef.shape[0] - 1, -1, -1):
        c = float(coef[i])
        # An all-zero vector, including the degree-0 [0.0], renders as "0"
        if c == 0.0:
            continue
        if parts:
            parts.append('+' if c >= 0.0 else '-')
            parts.append(f"{abs(c):.4f}")
        else:
            parts.append(f"{c:.4f}")
        if i == 1:
            parts.append('x')
        elif i > 1:
            parts.append(f"x^{i}")
    if not parts:
        return "0"
    return ''.join(parts)


# =====================================================================
# Candidate set + resolver
# =====================================================================

# Fixed order used by model selection; ties go to the earlier entry.
CANDIDATE_MODELS: tuple[Model, ...] = (
    Model.polynomial(1),
    Model.polynomial(2),
    Model.polynomial(3),
    Model.exponential(),
    Model.logarithmic(),
    Model.power(),
)

_MODEL_ALIASES: dict[str, Model] = {
    'constant': Model.polynomial(0),
    'linear': Model.polynomial(1),
    'quadratic': Model.polynomial(2),
    'cubic': Model.polynomial(3),
    'exponential': Model.exponential(),
    'exp': Model.exponential(),
    'logarithmic': Model.logarithmic(),
    'log': Model.logarithmic(),
    'power': Model.power(),
}


def resolve_model(model: str | Model) -> Model:
    """Resolve a model argument to a Model instance.

    Args:
        model: Either a Model (passed through) or a name: 'constant',
               'linear', 'quadratic', 'cubic', 'exponential' ('exp'),
               'logarithmic' ('log'), 'power'.

    Returns:
        Model instance.

    Raises:
        ValidationError: If string name is not recognized.
        TypeError: If argument is neither string nor Model.
    """
    if isinstance(model, Model):
        return model
    if isinstance(model, str):
        resolved = _MODEL_ALIASES.get(model.lower())
        if resolved is None:
            valid = ', '.join(sorted(_MODEL_ALIASES.keys()))
            raise ValidationError(
                f"Unknown model: {model!r}. Valid models: {valid}"
            )
        return resolved
    raise TypeError(f"model must be str or Model, got {type(model).__name__}")
