"""
Approximation solution types.

Contains the parameter payload and user-facing solution wrapper.
"""

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pycurvefit.core.result import Result
from pycurvefit.approximation.families import Model
from pycurvefit.approximation.correlation import CorrelationResult, pearson_from_sums

if TYPE_CHECKING:
    from pycurvefit.approximation.design import ApproximationDesign


@dataclass(frozen=True)
class ApproximationParams:
    """
    Parameter payload for a single-family fit.

    This is the immutable data computed by backends.
    """
    model: Model
    coefficients: NDArray[np.floating[Any]]
    fitted_values: NDArray[np.floating[Any]]
    residuals: NDArray[np.floating[Any]]
    rss: float
    rmse: float


@dataclass
class ApproximationSolution:
    """
    User-facing fit results.

    Wraps the backend Result and exposes coefficients, predicted values
    (phi), residuals (epsilon), the rendered function and, on request,
    the Pearson correlation of the raw samples.
    """
    _result: Result[ApproximationParams]
    _design: 'ApproximationDesign'

    # Gate applied by correlation() and summary() unless overridden
    _significance_gate: bool = True

    # Cached computations
    _correlation: CorrelationResult | None = None

    @property
    def model(self) -> Model:
        return self._result.params.model

    @property
    def coefficients(self) -> NDArray[np.floating[Any]]:
        return self._result.params.coefficients

    @property
    def fitted_values(self) -> NDArray[np.floating[Any]]:
        return self._result.params.fitted_values

    @property
    def residuals(self) -> NDArray[np.floating[Any]]:
        return self._result.params.residuals

    @property
    def phi(self) -> NDArray[np.floating[Any]]:
        """Predicted y at each sample x (alias of fitted_values)."""
        return self.fitted_values

    @property
    def epsilon(self) -> NDArray[np.floating[Any]]:
        """Observed minus predicted y (alias of residuals)."""
        return self.residuals

    @property
    def rss(self) -> float:
        return self._result.params.rss

    @property
    def rmse(self) -> float:
        """Residual standard deviation sqrt(mean(epsilon^2))."""
        return self._result.params.rmse

    @property
    def model_name(self) -> str:
        return self.model.describe()

    @property
    def function_string(self) -> str:
        return self.model.render(self.coefficients)

    @property
    def n(self) -> int:
        return self._design.n

    def predict(self, x: ArrayLike) -> NDArray[np.floating[Any]] | float:
        """Evaluate the fitted function at new abscissae."""
        return self.model.evaluate(self.coefficients, x)

    def correlation(self, *, significance_gate: bool | None = None) -> CorrelationResult:
        """
        Pearson correlation of the raw (x, y) samples.

        Args:
            significance_gate: Override the solution's gate setting; None
                uses the setting the solution was built with

        The result for the solution's own setting is cached.
        """
        if significance_gate is None:
            significance_gate = self._significance_gate
        if significance_gate != self._significance_gate:
            return pearson_from_sums(
                self._design.x, self._design.y, significance_gate=significance_gate
            )
        if self._correlation is None:
            self._correlation = pearson_from_sums(
                self._design.x, self._design.y, significance_gate=significance_gate
            )
        return self._correlation

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """Plain-text report of the fit."""
        corr = self.correlation()
        lines = [
            "Approximation Results",
            "=" * 60,
            f"Observations: {self.n}",
            f"Best matching function: {self.model_name} {self.function_string}",
        ]
        if corr.message:
            lines.append(f"Pearson correlation: {corr.r:.6g} ({corr.message})")
        else:
            lines.append(f"Pearson correlation: {corr.r:.6g}")
        lines.append(f"Residual std. deviation: {self.rmse:.6g}")
        lines.append("")
        lines.append("Coefficients:")
        for i, c in enumerate(self.coefficients):
            lines.append(f"  c[{i}]: {c:14.6f}")
        lines.append("")
        lines.append(f"{'x':>14} {'y':>14} {'phi':>14} {'epsilon':>14}")
        lines.append("-" * 60)
        for xi, yi, p, e in zip(self._design.x, self._design.y, self.phi, self.epsilon):
            lines.append(f"{xi:14.6g} {yi:14.6g} {p:14.6g} {e:14.6g}")
        lines.append("-" * 60)
        lines.append(f"Backend: {self.backend_name} ({self.info.get('method', '?')})")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"ApproximationSolution(model={self.model_name}, n={self.n}, "
            f"rmse={self.rmse:.4g})"
        )
