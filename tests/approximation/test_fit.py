"""
Tests for approximation fit().

Tests the complete pipeline: design construction, backend solve,
and solution properties (phi, epsilon, RMSE, rendering, summary).
"""

import pytest
import numpy as np

from pycurvefit.approximation import fit, evaluate, Model, ApproximationDesign
from pycurvefit.approximation.solution import ApproximationSolution
from pycurvefit.core.compute.tolerances import GAUSS_SEIDEL_DEFAULT
from pycurvefit.core.exceptions import (
    DimensionError,
    DomainError,
    NonConvergenceError,
    ValidationError,
)


class TestFitBasic:
    """Basic fit() functionality tests."""

    def test_fit_from_arrays(self, linear_data):
        x, y = linear_data
        result = fit(x, y, 'linear')
        assert isinstance(result, ApproximationSolution)
        assert result.coefficients.shape == (2,)
        assert result.model == Model.polynomial(1)

    def test_fit_from_design(self, linear_data):
        x, y = linear_data
        design = ApproximationDesign.from_arrays(x, y)
        result = fit(design, model='linear')
        assert result.n == 5

    def test_fit_requires_y_with_arrays(self, linear_data):
        x, _ = linear_data
        with pytest.raises(ValueError, match="y required"):
            fit(x)

    def test_design_with_y_rejected(self, linear_data):
        x, y = linear_data
        design = ApproximationDesign.from_arrays(x, y)
        with pytest.raises(ValueError, match="omitted"):
            fit(design, y)

    def test_default_model_is_linear(self, linear_data):
        x, y = linear_data
        assert fit(x, y).model == Model.polynomial(1)

    def test_accepts_model_instance(self, power_data):
        x, y = power_data
        assert fit(x, y, Model.power()).model_name == "Power"

    def test_coefficients_close_to_truth(self, linear_data):
        x, y = linear_data
        result = fit(x, y, 'linear')
        tol = GAUSS_SEIDEL_DEFAULT
        np.testing.assert_allclose(result.coefficients, [3.0, 2.0], rtol=tol.rtol, atol=tol.atol)

    def test_cholesky_method(self, cubic_data):
        x, y = cubic_data
        result = fit(x, y, 'cubic', method='cholesky')
        np.testing.assert_allclose(result.coefficients, [1.0, -1.0, 0.0, 1.0], atol=1e-6)
        assert result.info['method'] == 'cholesky'
        assert result.info['iterations'] == 0

    def test_unknown_method(self, linear_data):
        x, y = linear_data
        with pytest.raises(ValueError, match="Unknown solver method"):
            fit(x, y, method='qr')


class TestFitProperties:
    """Derived properties of ApproximationSolution."""

    def test_epsilon_is_y_minus_phi(self, quadratic_data):
        x, y = quadratic_data
        result = fit(x, y, 'quadratic')
        np.testing.assert_array_equal(result.epsilon, y - result.phi)

    def test_phi_is_model_at_samples(self, exponential_data):
        x, y = exponential_data
        result = fit(x, y, 'exponential')
        expected = result.coefficients[0] * np.exp(result.coefficients[1] * x)
        np.testing.assert_allclose(result.phi, expected, rtol=1e-12)

    def test_aliases(self, linear_data):
        x, y = linear_data
        result = fit(x, y)
        assert result.phi is result.fitted_values
        assert result.epsilon is result.residuals

    def test_rmse_definition(self, logarithmic_data):
        x, y = logarithmic_data
        result = fit(x, y, 'log')
        assert result.rmse == pytest.approx(np.sqrt(np.mean(result.epsilon ** 2)))
        assert result.rss == pytest.approx(np.sum(result.epsilon ** 2))
        assert result.rmse >= 0.0

    def test_exact_fit_has_tiny_rmse(self, linear_data):
        x, y = linear_data
        assert fit(x, y, method='cholesky').rmse < 1e-10

    def test_function_string(self, linear_data):
        x, y = linear_data
        result = fit(x, y, method='cholesky')
        assert result.function_string == "2.0000x+3.0000"

    def test_predict(self, power_data):
        x, y = power_data
        result = fit(x, y, 'power', method='cholesky')
        assert result.predict(4.0) == pytest.approx(24.0)
        np.testing.assert_allclose(result.predict(x), y, rtol=1e-10)

    def test_constant_fit(self):
        result = fit([1.0, 2.0, 3.0], [4.0, 4.0, 4.0], 'constant')
        assert result.coefficients[0] == pytest.approx(4.0)
        assert result.function_string == "4.0000"

    def test_info_and_timing(self, linear_data):
        x, y = linear_data
        result = fit(x, y)
        assert result.backend_name == 'cpu_normal_equations'
        assert set(result.info) == {'method', 'model', 'iterations', 'final_change', 'tolerance'}
        assert result.info['model'] == "Polynomial(1)"
        assert result.info['iterations'] > 0
        assert {'total_seconds', 'solve', 'residuals', 'statistics'} <= set(result.timing)
        assert result.warnings == ()


class TestSolutionReport:

    def test_summary_contents(self, linear_data):
        x, y = linear_data
        text = fit(x, y, method='cholesky').summary()
        assert "Approximation Results" in text
        assert "Best matching function: Polynomial(1) 2.0000x+3.0000" in text
        assert "Pearson correlation: 1" in text
        assert "Residual std. deviation" in text
        assert "epsilon" in text
        assert "Backend: cpu_normal_equations (cholesky)" in text

    def test_summary_reports_correlation_message(self):
        x = [1.0, 2.0, 3.0, 4.0]
        text = fit(x, [2.0, 2.0, 2.0, 2.0], 'constant').summary()
        assert "Division by zero" in text

    def test_correlation_cached(self, linear_data):
        x, y = linear_data
        result = fit(x, y)
        assert result.correlation() is result.correlation()
        assert result.correlation().r == pytest.approx(1.0)

    def test_repr(self, linear_data):
        x, y = linear_data
        text = repr(fit(x, y))
        assert text.startswith("ApproximationSolution(model=Polynomial(1), n=5")


class TestFitErrors:

    def test_length_mismatch(self):
        with pytest.raises(DimensionError, match="Inconsistent lengths"):
            fit([1.0, 2.0, 3.0], [1.0, 2.0])

    def test_empty_input(self):
        with pytest.raises(ValidationError):
            fit([], [])

    def test_non_finite(self):
        with pytest.raises(ValidationError):
            fit([1.0, np.inf], [1.0, 2.0])

    def test_degenerate_abscissae(self):
        with pytest.raises(NonConvergenceError) as exc_info:
            fit([0.0, 0.0, 0.0], [1.0, 2.0, 3.0], 'linear')
        assert exc_info.value.reason == 'zero_pivot'

    def test_exponential_domain(self):
        with pytest.raises(DomainError, match="strictly positive"):
            fit([1.0, 2.0, 3.0], [1.0, -2.0, 3.0], 'exponential')

    def test_unknown_model(self, linear_data):
        x, y = linear_data
        with pytest.raises(ValidationError, match="Unknown model"):
            fit(x, y, 'spline')


class TestEvaluate:

    def test_by_name(self):
        assert evaluate('power', [3.0, 2.0], 4.0) == pytest.approx(48.0)

    def test_by_model(self):
        values = evaluate(Model.polynomial(2), [1.0, 0.0, 1.0], np.array([0.0, 2.0]))
        np.testing.assert_allclose(values, [1.0, 5.0])
