"""
Tests for model selection and the approximate() pipeline.

Validates:
    - Each exactly generated dataset selects its own family
    - Infeasible candidates are skipped with a warning, not fatal
    - Ranking order and tie-breaking
    - approximate() attaches correlation diagnostics to warnings
"""

import math

import numpy as np
import pytest

from pycurvefit.approximation import (
    CandidateScore,
    Model,
    approximate,
    find_best_function,
    rank_functions,
)
from pycurvefit.approximation.correlation import NO_STRONG_DEPENDENCY
from pycurvefit.core.exceptions import DomainError


@pytest.fixture
def shifted_square(xs):
    """y = (x - 1)^2: contains y = 0, so Exponential and Power are infeasible."""
    return xs, (xs - 1.0) ** 2


@pytest.fixture
def scattered_data(xs):
    """Positive samples with Pearson r of about 0.70."""
    return xs, np.array([3.0, 1.0, 4.0, 1.0, 5.0, 9.0])


# ═══════════════════════════════════════════════════════════════════════
# find_best_function
# ═══════════════════════════════════════════════════════════════════════


class TestFindBestFunction:

    def test_linear(self, linear_data):
        x, y = linear_data
        assert find_best_function(x, y) == Model.polynomial(1)

    def test_quadratic(self, quadratic_data):
        x, y = quadratic_data
        assert find_best_function(x, y) == Model.polynomial(2)

    def test_cubic(self, cubic_data):
        x, y = cubic_data
        assert find_best_function(x, y) == Model.polynomial(3)

    def test_exponential(self, exponential_data):
        x, y = exponential_data
        assert find_best_function(x, y) == Model.exponential()

    def test_logarithmic(self, logarithmic_data):
        x, y = logarithmic_data
        assert find_best_function(x, y) == Model.logarithmic()

    def test_power(self, power_data):
        x, y = power_data
        assert find_best_function(x, y) == Model.power()

    def test_infeasible_candidates_warn(self, shifted_square):
        x, y = shifted_square
        with pytest.warns(UserWarning, match="Skipping Exponential") as record:
            best = find_best_function(x, y)
        messages = [str(w.message) for w in record]
        assert any(m.startswith("Skipping Power") for m in messages)
        assert best.is_polynomial

    def test_all_candidates_fail(self):
        with pytest.raises(DomainError):
            find_best_function([0.0, 0.0, 0.0], [-1.0, -2.0, -3.0])


# ═══════════════════════════════════════════════════════════════════════
# rank_functions
# ═══════════════════════════════════════════════════════════════════════


class TestRankFunctions:

    def test_scores_every_candidate(self, exponential_data):
        x, y = exponential_data
        scores = rank_functions(x, y)
        assert len(scores) == 6
        assert all(isinstance(s, CandidateScore) for s in scores)
        assert {s.model for s in scores} == {
            Model.polynomial(1), Model.polynomial(2), Model.polynomial(3),
            Model.exponential(), Model.logarithmic(), Model.power(),
        }

    def test_sorted_by_rmse(self, logarithmic_data):
        x, y = logarithmic_data
        rmses = [s.rmse for s in rank_functions(x, y)]
        assert rmses == sorted(rmses)

    def test_head_matches_find_best(self, power_data):
        x, y = power_data
        assert rank_functions(x, y)[0].model == find_best_function(x, y)

    def test_failures_ranked_last(self, shifted_square):
        x, y = shifted_square
        scores = rank_functions(x, y)
        failed = scores[-2:]
        assert [s.model for s in failed] == [Model.exponential(), Model.power()]
        for s in failed:
            assert not s.succeeded
            assert math.isinf(s.rmse)
            assert "strictly positive" in s.error
        assert all(s.succeeded for s in scores[:-2])

    def test_ties_keep_candidate_order(self):
        """Exact Cholesky fits of a constant tie at zero; Polynomial(1) comes first."""
        x = np.array([1.0, 2.0, 3.0, 4.0])
        scores = rank_functions(x, np.full(4, 5.0), method='cholesky')
        zero = [s.model for s in scores if s.rmse == 0.0]
        assert len(zero) >= 2
        assert zero[0] == Model.polynomial(1)
        assert scores[0].model == Model.polynomial(1)


# ═══════════════════════════════════════════════════════════════════════
# approximate
# ═══════════════════════════════════════════════════════════════════════


class TestApproximate:

    def test_strong_linear(self, linear_data):
        x, y = linear_data
        result = approximate(x, y)
        assert result.model == Model.polynomial(1)
        assert result.warnings == ()
        assert result.correlation().r == pytest.approx(1.0)
        np.testing.assert_array_equal(result.epsilon, y - result.phi)

    def test_weak_correlation_noted(self, scattered_data):
        x, y = scattered_data
        result = approximate(x, y)
        assert result.warnings == (NO_STRONG_DEPENDENCY,)
        corr = result.correlation()
        assert corr.r == 0.0
        assert corr.gated
        assert corr.raw_r == pytest.approx(0.696, abs=1e-3)
        assert NO_STRONG_DEPENDENCY in result.summary()

    def test_gate_disabled(self, scattered_data):
        x, y = scattered_data
        result = approximate(x, y, significance_gate=False)
        assert result.warnings == ()
        assert result.correlation(significance_gate=False).r == pytest.approx(0.696, abs=1e-3)

        corr = result.correlation()
        assert corr.r == pytest.approx(0.696, abs=1e-3)
        assert corr.message == ""
        assert not corr.gated
        text = result.summary()
        assert NO_STRONG_DEPENDENCY not in text
        assert "Pearson correlation: 0.696" in text

    def test_gate_override_on_returned_solution(self, scattered_data):
        x, y = scattered_data
        result = approximate(x, y, significance_gate=False)
        gated = result.correlation(significance_gate=True)
        assert gated.r == 0.0
        assert gated.message == NO_STRONG_DEPENDENCY
        # Override does not replace the solution's own setting
        assert result.correlation().r == pytest.approx(0.696, abs=1e-3)

    def test_correlation_stored_on_solution(self, linear_data):
        x, y = linear_data
        result = approximate(x, y)
        assert result.correlation() is result.correlation()
        assert result.correlation().r == pytest.approx(1.0)

    def test_selection_timed(self, linear_data):
        x, y = linear_data
        result = approximate(x, y)
        assert result.timing['selection'] >= 0.0
        assert {'total_seconds', 'solve', 'residuals', 'statistics'} <= set(result.timing)

    def test_skipped_candidates_noted(self, shifted_square):
        x, y = shifted_square
        result = approximate(x, y)
        assert len(result.warnings) == 2
        assert result.warnings[0].startswith("Skipping Exponential in model selection")
        assert result.warnings[1].startswith("Skipping Power in model selection")

    def test_constant_series(self):
        result = approximate([1.0, 2.0, 3.0], [4.0, 4.0, 4.0], method='cholesky')
        assert "Division by zero" in result.warnings
        assert result.rmse < 1e-10

    def test_all_candidates_fail(self):
        with pytest.raises(DomainError):
            approximate([0.0, 0.0, 0.0], [-1.0, -2.0, -3.0])
