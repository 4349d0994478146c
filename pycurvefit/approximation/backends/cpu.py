"""
CPU backend for curve fitting.

Forms the least-squares normal equations for the requested family and
solves them with Gauss-Seidel iteration (default) or a direct Cholesky
solve, then computes predicted values, residuals and RMSE.
"""

from typing import Any
import numpy as np

from pycurvefit.core.result import Result
from pycurvefit.core.compute.timing import Timer
from pycurvefit.core.compute.tolerances import GAUSS_SEIDEL_TOL, GAUSS_SEIDEL_MAX_ITER
from pycurvefit.approximation.design import ApproximationDesign
from pycurvefit.approximation.families import Model
from pycurvefit.approximation.normal_equations import SolverMethod, fit_coefficients
from pycurvefit.approximation.solution import ApproximationParams


class CPUNormalEquationsBackend:
    """
    CPU backend solving the normal equations.

    Implements ApproximationDesign + Model -> ApproximationParams.
    """

    def __init__(
        self,
        method: SolverMethod = 'gauss_seidel',
        max_iter: int = GAUSS_SEIDEL_MAX_ITER,
    ):
        if method not in ('gauss_seidel', 'cholesky'):
            raise ValueError(f"Unknown solver method: {method!r}")
        self.method = method
        self.max_iter = max_iter

    @property
    def name(self) -> str:
        return 'cpu_normal_equations'

    def solve(self, design: ApproximationDesign, model: Model) -> Result[ApproximationParams]:
        """
        Fit one model family to the design.

        Algorithm:
            1. Linearize the family if needed and form A c = b
            2. Solve for the coefficients
            3. Evaluate phi, epsilon and RMSE in original units

        Args:
            design: Validated sample set
            model: Function family to fit

        Returns:
            Result containing ApproximationParams

        Raises:
            DomainError: If the family's log transform meets a non-positive value
            NonConvergenceError: If the normal equations cannot be solved
        """
        timer = Timer()
        timer.start()

        x = design.x
        y = design.y

        with timer.section('solve'):
            fitted = fit_coefficients(
                model, x, y,
                method=self.method,
                tol=GAUSS_SEIDEL_TOL,
                max_iter=self.max_iter,
            )
        coefficients = fitted.coefficients

        with timer.section('residuals'):
            fitted_values = np.asarray(model.evaluate(coefficients, x), dtype=np.float64)
            residuals = y - fitted_values

        with timer.section('statistics'):
            rss = float(residuals @ residuals)
            rmse = float(np.sqrt(rss / design.n))

        timer.stop()

        params = ApproximationParams(
            model=model,
            coefficients=coefficients,
            fitted_values=fitted_values,
            residuals=residuals,
            rss=rss,
            rmse=rmse,
        )

        info: dict[str, Any] = {
            'method': self.method,
            'model': model.describe(),
            'iterations': fitted.iterations,
            'final_change': fitted.final_change,
            'tolerance': GAUSS_SEIDEL_TOL,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=(),
        )
