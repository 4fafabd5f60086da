"""
CPU backends for least squares.

CPUNormalBackend solves the normal equations and is the default.
CPUQRBackend solves through a QR decomposition of X; it accepts the same
designs and returns the same payload.
"""

from typing import Any

from curvefit.core.result import Result
from curvefit.core.compute.timing import Timer
from curvefit.core.compute.linalg.normal import normal_equations_cpu
from curvefit.core.compute.linalg.qr import qr_solve_cpu
from curvefit.regression.design import Design
from curvefit.regression.solution import LeastSquaresParams

# cond(X'X) above which the solution is flagged as unreliable. At 1e12
# only about four significant digits of β survive in double precision.
CONDITION_WARNING_THRESHOLD = 1e12


class CPUNormalBackend:
    """
    CPU backend using the normal equations β = (X'X)⁻¹ X'y.

    Implements the Backend protocol for Design -> LeastSquaresParams.
    """

    @property
    def name(self) -> str:
        return 'cpu_normal'

    def solve(self, design: Design) -> Result[LeastSquaresParams]:
        """
        Solve least squares via the normal equations.

        Raises:
            SingularMatrixError: If X'X is singular
        """
        timer = Timer()
        timer.start()

        with timer.section('normal_equations'):
            ne = normal_equations_cpu(design.X, design.y)

        with timer.section('fitted_values'):
            fitted_values = design.X @ ne.coefficients

        timer.stop()

        warnings_list = []
        if ne.condition_number > CONDITION_WARNING_THRESHOLD:
            warnings_list.append(
                f"X'X is ill-conditioned (condition number {ne.condition_number:.2e}); "
                f"coefficients may be inaccurate"
            )

        params = LeastSquaresParams(
            coefficients=ne.coefficients,
            fitted_values=fitted_values,
            rank=ne.rank,
        )

        info: dict[str, Any] = {
            'method': 'normal_equations',
            'rank': ne.rank,
            'condition_number': ne.condition_number,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )


class CPUQRBackend:
    """
    CPU backend using QR decomposition of X.

    Does not square the condition number, so it stays accurate for
    higher polynomial degrees where the normal equations degrade.
    """

    @property
    def name(self) -> str:
        return 'cpu_qr'

    def solve(self, design: Design) -> Result[LeastSquaresParams]:
        """
        Solve least squares via X = QR, β = R⁻¹ Q'y.

        Raises:
            SingularMatrixError: If X is rank-deficient
        """
        timer = Timer()
        timer.start()

        with timer.section('qr_solve'):
            coefficients, qr_result = qr_solve_cpu(design.X, design.y)

        with timer.section('fitted_values'):
            fitted_values = design.X @ coefficients

        timer.stop()

        params = LeastSquaresParams(
            coefficients=coefficients,
            fitted_values=fitted_values,
            rank=qr_result.rank,
        )

        return Result(
            params=params,
            info={'method': 'qr', 'rank': qr_result.rank},
            timing=timer.result(),
            backend_name=self.name,
            warnings=(),
        )
