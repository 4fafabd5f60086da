"""
Tests for the least-squares kernels.

Both kernels must agree with numpy.linalg.lstsq on well-posed problems
and raise SingularMatrixError on collinear designs.
"""

import numpy as np
import pytest

from curvefit.core.compute.linalg import normal_equations_cpu, qr_cpu, qr_solve_cpu
from curvefit.core.exceptions import SingularMatrixError


@pytest.fixture
def well_posed(rng):
    n = 50
    X = np.column_stack([np.ones(n), rng.standard_normal(n), rng.standard_normal(n)])
    y = X @ [0.5, 2.0, -1.0] + rng.standard_normal(n) * 0.1
    return X, y


@pytest.fixture
def collinear(rng):
    n = 30
    a = rng.standard_normal(n)
    b = rng.standard_normal(n)
    X = np.column_stack([a, b, a + b])
    return X, rng.standard_normal(n)


class TestNormalEquations:

    def test_matches_lstsq(self, well_posed):
        X, y = well_posed
        result = normal_equations_cpu(X, y)
        expected = np.linalg.lstsq(X, y, rcond=None)[0]
        np.testing.assert_allclose(result.coefficients, expected, rtol=1e-10)

    def test_reports_rank_and_condition(self, well_posed):
        X, y = well_posed
        result = normal_equations_cpu(X, y)
        assert result.rank == 3
        assert 1.0 <= result.condition_number < 1e6

    def test_single_column_closed_form(self):
        x = np.array([1.0, 2.0, 3.0, 4.0])
        y = np.array([2.1, 3.9, 6.2, 7.8])
        result = normal_equations_cpu(x[:, np.newaxis], y)
        np.testing.assert_allclose(result.coefficients, [x @ y / (x @ x)], rtol=1e-12)

    def test_collinear_raises(self, collinear):
        X, y = collinear
        with pytest.raises(SingularMatrixError) as exc_info:
            normal_equations_cpu(X, y)
        assert exc_info.value.matrix_name == "X'X"
        assert exc_info.value.rank == 2
        assert exc_info.value.expected_rank == 3

    def test_zero_matrix_raises(self):
        with pytest.raises(SingularMatrixError):
            normal_equations_cpu(np.zeros((5, 2)), np.ones(5))


class TestQR:

    def test_matches_normal_equations(self, well_posed):
        X, y = well_posed
        beta, qr_result = qr_solve_cpu(X, y)
        np.testing.assert_allclose(
            beta, normal_equations_cpu(X, y).coefficients, rtol=1e-9
        )
        assert qr_result.rank == 3

    def test_qr_reconstructs(self, well_posed):
        X, _ = well_posed
        qr_result = qr_cpu(X)
        np.testing.assert_allclose(qr_result.Q @ qr_result.R, X, atol=1e-12)

    def test_collinear_raises(self, collinear):
        X, y = collinear
        with pytest.raises(SingularMatrixError) as exc_info:
            qr_solve_cpu(X, y)
        assert exc_info.value.matrix_name == 'X'
