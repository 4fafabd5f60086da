"""
Tests for residual metrics.
"""

import numpy as np
import pytest

from curvefit.core.exceptions import DimensionError, UndefinedMetricError
from curvefit.regression.metrics import compute_metrics


Y = np.array([1.0, 3.0, 2.0, 5.0, 4.0])


class TestComputeMetrics:

    def test_residuals(self):
        y_pred = np.array([1.5, 2.5, 2.0, 4.0, 4.5])
        metrics = compute_metrics(Y, y_pred)
        np.testing.assert_allclose(metrics.residuals, [-0.5, 0.5, 0.0, 1.0, -0.5])
        assert metrics.rss == pytest.approx(1.75)
        assert metrics.tss == pytest.approx(10.0)
        assert metrics.r2 == pytest.approx(1.0 - 1.75 / 10.0)
        assert metrics.rmse == pytest.approx(np.sqrt(1.75 / 5))

    def test_perfect_fit(self):
        metrics = compute_metrics(Y, Y.copy())
        assert metrics.r2 == 1.0
        assert metrics.rmse == 0.0

    def test_mean_prediction_has_zero_r2(self):
        metrics = compute_metrics(Y, np.full_like(Y, Y.mean()))
        assert metrics.r2 == pytest.approx(0.0, abs=1e-15)

    def test_worse_than_mean_is_negative(self):
        metrics = compute_metrics(Y, Y[::-1].copy())
        assert metrics.r2 < 0.0

    def test_length_mismatch(self):
        with pytest.raises(DimensionError):
            compute_metrics(Y, Y[:3])


class TestUndefinedR2:

    def test_constant_response_raises(self):
        y = np.full(10, 5.0)
        metrics = compute_metrics(y, y.copy())
        assert metrics.tss == 0.0
        assert metrics.rmse == 0.0
        with pytest.raises(UndefinedMetricError) as exc_info:
            metrics.r2
        assert exc_info.value.metric == 'r2'

    def test_constant_with_inexact_mean(self):
        # mean of ten 0.1s is not exactly 0.1 in binary
        y = np.full(10, 0.1)
        metrics = compute_metrics(y, np.zeros(10))
        assert metrics.tss == 0.0
        with pytest.raises(UndefinedMetricError):
            metrics.r2


class TestAdjustedR2:

    def test_formula(self):
        y_pred = np.array([1.5, 2.5, 2.0, 4.0, 4.5])
        metrics = compute_metrics(Y, y_pred)
        expected = 1.0 - (1.0 - metrics.r2) * 4 / 3
        assert metrics.adjusted_r2(2) == pytest.approx(expected)

    def test_no_residual_freedom(self):
        metrics = compute_metrics(Y, Y * 0.9)
        with pytest.raises(UndefinedMetricError) as exc_info:
            metrics.adjusted_r2(5)
        assert exc_info.value.metric == 'adjusted_r2'
