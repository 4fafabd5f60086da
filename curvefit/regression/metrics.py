"""
Goodness-of-fit metrics.

Residuals, RMSE and R² from observed and predicted responses. R² is a
property that raises when the response is constant rather than a stored
number, so the residuals and RMSE of a constant-response fit remain
readable.
"""

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray

from curvefit.core.exceptions import UndefinedMetricError
from curvefit.core.validation import check_consistent_length


@dataclass(frozen=True)
class Metrics:
    """
    Residual summary for one fit.

    Attributes:
        residuals: y - y_pred (n,)
        rss: Residual sum of squares
        tss: Total sum of squares about the mean of y (exactly 0.0 when
            y is constant)
        n: Number of observations
    """
    residuals: NDArray[np.floating[Any]]
    rss: float
    tss: float
    n: int

    @property
    def rmse(self) -> float:
        return float(np.sqrt(self.rss / self.n))

    @property
    def r2(self) -> float:
        """
        Coefficient of determination, 1 - RSS/TSS.

        Raises:
            UndefinedMetricError: If y is constant (TSS = 0)
        """
        if self.tss == 0:
            raise UndefinedMetricError(
                "R² is undefined for a constant response (total sum of squares is 0)",
                metric='r2',
            )
        return 1.0 - self.rss / self.tss

    def adjusted_r2(self, p: int) -> float:
        """
        R² adjusted for p fitted coefficients: 1 - (1 - R²)(n - 1)/(n - p).

        Raises:
            UndefinedMetricError: If y is constant or n <= p
        """
        if self.n - p <= 0:
            raise UndefinedMetricError(
                f"Adjusted R² is undefined with n={self.n} observations "
                f"and p={p} coefficients (needs n > p)",
                metric='adjusted_r2',
            )
        return 1.0 - (1.0 - self.r2) * (self.n - 1) / (self.n - p)


def compute_metrics(
    y: NDArray[np.floating[Any]],
    y_pred: NDArray[np.floating[Any]],
) -> Metrics:
    """
    Compute residuals, RSS and TSS for observed y and predictions.

    Args:
        y: Observed response (n,)
        y_pred: Predicted response (n,)

    Returns:
        Metrics
    """
    y = np.asarray(y, dtype=np.float64)
    y_pred = np.asarray(y_pred, dtype=np.float64)
    check_consistent_length(y, y_pred, names=('y', 'y_pred'))

    residuals = y - y_pred
    rss = float(residuals @ residuals)

    # Rounding in mean() would leave a tiny nonzero TSS for constant y
    if np.all(y == y[0]):
        tss = 0.0
    else:
        centered = y - np.mean(y)
        tss = float(centered @ centered)

    return Metrics(residuals=residuals, rss=rss, tss=tss, n=len(y))
