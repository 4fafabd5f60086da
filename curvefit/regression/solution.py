"""
Regression solution types.

Contains the backend payload (LeastSquaresParams), the engine payload
(FitParams) and the user-facing FitSolution wrapper.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from curvefit.core.exceptions import UndefinedMetricError
from curvefit.core.result import Result
from curvefit.core.validation import check_array, check_1d, check_finite
from curvefit.regression.design import design_matrix
from curvefit.regression.metrics import Metrics
from curvefit.regression.models import ModelSpec
from curvefit.regression.splines import SegmentFit, SplineFit


@dataclass(frozen=True)
class LeastSquaresParams:
    """
    Parameter payload for one least-squares solve.

    This is the immutable data computed by backends.
    """
    coefficients: NDArray[np.floating[Any]]
    fitted_values: NDArray[np.floating[Any]]
    rank: int


@dataclass(frozen=True)
class FitParams:
    """
    Parameter payload for one call to fit().

    Exactly one of `coefficients` (global design) and `spline`
    (segment-local fit) is set.
    """
    predictions: NDArray[np.floating[Any]]
    metrics: Metrics
    coefficients: NDArray[np.floating[Any]] | None
    columns: tuple[str, ...]
    boundaries: NDArray[np.floating[Any]] | None
    spline: SplineFit | None


@dataclass(frozen=True)
class FitSolution:
    """
    User-facing fit results.

    Wraps the engine Result and exposes predictions, residual metrics,
    knot positions and a predict() method for new predictor values.
    """
    _result: Result[FitParams]
    _model: ModelSpec

    @property
    def model(self) -> ModelSpec:
        return self._model

    @property
    def predictions(self) -> NDArray[np.floating[Any]]:
        return self._result.params.predictions

    @property
    def residuals(self) -> NDArray[np.floating[Any]]:
        return self._result.params.metrics.residuals

    @property
    def rss(self) -> float:
        return self._result.params.metrics.rss

    @property
    def tss(self) -> float:
        return self._result.params.metrics.tss

    @property
    def r2(self) -> float:
        """
        Coefficient of determination.

        Raises:
            UndefinedMetricError: If the response is constant
        """
        return self._result.params.metrics.r2

    @property
    def adjusted_r2(self) -> float:
        """R² adjusted for the number of fitted coefficients."""
        return self._result.params.metrics.adjusted_r2(self.n_coefficients)

    @property
    def rmse(self) -> float:
        return self._result.params.metrics.rmse

    @property
    def n(self) -> int:
        return self._result.params.metrics.n

    @property
    def coefficients(self) -> NDArray[np.floating[Any]] | None:
        """Global coefficients, or None for a segment-local spline fit."""
        return self._result.params.coefficients

    @property
    def columns(self) -> tuple[str, ...]:
        return self._result.params.columns

    @property
    def segments(self) -> tuple[SegmentFit | None, ...]:
        """Per-segment cubics; empty unless fitted segment-locally."""
        spline = self._result.params.spline
        return spline.segments if spline is not None else ()

    @property
    def n_coefficients(self) -> int:
        spline = self._result.params.spline
        if spline is None:
            return len(self.coefficients)
        return sum(len(s.coefficients) for s in spline.segments if s is not None)

    @property
    def boundaries(self) -> NDArray[np.floating[Any]]:
        """All knot boundaries including the domain extremes (spline models)."""
        b = self._result.params.boundaries
        return b if b is not None else np.empty(0, dtype=np.float64)

    @property
    def knot_positions(self) -> NDArray[np.floating[Any]]:
        """Interior knots, for callers that draw them. Empty for non-splines."""
        b = self._result.params.boundaries
        return b[1:-1] if b is not None else np.empty(0, dtype=np.float64)

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

    def predict(self, x: ArrayLike) -> NDArray[np.floating[Any]]:
        """
        Evaluate the fitted model at new predictor values.

        Spline models reuse the knots placed at fit time. The natural
        spline's segment-local fit clamps values outside the training
        range to the boundary responses; every other model extrapolates.
        """
        x_arr = check_array(x, 'x')
        check_1d(x_arr, 'x')
        check_finite(x_arr, 'x')

        params = self._result.params
        if params.spline is not None:
            return params.spline.predict(x_arr)

        X, _ = design_matrix(x_arr, self._model, boundaries=params.boundaries)
        return X @ params.coefficients

    def summary(self) -> str:
        """Plain-text fit report."""
        lines = [
            "Regression Fit Results",
            "=" * 60,
            f"Model: {self._model!r}",
            f"Observations: {self.n}",
            f"Method: {self.info.get('method', '?')}",
            f"R-squared: {_format_metric(lambda: self.r2)}",
            f"Adj. R-squared: {_format_metric(lambda: self.adjusted_r2)}",
            f"RMSE: {self.rmse:.6f}",
        ]

        if len(self.knot_positions) > 0:
            knots = ", ".join(f"{k:.4g}" for k in self.knot_positions)
            lines.append(f"Knots: {knots}")

        lines.append("")
        if self.coefficients is not None:
            lines.append("Coefficients:")
            lines.append("-" * 60)
            for name, coef in zip(self.columns, self.coefficients):
                lines.append(f"  {name:<20} {coef:14.6f}")
        else:
            lines.append("Segments:")
            lines.append("-" * 60)
            for seg in self.segments:
                if seg is None:
                    continue
                coefs = " ".join(f"{c:12.5g}" for c in seg.coefficients)
                lines.append(
                    f"  [{seg.start:8.4g}, {seg.end:8.4g}] n={seg.n_samples:<4} {coefs}"
                )

        lines.append("-" * 60)
        lines.append(f"Backend: {self.backend_name}")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")
        for w in self.warnings:
            lines.append(f"Warning: {w}")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"FitSolution(model={self._model!r}, n={self.n}, "
            f"r2={_format_metric(lambda: self.r2, '.4f')}, rmse={self.rmse:.4f})"
        )


def _format_metric(getter, fmt: str = '.6f') -> str:
    try:
        return format(getter(), fmt)
    except UndefinedMetricError:
        return "undefined"
