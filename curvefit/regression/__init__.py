"""
Single-predictor regression: linear, polynomial and cubic spline models.

Public API:
    fit(x, y, model, ...) -> FitSolution

The fit() function is the only entry point. It handles:
    - Input validation
    - Design construction or spline segmentation
    - Backend selection
    - Metrics and result wrapping

Example:
    >>> from curvefit.regression import fit, NaturalSpline
    >>> result = fit(x, y, NaturalSpline(knots=4))
    >>> print(result.r2, result.rmse)
    >>> print(result.knot_positions)
    >>> print(result.summary())
"""

from curvefit.regression.models import (
    Linear,
    Polynomial,
    PiecewiseSpline,
    NaturalSpline,
    ModelSpec,
    model_from_name,
)
from curvefit.regression.design import Design, design_matrix, knot_boundaries
from curvefit.regression.metrics import Metrics, compute_metrics
from curvefit.regression.splines import SegmentFit, SplineFit, fit_segments
from curvefit.regression.solution import FitSolution, LeastSquaresParams
from curvefit.regression.solvers import fit

__all__ = [
    "fit",
    "Linear",
    "Polynomial",
    "PiecewiseSpline",
    "NaturalSpline",
    "ModelSpec",
    "model_from_name",
    "Design",
    "design_matrix",
    "knot_boundaries",
    "Metrics",
    "compute_metrics",
    "SegmentFit",
    "SplineFit",
    "fit_segments",
    "FitSolution",
    "LeastSquaresParams",
]
