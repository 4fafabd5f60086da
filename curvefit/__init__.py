"""
curvefit: regression curves for a single predictor.

Fits simple linear, polynomial, piecewise cubic spline and natural
spline models by least squares and reports R² and RMSE.

Submodules:
    regression: Model specifications, fitting and metrics
    core: Exceptions, validation, result envelope, linear algebra
"""

__version__ = "0.1.0"

from curvefit import regression
from curvefit.regression import (
    fit,
    Linear,
    Polynomial,
    PiecewiseSpline,
    NaturalSpline,
)

__all__ = [
    "__version__",
    "regression",
    "fit",
    "Linear",
    "Polynomial",
    "PiecewiseSpline",
    "NaturalSpline",
]
