"""
Regression Design.

Turns a predictor vector and a model specification into a design matrix,
and pairs it with the response for the backends. Column construction is a
plain function (`design_matrix`) so the same code builds the matrix at fit
time and at predict time.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal
import numpy as np
from numpy.typing import NDArray

from curvefit.core.exceptions import InsufficientSamplesError
from curvefit.core.validation import check_2d, check_1d, check_consistent_length
from curvefit.regression.models import (
    ModelSpec,
    Linear,
    Polynomial,
    PiecewiseSpline,
    NaturalSpline,
)

SplineMethod = Literal['segment', 'basis']

# Truncated-power columns removed for the natural variant of the basis path
NATURAL_DROPPED_COLUMNS = 2


def knot_boundaries(x: NDArray[np.floating[Any]], knots: int) -> NDArray[np.floating[Any]]:
    """
    Uniformly spaced knot boundaries over [min(x), max(x)].

    Returns knots + 2 values: the two domain extremes and the interior
    knots between them.
    """
    return np.linspace(float(np.min(x)), float(np.max(x)), knots + 2)


def polynomial_columns(
    x: NDArray[np.floating[Any]],
    degree: int,
    intercept: bool = False,
) -> tuple[NDArray[np.floating[Any]], tuple[str, ...]]:
    """Powers x¹..x^degree, with x⁰ first when intercept is set."""
    start = 0 if intercept else 1
    powers = np.arange(start, degree + 1)
    X = x[:, np.newaxis] ** powers
    names = tuple(_power_name(k) for k in powers)
    return X, names


def truncated_power_columns(
    x: NDArray[np.floating[Any]],
    interior_knots: NDArray[np.floating[Any]],
) -> tuple[NDArray[np.floating[Any]], tuple[str, ...]]:
    """One column max(0, x - knot)³ per interior knot."""
    X = np.maximum(0.0, x[:, np.newaxis] - interior_knots[np.newaxis, :]) ** 3
    names = tuple(f"(x-{k:.6g})+^3" for k in interior_knots)
    return X, names


def design_matrix(
    x: NDArray[np.floating[Any]],
    model: ModelSpec,
    *,
    boundaries: NDArray[np.floating[Any]] | None = None,
) -> tuple[NDArray[np.floating[Any]], tuple[str, ...]]:
    """
    Build the global design matrix for a model.

    Linear and Polynomial use plain powers of x. Spline models use the
    truncated power basis [x, x², x³, (x - k)₊³ ...]; NaturalSpline drops
    the columns of its two right-most interior knots (all of them when it
    has fewer than two).

    Args:
        x: Predictor values (n,)
        model: Model specification
        boundaries: Knot boundaries for spline models. Computed from x when
            None; pass the training boundaries when predicting on new x.

    Returns:
        (X, column_names)
    """
    if isinstance(model, Linear):
        return polynomial_columns(x, 1, model.intercept)

    if isinstance(model, Polynomial):
        return polynomial_columns(x, model.degree, model.intercept)

    if isinstance(model, (PiecewiseSpline, NaturalSpline)):
        if boundaries is None:
            boundaries = knot_boundaries(x, model.knots)
        interior = boundaries[1:-1]
        if model.natural:
            interior = interior[:max(0, len(interior) - NATURAL_DROPPED_COLUMNS)]
        X_poly, poly_names = polynomial_columns(x, 3)
        X_trunc, trunc_names = truncated_power_columns(x, interior)
        return np.hstack([X_poly, X_trunc]), poly_names + trunc_names

    raise TypeError(f"Unsupported model specification: {model!r}")


def _power_name(k: int) -> str:
    if k == 0:
        return 'intercept'
    if k == 1:
        return 'x'
    return f'x^{k}'


@dataclass(frozen=True)
class Design:
    """
    Design matrix paired with its response.

    Immutable after construction. Backends read X and y and never modify
    them.

    Construction:
        Design.from_model(x, y, Polynomial(3))   # global design for a model
        Design.from_arrays(X, y)                 # explicit matrix
    """
    _X: NDArray[np.floating[Any]]
    _y: NDArray[np.floating[Any]]
    _n: int
    _p: int
    _columns: tuple[str, ...]

    @classmethod
    def from_model(
        cls,
        x: NDArray[np.floating[Any]],
        y: NDArray[np.floating[Any]],
        model: ModelSpec,
        *,
        boundaries: NDArray[np.floating[Any]] | None = None,
    ) -> Design:
        """
        Build the global design for a model.

        Raises:
            InsufficientSamplesError: If the model has as many columns as
                there are samples (K >= N)
        """
        X, columns = design_matrix(x, model, boundaries=boundaries)
        return cls.from_arrays(X, y, columns=columns)

    @classmethod
    def from_arrays(
        cls,
        X: NDArray[np.floating[Any]],
        y: NDArray[np.floating[Any]],
        *,
        columns: tuple[str, ...] | None = None,
        min_samples: int | None = None,
    ) -> Design:
        """
        Build Design directly from arrays.

        Args:
            X: Design matrix (n x p); a 1-D array is treated as one column
            y: Response (n,)
            columns: Column names, defaults to 'x0', 'x1', ...
            min_samples: Minimum rows required. Defaults to p + 1 so that
                the fit has at least one residual degree of freedom.
        """
        X = np.asarray(X, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        if X.ndim == 1:
            X = X.reshape(-1, 1)

        check_2d(X, 'X')
        check_1d(y, 'y')
        check_consistent_length(X, y, names=('X', 'y'))

        n, p = X.shape
        required = p + 1 if min_samples is None else min_samples
        if n < required:
            raise InsufficientSamplesError(
                f"Design has {p} columns but only {n} samples; "
                f"at least {required} samples are required",
                n_samples=n,
                required=required,
            )

        if columns is None:
            columns = tuple(f'x{j}' for j in range(p))

        return cls(_X=X, _y=y, _n=n, _p=p, _columns=tuple(columns))

    # === Properties ===

    @property
    def X(self) -> NDArray[np.floating[Any]]:
        """Design matrix (n x p)."""
        return self._X

    @property
    def y(self) -> NDArray[np.floating[Any]]:
        """Response vector (n,)."""
        return self._y

    @property
    def n(self) -> int:
        """Number of observations."""
        return self._n

    @property
    def p(self) -> int:
        """Number of columns."""
        return self._p

    @property
    def columns(self) -> tuple[str, ...]:
        return self._columns
