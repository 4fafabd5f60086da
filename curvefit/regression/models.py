"""
Model specifications.

A model specification says which regression family to fit and with what
complexity. Specs are frozen dataclasses validated on construction, so a
spec that exists is a spec that can be used.

    Linear()                  y ≈ b·x
    Polynomial(degree=3)      y ≈ b1·x + b2·x² + b3·x³
    PiecewiseSpline(knots=4)  independent cubic per knot segment
    NaturalSpline(knots=4)    same, with boundary-clamped extrapolation

No model adds an intercept unless asked (`intercept=True`).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from curvefit.core.validation import check_int_param


@dataclass(frozen=True)
class Linear:
    """Simple linear regression on x (degree 1)."""
    intercept: bool = False

    @property
    def degree(self) -> int:
        return 1

    @property
    def name(self) -> str:
        return 'linear'


@dataclass(frozen=True)
class Polynomial:
    """
    Polynomial regression of the given degree.

    Columns are x, x², ..., x^degree, preceded by a column of ones when
    intercept=True.
    """
    degree: int
    intercept: bool = False

    def __post_init__(self) -> None:
        check_int_param(self.degree, 'degree', minimum=1)

    @property
    def name(self) -> str:
        return 'polynomial'


@dataclass(frozen=True)
class PiecewiseSpline:
    """
    Piecewise cubic spline with `knots` uniformly spaced interior knots.

    knots=0 is a single cubic over the whole domain.
    """
    knots: int

    def __post_init__(self) -> None:
        check_int_param(self.knots, 'knots', minimum=0)

    @property
    def natural(self) -> bool:
        return False

    @property
    def name(self) -> str:
        return 'piecewise_spline'


@dataclass(frozen=True)
class NaturalSpline:
    """
    Piecewise cubic spline with approximate natural boundary behaviour.

    Segment path: predictions beyond the observed x range are clamped to
    the y of the nearest boundary sample. Basis path: the truncated-power
    columns of the two right-most knots are dropped.
    """
    knots: int

    def __post_init__(self) -> None:
        check_int_param(self.knots, 'knots', minimum=0)

    @property
    def natural(self) -> bool:
        return True

    @property
    def name(self) -> str:
        return 'natural_spline'


ModelSpec = Union[Linear, Polynomial, PiecewiseSpline, NaturalSpline]
SplineSpec = Union[PiecewiseSpline, NaturalSpline]

# Names used by the interactive front end's model selector
_MODEL_NAMES = ('ols', 'poly', 'spline', 'natural')


def is_spline(model: ModelSpec) -> bool:
    return isinstance(model, (PiecewiseSpline, NaturalSpline))


def model_from_name(
    name: str,
    *,
    degree: int = 2,
    knots: int = 0,
) -> ModelSpec:
    """
    Build a spec from a front-end model name.

    Args:
        name: One of 'ols', 'poly', 'spline', 'natural'
        degree: Polynomial degree, used by 'poly'
        knots: Interior knot count, used by 'spline' and 'natural'

    Returns:
        The corresponding ModelSpec. 'ols' and 'poly' include an
        intercept, matching what the front end has always plotted.

    Raises:
        ValueError: If name is unknown
        InvalidParameterError: If degree or knots is out of range
    """
    if name == 'ols':
        return Linear(intercept=True)
    elif name == 'poly':
        return Polynomial(degree=degree, intercept=True)
    elif name == 'spline':
        return PiecewiseSpline(knots=knots)
    elif name == 'natural':
        return NaturalSpline(knots=knots)
    else:
        raise ValueError(
            f"Unknown model name: {name!r}. Expected one of {_MODEL_NAMES}"
        )
