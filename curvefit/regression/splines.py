"""
Piecewise cubic splines by segment-local refitting.

The predictor range is cut into knot-bounded segments and an independent
cubic (with constant term) is fitted by least squares to the samples of
each segment. Neighbouring cubics are not joined, so the curve may jump
at a knot.

Segment membership is inclusive at both ends: a sample lying exactly on
an interior knot is part of the fitting set of both adjacent segments.
When a single point has to be assigned to one segment (to choose which
cubic evaluates it), the lower segment wins.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray

from curvefit.core.exceptions import InsufficientSamplesError
from curvefit.core.protocols import Backend
from curvefit.regression.design import Design, knot_boundaries, polynomial_columns
from curvefit.regression.models import SplineSpec

SEGMENT_DEGREE = 3

# Coefficients of a cubic with constant term
SEGMENT_MIN_SAMPLES = SEGMENT_DEGREE + 1


@dataclass(frozen=True)
class SegmentFit:
    """
    Cubic fitted to one segment [start, end].

    Attributes:
        index: Segment position, 0 for the left-most segment
        start: Left boundary
        end: Right boundary
        coefficients: (c0, c1, c2, c3) for c0 + c1·x + c2·x² + c3·x³
        n_samples: Samples in the segment's fitting set
        backend_name: Backend that solved the segment
    """
    index: int
    start: float
    end: float
    coefficients: NDArray[np.floating[Any]]
    n_samples: int
    backend_name: str

    def evaluate(self, x: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        X, _ = polynomial_columns(x, SEGMENT_DEGREE, intercept=True)
        return X @ self.coefficients


def segment_members(
    x: NDArray[np.floating[Any]],
    start: float,
    end: float,
) -> NDArray[np.bool_]:
    """Mask of samples with start <= x <= end."""
    return (x >= start) & (x <= end)


def locate_segments(
    points: NDArray[np.floating[Any]],
    boundaries: NDArray[np.floating[Any]],
) -> NDArray[np.intp]:
    """
    Index of the segment that evaluates each point.

    Segment j covers [boundaries[j], boundaries[j+1]]; the first
    (lowest) matching segment wins, so a point on an interior knot goes
    to the segment on its left. Points below the domain go to segment 0
    and points above it to the last segment.
    """
    n_segments = len(boundaries) - 1
    idx = np.searchsorted(boundaries, points, side='left') - 1
    return np.clip(idx, 0, n_segments - 1)


@dataclass(frozen=True)
class SplineFit:
    """
    A fitted piecewise cubic spline.

    Attributes:
        boundaries: All knot boundaries, domain extremes included
        segments: One SegmentFit per segment, or None for a segment that
            no training sample is located in
        natural: Clamp out-of-domain predictions to the boundary samples
        boundary_values: y of the samples at min(x) and max(x)
        warnings: Non-fatal issues (segments with no residual freedom)
    """
    boundaries: NDArray[np.floating[Any]]
    segments: tuple[SegmentFit | None, ...]
    natural: bool
    boundary_values: tuple[float, float]
    warnings: tuple[str, ...] = ()

    @property
    def interior_knots(self) -> NDArray[np.floating[Any]]:
        return self.boundaries[1:-1]

    @property
    def domain(self) -> tuple[float, float]:
        return float(self.boundaries[0]), float(self.boundaries[-1])

    def predict(self, points: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        """
        Evaluate the spline at points.

        Raises:
            InsufficientSamplesError: If a point falls in a segment that
                held no training samples
        """
        points = np.asarray(points, dtype=np.float64)
        owner = locate_segments(points, self.boundaries)
        out = np.empty(points.shape, dtype=np.float64)

        for j in np.unique(owner):
            segment = self.segments[j]
            if segment is None:
                raise InsufficientSamplesError(
                    f"Segment {j} [{self.boundaries[j]:.6g}, {self.boundaries[j + 1]:.6g}] "
                    f"held no samples and has no fitted cubic",
                    n_samples=0,
                    required=SEGMENT_MIN_SAMPLES,
                    segment=int(j),
                )
            selected = owner == j
            out[selected] = segment.evaluate(points[selected])

        if self.natural:
            lo, hi = self.domain
            y_lo, y_hi = self.boundary_values
            out = np.where(points < lo, y_lo, out)
            out = np.where(points > hi, y_hi, out)

        return out


def fit_segments(
    x: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
    model: SplineSpec,
    backend: Backend,
) -> SplineFit:
    """
    Fit one cubic per knot segment.

    Algorithm:
        1. Place model.knots + 2 uniform boundaries over [min(x), max(x)]
        2. Locate the segment of every sample
        3. For each located segment, collect all samples inside its
           closed interval and fit c0 + c1·x + c2·x² + c3·x³
        4. For NaturalSpline, record the boundary responses used to
           clamp extrapolation

    Args:
        x: Predictor (n,)
        y: Response (n,)
        model: PiecewiseSpline or NaturalSpline
        backend: Least-squares backend used for every segment

    Returns:
        SplineFit

    Raises:
        InsufficientSamplesError: If a segment has fewer than 4 samples
        SingularMatrixError: If a segment's samples cannot determine a
            cubic (e.g. fewer than 4 distinct x values)
    """
    boundaries = knot_boundaries(x, model.knots)
    n_segments = len(boundaries) - 1
    owner = locate_segments(x, boundaries)

    segments: list[SegmentFit | None] = [None] * n_segments
    warnings_list = []

    for j in np.unique(owner):
        j = int(j)
        start, end = float(boundaries[j]), float(boundaries[j + 1])
        mask = segment_members(x, start, end)
        n_j = int(np.count_nonzero(mask))

        if n_j < SEGMENT_MIN_SAMPLES:
            raise InsufficientSamplesError(
                f"Segment {j} [{start:.6g}, {end:.6g}] has {n_j} samples; "
                f"a cubic needs at least {SEGMENT_MIN_SAMPLES}. "
                f"Use fewer knots (currently {model.knots}).",
                n_samples=n_j,
                required=SEGMENT_MIN_SAMPLES,
                segment=j,
            )
        if n_j == SEGMENT_MIN_SAMPLES:
            warnings_list.append(
                f"Segment {j} has exactly {n_j} samples; its cubic interpolates them"
            )

        X_seg, columns = polynomial_columns(x[mask], SEGMENT_DEGREE, intercept=True)
        design = Design.from_arrays(
            X_seg, y[mask], columns=columns, min_samples=SEGMENT_MIN_SAMPLES
        )
        result = backend.solve(design)
        warnings_list.extend(f"Segment {j}: {w}" for w in result.warnings)

        segments[j] = SegmentFit(
            index=j,
            start=start,
            end=end,
            coefficients=result.params.coefficients,
            n_samples=n_j,
            backend_name=result.backend_name,
        )

    boundary_values = (float(y[np.argmin(x)]), float(y[np.argmax(x)]))

    return SplineFit(
        boundaries=boundaries,
        segments=tuple(segments),
        natural=model.natural,
        boundary_values=boundary_values,
        warnings=tuple(warnings_list),
    )
