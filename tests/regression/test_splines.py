"""
Tests for segment-local spline fitting.

Covers segment location (lowest segment wins on a knot), inclusive
segment membership, per-segment sample requirements and the natural
variant's boundary clamp.
"""

import numpy as np
import pytest

from curvefit.core.exceptions import InsufficientSamplesError, SingularMatrixError
from curvefit.regression.backends import CPUNormalBackend
from curvefit.regression.models import NaturalSpline, PiecewiseSpline
from curvefit.regression.splines import (
    SEGMENT_MIN_SAMPLES,
    fit_segments,
    locate_segments,
    segment_members,
)


@pytest.fixture
def backend():
    return CPUNormalBackend()


@pytest.fixture
def wave_data():
    x = np.linspace(0.0, 10.0, 40)
    return x, np.sin(x) + 0.3 * x


# ═══════════════════════════════════════════════════════════════════════
# Segment location and membership
# ═══════════════════════════════════════════════════════════════════════


class TestLocateSegments:

    def test_interior_and_ties(self):
        boundaries = np.array([0.0, 4.0, 8.0])
        points = np.array([0.0, 2.0, 4.0, 5.0, 8.0])
        np.testing.assert_array_equal(
            locate_segments(points, boundaries), [0, 0, 0, 1, 1]
        )

    def test_out_of_domain_goes_to_boundary_segments(self):
        boundaries = np.array([0.0, 4.0, 8.0])
        points = np.array([-3.0, 12.0])
        np.testing.assert_array_equal(locate_segments(points, boundaries), [0, 1])

    def test_single_segment(self):
        boundaries = np.array([0.0, 1.0])
        points = np.array([-1.0, 0.5, 2.0])
        np.testing.assert_array_equal(locate_segments(points, boundaries), [0, 0, 0])


class TestSegmentMembers:

    def test_inclusive_both_ends(self):
        x = np.array([0.0, 4.0, 8.0])
        np.testing.assert_array_equal(segment_members(x, 0.0, 4.0), [True, True, False])
        np.testing.assert_array_equal(segment_members(x, 4.0, 8.0), [False, True, True])

    def test_knot_sample_in_both_fitting_sets(self, backend):
        x = np.arange(9.0)  # knot at 4.0
        y = np.cos(x)
        spline = fit_segments(x, y, PiecewiseSpline(knots=1), backend)
        left, right = spline.segments
        assert left.n_samples == 5
        assert right.n_samples == 5
        assert left.n_samples + right.n_samples == len(x) + 1


# ═══════════════════════════════════════════════════════════════════════
# Fitting
# ═══════════════════════════════════════════════════════════════════════


class TestFitSegments:

    def test_recovers_cubic_in_each_segment(self, backend):
        x = np.linspace(-2.0, 2.0, 30)
        y = 1.0 - 2.0 * x + 0.5 * x ** 3
        spline = fit_segments(x, y, PiecewiseSpline(knots=2), backend)
        for segment in spline.segments:
            np.testing.assert_allclose(
                segment.coefficients, [1.0, -2.0, 0.0, 0.5], atol=1e-8
            )
        np.testing.assert_allclose(spline.predict(x), y, atol=1e-8)

    def test_segment_matches_numpy_polyfit(self, backend, wave_data):
        x, y = wave_data
        spline = fit_segments(x, y, PiecewiseSpline(knots=1), backend)
        segment = spline.segments[1]
        mask = segment_members(x, segment.start, segment.end)
        expected = np.polyval(np.polyfit(x[mask], y[mask], 3), x[mask])
        np.testing.assert_allclose(segment.evaluate(x[mask]), expected, atol=1e-6)

    def test_boundaries_and_knots(self, backend, wave_data):
        x, y = wave_data
        spline = fit_segments(x, y, PiecewiseSpline(knots=4), backend)
        np.testing.assert_allclose(spline.boundaries, [0, 2, 4, 6, 8, 10])
        np.testing.assert_allclose(spline.interior_knots, [2, 4, 6, 8])
        assert spline.domain == (0.0, 10.0)

    def test_too_few_samples_names_segment(self, backend):
        x = np.arange(10.0)  # knots=3 -> first segment [0, 2.25] has 3 points
        with pytest.raises(InsufficientSamplesError) as exc_info:
            fit_segments(x, np.sin(x), PiecewiseSpline(knots=3), backend)
        assert exc_info.value.segment == 0
        assert exc_info.value.n_samples == 3
        assert exc_info.value.required == SEGMENT_MIN_SAMPLES

    def test_exactly_four_samples_warns(self, backend):
        x = np.arange(10.0)  # knots=2 -> three segments of 4 points
        spline = fit_segments(x, np.sin(x), PiecewiseSpline(knots=2), backend)
        exact = [w for w in spline.warnings if "exactly 4 samples" in w]
        assert len(exact) == 3

    def test_repeated_x_is_singular(self, backend):
        x = np.array([0.0] * 5 + [1.0] * 5)
        y = np.arange(10.0)
        with pytest.raises(SingularMatrixError):
            fit_segments(x, y, PiecewiseSpline(knots=0), backend)

    def test_empty_segment_not_fitted(self, backend):
        x = np.array([0.0, 1.0, 2.0, 3.0, 9.0, 10.0, 11.0, 12.0])
        spline = fit_segments(x, x ** 2, PiecewiseSpline(knots=2), backend)
        assert spline.segments[1] is None
        with pytest.raises(InsufficientSamplesError) as exc_info:
            spline.predict(np.array([6.0]))
        assert exc_info.value.segment == 1


# ═══════════════════════════════════════════════════════════════════════
# Natural boundary clamp
# ═══════════════════════════════════════════════════════════════════════


class TestNaturalClamp:

    def test_outside_domain_clamped(self, backend, wave_data):
        x, y = wave_data
        spline = fit_segments(x, y, NaturalSpline(knots=2), backend)
        np.testing.assert_array_equal(
            spline.predict(np.array([-1.0, -0.001, 10.001, 15.0])),
            [y[0], y[0], y[-1], y[-1]],
        )

    def test_interior_matches_piecewise(self, backend, wave_data):
        x, y = wave_data
        natural = fit_segments(x, y, NaturalSpline(knots=2), backend)
        piecewise = fit_segments(x, y, PiecewiseSpline(knots=2), backend)
        np.testing.assert_array_equal(natural.predict(x), piecewise.predict(x))

    def test_piecewise_extrapolates_boundary_cubic(self, backend, wave_data):
        x, y = wave_data
        spline = fit_segments(x, y, PiecewiseSpline(knots=2), backend)
        outside = np.array([-1.0, 11.0])
        expected = [
            spline.segments[0].evaluate(outside[:1])[0],
            spline.segments[-1].evaluate(outside[1:])[0],
        ]
        np.testing.assert_allclose(spline.predict(outside), expected)
        assert spline.predict(outside)[0] != y[0]

    def test_clamp_uses_extreme_x_not_position(self, backend, wave_data, rng):
        x, y = wave_data
        order = rng.permutation(len(x))
        spline = fit_segments(x[order], y[order], NaturalSpline(knots=1), backend)
        assert spline.boundary_values == (y[0], y[-1])
        np.testing.assert_array_equal(spline.predict(np.array([-5.0, 20.0])), [y[0], y[-1]])
