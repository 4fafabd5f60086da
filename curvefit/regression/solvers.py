"""
Solver dispatch for regression.

This module provides the fit() function (public API) and backend selection.
"""

import logging
from typing import Any, Literal

from numpy.typing import ArrayLike

from curvefit.core.compute.timing import Timer
from curvefit.core.result import Result
from curvefit.core.validation import check_xy
from curvefit.regression.backends.cpu import CPUNormalBackend, CPUQRBackend
from curvefit.regression.design import Design, SplineMethod, knot_boundaries
from curvefit.regression.metrics import compute_metrics
from curvefit.regression.models import (
    ModelSpec,
    Linear,
    Polynomial,
    PiecewiseSpline,
    NaturalSpline,
    is_spline,
)
from curvefit.regression.solution import FitParams, FitSolution
from curvefit.regression.splines import SEGMENT_DEGREE, fit_segments

logger = logging.getLogger(__name__)

# Type alias for backend selection
BackendChoice = Literal['auto', 'cpu', 'cpu_normal', 'cpu_qr', 'gpu', 'gpu_normal']

_SPLINE_METHODS = ('segment', 'basis')


def fit(
    x: ArrayLike,
    y: ArrayLike,
    model: ModelSpec,
    *,
    spline_method: SplineMethod = 'segment',
    backend: BackendChoice = 'auto',
) -> FitSolution:
    """
    Fit a single-predictor regression model.

    Pipeline:
        validate -> build design | partition into segments
        -> least-squares solve -> predict -> metrics

    Every call is independent: knots are placed from this call's x and
    nothing is cached between calls.

    Args:
        x: Predictor values (n,). Need not be sorted.
        y: Response values (n,)
        model: Linear(), Polynomial(degree), PiecewiseSpline(knots) or
            NaturalSpline(knots)
        spline_method: How spline models are fitted:
            - 'segment': independent cubic per knot segment
            - 'basis': one global fit on the truncated power basis
        backend: Least-squares backend:
            - 'auto' / 'cpu' / 'cpu_normal': normal equations on CPU
            - 'cpu_qr': QR decomposition on CPU
            - 'gpu' / 'gpu_normal': normal equations with PyTorch on CUDA

    Returns:
        FitSolution with predictions, residuals, r2, rmse and knot positions

    Raises:
        ValidationError: If x or y is not a finite 1-D numeric array
        DimensionError: If x and y differ in length
        InsufficientSamplesError: If the model needs more samples than
            given, globally or within a spline segment
        SingularMatrixError: If the least-squares system is singular
        TypeError: If model is not a model specification
        ValueError: If spline_method or backend is unknown

    Example:
        >>> import numpy as np
        >>> from curvefit.regression import fit, Polynomial
        >>>
        >>> x = np.arange(6.0)
        >>> result = fit(x, x ** 2, Polynomial(degree=2))
        >>> result.coefficients   # approximately [0, 1]
        >>> result.r2             # approximately 1.0
    """
    # === Input Validation ===
    # This is the boundary - validate here, trust everywhere else
    x_arr, y_arr = check_xy(x, y)

    if not isinstance(model, (Linear, Polynomial, PiecewiseSpline, NaturalSpline)):
        raise TypeError(
            f"model must be Linear, Polynomial, PiecewiseSpline or NaturalSpline, "
            f"got {type(model).__name__}"
        )
    if spline_method not in _SPLINE_METHODS:
        raise ValueError(
            f"Unknown spline_method: {spline_method!r}. Expected one of {_SPLINE_METHODS}"
        )

    # === Select Backend ===
    backend_impl = _get_backend(backend)
    segment_local = is_spline(model) and spline_method == 'segment'
    logger.debug(
        "fit: model=%r n=%d backend=%s path=%s",
        model, len(x_arr), backend_impl.name, 'segment' if segment_local else 'design',
    )

    timer = Timer()
    timer.start()
    info: dict[str, Any] = {'model': model.name}
    warnings_list: list[str] = []

    # === Solve ===
    if segment_local:
        with timer.section('segment_fits'):
            spline = fit_segments(x_arr, y_arr, model, backend_impl)
        with timer.section('predict'):
            predictions = spline.predict(x_arr)

        coefficients = None
        boundaries = spline.boundaries
        columns = tuple(f'c{k}' for k in range(SEGMENT_DEGREE + 1))
        warnings_list.extend(spline.warnings)
        info.update({
            'method': 'segment',
            'n_segments': len(spline.segments),
            'n_fitted_segments': sum(s is not None for s in spline.segments),
        })
    else:
        spline = None
        boundaries = knot_boundaries(x_arr, model.knots) if is_spline(model) else None
        with timer.section('design'):
            design = Design.from_model(x_arr, y_arr, model, boundaries=boundaries)
        with timer.section('solve'):
            result = backend_impl.solve(design)

        predictions = result.params.fitted_values
        coefficients = result.params.coefficients
        columns = design.columns
        warnings_list.extend(result.warnings)
        info.update(result.info)
        info['design_method'] = 'basis' if is_spline(model) else 'polynomial'

    # === Metrics ===
    with timer.section('metrics'):
        metrics = compute_metrics(y_arr, predictions)

    timer.stop()

    for w in warnings_list:
        logger.debug("fit warning: %s", w)

    params = FitParams(
        predictions=predictions,
        metrics=metrics,
        coefficients=coefficients,
        columns=columns,
        boundaries=boundaries,
        spline=spline,
    )

    # === Wrap and Return ===
    return FitSolution(
        _result=Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=backend_impl.name,
            warnings=tuple(warnings_list),
        ),
        _model=model,
    )


def _get_backend(choice: BackendChoice):
    """
    Select and instantiate the appropriate backend.

    Raises:
        ValueError: If unknown backend specified
        RuntimeError: If GPU requested but unavailable
    """
    if choice in ('auto', 'cpu', 'cpu_normal'):
        return CPUNormalBackend()

    elif choice == 'cpu_qr':
        return CPUQRBackend()

    elif choice in ('gpu', 'gpu_normal'):
        from curvefit.regression.backends.gpu import GPUNormalBackend
        return GPUNormalBackend()

    else:
        raise ValueError(f"Unknown backend: {choice!r}")
