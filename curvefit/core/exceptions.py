"""
Exception hierarchy for curvefit.

All exceptions inherit from CurveFitError so callers can catch any
library-specific failure in one place. Errors carry their diagnostic
values as attributes, and messages state the actual and required values.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class CurveFitError(Exception):
    """Base exception for all curvefit errors."""
    pass


class ValidationError(CurveFitError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when x and y are not 1-D or have different lengths.
    """
    pass


class InvalidParameterError(ValidationError):
    """
    A model parameter is out of range or of the wrong type.

    Attributes:
        parameter: Name of the offending parameter ('degree', 'knots', ...)
        value: The rejected value
    """

    def __init__(
        self,
        message: str,
        parameter: str | None = None,
        value: object = None,
    ):
        super().__init__(message)
        self.parameter = parameter
        self.value = value


class InsufficientSamplesError(ValidationError):
    """
    Too few samples for the requested model complexity.

    Raised globally (design matrix has K >= N columns) or for a single
    spline segment that holds fewer points than a cubic needs.

    Attributes:
        n_samples: Number of samples available
        required: Number of samples needed
        segment: Segment index, or None for a global failure
    """

    def __init__(
        self,
        message: str,
        n_samples: int | None = None,
        required: int | None = None,
        segment: int | None = None,
    ):
        super().__init__(message)
        self.n_samples = n_samples
        self.required = required
        self.segment = segment


class NumericalError(CurveFitError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular.

    Raised when the normal-equations matrix X'X (or the R factor of X)
    cannot be inverted.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        condition_number: Estimated condition number, if available
        rank: Numerical rank, if computed
        expected_rank: Rank required for a unique solution
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        condition_number: float | None = None,
        rank: int | None = None,
        expected_rank: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.condition_number = condition_number
        self.rank = rank
        self.expected_rank = expected_rank


class UndefinedMetricError(NumericalError):
    """
    A goodness-of-fit metric has a zero denominator.

    Raised for R² when the response is constant (total sum of squares
    is zero), instead of returning the meaningless 1 - 0/0.

    Attributes:
        metric: Name of the undefined metric ('r2', 'adjusted_r2')
    """

    def __init__(self, message: str, metric: str | None = None):
        super().__init__(message)
        self.metric = metric
