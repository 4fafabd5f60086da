"""
Core infrastructure for curvefit.

Key components:
    protocols: Backend protocol
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing and linear algebra kernels
"""

from curvefit.core.protocols import Backend
from curvefit.core.result import Result
from curvefit.core.exceptions import (
    CurveFitError,
    ValidationError,
    DimensionError,
    InvalidParameterError,
    InsufficientSamplesError,
    NumericalError,
    SingularMatrixError,
    UndefinedMetricError,
)

__all__ = [
    # Protocols
    "Backend",
    # Result
    "Result",
    # Exceptions
    "CurveFitError",
    "ValidationError",
    "DimensionError",
    "InvalidParameterError",
    "InsufficientSamplesError",
    "NumericalError",
    "SingularMatrixError",
    "UndefinedMetricError",
]
