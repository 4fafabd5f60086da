"""
Shared compute infrastructure for curvefit.

Timing utilities and linear algebra kernels used by the regression
backends. Model-specific code lives in curvefit.regression.

Submodules:
    timing: Execution timing utilities
    linalg: Least-squares kernels (normal equations, QR)
"""

from curvefit.core.compute.timing import Timer

__all__ = [
    "Timer",
]
