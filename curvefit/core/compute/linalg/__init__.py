"""
Linear algebra kernels for curvefit.

Both solvers take a design matrix X (n x p) and a response y (n,) and
return the least-squares coefficients, raising SingularMatrixError when
the solution is not unique.

Submodules:
    normal: Normal equations (X'X) β = X'y, the default path
    qr: QR decomposition of X
"""

from curvefit.core.compute.linalg.normal import (
    NormalEquationsResult,
    normal_equations_cpu,
)
from curvefit.core.compute.linalg.qr import (
    QRResult,
    qr_cpu,
    qr_solve_cpu,
)

__all__ = [
    "NormalEquationsResult",
    "normal_equations_cpu",
    "QRResult",
    "qr_cpu",
    "qr_solve_cpu",
]
