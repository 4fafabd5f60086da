"""
Least squares via the normal equations.

Solves (X'X) β = X'y directly. This squares the condition number of X,
which is acceptable for the low-degree polynomial and spline bases used
here; the QR path in `qr.py` is the alternative with the same contract.
"""

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray

from curvefit.core.exceptions import SingularMatrixError


@dataclass(frozen=True)
class NormalEquationsResult:
    """
    Solution of the normal equations.

    Attributes:
        coefficients: β (p,)
        rank: Numerical rank of X'X
        condition_number: 2-norm condition number of X'X (inf if singular)
    """
    coefficients: NDArray[np.floating[Any]]
    rank: int
    condition_number: float


def normal_equations_cpu(
    X: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
) -> NormalEquationsResult:
    """
    Solve min_β ||y - Xβ||² through β = (X'X)⁻¹ X'y.

    Rank is determined from the singular values of X (not X'X, whose
    rounding error would swamp the small ones) with the usual
    max(n, p) * eps * σ_max tolerance. A rank-deficient system is
    an error. An invertible but badly conditioned one is not: it returns
    whatever coefficients double precision produces, and the caller
    decides whether to warn.

    Args:
        X: Design matrix (n x p)
        y: Response vector (n,)

    Returns:
        NormalEquationsResult

    Raises:
        SingularMatrixError: If X'X is not invertible
    """
    n, p = X.shape
    XtX = X.T @ X
    Xty = X.T @ y

    sv = np.linalg.svd(X, compute_uv=False)
    if len(sv) > 0 and sv[0] > 0:
        tol = max(n, p) * np.finfo(X.dtype).eps * sv[0]
        rank = int(np.sum(sv > tol))
    else:
        rank = 0
    # cond(X'X) = cond(X)²
    condition_number = float((sv[0] / sv[-1]) ** 2) if rank == p else float('inf')

    if rank < p:
        raise SingularMatrixError(
            f"Normal-equations matrix X'X is singular: rank={rank}, expected={p}. "
            f"Columns of the design matrix are linearly dependent.",
            matrix_name="X'X",
            condition_number=condition_number,
            rank=rank,
            expected_rank=p,
        )

    try:
        beta = np.linalg.solve(XtX, Xty)
    except np.linalg.LinAlgError as e:
        raise SingularMatrixError(
            f"Normal-equations matrix X'X could not be inverted: {e}",
            matrix_name="X'X",
            condition_number=condition_number,
            rank=rank,
            expected_rank=p,
        ) from e

    return NormalEquationsResult(
        coefficients=beta,
        rank=rank,
        condition_number=condition_number,
    )
