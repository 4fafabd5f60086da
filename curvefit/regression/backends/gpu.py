"""
GPU backend for least squares using PyTorch.

Solves the normal equations on CUDA or MPS devices and returns float64
NumPy arrays. Validated against the CPU normal-equations backend.
"""

from typing import Any
import numpy as np

from curvefit.core.result import Result
from curvefit.core.exceptions import SingularMatrixError
from curvefit.core.compute.timing import Timer
from curvefit.regression.design import Design
from curvefit.regression.solution import LeastSquaresParams
from curvefit.regression.backends.cpu import CONDITION_WARNING_THRESHOLD


class GPUNormalBackend:
    """
    GPU backend solving (X'X) β = X'y with PyTorch.

    FP64 by default, matching the CPU backends. MPS (Apple Silicon) has
    no float64 support and requires use_fp64=False.
    """

    def __init__(self, use_fp64: bool = True, device: str = 'cuda'):
        """
        Args:
            use_fp64: Solve in float64 (True) or float32 (False)
            device: GPU device type ('cuda', 'cuda:0', 'mps')

        Raises:
            RuntimeError: If the requested device is unavailable
            ValueError: If the device string is not recognised
        """
        import torch

        if device.startswith('cuda'):
            if not torch.cuda.is_available():
                raise RuntimeError(
                    "CUDA not available. Install PyTorch with CUDA support, "
                    "or use backend='cpu'."
                )
            self.device = torch.device(device)
            self.dtype = torch.float64 if use_fp64 else torch.float32
            self.use_fp64 = use_fp64

        elif device == 'mps':
            if not (hasattr(torch.backends, 'mps') and torch.backends.mps.is_available()):
                raise RuntimeError(
                    "MPS not available. Requires macOS with Apple Silicon "
                    "and PyTorch with MPS support."
                )
            if use_fp64:
                raise RuntimeError(
                    "MPS does not support float64. Use use_fp64=False "
                    "or use backend='cpu' for double precision."
                )
            self.device = torch.device('mps')
            self.dtype = torch.float32
            self.use_fp64 = False

        else:
            raise ValueError(
                f"Unknown GPU device: {device!r}. Use 'cuda' or 'mps'."
            )

    @property
    def name(self) -> str:
        precision = "fp64" if self.use_fp64 else "fp32"
        return f'gpu_normal_{precision}'

    def solve(self, design: Design) -> Result[LeastSquaresParams]:
        """
        Solve least squares on the GPU via the normal equations.

        Raises:
            SingularMatrixError: If X'X is singular
        """
        import torch

        timer = Timer(sync_cuda=self.device.type == 'cuda')
        timer.start()

        n, p = design.n, design.p

        with timer.section('data_transfer_to_gpu'):
            X = torch.from_numpy(design.X).to(device=self.device, dtype=self.dtype)
            y = torch.from_numpy(design.y).to(device=self.device, dtype=self.dtype)

        with timer.section('normal_equations'):
            XtX = X.T @ X
            Xty = X.T @ y

        # svdvals is not implemented on MPS; do the rank check on CPU there
        with timer.section('rank_check'):
            try:
                sv = torch.linalg.svdvals(X)
            except (NotImplementedError, RuntimeError):
                sv = torch.linalg.svdvals(X.cpu())
            sv_max = float(sv[0].item())
            tol = max(n, p) * torch.finfo(self.dtype).eps * sv_max
            rank = int((sv > tol).sum().item())
            cond = (sv_max / float(sv[-1].item())) ** 2 if rank == p else float('inf')

        if rank < p:
            timer.stop()
            raise SingularMatrixError(
                f"Normal-equations matrix X'X is singular: rank={rank}, expected={p}. "
                f"Columns of the design matrix are linearly dependent.",
                matrix_name="X'X",
                condition_number=cond,
                rank=rank,
                expected_rank=p,
            )

        with timer.section('solve'):
            coef_gpu = torch.linalg.solve(XtX, Xty)
            fitted_gpu = X @ coef_gpu

        with timer.section('data_transfer_to_cpu'):
            coefficients = coef_gpu.cpu().numpy().astype(np.float64)
            fitted_values = fitted_gpu.cpu().numpy().astype(np.float64)

        timer.stop()

        warnings_list = []
        if cond > CONDITION_WARNING_THRESHOLD:
            warnings_list.append(
                f"X'X is ill-conditioned (condition number {cond:.2e}); "
                f"coefficients may be inaccurate"
            )

        params = LeastSquaresParams(
            coefficients=coefficients,
            fitted_values=fitted_values,
            rank=rank,
        )

        info: dict[str, Any] = {
            'method': 'normal_equations',
            'rank': rank,
            'condition_number': cond,
            'device': str(self.device),
            'dtype': str(self.dtype),
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )
