"""
Least-squares backends.

Available backends:
    CPUNormalBackend: Normal equations on CPU (default)
    CPUQRBackend: QR decomposition on CPU
    GPUNormalBackend: Normal equations with PyTorch (imported on demand)
"""

from curvefit.regression.backends.cpu import CPUNormalBackend, CPUQRBackend

__all__ = [
    "CPUNormalBackend",
    "CPUQRBackend",
]
