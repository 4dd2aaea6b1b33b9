"""
Regression backends.

Available backends:
    CPUNormalEquationsBackend: Gram matrix + pivoted Gaussian elimination
    CPUQRBackend: QR decomposition of the design matrix
"""

from habitstats.regression.backends.cpu import CPUNormalEquationsBackend, CPUQRBackend

__all__ = [
    "CPUNormalEquationsBackend",
    "CPUQRBackend",
]
