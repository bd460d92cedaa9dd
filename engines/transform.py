"""Forward/inverse block transforms with optional mean removal."""

import numpy as np
from typing import Optional

from engines.linalg import LinearAlgebra


def _check_mean(mean: Optional[np.ndarray], d: int) -> Optional[np.ndarray]:
    if mean is None:
        return None
    mean = np.asarray(mean, dtype=np.float64)
    if mean.shape != (d,):
        raise ValueError(f"Mean vector must have length {d}, got shape {mean.shape}")
    return mean


def forward_transform(
    blocks: np.ndarray,
    basis: np.ndarray,
    mean: Optional[np.ndarray] = None,
    linalg: Optional[LinearAlgebra] = None
) -> np.ndarray:
    """Project (mean-removed) blocks onto the basis rows -> (num_blocks, m)."""
    blocks = np.asarray(blocks, dtype=np.float64)
    basis = np.asarray(basis, dtype=np.float64)
    if blocks.ndim != 2 or basis.ndim != 2 or blocks.shape[1] != basis.shape[1]:
        raise ValueError(
            f"Blocks {blocks.shape} and basis {basis.shape} have incompatible shapes"
        )
    linalg = linalg or LinearAlgebra()
    mean = _check_mean(mean, blocks.shape[1])
    centered = blocks - mean if mean is not None else blocks
    return linalg.matmul(centered, basis.T)


def inverse_transform(
    coeffs: np.ndarray,
    basis: np.ndarray,
    mean: Optional[np.ndarray] = None,
    linalg: Optional[LinearAlgebra] = None
) -> np.ndarray:
    """Rebuild blocks as coeffs @ basis, then add the mean back."""
    coeffs = np.asarray(coeffs, dtype=np.float64)
    basis = np.asarray(basis, dtype=np.float64)
    if coeffs.ndim != 2 or basis.ndim != 2 or coeffs.shape[1] != basis.shape[0]:
        raise ValueError(
            f"Coefficients {coeffs.shape} and basis {basis.shape} have incompatible shapes"
        )
    linalg = linalg or LinearAlgebra()
    mean = _check_mean(mean, basis.shape[1])
    blocks = linalg.matmul(coeffs, basis)
    if mean is not None:
        blocks = blocks + mean
    return blocks
