"""Rate-distortion curves from top-k truncation."""

import numpy as np
from typing import Optional, Sequence, Tuple

from engines.block_processor import extract_blocks, reconstruct_from_blocks
from engines.linalg import LinearAlgebra
from engines.selector import keep_top_k
from engines.transform import forward_transform, inverse_transform
from models.block_shape import BlockShape
from utils.metrics import psnr


def reconstruct_top_k(
    coeffs: np.ndarray,
    shape: BlockShape,
    basis: np.ndarray,
    mean: Optional[np.ndarray],
    k: int,
    linalg: Optional[LinearAlgebra] = None
) -> np.ndarray:
    """Keep top-k coefficients, invert, reassemble and clamp to [0, 1]."""
    truncated = keep_top_k(coeffs, k)
    blocks = inverse_transform(truncated, basis, mean, linalg)
    grid = reconstruct_from_blocks(blocks, shape)
    return np.clip(grid, 0.0, 1.0)


def rate_distortion(
    reference: np.ndarray,
    shape: BlockShape,
    basis: np.ndarray,
    mean: Optional[np.ndarray],
    k_values: Sequence[int],
    linalg: Optional[LinearAlgebra] = None,
    coeffs: Optional[np.ndarray] = None
) -> Tuple[np.ndarray, np.ndarray]:
    """
    PSNR versus rate k/d for each requested k, in the order given.
    
    Args:
        reference: Block-aligned luminance grid matching shape.
        shape: Block geometry of reference.
        basis: (m, d) basis matrix.
        mean: Mean vector for a learned basis, else None.
        k_values: Coefficient counts kept per block.
        linalg: Optional backend.
        coeffs: Precomputed forward coefficients of reference, if available.
    
    Returns:
        (rates, psnrs)
    """
    reference = np.asarray(reference, dtype=np.float64)
    if reference.shape != (shape.height, shape.width):
        raise ValueError(
            f"Reference {reference.shape} does not match block shape {(shape.height, shape.width)}"
        )
    if coeffs is None:
        blocks, _ = extract_blocks(reference, shape.block_size)
        coeffs = forward_transform(blocks, basis, mean, linalg)
    
    d = shape.dim
    rates = []
    psnrs = []
    for k in k_values:
        recon = reconstruct_top_k(coeffs, shape, basis, mean, k, linalg)
        rates.append(k / d)
        psnrs.append(psnr(reference, recon))
    return np.array(rates, dtype=np.float64), np.array(psnrs, dtype=np.float64)
