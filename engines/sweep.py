"""Batch sweep over block sizes, transforms and kept-coefficient counts."""

import math
import numpy as np
from typing import Callable, Iterator, List, Optional, Sequence

from engines.block_processor import crop_to_multiple, extract_blocks
from engines.basis import build_basis
from engines.linalg import LinearAlgebra
from engines.rate_distortion import rate_distortion
from engines.transform import forward_transform
from models.sweep_row import SweepRow
from utils.constants import DEFAULT_BLOCK_SIZES, DEFAULT_K_FRACTIONS, TRANSFORMS
from utils.logger import get_logger


def k_values_for(d: int, k_fractions: Sequence[float]) -> List[int]:
    """k = max(1, round-half-up(f * d)) for each fraction."""
    return [max(1, int(math.floor(f * d + 0.5))) for f in k_fractions]


def sweep_rows(
    gray: np.ndarray,
    block_sizes: Sequence[int] = DEFAULT_BLOCK_SIZES,
    k_fractions: Sequence[float] = DEFAULT_K_FRACTIONS,
    linalg: Optional[LinearAlgebra] = None,
    progress_callback: Optional[Callable[[int, int, int], None]] = None
) -> Iterator[SweepRow]:
    """
    Yield sweep rows ordered block size -> k -> transform.
    
    Every block size re-crops the full image, so each one sees as many
    pixels as it can. Between block sizes nothing is shared, which makes
    each step a safe point for the caller to pause or stop.
    
    Args:
        gray: Full-resolution luminance in [0, 1].
        block_sizes: Block edge lengths to test.
        k_fractions: Fractions of d to keep, mapped with k_values_for.
        linalg: Optional backend shared by all steps.
        progress_callback: Called as (step, total, block_size) after each
            block size finishes.
    """
    logger = get_logger()
    gray = np.asarray(gray, dtype=np.float64)
    linalg = linalg or LinearAlgebra()
    total = len(block_sizes)
    
    for step, B in enumerate(block_sizes, start=1):
        image = crop_to_multiple(gray, B)
        if image.size == 0:
            logger.warning(f"Skipping block size {B}: image {gray.shape} is smaller than one block")
        else:
            blocks, shape = extract_blocks(image, B)
            d = shape.dim
            k_values = k_values_for(d, k_fractions)
            
            curves = {}
            for kind in TRANSFORMS:
                basis = build_basis(kind, B, blocks, linalg)
                if not basis.ok:
                    logger.warning(f"Skipping {kind} at block size {B}: {basis.error}")
                    continue
                coeffs = forward_transform(blocks, basis.matrix, basis.mean, linalg)
                _, psnrs = rate_distortion(
                    image, shape, basis.matrix, basis.mean, k_values, linalg, coeffs
                )
                curves[kind] = psnrs
            
            for i, k in enumerate(k_values):
                for kind, psnrs in curves.items():
                    yield SweepRow(
                        block_size=B, k=k, rate=k / d, transform=kind, psnr=float(psnrs[i])
                    )
            logger.info(f"Block size {B}: {len(k_values)} k values x {len(curves)} transforms")
        
        if progress_callback:
            progress_callback(step, total, B)


def run_sweep(
    gray: np.ndarray,
    block_sizes: Sequence[int] = DEFAULT_BLOCK_SIZES,
    k_fractions: Sequence[float] = DEFAULT_K_FRACTIONS,
    linalg: Optional[LinearAlgebra] = None,
    progress_callback: Optional[Callable[[int, int, int], None]] = None
) -> List[SweepRow]:
    """Collect all sweep rows into a list."""
    return list(sweep_rows(gray, block_sizes, k_fractions, linalg, progress_callback))
