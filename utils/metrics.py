"""Metrics: PSNR, SSIM, energy compaction, timing."""

import time
import numpy as np
from skimage.metrics import structural_similarity
from typing import Dict, Optional, Tuple

from utils.constants import ENERGY_EPS, PSNR_SENTINEL

# Default SSIM window of skimage
_SSIM_MIN_SIDE = 7


def psnr(reference: np.ndarray, candidate: np.ndarray, max_val: float = 1.0) -> float:
    """PSNR in dB; a perfect match returns PSNR_SENTINEL instead of inf."""
    reference = np.asarray(reference, dtype=np.float64)
    candidate = np.asarray(candidate, dtype=np.float64)
    if reference.shape != candidate.shape:
        raise ValueError(f"Shape mismatch: {reference.shape} vs {candidate.shape}")
    if reference.size == 0:
        raise ValueError("PSNR of empty arrays is undefined")
    diff = reference - candidate
    mse = float(np.mean(diff * diff))
    if mse == 0.0:
        return PSNR_SENTINEL
    return float(10.0 * np.log10((max_val * max_val) / mse))


def compute_ssim(reference: np.ndarray, candidate: np.ndarray, data_range: float = 1.0) -> float:
    """SSIM of two luminance images; NaN when smaller than the SSIM window."""
    if reference.shape != candidate.shape:
        raise ValueError(f"Shape mismatch: {reference.shape} vs {candidate.shape}")
    if min(reference.shape) < _SSIM_MIN_SIDE:
        return float('nan')
    return float(structural_similarity(
        reference.astype(np.float64), candidate.astype(np.float64), data_range=data_range
    ))


def energy_compaction_curve(
    coeffs: np.ndarray,
    max_k: Optional[int] = None
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Average fraction of block energy held by the k largest coefficients.
    
    Each block's squared coefficients are sorted descending and their
    prefix sums divided by the block's total energy (plus ENERGY_EPS, so
    an all-zero block contributes 0). The fractions are averaged over all
    blocks for k = 1..max_k.
    
    Returns:
        (ks, avg_fraction), both of length max_k.
    """
    coeffs = np.asarray(coeffs, dtype=np.float64)
    if coeffs.ndim != 2 or coeffs.shape[0] == 0:
        raise ValueError(f"Expected non-empty (num_blocks, m) coefficients, got shape {coeffs.shape}")
    m = coeffs.shape[1]
    if max_k is None:
        max_k = m
    if not 1 <= max_k <= m:
        raise ValueError(f"max_k must be in [1, {m}], got {max_k}")
    
    sq = np.sort(coeffs * coeffs, axis=1)[:, ::-1]
    total = sq.sum(axis=1, keepdims=True) + ENERGY_EPS
    cumulative = np.cumsum(sq[:, :max_k], axis=1)
    avg_fraction = (cumulative / total).mean(axis=0)
    ks = np.arange(1, max_k + 1)
    return ks, avg_fraction


class Timer:
    """Wall-clock timer for named analysis stages."""
    
    def __init__(self):
        self.timings_ms: Dict[str, float] = {}
    
    def measure(self, stage: str, func, *args, **kwargs):
        start = time.perf_counter()
        result = func(*args, **kwargs)
        elapsed = (time.perf_counter() - start) * 1000.0
        self.timings_ms[stage] = self.timings_ms.get(stage, 0.0) + elapsed
        return result
    
    @property
    def total_ms(self) -> float:
        return sum(self.timings_ms.values())
