"""Top-k coefficient selection (lossy compression proxy)."""

import numpy as np


def keep_top_k(coeffs: np.ndarray, k: int) -> np.ndarray:
    """
    Keep roughly the k largest-magnitude coefficients of each row.

    The k-th largest magnitude of a row is its threshold. A coefficient is
    zeroed when its magnitude is below the threshold, or when it equals the
    threshold and its column index is >= k. So the k-th largest itself is
    dropped whenever it sits at column >= k, tie or not, and the row keeps
    k-1 values. With k=2:

        |c| = [1, 2, 3, 4]  keeps column 3 only
        |c| = [4, 3, 2, 1]  keeps columns 0 and 1
        |c| = [1, 3, 3, 3]  keeps column 1 only
        |c| = [3, 3, 1, 5]  keeps columns 0, 1 and 3 (ties below k)
    
    k >= m returns an unchanged copy; k == 0 returns all zeros.
    """
    coeffs = np.asarray(coeffs, dtype=np.float64)
    if coeffs.ndim != 2:
        raise ValueError(f"Expected (num_blocks, m) coefficients, got shape {coeffs.shape}")
    if k < 0:
        raise ValueError(f"k must be non-negative, got {k}")
    m = coeffs.shape[1]
    if k >= m:
        return coeffs.copy()
    if k == 0:
        return np.zeros_like(coeffs)
    
    mags = np.abs(coeffs)
    # k-th largest per row
    thresh = -np.partition(-mags, k - 1, axis=1)[:, k - 1:k]
    cols = np.arange(m)[None, :]
    drop = (mags < thresh) | ((cols >= k) & (mags == thresh))
    out = coeffs.copy()
    out[drop] = 0.0
    return out
