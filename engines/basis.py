"""
Transform bases: DCT-II, Walsh/Hadamard and learned PCA.

Every basis is a matrix whose rows are basis vectors in the same row-major
pixel order as the flattened blocks from extract_blocks.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from engines.linalg import LinearAlgebra
from utils.constants import DCT, HADAMARD, PCA


class InvalidDimensionError(ValueError):
    """Basis size is not supported by the requested transform."""


class DecompositionError(RuntimeError):
    """SVD of the training data failed."""


@dataclass
class BasisResult:
    """Outcome of building one transform basis."""
    
    kind: str
    matrix: Optional[np.ndarray] = None
    mean: Optional[np.ndarray] = None
    error: Optional[Exception] = None
    
    @property
    def ok(self) -> bool:
        return self.error is None


def dct_matrix(n: int) -> np.ndarray:
    """Orthonormal DCT-II matrix: C[k, i] = a(k) cos(pi (2i+1) k / 2n)."""
    if n < 1:
        raise InvalidDimensionError(f"DCT size must be >= 1, got {n}")
    k = np.arange(n, dtype=np.float64)[:, None]
    i = np.arange(n, dtype=np.float64)[None, :]
    alpha = np.full((n, 1), np.sqrt(2.0 / n))
    alpha[0, 0] = np.sqrt(1.0 / n)
    return alpha * np.cos(np.pi * (2.0 * i + 1.0) * k / (2.0 * n))


def is_power_of_two(n: int) -> bool:
    return n >= 1 and (n & (n - 1)) == 0


def hadamard_matrix(n: int) -> np.ndarray:
    """
    Orthonormal Walsh/Hadamard matrix in Sylvester (natural) order.
    
    Built by doubling in place: the filled top-left quadrant H' of size
    m is copied to [H', H'; H', -H'] until the full size is reached, then
    the matrix is scaled by 1/sqrt(n).
    
    Raises:
        InvalidDimensionError: if n is not a power of two.
    """
    if not is_power_of_two(n):
        raise InvalidDimensionError(f"Hadamard size must be a power of two, got {n}")
    H = np.zeros((n, n), dtype=np.float64)
    H[0, 0] = 1.0
    m = 1
    while m < n:
        top_left = H[:m, :m]
        H[:m, m:2 * m] = top_left
        H[m:2 * m, :m] = top_left
        H[m:2 * m, m:2 * m] = -top_left
        m *= 2
    H *= 1.0 / np.sqrt(n)
    return H


def separable_2d(basis_1d: np.ndarray, linalg: Optional[LinearAlgebra] = None) -> np.ndarray:
    """2D basis as the Kronecker product of a 1D basis with itself."""
    basis_1d = np.asarray(basis_1d, dtype=np.float64)
    if basis_1d.ndim != 2 or basis_1d.shape[0] != basis_1d.shape[1]:
        raise ValueError(f"Expected a square 1D basis, got shape {basis_1d.shape}")
    linalg = linalg or LinearAlgebra()
    return np.ascontiguousarray(linalg.kron(basis_1d, basis_1d))


def learned_basis(
    blocks: np.ndarray,
    linalg: Optional[LinearAlgebra] = None
) -> Tuple[np.ndarray, np.ndarray]:
    """
    PCA basis learned from the blocks themselves.
    
    The blocks are mean-centered and decomposed with an SVD. With at least
    as many samples as dimensions the right singular vectors of the
    centered data are used; otherwise the transpose is decomposed and its
    left singular vectors are used. Either way the d x d basis rows are
    ordered by decreasing singular value.
    
    Returns:
        (basis, mean) with basis of shape (d, d) and mean of length d.
    
    Raises:
        DecompositionError: non-finite data or SVD failure.
    """
    X = np.asarray(blocks, dtype=np.float64)
    if X.ndim != 2 or X.shape[0] == 0:
        raise ValueError(f"Expected a non-empty (num_samples, d) array, got shape {X.shape}")
    if not np.all(np.isfinite(X)):
        raise DecompositionError("Training blocks contain non-finite values")
    linalg = linalg or LinearAlgebra()
    
    num_samples, d = X.shape
    mean = X.mean(axis=0)
    Xc = X - mean
    
    try:
        if num_samples >= d:
            _, _, Vt = linalg.svd(Xc, full_matrices=False)
            basis = Vt
        else:
            U, _, _ = linalg.svd(Xc.T, full_matrices=True)
            basis = U.T
    except np.linalg.LinAlgError as exc:
        raise DecompositionError(f"SVD failed on {num_samples}x{d} data: {exc}") from exc
    
    return np.ascontiguousarray(basis), mean


def build_basis(
    kind: str,
    block_size: int,
    blocks: Optional[np.ndarray] = None,
    linalg: Optional[LinearAlgebra] = None
) -> BasisResult:
    """
    Build a 2D basis by transform label.
    
    An unsupported size is reported through BasisResult.error rather than
    raised, so callers can skip that transform. Decomposition failures
    still propagate.
    """
    if kind == DCT:
        return BasisResult(kind, separable_2d(dct_matrix(block_size), linalg))
    if kind == HADAMARD:
        try:
            H = hadamard_matrix(block_size)
        except InvalidDimensionError as exc:
            return BasisResult(kind, error=exc)
        return BasisResult(kind, separable_2d(H, linalg))
    if kind == PCA:
        if blocks is None:
            raise ValueError("PCA basis needs training blocks")
        matrix, mean = learned_basis(blocks, linalg)
        return BasisResult(kind, matrix, mean)
    raise ValueError(f"Unknown transform: {kind}")


def basis_vector_image(basis: np.ndarray, index: int, block_size: int) -> np.ndarray:
    """One basis row as a BxB image min-max scaled to [0, 1]."""
    row = np.asarray(basis, dtype=np.float64)[index]
    if row.size != block_size * block_size:
        raise ValueError(f"Basis row of length {row.size} is not {block_size}x{block_size}")
    lo, hi = row.min(), row.max()
    span = (hi - lo) or 1.0
    return ((row - lo) / span).reshape(block_size, block_size)
