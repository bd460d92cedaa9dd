"""Tests for DCT, Hadamard and PCA bases."""

import numpy as np
import pytest
from scipy.fft import dctn
from scipy.linalg import hadamard

from engines.basis import (
    InvalidDimensionError, DecompositionError, dct_matrix, hadamard_matrix,
    separable_2d, learned_basis, build_basis, basis_vector_image
)
from engines.linalg import LinearAlgebra, ScipyLinearAlgebra, get_backend
from utils.constants import DCT, HADAMARD, PCA


@pytest.mark.parametrize("n", [1, 2, 3, 4, 5, 8, 12, 16])
def test_dct_orthonormal(n):
    """C @ C.T is the identity for any size."""
    C = dct_matrix(n)
    assert np.allclose(C @ C.T, np.eye(n), atol=1e-9)


@pytest.mark.parametrize("n", [1, 2, 4, 8, 16, 32])
def test_hadamard_orthonormal(n):
    """H @ H.T is the identity for powers of two."""
    H = hadamard_matrix(n)
    assert np.allclose(H @ H.T, np.eye(n), atol=1e-9)


def test_hadamard_matches_sylvester_order():
    """Doubling construction gives scipy's Sylvester matrix scaled by 1/sqrt(N)."""
    for n in [2, 4, 8, 16]:
        assert np.allclose(hadamard_matrix(n), hadamard(n) / np.sqrt(n))


@pytest.mark.parametrize("n", [0, 3, 6, 12])
def test_hadamard_rejects_non_power_of_two(n):
    """Non power-of-two sizes fail fast."""
    with pytest.raises(InvalidDimensionError):
        hadamard_matrix(n)


def test_build_basis_reports_invalid_dimension():
    """build_basis returns a failed result instead of raising."""
    result = build_basis(HADAMARD, 6)
    assert not result.ok
    assert result.matrix is None
    assert isinstance(result.error, InvalidDimensionError)


def test_separable_2d_index_layout():
    """Row i*N+p, column j*N+q holds basis[i, j] * basis[p, q]."""
    C = dct_matrix(4)
    T = separable_2d(C)
    assert T.shape == (16, 16)
    for i, j, p, q in [(0, 0, 0, 0), (1, 2, 3, 0), (3, 3, 2, 1)]:
        assert np.isclose(T[i * 4 + p, j * 4 + q], C[i, j] * C[p, q])


def test_separable_dct_matches_scipy():
    """Projection on the 2D cosine basis equals an orthonormal 2D DCT-II."""
    block = np.random.rand(8, 8)
    T = separable_2d(dct_matrix(8))
    coeffs = T @ block.flatten()
    assert np.allclose(coeffs, dctn(block, type=2, norm='ortho').flatten(), atol=1e-10)


def test_learned_basis_mean_and_orthonormality():
    """Mean is the per-pixel average; basis rows are orthonormal."""
    blocks = np.random.rand(200, 16)
    basis, mean = learned_basis(blocks)
    assert basis.shape == (16, 16)
    assert np.allclose(mean, blocks.mean(axis=0))
    assert np.allclose(basis @ basis.T, np.eye(16), atol=1e-9)


def test_learned_basis_ordered_by_variance():
    """Projected variance decreases along the basis rows."""
    rng = np.random.default_rng(0)
    scales = np.linspace(5.0, 0.1, 16)
    blocks = rng.standard_normal((500, 16)) * scales
    basis, mean = learned_basis(blocks)
    variances = ((blocks - mean) @ basis.T).var(axis=0)
    assert np.all(np.diff(variances) <= 1e-9)


def test_learned_basis_fewer_samples_than_dims():
    """Wide data still yields a full d x d orthonormal basis."""
    blocks = np.random.rand(5, 64)
    basis, mean = learned_basis(blocks)
    assert basis.shape == (64, 64)
    assert np.allclose(basis @ basis.T, np.eye(64), atol=1e-9)
    assert np.allclose(mean, blocks.mean(axis=0))


def test_learned_basis_backends_agree():
    """numpy and scipy backends find the same leading directions up to sign."""
    rng = np.random.default_rng(1)
    blocks = rng.standard_normal((300, 16)) * np.linspace(4.0, 0.5, 16)
    basis_np, _ = learned_basis(blocks, LinearAlgebra())
    basis_sp, _ = learned_basis(blocks, ScipyLinearAlgebra(lapack_driver='gesvd'))
    for i in range(4):
        assert np.isclose(abs(basis_np[i] @ basis_sp[i]), 1.0, atol=1e-6)


def test_learned_basis_non_finite_data():
    """NaN in the training data is a decomposition failure."""
    blocks = np.random.rand(20, 16)
    blocks[3, 5] = np.nan
    with pytest.raises(DecompositionError):
        learned_basis(blocks)


class _FailingBackend(LinearAlgebra):
    def svd(self, a, full_matrices=False):
        raise np.linalg.LinAlgError("SVD did not converge")


def test_learned_basis_svd_failure_propagates():
    """Backend SVD errors surface as DecompositionError, not a fallback basis."""
    with pytest.raises(DecompositionError):
        learned_basis(np.random.rand(20, 16), _FailingBackend())
    with pytest.raises(DecompositionError):
        build_basis(PCA, 4, np.random.rand(20, 16), _FailingBackend())


def test_build_basis_kinds():
    """Fixed bases carry no mean, PCA does."""
    blocks = np.random.rand(50, 16)
    dct = build_basis(DCT, 4)
    pca = build_basis(PCA, 4, blocks)
    assert dct.ok and dct.mean is None and dct.matrix.shape == (16, 16)
    assert pca.ok and pca.mean.shape == (16,)
    with pytest.raises(ValueError):
        build_basis("Wavelet", 4)


def test_get_backend_unknown_name():
    """Unknown backend names are rejected."""
    assert get_backend('scipy').name == 'scipy'
    with pytest.raises(ValueError):
        get_backend('cupy')


def test_basis_vector_image_range():
    """Basis rows are scaled into [0, 1] as BxB images."""
    T = separable_2d(dct_matrix(4))
    img = basis_vector_image(T, 5, 4)
    assert img.shape == (4, 4)
    assert np.isclose(img.min(), 0.0) and np.isclose(img.max(), 1.0)
    # DC row is flat
    assert np.allclose(basis_vector_image(T, 0, 4), 0.0)
