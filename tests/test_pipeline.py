"""Tests for the single-image analysis pipeline."""

import numpy as np
import pytest
from models.analysis_params import AnalysisParams
from engines.pipeline import analyze_image, default_rd_k_values
from engines.rate_distortion import rate_distortion
from engines.basis import build_basis
from engines.block_processor import extract_blocks
from utils.constants import TRANSFORMS
from utils.test_images import generate_photo, generate_text_edges


def test_all_transforms_reported():
    """Power-of-two blocks give results for every transform."""
    image = generate_photo(64)
    result, intermediate = analyze_image(image, AnalysisParams(block_size=8, k_show=16))
    
    assert set(result.psnr) == set(TRANSFORMS)
    assert not result.skipped
    for name in TRANSFORMS:
        assert result.reconstructions[name].shape == (64, 64)
        assert result.reconstructions[name].min() >= 0.0
        assert result.reconstructions[name].max() <= 1.0
        ks, frac = result.energy_curves[name]
        assert len(ks) == 64
        assert np.isclose(frac[-1], 1.0, atol=1e-6)
    assert intermediate.dct_1d.shape == (8, 8)
    assert intermediate.hadamard_1d.shape == (8, 8)
    assert intermediate.pca_first_basis.shape == (8, 8)
    assert intermediate.pca_mean.shape == (8, 8)
    for name in TRANSFORMS:
        expected = np.abs(result.original_image - result.reconstructions[name])
        assert np.allclose(intermediate.error_maps[name], expected)


def test_psnr_increases_with_k():
    """More kept coefficients never costs noticeable quality."""
    image = generate_text_edges(64)
    result, _ = analyze_image(image, AnalysisParams(block_size=8))
    for name in TRANSFORMS:
        rates, psnrs = result.rd_curves[name]
        assert np.all(np.diff(rates) > 0)
        for i in range(len(psnrs) - 1):
            assert psnrs[i] <= psnrs[i + 1] + 0.1


def test_full_k_is_near_lossless():
    """k = d reconstructs the image for every basis."""
    image = generate_photo(32)
    result, _ = analyze_image(image, AnalysisParams(block_size=4, k_show=16))
    for name in TRANSFORMS:
        assert result.psnr[name] > 60.0


def test_k_show_clamped_to_d():
    result, _ = analyze_image(generate_photo(32), AnalysisParams(block_size=4, k_show=100))
    assert result.k_show == 16
    assert result.rate == 1.0


def test_non_power_of_two_skips_hadamard():
    """B=12 still runs DCT and PCA."""
    image = generate_photo(48)
    result, intermediate = analyze_image(image, AnalysisParams(block_size=12, k_show=10))
    assert 'Hadamard' in result.skipped
    assert set(result.psnr) == {'DCT', 'PCA'}
    assert intermediate.hadamard_1d is None


def test_image_cropped_to_block_multiple():
    """Trailing rows/columns are dropped before analysis."""
    image = np.random.rand(70, 45)
    result, _ = analyze_image(image, AnalysisParams(block_size=8))
    assert result.original_image.shape == (64, 40)
    assert np.array_equal(result.original_image, image[:64, :40])


def test_image_smaller_than_block_rejected():
    with pytest.raises(ValueError):
        analyze_image(np.random.rand(4, 4), AnalysisParams(block_size=8))


def test_selected_block_details():
    """Selected block carries its samples, coefficients and reconstructions."""
    image = generate_photo(64)
    params = AnalysisParams(block_size=8, k_show=64, selected_block_idx=(2, 3))
    result, intermediate = analyze_image(image, params)
    assert np.array_equal(intermediate.selected_block_original, image[16:24, 24:32])
    for name in TRANSFORMS:
        assert intermediate.selected_block_coeffs[name].shape == (8, 8)
        assert np.allclose(intermediate.selected_block_reconstructed[name],
                           image[16:24, 24:32], atol=1e-6)


def test_explicit_rd_k_values_kept_in_order():
    image = generate_photo(32)
    params = AnalysisParams(block_size=4, rd_k_values=[8, 1, 4])
    result, _ = analyze_image(image, params)
    rates, psnrs = result.rd_curves['DCT']
    assert np.allclose(rates, [0.5, 0.0625, 0.25])
    assert psnrs[1] < psnrs[2] < psnrs[0]


def test_default_rd_k_values():
    assert default_rd_k_values(16) == [2, 4, 8, 16]
    assert default_rd_k_values(64) == [2, 4, 8, 16, 24, 32, 40, 48, 64]


def test_rate_distortion_without_precomputed_coeffs():
    """rate_distortion can project the reference itself."""
    image = generate_photo(32)
    blocks, shape = extract_blocks(image, 8)
    basis = build_basis('PCA', 8, blocks)
    rates, psnrs = rate_distortion(image, shape, basis.matrix, basis.mean, [64, 1])
    assert np.allclose(rates, [1.0, 1.0 / 64])
    assert psnrs[0] > psnrs[1]


def test_params_validation():
    with pytest.raises(ValueError):
        AnalysisParams(block_size=0)
    with pytest.raises(ValueError):
        AnalysisParams(k_show=-1)
    with pytest.raises(ValueError):
        AnalysisParams(linalg_backend='torch')
