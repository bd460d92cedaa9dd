"""Single-image transform comparison pipeline."""

import numpy as np
from typing import List, Tuple

from models.analysis_params import AnalysisParams
from models.analysis_result import AnalysisResult
from models.intermediate_data import IntermediateData
from engines.block_processor import crop_to_multiple, extract_blocks
from engines.basis import (
    build_basis, dct_matrix, hadamard_matrix, is_power_of_two, basis_vector_image
)
from engines.linalg import get_backend
from engines.rate_distortion import rate_distortion, reconstruct_top_k
from engines.transform import forward_transform
from utils.constants import DEFAULT_RD_K_VALUES, PCA, TRANSFORMS
from utils.logger import get_logger
from utils.metrics import Timer, compute_ssim, energy_compaction_curve, psnr


def default_rd_k_values(d: int) -> List[int]:
    """Fixed k list below d, always ending at d."""
    return [k for k in DEFAULT_RD_K_VALUES if k < d] + [d]


def analyze_image(
    gray: np.ndarray,
    params: AnalysisParams
) -> Tuple[AnalysisResult, IntermediateData]:
    """Compare DCT, Hadamard and PCA bases on one luminance image."""
    logger = get_logger()
    timer = Timer()
    linalg = get_backend(params.linalg_backend)
    B = params.block_size
    d = params.dim
    
    image = crop_to_multiple(np.asarray(gray, dtype=np.float64), B)
    if image.size == 0:
        raise ValueError(f"Image {np.shape(gray)} is smaller than one {B}x{B} block")
    blocks, shape = timer.measure('extract', extract_blocks, image, B)
    logger.info(f"Analyzing {shape.width}x{shape.height} image as {shape.num_blocks} blocks of {B}x{B}")
    
    k_show = min(params.k_show, d)
    k_values = params.rd_k_values if params.rd_k_values is not None else default_rd_k_values(d)
    
    result = AnalysisResult(original_image=image, block_size=B, k_show=k_show, dim=d)
    intermediate = IntermediateData(
        dct_1d=dct_matrix(B),
        hadamard_1d=hadamard_matrix(B) if is_power_of_two(B) else None,
        selected_block_idx=params.selected_block_idx,
    )
    
    block_row, block_col = params.selected_block_idx
    selected = None
    if 0 <= block_row < shape.nrows and 0 <= block_col < shape.ncols:
        selected = block_row * shape.ncols + block_col
        intermediate.selected_block_original = blocks[selected].reshape(B, B)
    else:
        logger.warning(f"Selected block {params.selected_block_idx} is outside the "
                       f"{shape.nrows}x{shape.ncols} block grid")
    
    for kind in TRANSFORMS:
        basis = timer.measure(f'basis_{kind}', build_basis, kind, B, blocks, linalg)
        if not basis.ok:
            logger.warning(f"Skipping {kind}: {basis.error}")
            result.skipped[kind] = str(basis.error)
            continue
        
        coeffs = timer.measure(
            f'forward_{kind}', forward_transform, blocks, basis.matrix, basis.mean, linalg
        )
        result.energy_curves[kind] = energy_compaction_curve(coeffs, coeffs.shape[1])
        result.rd_curves[kind] = timer.measure(
            f'rd_{kind}', rate_distortion,
            image, shape, basis.matrix, basis.mean, k_values, linalg, coeffs
        )
        
        recon = timer.measure(
            f'reconstruct_{kind}', reconstruct_top_k,
            coeffs, shape, basis.matrix, basis.mean, k_show, linalg
        )
        result.reconstructions[kind] = recon
        result.psnr[kind] = psnr(image, recon)
        result.ssim[kind] = compute_ssim(image, recon)
        intermediate.error_maps[kind] = np.abs(image - recon)
        
        if kind == PCA:
            intermediate.pca_first_basis = basis_vector_image(basis.matrix, 0, B)
            intermediate.pca_mean = basis.mean.reshape(B, B)
        
        if selected is not None:
            y0, x0 = block_row * B, block_col * B
            intermediate.selected_block_coeffs[kind] = coeffs[selected].reshape(B, B)
            intermediate.selected_block_reconstructed[kind] = recon[y0:y0 + B, x0:x0 + B]
        
        logger.debug(f"{kind}: PSNR {result.psnr[kind]:.3f} dB at k={k_show}")
    
    result.timings_ms = dict(timer.timings_ms)
    return result, intermediate
