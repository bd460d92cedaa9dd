"""DSP engines - pure computation, no GUI dependencies."""

from .block_processor import crop_to_multiple, extract_blocks, reconstruct_from_blocks
from .linalg import LinearAlgebra, ScipyLinearAlgebra, get_backend
from .basis import (
    InvalidDimensionError,
    DecompositionError,
    BasisResult,
    dct_matrix,
    hadamard_matrix,
    separable_2d,
    learned_basis,
    build_basis,
    basis_vector_image,
)
from .transform import forward_transform, inverse_transform
from .selector import keep_top_k
from .rate_distortion import rate_distortion, reconstruct_top_k
from .pipeline import analyze_image
from .sweep import run_sweep, sweep_rows, k_values_for

__all__ = [
    'crop_to_multiple',
    'extract_blocks',
    'reconstruct_from_blocks',
    'LinearAlgebra',
    'ScipyLinearAlgebra',
    'get_backend',
    'InvalidDimensionError',
    'DecompositionError',
    'BasisResult',
    'dct_matrix',
    'hadamard_matrix',
    'separable_2d',
    'learned_basis',
    'build_basis',
    'basis_vector_image',
    'forward_transform',
    'inverse_transform',
    'keep_top_k',
    'rate_distortion',
    'reconstruct_top_k',
    'analyze_image',
    'run_sweep',
    'sweep_rows',
    'k_values_for',
]
