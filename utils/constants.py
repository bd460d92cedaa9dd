"""Shared constants for transform analysis and sweeps."""

# Transform labels, also written verbatim into the sweep CSV
DCT = 'DCT'
HADAMARD = 'Hadamard'
PCA = 'PCA'
TRANSFORMS = (DCT, HADAMARD, PCA)

# Finite PSNR reported for a perfect reconstruction
PSNR_SENTINEL = 99.0

# Guards the per-block energy division for all-zero blocks
ENERGY_EPS = 1e-12

# Rate-distortion k list used by single-image analysis (capped at d)
DEFAULT_RD_K_VALUES = (2, 4, 8, 16, 24, 32, 40, 48)

# Batch sweep defaults
DEFAULT_BLOCK_SIZES = (4, 8, 16, 32)
DEFAULT_K_FRACTIONS = (0.05, 0.1, 0.2, 0.3, 0.5, 0.75, 1.0)

SWEEP_CSV_HEADER = 'blockSize,k,rate,transform,psnr'
SWEEP_CSV_FILENAME = 'transform_sweep_results.csv'

LOGGER_NAME = 'transform-studio'
