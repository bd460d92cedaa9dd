"""Intermediate data for visualization."""

from dataclasses import dataclass, field
from typing import Dict, Optional
import numpy as np


@dataclass
class IntermediateData:
    """Basis matrices and per-block details for plots and inspection."""
    
    dct_1d: Optional[np.ndarray] = None
    hadamard_1d: Optional[np.ndarray] = None
    pca_first_basis: Optional[np.ndarray] = None
    pca_mean: Optional[np.ndarray] = None
    
    selected_block_idx: tuple = (0, 0)
    selected_block_original: Optional[np.ndarray] = None
    selected_block_coeffs: Dict[str, np.ndarray] = field(default_factory=dict)
    selected_block_reconstructed: Dict[str, np.ndarray] = field(default_factory=dict)
    
    error_maps: Dict[str, np.ndarray] = field(default_factory=dict)
