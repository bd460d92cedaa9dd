"""Analysis result with metrics and curves."""

from dataclasses import dataclass, field
from typing import Dict, Tuple
import numpy as np


@dataclass
class AnalysisResult:
    """Results from comparing the transforms on one image."""
    
    original_image: np.ndarray
    block_size: int
    k_show: int
    dim: int
    
    # Reconstructions at k_show, keyed by transform label
    reconstructions: Dict[str, np.ndarray] = field(default_factory=dict)
    
    # Quality metrics at k_show
    psnr: Dict[str, float] = field(default_factory=dict)
    ssim: Dict[str, float] = field(default_factory=dict)
    
    # Curves: (ks, avg energy fraction) and (rates, psnrs)
    energy_curves: Dict[str, Tuple[np.ndarray, np.ndarray]] = field(default_factory=dict)
    rd_curves: Dict[str, Tuple[np.ndarray, np.ndarray]] = field(default_factory=dict)
    
    # Transforms that could not be built (e.g. Hadamard for B=12)
    skipped: Dict[str, str] = field(default_factory=dict)
    
    # Runtime per stage
    timings_ms: Dict[str, float] = field(default_factory=dict)
    
    @property
    def transforms(self) -> Tuple[str, ...]:
        return tuple(self.psnr.keys())
    
    @property
    def rate(self) -> float:
        return self.k_show / self.dim
