"""Analysis parameters."""

from dataclasses import dataclass
from typing import Literal, Optional, Sequence, Tuple


@dataclass
class AnalysisParams:
    """Block transform analysis parameters."""
    
    block_size: int = 8
    k_show: int = 16
    rd_k_values: Optional[Sequence[int]] = None
    linalg_backend: Literal['numpy', 'scipy'] = 'numpy'
    selected_block_idx: Tuple[int, int] = (0, 0)
    
    def __post_init__(self):
        if self.block_size <= 0:
            raise ValueError(f"Block size must be positive, got {self.block_size}")
        if self.k_show < 0:
            raise ValueError(f"k_show must be non-negative, got {self.k_show}")
        if self.linalg_backend not in ('numpy', 'scipy'):
            raise ValueError(f"Unknown linear algebra backend: {self.linalg_backend}")
        if self.rd_k_values is not None:
            if any(k < 0 for k in self.rd_k_values):
                raise ValueError(f"k values must be non-negative, got {list(self.rd_k_values)}")
            self.rd_k_values = [int(k) for k in self.rd_k_values]
    
    @property
    def dim(self) -> int:
        """Flattened block length d = B*B."""
        return self.block_size * self.block_size
