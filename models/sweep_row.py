"""One row of a batch sweep."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SweepRow:
    """PSNR of one transform at one (block size, k) point."""
    
    block_size: int
    k: int
    rate: float
    transform: str
    psnr: float
