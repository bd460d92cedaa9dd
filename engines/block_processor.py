"""Block processing: cropping, extraction, reconstruction."""

import numpy as np
from typing import Tuple

from models.block_shape import BlockShape


def crop_to_multiple(channel: np.ndarray, block_size: int) -> np.ndarray:
    """Drop trailing rows/columns so both dimensions are multiples of block_size."""
    if block_size <= 0:
        raise ValueError(f"Block size must be positive, got {block_size}")
    h, w = channel.shape
    hc = (h // block_size) * block_size
    wc = (w // block_size) * block_size
    return channel[:hc, :wc].copy()


def extract_blocks(grid: np.ndarray, block_size: int) -> Tuple[np.ndarray, BlockShape]:
    """
    Split a 2D grid into flattened BxB blocks.
    
    Blocks are enumerated block-row major and each block is flattened
    row-major, giving a (num_blocks, B*B) array.
    """
    grid = np.asarray(grid, dtype=np.float64)
    if grid.ndim != 2:
        raise ValueError(f"Expected a 2D grid, got shape {grid.shape}")
    if block_size <= 0:
        raise ValueError(f"Block size must be positive, got {block_size}")
    h, w = grid.shape
    if h % block_size or w % block_size:
        raise ValueError(f"Grid {w}x{h} is not a multiple of block size {block_size}")
    
    shape = BlockShape(block_size, h // block_size, w // block_size)
    b = block_size
    blocks = (
        grid.reshape(shape.nrows, b, shape.ncols, b)
        .transpose(0, 2, 1, 3)
        .reshape(shape.num_blocks, b * b)
    )
    return np.ascontiguousarray(blocks), shape


def reconstruct_from_blocks(blocks: np.ndarray, shape: BlockShape) -> np.ndarray:
    """Reassemble flattened blocks into a 2D grid (inverse of extract_blocks)."""
    blocks = np.asarray(blocks, dtype=np.float64)
    if blocks.shape != (shape.num_blocks, shape.dim):
        raise ValueError(
            f"Expected blocks of shape {(shape.num_blocks, shape.dim)}, got {blocks.shape}"
        )
    b = shape.block_size
    grid = (
        blocks.reshape(shape.nrows, shape.ncols, b, b)
        .transpose(0, 2, 1, 3)
        .reshape(shape.height, shape.width)
    )
    return np.ascontiguousarray(grid)
