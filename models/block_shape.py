"""Block grid geometry."""

from dataclasses import dataclass


@dataclass(frozen=True)
class BlockShape:
    """Block edge length and block-grid size of a partitioned image."""
    
    block_size: int
    nrows: int
    ncols: int
    
    @property
    def num_blocks(self) -> int:
        return self.nrows * self.ncols
    
    @property
    def dim(self) -> int:
        return self.block_size * self.block_size
    
    @property
    def height(self) -> int:
        return self.nrows * self.block_size
    
    @property
    def width(self) -> int:
        return self.ncols * self.block_size
