"""Energy-compaction and rate-distortion chart files (matplotlib, no GUI)."""

from pathlib import Path
from typing import Union

from matplotlib.figure import Figure

from models.analysis_result import AnalysisResult
from utils.constants import DCT, HADAMARD, PCA

TRANSFORM_COLORS = {
    DCT: '#22c55e',
    HADAMARD: '#3b82f6',
    PCA: '#f97316',
}


def build_analysis_figure(result: AnalysisResult) -> Figure:
    """Two stacked plots: energy compaction and PSNR vs rate."""
    fig = Figure(figsize=(8.5, 9))
    fig.set_facecolor('white')
    fig.suptitle(
        f'Block transforms, {result.block_size}×{result.block_size} blocks',
        fontsize=14, fontweight='bold'
    )
    
    ax1 = fig.add_subplot(2, 1, 1)
    for name, (ks, frac) in result.energy_curves.items():
        ax1.plot(ks / result.dim, frac, '-', color=TRANSFORM_COLORS.get(name), label=name)
    ax1.set_xlabel('Fraction of coefficients kept (k/d)', fontsize=10)
    ax1.set_ylabel('Average energy fraction', fontsize=10)
    ax1.set_title('Energy Compaction', fontsize=11)
    ax1.set_ylim(0.0, 1.02)
    ax1.legend(loc='lower right', fontsize=9)
    ax1.grid(True, alpha=0.3)
    
    ax2 = fig.add_subplot(2, 1, 2)
    for name, (rates, psnrs) in result.rd_curves.items():
        ax2.plot(rates, psnrs, 'o-', color=TRANSFORM_COLORS.get(name), label=name)
    ax2.set_xlabel('Rate (k/d)', fontsize=10)
    ax2.set_ylabel('PSNR (dB)', fontsize=10)
    ax2.set_title('Rate-Distortion', fontsize=11)
    ax2.legend(loc='lower right', fontsize=9)
    ax2.grid(True, alpha=0.3)
    
    fig.tight_layout(rect=(0, 0, 1, 0.96))
    return fig


def save_analysis_plots(result: AnalysisResult, path: Union[str, Path]) -> Path:
    """Render the analysis charts to an image/PDF file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig = build_analysis_figure(result)
    fig.savefig(path, dpi=100)
    return path
