"""Shared utilities."""

from .constants import TRANSFORMS, PSNR_SENTINEL, SWEEP_CSV_HEADER
from .metrics import psnr, compute_ssim, energy_compaction_curve, Timer
from .test_images import generate_checkerboard, generate_gradient, generate_demo_image
from .image_io import rgb_to_luminance, load_luminance, save_luminance
from .csv_export import format_sweep_csv, export_sweep_csv
from .logger import setup_logger, get_logger

__all__ = [
    'TRANSFORMS',
    'PSNR_SENTINEL',
    'SWEEP_CSV_HEADER',
    'psnr',
    'compute_ssim',
    'energy_compaction_curve',
    'Timer',
    'generate_checkerboard',
    'generate_gradient',
    'generate_demo_image',
    'rgb_to_luminance',
    'load_luminance',
    'save_luminance',
    'format_sweep_csv',
    'export_sweep_csv',
    'setup_logger',
    'get_logger',
]
