"""
Block Transform Studio
Compare DCT, Walsh/Hadamard and learned PCA bases on image blocks
"""

import argparse
import sys
import warnings
from pathlib import Path
from typing import Optional, Sequence

warnings.filterwarnings('ignore', category=RuntimeWarning)


def _load_input(args):
    from utils.image_io import load_luminance
    from utils.test_images import generate_demo_image

    if args.synthetic:
        print(f"Generating test image: {args.synthetic}")
        image = generate_demo_image(args.synthetic, args.size)
        if image is None:
            raise ValueError(f"Unknown synthetic image: {args.synthetic}")
        return image
    if not args.image:
        raise ValueError("Give an image path or --synthetic KEY")
    print(f"Loading: {args.image}")
    return load_luminance(args.image)


def _synthetic_size(value: str) -> int:
    size = int(value)
    if size < 2:
        raise argparse.ArgumentTypeError(f"synthetic image size must be >= 2, got {size}")
    return size


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    from utils.constants import DEFAULT_BLOCK_SIZES, DEFAULT_K_FRACTIONS, SWEEP_CSV_FILENAME
    from utils.test_images import DEMO_IMAGE_KEYS

    parser = argparse.ArgumentParser("block-transform-studio")
    parser.add_argument("--log-file", type=str, default=None, help="Also write log records here")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    def add_input(p):
        p.add_argument("image", nargs="?", help="Input image path")
        p.add_argument("--synthetic", choices=DEMO_IMAGE_KEYS, help="Use a generated test image")
        p.add_argument("--size", type=_synthetic_size, default=256, help="Synthetic image size")
        p.add_argument("--backend", choices=("numpy", "scipy"), default="numpy",
                       help="Linear algebra backend")

    analyze = sub.add_parser("analyze", help="Compare transforms on one image")
    add_input(analyze)
    analyze.add_argument("--block-size", type=int, default=8)
    analyze.add_argument("--k", type=int, default=16, help="Coefficients kept per block")
    analyze.add_argument("--save-dir", type=str, default=None,
                         help="Write reconstructions as PNG into this folder")
    analyze.add_argument("--plot", type=str, default=None,
                         help="Write energy/rate-distortion charts to this file")

    sweep = sub.add_parser("sweep", help="Rate-distortion sweep exported as CSV")
    add_input(sweep)
    sweep.add_argument("--block-sizes", type=int, nargs="+", default=list(DEFAULT_BLOCK_SIZES))
    sweep.add_argument("--k-fractions", type=float, nargs="+", default=list(DEFAULT_K_FRACTIONS))
    sweep.add_argument("--output", type=str, default=SWEEP_CSV_FILENAME)
    sweep.add_argument("--dry-run", action="store_true",
                       help="Only print the planned combinations")
    return parser.parse_args(argv)


def run_analyze(args) -> int:
    from models.analysis_params import AnalysisParams
    from engines.pipeline import analyze_image
    from utils.image_io import save_luminance
    from utils.plots import save_analysis_plots

    image = _load_input(args)
    params = AnalysisParams(
        block_size=args.block_size,
        k_show=args.k,
        linalg_backend=args.backend
    )
    result, _ = analyze_image(image, params)

    h, w = result.original_image.shape
    print(f"Image: {w}x{h} (cropped to {params.block_size}-pixel blocks)")
    print(f"Kept:  k={result.k_show} of d={result.dim} (rate {result.rate:.4f})")

    print("\n=== Results ===")
    for name in result.transforms:
        print(f"{name:<9} PSNR: {result.psnr[name]:7.3f} dB   SSIM: {result.ssim[name]:.4f}")
    for name, reason in result.skipped.items():
        print(f"{name:<9} skipped: {reason}")
    total_ms = sum(result.timings_ms.values())
    print(f"Time:     {total_ms:.2f} ms")

    if args.save_dir:
        out_dir = Path(args.save_dir)
        out_dir.mkdir(parents=True, exist_ok=True)
        save_luminance(result.original_image, str(out_dir / "original.png"))
        for name, recon in result.reconstructions.items():
            save_luminance(recon, str(out_dir / f"{name.lower()}_k{result.k_show}.png"))
        print(f"\nSaved reconstructions to: {out_dir}")

    if args.plot:
        plot_path = save_analysis_plots(result, args.plot)
        print(f"Saved charts: {plot_path}")
    return 0


def run_sweep_cli(args) -> int:
    from engines.linalg import get_backend
    from engines.sweep import k_values_for, run_sweep
    from utils.csv_export import export_sweep_csv

    print("Planned sweep:")
    for B in args.block_sizes:
        ks = ", ".join(str(k) for k in k_values_for(B * B, args.k_fractions))
        print(f"  - B={B}: k in [{ks}]")
    if args.dry_run:
        print("Dry run, nothing computed.")
        return 0

    image = _load_input(args)

    def progress(step, total, block_size):
        print(f"[{step}/{total}] block size {block_size} done")

    rows = run_sweep(
        image,
        block_sizes=args.block_sizes,
        k_fractions=args.k_fractions,
        linalg=get_backend(args.backend),
        progress_callback=progress
    )
    if not rows:
        print("No results.")
        return 1

    csv_path = export_sweep_csv(rows, args.output)
    print(f"\n{len(rows)} rows saved to: {csv_path}")
    return 0


def run_cli(argv: Optional[Sequence[str]] = None) -> int:
    from utils.logger import setup_logger

    args = _parse_args(argv)
    setup_logger(args.log_file, verbose=args.verbose)

    try:
        if args.command == "analyze":
            return run_analyze(args)
        return run_sweep_cli(args)
    except ValueError as e:
        print(f"Error: {e}")
        return 1


def main():
    sys.exit(run_cli())


if __name__ == '__main__':
    main()
