#!/usr/bin/env python3
"""
Background Removal Pipeline CLI

Sobel edges, border color sampling, mask fusion and a density-based
edge cleanup, written to a transparent PNG.
"""

import argparse
import sys
from pathlib import Path

from alphakey.pipeline import (
    BackgroundRemovalPipeline,
    PipelineConfig,
    PipelineError,
    PipelineLogger,
)
from alphakey.pipeline.image_io import read_image_bytes, to_data_url


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="alphakey",
        description="Remove uniform backgrounds with a classical edge + color pipeline",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Basic usage
  %(prog)s input.png

  # Looser color matching, no edge cleanup
  %(prog)s --color-threshold 45 --no-refine input.png

  # Show progress checkpoints and debug stage records
  %(prog)s --progress --debug input.png

  # Custom log file
  %(prog)s --debug --log-file ~/debug.log input.png
        """,
    )

    # Positional arguments
    parser.add_argument("files", nargs="+", type=Path, help="Input image files")

    # Output options
    parser.add_argument(
        "-o", "--output", type=Path, help="Output path (for single file only)"
    )
    parser.add_argument(
        "--autocrop", action="store_true", help="Crop to the opaque bounding box"
    )
    parser.add_argument(
        "--data-url",
        action="store_true",
        help="Print the result as a PNG data URL instead of writing a file",
    )
    parser.add_argument(
        "--max-pixels",
        type=int,
        default=20_000_000,
        metavar="N",
        help="Reject images with more than N pixels (default: 20000000)",
    )

    # Segmentation options
    parser.add_argument(
        "--color-threshold",
        type=float,
        default=30.0,
        metavar="D",
        help="RGB distance under which a pixel matches the background (default: 30)",
    )
    parser.add_argument(
        "--edge-threshold",
        type=int,
        default=30,
        metavar="M",
        help="Gradient magnitude above which a pixel is kept as edge (default: 30)",
    )

    # Refinement options
    parser.add_argument(
        "--radius",
        type=int,
        default=2,
        metavar="R",
        help="Edge cleanup window radius (default: 2)",
    )
    parser.add_argument(
        "--density",
        type=float,
        default=0.7,
        metavar="P",
        help="Minimum opaque ratio in the cleanup window (default: 0.7)",
    )
    parser.add_argument(
        "--no-refine", action="store_true", help="Skip the edge cleanup stage"
    )

    # Logging options
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Enable debug mode with detailed logging"
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Custom log file path (default: ~/.local/share/alphakey/debug.log)",
    )
    parser.add_argument(
        "--progress", action="store_true", help="Print progress checkpoints"
    )

    return parser


def print_progress(value: int):
    print(f"  Progress: {value}%")


def main(argv=None) -> int:
    """Main entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Validate arguments
    if args.output and len(args.files) > 1:
        parser.error("--output can only be used with a single input file")
    if args.output and args.data_url:
        parser.error("--output cannot be combined with --data-url")

    try:
        config = PipelineConfig(
            color_threshold=args.color_threshold,
            edge_threshold=args.edge_threshold,
            refine_edges=not args.no_refine,
            refine_radius=args.radius,
            refine_density=args.density,
            max_image_pixels=args.max_pixels,
            autocrop=args.autocrop,
            output_path=args.output if len(args.files) == 1 else None,
        )
    except PipelineError as e:
        parser.error(str(e))

    logger = PipelineLogger(
        log_file=args.log_file, debug_mode=args.debug, verbose=args.verbose
    )

    logger.log_info(f"Processing {len(args.files)} image(s)...")

    progress = print_progress if args.progress else None

    pipeline = BackgroundRemovalPipeline(config=config, logger=logger)
    success_count = 0

    for file_path in args.files:
        try:
            if args.data_url:
                data = read_image_bytes(file_path, config.max_file_bytes)
                png_bytes = pipeline.process_bytes(data, progress=progress)
                print(to_data_url(png_bytes))
                logger.log_info(f"✓ Success: {file_path}")
            else:
                output_path = pipeline.process(file_path, progress=progress)
                logger.log_info(f"✓ Success: {file_path} → {output_path}")
            success_count += 1
        except PipelineError as e:
            logger.log_error(f"✗ Failed: {file_path}: {e}", exc_info=args.verbose or args.debug)

    logger.log_info(f"\nDone! Processed {success_count}/{len(args.files)} images.")

    return 0 if success_count == len(args.files) else 1


if __name__ == "__main__":
    sys.exit(main())
