"""CLI tool for dithering an image file for the thermal printer."""

import argparse
import logging
import sys
from pathlib import Path

import yaml
from PIL import UnidentifiedImageError
from pydantic import ValidationError

from dotpress.codec import pack_grid
from dotpress.config import load_profile, settings
from dotpress.errors import ProcessingError
from dotpress.models.options import DitherMethod, ProcessingOptions
from dotpress.models.raster import RasterImage
from dotpress.pipeline import ProcessingPipeline

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Dither an image for a thermal receipt printer.",
        prog="dotpress-render",
    )
    parser.add_argument(
        "image",
        type=Path,
        help="Path to the source image (PNG, JPEG, ...)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output file path (default: preview.png, or <image>.bin for raw)",
    )
    parser.add_argument(
        "-p",
        "--profile",
        type=Path,
        default=None,
        help=f"YAML processing profile (default: {settings.profile_file} if present)",
    )
    parser.add_argument(
        "-m",
        "--method",
        type=DitherMethod,
        choices=list(DitherMethod),
        help="Dithering method (also accepts steinberg, ordered, pattern, none)",
    )
    parser.add_argument("--threshold", type=int, help="Threshold 0-255 (default 128)")
    parser.add_argument("--brightness", type=int, help="Brightness 0-255 (default 128)")
    parser.add_argument("--contrast", type=int, help="Contrast 0-200 percent (default 100)")
    parser.add_argument("--invert", action="store_true", default=None, help="Invert the image")
    parser.add_argument("--bayer-size", type=int, help="Bayer matrix size 2-16")
    parser.add_argument("--cell-size", type=int, help="Halftone cell size 2-16")
    parser.add_argument("--width", type=int, help="Output width in dots")
    parser.add_argument("--height", type=int, help="Output height in dots (ignores aspect ratio)")
    parser.add_argument(
        "--stretch",
        action="store_true",
        help="Keep the source height instead of preserving the aspect ratio",
    )
    parser.add_argument("--rotate", type=int, help="Clockwise rotation: 0, 90, 180 or 270")
    parser.add_argument("--scale", type=int, help="Preview pixels per dot (png only)")
    parser.add_argument(
        "--keep-alpha",
        action="store_true",
        help="Do not flatten transparent areas onto white before processing",
    )
    parser.add_argument(
        "--format",
        choices=["png", "raw"],
        default="png",
        help="png preview or raw packed rows, 8 dots per byte MSB first (default: png)",
    )
    return parser


def _apply_overrides(options: ProcessingOptions, args: argparse.Namespace) -> ProcessingOptions:
    """Layer command line values over a loaded profile."""
    data = options.model_dump()
    tone_overrides = {
        "brightness": args.brightness,
        "contrast": args.contrast,
        "invert": args.invert,
    }
    dither_overrides = {
        "method": args.method,
        "threshold": args.threshold,
        "bayer_matrix_size": args.bayer_size,
        "halftone_cell_size": args.cell_size,
    }
    option_overrides = {
        "target_width": args.width,
        "target_height": args.height,
        "rotation": args.rotate,
        "preview_scale": args.scale,
    }
    data["tone"].update({k: v for k, v in tone_overrides.items() if v is not None})
    data["dither"].update({k: v for k, v in dither_overrides.items() if v is not None})
    data.update({k: v for k, v in option_overrides.items() if v is not None})
    if args.stretch:
        data["maintain_aspect_ratio"] = False
    return ProcessingOptions.model_validate(data)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for dotpress-render CLI."""
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    args = _build_parser().parse_args(argv)

    if not args.image.exists():
        print(f"Error: Image file not found: {args.image}", file=sys.stderr)
        return 1

    profile_path = args.profile if args.profile is not None else settings.profile_file
    if args.profile is not None and not profile_path.exists():
        print(f"Error: Profile file not found: {profile_path}", file=sys.stderr)
        return 1

    try:
        options = _apply_overrides(load_profile(profile_path), args)
    except yaml.YAMLError as e:
        print(f"Error parsing profile YAML: {e}", file=sys.stderr)
        return 1
    except (ValidationError, ProcessingError) as e:
        print(f"Error in processing options: {e}", file=sys.stderr)
        return 1

    try:
        raster = RasterImage.from_bytes(args.image.read_bytes())
    except (OSError, UnidentifiedImageError) as e:
        print(f"Error reading image: {e}", file=sys.stderr)
        return 1
    except ProcessingError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not args.keep_alpha:
        raster = raster.flatten_alpha()

    pipeline = ProcessingPipeline(printer_width=settings.printer_width)
    try:
        result = pipeline.process_options(raster, options)
    except ProcessingError as e:
        print(f"Error processing image: {e}", file=sys.stderr)
        return 1

    grid = result.monochrome_grid
    if args.format == "raw":
        output = pack_grid(grid)
        output_path = args.output or args.image.with_suffix(".bin")
    else:
        output = result.preview_bitmap.to_png()
        output_path = args.output or Path("preview.png")

    try:
        with open(output_path, "wb") as f:
            f.write(output)
    except OSError as e:
        print(f"Error writing output: {e}", file=sys.stderr)
        return 1

    logger.debug(f"{grid.ink_count} of {grid.width * grid.height} dots inked")
    print(f"Rendered {grid.width}x{grid.height} ({options.dither.method}) to {output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
