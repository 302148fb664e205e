"""
Command-Line Interface for Mipchain

Usage:
    mipchain scenery.png --mips out/mips.png
    mipchain scenery.png -o out/zoom.png --scale 4 --sample trilinear
    mipchain scenery.png -o out/spin.png --scale 2 --rotate 30 --translate 0.25 0

"""

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional

from . import __version__
from .renderer import TextureRenderer
from .sampler import SampleType
from .transform import (
    compose, degrees_to_radians, rotation33, scale33, translation33
)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="mipchain",
        description="Build mip chains and render textures under UV transforms",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  mipchain scenery.png --mips mips.png
      Write every mip level stacked in one image

  mipchain scenery.png -o zoom.png --scale 4
      Sample the texture 4x minified (tiled), trilinear filtered

  mipchain scenery.png -o spin.png --scale 2 --rotate 45 --sample bilinear --no-mips
      Rotated and minified without mips (shows aliasing)

Transform order:
  scale, then rotate, then translate (applied to output UVs)

Sample Modes:
  nearest    - Single texel
  bilinear   - 2x2 texels
  trilinear  - Bilinear on two mip levels, blended (default)
        """
    )

    parser.add_argument(
        "input",
        help="Input texture (any format Pillow reads)"
    )

    parser.add_argument(
        "-o", "--output",
        help="Rendered output image path"
    )

    parser.add_argument(
        "--mips",
        help="Write the mip chain as one stacked image to this path"
    )

    # Transform
    parser.add_argument(
        "--scale",
        type=float,
        nargs="+",
        default=[1.0],
        metavar="S",
        help="UV scale, one value (uniform) or two (x y) (default: 1)"
    )

    parser.add_argument(
        "--rotate",
        type=float,
        default=0.0,
        metavar="DEGREES",
        help="UV rotation in degrees (default: 0)"
    )

    parser.add_argument(
        "--translate",
        type=float,
        nargs=2,
        default=[0.0, 0.0],
        metavar=("U", "V"),
        help="UV translation (default: 0 0)"
    )

    # Sampling
    parser.add_argument(
        "-s", "--sample",
        choices=[mode.value for mode in SampleType],
        default=SampleType.TRILINEAR.value,
        help="Sample mode (default: trilinear)"
    )

    parser.add_argument(
        "--size",
        type=int,
        nargs=2,
        metavar=("W", "H"),
        help="Output size (default: input size)"
    )

    parser.add_argument(
        "--no-mips",
        action="store_true",
        help="Always sample mip level 0"
    )

    parser.add_argument(
        "--truncate",
        action="store_true",
        help="Truncate instead of round when interpolating"
    )

    # Misc
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output with statistics"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    return parser


def build_transform(scale: List[float], rotate: float, translate: List[float]):
    """
    Build the 3x3 UV transform from CLI values.

    Args:
        scale: [s] or [sx, sy]
        rotate: Rotation in degrees
        translate: [u, v]

    Returns:
        3x3 homogeneous matrix
    """
    if len(scale) not in (1, 2):
        raise ValueError("--scale takes one or two values")

    return compose(
        scale33(*scale),
        rotation33(degrees_to_radians(rotate)),
        translation33(*translate)
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: Input file not found: {input_path}", file=sys.stderr)
        return 1

    if not args.output and not args.mips:
        print("Error: Nothing to do, pass --output and/or --mips", file=sys.stderr)
        return 1

    start_time = time.time()

    try:
        renderer = TextureRenderer(
            sample_type=args.sample,
            use_mips=not args.no_mips,
            truncate=args.truncate
        )

        if args.verbose:
            print(f"Loading: {input_path}")

        renderer.load_image(input_path)

        if args.verbose:
            sizes = ", ".join(f"{w}x{h}" for w, h in renderer.preview()["mip_sizes"])
            print(f"Mip levels: {len(renderer.chain)} ({sizes})")

        if args.mips:
            output_path = renderer.export_mips(args.mips)
            if args.verbose:
                print(f"Exported: {output_path}")

        if args.output:
            transform = build_transform(args.scale, args.rotate, args.translate)
            output_size = tuple(args.size) if args.size else None

            render_start = time.time()
            renderer.render(transform, output_size)
            render_time = time.time() - render_start

            output_path = renderer.export_render(args.output)
            if args.verbose:
                width, height = renderer.output.size
                print(f"Rendered {width}x{height} ({args.sample}) at LOD {renderer.lod:.3f}")
                print(f"  Render time: {render_time*1000:.1f}ms")
                print(f"Exported: {output_path}")

        elapsed = time.time() - start_time
        if args.verbose:
            print(f"\nCompleted in {elapsed:.2f}s")

        return 0

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
