"""Command line driver.

Renders one of the preset scenes and writes it as PPM or PNG.

Usage:
    python -m pathtracer [options]

Options:
    --scene NAME          Scene to render: two-spheres, showcase or random
                          (default: two-spheres)
    --width WIDTH         Image width in pixels (default: 400)
    --aspect-ratio RATIO  Image width / height (default: 1.7778)
    --samples SAMPLES     Rays per pixel (default: 10)
    --max-depth DEPTH     Maximum bounces per path (default: 10)
    --workers N           Worker threads (default: one per CPU)
    --seed SEED           Seed for sampling and random scene layout
    --output OUTPUT       Output file, .ppm or .png (default: PPM on stdout)
    --quiet               Suppress progress output

Example:
    python -m pathtracer --scene showcase --samples 50 --output showcase.png

Diagnostics always go to stderr so stdout can carry the image.
"""

from __future__ import annotations

import argparse
import sys
import time
from collections.abc import Sequence

from pathtracer.camera.thin_lens import Camera
from pathtracer.core.integrator import MAX_DEPTH
from pathtracer.core.renderer import RenderSettings, render_image
from pathtracer.output.export import output_format, save_image, write_ppm
from pathtracer.scene.presets import DEFAULT_ASPECT_RATIO, DEFAULT_IMAGE_WIDTH, PRESETS, get_preset


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="pathtracer",
        description="Render a sphere scene with a Monte Carlo path tracer.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--scene",
        choices=sorted(PRESETS),
        default="two-spheres",
        help="Scene to render (default: two-spheres)",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=DEFAULT_IMAGE_WIDTH,
        help=f"Image width in pixels (default: {DEFAULT_IMAGE_WIDTH})",
    )
    parser.add_argument(
        "--aspect-ratio",
        type=float,
        default=DEFAULT_ASPECT_RATIO,
        help="Image width / height (default: 16/9)",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=10,
        help="Rays per pixel (default: 10)",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=MAX_DEPTH,
        help=f"Maximum bounces per path (default: {MAX_DEPTH})",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker threads (default: one per CPU)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for sampling and random scene layout",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output file, .ppm or .png (default: PPM on stdout)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> None:
    """Render the requested scene and write the image."""
    if args.width < 1:
        raise ValueError(f"Image width = {args.width} must be at least 1")
    if not args.aspect_ratio > 0.0:
        raise ValueError(f"Aspect ratio = {args.aspect_ratio} must be positive")
    if args.output is not None:
        output_format(args.output)

    settings = RenderSettings(
        samples_per_pixel=args.samples,
        max_depth=args.max_depth,
        workers=args.workers,
        seed=args.seed,
        progress=not args.quiet,
    )

    world, config = get_preset(
        args.scene,
        image_width=args.width,
        aspect_ratio=args.aspect_ratio,
        seed=args.seed,
    )
    camera = Camera(config)

    if not args.quiet:
        print(
            f"Rendering '{args.scene}' ({len(world)} spheres) at "
            f"{camera.image_width}x{camera.image_height}, "
            f"{settings.samples_per_pixel} samples per pixel...",
            file=sys.stderr,
        )

    start_time = time.time()
    colors = render_image(camera, world, settings)

    if args.output is None:
        write_ppm(colors, camera.image_width, camera.image_height, sys.stdout)
        sys.stdout.flush()
    else:
        save_image(args.output, colors, camera.image_width, camera.image_height)

    total_time = time.time() - start_time
    if not args.quiet:
        if args.output is not None:
            print(f"Saved to: {args.output}", file=sys.stderr)
        print(f"Total time: {total_time:.2f}s", file=sys.stderr)


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    try:
        run(args)
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
