#!/usr/bin/env python3
"""Render the fixed sphere-over-plane scene to a PNG file.

The image size, camera and scene are the defaults in
tinytrace.scene.config; only the output location can be changed.

Usage:
    python -m examples.render_scene [options]

Options:
    --output OUTPUT     Output file path (default: render.png)
    --shading MODE      "flat" or "normal" (default: flat)
    --quiet             Suppress progress output

Example:
    python -m examples.render_scene --output sphere.png
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
import time

import taichi as ti


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the sphere-over-plane scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--output",
        type=str,
        default="render.png",
        help="Output file path (default: render.png)",
    )
    parser.add_argument(
        "--shading",
        choices=("flat", "normal"),
        default="flat",
        help="Flat primitive colors or normal visualization (default: flat)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def render_scene(output_path: str = "render.png", shading: str = "flat", quiet: bool = False) -> bool:
    """Render the default configuration and save it.

    Args:
        output_path: Output file path (PNG).
        shading: "flat" or "normal".
        quiet: If True, suppress progress output.

    Returns:
        True if the image was saved.
    """
    # Lazy imports so Taichi fields are created after ti.init()
    from tinytrace.core.renderer import render_to_file
    from tinytrace.scene.config import DEFAULT_RENDER_CONFIG
    from tinytrace.shading.shader import ShadingMode

    config = dataclasses.replace(DEFAULT_RENDER_CONFIG, shading=ShadingMode[shading.upper()])

    if not quiet:
        print(f"Rendering {config.width}x{config.height}...")

    start_time = time.time()
    saved = render_to_file(config, output_path)

    if not quiet:
        if saved:
            print(f"Saved to {output_path}")
        else:
            print(f"Cannot save to {output_path}")
        print(f"Total time: {time.time() - start_time:.2f}s")

    return saved


def main() -> int:
    """Main entry point."""
    args = parse_args()

    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    ti.init(arch=ti.cpu, fast_math=False)

    try:
        render_scene(output_path=args.output, shading=args.shading, quiet=args.quiet)
        # A failed save is reported but is not a process error
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
