#!/usr/bin/env python3
"""Render a YAML scene document to an image file.

Without a scene argument the default two-sphere test world is rendered.

Usage:
    python -m examples.render_scene [scene.yml] [options]

Options:
    --width WIDTH       Image width in pixels (default: from the scene)
    --height HEIGHT     Image height in pixels (default: from the scene)
    --depth DEPTH       Maximum recursion depth (default: 5)
    --workers N         Worker processes, 0 for one per CPU (default: 1)
    --output OUTPUT     Output file, .png or .ppm (default: render.png)
    --tone-map METHOD   none, reinhard or exposure (PNG only, default: none)
    --gamma GAMMA       Gamma correction (PNG only, default: 1.0)
    --quiet             Suppress progress output
    --verbose           Enable debug logging

Example:
    python -m examples.render_scene examples/scenes/reflection.yml --workers 0
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import time
from pathlib import Path

# Ensure the src directory is importable for direct execution
_src_root = Path(__file__).resolve().parent.parent / "src"
if str(_src_root) not in sys.path:
    sys.path.insert(0, str(_src_root))


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a YAML scene document.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "scene",
        nargs="?",
        default=None,
        help="Scene document (default: the built-in test world)",
    )
    parser.add_argument("--width", type=int, default=None, help="Image width in pixels")
    parser.add_argument("--height", type=int, default=None, help="Image height in pixels")
    parser.add_argument(
        "--depth",
        type=int,
        default=5,
        help="Maximum recursion depth (default: 5)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Worker processes, 0 for one per CPU (default: 1)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="render.png",
        help="Output file path, .png or .ppm (default: render.png)",
    )
    parser.add_argument(
        "--tone-map",
        choices=("none", "reinhard", "exposure"),
        default="none",
        help="Tone mapping for PNG output (default: none)",
    )
    parser.add_argument(
        "--gamma",
        type=float,
        default=1.0,
        help="Gamma correction for PNG output (default: 1.0)",
    )
    parser.add_argument("--quiet", action="store_true", help="Suppress progress output")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def render_scene(
    scene_path: str | None = None,
    *,
    width: int | None = None,
    height: int | None = None,
    depth: int = 5,
    workers: int = 1,
    output_path: str = "render.png",
    tone_map: str = "none",
    gamma: float = 1.0,
    quiet: bool = False,
) -> Path:
    """Render a scene and save it.

    Args:
        scene_path: YAML scene document, or None for the default world.
        width: Image width override.
        height: Image height override.
        depth: Maximum recursion depth.
        workers: Worker processes (0 for one per CPU).
        output_path: Output file; ``.ppm`` writes PPM, anything else PNG.
        tone_map: Tone mapping for PNG output.
        gamma: Gamma correction for PNG output.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    from whitted.core.renderer import RenderConfig, Renderer
    from whitted.preview.export import save_png, save_ppm
    from whitted.scene.loader import CameraConfig, Scene, load_scene
    from whitted.scene.world import default_world

    if scene_path is None:
        scene = Scene(default_world(), CameraConfig(width=400, height=400))
    else:
        scene = load_scene(scene_path)

    camera = scene.camera_config.to_camera(width, height)
    config = RenderConfig(max_depth=depth, workers=workers or os.cpu_count() or 1)
    renderer = Renderer(camera, scene.world, config)

    if not quiet:
        print(
            f"Rendering {camera.hsize}x{camera.vsize}: {len(scene.world.shapes)} objects, "
            f"{len(scene.world.lights)} lights, {config.workers} worker(s)..."
        )

    start_time = time.time()

    def progress_callback(done: int, total: int) -> None:
        if not quiet:
            elapsed = time.time() - start_time
            progress_pct = (done / total) * 100 if total > 0 else 0
            print(
                f"\r  Progress: {done}/{total} rows ({progress_pct:.1f}%) - {elapsed:.1f}s",
                end="",
                flush=True,
            )

    canvas = renderer.render(callback=progress_callback)

    if not quiet:
        print()

    output_file = Path(output_path)
    if output_file.suffix.lower() == ".ppm":
        save_ppm(canvas, output_file)
    else:
        save_png(canvas, output_file, tone_map=tone_map, gamma=gamma)  # type: ignore[arg-type]

    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {time.time() - start_time:.2f}s")

    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        render_scene(
            args.scene,
            width=args.width,
            height=args.height,
            depth=args.depth,
            workers=args.workers,
            output_path=args.output,
            tone_map=args.tone_map,
            gamma=args.gamma,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
