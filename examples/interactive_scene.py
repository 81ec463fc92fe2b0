#!/usr/bin/env python3
"""Interactive preview of a scene while it renders.

This script opens a Taichi GGUI window and fills it in scanline batches as
the renderer works through the image.

Usage:
    python -m examples.interactive_scene [scene.yml] [--workers N] [--depth D]

Controls:
    - Export PNG: Save the current canvas with a timestamped filename
    - Restart: Render the scene again from scratch
    - Close the window to exit (an unfinished render is abandoned)
"""

from __future__ import annotations

import argparse
import os
import platform
import sys
from pathlib import Path

# Ensure the src directory is importable for direct execution
_src_root = Path(__file__).resolve().parent.parent / "src"
if str(_src_root) not in sys.path:
    sys.path.insert(0, str(_src_root))

import taichi as ti  # noqa: E402


def initialize_taichi() -> str:
    """Initialize Taichi with the best available backend.

    Returns:
        Name of the backend being used.
    """
    if platform.system() == "Darwin":
        try:
            ti.init(arch=ti.metal)
            return "Metal (GPU)"
        except RuntimeError:
            pass

    try:
        ti.init(arch=ti.gpu)
        return "GPU"
    except RuntimeError:
        pass

    ti.init(arch=ti.cpu)
    return "CPU"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Interactively preview a scene render.")
    parser.add_argument("scene", nargs="?", default=None, help="Scene document")
    parser.add_argument("--depth", type=int, default=5, help="Maximum recursion depth")
    parser.add_argument(
        "--workers",
        type=int,
        default=0,
        help="Worker processes, 0 for one per CPU (default: 0)",
    )
    parser.add_argument(
        "--rows-per-batch",
        type=int,
        default=4,
        help="Scanlines per display update (default: 4)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the interactive preview.

    Returns:
        Exit code (0 for success, non-zero for error).
    """
    args = parse_args(argv)

    backend = initialize_taichi()
    print(f"Taichi backend: {backend}")

    from whitted.core.renderer import RenderConfig, Renderer
    from whitted.preview.interactive import InteractivePreview
    from whitted.scene.loader import CameraConfig, Scene, SceneError, load_scene
    from whitted.scene.world import default_world

    if not InteractivePreview.is_display_available():
        print("Error: No display available. Cannot run interactive preview.")
        print("This script requires a graphical display environment.")
        return 1

    try:
        if args.scene is None:
            scene = Scene(default_world(), CameraConfig(width=400, height=400))
        else:
            scene = load_scene(args.scene)
        config = RenderConfig(
            max_depth=args.depth,
            workers=args.workers or os.cpu_count() or 1,
            rows_per_batch=args.rows_per_batch,
        )
    except (OSError, SceneError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    camera = scene.camera
    renderer = Renderer(camera, scene.world, config)

    print(f"Creating interactive preview window ({camera.hsize}x{camera.vsize})...")
    preview = InteractivePreview(camera.hsize, camera.vsize)

    print("Starting render...")
    print("  - Click 'Export PNG' to save the current canvas")
    print("  - Click 'Restart' to render again")
    print("  - Close window to exit")
    print()

    try:
        preview.run_progressive(renderer)
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
    finally:
        preview.close()
        print("Preview window closed.")

    return 0


if __name__ == "__main__":
    sys.exit(main())
