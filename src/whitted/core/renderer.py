"""Scanline renderer producing a canvas from a camera and a world.

This module drives the integrator over every pixel of the camera's image:

- Rows are grouped into batches of ``rows_per_batch`` scanlines
- Batches are traced inline (``workers == 1``) or on a ``multiprocessing``
  pool whose workers each hold a read-only copy of the camera and world
- Every batch writes a disjoint set of canvas rows, so the image is identical
  whatever the worker count
- Progress is reported after each batch, through a callback or by iterating
  ``render_progressive()``; closing that generator abandons the render

Example:
    >>> from whitted.camera.pinhole import Camera
    >>> from whitted.core.renderer import RenderConfig, Renderer
    >>> from whitted.scene.world import default_world
    >>>
    >>> camera = Camera(64, 48, 1.0)
    >>> renderer = Renderer(camera, default_world(), RenderConfig(workers=4))
    >>> canvas = renderer.render()
"""

from __future__ import annotations

import logging
import multiprocessing
import time
from collections.abc import Callable, Generator
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from whitted.camera.pinhole import Camera
from whitted.core.canvas import Canvas
from whitted.core.integrator import DEFAULT_MAX_DEPTH, color_at
from whitted.scene.world import World

logger = logging.getLogger(__name__)

# Type alias for progress callback
# Callback receives (rows_done, total_rows)
ProgressCallback = Callable[[int, int], None]


# =============================================================================
# Configuration
# =============================================================================


@dataclass(frozen=True)
class RenderConfig:
    """Renderer settings.

    Attributes:
        max_depth: Recursion budget for reflected and refracted rays.
        workers: Number of worker processes. 1 renders in the calling process.
        rows_per_batch: Scanlines traced per task and per progress update.
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    workers: int = 1
    rows_per_batch: int = 8

    def __post_init__(self) -> None:
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")
        if self.rows_per_batch < 1:
            raise ValueError(f"rows_per_batch must be at least 1, got {self.rows_per_batch}")


# =============================================================================
# Row Tracing
# =============================================================================


def trace_rows(
    camera: Camera, world: World, max_depth: int, start: int, stop: int
) -> npt.NDArray[np.float64]:
    """Trace scanlines ``start`` (inclusive) to ``stop`` (exclusive).

    Returns:
        Array of shape (stop - start, camera.hsize, 3) with linear colors.
    """
    block = np.zeros((stop - start, camera.hsize, 3), dtype=np.float64)
    for row, y in enumerate(range(start, stop)):
        for x in range(camera.hsize):
            block[row, x] = color_at(world, camera.ray_for_pixel(x, y), max_depth)
    return block


# Per-process state set by the pool initializer
_worker_camera: Camera | None = None
_worker_world: World | None = None
_worker_depth: int = DEFAULT_MAX_DEPTH


def _init_worker(camera: Camera, world: World, max_depth: int) -> None:
    global _worker_camera, _worker_world, _worker_depth
    _worker_camera = camera
    _worker_world = world
    _worker_depth = max_depth


def _trace_batch(rows: tuple[int, int]) -> tuple[int, npt.NDArray[np.float64]]:
    start, stop = rows
    assert _worker_camera is not None and _worker_world is not None
    return start, trace_rows(_worker_camera, _worker_world, _worker_depth, start, stop)


def row_batches(height: int, rows_per_batch: int) -> list[tuple[int, int]]:
    """Split ``height`` rows into consecutive ``(start, stop)`` ranges."""
    return [(start, min(start + rows_per_batch, height)) for start in range(0, height, rows_per_batch)]


# =============================================================================
# Renderer
# =============================================================================


class Renderer:
    """Renders a world through a camera into a canvas.

    The renderer owns the canvas of the most recent render. Each call to
    ``render`` or ``render_progressive`` starts from a black canvas.

    Attributes:
        camera: The camera generating primary rays.
        world: The scene being rendered.
        config: Renderer settings.
    """

    def __init__(self, camera: Camera, world: World, config: RenderConfig | None = None) -> None:
        """Initialize the renderer.

        Args:
            camera: Camera to render through.
            world: World to render.
            config: Renderer settings (defaults to ``RenderConfig()``).
        """
        self.camera = camera
        self.world = world
        self.config = config or RenderConfig()
        self._canvas = Canvas(camera.hsize, camera.vsize)

    @property
    def width(self) -> int:
        return self.camera.hsize

    @property
    def height(self) -> int:
        return self.camera.vsize

    @property
    def canvas(self) -> Canvas:
        """The canvas of the current or most recent render."""
        return self._canvas

    def render(self, callback: ProgressCallback | None = None) -> Canvas:
        """Render the full image.

        Args:
            callback: Optional function called after each batch of rows.
                Receives (rows_done, total_rows).

        Returns:
            The finished canvas.

        Example:
            >>> def progress(done, total):
            ...     print(f"Progress: {done}/{total} rows")
            >>> canvas = renderer.render(callback=progress)
        """
        for done, total in self.render_progressive():
            if callback is not None:
                callback(done, total)
        return self._canvas

    def render_progressive(self) -> Generator[tuple[int, int], None, None]:
        """Render the image, yielding progress after each batch of rows.

        The canvas is updated before each yield, so a caller can display the
        partial image. Closing the generator stops the render and shuts the
        worker pool down.

        Yields:
            Tuple of (rows_done, total_rows).

        Example:
            >>> for done, total in renderer.render_progressive():
            ...     preview.update_image(renderer.canvas.to_numpy())
        """
        self._canvas = Canvas(self.width, self.height)
        total = self.height
        batches = row_batches(total, self.config.rows_per_batch)
        depth = self.config.max_depth

        logger.debug(
            "Rendering %dx%d with %d worker(s), depth %d",
            self.width,
            self.height,
            self.config.workers,
            depth,
        )
        started = time.perf_counter()
        done = 0

        if self.config.workers == 1:
            for start, stop in batches:
                block = trace_rows(self.camera, self.world, depth, start, stop)
                done += self._store(start, block)
                yield (done, total)
        else:
            with multiprocessing.Pool(
                processes=self.config.workers,
                initializer=_init_worker,
                initargs=(self.camera, self.world, depth),
            ) as pool:
                for start, block in pool.imap(_trace_batch, batches):
                    done += self._store(start, block)
                    yield (done, total)

        logger.debug("Rendered %d rows in %.2fs", total, time.perf_counter() - started)

    def _store(self, start: int, block: npt.NDArray[np.float64]) -> int:
        for offset, row in enumerate(block):
            self._canvas.write_row(start + offset, row)
        return len(block)

    def __repr__(self) -> str:
        """Return a string representation of the renderer state."""
        return (
            f"Renderer(width={self.width}, height={self.height}, "
            f"max_depth={self.config.max_depth}, workers={self.config.workers})"
        )


def render(
    camera: Camera,
    world: World,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    workers: int = 1,
    callback: ProgressCallback | None = None,
) -> Canvas:
    """Render ``world`` through ``camera`` and return the canvas.

    Args:
        camera: Camera to render through.
        world: World to render.
        max_depth: Recursion budget for secondary rays.
        workers: Number of worker processes.
        callback: Optional progress callback receiving (rows_done, total_rows).
    """
    config = RenderConfig(max_depth=max_depth, workers=workers)
    return Renderer(camera, world, config).render(callback)
