"""Interactive preview window using Taichi GGUI.

This module shows renders in a ``ti.ui.Window`` while they are produced:

Features:
    - Taichi GGUI window backed by a vec3 display field
    - Updating the display from NumPy arrays or canvases
    - Progressive display of a ``Renderer`` as scanline batches arrive
    - PNG export button and a restart button

Taichi must be initialized (``ti.init``) before creating a preview.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from whitted.core.renderer import Renderer
    >>> from whitted.preview.interactive import InteractivePreview
    >>>
    >>> renderer = Renderer(camera, world)
    >>> preview = InteractivePreview(camera.hsize, camera.vsize)
    >>> preview.run_progressive(renderer)
"""

from __future__ import annotations

import os
from datetime import datetime
from typing import TYPE_CHECKING

import numpy as np
import taichi as ti

from whitted.preview.display import ToneMapMethod, process_image_for_display

if TYPE_CHECKING:
    import numpy.typing as npt

    from whitted.core.canvas import Canvas
    from whitted.core.renderer import Renderer


class InteractivePreview:
    """Interactive preview window using Taichi GGUI.

    The window itself is created lazily, so a preview can be constructed and
    fed images in headless environments.

    Attributes:
        width: Window width in pixels.
        height: Window height in pixels.
        display_image: Taichi field storing the display image (RGB float).
        tone_map: Tone mapping applied to canvases before display.
        gamma: Gamma applied to canvases before display.
    """

    def __init__(
        self,
        width: int,
        height: int,
        *,
        title: str = "Whitted Ray Tracer - Preview",
        tone_map: ToneMapMethod = "none",
        gamma: float = 1.0,
    ) -> None:
        """Initialize the interactive preview.

        Args:
            width: Window width in pixels.
            height: Window height in pixels.
            title: Window title.
            tone_map: Tone mapping applied by ``update_from_canvas``.
            gamma: Gamma applied by ``update_from_canvas``.
        """
        self.width = width
        self.height = height
        self.tone_map = tone_map
        self.gamma = gamma
        self._title = title
        self._is_initialized = False
        self._window: ti.ui.Window | None = None
        self._canvas: ti.ui.Canvas | None = None
        self._rows_done = 0
        self._total_rows = height

        # Taichi fields are indexed (x, y), so the shape is (width, height)
        self.display_image: ti.MatrixField = ti.Vector.field(
            3, dtype=ti.f32, shape=(width, height)
        )

    def _initialize_window(self) -> None:
        if self._is_initialized:
            return

        self._window = ti.ui.Window(
            name=self._title,
            res=(self.width, self.height),
            vsync=True,
        )
        self._canvas = self._window.get_canvas()
        self._is_initialized = True

    @property
    def window(self) -> ti.ui.Window:
        """Get the Taichi GGUI window, initializing if needed."""
        if self._window is None:
            self._initialize_window()
        assert self._window is not None
        return self._window

    @property
    def canvas(self) -> ti.ui.Canvas:
        """Get the GGUI canvas (not to be confused with a render ``Canvas``)."""
        if self._canvas is None:
            self._initialize_window()
        assert self._canvas is not None
        return self._canvas

    @property
    def progress(self) -> tuple[int, int]:
        """Rows rendered so far and total rows of the current render."""
        return self._rows_done, self._total_rows

    # =========================================================================
    # Display Updates
    # =========================================================================

    def update_image(self, image: npt.NDArray[np.floating[npt.NBitBase]]) -> None:
        """Update the display image from a NumPy array.

        Args:
            image: Array of shape (height, width, 3) with values in [0, 1].

        Raises:
            ValueError: If image shape doesn't match (height, width, 3).
        """
        expected_shape = (self.height, self.width, 3)
        if image.shape != expected_shape:
            raise ValueError(f"Image shape {image.shape} doesn't match expected {expected_shape}")

        # NumPy images are (row, column) from the top; Taichi is (x, y) from the bottom
        image_transposed = np.ascontiguousarray(
            np.transpose(np.flipud(image), (1, 0, 2)).astype(np.float32)
        )
        self.display_image.from_numpy(image_transposed)

    def update_from_canvas(self, canvas: Canvas) -> None:
        """Tone map a render canvas and show it."""
        self.update_image(
            process_image_for_display(canvas.to_numpy(), tone_map=self.tone_map, gamma=self.gamma)
        )

    def is_running(self) -> bool:
        return self.window.running

    def show_frame(self) -> None:
        """Present the current display image as one frame."""
        self.canvas.set_image(self.display_image)
        self.window.show()

    def run(self) -> None:
        """Show the display image until the window is closed."""
        self._initialize_window()
        while self.is_running():
            self.show_frame()

    def close(self) -> None:
        if self._window is not None:
            self._window.running = False

    @staticmethod
    def is_display_available() -> bool:
        """Check if a display is available for GUI rendering.

        Returns:
            True if a display is available, False for headless environments.
        """
        display = os.environ.get("DISPLAY")
        wayland = os.environ.get("WAYLAND_DISPLAY")

        if os.name == "nt":
            return True

        # On macOS, display is available unless in SSH without X forwarding
        if os.uname().sysname == "Darwin":
            return not (os.environ.get("SSH_CONNECTION") and not display)

        return bool(display or wayland)

    # =========================================================================
    # Progressive Rendering
    # =========================================================================

    def run_progressive(self, renderer: Renderer) -> None:
        """Render with ``renderer`` while showing rows as they complete.

        The window stays open after the render finishes. Closing the window
        mid-render abandons the remaining rows. The GUI panel offers PNG
        export of the current canvas and a restart button.

        Args:
            renderer: The renderer to drive. Its size must match the window.

        Raises:
            ValueError: If the renderer size differs from the window size.
        """
        if (renderer.width, renderer.height) != (self.width, self.height):
            raise ValueError(
                f"Renderer size {renderer.width}x{renderer.height} doesn't match "
                f"preview size {self.width}x{self.height}"
            )

        self._initialize_window()
        progress = renderer.render_progressive()
        try:
            while self.is_running():
                if progress is not None:
                    step = next(progress, None)
                    if step is None:
                        progress = None
                    else:
                        self._rows_done, self._total_rows = step
                    self.update_from_canvas(renderer.canvas)

                if self._draw_gui_panel(renderer):
                    if progress is not None:
                        progress.close()
                    self._rows_done = 0
                    progress = renderer.render_progressive()

                self.show_frame()
        finally:
            if progress is not None:
                progress.close()

    def _draw_gui_panel(self, renderer: Renderer) -> bool:
        """Draw the render status panel.

        Returns:
            True if the user asked to restart the render.
        """
        restart = False
        with self.window.GUI.sub_window("Render", 0.02, 0.02, 0.3, 0.16) as gui:
            gui.text(f"Rows: {self._rows_done}/{self._total_rows}")
            if gui.button("Export PNG"):
                self._export_png(renderer)
            if gui.button("Restart"):
                restart = True
        return restart

    def _export_png(self, renderer: Renderer) -> None:
        """Save the current canvas to a timestamped PNG in the working directory."""
        from whitted.preview.export import save_png

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = f"render_{timestamp}.png"
        save_png(renderer.canvas, filename, tone_map=self.tone_map, gamma=self.gamma)
        print(f"Exported: {filename} ({self._rows_done}/{self._total_rows} rows)")
