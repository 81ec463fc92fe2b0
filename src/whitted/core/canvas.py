"""Pixel buffer for rendered images.

The canvas stores linear RGB values as a float64 NumPy array of shape
(height, width, 3), row-major with row 0 at the top of the image. Values are
never clamped here; clamping and quantization happen only when converting to
8-bit output (``to_rgb888``) or in the preview/export helpers.
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from whitted.core.tuples import Color


class Canvas:
    """A width x height grid of linear RGB pixels, initialised to black.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
    """

    def __init__(self, width: int, height: int) -> None:
        """Create a black canvas.

        Args:
            width: Image width in pixels.
            height: Image height in pixels.

        Raises:
            ValueError: If either dimension is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self._pixels: npt.NDArray[np.float64] = np.zeros((height, width, 3), dtype=np.float64)

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) is outside a {self.width}x{self.height} canvas")

    def write_pixel(self, x: int, y: int, color: Color) -> None:
        self._check_bounds(x, y)
        self._pixels[y, x] = color

    def pixel_at(self, x: int, y: int) -> Color:
        self._check_bounds(x, y)
        r, g, b = self._pixels[y, x]
        return Color(float(r), float(g), float(b))

    def write_row(self, y: int, colors: npt.ArrayLike) -> None:
        """Write a full scanline.

        Args:
            y: Row index.
            colors: Array-like of shape (width, 3).

        Raises:
            ValueError: If the row has the wrong shape.
        """
        row = np.asarray(colors, dtype=np.float64)
        if row.shape != (self.width, 3):
            raise ValueError(f"Row shape {row.shape} doesn't match expected {(self.width, 3)}")
        if not 0 <= y < self.height:
            raise IndexError(f"Row {y} is outside a canvas of height {self.height}")
        self._pixels[y] = row

    def fill(self, color: Color) -> None:
        self._pixels[:, :] = color

    def to_numpy(self) -> npt.NDArray[np.float64]:
        """Return a copy of the linear image, shape (height, width, 3)."""
        return self._pixels.copy()

    def to_rgb888(self) -> npt.NDArray[np.uint8]:
        """Clamp to [0, 1], scale to 0..255 and round to 8-bit."""
        scaled = np.clip(self._pixels, 0.0, 1.0) * 255.0
        # Round half up; values are already non-negative
        return np.floor(scaled + 0.5).astype(np.uint8)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Canvas):
            return NotImplemented
        return self.width == other.width and self.height == other.height and bool(
            np.array_equal(self._pixels, other._pixels)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Canvas(width={self.width}, height={self.height})"
