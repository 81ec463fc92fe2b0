"""Image export utilities for rendered canvases.

Supported formats:
    - PNG (8-bit RGB via Pillow), with optional tone mapping and gamma
    - PPM (plain-text P3, clamped and rounded to 0..255)

Example:
    >>> from whitted.core.renderer import render
    >>> from whitted.preview.export import save_png, save_ppm
    >>>
    >>> canvas = render(camera, world)
    >>> save_png(canvas, "output.png")
    >>> save_ppm(canvas, "output.ppm")
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from whitted.preview.display import ToneMapMethod, process_image_for_display

if TYPE_CHECKING:
    from whitted.core.canvas import Canvas

# Maximum line length of PPM pixel data
PPM_LINE_LENGTH = 70

# Maximum color value written to PPM headers
PPM_MAX_VALUE = 255


# =============================================================================
# 8-bit Conversion
# =============================================================================


def image_to_uint8(
    image: npt.NDArray[np.floating[npt.NBitBase]],
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 1.0,
    exposure: float = 1.0,
) -> npt.NDArray[np.uint8]:
    """Convert a linear float image to 8-bit.

    Values are processed for display, scaled to 0..255 and rounded half up.

    Args:
        image: Linear image array of shape (H, W, 3).
        tone_map: Tone mapping method ("none", "reinhard", or "exposure").
        gamma: Gamma correction value (default 1.0, linear).
        exposure: Exposure value for exposure tone mapping.

    Returns:
        8-bit image array of shape (H, W, 3).
    """
    processed = process_image_for_display(
        image,
        tone_map=tone_map,
        gamma=gamma,
        exposure=exposure,
    ).astype(np.float64)
    return np.floor(processed * 255.0 + 0.5).astype(np.uint8)


# =============================================================================
# PNG
# =============================================================================


def save_png(
    canvas: Canvas,
    filepath: str | Path,
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 1.0,
    exposure: float = 1.0,
) -> None:
    """Save a canvas as an 8-bit PNG file.

    Args:
        canvas: The rendered canvas.
        filepath: Output file path (should end in .png).
        tone_map: Tone mapping method ("none", "reinhard", or "exposure").
        gamma: Gamma correction value (default 1.0, linear).
        exposure: Exposure value for exposure tone mapping.
    """
    save_png_from_array(
        canvas.to_numpy(),
        filepath,
        tone_map=tone_map,
        gamma=gamma,
        exposure=exposure,
    )


def save_png_from_array(
    image: npt.NDArray[np.floating[npt.NBitBase]],
    filepath: str | Path,
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 1.0,
    exposure: float = 1.0,
) -> None:
    """Save a linear float array of shape (H, W, 3) as a PNG file."""
    image_uint8 = image_to_uint8(image, tone_map=tone_map, gamma=gamma, exposure=exposure)
    PILImage.fromarray(image_uint8).save(filepath)


# =============================================================================
# PPM
# =============================================================================


def _wrap_values(values: list[str]) -> list[str]:
    lines: list[str] = []
    current = ""
    for value in values:
        if not current:
            current = value
        elif len(current) + 1 + len(value) <= PPM_LINE_LENGTH:
            current = f"{current} {value}"
        else:
            lines.append(current)
            current = value
    if current:
        lines.append(current)
    return lines


def canvas_to_ppm(canvas: Canvas) -> str:
    """Encode a canvas as plain-text PPM (P3).

    Each image row starts on a new line and no line exceeds 70 characters.
    The result ends with a newline.
    """
    pixels = canvas.to_rgb888()
    lines = ["P3", f"{canvas.width} {canvas.height}", str(PPM_MAX_VALUE)]
    for row in pixels:
        lines.extend(_wrap_values([str(int(v)) for v in row.reshape(-1)]))
    return "\n".join(lines) + "\n"


def save_ppm(canvas: Canvas, filepath: str | Path) -> None:
    Path(filepath).write_text(canvas_to_ppm(canvas), encoding="ascii")


# =============================================================================
# Comparison
# =============================================================================


def compute_rmse(
    image_a: npt.NDArray[np.floating[npt.NBitBase]],
    image_b: npt.NDArray[np.floating[npt.NBitBase]],
) -> float:
    """Compute root mean squared error between two images.

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(f"Image shapes must match: {image_a.shape} vs {image_b.shape}")

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
