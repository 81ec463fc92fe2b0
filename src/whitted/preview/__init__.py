"""Preview module for output and visualization.

Components:
    display: Tone mapping, gamma and Matplotlib previews
    export: PNG and PPM export
    interactive: Taichi GGUI preview window

Example:
    >>> from whitted.preview import save_png, show_preview
    >>> show_preview(canvas, tone_map="reinhard")
    >>> save_png(canvas, "output.png")

For the interactive GGUI preview:
    >>> from whitted.preview import InteractivePreview
    >>> preview = InteractivePreview(camera.hsize, camera.vsize)
    >>> preview.run_progressive(renderer)
"""

from .display import (
    ToneMapMethod,
    apply_gamma,
    process_image_for_display,
    show_comparison,
    show_preview,
    tone_map_exposure,
    tone_map_reinhard,
)
from .export import (
    canvas_to_ppm,
    compute_rmse,
    image_to_uint8,
    save_png,
    save_png_from_array,
    save_ppm,
)
from .interactive import InteractivePreview

__all__ = [
    # Interactive preview
    "InteractivePreview",
    # Display functions
    "show_preview",
    "show_comparison",
    # Tone mapping
    "tone_map_reinhard",
    "tone_map_exposure",
    "apply_gamma",
    "process_image_for_display",
    "ToneMapMethod",
    # Export functions
    "save_png",
    "save_png_from_array",
    "save_ppm",
    "canvas_to_ppm",
    "image_to_uint8",
    "compute_rmse",
]
