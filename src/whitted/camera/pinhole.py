"""Pinhole camera model for perspective projection ray generation.

The camera sits at the origin of its own space looking down -z at a canvas
one unit away. Its ``transform`` is the world-to-camera view transform (see
``view_transform``); its inverse is cached so each primary ray costs two
matrix-tuple products.

Canvas geometry follows from the horizontal field of view and the aspect
ratio: the longer image side spans ``2 * tan(fov / 2)`` world units at the
canvas, and ``pixel_size`` is the world size of one (square) pixel.

Example:
    >>> import math
    >>> from whitted.camera.pinhole import Camera
    >>> from whitted.core.tuples import point, vector
    >>>
    >>> camera = Camera.look_at(
    ...     hsize=200,
    ...     vsize=100,
    ...     field_of_view=math.pi / 3,
    ...     from_point=point(0, 1.5, -5),
    ...     to_point=point(0, 1, 0),
    ...     up=vector(0, 1, 0),
    ... )
    >>> ray = camera.ray_for_pixel(100, 50)
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from whitted.core.matrix import IDENTITY, Matrix, view_transform
from whitted.core.ray import Ray
from whitted.core.tuples import Tuple, point

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass(frozen=True)
class Camera:
    """A pinhole (perspective) camera.

    Attributes:
        hsize: Horizontal size of the canvas in pixels.
        vsize: Vertical size of the canvas in pixels.
        field_of_view: Field of view across the longer side, in radians.
        transform: World-to-camera view transform.
        inverse: Cached inverse of ``transform``.
        half_width: Half the canvas width in world units.
        half_height: Half the canvas height in world units.
        pixel_size: World-space size of one pixel.

    Raises:
        ValueError: If a size is not positive or the field of view is not in
            (0, pi).
        DegenerateTransformError: If ``transform`` is not invertible.
    """

    hsize: int
    vsize: int
    field_of_view: float
    transform: Matrix = field(default_factory=lambda: IDENTITY)
    inverse: Matrix = field(init=False, repr=False, compare=False)
    half_width: float = field(init=False, repr=False, compare=False)
    half_height: float = field(init=False, repr=False, compare=False)
    pixel_size: float = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.hsize <= 0 or self.vsize <= 0:
            raise ValueError(f"Camera size must be positive, got {self.hsize}x{self.vsize}")
        if not 0.0 < self.field_of_view < math.pi:
            raise ValueError(f"Field of view must be in (0, pi) radians, got {self.field_of_view}")

        half_view = math.tan(self.field_of_view / 2.0)
        aspect = self.hsize / self.vsize
        if aspect >= 1.0:
            half_width = half_view
            half_height = half_view / aspect
        else:
            half_width = half_view * aspect
            half_height = half_view

        object.__setattr__(self, "inverse", self.transform.inverse())
        object.__setattr__(self, "half_width", half_width)
        object.__setattr__(self, "half_height", half_height)
        object.__setattr__(self, "pixel_size", half_width * 2.0 / self.hsize)

    @classmethod
    def look_at(
        cls,
        hsize: int,
        vsize: int,
        field_of_view: float,
        from_point: Tuple,
        to_point: Tuple,
        up: Tuple,
    ) -> Camera:
        """Create a camera at ``from_point`` looking toward ``to_point``."""
        return cls(hsize, vsize, field_of_view, view_transform(from_point, to_point, up))

    # =========================================================================
    # Ray Generation
    # =========================================================================

    def ray_for_pixel(self, px: float, py: float) -> Ray:
        """Generate the primary ray through the center of pixel (px, py).

        Pixel (0, 0) is the top-left corner of the image; x grows to the
        right and y grows downward.

        Args:
            px: Pixel column.
            py: Pixel row.

        Returns:
            A world-space ray with a normalized direction.
        """
        xoffset = (px + 0.5) * self.pixel_size
        yoffset = (py + 0.5) * self.pixel_size

        # The camera looks toward -z, so +x is to the left
        world_x = self.half_width - xoffset
        world_y = self.half_height - yoffset

        pixel = self.inverse @ point(world_x, world_y, -1.0)
        origin = self.inverse @ point(0.0, 0.0, 0.0)
        direction = (pixel - origin).normalize()  # type: ignore[operator]
        return Ray(origin, direction)  # type: ignore[arg-type]

    # =========================================================================
    # Utility Functions
    # =========================================================================

    def origin(self) -> Tuple:
        """Camera position in world space."""
        return self.inverse @ point(0.0, 0.0, 0.0)  # type: ignore[return-value]

    def get_camera_info(self) -> dict[str, Any]:
        """Get derived camera state for debugging.

        Returns:
            Dictionary with size, field of view, half extents, pixel size and
            world-space origin.
        """
        origin = self.origin()
        return {
            "hsize": self.hsize,
            "vsize": self.vsize,
            "field_of_view": self.field_of_view,
            "half_width": self.half_width,
            "half_height": self.half_height,
            "pixel_size": self.pixel_size,
            "origin": (origin.x, origin.y, origin.z),
        }
