"""Camera module for primary ray generation.

Components:
    pinhole: Pinhole (perspective) camera

Pixel (0, 0) is the top-left of the image. Rays pass through pixel centers.
"""

from .pinhole import Camera

__all__ = ["Camera"]
