"""Materials module for surface appearance.

Components:
    pattern: Solid, stripes, rings, checkers, gradients and blended patterns
    material: Phong material parameters and refractive index constants
    light: Point lights and the Phong lighting function
"""

from .light import PointLight, ambient_only, lighting, surface_color
from .material import AIR, DIAMOND, GLASS, VACUUM, WATER, Material
from .pattern import (
    Blended,
    Checkers,
    LinearGradient,
    Pattern,
    RadialGradient,
    Rings,
    Solid,
    Stripes,
    as_pattern,
    pattern_at_shape,
)

__all__ = [
    # Patterns
    "Pattern",
    "Solid",
    "Stripes",
    "Rings",
    "Checkers",
    "LinearGradient",
    "RadialGradient",
    "Blended",
    "as_pattern",
    "pattern_at_shape",
    # Materials
    "Material",
    "VACUUM",
    "AIR",
    "WATER",
    "GLASS",
    "DIAMOND",
    # Lights
    "PointLight",
    "lighting",
    "ambient_only",
    "surface_color",
]
