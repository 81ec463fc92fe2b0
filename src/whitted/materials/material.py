"""Phong surface material.

A material bundles a color pattern with the Phong reflectance coefficients
and the reflection/refraction parameters used by the recursive integrator.

Example:
    >>> from whitted.core.tuples import Color
    >>> from whitted.materials.material import Material
    >>> glass = Material(transparency=1.0, refractive_index=1.5)
    >>> red = Material(pattern=Color(1.0, 0.2, 0.2), specular=0.3)
"""

from __future__ import annotations

from dataclasses import dataclass, field

from whitted.materials.pattern import PatternLike, Solid, as_pattern

# Common refractive indices
VACUUM = 1.0
AIR = 1.00029
WATER = 1.333
GLASS = 1.5
DIAMOND = 2.417


@dataclass(frozen=True)
class Material:
    """Surface properties for Phong shading, reflection and refraction.

    Attributes:
        pattern: Surface color pattern. A plain ``Color`` is wrapped in ``Solid``.
        ambient: Ambient reflectance, non-negative.
        diffuse: Diffuse reflectance, non-negative.
        specular: Specular reflectance, non-negative.
        shininess: Specular exponent, positive.
        reflective: Fraction of light mirrored, in [0, 1].
        transparency: Fraction of light transmitted, in [0, 1].
        refractive_index: Index of refraction, must be > 0 (1.0 = vacuum).

    Raises:
        ValueError: If any coefficient is out of range.
    """

    pattern: PatternLike = field(default_factory=Solid)
    ambient: float = 0.1
    diffuse: float = 0.9
    specular: float = 0.9
    shininess: float = 200.0
    reflective: float = 0.0
    transparency: float = 0.0
    refractive_index: float = VACUUM

    def __post_init__(self) -> None:
        object.__setattr__(self, "pattern", as_pattern(self.pattern))

        for name in ("ambient", "diffuse", "specular"):
            value = getattr(self, name)
            if value < 0.0:
                raise ValueError(f"{name} must be non-negative, got {value}")
        if self.shininess <= 0.0:
            raise ValueError(f"shininess must be positive, got {self.shininess}")
        if not 0.0 <= self.reflective <= 1.0:
            raise ValueError(f"reflective must be in [0, 1], got {self.reflective}")
        if not 0.0 <= self.transparency <= 1.0:
            raise ValueError(f"transparency must be in [0, 1], got {self.transparency}")
        if self.refractive_index <= 0.0:
            raise ValueError(f"refractive_index must be > 0, got {self.refractive_index}")
